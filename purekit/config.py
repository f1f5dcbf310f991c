from __future__ import annotations
import math
import yaml
from pathlib import Path
from typing import Optional, Literal
from pydantic import BaseModel, ConfigDict, Field, model_validator

# Fractions of the frame diagonal, see PuRe 3.3.2
MIN_DIAMETER_FRAC = 0.0467
MAX_DIAMETER_FRAC = 0.1933
# Cutoff for axes ratio, see PuRe 3.3.3
DEFAULT_R_TH = 0.2

class FrameParameters(BaseModel):
    """
    Per-run geometry thresholds. Built once for a working resolution and
    passed explicitly to the evaluator.
    """
    model_config = ConfigDict(frozen=True)

    width: int = Field(gt=0)
    height: int = Field(gt=0)
    min_pupil_diameter: float = Field(gt=0)
    max_pupil_diameter: float = Field(gt=0)
    r_th: float = Field(default=DEFAULT_R_TH, gt=0, le=1)

    @model_validator(mode="after")
    def _check_diameters(self):
        if self.min_pupil_diameter > self.max_pupil_diameter:
            raise ValueError("min_pupil_diameter must not exceed max_pupil_diameter")
        return self

    @property
    def r_th_inv(self) -> float:
        return 1.0 / self.r_th

    @classmethod
    def for_frame(cls, width:int, height:int, r_th:float=DEFAULT_R_TH,
                  min_diameter: Optional[float]=None, max_diameter: Optional[float]=None) -> "FrameParameters":
        diag = math.hypot(width, height)
        return cls(width=width, height=height,
                   min_pupil_diameter=min_diameter if min_diameter is not None else MIN_DIAMETER_FRAC * diag,
                   max_pupil_diameter=max_diameter if max_diameter is not None else MAX_DIAMETER_FRAC * diag,
                   r_th=r_th)

class PipelineConfig(BaseModel):
    """Run settings for the whole frame pipeline (YAML-loadable)."""
    width: int = Field(default=320, gt=0)
    height: int = Field(default=240, gt=0)
    r_th: float = Field(default=DEFAULT_R_TH, gt=0, le=1)
    min_pupil_diameter: Optional[float] = None
    max_pupil_diameter: Optional[float] = None
    canny_low: float = 160.0
    canny_high: float = 320.0
    binary_threshold: int = Field(default=127, ge=0, le=255)
    contour_approx: Literal["none", "simple", "tc89_l1", "tc89_kcos"] = "tc89_kcos"

    def frame_params(self) -> FrameParameters:
        return FrameParameters.for_frame(self.width, self.height, r_th=self.r_th,
                                         min_diameter=self.min_pupil_diameter,
                                         max_diameter=self.max_pupil_diameter)

def load_config(path: str|Path|None=None) -> PipelineConfig:
    if path is None or not Path(path).exists():
        return PipelineConfig()
    with open(path, "r") as f: cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"config {path} must be a mapping, got {type(cfg).__name__}")
    return PipelineConfig(**cfg)
