from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence
import numpy as np
from ..config import FrameParameters
from .segment_filters import as_segment, has_enough_points, diameter_in_range, min_rect_size, ratio_in_range
from .ellipse import (FittedEllipse, fit_ellipse, center_in_frame, ellipse_ratio_ok,
                      rhombus_contains, segment_centroid)
from .confidence import aspect_ratio_confidence, angular_spread_confidence, outline_contrast_confidence

logger = logging.getLogger(__name__)

class Rejection(str, Enum):
    TOO_FEW_POINTS = "too_few_points"
    DIAMETER_TOO_LARGE = "diameter_too_large"
    DIAMETER_TOO_SMALL = "diameter_too_small"
    DEGENERATE_RECT = "degenerate_rect"
    RECT_ASPECT = "rect_aspect"
    FIT_FAILED = "fit_failed"
    CENTER_OUTSIDE = "center_outside"
    ELLIPSE_ASPECT = "ellipse_aspect"
    CENTROID_OUTSIDE = "centroid_outside"

@dataclass(frozen=True)
class Screening:
    ellipse: Optional[FittedEllipse] = None
    rejection: Optional[Rejection] = None

    @property
    def accepted(self) -> bool: return self.ellipse is not None

@dataclass(frozen=True)
class Candidate:
    segment: np.ndarray
    ellipse: FittedEllipse
    aspect_ratio: float
    angular_spread: float
    outline_contrast: float

def screen_segment(segment: np.ndarray, params: FrameParameters) -> Screening:
    """
    Geometric cascade (PuRe 3.3.1 - 3.3.5). The first failing stage wins and
    nothing after it runs.
    """
    if not has_enough_points(segment):
        return Screening(rejection=Rejection.TOO_FEW_POINTS)

    ok, d = diameter_in_range(segment, params)
    if not ok:
        return Screening(rejection=Rejection.DIAMETER_TOO_LARGE if d > params.max_pupil_diameter
                         else Rejection.DIAMETER_TOO_SMALL)

    w, h = min_rect_size(segment)
    if w <= 0 or h <= 0:
        return Screening(rejection=Rejection.DEGENERATE_RECT)
    if not ratio_in_range(w, h, params.r_th):
        return Screening(rejection=Rejection.RECT_ASPECT)

    ell = fit_ellipse(segment)
    if ell is None:
        return Screening(rejection=Rejection.FIT_FAILED)
    if not center_in_frame(ell, params):
        return Screening(rejection=Rejection.CENTER_OUTSIDE)
    if not ellipse_ratio_ok(ell, params):
        return Screening(rejection=Rejection.ELLIPSE_ASPECT)

    if not rhombus_contains(segment_centroid(segment), ell):
        return Screening(rejection=Rejection.CENTROID_OUTSIDE)
    return Screening(ellipse=ell)

def check_gray(gray: np.ndarray, params: FrameParameters):
    if gray is None or gray.ndim != 2:
        raise ValueError("grayscale image must be a 2-D single-channel array")
    if gray.shape != (params.height, params.width):
        raise ValueError(f"grayscale shape {gray.shape} does not match working size "
                         f"{(params.height, params.width)}")

def evaluate_segment(segment, gray: np.ndarray, params: FrameParameters) -> Optional[Candidate]:
    seg = as_segment(segment)
    res = screen_segment(seg, params)
    if not res.accepted:
        logger.debug("segment (%d pts) rejected: %s", len(seg), res.rejection.value)
        return None
    ell = res.ellipse
    return Candidate(segment=seg, ellipse=ell,
                     aspect_ratio=aspect_ratio_confidence(ell),
                     angular_spread=angular_spread_confidence(seg, ell),
                     outline_contrast=outline_contrast_confidence(gray, ell))

class CandidateEvaluator:
    """
    Stateless per-frame evaluator: segments + grayscale -> candidates in
    discovery order. Confidences are reported, never used for rejection.
    """
    def __init__(self, params: FrameParameters):
        self.params = params

    def __call__(self, segments: Sequence, gray: np.ndarray) -> List[Candidate]:
        if len(segments) == 0:
            raise ValueError("empty segment list")
        check_gray(gray, self.params)
        out = []
        for seg in segments:
            c = evaluate_segment(seg, gray, self.params)
            if c is not None: out.append(c)
        logger.debug("evaluated %d segments -> %d candidates", len(segments), len(out))
        return out
