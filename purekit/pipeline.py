from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional
import cv2, numpy as np
from .config import PipelineConfig
from .edges.normalize import normalized_gray
from .edges.edge_map import edge_map
from .edges.refine import Refiner, RefinerChain
from .edges.contours import extract_segments
from .eye.candidates import Candidate, CandidateEvaluator

logger = logging.getLogger(__name__)

@dataclass
class FrameResult:
    gray: np.ndarray
    edges: np.ndarray
    segments: List[np.ndarray] = field(default_factory=list)
    candidates: List[Candidate] = field(default_factory=list)

class PupilPipeline:
    """
    normalize -> edge map -> refine -> trace -> evaluate, one frame at a time.
    Holds no per-frame state between calls.
    """
    def __init__(self, config: Optional[PipelineConfig]=None, refiners: Iterable[Refiner]=()):
        self.cfg = config or PipelineConfig()
        self.params = self.cfg.frame_params()
        self.refine = RefinerChain(refiners)
        self.evaluate = CandidateEvaluator(self.params)

    def prepare(self, frame_bgr: np.ndarray) -> np.ndarray:
        h, w = frame_bgr.shape[:2]
        if (w, h) != (self.params.width, self.params.height):
            frame_bgr = cv2.resize(frame_bgr, (self.params.width, self.params.height))
        return normalized_gray(frame_bgr)

    def __call__(self, frame_bgr: np.ndarray) -> FrameResult:
        gray = self.prepare(frame_bgr)
        edges = edge_map(gray, self.cfg.canny_low, self.cfg.canny_high, self.cfg.binary_threshold)
        edges = self.refine(edges)
        if edges.shape != gray.shape:
            raise ValueError(f"edge map shape {edges.shape} differs from grayscale {gray.shape}")
        segments = extract_segments(edges, self.cfg.contour_approx)
        res = FrameResult(gray=gray, edges=edges, segments=segments)
        if not segments:
            # nothing traced, no evaluation to run
            logger.debug("no segments in frame")
            return res
        res.candidates = self.evaluate(segments, gray)
        return res
