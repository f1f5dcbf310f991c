from __future__ import annotations
from typing import Sequence
import cv2, numpy as np
from ..eye.candidates import Candidate

SEGMENT_COLOR = (0, 0, 255)
ELLIPSE_COLOR = (0, 255, 0)

def draw_candidates(gray: np.ndarray, candidates: Sequence[Candidate], draw_ellipse: bool=False) -> np.ndarray:
    """Overlay accepted segments (open polylines) on a color copy of the gray frame."""
    color = cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)
    for c in candidates:
        cv2.polylines(color, [c.segment.reshape(-1, 1, 2)], False, SEGMENT_COLOR)
        if draw_ellipse:
            cv2.ellipse(color, c.ellipse.as_rotated_rect(), ELLIPSE_COLOR, 1)
    return color

def show(frame: np.ndarray, title: str="purekit") -> bool:
    """Display a frame; returns False once any key is pressed."""
    cv2.imshow(title, frame)
    return cv2.waitKey(1) < 0

def close():
    cv2.destroyAllWindows()
