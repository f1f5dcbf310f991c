from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Tuple
import cv2, numpy as np
from ..config import FrameParameters
from .segment_filters import ratio_in_range

@dataclass(frozen=True)
class FittedEllipse:
    """
    cv2.RotatedRect-style ellipse. `first_ax` lies along `angle`, `second_ax`
    along angle+90deg; neither is guaranteed to be the major axis.
    """
    cx: float; cy: float
    first_ax: float
    second_ax: float
    angle: float  # degrees

    @property
    def center(self) -> Tuple[float, float]: return (self.cx, self.cy)

    @property
    def width(self) -> float: return 2.0 * self.first_ax

    @property
    def height(self) -> float: return 2.0 * self.second_ax

    @property
    def major(self) -> float: return max(self.first_ax, self.second_ax)

    @property
    def minor(self) -> float: return min(self.first_ax, self.second_ax)

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.cx, self.cy, self.first_ax, self.second_ax, self.angle))

    def as_rotated_rect(self):
        return ((self.cx, self.cy), (self.width, self.height), self.angle)

    @staticmethod
    def from_rotated_rect(rect) -> "FittedEllipse":
        (cx, cy), (w, h), angle = rect
        return FittedEllipse(float(cx), float(cy), float(w) / 2.0, float(h) / 2.0, float(angle))

def fit_ellipse(segment: np.ndarray) -> Optional[FittedEllipse]:
    """Direct least-squares fit; None when the point set is too degenerate to fit."""
    try:
        rect = cv2.fitEllipse(segment)
    except cv2.error:
        return None
    ell = FittedEllipse.from_rotated_rect(rect)
    if not ell.is_finite() or ell.first_ax <= 0 or ell.second_ax <= 0:
        return None
    return ell

def center_in_frame(ell: FittedEllipse, params: FrameParameters) -> bool:
    return 0 <= ell.cx <= params.width and 0 <= ell.cy <= params.height

def ellipse_ratio_ok(ell: FittedEllipse, params: FrameParameters) -> bool:
    # discard if the ellipse is too skewed
    return ratio_in_range(ell.width, ell.height, params.r_th)

def to_local_frame(point, ell: FittedEllipse) -> Tuple[float, float]:
    """Shift `point` to the ellipse center and rotate by -angle (ellipse axes become x/y)."""
    dx = float(point[0]) - ell.cx
    dy = float(point[1]) - ell.cy
    a = -math.radians(ell.angle)
    c, s = math.cos(a), math.sin(a)
    return dx * c - dy * s, dx * s + dy * c

def rhombus_contains(point, ell: FittedEllipse) -> bool:
    """
    True if `point` lies in the rhombus whose vertices are the side midpoints of
    the ellipse's rotated rect. After unrotating, quadrant symmetry lets us test
    only the first-quadrant triangle.
    """
    x, y = to_local_frame(point, ell)
    x, y = abs(x), abs(y)
    if x > ell.first_ax or y > ell.second_ax:
        return False
    return x / ell.first_ax + y / ell.second_ax <= 1.0

def segment_centroid(segment: np.ndarray) -> Tuple[float, float]:
    m = segment.astype(np.float64).mean(axis=0)
    return float(m[0]), float(m[1])
