from __future__ import annotations
import cv2, numpy as np
from ..config import FrameParameters

MIN_SEGMENT_POINTS = 5

def as_segment(points) -> np.ndarray:
    """Flatten a contour ((N,1,2) from findContours, or any (N,2) sequence) to (N,2) int32."""
    seg = np.asarray(points, dtype=np.int32)
    return seg.reshape(-1, 2)

def has_enough_points(segment: np.ndarray) -> bool:
    # fitEllipse needs at least 5 points
    return len(segment) >= MIN_SEGMENT_POINTS

def approx_diameter(segment: np.ndarray, limit: float=np.inf) -> float:
    """
    Largest pairwise distance between segment points. The running maximum only
    grows, so the scan stops as soon as it exceeds `limit`; the returned value
    is then a lower bound of the true diameter that is still > limit.
    """
    pts = segment.astype(np.float64)
    best = 0.0
    for i in range(len(pts) - 1):
        d = np.hypot(*(pts[i+1:] - pts[i]).T)
        best = max(best, float(d.max()))
        if best > limit:
            break
    return best

def diameter_in_range(segment: np.ndarray, params: FrameParameters) -> tuple[bool, float]:
    d = approx_diameter(segment, limit=params.max_pupil_diameter)
    return params.min_pupil_diameter <= d <= params.max_pupil_diameter, d

def ratio_in_range(width: float, height: float, r_th: float) -> bool:
    """width/height within [r_th, 1/r_th]; symmetric under swapping width and height."""
    if not (np.isfinite(width) and np.isfinite(height)) or width <= 0 or height <= 0:
        return False
    ratio = width / height
    return r_th <= ratio <= 1.0 / r_th

def min_rect_size(segment: np.ndarray) -> tuple[float, float]:
    """Side lengths of the minimum-area (rotated) bounding rectangle."""
    _, (w, h), _ = cv2.minAreaRect(segment)
    return float(w), float(h)
