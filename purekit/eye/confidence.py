from __future__ import annotations
import math
from typing import Optional
import numpy as np
from .ellipse import FittedEllipse

N_DIRECTIONS = 36  # 10 degree stride around the center

def aspect_ratio_confidence(ell: FittedEllipse) -> float:
    return ell.minor / ell.major

def angular_spread_confidence(segment: np.ndarray, ell: FittedEllipse) -> float:
    """0.25 per quadrant around the ellipse center that holds at least one segment point."""
    seen = set()
    for x, y in segment:
        seen.add((x > ell.cx, y > ell.cy))
        if len(seen) == 4:  # all quadrants covered
            break
    return 0.25 * len(seen)

def line_pixels_4(x0:int, y0:int, x1:int, y1:int) -> np.ndarray:
    """
    4-connected rasterization from (x0,y0) to (x1,y1), endpoints included.
    Each step moves along exactly one axis; dx+dy+1 pixels in total.
    """
    dx, dy = abs(x1 - x0), abs(y1 - y0)
    sx = 1 if x1 >= x0 else -1
    sy = 1 if y1 >= y0 else -1
    out = np.empty((dx + dy + 1, 2), dtype=np.int64)
    x, y, err = x0, y0, 0  # err ~ signed distance from the ideal line, scaled
    out[0] = (x, y)
    for i in range(1, dx + dy + 1):
        if abs(err - dy) <= abs(err + dx):
            x += sx; err -= dy
        else:
            y += sy; err += dx
        out[i] = (x, y)
    return out

def mean_along_line(gray: np.ndarray, p0, p1) -> Optional[float]:
    """Mean intensity over the 4-connected line p0->p1, ignoring pixels outside the image."""
    h, w = gray.shape[:2]
    pts = line_pixels_4(int(round(p0[0])), int(round(p0[1])), int(round(p1[0])), int(round(p1[1])))
    inside = (pts[:,0] >= 0) & (pts[:,0] < w) & (pts[:,1] >= 0) & (pts[:,1] < h)
    pts = pts[inside]
    if len(pts) == 0:
        return None
    return float(gray[pts[:,1], pts[:,0]].astype(np.float64).mean())

def outline_contrast_confidence(gray: np.ndarray, ell: FittedEllipse) -> float:
    """
    Fraction of the 36 rays from the center along which the inner stretch
    (center -> one minor axis out) is darker than the next stretch of equal length.
    """
    votes = 0
    step = ell.minor
    for i in range(N_DIRECTIONS):  # fixed count so 0 and 2pi are not both visited
        a = math.radians(10.0 * i)
        ox, oy = step * math.cos(a), step * math.sin(a)
        outline = (ell.cx + ox, ell.cy + oy)
        inner = mean_along_line(gray, ell.center, outline)
        outer = mean_along_line(gray, outline, (outline[0] + ox, outline[1] + oy))
        if inner is not None and outer is not None and inner < outer:
            votes += 1
    return votes / N_DIRECTIONS
