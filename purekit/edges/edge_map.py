from __future__ import annotations
import cv2, numpy as np

def edge_map(gray: np.ndarray, low: float=160.0, high: float=320.0, thresh: int=127) -> np.ndarray:
    """Canny edges forced to a strict {0,255} binary image."""
    edges = cv2.Canny(gray, low, high)
    _, binary = cv2.threshold(edges, thresh, 255, cv2.THRESH_BINARY)
    return binary
