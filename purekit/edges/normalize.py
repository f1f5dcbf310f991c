from __future__ import annotations
import cv2, numpy as np

def to_gray(frame_bgr: np.ndarray) -> np.ndarray:
    if frame_bgr.ndim == 2:
        return frame_bgr
    return cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2GRAY)

def normalize_gray(gray: np.ndarray) -> np.ndarray:
    # stretch to the full 0..255 range
    return cv2.normalize(gray, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)

def normalized_gray(frame_bgr: np.ndarray) -> np.ndarray:
    return normalize_gray(to_gray(frame_bgr))
