from __future__ import annotations
from typing import List
import cv2, numpy as np

APPROX = {
    "none": cv2.CHAIN_APPROX_NONE,
    "simple": cv2.CHAIN_APPROX_SIMPLE,
    "tc89_l1": cv2.CHAIN_APPROX_TC89_L1,
    "tc89_kcos": cv2.CHAIN_APPROX_TC89_KCOS,
}

def extract_segments(binary: np.ndarray, approx: str="tc89_kcos") -> List[np.ndarray]:
    """Trace every edge chain (no hierarchy) into an (N,2) int32 point sequence."""
    cnts, _ = cv2.findContours(binary, cv2.RETR_LIST, APPROX[approx])
    return [c.reshape(-1, 2).astype(np.int32) for c in cnts]
