from __future__ import annotations
from typing import Callable, Iterable, List
import numpy as np

# binary image in, binary image out, same dimensions
Refiner = Callable[[np.ndarray], np.ndarray]

class RefinerChain:
    """
    Ordered edge-topology refinement (thinning, crossing removal, straightening,
    orthogonal-corner breaking, ...). Stages are opaque; the chain only enforces
    that each keeps the image size. An empty chain passes the image through.
    """
    def __init__(self, stages: Iterable[Refiner]=()):
        self.stages: List[Refiner] = list(stages)

    def add(self, stage: Refiner) -> "RefinerChain":
        self.stages.append(stage)
        return self

    def __call__(self, binary: np.ndarray) -> np.ndarray:
        out = binary
        for stage in self.stages:
            # stages may work in place, hand each one its own copy
            res = stage(out.copy())
            if res.shape != binary.shape:
                name = getattr(stage, "__name__", type(stage).__name__)
                raise ValueError(f"refiner {name} changed image shape {binary.shape} -> {res.shape}")
            out = res
        return out
