import numpy as np
from purekit.config import FrameParameters
from purekit.eye.segment_filters import (as_segment, has_enough_points, approx_diameter,
                                         diameter_in_range, ratio_in_range, min_rect_size)

PARAMS = FrameParameters.for_frame(320, 240)

def exhaustive_diameter(seg):
    p = seg.astype(float)
    return float(np.sqrt(((p[:,None,:] - p[None,:,:])**2).sum(-1)).max())

def test_admission_needs_five_points():
    assert not has_enough_points(as_segment([(0,0),(1,0),(2,0),(3,0)]))
    assert has_enough_points(as_segment([(0,0),(1,0),(2,0),(3,0),(4,0)]))

def test_as_segment_flattens_contour_shape():
    seg = as_segment(np.zeros((7,1,2), dtype=np.int32))
    assert seg.shape == (7,2) and seg.dtype == np.int32

def test_diameter_matches_exhaustive_without_limit():
    seg = as_segment([(0,0),(3,4),(10,0),(5,5),(1,9)])
    assert np.isclose(approx_diameter(seg), exhaustive_diameter(seg))

def test_early_exit_stops_above_limit():
    seg = as_segment([(0,0),(100,0)] + [(i,1) for i in range(50)])
    d = approx_diameter(seg, limit=50.0)
    assert d > 50.0 and d <= exhaustive_diameter(seg)

def test_early_exit_same_decision_as_exhaustive():
    rng = np.random.default_rng(0)
    for _ in range(200):
        n = int(rng.integers(5, 40))
        scale = float(rng.uniform(5, 150))
        seg = as_segment(rng.uniform(0, scale, size=(n,2)).round())
        ok, _ = diameter_in_range(seg, PARAMS)
        full = exhaustive_diameter(seg)
        assert ok == (PARAMS.min_pupil_diameter <= full <= PARAMS.max_pupil_diameter)

def test_ratio_is_symmetric():
    for r in (0.1, 0.19, 0.3, 1.0, 2.5, 4.9, 6.0):
        assert ratio_in_range(r, 1.0, 0.2) == ratio_in_range(1.0, r, 0.2)
    assert ratio_in_range(1.0, 4.0, 0.2)
    assert not ratio_in_range(1.0, 6.0, 0.2)

def test_ratio_rejects_degenerate_sides():
    assert not ratio_in_range(10.0, 0.0, 0.2)
    assert not ratio_in_range(0.0, 0.0, 0.2)
    assert not ratio_in_range(float("nan"), 1.0, 0.2)

def test_min_rect_of_collinear_points_is_flat():
    w, h = min_rect_size(as_segment([(100+10*i, 100+10*i) for i in range(5)]))
    assert min(w, h) < 1e-6
