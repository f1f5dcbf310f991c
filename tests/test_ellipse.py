import math
import numpy as np
from purekit.config import FrameParameters
from purekit.eye.ellipse import (FittedEllipse, fit_ellipse, center_in_frame, ellipse_ratio_ok,
                                 rhombus_contains, segment_centroid, to_local_frame)

PARAMS = FrameParameters.for_frame(320, 240)

def _rot(dx, dy, deg):
    a = math.radians(deg)
    return dx*math.cos(a) - dy*math.sin(a), dx*math.sin(a) + dy*math.cos(a)

def test_rhombus_axis_aligned():
    e = FittedEllipse(100.0, 80.0, 20.0, 10.0, 0.0)
    assert rhombus_contains((110.0, 80.0), e)
    assert rhombus_contains((100.0, 85.0), e)
    assert not rhombus_contains((120.0, 90.0), e)

def test_rhombus_rotation_invariant():
    e0 = FittedEllipse(100.0, 80.0, 20.0, 10.0, 0.0)
    e30 = FittedEllipse(100.0, 80.0, 20.0, 10.0, 30.0)
    for dx, dy in [(10,0), (0,5), (20,10), (-10,-4), (15,3)]:
        rx, ry = _rot(dx, dy, 30)
        assert rhombus_contains((100+dx, 80+dy), e0) == rhombus_contains((100+rx, 80+ry), e30)

def test_local_frame_undoes_rotation():
    e = FittedEllipse(10.0, 10.0, 5.0, 3.0, 45.0)
    rx, ry = _rot(4.0, 1.0, 45)
    x, y = to_local_frame((10+rx, 10+ry), e)
    assert np.isclose(x, 4.0) and np.isclose(y, 1.0)

def test_fit_circle():
    pts = np.array([(50+20*math.cos(t), 60+20*math.sin(t)) for t in np.linspace(0, 2*math.pi, 36, endpoint=False)])
    e = fit_ellipse(pts.round().astype(np.int32))
    assert e is not None
    assert abs(e.cx-50) < 0.5 and abs(e.cy-60) < 0.5
    assert abs(e.major-20) < 0.7 and abs(e.minor-20) < 0.7

def test_axis_order_not_assumed():
    e = FittedEllipse(0, 0, 3.0, 7.0, 10.0)
    assert e.major == 7.0 and e.minor == 3.0
    assert e.width == 6.0 and e.height == 14.0

def test_center_in_frame_bounds_inclusive():
    assert center_in_frame(FittedEllipse(0.0, 240.0, 5, 5, 0), PARAMS)
    assert center_in_frame(FittedEllipse(320.0, 0.0, 5, 5, 0), PARAMS)
    assert not center_in_frame(FittedEllipse(-0.5, 10.0, 5, 5, 0), PARAMS)
    assert not center_in_frame(FittedEllipse(10.0, 240.5, 5, 5, 0), PARAMS)

def test_ellipse_skew():
    assert ellipse_ratio_ok(FittedEllipse(50, 50, 10, 4, 0), PARAMS)
    assert not ellipse_ratio_ok(FittedEllipse(50, 50, 10, 1, 0), PARAMS)
    assert not ellipse_ratio_ok(FittedEllipse(50, 50, 1, 10, 0), PARAMS)

def test_centroid_is_mean():
    assert segment_centroid(np.array([(0,0),(2,0),(2,2),(0,2)], dtype=np.int32)) == (1.0, 1.0)
