import math

from neon_pong.geometry import centered_rect, clamp, deg_to_rad, rad_to_deg, rects_overlap


def test_clamp():
    assert clamp(5, 0, 10) == 5
    assert clamp(-3, 0, 10) == 0
    assert clamp(42, 0, 10) == 10


def test_angle_conversion():
    assert math.isclose(deg_to_rad(180), math.pi)
    assert math.isclose(rad_to_deg(math.pi / 3), 60.0)


def test_rects_overlap():
    assert rects_overlap((0, 0, 10, 10), (5, 5, 10, 10))
    assert not rects_overlap((0, 0, 10, 10), (20, 0, 10, 10))


def test_touching_edges_do_not_overlap():
    assert not rects_overlap((0, 0, 10, 10), (10, 0, 10, 10))
    assert not rects_overlap((0, 0, 10, 10), (0, 10, 10, 10))


def test_centered_rect():
    assert centered_rect(10, 20, 4) == (8, 18, 4, 4)
