import numpy as np
import pytest

from geometry import cubic_bezier, ellipse_arc, quadratic_bezier, rotate, vase_outline


def test_bezier_curves_hit_their_end_points():
    quad = quadratic_bezier((0, 0), (5, 10), (10, 0), n_segments=8)
    cubic = cubic_bezier((0, 0), (0, 10), (10, 10), (10, 0), n_segments=8)
    assert quad.shape == (9, 2)
    assert np.allclose(quad[[0, -1]], [[0, 0], [10, 0]])
    assert np.allclose(cubic[[0, -1]], [[0, 0], [10, 0]])
    assert quad[4] == pytest.approx([5.0, 5.0])


def test_ellipse_arc_lowest_point_is_at_half_pi():
    arc = ellipse_arc(0, 0, 10, 4, 0.0, np.pi, n_segments=2)
    assert np.allclose(arc, [[10, 0], [0, 4], [-10, 0]])


def test_rotate_matches_screen_clockwise():
    pts = rotate(np.array([[1.0, 0.0]]), np.pi / 2)
    assert np.allclose(pts, [[0.0, 1.0]])


def test_vase_outline_spans_vase_extent():
    outline = vase_outline(400, 520, 100, 200, 80, 10)
    xs, ys = outline[:, 0], outline[:, 1]
    assert ys.min() == pytest.approx(320 - 10)
    assert ys.max() == pytest.approx(520 + 10)
    assert xs.min() < 350 + 1e-9
    assert xs.max() > 450 - 1e-9
    # Symmetric about the vertical axis.
    assert xs.min() + xs.max() == pytest.approx(800)
