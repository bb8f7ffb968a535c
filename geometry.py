# geometry.py
"""
Polyline sampling for the curved shapes of the scene.

pygame only fills straight-edged polygons, so curves (Bezier petals,
elliptical rims, the vase silhouette) are discretized here into (N, 2)
NumPy arrays first.
"""
import numpy as np


def quadratic_bezier(p0, p1, p2, n_segments: int = 12) -> np.ndarray:
    """
    Samples a quadratic Bezier curve.

    Returns:
        An array of shape (n_segments + 1, 2), both end points included.
    """
    t = np.linspace(0.0, 1.0, n_segments + 1)[:, np.newaxis]
    p0, p1, p2 = (np.asarray(p, dtype=np.float64) for p in (p0, p1, p2))
    return (1 - t) ** 2 * p0 + 2 * (1 - t) * t * p1 + t ** 2 * p2


def cubic_bezier(p0, p1, p2, p3, n_segments: int = 16) -> np.ndarray:
    """Samples a cubic Bezier curve, both end points included."""
    t = np.linspace(0.0, 1.0, n_segments + 1)[:, np.newaxis]
    p0, p1, p2, p3 = (np.asarray(p, dtype=np.float64) for p in (p0, p1, p2, p3))
    return (
        (1 - t) ** 3 * p0
        + 3 * (1 - t) ** 2 * t * p1
        + 3 * (1 - t) * t ** 2 * p2
        + t ** 3 * p3
    )


def ellipse_arc(
    cx: float, cy: float, a: float, b: float,
    start: float, end: float, n_segments: int = 24
) -> np.ndarray:
    """
    Samples an elliptical arc in screen coordinates (y grows downwards).

    Args:
        a: Horizontal semi-axis.
        b: Vertical semi-axis.
        start, end: Angles in radians; pi/2 is the lowest point.
    """
    theta = np.linspace(start, end, n_segments + 1)
    return np.c_[cx + a * np.cos(theta), cy + b * np.sin(theta)]


def rotate(points: np.ndarray, angle: float) -> np.ndarray:
    """Rotates (N, 2) points about the origin, clockwise on screen."""
    c, s = np.cos(angle), np.sin(angle)
    rotation = np.array([[c, s], [-s, c]])
    return np.asarray(points, dtype=np.float64) @ rotation


def vase_outline(
    vx: float, vy: float, width: float, height: float,
    opening_width: float, perspective: float
) -> np.ndarray:
    """
    Closed silhouette of the vase: left flank, front of the base, right
    flank and the back of the rim.

    Args:
        vx, vy: Centre of the vase base.
    """
    top = vy - height
    half = width / 2
    top_half = opening_width / 2
    shoulder_y = top + height * 0.2

    left = cubic_bezier(
        (vx - top_half, top), (vx - width * 0.55, shoulder_y),
        (vx - half, vy - perspective), (vx - half, vy)
    )
    base = ellipse_arc(vx, vy, half, perspective, np.pi, 0.0)
    right = cubic_bezier(
        (vx + half, vy), (vx + half, vy - perspective),
        (vx + width * 0.55, shoulder_y), (vx + top_half, top)
    )
    rim = ellipse_arc(vx, top, top_half, perspective, 0.0, -np.pi)
    return np.vstack((left, base[1:], right[1:], rim[1:-1]))
