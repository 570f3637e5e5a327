"""Pure geometry helpers: angle snapping, projections and viewport mapping.

Every function here is a deterministic function of its inputs. Points are
plain ``(x, y)`` tuples; numpy is only used internally for the vector maths.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence, Tuple

import numpy as np

from .logging_utils import apply_debug_logging
from .model import Point, ViewportTransform

logger = logging.getLogger(__name__)

COMMON_ANGLES: Tuple[float, ...] = (0.0, 30.0, 45.0, 60.0, 90.0, 120.0, 135.0, 150.0, 180.0)

_ZERO_LENGTH_EPS = 1e-6


def _as_array(value: Sequence[float]) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (2,):
        raise ValueError("coordinate must be length-2")
    return arr


def _as_point(arr: np.ndarray) -> Point:
    return float(arr[0]), float(arr[1])


def normalize_angle(deg: float) -> float:
    """Map ``deg`` into the half-open interval (-180, 180]."""

    deg = float(deg)
    if -180.0 < deg <= 180.0:
        return deg
    wrapped = deg % 360.0
    if wrapped > 180.0:
        wrapped -= 360.0
    return wrapped


def _circular_distance(a: float, b: float) -> float:
    return abs(((a - b + 540.0) % 360.0) - 180.0)


def snap_angle(raw_deg: float, threshold_deg: float) -> Tuple[float, bool]:
    """Return the nearest entry of :data:`COMMON_ANGLES` and whether it is in reach.

    Distances wrap around the circle, so 179 and -179 are 2 degrees apart.
    When two references are equally close the smaller one wins. The returned
    angle is always the nearest reference; the flag tells whether it lies
    within ``threshold_deg`` of the normalised input.
    """

    norm = normalize_angle(raw_deg)
    best = COMMON_ANGLES[0]
    best_delta = math.inf
    for ref in COMMON_ANGLES:
        delta = _circular_distance(norm, ref)
        if delta < best_delta:
            best, best_delta = ref, delta
    return best, best_delta <= threshold_deg


def direction_vector(angle_deg: float) -> Point:
    theta = math.radians(angle_deg)
    return math.cos(theta), math.sin(theta)


def project_onto_line(point: Point, line_center: Point, line_angle_deg: float) -> Point:
    """Orthogonally project ``point`` onto the infinite line through ``line_center``."""

    direction = np.asarray(direction_vector(line_angle_deg), dtype=float)
    center = _as_array(line_center)
    t = float(np.dot(_as_array(point) - center, direction))
    return _as_point(center + direction * t)


def distance(a: Point, b: Point) -> float:
    return math.hypot(float(a[0]) - float(b[0]), float(a[1]) - float(b[1]))


def snap_to_grid(world_point: Point, grid_spacing: float, threshold: float = 8.0) -> Point:
    """Round ``world_point`` to the grid when the rounded point is within ``threshold``."""

    if grid_spacing <= 0.0:
        raise ValueError(f"grid spacing must be positive, got {grid_spacing}")
    arr = _as_array(world_point)
    # Half-way values round up, matching what a pointer user expects on both axes.
    snapped = np.floor(arr / grid_spacing + 0.5) * grid_spacing
    if float(np.linalg.norm(snapped - arr)) <= threshold:
        return _as_point(snapped)
    return _as_point(arr)


def angle_at_vertex(ray_end1: Point, vertex: Point, ray_end2: Point) -> float:
    """Unsigned angle in degrees (0..180) between the two arms at ``vertex``.

    An arm shorter than 1e-6 makes the angle undefined; 0.0 is returned.
    """

    v = _as_array(vertex)
    arm1 = _as_array(ray_end1) - v
    arm2 = _as_array(ray_end2) - v
    mag1 = float(np.linalg.norm(arm1))
    mag2 = float(np.linalg.norm(arm2))
    if mag1 <= _ZERO_LENGTH_EPS or mag2 <= _ZERO_LENGTH_EPS:
        return 0.0
    cos_theta = float(np.clip(np.dot(arm1, arm2) / (mag1 * mag2), -1.0, 1.0))
    return math.degrees(math.acos(cos_theta))


def screen_to_world(screen_point: Point, transform: ViewportTransform) -> Point:
    sx, sy = float(screen_point[0]), float(screen_point[1])
    ox, oy = transform.offset
    return (sx - ox) / transform.scale, (sy - oy) / transform.scale


def world_to_screen(world_point: Point, transform: ViewportTransform) -> Point:
    wx, wy = float(world_point[0]), float(world_point[1])
    ox, oy = transform.offset
    return wx * transform.scale + ox, wy * transform.scale + oy


def polyline_length(points: Iterable[Point]) -> float:
    pts = np.asarray(list(points), dtype=float)
    if pts.shape[0] < 2:
        return 0.0
    delta = np.diff(pts, axis=0)
    return float(np.sum(np.hypot(delta[:, 0], delta[:, 1])))


def px_to_cm(px: float, xdpi: float, calibration: float = 1.0) -> float:
    """Physical length in centimetres of ``px`` pixels on a ``xdpi`` display."""

    if xdpi <= 0.0:
        raise ValueError(f"xdpi must be positive, got {xdpi}")
    return px / xdpi * 2.54 * calibration


__all__ = [
    "COMMON_ANGLES",
    "angle_at_vertex",
    "direction_vector",
    "distance",
    "normalize_angle",
    "polyline_length",
    "project_onto_line",
    "px_to_cm",
    "screen_to_world",
    "snap_angle",
    "snap_to_grid",
    "world_to_screen",
]


apply_debug_logging(globals(), logger=logger)
