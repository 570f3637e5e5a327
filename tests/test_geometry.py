import math

import pytest

from snapdraw.geometry import (
    COMMON_ANGLES,
    angle_at_vertex,
    direction_vector,
    distance,
    normalize_angle,
    polyline_length,
    project_onto_line,
    px_to_cm,
    screen_to_world,
    snap_angle,
    snap_to_grid,
    world_to_screen,
)
from snapdraw.model import ViewportTransform


@pytest.mark.parametrize(
    'raw, expected',
    [
        (0.0, 0.0),
        (180.0, 180.0),
        (-180.0, 180.0),
        (190.0, -170.0),
        (-190.0, 170.0),
        (540.0, 180.0),
        (725.0, 5.0),
        (-725.0, -5.0),
        (359.5, -0.5),
    ],
)
def test_normalize_angle_maps_into_half_open_range(raw, expected):
    assert normalize_angle(raw) == pytest.approx(expected)


@pytest.mark.parametrize('raw', [-1e6, -721.3, -180.0, -0.25, 0.0, 44.0, 179.999, 180.0, 181.0, 9999.9])
def test_normalize_angle_is_idempotent_and_periodic(raw):
    norm = normalize_angle(raw)

    assert -180.0 < norm <= 180.0
    assert normalize_angle(norm) == norm
    for k in (-3, -1, 1, 2):
        assert normalize_angle(raw + 360.0 * k) == pytest.approx(norm, abs=1e-9)


def test_snap_angle_within_threshold():
    assert snap_angle(44.0, 2.0) == (45.0, True)


def test_snap_angle_outside_threshold_still_reports_nearest():
    assert snap_angle(44.0, 0.5) == (45.0, False)


def test_snap_angle_tie_prefers_first_reference():
    assert snap_angle(15.0, 20.0) == (0.0, True)
    assert snap_angle(37.5, 0.1) == (30.0, False)


def test_snap_angle_wraps_around_the_circle():
    # -179 is 1 degree away from 180, not 359.
    assert snap_angle(-179.0, 2.0) == (180.0, True)
    assert snap_angle(361.0, 2.0) == (0.0, True)


def test_snap_angle_negative_input_maps_to_nearest_reference():
    # -88 is 88 degrees from 0 and 92 from 180; reference set has no negatives.
    angle, snapped = snap_angle(-88.0, 5.0)
    assert angle in COMMON_ANGLES
    assert angle == 0.0
    assert not snapped


def test_project_onto_horizontal_line():
    assert project_onto_line((3.0, 7.0), (0.0, 2.0), 0.0) == pytest.approx((3.0, 2.0))


def test_project_onto_diagonal_line():
    x, y = project_onto_line((2.0, 0.0), (0.0, 0.0), 45.0)
    assert (x, y) == pytest.approx((1.0, 1.0))


@pytest.mark.parametrize('angle', [0.0, 17.0, 45.0, 90.0, 133.3, -60.0])
def test_project_onto_line_is_idempotent(angle):
    once = project_onto_line((12.5, -4.0), (3.0, 8.0), angle)
    twice = project_onto_line(once, (3.0, 8.0), angle)
    assert twice == pytest.approx(once, abs=1e-4)


def test_snap_to_grid_snaps_when_close():
    assert snap_to_grid((41.0, 79.0), 40.0, 8.0) == pytest.approx((40.0, 80.0))


def test_snap_to_grid_leaves_far_points_alone():
    assert snap_to_grid((50.0, 60.0), 40.0, 8.0) == (50.0, 60.0)


def test_snap_to_grid_threshold_is_inclusive():
    assert snap_to_grid((43.0, 4.0), 40.0, 5.0) == pytest.approx((40.0, 0.0))


@pytest.mark.parametrize('spacing', [0.0, -10.0])
def test_snap_to_grid_rejects_non_positive_spacing(spacing):
    with pytest.raises(ValueError):
        snap_to_grid((1.0, 1.0), spacing, 8.0)


def test_angle_at_vertex_right_angle():
    assert angle_at_vertex((1.0, 0.0), (0.0, 0.0), (0.0, 1.0)) == pytest.approx(90.0)


@pytest.mark.parametrize(
    'p1, vertex, p2, expected',
    [
        ((2.0, 0.0), (0.0, 0.0), (2.0, 0.0), 0.0),
        ((1.0, 0.0), (0.0, 0.0), (-3.0, 0.0), 180.0),
        ((6.0, 5.0), (5.0, 5.0), (6.0, 6.0), 45.0),
        ((1.0, 0.0), (0.0, 0.0), (math.cos(math.radians(120)), math.sin(math.radians(120))), 120.0),
    ],
)
def test_angle_at_vertex_values(p1, vertex, p2, expected):
    assert angle_at_vertex(p1, vertex, p2) == pytest.approx(expected, abs=1e-6)


def test_angle_at_vertex_degenerate_arm_is_zero():
    assert angle_at_vertex((0.0, 0.0), (0.0, 0.0), (1.0, 1.0)) == 0.0
    assert angle_at_vertex((1.0, 1.0), (5.0, 5.0), (5.0, 5.0 + 1e-7)) == 0.0


def test_angle_at_vertex_clamps_parallel_arms():
    # Nearly identical unit vectors can push the cosine a hair above 1.
    value = angle_at_vertex((0.1, 0.3), (0.0, 0.0), (0.1 * 3, 0.3 * 3))
    assert value == pytest.approx(0.0, abs=1e-5)


def test_screen_world_conversion():
    transform = ViewportTransform(offset=(100.0, 50.0), scale=2.0)

    assert screen_to_world((300.0, 250.0), transform) == pytest.approx((100.0, 100.0))
    assert world_to_screen((100.0, 100.0), transform) == pytest.approx((300.0, 250.0))


@pytest.mark.parametrize(
    'offset, scale',
    [((0.0, 0.0), 1.0), ((-37.5, 12.25), 0.3), ((1000.0, -250.0), 4.0), ((3.3, 7.7), 1.37)],
)
@pytest.mark.parametrize('point', [(0.0, 0.0), (123.456, -78.9), (-1e4, 5e3)])
def test_screen_world_round_trip(offset, scale, point):
    transform = ViewportTransform(offset=offset, scale=scale)

    assert screen_to_world(world_to_screen(point, transform), transform) == pytest.approx(point)
    assert world_to_screen(screen_to_world(point, transform), transform) == pytest.approx(point)


def test_direction_vector_and_distance():
    assert direction_vector(90.0) == pytest.approx((0.0, 1.0), abs=1e-12)
    assert distance((0.0, 0.0), (3.0, 4.0)) == pytest.approx(5.0)


def test_polyline_length():
    assert polyline_length([(0.0, 0.0), (3.0, 4.0), (3.0, 10.0)]) == pytest.approx(11.0)
    assert polyline_length([(1.0, 1.0)]) == 0.0


def test_px_to_cm():
    assert px_to_cm(160.0, 160.0) == pytest.approx(2.54)
    assert px_to_cm(160.0, 160.0, calibration=2.0) == pytest.approx(5.08)
    with pytest.raises(ValueError):
        px_to_cm(10.0, 0.0)
