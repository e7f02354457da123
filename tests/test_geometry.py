"""Tests for the shared angle helpers."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st
import pytest

from rotary_input.errors import GeometryUnavailable
from rotary_input.utils import geometry

finite_angles = st.floats(
    min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False
)

CENTER = (100.0, 100.0)


@pytest.mark.parametrize(
    ("point", "expected"),
    (
        ((100.0, 50.0), 0.0),  # up
        ((150.0, 100.0), 90.0),  # right
        ((100.0, 150.0), 180.0),  # down (screen y grows downward)
        ((50.0, 100.0), 270.0),  # left
        ((150.0, 50.0), 45.0),
        ((50.0, 50.0), 315.0),
    ),
)
def test_pointer_angle_is_clockwise_from_up(point, expected) -> None:
    assert geometry.pointer_angle_clockwise(CENTER, point) == pytest.approx(expected)


def test_pointer_on_center_reads_zero() -> None:
    assert geometry.pointer_angle_clockwise(CENTER, CENTER) == 0.0


@given(
    angle=st.floats(min_value=0.0, max_value=359.0),
    radius=st.floats(min_value=1.0, max_value=500.0),
)
def test_point_on_circle_inverts_pointer_angle(angle: float, radius: float) -> None:
    point = geometry.point_on_circle(CENTER, radius, angle)
    back = geometry.pointer_angle_clockwise(CENTER, point)
    assert geometry.angular_distance(back, angle) < 1e-6


@pytest.mark.parametrize(
    ("value", "expected"),
    ((0.0, 0.0), (360.0, 0.0), (-90.0, 270.0), (725.0, 5.0), (-1e-17, 0.0)),
)
def test_normalize_degrees(value: float, expected: float) -> None:
    assert geometry.normalize_degrees(value) == pytest.approx(expected)


@given(x=finite_angles, k=st.integers(min_value=-1000, max_value=1000))
def test_normalize_is_periodic(x: float, k: int) -> None:
    a = geometry.normalize_degrees(x)
    b = geometry.normalize_degrees(x + 360 * k)
    assert 0.0 <= a < 360.0
    assert 0.0 <= b < 360.0
    assert geometry.angular_distance(a, b) == pytest.approx(0.0, abs=1e-6)


@given(a=finite_angles, b=finite_angles)
def test_angular_distance_is_symmetric_and_bounded(a: float, b: float) -> None:
    d = geometry.angular_distance(a, b)
    assert 0.0 <= d <= 180.0
    assert d == pytest.approx(geometry.angular_distance(b, a), abs=1e-6)


def test_angular_distance_crosses_zero() -> None:
    assert geometry.angular_distance(350.0, 10.0) == pytest.approx(20.0)
    assert geometry.angular_distance(0.0, 180.0) == pytest.approx(180.0)


def test_is_within_arc_handles_wrap() -> None:
    # -135 .. 135 passes through 0 (straight up)
    assert geometry.is_within_arc(0.0, -135.0, 270.0)
    assert geometry.is_within_arc(225.0, -135.0, 270.0)  # start endpoint
    assert geometry.is_within_arc(135.0, -135.0, 270.0)  # end endpoint
    assert not geometry.is_within_arc(180.0, -135.0, 270.0)  # dead zone
    assert geometry.is_within_arc(123.0, 10.0, 360.0)


def test_clamp_to_arc_goes_to_nearest_endpoint() -> None:
    assert geometry.clamp_to_arc(170.0, -135.0, 270.0) == 270.0
    assert geometry.clamp_to_arc(190.0, -135.0, 270.0) == 0.0
    # exactly between the endpoints: start wins
    assert geometry.clamp_to_arc(180.0, -135.0, 270.0) == 0.0
    assert geometry.clamp_to_arc(0.0, -135.0, 270.0) == pytest.approx(135.0)


def test_nearest_angle_index_prefers_first_on_tie() -> None:
    assert geometry.nearest_angle_index(45.0, [0.0, 90.0]) == 0
    assert geometry.nearest_angle_index(350.0, [90.0, 0.0, 300.0]) == 1
    assert geometry.nearest_angle_index(10.0, [10.0, 10.0]) == 0
    with pytest.raises(ValueError):
        geometry.nearest_angle_index(0.0, [])


def test_rect_center() -> None:
    assert geometry.rect_center(10.0, 20.0, 40.0, 60.0) == (30.0, 50.0)
    with pytest.raises(GeometryUnavailable):
        geometry.rect_center(0.0, 0.0, 0.0, 10.0)
    with pytest.raises(GeometryUnavailable):
        geometry.rect_center(0.0, 0.0, float("nan"), 10.0)


def test_clamp() -> None:
    assert geometry.clamp(5.0, 0.0, 1.0) == 1.0
    assert geometry.clamp(-5.0, 0.0, 1.0) == 0.0
    assert geometry.clamp(0.5, 0.0, 1.0) == 0.5


@given(
    angle=finite_angles,
    start=st.floats(min_value=-360.0, max_value=360.0),
    sweep=st.floats(min_value=1.0, max_value=359.0),
)
def test_clamp_to_arc_agrees_with_is_within_arc(
    angle: float, start: float, sweep: float
) -> None:
    offset = geometry.clamp_to_arc(angle, start, sweep)
    if geometry.is_within_arc(angle, start, sweep):
        assert offset == geometry.normalize_degrees(angle - start)
    else:
        assert offset in (0.0, sweep)
