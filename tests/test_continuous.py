"""Tests for the continuous dial value/angle mapping."""

from __future__ import annotations

from hypothesis import assume, given
from hypothesis import strategies as st
import pytest

from rotary_input.dials import continuous
from rotary_input.models import ContinuousCommand, DragSession, RangeConfig
from rotary_input.utils import point_on_circle

ZOOM = RangeConfig(1.0, 5.0, 0.1, sweep_degrees=270.0, start_angle_degrees=-135.0)
EV = RangeConfig(-3.0, 3.0, 0.5)
ISO = RangeConfig(50.0, 800.0, 10.0)
CENTER = (34.0, 34.0)
# 1/3 covers third-stop EV, which has no short decimal form.
STEPS = (0.01, 0.05, 0.1, 0.25, 1 / 3, 0.5, 1.0, 2.0, 5.0, 10.0)


@st.composite
def range_configs(draw: st.DrawFn) -> RangeConfig:
    step = draw(st.sampled_from(STEPS))
    minimum = draw(st.integers(min_value=-500, max_value=500)) * step
    count = draw(st.integers(min_value=1, max_value=400))
    sweep = draw(st.floats(min_value=10.0, max_value=360.0))
    start = draw(st.floats(min_value=-360.0, max_value=360.0))
    return RangeConfig(
        minimum=round(minimum, 2),
        maximum=round(minimum + count * step, 2),
        step=step,
        sweep_degrees=sweep,
        start_angle_degrees=start,
    )


@st.composite
def config_and_grid_value(draw: st.DrawFn) -> tuple[RangeConfig, float]:
    cfg = draw(range_configs())
    index = draw(st.integers(min_value=0, max_value=continuous.grid_size(cfg)))
    return cfg, continuous.grid_value(index, cfg)


def test_scenario_angles_for_zoom_range() -> None:
    assert continuous.angle_for_value(1.0, ZOOM) == pytest.approx(-135.0)
    assert continuous.angle_for_value(5.0, ZOOM) == pytest.approx(135.0)
    assert continuous.angle_for_value(3.0, ZOOM) == pytest.approx(0.0)


def test_angle_for_value_clamps_out_of_range_values() -> None:
    assert continuous.angle_for_value(-10.0, ZOOM) == pytest.approx(-135.0)
    assert continuous.angle_for_value(99.0, ZOOM) == pytest.approx(135.0)


def test_value_for_angle_accepts_wrapped_and_unwrapped_angles() -> None:
    assert continuous.value_for_angle(-135.0, ZOOM) == 1.0
    assert continuous.value_for_angle(225.0, ZOOM) == 1.0
    assert continuous.value_for_angle(0.0, ZOOM) == 3.0
    assert continuous.value_for_angle(360.0, ZOOM) == 3.0
    assert continuous.value_for_angle(135.0, ZOOM) == 5.0


def test_value_for_angle_clamps_dead_zone_to_nearest_end() -> None:
    # 170 is closer to the max end (135), 190 to the min end (225)
    assert continuous.value_for_angle(170.0, ZOOM) == 5.0
    assert continuous.value_for_angle(190.0, ZOOM) == 1.0
    # straight down is equidistant: the start (minimum) wins
    assert continuous.value_for_angle(180.0, ZOOM) == 1.0


def test_value_for_angle_quantizes_to_step() -> None:
    # 1 degree of a 270 degree sweep over 750 ISO units is ~2.78 units
    assert continuous.value_for_angle(-135.0 + 1.0, ISO) == 50.0
    assert continuous.value_for_angle(-135.0 + 4.0, ISO) == 60.0


def test_quantize_rounds_halves_up_the_grid() -> None:
    cfg = RangeConfig(0.0, 10.0, 1.0)
    assert continuous.quantize(2.5, cfg) == 3.0
    assert continuous.quantize(2.4999, cfg) == 2.0
    neg = RangeConfig(-10.0, 0.0, 1.0)
    # halves are measured from the minimum, so they round toward the maximum
    assert continuous.quantize(-2.5, neg) == -2.0
    assert continuous.quantize(-2.6, neg) == -3.0


def test_quantize_stays_on_grid_when_span_is_not_a_step_multiple() -> None:
    cfg = RangeConfig(0.0, 10.0, 3.0)
    assert continuous.grid_size(cfg) == 3
    assert continuous.quantize(10.0, cfg) == 9.0
    assert continuous.quantize(100.0, cfg) == 9.0
    assert continuous.quantize(-4.0, cfg) == 0.0


@given(config_and_grid_value())
def test_round_trip(case: tuple[RangeConfig, float]) -> None:
    cfg, value = case
    angle = continuous.angle_for_value(value, cfg)
    assert continuous.value_for_angle(angle, cfg) == value


@given(cfg=range_configs(), data=st.data())
def test_angle_for_value_is_monotonic(cfg: RangeConfig, data: st.DataObject) -> None:
    v1 = data.draw(st.floats(min_value=cfg.minimum, max_value=cfg.maximum))
    v2 = data.draw(st.floats(min_value=cfg.minimum, max_value=cfg.maximum))
    assume(v1 < v2)
    assert continuous.angle_for_value(v1, cfg) <= continuous.angle_for_value(v2, cfg)


@given(cfg=range_configs(), angle=st.floats(min_value=-720.0, max_value=720.0))
def test_value_for_angle_is_always_a_grid_value_in_range(
    cfg: RangeConfig, angle: float
) -> None:
    value = continuous.value_for_angle(angle, cfg)
    assert cfg.minimum <= value <= cfg.maximum
    steps = (value - cfg.minimum) / cfg.step
    assert steps == pytest.approx(round(steps), abs=1e-6)


def test_apply_pointer_move_uses_absolute_pointer_angle() -> None:
    session = DragSession(anchor_screen_angle=10.0, base_value_angle=-135.0)
    top = point_on_circle(CENTER, 30.0, 0.0)
    assert continuous.apply_pointer_move(top, session, ZOOM, CENTER) == 3.0
    # the session is left untouched
    assert session == DragSession(anchor_screen_angle=10.0, base_value_angle=-135.0)


def test_apply_pointer_move_in_dead_zone_clamps() -> None:
    session = DragSession(anchor_screen_angle=0.0, base_value_angle=0.0)
    just_past_max = point_on_circle(CENTER, 30.0, 150.0)
    assert continuous.apply_pointer_move(just_past_max, session, ZOOM, CENTER) == 5.0
    just_before_min = point_on_circle(CENTER, 30.0, 210.0)
    assert continuous.apply_pointer_move(just_before_min, session, ZOOM, CENTER) == 1.0


@pytest.mark.parametrize(
    ("command", "current", "expected"),
    (
        (ContinuousCommand.STEP_UP, 1.0, 1.1),
        (ContinuousCommand.STEP_DOWN, 1.1, 1.0),
        (ContinuousCommand.PAGE_UP, 1.0, 1.5),
        (ContinuousCommand.PAGE_DOWN, 3.0, 2.5),
        (ContinuousCommand.JUMP_TO_MIN, 3.3, 1.0),
        (ContinuousCommand.JUMP_TO_MAX, 3.3, 5.0),
        (ContinuousCommand.PAGE_UP, 4.8, 5.0),
        (ContinuousCommand.STEP_DOWN, 1.0, 1.0),
    ),
)
def test_apply_key_command(command, current: float, expected: float) -> None:
    assert continuous.apply_key_command(command, current, ZOOM) == expected


def test_key_command_no_op_returns_same_object() -> None:
    current = 5.0
    result = continuous.apply_key_command(ContinuousCommand.STEP_UP, current, ZOOM)
    assert result is current


def test_big_step() -> None:
    # zoom: max(0.1 * 5, 4 / 10)
    assert continuous.big_step(ZOOM) == pytest.approx(0.5)
    # ISO: max(50, 75)
    assert continuous.big_step(ISO) == pytest.approx(75.0)
    custom = RangeConfig(0.0, 100.0, 1.0, page_step=20.0)
    assert continuous.big_step(custom) == 20.0
    assert continuous.apply_key_command(ContinuousCommand.PAGE_UP, 0.0, custom) == 20.0


def test_iso_page_up_is_quantized() -> None:
    assert continuous.apply_key_command(ContinuousCommand.PAGE_UP, 50.0, ISO) == 130.0


def test_ev_steps_cross_zero() -> None:
    value = -0.5
    value = continuous.apply_key_command(ContinuousCommand.STEP_UP, value, EV)
    assert value == 0.0
    value = continuous.apply_key_command(ContinuousCommand.STEP_UP, value, EV)
    assert value == 0.5


def test_format_value() -> None:
    zoom = RangeConfig(1.0, 5.0, 0.1, value_format="{:.1f}x")
    assert continuous.format_value(2.0, zoom) == "2.0x"
    ev = RangeConfig(-3.0, 3.0, 0.5, value_format="{:+g}")
    assert continuous.format_value(1.5, ev) == "+1.5"
    assert continuous.format_value(-1.0, ev) == "-1"
    iso = RangeConfig(50, 800, 10, value_format="ISO {:g}")
    assert continuous.format_value(100.0, iso) == "ISO 100"


def test_third_stop_ev_stays_on_the_float_grid() -> None:
    thirds = RangeConfig(-3.0, 3.0, 1 / 3)
    assert not thirds.decimal_grid
    value = thirds.minimum + thirds.step
    angle = continuous.angle_for_value(value, thirds)
    assert continuous.value_for_angle(angle, thirds) == value
    stepped = continuous.apply_key_command(
        ContinuousCommand.STEP_UP, thirds.minimum, thirds
    )
    assert stepped == value
    assert continuous.quantize(3.0, thirds) == 3.0


def test_decimal_grid_values_are_rounded() -> None:
    assert ZOOM.decimal_grid
    # 1.0 + 3 * 0.1 is 1.3000000000000003 before rounding
    assert continuous.grid_value(3, ZOOM) == 1.3
