import pytest

from x68gfx.clipping import (
    ClipSpan,
    DrawArea,
    HAlign,
    OutOfAreaError,
    VAlign,
    clip_height,
    clip_rect,
    clip_width,
    scale_1p25,
    zoom_factor,
    zoom_scale,
)

AREA = DrawArea(
    x_min=16,
    x_max=496,
    y_min=8,
    y_max=504,
    width=256,
    x_offset=32,
    y_offset=24,
    window_height=200,
)


def test_width_mode0_left():
    span = clip_width(10, 40, 0, HAlign.LEFT, AREA)
    assert span.start == 10 + AREA.x_min
    assert span.low == AREA.x_min
    assert span.high == AREA.x_min + AREA.width


@pytest.mark.parametrize("mode", [1, 2])
def test_width_window_modes(mode):
    span = clip_width(10, 40, mode, HAlign.LEFT, AREA)
    assert span.low == AREA.x_min + AREA.x_offset
    assert span.start == 10 + span.low
    assert span.high == span.low + AREA.width


def test_width_other_mode_uses_full_screen():
    span = clip_width(10, 40, 7, HAlign.LEFT, AREA)
    assert span.low == AREA.x_min
    assert span.high == AREA.x_max


def test_width_mid_and_right_shift_start():
    left = clip_width(100, 40, 0, HAlign.LEFT, AREA)
    mid = clip_width(100, 40, 0, HAlign.MID, AREA)
    right = clip_width(100, 40, 0, HAlign.RIGHT, AREA)
    assert mid.start == left.start - 20
    assert right.start == left.start - 40
    assert (mid.low, mid.high) == (left.low, left.high)


def test_width_left_out_of_area():
    with pytest.raises(OutOfAreaError) as info:
        clip_width(-100, 40, 0, HAlign.LEFT, AREA)
    assert info.value.axis == "x"
    assert info.value.position == -100 + AREA.x_min
    with pytest.raises(OutOfAreaError):
        clip_width(AREA.width, 40, 0, HAlign.LEFT, AREA)


def test_width_partial_overlap_is_accepted():
    span = clip_width(-30, 40, 0, HAlign.LEFT, AREA)
    assert span.start < span.low
    mid = clip_width(AREA.width + 10, 40, 0, HAlign.MID, AREA)
    assert mid.start < mid.high


def test_width_right_align_rejects_left_of_area():
    with pytest.raises(OutOfAreaError):
        clip_width(-1, 40, 0, HAlign.RIGHT, AREA)


def test_height_modes():
    top = clip_height(5, 30, 0, VAlign.TOP, AREA)
    assert (top.start, top.low, top.high) == (5 + AREA.y_min, AREA.y_min, AREA.y_max)
    win = clip_height(5, 30, 1, VAlign.TOP, AREA)
    assert win.high == AREA.y_min + AREA.window_height
    shifted = clip_height(5, 30, 2, VAlign.TOP, AREA)
    assert shifted.low == AREA.y_min + AREA.y_offset
    assert shifted.start == 5 + shifted.low
    assert shifted.high == shifted.low + AREA.window_height


def test_height_center_and_bottom():
    top = clip_height(100, 30, 0, VAlign.TOP, AREA)
    center = clip_height(100, 30, 0, VAlign.CENTER, AREA)
    bottom = clip_height(100, 30, 0, VAlign.BOTTOM, AREA)
    assert center.start == top.start - 15
    assert bottom.start == top.start - 30


def test_height_out_of_area():
    with pytest.raises(OutOfAreaError) as info:
        clip_height(AREA.y_max, 30, 0, VAlign.TOP, AREA)
    assert info.value.axis == "y"
    with pytest.raises(OutOfAreaError):
        clip_height(-5, 30, 0, VAlign.BOTTOM, AREA)


def test_clip_rect_matches_axes():
    rect = clip_rect(12, 34, 40, 30, 2, HAlign.MID, VAlign.CENTER, AREA)
    assert rect == (
        clip_width(12, 40, 2, HAlign.MID, AREA),
        clip_height(34, 30, 2, VAlign.CENTER, AREA),
    )


def test_span_contains():
    span = ClipSpan(start=0, low=10, high=20)
    assert 10 in span
    assert 19 in span
    assert 20 not in span


def test_zoom_factor_identity_and_clamp():
    assert zoom_factor(0) == 1.0
    assert zoom_factor(-20) == zoom_factor(-9)
    assert zoom_factor(20) == zoom_factor(9)
    factors = [zoom_factor(s) for s in range(-9, 10)]
    assert factors == sorted(factors)
    assert len(set(factors)) == len(factors)


def test_zoom_scale_properties():
    for step in range(-9, 10):
        assert zoom_scale(0, step) == 0
        assert zoom_scale(-200, step) == -zoom_scale(200, step)
    assert zoom_scale(123, 0) == 123
    values = [zoom_scale(200, s) for s in range(-9, 10)]
    assert values == sorted(values)
    for step in range(1, 10):
        assert zoom_scale(200, -step) < 200 < zoom_scale(200, step)
    assert zoom_scale(200, 50) == zoom_scale(200, 9)


def test_scale_1p25():
    assert scale_1p25(0) == 0
    assert scale_1p25(4) == 5
    for k in range(20):
        assert scale_1p25(4 * k) == 5 * k
    values = [scale_1p25(v) for v in range(100)]
    assert values == sorted(values)