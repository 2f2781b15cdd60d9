"""Placement and clipping of images against the drawable graphic area, plus zoom scaling."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class VAlign(IntEnum):
    """Vertical anchor of an image relative to its requested position."""

    TOP = 0
    CENTER = 1
    BOTTOM = 2


class HAlign(IntEnum):
    """Horizontal anchor of an image relative to its requested position."""

    LEFT = 3
    MID = 4
    RIGHT = 5


@dataclass(frozen=True)
class DrawArea:
    """Geometry of the graphic screen that images are clipped against.

    Mode 0 clips to ``width`` columns from ``x_min`` and the full height,
    modes 1 and 2 clip to the game window shifted by the offsets, and any
    other mode clips to the whole drawable screen.
    """

    x_min: int = 0
    x_max: int = 512
    y_min: int = 0
    y_max: int = 512
    width: int = 256
    x_offset: int = 0
    y_offset: int = 0
    window_height: int = 256


@dataclass(frozen=True)
class ClipSpan:
    """Resolved start coordinate of an image and the visible range on one axis."""

    start: int
    low: int
    high: int

    def __contains__(self, coordinate: object) -> bool:
        return isinstance(coordinate, int) and self.low <= coordinate < self.high


class OutOfAreaError(ValueError):
    """The image lies entirely outside the drawable range on one axis."""

    def __init__(self, axis: str, position: int, low: int, high: int) -> None:
        super().__init__(f"{axis} position {position} is outside the area {low}..{high}")
        self.axis = axis
        self.position = position
        self.low = low
        self.high = high


_DEFAULT_AREA = DrawArea()


def clip_width(
    pos_x: int,
    width: int,
    mode: int = 0,
    align: HAlign | int = HAlign.LEFT,
    area: DrawArea | None = None,
) -> ClipSpan:
    """Resolve the left edge of an image and its horizontal clip range.

    Raises :class:`OutOfAreaError` when no column of the image can be visible.
    """
    area = area or _DEFAULT_AREA
    if mode == 0:
        x = pos_x + area.x_min
        low, high = area.x_min, area.x_min + area.width
    elif mode in (1, 2):
        low = area.x_min + area.x_offset
        x = pos_x + low
        high = low + area.width
    else:
        x = pos_x + area.x_min
        low, high = area.x_min, area.x_max

    if align == HAlign.MID:
        half = width // 2
        if x + half < low or x - half >= high:
            raise OutOfAreaError("x", x, low, high)
        x -= half
    elif align == HAlign.RIGHT:
        if x < low or x - width >= high:
            raise OutOfAreaError("x", x, low, high)
        x -= width
    else:
        if x + width < low or x >= high:
            raise OutOfAreaError("x", x, low, high)
    return ClipSpan(x, low, high)


def clip_height(
    pos_y: int,
    height: int,
    mode: int = 0,
    align: VAlign | int = VAlign.TOP,
    area: DrawArea | None = None,
) -> ClipSpan:
    """Resolve the top edge of an image and its vertical clip range.

    Raises :class:`OutOfAreaError` when no row of the image can be visible.
    """
    area = area or _DEFAULT_AREA
    if mode == 1:
        y = pos_y + area.y_min
        low, high = area.y_min, area.y_min + area.window_height
    elif mode == 2:
        low = area.y_min + area.y_offset
        y = pos_y + low
        high = low + area.window_height
    else:
        y = pos_y + area.y_min
        low, high = area.y_min, area.y_max

    if align == VAlign.CENTER:
        half = height // 2
        if y + half < low or y - half >= high:
            raise OutOfAreaError("y", y, low, high)
        y -= half
    elif align == VAlign.BOTTOM:
        if y < low or y - height >= high:
            raise OutOfAreaError("y", y, low, high)
        y -= height
    else:
        if y + height < low or y >= high:
            raise OutOfAreaError("y", y, low, high)
    return ClipSpan(y, low, high)


def clip_rect(
    dst_x: int,
    dst_y: int,
    width: int,
    height: int,
    mode: int = 0,
    h_align: HAlign | int = HAlign.LEFT,
    v_align: VAlign | int = VAlign.TOP,
    area: DrawArea | None = None,
) -> tuple[ClipSpan, ClipSpan]:
    """Clip an image on both axes, horizontal first."""
    return (
        clip_width(dst_x, width, mode, h_align, area),
        clip_height(dst_y, height, mode, v_align, area),
    )


# Scale factors in hundredths for zoom steps -9 .. 9.
_ZOOM_PERCENT = (
    52, 54, 58, 62, 66, 71, 77, 83, 91,
    100,
    110, 120, 130, 140, 150, 160, 170, 180, 190,
)
ZOOM_MIN = -9
ZOOM_MAX = 9


def _zoom_index(step: int) -> int:
    return max(ZOOM_MIN, min(ZOOM_MAX, step)) - ZOOM_MIN


def zoom_factor(step: int) -> float:
    """Return the scale factor of a zoom step; steps are clamped to -9..9."""
    return _ZOOM_PERCENT[_zoom_index(step)] / 100


def zoom_scale(value: int, step: int) -> int:
    """Scale an integer coordinate by the factor of a zoom step, truncating toward zero."""
    percent = _ZOOM_PERCENT[_zoom_index(step)]
    scaled = abs(value) * percent // 100
    return scaled if value >= 0 else -scaled


def scale_1p25(value: int) -> int:
    """Multiply by 1.25, rounding down."""
    return value + (value >> 2)