"""A 512x512 graphic plane of 16-bit pixels and the blitting routines that draw into it."""

from __future__ import annotations

from collections.abc import Sequence

from x68gfx.clipping import (
    ZOOM_MAX,
    ZOOM_MIN,
    DrawArea,
    HAlign,
    OutOfAreaError,
    VAlign,
    clip_rect,
    scale_1p25,
    zoom_scale,
)
from x68gfx.imagebuf import align8

PLANE_SIZE = 512


class GraphicPlane:
    """One graphic screen: ``PLANE_SIZE`` rows of ``PLANE_SIZE`` 16-bit pixels.

    Writes that fall outside the plane are dropped and reads outside it give 0.
    """

    def __init__(self, area: DrawArea | None = None) -> None:
        self.area = area or DrawArea()
        self._pixels = [0] * (PLANE_SIZE * PLANE_SIZE)

    def _read(self, x: int, y: int) -> int:
        if 0 <= x < PLANE_SIZE and 0 <= y < PLANE_SIZE:
            return self._pixels[y * PLANE_SIZE + x]
        return 0

    def _write(self, x: int, y: int, value: int) -> None:
        if 0 <= x < PLANE_SIZE and 0 <= y < PLANE_SIZE:
            self._pixels[y * PLANE_SIZE + x] = value & 0xFFFF

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel at (x, y)."""
        if not (0 <= x < PLANE_SIZE and 0 <= y < PLANE_SIZE):
            raise IndexError(f"pixel ({x}, {y}) is outside the plane")
        return self._pixels[y * PLANE_SIZE + x]

    def _check_rect(self, x: int, w: int, y: int, h: int) -> None:
        if w < 0 or h < 0:
            raise ValueError("width and height must not be negative")
        if x < 0 or y < 0 or x + w > PLANE_SIZE or y + h > PLANE_SIZE:
            raise ValueError(f"area ({x}, {y}, {w}x{h}) does not fit in the plane")

    def clear_area(self, x: int, w: int, y: int, h: int) -> None:
        """Set a rectangle of pixels to 0."""
        self.fill_area(x, w, y, h, 0)

    def fill_area(self, x: int, w: int, y: int, h: int, value: int) -> None:
        """Fill a rectangle with the byte ``value``, repeated in both halves of each pixel."""
        self._check_rect(x, w, y, h)
        word = (value & 0xFF) * 0x0101
        for row in range(y, y + h):
            start = row * PLANE_SIZE + x
            self._pixels[start:start + w] = [word] * w

    def _mode_bounds(self, mode: int) -> tuple[int, int, int, int]:
        a = self.area
        if mode == 1:
            left = a.x_min + a.x_offset
            return left, left + a.width, a.y_min, a.y_min + a.window_height
        if mode == 2:
            left = a.x_min + a.x_offset
            top = a.y_min + a.y_offset
            return left, left + a.width, top, top + a.window_height
        return a.x_min, a.x_max, a.y_min, a.y_max

    def bitblt(
        self,
        source: GraphicPlane,
        dst_x: int,
        dst_y: int,
        src_x: int,
        src_y: int,
        width: int,
        height: int,
        mode: int = 0,
        h_align: HAlign | int = HAlign.LEFT,
        v_align: VAlign | int = VAlign.TOP,
    ) -> None:
        """Copy a rectangle of ``source`` to this plane; zero pixels are transparent.

        Raises :class:`OutOfAreaError` when the anchor lies outside the drawable
        screen or the placed image is wholly outside the clip range of ``mode``.
        """
        a = self.area
        if not a.x_min <= dst_x < a.x_max:
            raise OutOfAreaError("x", dst_x, a.x_min, a.x_max)
        if not a.y_min <= dst_y < a.y_max:
            raise OutOfAreaError("y", dst_y, a.y_min, a.y_max)

        if v_align == VAlign.CENTER:
            dst_y -= height >> 1
        elif v_align == VAlign.BOTTOM:
            dst_y -= height
        if h_align == HAlign.MID:
            dst_x -= width >> 1
        elif h_align == HAlign.RIGHT:
            dst_x -= width

        dst_ex = dst_x + width
        dst_ey = dst_y + height
        x_min, x_max, y_min, y_max = self._mode_bounds(mode)

        if dst_ex < x_min:
            raise OutOfAreaError("x", dst_x, x_min, x_max)
        if dst_x <= x_min <= dst_ex:
            src_x += x_min - dst_x
            dst_x = x_min
        elif dst_x < x_max <= dst_ex:
            dst_ex = x_max
        elif dst_x >= x_max:
            raise OutOfAreaError("x", dst_x, x_min, x_max)

        if dst_ey < y_min:
            raise OutOfAreaError("y", dst_y, y_min, y_max)
        if dst_y <= y_min <= dst_ey:
            src_y += y_min - dst_y
            dst_y = y_min
        elif dst_y < y_max <= dst_ey:
            dst_ey = y_max
        elif dst_y > y_max:
            raise OutOfAreaError("y", dst_y, y_min, y_max)

        for y in range(dst_y, dst_ey):
            sy = src_y + (y - dst_y)
            for x in range(dst_x, dst_ex):
                value = source._read(src_x + (x - dst_x), sy)
                if value != 0:
                    self._write(x, y, value)

    def stretch(
        self,
        source: GraphicPlane,
        dst_x: int,
        dst_w: int,
        dst_y: int,
        dst_h: int,
        src_x: int,
        src_y: int,
    ) -> None:
        """Draw ``source`` sampled every 1.25 pixels; zero pixels are transparent."""
        a = self.area
        dst_ex = min(dst_x + dst_w, a.x_max)
        dst_ey = min(dst_y + dst_h, a.y_max)
        for y in range(dst_y, dst_ey):
            sy = src_y + scale_1p25(y - dst_y)
            for x in range(dst_x, dst_ex):
                value = source._read(src_x + scale_1p25(x - dst_x), sy)
                if value != 0:
                    self._write(x, y, value)

    @staticmethod
    def _image_at(image: Sequence[int], index: int) -> int:
        return image[index] if 0 <= index < len(image) else 0

    def blit_image(
        self,
        image: Sequence[int],
        width: int,
        height: int,
        dst_x: int,
        dst_y: int,
        mode: int = 0,
        h_align: HAlign | int = HAlign.LEFT,
        v_align: VAlign | int = VAlign.TOP,
        offset: int = 0,
        opaque: bool = False,
    ) -> None:
        """Draw an image buffer with ``offset`` added to each pixel.

        Zero pixels are skipped unless ``opaque``. Raises
        :class:`OutOfAreaError` when the image cannot be visible.
        """
        span_x, span_y = clip_rect(dst_x, dst_y, width, height, mode, h_align, v_align, self.area)
        stride = align8(width)
        left, top = span_x.start, span_y.start
        for y in range(top, top + height):
            if y < span_y.low:
                continue
            if y >= span_y.high:
                break
            row = (y - top) * stride
            for x in range(left, left + width):
                if span_x.low <= x < span_x.high:
                    value = self._image_at(image, row + x - left)
                    if value != 0 or opaque:
                        self._write(x, y, value + offset)

    def zoom_image(
        self,
        image: Sequence[int],
        width: int,
        height: int,
        dst_x: int,
        dst_y: int,
        mode: int = 0,
        h_align: HAlign | int = HAlign.LEFT,
        v_align: VAlign | int = VAlign.TOP,
        zoom: int = 0,
        offset: int = 0,
        opaque: bool = False,
    ) -> None:
        """Draw an image buffer scaled by a zoom step in -9..9 (clamped).

        Zero pixels are skipped unless ``opaque``. Raises
        :class:`OutOfAreaError` when the image cannot be visible.
        """
        zoom = max(ZOOM_MIN, min(ZOOM_MAX, zoom))
        dst_w = align8(zoom_scale(width, zoom))
        dst_h = zoom_scale(height, zoom)
        span_x, span_y = clip_rect(dst_x, dst_y, dst_w, dst_h, mode, h_align, v_align, self.area)
        stride = align8(width)
        left, top = span_x.start, span_y.start
        for y in range(top, top + dst_h):
            if y < span_y.low:
                continue
            if y >= span_y.high:
                break
            cal_y = zoom_scale(y - top, -zoom)
            if cal_y >= height:
                break
            for x in range(left, left + dst_w):
                if x < span_x.low:
                    continue
                if x >= span_x.high:
                    break
                cal_x = zoom_scale(x - left, -zoom)
                if cal_x >= stride:
                    break
                value = self._image_at(image, cal_y * stride + cal_x)
                if value != 0 or opaque:
                    self._write(x, y, value + offset)

    def place_image(
        self,
        image: Sequence[int],
        width: int,
        height: int,
        pos_x: int = 0,
        pos_y: int = 0,
        offset: int = 0,
        opaque: bool = False,
    ) -> None:
        """Draw a whole image buffer at (pos_x, pos_y), clipped to the drawable screen."""
        a = self.area
        stride = align8(width)
        for y in range(height):
            py = pos_y + y
            if not a.y_min <= py < a.y_max:
                continue
            row = y * stride
            for x in range(stride):
                px = pos_x + x
                if a.x_min <= px < a.x_max:
                    value = self._image_at(image, row + x)
                    if value != 0 or opaque:
                        self._write(px, py, value + offset)