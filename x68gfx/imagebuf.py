"""In-memory image buffers: layout conversion, scaling and decoding of tiled pattern data.

Image buffers are flat lists of 16-bit values whose rows are the image
width rounded up to a multiple of 8 pixels apart.
"""

from __future__ import annotations

from collections.abc import Sequence

from x68gfx.clipping import scale_1p25
from x68gfx.palette import BLOCK_SIZE, reorder_bits

SCREEN_STRIDE = 512
SPRITE_BYTES = 128
SHEET_WIDTH = 256
STG_BLOCKS = 32
STG_ROWS = 512
STG_SWATCH_TOP = 256
STG_BACKGROUND_HEIGHT = 256
STG_SPRITE_HEIGHT = 192

# Source bit i of a stored colour moves to bit _STG_BIT_ORDER[i] (I, B, R, G -> GRBI).
_STG_BIT_ORDER = (7, 8, 9, 10, 11, 12, 13, 14, 15, 0, 1, 2, 3, 4, 5, 6)


def align8(value: int) -> int:
    """Round ``value`` up to a multiple of 8."""
    return (value + 7) // 8 * 8


def _at(data: Sequence[int], index: int) -> int:
    """Read ``data[index]``, with positions past the end reading as 0."""
    return data[index] if 0 <= index < len(data) else 0


def _check_dims(**dims: int) -> None:
    for name, value in dims.items():
        if value <= 0:
            raise ValueError(f"{name} must be positive, not {value}")


def apic_to_mem(
    src: Sequence[int], width: int, height: int, stride: int = SCREEN_STRIDE
) -> list[int]:
    """Copy a decoded picture laid out ``stride`` pixels per row into a compact buffer.

    Only the low 8 bits of each pixel are kept; padding columns are 0.
    """
    if width > stride:
        raise ValueError("width must not exceed the source stride")
    if height > 0 and width > 0 and len(src) < (height - 1) * stride + width:
        raise ValueError("the source buffer is too small for the picture")
    padded = align8(width)
    out: list[int] = []
    for y in range(height):
        row = src[y * stride:y * stride + width]
        out.extend(pixel & 0xFF for pixel in row)
        out.extend([0] * (padded - width))
    return out


def vertical_strips(
    src: Sequence[int], width: int, height: int, strip_width: int = 32
) -> list[int]:
    """Rearrange an image into vertical strips of ``strip_width`` columns, stored one after another.

    Columns beyond the last whole strip are dropped.
    """
    if strip_width <= 0:
        raise ValueError("strip width must be positive")
    stride = align8(width)
    if len(src) < stride * height:
        raise ValueError("the source buffer is too small for the image")
    out: list[int] = []
    for strip in range(stride // strip_width):
        left = strip * strip_width
        for y in range(height):
            start = y * stride + left
            out.extend(pixel & 0xFF for pixel in src[start:start + strip_width])
    return out


def offset_palette(buf: Sequence[int], width: int, height: int, offset: int) -> list[int]:
    """Add a palette offset to every visible pixel; padding columns become 0."""
    stride = align8(width)
    if len(buf) < stride * height:
        raise ValueError("the buffer is too small for the image")
    out: list[int] = []
    for y in range(height):
        row = buf[y * stride:y * stride + width]
        out.extend((pixel + offset) & 0xFFFF for pixel in row)
        out.extend([0] * (stride - width))
    return out


def stretch_to_mem(
    dst: Sequence[int],
    dst_w: int,
    dst_h: int,
    src: Sequence[int],
    src_w: int,
    src_h: int,
) -> list[int]:
    """Draw ``src`` into a copy of ``dst``, sampling the source every 1.25 pixels.

    Zero source pixels are transparent and leave the destination unchanged.
    """
    _check_dims(dst_w=dst_w, dst_h=dst_h, src_w=src_w, src_h=src_h)
    dst_stride = align8(dst_w)
    src_stride = align8(src_w)
    if len(dst) < dst_stride * dst_h:
        raise ValueError("the destination buffer is too small")
    if len(src) < src_stride * (src_h - 1) + src_w:
        raise ValueError("the source buffer is too small")
    out = list(dst)
    for y in range(dst_h):
        sy = scale_1p25(y)
        if sy >= src_h:
            break
        for x in range(dst_w):
            sx = scale_1p25(x)
            if sx >= src_w:
                continue
            pixel = src[sy * src_stride + sx]
            if pixel != 0:
                out[y * dst_stride + x] = pixel
    return out


def copy_to_mem(
    dst: Sequence[int],
    dst_w: int,
    dst_h: int,
    src: Sequence[int],
    src_w: int,
    src_h: int,
) -> list[int]:
    """Return a copy of ``dst`` with the whole of an equally sized ``src`` copied over it."""
    _check_dims(dst_w=dst_w, dst_h=dst_h, src_w=src_w, src_h=src_h)
    if (src_w, src_h) != (dst_w, dst_h):
        raise ValueError("source and destination sizes differ")
    count = align8(dst_w) * dst_h
    if len(src) < count or len(dst) < count:
        raise ValueError("a buffer is too small for the image")
    out = list(dst)
    out[:count] = src[:count]
    return out


def decode_sprite_sheet(data: Sequence[int], palette: Sequence[int]) -> list[list[int]]:
    """Decode 4-bit sprite pattern data into rows of colours looked up in ``palette``.

    Each 128 bytes of data make one row; fewer than 16 rows are 16 pixels
    wide per row, otherwise the sheet is 256 pixels wide. Bytes past the end
    of ``data`` read as 0.
    """
    if len(palette) < BLOCK_SIZE:
        raise ValueError(f"the palette needs {BLOCK_SIZE} colours")
    height = len(data) // SPRITE_BYTES
    width = height * 16 if height < 16 else SHEET_WIDTH
    rows: list[list[int]] = []
    for y in range(height):
        pos = (y % 16) * 4 + (y // 16) * 2048
        row: list[int] = []
        for _ in range(0, width, 8):
            for i in range(4):
                byte = _at(data, pos + i) & 0xFF
                row.append(palette[byte >> 4] & 0xFFFF)
                row.append(palette[byte & 0x0F] & 0xFFFF)
            pos += 64
        rows.append(row)
    return rows


def decode_stg_patterns(
    patterns: Sequence[int],
    colors: Sequence[int],
    attributes: Sequence[int],
    background: bool = False,
) -> tuple[list[list[int]], list[list[int]]]:
    """Decode tiled pattern data with per-tile palette blocks into a 256x512 image.

    Returns ``(image, blocks)``: ``blocks`` holds the 32 palette blocks of 16
    colours converted to GRBI; ``image`` has the patterns in the top 256 rows
    (192 unless ``background``) and a swatch of every block below row 256.
    Attributes are signed bytes; negative ones select block 0. Data past the
    end of a sequence reads as 0.
    """
    blocks = [
        [reorder_bits(_at(colors, b * BLOCK_SIZE + i), _STG_BIT_ORDER) for i in range(BLOCK_SIZE)]
        for b in range(STG_BLOCKS)
    ]
    image = [[0] * SHEET_WIDTH for _ in range(STG_ROWS)]

    for y in range(STG_SWATCH_TOP, STG_ROWS):
        block = blocks[(y - STG_SWATCH_TOP) // 8]
        image[y] = [block[x // 16] for x in range(SHEET_WIDTH)]

    height = STG_BACKGROUND_HEIGHT if background else STG_SPRITE_HEIGHT
    for y in range(height):
        pos = (y % 16) * 0x08 + (y // 16) * 0x800
        row = image[y]
        for x in range(0, SHEET_WIDTH, 16):
            attr = _at(attributes, 0x10 * (y // 16) + x // 16) & 0xFF
            block_no = 0 if attr >= 0x80 else attr
            if block_no >= STG_BLOCKS:
                raise ValueError(f"palette block {block_no} is outside 0..{STG_BLOCKS - 1}")
            block = blocks[block_no]
            for i in range(8):
                byte = _at(patterns, pos + i) & 0xFF
                row[x + 2 * i] = block[byte & 0x0F]
                row[x + 2 * i + 1] = block[byte >> 4]
            pos += 128
    return image, blocks


def to_text_planes(
    image: Sequence[int], width: int, height: int, offset: int = 0
) -> tuple[list[list[int]], list[list[int]], list[list[int]], list[list[int]]]:
    """Split a 16-colour image into four text bit planes of 16-pixel words.

    Pixel 0 stays 0, pixels of 16 or more become 15, and others get
    ``offset`` added. Each row reads 16 pixels per word straight on from the
    row start; pixels past the end of ``image`` read as 0.
    """
    stride = align8(width)
    words = (width + 15) // 16
    planes: tuple[list[list[int]], ...] = ([], [], [], [])
    for y in range(height):
        rows = [[0] * words for _ in range(4)]
        pos = y * stride
        for w in range(words):
            for z in range(16):
                pixel = _at(image, pos)
                pos += 1
                if pixel == 0:
                    value = 0
                elif pixel >= 16:
                    value = 15
                else:
                    value = pixel + offset
                for plane in range(4):
                    rows[plane][w] |= ((value >> plane) & 1) << (15 - z)
        for plane in range(4):
            planes[plane].append(rows[plane])
    return planes  # type: ignore[return-value]