"""Colour reduction of palette images: median cut in YUV space and uniform quantisation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from x68gfx.palette import PALETTE_SIZE, CgType, Palette, pack_rgb, unpack_rgb

MAX_ENTRIES = 512
MIN_ENTRIES = 2
TRANSPARENT_INDEX = 0


@dataclass(frozen=True)
class Yuv:
    """A colour in YUV space, computed from 8-bit RGB."""

    y: float
    u: float
    v: float


@dataclass
class QuantizeResult:
    """Pixels after colour reduction and the 16-bit colours that were produced."""

    pixels: list[int]
    colors: list[int]
    max_color: tuple[int, int, int] | None = field(default=None)


def _align8(value: int) -> int:
    return (value + 7) // 8 * 8


def rgb_to_yuv(red: float, green: float, blue: float) -> Yuv:
    """Convert 8-bit RGB components to YUV."""
    return Yuv(
        0.29891 * red + 0.58661 * green + 0.11448 * blue,
        -0.16874 * red - 0.33126 * green + 0.50000 * blue,
        0.50000 * red - 0.41869 * green - 0.08131 * blue,
    )


def _to_byte(value: float) -> int:
    value += 0.49
    return int(min(255.0, max(0.0, value)))


def yuv_to_rgb(y: float, u: float, v: float) -> tuple[int, int, int]:
    """Convert YUV back to 8-bit RGB, rounding and clamping to 0..255."""
    return (
        _to_byte(y + 1.40200 * v),
        _to_byte(y - 0.34414 * u - 0.71414 * v),
        _to_byte(y + 1.77200 * u),
    )


def _split(samples: Sequence[Yuv], labels: list[int], base: int, divisions: int) -> None:
    if divisions < 1:
        return
    members = [i for i, label in enumerate(labels) if label == base]
    if not members:
        return

    first = samples[members[0]]
    min_y = max_y = total_y = first.y
    min_u = max_u = total_u = first.u
    min_v = max_v = total_v = first.v
    for i in members[1:]:
        s = samples[i]
        min_y, max_y = min(min_y, s.y), max(max_y, s.y)
        min_u, max_u = min(min_u, s.u), max(max_u, s.u)
        min_v, max_v = min(min_v, s.v), max(max_v, s.v)
        total_y += s.y
        total_u += s.u
        total_v += s.v

    count = len(members)
    low = base
    high = base + (1 << (divisions - 1))

    range_y, range_u, range_v = max_y - min_y, max_u - min_u, max_v - min_v
    if range_y > range_u:
        axis = "y" if range_y > range_v else "v"
    else:
        axis = "u" if range_u > range_v else "v"
    average = {"y": total_y, "u": total_u, "v": total_v}[axis] / count

    for i in members:
        labels[i] = low if getattr(samples[i], axis) < average else high

    _split(samples, labels, low, divisions - 1)
    _split(samples, labels, high, divisions - 1)


def median_cut_partition(samples: Sequence[Yuv], divisions: int) -> list[int]:
    """Split samples into up to ``2 ** divisions`` clusters and return each sample's cluster.

    Every group is cut at the mean of its widest YUV axis; values below the
    mean keep the group's number, the rest move to the upper half.
    """
    labels = [0] * len(samples)
    _split(samples, labels, 0, divisions)
    return labels


def median_cut(
    pixels: Sequence[int],
    width: int,
    height: int,
    palette: Palette,
    entries: int = 16,
    transparent: int | None = None,
) -> QuantizeResult:
    """Reduce a palette image to ``entries`` colours by median cut.

    ``pixels`` holds rows of ``width`` rounded up to a multiple of 8. The
    reduced colours are written to the start of ``palette`` when they fit in
    it. A pixel equal to ``transparent`` counts as black, and with a
    transparent colour set every pixel that ends up black becomes index 0.
    """
    if palette.locked:
        raise ValueError("the palette cannot be changed in 65536-colour mode")
    if not MIN_ENTRIES <= entries <= MAX_ENTRIES:
        raise ValueError(f"entries must be within {MIN_ENTRIES}..{MAX_ENTRIES}, not {entries}")

    bits_per_pixel = 1 if entries <= 2 else 4 if entries <= 16 else 8 if entries <= 256 else 16
    stride = _align8(width)
    count = stride * height
    if len(pixels) < count:
        raise ValueError(f"{count} pixels are needed, {len(pixels)} given")
    if transparent is not None and not 0 <= transparent < PALETTE_SIZE:
        transparent = None

    samples = []
    for pixel in pixels[:count]:
        if transparent is not None and pixel == transparent:
            samples.append(rgb_to_yuv(0, 0, 0))
        else:
            r, g, b = unpack_rgb(palette[pixel & 0xFF])
            samples.append(rgb_to_yuv(r * 8, g * 8, b * 8))

    labels = median_cut_partition(samples, (entries >> 1).bit_length())

    n_colors = entries if bits_per_pixel > 8 else entries + entries % 2
    sums = [[0.0, 0.0, 0.0, 0] for _ in range(n_colors)]
    for sample, label in zip(samples, labels):
        acc = sums[label]
        acc[0] += sample.y
        acc[1] += sample.u
        acc[2] += sample.v
        acc[3] += 1

    table = [
        yuv_to_rgb(acc[0] / acc[3], acc[1] / acc[3], acc[2] / acc[3]) if acc[3] else (0, 0, 0)
        for acc in sums
    ]
    colors = [pack_rgb(r >> 3, g >> 3, b >> 3) for r, g, b in table]

    if n_colors <= PALETTE_SIZE:
        for i, color in enumerate(colors):
            palette[i] = color

    if bits_per_pixel == 16:
        out = [colors[label] for label in labels]
    elif transparent is None:
        out = list(labels)
    else:
        out = [TRANSPARENT_INDEX if table[label] == (0, 0, 0) else label for label in labels]
    return QuantizeResult(out, colors)


def uniform_levels(maximum: int, steps: int) -> list[int]:
    """Return ``steps`` quantisation levels: 1 followed by ``maximum // (steps - j)``."""
    if steps < 1:
        raise ValueError("at least one level is needed")
    return [1] + [maximum // (steps - j) for j in range(1, steps)]


def _nearest(levels: Sequence[int], value: int, start: int) -> int:
    best = abs(levels[0] - value)
    chosen = start
    for m in range(1, len(levels)):
        distance = abs(levels[m] - value)
        if best > distance:
            best = distance
            chosen = m
    return levels[chosen]


def subtractive_color(
    pixels: Sequence[int],
    width: int,
    height: int,
    stride: int,
    palette: Palette,
    kind: CgType | int = CgType.NORMAL,
    transparent: int | None = None,
) -> QuantizeResult:
    """Quantise a palette image uniformly and rewrite the palette with the new colours.

    Text images use 2 levels per component, grayscale text images 8 gray
    levels, and all other kinds 3 levels per component. Rows are ``stride``
    pixels apart; columns from ``width`` to ``stride`` come out as 0.
    """
    if palette.locked:
        raise ValueError("the palette cannot be changed in 65536-colour mode")
    count = stride * height
    if len(pixels) < count:
        raise ValueError(f"{count} pixels are needed, {len(pixels)} given")
    if width > stride:
        raise ValueError("width must not exceed stride")

    kind = int(kind)
    gray = kind == CgType.TEXT_GRAY
    if kind == CgType.TEXT:
        steps, table_size = 2, 8
    elif gray:
        steps, table_size = 8, 8
    else:
        steps, table_size = 3, 27 + 2

    table = [0] * PALETTE_SIZE
    if gray:
        max_color = (255, 255, 255)
        levels = [4 * i for i in range(table_size)]
        levels_r = levels_g = levels_b = levels
        for i, level in enumerate(levels):
            table[i] = pack_rgb(level, level, level)
    else:
        max_r = max_g = max_b = 0
        for y in range(height):
            for pixel in pixels[y * stride:y * stride + width]:
                if transparent is not None and pixel == transparent:
                    continue
                r, g, b = unpack_rgb(palette[pixel & 0xFF])
                max_r, max_g, max_b = max(max_r, r), max(max_g, g), max(max_b, b)
        max_color = (max_r, max_g, max_b)
        levels_r = uniform_levels(max_r, steps)
        levels_g = uniform_levels(max_g, steps)
        levels_b = uniform_levels(max_b, steps)
        m = 1
        for r in levels_r:
            for g in levels_g:
                for b in levels_b:
                    table[m] = pack_rgb(r, g, b)
                    m += 1

    out: list[int] = []
    for y in range(height):
        row = pixels[y * stride:y * stride + width]
        for pixel in row:
            index = pixel & 0xFF
            if transparent is not None and index == transparent:
                out.append(TRANSPARENT_INDEX)
                continue
            r, g, b = unpack_rgb(palette[index])
            if gray:
                level = ((3 * r + 6 * g + b) // 4) & 0x1F
                r = g = b = _nearest(levels_r, level, 1)
            else:
                r = _nearest(levels_r, r, 0)
                g = _nearest(levels_g, g, 0)
                b = _nearest(levels_b, b, 0)
            color = pack_rgb(r, g, b)
            for i in range(table_size):
                if table[i] == color:
                    index = i
                    break
            out.append(index)
        out.extend([0] * (stride - width))

    for j in range(PALETTE_SIZE):
        palette[j] = table[j] if j <= table_size else 0

    return QuantizeResult(out, table[:table_size + 1], max_color)