"""Graphic palette model: 16-bit GRBI colours, palette blocks and image palette slots."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, MutableSequence, Sequence
from dataclasses import dataclass
from enum import IntEnum

PALETTE_SIZE = 256
BLOCK_SIZE = 16
SLOT_COUNT = 16
UNASSIGNED_SLOT = 0xFF
COMMON_COLOR_OFFSET = 0xF0
TEXT_PALETTE_OFFSET = 8

_COMPONENT_MAX = 31


def pack_rgb(red: int, green: int, blue: int) -> int:
    """Pack 5-bit red, green and blue components into a 16-bit GRBI colour."""
    for name, value in (("red", red), ("green", green), ("blue", blue)):
        if not 0 <= value <= _COMPONENT_MAX:
            raise ValueError(f"{name} component {value} is outside 0..{_COMPONENT_MAX}")
    return (green << 11) | (red << 6) | (blue << 1)


def unpack_rgb(color: int) -> tuple[int, int, int]:
    """Split a 16-bit GRBI colour into its (red, green, blue) 5-bit components."""
    color &= 0xFFFF
    return (color >> 6) & 0x1F, (color >> 11) & 0x1F, (color >> 1) & 0x1F


def rgb24_to_16(value: int) -> int:
    """Convert a 0xRRGGBB colour to the 16-bit GRBI format."""
    red = (value >> 16) & 0xFF
    green = (value >> 8) & 0xFF
    blue = value & 0xFF
    return pack_rgb(red >> 3, green >> 3, blue >> 3)


def reorder_bits(value: int, order: Sequence[int]) -> int:
    """Move source bit ``i`` of ``value`` to bit ``order[i]`` of the result."""
    if len(order) > 16:
        raise ValueError("at most 16 source bits can be reordered")
    value &= 0xFFFF
    result = 0
    for source_bit, target_bit in enumerate(order):
        if not 0 <= target_bit < 16:
            raise ValueError(f"target bit {target_bit} is outside 0..15")
        if (value >> source_bit) & 1:
            result |= 1 << target_bit
    return result


class CgType(IntEnum):
    """How an image's colours are mapped onto the hardware palettes."""

    NORMAL = 0
    SPRITE = 1
    TEXT = 2
    TEXT_GRAY = 3
    SPRITE_WIDE = 4


@dataclass
class CgEntry:
    """One entry of the graphic file list."""

    file_name: str
    kind: CgType = CgType.NORMAL
    trans_pal: int = 0


_COMMON_COLORS = (
    pack_rgb(0, 0, 0),
    pack_rgb(1, 1, 1),
    rgb24_to_16(0xB2B2B2),
    rgb24_to_16(0xE5E5E5),
    rgb24_to_16(0xF3F3F3),
    rgb24_to_16(0xFFFFFF),
    rgb24_to_16(0x207546),
    pack_rgb(15, 0, 0),
    pack_rgb(15, 0, 15),
    pack_rgb(0, 15, 15),
    pack_rgb(30, 1, 1),
    pack_rgb(0, 31, 0),
    pack_rgb(31, 31, 0),
    pack_rgb(1, 1, 21),
    pack_rgb(31, 18, 26),
    pack_rgb(9, 22, 31),
)


class Palette:
    """The 256-entry graphic palette.

    When ``locked`` is true (65536-colour mode) palette writes are ignored,
    except for direct block rotation.
    """

    def __init__(self, colors: Iterable[int] | None = None, locked: bool = False) -> None:
        self._colors = [0] * PALETTE_SIZE
        self.locked = locked
        if colors is not None:
            values = [c & 0xFFFF for c in colors]
            if len(values) != PALETTE_SIZE:
                raise ValueError(f"a palette holds exactly {PALETTE_SIZE} colours")
            self._colors = values

    def __len__(self) -> int:
        return PALETTE_SIZE

    def __iter__(self) -> Iterator[int]:
        return iter(self._colors)

    def __getitem__(self, index: int) -> int:
        return self._colors[index]

    def __setitem__(self, index: int, color: int) -> None:
        if not self.locked:
            self._colors[index] = color & 0xFFFF

    def snapshot(self) -> list[int]:
        """Return a copy of all 256 colours."""
        return list(self._colors)

    def restore(self, colors: Sequence[int]) -> None:
        """Write back a saved set of 256 colours."""
        if len(colors) != PALETTE_SIZE:
            raise ValueError(f"a palette holds exactly {PALETTE_SIZE} colours")
        if self.locked:
            return
        self._colors = [c & 0xFFFF for c in colors]

    def rotate_block(self, block: int, count: int) -> None:
        """Rotate the 16 colours of ``block`` so entry i moves to (i + count) % 16."""
        if not 0 <= block < PALETTE_SIZE // BLOCK_SIZE:
            return
        start = block * BLOCK_SIZE
        old = self._colors[start:start + BLOCK_SIZE]
        for i, color in enumerate(old):
            self._colors[start + (i + count) % BLOCK_SIZE] = color

    def halve(self) -> None:
        """Halve the brightness of every colour."""
        if self.locked:
            return
        self._colors = [
            pack_rgb(r // 2, g // 2, b // 2)
            for r, g, b in map(unpack_rgb, self._colors)
        ]

    def clear(self) -> None:
        """Set entries 0 to 254 to black; the last entry is kept."""
        if self.locked:
            return
        black = pack_rgb(0, 0, 0)
        for i in range(PALETTE_SIZE - 1):
            self._colors[i] = black

    def set_common_colors(self) -> None:
        """Install the 16 shared colours at entries 0xF0 to 0xFF."""
        if self.locked:
            return
        for i, color in enumerate(_COMMON_COLORS):
            self._colors[COMMON_COLOR_OFFSET + i] = color


class PaletteTable:
    """Maps image numbers to their 16-colour palette block."""

    def __init__(self) -> None:
        self._slots = [UNASSIGNED_SLOT] * SLOT_COUNT

    def assign(self, image: int) -> int:
        """Give ``image`` the palette block of the same number and return it."""
        if not 0 <= image < SLOT_COUNT:
            raise ValueError(f"image {image} has no palette slot (0..{SLOT_COUNT - 1})")
        self._slots[image] = image
        return image

    def lookup(self, image: int) -> int:
        """Return the palette block of ``image``; 0 for images beyond the table."""
        if not 0 <= image < SLOT_COUNT:
            return 0
        return self._slots[image]


def apply_image_palette(
    palette: Palette,
    text_palette: MutableSequence[int],
    colors: Sequence[int],
    kind: CgType | int,
    slot: int,
) -> int:
    """Load an image's saved colours into the palettes and return the pixel offset."""
    if palette.locked:
        return 0
    kind = int(kind)
    if kind in (CgType.SPRITE, CgType.SPRITE_WIDE):
        offset = slot * BLOCK_SIZE
        if not 0 <= offset <= PALETTE_SIZE - BLOCK_SIZE:
            raise ValueError(f"palette slot {slot} is not assigned")
        for i in range(BLOCK_SIZE):
            palette[offset + i] = colors[i]
        return offset
    if kind in (CgType.TEXT, CgType.TEXT_GRAY):
        for i in range(8):
            text_palette[TEXT_PALETTE_OFFSET + i] = colors[i + 1] & 0xFFFF
        return TEXT_PALETTE_OFFSET
    palette.restore(list(colors[:PALETTE_SIZE]))
    return 0