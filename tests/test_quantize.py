import pytest

from x68gfx.palette import CgType, Palette, pack_rgb, unpack_rgb
from x68gfx.quantize import (
    QuantizeResult,
    Yuv,
    median_cut,
    median_cut_partition,
    rgb_to_yuv,
    subtractive_color,
    uniform_levels,
    yuv_to_rgb,
)

WHITE = pack_rgb(31, 31, 31)
BLACK = pack_rgb(0, 0, 0)
RED = pack_rgb(31, 0, 0)


def make_palette(**entries):
    palette = Palette()
    for key, color in entries.items():
        palette[int(key[1:])] = color
    return palette


def test_rgb_to_yuv_black_is_origin():
    assert rgb_to_yuv(0, 0, 0) == Yuv(0.0, 0.0, 0.0)


def test_rgb_to_yuv_gray_has_no_chroma():
    yuv = rgb_to_yuv(100, 100, 100)
    assert yuv.y == pytest.approx(100, abs=0.01)
    assert yuv.u == pytest.approx(0, abs=0.01)
    assert yuv.v == pytest.approx(0, abs=0.01)


@pytest.mark.parametrize("rgb", [(0, 0, 0), (255, 255, 255), (248, 0, 0), (10, 200, 30), (64, 128, 255)])
def test_yuv_round_trip(rgb):
    yuv = rgb_to_yuv(*rgb)
    back = yuv_to_rgb(yuv.y, yuv.u, yuv.v)
    assert all(abs(a - b) <= 1 for a, b in zip(back, rgb))


def test_yuv_to_rgb_clamps():
    assert yuv_to_rgb(400.0, 0.0, 0.0) == (255, 255, 255)
    assert yuv_to_rgb(-50.0, 0.0, 0.0) == (0, 0, 0)


def test_partition_without_divisions_keeps_one_cluster():
    samples = [rgb_to_yuv(v, v, v) for v in (0, 50, 100, 200)]
    assert median_cut_partition(samples, 0) == [0, 0, 0, 0]


def test_partition_empty():
    assert median_cut_partition([], 3) == []


def test_partition_splits_two_groups():
    samples = [rgb_to_yuv(0, 0, 0)] * 3 + [rgb_to_yuv(255, 255, 255)] * 3
    labels = median_cut_partition(samples, 1)
    assert set(labels) == {0, 1}
    assert len(set(labels[:3])) == 1
    assert len(set(labels[3:])) == 1
    assert labels[0] == 0


def test_partition_four_values_four_clusters():
    samples = [rgb_to_yuv(v, v, v) for v in (0, 80, 160, 240)]
    labels = median_cut_partition(samples, 2)
    assert sorted(labels) == sorted(set(labels))
    assert all(0 <= label < 4 for label in labels)


def test_uniform_levels_invariants():
    levels = uniform_levels(31, 3)
    assert len(levels) == 3
    assert levels[0] == 1
    assert levels[-1] == 31
    assert levels == sorted(levels)


def test_uniform_levels_rejects_zero_steps():
    with pytest.raises(ValueError):
        uniform_levels(31, 0)


def test_median_cut_two_colours():
    palette = make_palette(p1=WHITE, p2=BLACK)
    pixels = [1] * 4 + [2] * 4
    result = median_cut(pixels, 8, 1, palette, entries=2)
    assert isinstance(result, QuantizeResult)
    assert set(result.pixels) == {0, 1}
    assert len(set(result.pixels[:4])) == 1
    assert result.pixels[0] != result.pixels[4]
    assert unpack_rgb(palette[result.pixels[0]]) == (31, 31, 31)
    assert palette[result.pixels[4]] == BLACK
    assert result.colors[result.pixels[0]] == palette[result.pixels[0]]


def test_median_cut_transparent_becomes_index_zero():
    palette = make_palette(p1=WHITE, p3=RED)
    pixels = [1] * 4 + [3] * 4
    result = median_cut(pixels, 8, 1, palette, entries=2, transparent=3)
    assert result.pixels[4:] == [0, 0, 0, 0]
    assert unpack_rgb(palette[result.pixels[0]]) == (31, 31, 31)


def test_median_cut_many_entries_gives_colours():
    palette = make_palette(p1=WHITE, p2=BLACK)
    before = palette.snapshot()
    pixels = [1] * 4 + [2] * 4
    result = median_cut(pixels, 8, 1, palette, entries=300)
    assert palette.snapshot() == before
    assert set(result.pixels) == {WHITE, BLACK}
    assert len(result.colors) == 300


@pytest.mark.parametrize("entries", [1, 513])
def test_median_cut_rejects_entries(entries):
    with pytest.raises(ValueError):
        median_cut([0] * 8, 8, 1, Palette(), entries=entries)


def test_median_cut_rejects_locked_palette():
    with pytest.raises(ValueError):
        median_cut([0] * 8, 8, 1, Palette(locked=True))


def test_median_cut_rejects_short_buffer():
    with pytest.raises(ValueError):
        median_cut([0] * 7, 5, 1, Palette())


def test_subtractive_sprite_maps_to_nearest_levels():
    palette = make_palette(p1=WHITE, p2=BLACK)
    pixels = [1, 2, 1, 2, 0, 0, 0, 0]
    result = subtractive_color(pixels, 4, 1, 8, palette, CgType.SPRITE)
    assert result.max_color == (31, 31, 31)
    assert palette[result.pixels[0]] == WHITE
    assert palette[result.pixels[1]] == pack_rgb(1, 1, 1)
    assert result.pixels[4:] == [0, 0, 0, 0]
    assert all(0 <= p < 29 for p in result.pixels)


def test_subtractive_transparent_pixel():
    palette = make_palette(p1=WHITE, p5=RED)
    pixels = [5, 1, 5, 1, 0, 0, 0, 0]
    result = subtractive_color(pixels, 4, 1, 8, palette, CgType.SPRITE, transparent=5)
    assert result.pixels[0] == 0
    assert result.pixels[2] == 0
    assert result.max_color == (31, 31, 31)


def test_subtractive_gray_palette_table():
    palette = make_palette(p1=WHITE, p2=BLACK)
    result = subtractive_color([1, 2, 0, 0, 0, 0, 0, 0], 2, 1, 8, palette, CgType.TEXT_GRAY)
    assert result.max_color == (255, 255, 255)
    assert [unpack_rgb(palette[i]) for i in range(8)] == [(4 * i,) * 3 for i in range(8)]
    assert all(palette[i] == 0 for i in range(9, 256))
    assert result.pixels[2:] == [0] * 6
    assert all(0 <= p < 8 for p in result.pixels[:2])


def test_subtractive_text_keeps_pixel_count():
    palette = make_palette(p1=WHITE, p2=RED)
    pixels = [1, 2, 1, 2, 1, 2, 1, 2] * 2
    result = subtractive_color(pixels, 8, 2, 8, palette, CgType.TEXT)
    assert len(result.pixels) == 16
    assert result.pixels[:8] == result.pixels[8:]


def test_subtractive_rejects_locked_palette():
    with pytest.raises(ValueError):
        subtractive_color([0] * 8, 8, 1, 8, Palette(locked=True))


def test_subtractive_rejects_short_buffer():
    with pytest.raises(ValueError):
        subtractive_color([0] * 4, 8, 1, 8, Palette())