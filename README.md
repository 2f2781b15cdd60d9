# x68gfx

Pure-Python helpers for programs that draw on an X68000-style graphics
screen. The screen is made of 512x512 planes of 16-bit pixels. It uses a
256-entry palette of 16-bit GRBI colour words, where green, red and blue
each take 5 bits. The package also handles sprite and tile pattern data.
Everything works on plain Python lists. You can use it in converters,
tools and tests.

## Install

```
pip install .
pip install .[test]   # adds pytest
```

## Modules

### `x68gfx.palette`

**Colour words**

- `pack_rgb(red, green, blue)` packs three 5-bit components into a colour word. It raises `ValueError` when a component is outside 0..31.
- `unpack_rgb(color)` splits a colour word back into its components.
- `rgb24_to_16(value)` converts a `0xRRGGBB` colour.
- `reorder_bits(value, order)` moves bit `i` of `value` to bit `order[i]`.

**`Palette`**

`Palette` holds 256 colours and supports indexing and iteration. Its methods:

- `snapshot()`
- `restore(colors)`
- `rotate_block(block, count)`
- `halve()`
- `clear()`, which blackens entries 0 to 254.
- `set_common_colors()`, which writes the 16 shared colours at 0xF0 to 0xFF.

A palette created with `locked=True` ignores writes, as in 65536-colour mode. Only `rotate_block` still changes it.

**Image palettes**

- `CgType` names how an image's colours are mapped. Its values are `NORMAL`, `SPRITE`, `TEXT`, `TEXT_GRAY` and `SPRITE_WIDE`.
- `CgEntry` describes one graphic file entry: its file name, kind and transparent index.
- `PaletteTable.assign(image)` and `PaletteTable.lookup(image)` map image numbers 0..15 to 16-colour palette blocks.
- `apply_image_palette(palette, text_palette, colors, kind, slot)` loads an image's saved colours according to its kind and returns the pixel offset to use:
  - sprite kinds write one 16-colour block;
  - text kinds write text palette entries 8..15;
  - other kinds replace the whole palette.

### `x68gfx.clipping`

- `clip_width(pos_x, width, mode, align, area)` turns an anchor point into the left edge of the image. It also returns the visible range, as a `ClipSpan` with `start`, `low` and `high`.
- `clip_height(pos_y, height, mode, align, area)` does the same for the top edge.
- `clip_rect(...)` does both.
- Alignment uses `HAlign` (`LEFT`, `MID`, `RIGHT`) and `VAlign` (`TOP`, `CENTER`, `BOTTOM`).
- The screen geometry is a `DrawArea`.
- An image that cannot be visible raises `OutOfAreaError`, which is a `ValueError`. The error carries the axis, the position and the bounds.
- `zoom_factor(step)` and `zoom_scale(value, step)` give the fixed zoom steps -9..9, from 0.52x to 1.90x. Steps outside that range are clamped.
- `scale_1p25(value)` multiplies by 1.25, rounding down.

### `x68gfx.quantize`

**Conversions**

- `rgb_to_yuv(red, green, blue)` returns a `Yuv`.
- `yuv_to_rgb(y, u, v)` converts back.

**Median cut**

- `median_cut_partition(samples, divisions)` splits YUV samples into up to `2 ** divisions` clusters.
- `median_cut(pixels, width, height, palette, entries, transparent)` reduces a palette image to 2..512 colours. It writes the new colours to the start of the palette.

**Uniform quantisation**

- `uniform_levels(maximum, steps)` returns the levels used for each colour component.
- `subtractive_color(pixels, width, height, stride, palette, kind, transparent)` quantises uniformly and rewrites the palette. The number of levels depends on the kind:
  - text images: 2 levels per component;
  - grayscale text: 8 gray levels;
  - everything else: 3 levels per component.

Both reductions return a `QuantizeResult` with the new `pixels` and `colors`. From `subtractive_color` it also carries `max_color`. Both raise `ValueError` on a locked palette.

### `x68gfx.imagebuf`

Image buffers are flat lists. Rows are `align8(width)` pixels apart.

**Layout conversion**

- `apic_to_mem(src, width, height, stride)` copies a picture laid out 512 pixels per row into a compact buffer.
- `vertical_strips(src, width, height, strip_width)` rearranges an image into vertical strips, for horizontal scrolling.
- `offset_palette(buf, width, height, offset)` adds a palette offset to every visible pixel.

**Scaling and copying**

- `stretch_to_mem(dst, dst_w, dst_h, src, src_w, src_h)` draws a source sampled every 1.25 pixels. Zero pixels are transparent.
- `copy_to_mem(...)` copies an equally sized buffer.

**Pattern decoding**

- `decode_sprite_sheet(data, palette)` decodes 4-bit sprite patterns, 128 bytes per row, into rows of colours.
- `decode_stg_patterns(patterns, colors, attributes, background)` decodes tiled patterns with per-tile palette blocks. It returns a 256x512 image and the 32 palette blocks.
- `to_text_planes(image, width, height, offset)` splits a 16-colour image into four text bit planes of 16-pixel words.

### `x68gfx.vram`

`GraphicPlane` is an in-memory 512x512 screen. Writes outside it are dropped. Its methods:

- `pixel(x, y)` returns one pixel.
- `clear_area(x, w, y, h)` sets a rectangle to 0.
- `fill_area(x, w, y, h, value)` fills a rectangle with a byte value.
- `bitblt(source, dst_x, dst_y, src_x, src_y, width, height, mode, h_align, v_align)` copies a rectangle from another plane.
- `stretch(source, dst_x, dst_w, dst_y, dst_h, src_x, src_y)` draws another plane sampled every 1.25 pixels.
- `blit_image(image, width, height, dst_x, dst_y, mode, h_align, v_align, offset, opaque)` draws an image buffer.
- `zoom_image(..., zoom, offset, opaque)` draws an image buffer at a zoom step.
- `place_image(image, width, height, pos_x, pos_y, offset, opaque)` draws an image buffer at a position.

In every drawing call, zero pixels are transparent unless `opaque` is true.

## Examples

```python
from x68gfx.vram import GraphicPlane
from x68gfx.clipping import HAlign, VAlign

plane = GraphicPlane()
sprite = [1, 2, 3, 4, 5, 6, 7, 8] * 8           # 8x8 image, index 0 is transparent
plane.blit_image(sprite, 8, 8, 100, 100, 0, HAlign.MID, VAlign.CENTER, 0, False)
print(plane.pixel(96, 96))                      # 1
```

```python
from x68gfx.palette import Palette, pack_rgb, unpack_rgb

word = pack_rgb(31, 0, 0)
assert unpack_rgb(word) == (31, 0, 0)

palette = Palette()
palette[1] = pack_rgb(30, 20, 10)
palette.halve()
assert unpack_rgb(palette[1]) == (15, 10, 5)
```

## What it does not do

- It does not read or decode picture files. Pixel buffers must come from elsewhere.
- It does not touch real video hardware. Planes and palettes are Python objects only.
- It offers no keyboard, joystick or other input handling.
- It has no command-line program.

## Tests

```
pytest
```