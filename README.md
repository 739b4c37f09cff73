# tftkit

tftkit is a software model of a small ST7735S RGB565 TFT panel and the pieces
around it. It covers:

- `tftkit.display.Display`: the panel, driven through a bus object with
  `write_command(cmd)` and `write_data(data)`. `RecordingBus` is such a bus
  that keeps every transaction. The display can draw into a frame buffer that
  `draw_finish()` sends to the bus in one go.
- `tftkit.graphics`: lines, rectangles, circles, rounded rectangles, arrows and
  text (`draw_char`, `draw_string`, `draw_code`) in four directions.
- `tftkit.fontx`: FONTX2 bitmap fonts (`FontxFontSet`, `FontxFile`, `Glyph`) and
  helpers that turn glyphs into banded bitmaps or text pictures.
- `tftkit.colors`: `rgb565(r, g, b)` and the named colours in `Color`.
- `tftkit.scanline`: `ScanlineDecoder`, which unfilters decompressed PNG image
  data (all colour types, bit depths and Adam7 interlacing) and reports RGBA
  pixels to a callback, with palette, transparency and gamma support.
- `tftkit.bmpfile`: `read_bmp_headers(stream)` for the file and DIB headers of a
  BMP file.
- `tftkit.scaling`: scale selection for JPEG images (`get_scale`,
  `scaled_size`) and `JpegCanvas`, which collects decoded RGB888 blocks as
  RGB565 pixels.
- `tftkit.axp192.AXP192`: register-level control of an AXP192 power chip over
  any object with `read_byte_data(address, register)` and
  `write_byte_data(address, register, value)`.
- `tftkit.demo_shapes` and `tftkit.demo_text`: demonstration screens.

## Install

```
pip install .
```

The package needs only the Python standard library. To install pytest for the
tests:

```
pip install .[test]
```

## Drawing

```python
from tftkit.colors import Color, rgb565
from tftkit.display import Display, RecordingBus
from tftkit import graphics

bus = RecordingBus()
display = Display(bus, 128, 160)
display.init()
display.fill_screen(Color.BLACK)
graphics.draw_circle(display, 64, 80, 30, Color.GRAY)
graphics.draw_line(display, 0, 0, 127, 159, rgb565(255, 0, 0))
display.draw_finish()

print(bus.commands[-3:])      # [0x2A, 0x2B, 0x2C]: window, then memory write
print(display.frame_buffer[0])
```

`init()` pauses between panel commands with the `delay` callable given to
`Display` (by default `time.sleep`); pass `delay=lambda seconds: None` to skip
the pauses. With `frame_buffer=False` every primitive writes straight to the bus.

## Text with FONTX fonts

```python
from tftkit.display import Direction
from tftkit.fontx import FontxFontSet

with FontxFontSet("fonts/ILGH16XB.FNT") as font:
    graphics.draw_string(display, font, 0, 15, "hello", Color.RED)
    display.font_direction = Direction.DIRECTION90
    display.set_font_underline(Color.BLUE)
    graphics.draw_string(display, font, 100, 0, "down", Color.WHITE)
```

`draw_string` returns the coordinate where the next character would start.
Only single-byte codes below 0x80 are looked up, and only in fonts of the
single-byte (ANK) kind.

## PNG scanlines

```python
from tftkit.scanline import Ihdr, ScanlineDecoder

pixels = []
decoder = ScanlineDecoder(
    Ihdr(width=2, height=1, depth=8, color_type=2),
    draw=lambda x, y, w, h, rgba: pixels.append((x, y, rgba)),
)
decoder.feed(bytes([0, 255, 0, 0, 0, 0, 255]))  # filter byte, then two RGB pixels
# pixels == [(0, 0, (255, 0, 0, 255)), (1, 0, (0, 0, 255, 255))]
```

Set `decoder.palette`, `decoder.trans_palette` and `decoder.gamma_table`
(see `build_gamma_table`) before feeding data for indexed, transparent or
gamma-corrected images.

## Demonstration screens

Each demo draws onto a display and returns how long it took in milliseconds:

```python
from tftkit import demo_shapes, demo_text

display = Display(RecordingBus(), 128, 160, delay=lambda seconds: None)
display.init()
demo_shapes.circle_test(display)
with FontxFontSet("fonts/ILGH16XB.FNT") as font:
    demo_text.scroll_test(display, font)
```

## What the package does not do

- It does not read PNG files: there is no chunk parser, CRC check or zlib
  decompression. `ScanlineDecoder` works on data that is already decompressed.
- It does not decode JPEG data; `tftkit.scaling` only chooses a scale and
  collects pixel blocks handed to it.
- It does not render BMP or PNG files onto the display; `tftkit.bmpfile` reads
  headers only.
- It has no command-line program; the demos are called from Python.
- It talks to no real hardware: the display and the AXP192 work through bus
  objects that the caller supplies.