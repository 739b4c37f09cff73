"""Demonstration screens that draw text and arrows with FONTX fonts."""

from __future__ import annotations

import collections
import logging

from .colors import Color
from .demo_shapes import _pause, _timed
from .display import Direction, Display
from .fontx import FontxFontSet
from .graphics import draw_arrow, draw_code, draw_string

log = logging.getLogger(__name__)

_SAMPLE_TEXT = " esp32c3"
_SCROLL_LINES = 20


def _font_size(font: FontxFontSet) -> tuple[int, int]:
    glyph = font.get_glyph(0)
    if glyph is None:
        raise ValueError("font has no glyph for code 0")
    if glyph.width == 0 or glyph.height == 0:
        raise ValueError("font has an empty glyph size")
    log.debug("fontWidth=%d fontHeight=%d", glyph.width, glyph.height)
    return glyph.width, glyph.height


@_timed
def arrow_test(display: Display, font: FontxFontSet) -> None:
    """Draw an arrow into each corner, labelled with the corner's coordinates."""
    _, font_height = _font_size(font)
    display.fill_screen(Color.BLACK)
    display.font_direction = Direction.DIRECTION0

    draw_arrow(display, 10, 10, 0, 0, 5, Color.RED)
    draw_string(display, font, 0, 30, "0,0", Color.RED)

    draw_arrow(display, 69, 10, 79, 0, 5, Color.GREEN)
    draw_string(display, font, 45, 30, "79,0", Color.GREEN)

    draw_arrow(display, 10, 149, 0, 159, 5, Color.GRAY)
    draw_string(display, font, 0, 140, "0,159", Color.GRAY)

    draw_arrow(display, 69, 149, 79, 159, 5, Color.BLUE)
    draw_string(display, font, 30, 140 - font_height, "79,159", Color.BLUE)
    display.draw_finish()


def _text_block(
    display: Display,
    font: FontxFontSet,
    positions: list[tuple[int, int]],
    color: int,
    fill: int,
) -> None:
    draw_string(display, font, *positions[0], _SAMPLE_TEXT, color)
    display.set_font_underline(color)
    draw_string(display, font, *positions[1], _SAMPLE_TEXT, color)
    display.unset_font_underline()

    display.set_font_fill(fill)
    draw_string(display, font, *positions[2], _SAMPLE_TEXT, color)
    display.set_font_underline(color)
    draw_string(display, font, *positions[3], _SAMPLE_TEXT, color)


@_timed
def horizontal_test(display: Display, font: FontxFontSet) -> None:
    """Draw plain, underlined and filled text left to right and upside down."""
    _, fh = _font_size(font)
    width, height = display.width, display.height
    display.fill_screen(Color.BLACK)

    display.font_direction = Direction.DIRECTION0
    _text_block(
        display, font, [(0, fh * n - 1) for n in range(1, 5)], Color.RED, Color.GREEN
    )
    display.unset_font_fill()
    display.unset_font_underline()

    display.font_direction = Direction.DIRECTION180
    _text_block(
        display,
        font,
        [(width - 1, height - fh * n - 1) for n in range(1, 5)],
        Color.BLUE,
        Color.YELLOW,
    )
    display.draw_finish()
    display.unset_font_fill()
    display.unset_font_underline()


@_timed
def vertical_test(display: Display, font: FontxFontSet) -> None:
    """Draw plain, underlined and filled text top to bottom and bottom to top."""
    _, fh = _font_size(font)
    width, height = display.width, display.height
    display.fill_screen(Color.BLACK)

    display.font_direction = Direction.DIRECTION90
    _text_block(
        display, font, [(width - fh * n, 0) for n in range(1, 5)], Color.RED, Color.GREEN
    )
    display.unset_font_fill()
    display.unset_font_underline()

    display.font_direction = Direction.DIRECTION270
    _text_block(
        display,
        font,
        [(fh * n - 1, height - 1) for n in range(1, 5)],
        Color.BLUE,
        Color.YELLOW,
    )
    display.draw_finish()
    display.unset_font_fill()
    display.unset_font_underline()


@_timed
def code_test(display: Display, font: FontxFontSet, start: int, end: int) -> None:
    """Draw every character from ``start`` to ``end`` in columns, rotated by 90 degrees."""
    if not 0 <= start <= 0xFF:
        raise ValueError(f"start code out of range: {start}")
    fw, fh = _font_size(font)
    width, height = display.width, display.height
    columns = (width // fw) & 0xFF
    per_column = (height // fh) & 0xFF

    display.fill_screen(Color.BLACK)
    display.font_direction = Direction.DIRECTION90
    code = start
    for column in range(columns):
        xpos = width - fh * (column + 1) - 1
        ypos = 0
        if fw * per_column < height:
            ypos = (height - fw * per_column) // 2 - 1
        for _ in range(per_column):
            ypos = draw_code(display, font, xpos, ypos, code, Color.CYAN)
            if code == 0xFF:
                break
            code += 1
            if code > end:
                break
        if code == 0xFF or code > end:
            break
    display.draw_finish()


@_timed
def scroll_test(display: Display, font: FontxFontSet) -> None:
    """Print numbered lines under a title, scrolling up once the screen is full."""
    _, fh = _font_size(font)
    width, height = display.width, display.height
    lines = (height - fh) // fh
    if lines < 1:
        raise ValueError(f"screen too short to scroll {fh}-pixel text: {height}")

    display.font_direction = Direction.DIRECTION0
    display.fill_screen(Color.BLACK)
    draw_string(display, font, 0, fh - 1, "Scroll", Color.RED)

    saved: collections.deque[tuple[str, int]] = collections.deque(maxlen=lines)
    for i in range(_SCROLL_LINES):
        text = f"Line {i}"
        full = len(saved) == lines
        saved.append((text, Color.CYAN))
        if full:
            for j, (line_text, color) in enumerate(saved):
                display.draw_fill_rect(0, fh * (j + 1), width - 1, fh * (j + 2) - 1, Color.BLACK)
                draw_string(display, font, 0, fh * (j + 2) - 1, line_text, color)
        else:
            row = len(saved) - 1
            draw_string(display, font, 0, fh * (row + 2) - 1, text, Color.CYAN)
        display.draw_finish()
        _pause(display, 25)