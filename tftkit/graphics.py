"""Shapes and text drawn onto a :class:`~tftkit.display.Display`."""

from __future__ import annotations

import math
from typing import Union

from .display import Direction, Display
from .fontx import FontxFontSet


def _u16(value: float) -> int:
    return int(value) & 0xFFFF


def draw_line(display: Display, x1: int, y1: int, x2: int, y2: int, color: int) -> None:
    """Draw a straight line between two points, both ends included."""
    x1, y1, x2, y2 = _u16(x1), _u16(y1), _u16(x2), _u16(y2)
    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x2 > x1 else -1
    sy = 1 if y2 > y1 else -1

    if dx > dy:
        err = -dx
        for _ in range(dx + 1):
            display.draw_pixel(x1, y1, color)
            x1 += sx
            err += 2 * dy
            if err >= 0:
                y1 += sy
                err -= 2 * dx
    else:
        err = -dy
        for _ in range(dy + 1):
            display.draw_pixel(x1, y1, color)
            y1 += sy
            err += 2 * dx
            if err >= 0:
                x1 += sx
                err -= 2 * dy


def draw_rect(display: Display, x1: int, y1: int, x2: int, y2: int, color: int) -> None:
    """Draw the outline of a rectangle between two corners."""
    draw_line(display, x1, y1, x2, y1, color)
    draw_line(display, x2, y1, x2, y2, color)
    draw_line(display, x2, y2, x1, y2, color)
    draw_line(display, x1, y2, x1, y1, color)


def draw_circle(display: Display, x0: int, y0: int, r: int, color: int) -> None:
    """Draw the outline of a circle of radius ``r`` around a centre."""
    x0, y0, r = _u16(x0), _u16(y0), _u16(r)
    x = 0
    y = -r
    err = 2 - 2 * r
    while True:
        display.draw_pixel(x0 - x, y0 + y, color)
        display.draw_pixel(x0 - y, y0 - x, color)
        display.draw_pixel(x0 + x, y0 - y, color)
        display.draw_pixel(x0 + y, y0 + x, color)
        old_err = err
        if old_err <= x:
            x += 1
            err += x * 2 + 1
        if old_err > y or err > x:
            y += 1
            err += y * 2 + 1
        if y >= 0:
            break


def draw_fill_circle(display: Display, x0: int, y0: int, r: int, color: int) -> None:
    """Draw a filled circle of radius ``r`` around a centre."""
    x0, y0, r = _u16(x0), _u16(y0), _u16(r)
    x = 0
    y = -r
    err = 2 - 2 * r
    change_x = True
    while True:
        if change_x:
            draw_line(display, x0 - x, y0 - y, x0 - x, y0 + y, color)
            draw_line(display, x0 + x, y0 - y, x0 + x, y0 + y, color)
        old_err = err
        change_x = old_err <= x
        if change_x:
            x += 1
            err += x * 2 + 1
        if old_err > y or err > x:
            y += 1
            err += y * 2 + 1
        if y > 0:
            break


def draw_round_rect(
    display: Display, x1: int, y1: int, x2: int, y2: int, r: int, color: int
) -> None:
    """Draw a rectangle outline with corners rounded by radius ``r``.

    Nothing is drawn when the rectangle is narrower or shorter than ``r``.
    """
    x1, y1, x2, y2, r = _u16(x1), _u16(y1), _u16(x2), _u16(y2), _u16(r)
    if x1 > x2:
        x1, x2 = x2, x1
    if y1 > y2:
        y1, y2 = y2, y1
    if x2 - x1 < r or y2 - y1 < r:
        return

    x = 0
    y = -r
    err = 2 - 2 * r
    while True:
        if x:
            display.draw_pixel(x1 + r - x, y1 + r + y, color)
            display.draw_pixel(x2 - r + x, y1 + r + y, color)
            display.draw_pixel(x1 + r - x, y2 - r - y, color)
            display.draw_pixel(x2 - r + x, y2 - r - y, color)
        old_err = err
        if old_err <= x:
            x += 1
            err += x * 2 + 1
        if old_err > y or err > x:
            y += 1
            err += y * 2 + 1
        if y >= 0:
            break

    draw_line(display, x1 + r, y1, x2 - r, y1, color)
    draw_line(display, x1 + r, y2, x2 - r, y2, color)
    draw_line(display, x1, y1 + r, x1, y2 - r, color)
    draw_line(display, x2, y1 + r, x2, y2 - r, color)


def _arrow_geometry(x0: int, y0: int, x1: int, y1: int) -> tuple[float, float, float]:
    vx = float(x1 - x0)
    vy = float(y1 - y0)
    v = math.hypot(vx, vy)
    if v == 0:
        raise ValueError("arrow has zero length")
    return vx / v, vy / v, v


def _arrow_base(x1: int, y1: int, ux: float, uy: float, v: float, w: int) -> tuple[int, int, int, int]:
    lx = _u16(x1 - uy * w - ux * v)
    ly = _u16(y1 + ux * w - uy * v)
    rx = _u16(x1 + uy * w - ux * v)
    ry = _u16(y1 - ux * w - uy * v)
    return lx, ly, rx, ry


def draw_arrow(
    display: Display, x0: int, y0: int, x1: int, y1: int, w: int, color: int
) -> None:
    """Draw the outline of an arrow head pointing at ``(x1, y1)`` with base half-width ``w``."""
    x0, y0, x1, y1, w = _u16(x0), _u16(y0), _u16(x1), _u16(y1), _u16(w)
    ux, uy, v = _arrow_geometry(x0, y0, x1, y1)
    lx, ly, rx, ry = _arrow_base(x1, y1, ux, uy, v, w)
    draw_line(display, x1, y1, lx, ly, color)
    draw_line(display, x1, y1, rx, ry, color)
    draw_line(display, lx, ly, rx, ry, color)


def draw_fill_arrow(
    display: Display, x0: int, y0: int, x1: int, y1: int, w: int, color: int
) -> None:
    """Draw a filled arrow from ``(x0, y0)`` to ``(x1, y1)`` with base half-width ``w``."""
    x0, y0, x1, y1, w = _u16(x0), _u16(y0), _u16(x1), _u16(y1), _u16(w)
    ux, uy, v = _arrow_geometry(x0, y0, x1, y1)
    lx, ly, rx, ry = _arrow_base(x1, y1, ux, uy, v, w)
    draw_line(display, x0, y0, x1, y1, color)
    draw_line(display, x1, y1, lx, ly, color)
    draw_line(display, x1, y1, rx, ry, color)
    draw_line(display, lx, ly, rx, ry, color)
    for ww in range(w - 1, 0, -1):
        lx, ly, rx, ry = _arrow_base(x1, y1, ux, uy, v, ww)
        draw_line(display, x1, y1, lx, ly, color)
        draw_line(display, x1, y1, rx, ry, color)


def draw_char(
    display: Display, font: FontxFontSet, x: int, y: int, code: int, color: int
) -> int:
    """Draw one character and return where the next one starts, or 0 if it is missing.

    The returned coordinate is x for directions 0 and 180, y for 90 and 270.
    """
    glyph = font.get_glyph(code)
    if glyph is None:
        return 0
    pw, ph = glyph.width, glyph.height
    data = glyph.data
    x, y = _u16(x), _u16(y)

    xd1 = yd1 = xd2 = yd2 = 0
    xss = yss = 0
    xsd = ysd = 0
    bx0 = by0 = bx1 = by1 = 0
    nxt = 0
    direction = display.font_direction
    if direction == Direction.DIRECTION0:
        xd1, yd1 = 1, 1
        xss, yss = x, y - (ph - 1)
        xsd = 1
        nxt = x + pw
        bx0, by0, bx1, by1 = x, y - (ph - 1), x + (pw - 1), y
    elif direction == Direction.DIRECTION180:
        xd1, yd1 = -1, -1
        xss, yss = x, y + ph + 1
        xsd = 1
        nxt = x - pw
        bx0, by0, bx1, by1 = x - (pw - 1), y, x, y + (ph - 1)
    elif direction == Direction.DIRECTION90:
        xd2, yd2 = -1, 1
        xss, yss = x + ph, y
        ysd = 1
        nxt = y + pw
        bx0, by0, bx1, by1 = x, y, x + (ph - 1), y + (pw - 1)
    elif direction == Direction.DIRECTION270:
        xd2, yd2 = 1, -1
        xss, yss = x - (ph - 1), y
        ysd = 1
        nxt = y - pw
        bx0, by0, bx1, by1 = x - (ph - 1), y - (pw - 1), x, y

    if display.font_fill:
        display.draw_fill_rect(bx0, by0, bx1, by1, display.font_fill_color)

    ofs = 0
    xx, yy = xss, yss
    for h in range(ph):
        if xsd:
            xx = xss
        if ysd:
            yy = yss
        bits = pw
        underline_row = display.font_underline and h >= ph - 2
        for _ in range((pw + 4) // 8):
            byte = data[ofs] if ofs < len(data) else 0
            mask = 0x80
            for _ in range(8):
                bits -= 1
                if bits < 0:
                    continue
                if byte & mask:
                    display.draw_pixel(xx, yy, color)
                if underline_row:
                    display.draw_pixel(xx, yy, display.font_underline_color)
                xx += xd1
                yy += yd2
                mask >>= 1
            ofs += 1
        yy += yd1
        xx += xd2

    return max(nxt, 0)


def _advance(display: Display, font: FontxFontSet, x: int, y: int, code: int, color: int) -> tuple[int, int]:
    direction = display.font_direction
    if direction in (Direction.DIRECTION0, Direction.DIRECTION180):
        x = _u16(draw_char(display, font, x, y, code, color))
    elif direction in (Direction.DIRECTION90, Direction.DIRECTION270):
        y = _u16(draw_char(display, font, x, y, code, color))
    return x, y


def _position(display: Display, x: int, y: int) -> int:
    direction = display.font_direction
    if direction in (Direction.DIRECTION0, Direction.DIRECTION180):
        return x
    if direction in (Direction.DIRECTION90, Direction.DIRECTION270):
        return y
    return 0


def draw_string(
    display: Display,
    font: FontxFontSet,
    x: int,
    y: int,
    text: Union[str, bytes],
    color: int,
) -> int:
    """Draw a string of single-byte characters; return the position after it."""
    raw = text.encode("latin-1") if isinstance(text, str) else bytes(text)
    raw = raw.split(b"\0", 1)[0]
    x, y = _u16(x), _u16(y)
    for code in raw:
        x, y = _advance(display, font, x, y, code, color)
    return _position(display, x, y)


def draw_code(
    display: Display, font: FontxFontSet, x: int, y: int, code: int, color: int
) -> int:
    """Draw the character with the given code; return the position after it."""
    x, y = _advance(display, font, _u16(x), _u16(y), code, color)
    return _position(display, x, y)