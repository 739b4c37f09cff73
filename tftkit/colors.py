"""RGB565 colours used by the display."""

from __future__ import annotations

from enum import IntEnum


def rgb565(r: int, g: int, b: int) -> int:
    """Pack 8-bit red, green and blue components into a 16-bit RGB565 value."""
    for name, value in (("red", r), ("green", g), ("blue", b)):
        if not 0 <= value <= 0xFF:
            raise ValueError(f"{name} component out of range: {value}")
    return ((r & 0xF8) << 8) | ((g & 0xFC) << 3) | (b >> 3)


class Color(IntEnum):
    """Named RGB565 colours."""

    RED = rgb565(255, 0, 0)
    GREEN = rgb565(0, 255, 0)
    BLUE = rgb565(0, 0, 255)
    BLACK = rgb565(0, 0, 0)
    WHITE = rgb565(255, 255, 255)
    GRAY = rgb565(128, 128, 128)
    YELLOW = rgb565(255, 255, 0)
    CYAN = rgb565(0, 156, 209)
    PURPLE = rgb565(128, 0, 128)