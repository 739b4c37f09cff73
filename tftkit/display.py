"""An ST7735S TFT panel driven through a command/data bus, with an optional frame buffer."""

from __future__ import annotations

import logging
import struct
import sys
import time
from array import array
from enum import IntEnum
from typing import Callable, Iterable, Protocol, Sequence

log = logging.getLogger(__name__)

_CMD_SOFTWARE_RESET = 0x01
_CMD_DISPLAY_OFF = 0x28
_CMD_DISPLAY_ON = 0x29
_CMD_COLUMN_ADDRESS = 0x2A
_CMD_ROW_ADDRESS = 0x2B
_CMD_MEMORY_WRITE = 0x2C

_FINISH_CHUNK_PIXELS = 1024

_ADDR = struct.Struct(">HH")
_WORD = struct.Struct(">H")

# (command, parameter bytes, delay after it in milliseconds)
_INIT_SEQUENCE: tuple[tuple[int, bytes, int], ...] = (
    (_CMD_SOFTWARE_RESET, b"", 150),
    (0x11, b"", 255),  # sleep out
    (0xB1, bytes((0x01, 0x2C, 0x2D)), 0),  # frame rate, normal mode
    (0xB2, bytes((0x01, 0x2C, 0x2D)), 0),  # frame rate, idle mode
    (0xB3, bytes((0x01, 0x2C, 0x2D, 0x01, 0x2C, 0x2D)), 0),  # frame rate, partial mode
    (0xB4, bytes((0x07,)), 0),  # display inversion control
    (0xC0, bytes((0xA2, 0x02, 0x84)), 0),  # power control 1
    (0xC1, bytes((0xC5,)), 0),  # power control 2
    (0xC2, bytes((0x0A, 0x00)), 0),  # power control 3
    (0xC3, bytes((0x8A, 0x2A)), 0),  # power control 4
    (0xC4, bytes((0x8A, 0xEE)), 0),  # power control 5
    (0xC5, bytes((0x0E,)), 0),  # VCOM control 1
    (0x20, b"", 0),  # display inversion off
    (0x36, bytes((0xC0,)), 0),  # memory access control, RGB panel
    (0x3A, bytes((0x05,)), 0),  # 16 bits per pixel
    (_CMD_COLUMN_ADDRESS, bytes((0x00, 0x02, 0x00, 0x81)), 0),
    (_CMD_ROW_ADDRESS, bytes((0x00, 0x01, 0x00, 0xA0)), 0),
    (0xE0, bytes((0x02, 0x1C, 0x07, 0x12, 0x37, 0x32, 0x29, 0x2D,
                  0x29, 0x25, 0x2B, 0x39, 0x00, 0x01, 0x03, 0x10)), 0),
    (0xE1, bytes((0x03, 0x1D, 0x07, 0x06, 0x2E, 0x2C, 0x29, 0x2D,
                  0x2E, 0x2E, 0x37, 0x3F, 0x00, 0x00, 0x02, 0x10)), 0),
    (0x13, b"", 10),  # normal display mode on
    (_CMD_DISPLAY_ON, b"", 100),
)


class Direction(IntEnum):
    """Direction in which text is drawn."""

    DIRECTION0 = 0
    DIRECTION90 = 1
    DIRECTION180 = 2
    DIRECTION270 = 3


class Bus(Protocol):
    """A link to the panel: commands go with the D/C line low, data with it high."""

    def write_command(self, cmd: int) -> None: ...

    def write_data(self, data: bytes) -> None: ...


class RecordingBus:
    """A bus that keeps every transaction, as ``("command", bytes)`` or ``("data", bytes)``."""

    def __init__(self) -> None:
        self.transactions: list[tuple[str, bytes]] = []

    def write_command(self, cmd: int) -> None:
        """Record one command byte."""
        if not 0 <= cmd <= 0xFF:
            raise ValueError(f"command out of range: {cmd}")
        self.transactions.append(("command", bytes((cmd,))))

    def write_data(self, data: bytes) -> None:
        """Record a block of data bytes; empty blocks are not sent."""
        if data:
            self.transactions.append(("data", bytes(data)))

    @property
    def commands(self) -> list[int]:
        """The command bytes sent so far, in order."""
        return [payload[0] for kind, payload in self.transactions if kind == "command"]

    @property
    def data(self) -> bytes:
        """All data bytes sent so far, joined."""
        return b"".join(payload for kind, payload in self.transactions if kind == "data")

    def clear(self) -> None:
        """Forget the recorded transactions."""
        self.transactions.clear()


def _u16(value: int) -> int:
    return value & 0xFFFF


def _color_bytes(colors: Iterable[int]) -> bytes:
    words = array("H", (_u16(c) for c in colors))
    if sys.byteorder == "little":
        words.byteswap()
    return words.tobytes()


class Display:
    """Drawing primitives for an ST7735S panel.

    Coordinates behave as unsigned 16-bit values, so negative ones fall off the
    screen. With a frame buffer, drawing goes to memory until :meth:`draw_finish`.
    """

    def __init__(
        self,
        bus: Bus,
        width: int,
        height: int,
        offset_x: int = 0,
        offset_y: int = 0,
        frame_buffer: bool = True,
        delay: Callable[[float], None] = time.sleep,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid display size: {width}x{height}")
        self.bus = bus
        self.width = width
        self.height = height
        self.offset_x = offset_x
        self.offset_y = offset_y
        self.want_frame_buffer = frame_buffer
        self.delay = delay
        self.font_direction = Direction.DIRECTION0
        self.font_fill = False
        self.font_fill_color = 0
        self.font_underline = False
        self.font_underline_color = 0
        self.use_frame_buffer = False
        self.frame_buffer: array | None = None

    def init(self) -> None:
        """Reset and configure the panel, then set up the frame buffer if wanted."""
        self.font_direction = Direction.DIRECTION0
        self.font_fill = False
        self.font_underline = False
        for cmd, params, delay_ms in _INIT_SEQUENCE:
            self.bus.write_command(cmd)
            for byte in params:
                self.bus.write_data(bytes((byte,)))
            if delay_ms:
                self.delay(delay_ms / 1000)
        self.use_frame_buffer = False
        if self.want_frame_buffer:
            self.frame_buffer = array("H", bytes(2 * self.width * self.height))
            self.use_frame_buffer = True

    def _set_window(self, x1: int, y1: int, x2: int, y2: int) -> None:
        self.bus.write_command(_CMD_COLUMN_ADDRESS)
        self.bus.write_data(_ADDR.pack(_u16(x1), _u16(x2)))
        self.bus.write_command(_CMD_ROW_ADDRESS)
        self.bus.write_data(_ADDR.pack(_u16(y1), _u16(y2)))
        self.bus.write_command(_CMD_MEMORY_WRITE)

    def draw_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; pixels off the screen are ignored."""
        x, y, color = _u16(x), _u16(y), _u16(color)
        if x >= self.width or y >= self.height:
            return
        if self.use_frame_buffer:
            self.frame_buffer[y * self.width + x] = color
        else:
            px, py = x + self.offset_x, y + self.offset_y
            self._set_window(px, py, px, py)
            self.bus.write_data(_WORD.pack(color))

    def draw_multi_pixels(self, x: int, y: int, colors: Sequence[int]) -> None:
        """Draw a horizontal run of pixels; a run that does not fit is not drawn."""
        x, y = _u16(x), _u16(y)
        size = len(colors)
        if x + size > self.width or y >= self.height or size == 0:
            return
        if self.use_frame_buffer:
            start = y * self.width + x
            self.frame_buffer[start:start + size] = array("H", (_u16(c) for c in colors))
        else:
            x1 = x + self.offset_x
            y1 = y + self.offset_y
            self._set_window(x1, y1, x1 + size - 1, y1)
            self.bus.write_data(_color_bytes(colors))

    def draw_fill_rect(self, x1: int, y1: int, x2: int, y2: int, color: int) -> None:
        """Fill the rectangle between two corners, clipped at the right and bottom edges."""
        x1, y1, x2, y2, color = _u16(x1), _u16(y1), _u16(x2), _u16(y2), _u16(color)
        if x1 >= self.width or y1 >= self.height:
            return
        x2 = min(x2, self.width - 1)
        y2 = min(y2, self.height - 1)
        if self.use_frame_buffer:
            if x2 < x1:
                return
            run = array("H", [color]) * (x2 - x1 + 1)
            for j in range(y1, y2 + 1):
                start = j * self.width + x1
                self.frame_buffer[start:start + len(run)] = run
        else:
            px1, px2 = x1 + self.offset_x, x2 + self.offset_x
            py1, py2 = y1 + self.offset_y, y2 + self.offset_y
            self._set_window(px1, py1, px2, py2)
            column = _color_bytes([color]) * max(py2 - py1 + 1, 0)
            for _ in range(px1, px2 + 1):
                self.bus.write_data(column)

    def fill_screen(self, color: int) -> None:
        """Fill the whole screen with one colour."""
        self.draw_fill_rect(0, 0, self.width - 1, self.height - 1, color)

    def display_off(self) -> None:
        """Turn the panel off."""
        self.bus.write_command(_CMD_DISPLAY_OFF)

    def display_on(self) -> None:
        """Turn the panel on."""
        self.bus.write_command(_CMD_DISPLAY_ON)

    def set_font_fill(self, color: int) -> None:
        """Paint the box behind each character with ``color``."""
        self.font_fill = True
        self.font_fill_color = _u16(color)

    def unset_font_fill(self) -> None:
        """Stop painting behind characters."""
        self.font_fill = False

    def set_font_underline(self, color: int) -> None:
        """Underline characters in ``color``."""
        self.font_underline = True
        self.font_underline_color = _u16(color)

    def unset_font_underline(self) -> None:
        """Stop underlining characters."""
        self.font_underline = False

    def draw_finish(self) -> None:
        """Send the frame buffer to the panel; does nothing without one."""
        if not self.use_frame_buffer:
            return
        self._set_window(
            self.offset_x,
            self.offset_y,
            self.offset_x + self.width - 1,
            self.offset_y + self.height - 1,
        )
        buffer = self.frame_buffer
        for start in range(0, len(buffer), _FINISH_CHUNK_PIXELS):
            self.bus.write_data(_color_bytes(buffer[start:start + _FINISH_CHUNK_PIXELS]))