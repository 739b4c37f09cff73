"""Demonstration screens built from filled areas, lines and simple shapes."""

from __future__ import annotations

import functools
import logging
import random
import time
from typing import Callable, Optional, TypeVar

from .colors import Color, rgb565
from .display import Display
from .graphics import draw_circle, draw_line, draw_round_rect

TICK_SECONDS = 0.01
"""Length of one scheduler tick; pauses in the demos are counted in ticks."""

log = logging.getLogger(__name__)

_F = TypeVar("_F", bound=Callable[..., object])


def _timed(func: Callable[..., object]) -> Callable[..., int]:
    """Run a demo, log how long it took and return that time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: object, **kwargs: object) -> int:
        start = time.monotonic()
        func(*args, **kwargs)
        elapsed = int((time.monotonic() - start) * 1000)
        log.info("%s elapsed time[ms]:%d", func.__name__, elapsed)
        return elapsed

    return wrapper


def _pause(display: Display, ticks: int) -> None:
    display.delay(ticks * TICK_SECONDS)


@_timed
def fill_test(display: Display) -> None:
    """Fill the screen red, then green, then blue."""
    display.fill_screen(Color.RED)
    display.draw_finish()
    _pause(display, 50)
    display.fill_screen(Color.GREEN)
    display.draw_finish()
    _pause(display, 50)
    display.fill_screen(Color.BLUE)
    display.draw_finish()


@_timed
def color_bar_test(display: Display) -> None:
    """Draw three horizontal bars: red, green and blue."""
    width, height = display.width, display.height
    y1 = height // 3
    y2 = (height // 3) * 2
    display.draw_fill_rect(0, 0, width - 1, y1 - 1, Color.RED)
    display.draw_fill_rect(0, y1 - 1, width - 1, y2 - 1, Color.GREEN)
    display.draw_fill_rect(0, y2 - 1, width - 1, height - 1, Color.BLUE)
    display.draw_finish()


@_timed
def line_test(display: Display) -> None:
    """Draw a red grid with lines every 10 pixels."""
    width, height = display.width, display.height
    display.fill_screen(Color.BLACK)
    for ypos in range(0, height, 10):
        draw_line(display, 0, ypos, width, ypos, Color.RED)
    for xpos in range(0, width, 10):
        draw_line(display, xpos, 0, xpos, height, Color.RED)
    display.draw_finish()


@_timed
def circle_test(display: Display) -> None:
    """Draw concentric grey circles around the centre of the screen."""
    width, height = display.width, display.height
    display.fill_screen(Color.BLACK)
    xpos = width // 2
    ypos = height // 2
    for radius in range(5, height, 5):
        draw_circle(display, xpos, ypos, radius, Color.GRAY)
    display.draw_finish()


@_timed
def round_rect_test(display: Display) -> None:
    """Draw nested blue rectangles with rounded corners."""
    width, height = display.width, display.height
    display.fill_screen(Color.BLACK)
    for i in range(5, width, 5):
        if i > width - i - 1:
            break
        draw_round_rect(display, i, i, width - i - 1, height - i - 1, 10, Color.BLUE)
    display.draw_finish()


@_timed
def fill_rect_test(display: Display, rng: Optional[random.Random] = None) -> None:
    """Draw 99 squares of random colour, place and size on a white screen."""
    width, height = display.width, display.height
    if width // 5 == 0:
        raise ValueError(f"screen too narrow for random squares: {width}")
    rng = rng if rng is not None else random.Random()
    display.fill_screen(Color.WHITE)
    for _ in range(1, 100):
        red = rng.randrange(255)
        green = rng.randrange(255)
        blue = rng.randrange(255)
        color = rgb565(red, green, blue)
        xpos = rng.randrange(width)
        ypos = rng.randrange(height)
        size = rng.randrange(width // 5)
        display.draw_fill_rect(xpos, ypos, xpos + size, ypos + size, color)
    display.draw_finish()


@_timed
def color_test(display: Display) -> None:
    """Draw 16 bands, each with the colour value of the one above shifted right by one bit."""
    width, height = display.width, display.height
    display.fill_screen(Color.WHITE)
    color = int(Color.RED)
    delta = height // 16
    ypos = 0
    for _ in range(16):
        display.draw_fill_rect(0, ypos, width - 1, ypos + delta, color)
        color >>= 1
        ypos += delta
    display.draw_finish()