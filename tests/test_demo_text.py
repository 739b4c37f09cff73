import pytest

from tftkit.colors import Color
from tftkit.demo_text import (
    arrow_test,
    code_test,
    horizontal_test,
    scroll_test,
    vertical_test,
)
from tftkit.display import Direction, Display, RecordingBus
from tftkit.fontx import FontxFontSet


def _write_font(path, width=8, height=16):
    size = (width + 7) // 8 * height
    data = bytearray(b"FONTX2" + b"TESTFONT" + bytes((width, height, 0)))
    for code in range(256):
        data += bytes(size) if code == 0x20 else b"\xff" * size
    path.write_bytes(bytes(data))


@pytest.fixture
def font(tmp_path):
    path = tmp_path / "test.fnt"
    _write_font(path)
    fonts = FontxFontSet(path)
    yield fonts
    fonts.close()


@pytest.fixture
def display():
    d = Display(RecordingBus(), 128, 160, delay=lambda s: None)
    d.init()
    return d


def pixel(d, x, y):
    return d.frame_buffer[y * d.width + x]


def count(d, color):
    return sum(1 for p in d.frame_buffer if p == color)


def test_arrow_test_marks_corners(display, font):
    result = arrow_test(display, font)
    assert isinstance(result, int) and result >= 0
    assert pixel(display, 0, 0) == Color.RED
    assert pixel(display, 79, 0) == Color.GREEN
    assert pixel(display, 0, 159) == Color.GRAY
    assert pixel(display, 79, 159) == Color.BLUE


def test_arrow_test_needs_font(tmp_path, display):
    with FontxFontSet(tmp_path / "missing.fnt") as missing:
        with pytest.raises(ValueError):
            arrow_test(display, missing)


def test_horizontal_test_fill_and_underline(display, font):
    horizontal_test(display, font)
    # first character is a blank space
    assert pixel(display, 0, 0) == Color.BLACK
    assert pixel(display, 8, 0) == Color.RED
    assert pixel(display, 0, 31) == Color.RED
    assert pixel(display, 0, 20) == Color.BLACK
    assert pixel(display, 0, 40) == Color.GREEN
    assert display.font_direction == Direction.DIRECTION180
    assert display.font_fill is False
    assert display.font_underline is False


def test_vertical_test_leaves_direction_270(display, font):
    vertical_test(display, font)
    assert display.font_direction == Direction.DIRECTION270
    assert count(display, Color.RED) > 0
    assert count(display, Color.BLUE) > 0
    assert display.font_fill is False


def test_code_test_single_character(display, font):
    code_test(display, font, 0x41, 0x41)
    assert count(display, Color.CYAN) == 8 * 16


def test_code_test_two_characters(display, font):
    code_test(display, font, 0x41, 0x42)
    assert count(display, Color.CYAN) == 2 * 8 * 16


def test_code_test_rejects_bad_start(display, font):
    with pytest.raises(ValueError):
        code_test(display, font, 0x100, 0x200)


def test_scroll_test_shows_latest_lines(display, font):
    scroll_test(display, font)
    assert pixel(display, 0, 5) == Color.RED
    assert pixel(display, 0, 20) == Color.CYAN
    # the space in "Line 11"
    assert pixel(display, 35, 20) == Color.BLACK
    assert pixel(display, 60, 20) == Color.BLACK
    assert pixel(display, 0, 150) == Color.CYAN


def test_scroll_test_rejects_short_screen(font):
    short = Display(RecordingBus(), 128, 16, delay=lambda s: None)
    short.init()
    with pytest.raises(ValueError):
        scroll_test(short, font)