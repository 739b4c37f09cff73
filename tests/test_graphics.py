import pytest

from tftkit.colors import Color
from tftkit.display import Direction, Display, RecordingBus
from tftkit.fontx import FontxFontSet
from tftkit.graphics import (
    draw_arrow,
    draw_char,
    draw_circle,
    draw_code,
    draw_fill_arrow,
    draw_fill_circle,
    draw_line,
    draw_rect,
    draw_round_rect,
    draw_string,
)

SIZE = 32
GLYPH_A = bytes([0xFF] + [0x80] * 7)


def make_display():
    display = Display(RecordingBus(), SIZE, SIZE, delay=lambda s: None)
    display.init()
    return display


def lit(display, color):
    return {
        (i % display.width, i // display.width)
        for i, p in enumerate(display.frame_buffer)
        if p == color
    }


@pytest.fixture
def display():
    return make_display()


@pytest.fixture
def font(tmp_path):
    size = 8
    body = bytearray(size * 128)
    body[ord("A") * size:(ord("A") + 1) * size] = GLYPH_A
    path = tmp_path / "test.fnt"
    path.write_bytes(b"FONTX2" + b"TESTFONT" + bytes([8, 8, 0]) + bytes(body))
    with FontxFontSet(path) as fonts:
        yield fonts


def test_horizontal_line(display):
    draw_line(display, 0, 5, 5, 5, Color.RED)
    assert lit(display, Color.RED) == {(x, 5) for x in range(6)}


def test_line_direction_does_not_matter(display):
    other = make_display()
    draw_line(display, 0, 5, 5, 5, Color.RED)
    draw_line(other, 5, 5, 0, 5, Color.RED)
    assert lit(display, Color.RED) == lit(other, Color.RED)


def test_diagonal_line(display):
    draw_line(display, 0, 0, 4, 4, Color.GREEN)
    assert lit(display, Color.GREEN) == {(i, i) for i in range(5)}


def test_rect_outline(display):
    draw_rect(display, 1, 1, 4, 3, Color.BLUE)
    expected = {
        (x, y) for x in range(1, 5) for y in range(1, 4) if x in (1, 4) or y in (1, 3)
    }
    assert lit(display, Color.BLUE) == expected


def test_circle_extremes_and_symmetry(display):
    draw_circle(display, 15, 15, 5, Color.WHITE)
    points = lit(display, Color.WHITE)
    assert {(15, 10), (20, 15), (15, 20), (10, 15)} <= points
    assert (15, 15) not in points
    assert all((30 - x, 30 - y) in points for x, y in points)
    assert all(abs(x - 15) <= 5 and abs(y - 15) <= 5 for x, y in points)


def test_fill_circle(display):
    draw_fill_circle(display, 15, 15, 5, Color.RED)
    points = lit(display, Color.RED)
    assert (15, 15) in points
    assert (15, 10) in points
    assert (20, 20) not in points
    assert all(abs(x - 15) <= 5 and abs(y - 15) <= 5 for x, y in points)


def test_round_rect_too_small_draws_nothing(display):
    draw_round_rect(display, 0, 0, 5, 5, 10, Color.RED)
    assert lit(display, Color.RED) == set()


def test_round_rect_edges_and_corners(display):
    draw_round_rect(display, 2, 2, 20, 20, 4, Color.RED)
    points = lit(display, Color.RED)
    assert (6, 2) in points
    assert (16, 20) in points
    assert (2, 2) not in points


def test_round_rect_corner_order(display):
    other = make_display()
    draw_round_rect(display, 2, 2, 20, 20, 4, Color.RED)
    draw_round_rect(other, 20, 20, 2, 2, 4, Color.RED)
    assert lit(display, Color.RED) == lit(other, Color.RED)


def test_arrow_tip(display):
    draw_arrow(display, 10, 10, 0, 0, 5, Color.RED)
    assert (0, 0) in lit(display, Color.RED)


def test_zero_length_arrow_rejected(display):
    with pytest.raises(ValueError):
        draw_arrow(display, 3, 3, 3, 3, 2, Color.RED)


def test_fill_arrow_shaft(display):
    draw_fill_arrow(display, 20, 10, 20, 2, 5, Color.RED)
    points = lit(display, Color.RED)
    assert {(20, y) for y in range(2, 11)} <= points


def test_char_direction0(display, font):
    nxt = draw_char(display, font, 2, 9, ord("A"), Color.RED)
    assert nxt == 2 + 8
    points = lit(display, Color.RED)
    assert {(x, 2) for x in range(2, 10)} <= points
    assert {(2, y) for y in range(2, 10)} <= points
    assert (5, 5) not in points


def test_char_rotation_keeps_pixel_count(display, font):
    draw_char(display, font, 2, 9, ord("A"), Color.RED)
    rotated = make_display()
    rotated.font_direction = Direction.DIRECTION90
    nxt = draw_char(rotated, font, 10, 3, ord("A"), Color.RED)
    assert nxt == 3 + 8
    assert len(lit(rotated, Color.RED)) == len(lit(display, Color.RED))


def test_char_direction270_clamps_to_zero(display, font):
    display.font_direction = Direction.DIRECTION270
    assert draw_char(display, font, 20, 3, ord("A"), Color.RED) == 0


def test_missing_glyph(display, font):
    assert draw_char(display, font, 0, 7, 0x90, Color.RED) == 0
    assert lit(display, Color.RED) == set()


def test_underline(display, font):
    display.set_font_underline(Color.BLUE)
    draw_char(display, font, 2, 9, ord("A"), Color.RED)
    points = lit(display, Color.BLUE)
    assert {(x, 8) for x in range(2, 10)} | {(x, 9) for x in range(2, 10)} == points


def test_font_fill(display, font):
    display.set_font_fill(Color.GREEN)
    draw_char(display, font, 2, 9, ord("A"), Color.RED)
    green = lit(display, Color.GREEN)
    red = lit(display, Color.RED)
    box = {(x, y) for x in range(2, 10) for y in range(2, 10)}
    assert green | red == box
    assert (5, 5) in green


def test_string_advances_per_character(display, font):
    single = make_display()
    draw_char(single, font, 0, 7, ord("A"), Color.RED)
    end = draw_string(display, font, 0, 7, "AA", Color.RED)
    assert end == 2 * 8
    assert len(lit(display, Color.RED)) == 2 * len(lit(single, Color.RED))


def test_string_bytes_and_str_agree(display, font):
    other = make_display()
    draw_string(display, font, 0, 7, "AA", Color.RED)
    draw_string(other, font, 0, 7, b"AA", Color.RED)
    assert list(display.frame_buffer) == list(other.frame_buffer)


def test_code_matches_char(display, font):
    other = make_display()
    a = draw_code(display, font, 4, 12, ord("A"), Color.RED)
    b = draw_char(other, font, 4, 12, ord("A"), Color.RED)
    assert a == b
    assert list(display.frame_buffer) == list(other.frame_buffer)


def test_code_out_of_range(display, font):
    with pytest.raises(ValueError):
        draw_code(display, font, 0, 0, 0x100, Color.RED)