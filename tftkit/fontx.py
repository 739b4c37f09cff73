"""FONTX2 bitmap fonts: loading glyphs and turning them into display bitmaps."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import BinaryIO

GLYPH_BUF_SIZE = 32 * 32 // 8
"""Largest glyph pattern, in bytes, that a font may declare."""

_HEADER_SIZE = 18
_ANK_DATA_OFFSET = 17
_BAND_STRIDE = 32
_BITMAP_BANDS = 4

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Glyph:
    """A glyph pattern: rows of ``(width + 7) // 8`` bytes, most significant bit first."""

    data: bytes
    width: int
    height: int


class FontxFile:
    """One FONTX2 font file, opened lazily on first use."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)
        self.name = ""
        self.opened = False
        self.valid = False
        self.is_ank = False
        self.width = 0
        self.height = 0
        self.glyph_size = 0
        self.code_blocks = 0
        self._file: BinaryIO | None = None

    def open(self) -> bool:
        """Open the file and read its header; return whether the font is usable."""
        if self.opened:
            return self.valid
        try:
            handle = open(self.path, "rb")
        except OSError:
            self.valid = False
            log.warning("Fontx:%s not found.", self.path)
            return False
        self.opened = True
        header = handle.read(_HEADER_SIZE)
        if len(header) != _HEADER_SIZE:
            self.valid = False
            log.warning("Fontx:%s not FONTX format.", self.path)
            handle.close()
            return False

        self.name = header[6:14].split(b"\0", 1)[0].decode("latin-1")
        self.width = header[14]
        self.height = header[15]
        self.is_ank = header[16] == 0
        self.code_blocks = header[17]
        self.glyph_size = (self.width + 7) // 8 * self.height
        if self.glyph_size > GLYPH_BUF_SIZE:
            log.warning("Fontx:%s is too big font size.", self.path)
            self.valid = False
            handle.close()
            return False

        self._file = handle
        self.valid = True
        return True

    def close(self) -> None:
        """Close the underlying file if it is open."""
        if self.opened:
            if self._file is not None:
                self._file.close()
                self._file = None
            self.opened = False

    def _read_ank(self, code: int) -> Glyph | None:
        assert self._file is not None
        offset = _ANK_DATA_OFFSET + code * self.glyph_size
        try:
            self._file.seek(offset)
        except OSError:
            log.warning("Fontx:seek(%d) failed.", offset)
            return None
        data = self._file.read(self.glyph_size)
        if len(data) != self.glyph_size:
            log.warning("Fontx:fread failed.")
            return None
        return Glyph(data, self.width, self.height)


class FontxFontSet:
    """A primary font and a fallback font, searched in that order."""

    def __init__(
        self,
        primary: str | os.PathLike[str],
        secondary: str | os.PathLike[str] = "",
    ) -> None:
        self.fonts = (FontxFile(primary), FontxFile(secondary))

    def __enter__(self) -> FontxFontSet:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_glyph(self, code: int) -> Glyph | None:
        """Return the pattern for a single-byte code, or None when no font has it."""
        if not 0 <= code <= 0xFF:
            raise ValueError(f"character code out of range: {code}")
        for font in self.fonts:
            if not font.open():
                continue
            if code < 0x80 and font.is_ank:
                return font._read_ank(code)
        return None

    def close(self) -> None:
        """Close both font files."""
        for font in self.fonts:
            font.close()

    def dump(self) -> str:
        """Describe the state of both fonts, one attribute per line."""
        lines = []
        for i, font in enumerate(self.fonts):
            lines += [
                f"fxs[{i}]->path={font.path}",
                f"fxs[{i}]->opened={int(font.opened)}",
                f"fxs[{i}]->fxname={font.name}",
                f"fxs[{i}]->valid={int(font.valid)}",
                f"fxs[{i}]->is_ank={int(font.is_ank)}",
                f"fxs[{i}]->w={font.width}",
                f"fxs[{i}]->h={font.height}",
                f"fxs[{i}]->fsz={font.glyph_size}",
                f"fxs[{i}]->bc={font.code_blocks}",
            ]
        return "\n".join(lines) + "\n"


def _bitmap_size(height: int) -> int:
    return _BAND_STRIDE * max(_BITMAP_BANDS, (height + 7) // 8)


def font_to_bitmap(glyph: bytes, width: int, height: int, inverse: bool = False) -> bytearray:
    """Convert a row-major glyph into bands of 8 rows, one byte per column.

    The top row of each band lands in bit 7. With ``inverse`` each full band
    byte is bit-reversed.
    """
    line = bytearray(_bitmap_size(height))
    row_bytes = (width + 7) // 8
    for y in range(height):
        row = glyph[y * row_bytes:(y + 1) * row_bytes]
        bit = 1 << (7 - y % 8)
        base = (y // 8) * _BAND_STRIDE
        for x in range(width):
            if row[x // 8] & (0x80 >> (x % 8)):
                line[base + x] |= bit

    if inverse:
        for band in range(height // 8):
            base = band * _BAND_STRIDE
            line[base:base + width] = bytes(rotate_byte(b) for b in line[base:base + width])
    return line


def underline_bitmap(line: bytes, width: int, height: int) -> bytearray:
    """Return a copy of the bitmap with 0x80 added to each column of the last full band."""
    result = bytearray(line)
    bands = height // 8
    if bands:
        base = (bands - 1) * _BAND_STRIDE
        result[base:base + width] = bytes((b + 0x80) & 0xFF for b in result[base:base + width])
    return result


def reverse_bitmap(line: bytes, width: int, height: int) -> bytearray:
    """Return a copy of the bitmap with every full band byte inverted."""
    result = bytearray(line)
    for band in range(height // 8):
        base = band * _BAND_STRIDE
        result[base:base + width] = bytes(~b & 0xFF for b in result[base:base + width])
    return result


def show_font(glyph: bytes, width: int, height: int) -> str:
    """Render a glyph pattern as text, '*' for set pixels and '.' for clear."""
    row_bytes = (width + 7) // 8
    out = [f"[ShowFont pw={width} ph={height}]\n"]
    for y in range(height):
        row = glyph[y * row_bytes:(y + 1) * row_bytes]
        pixels = "".join(
            "*" if row[x // 8] & (0x80 >> (x % 8)) else "." for x in range(width)
        )
        out.append(f"{y:02d}{pixels}\n")
    out.append("\n")
    return "".join(out)


def show_bitmap(bitmap: bytes, width: int, height: int) -> str:
    """Render a banded bitmap as text, '*' for set pixels and '.' for clear."""
    out = [f"[ShowBitmap pw={width} ph={height}]\n"]
    for y in range(height):
        mask = 0x80 >> (y % 8)
        base = (y // 8) * _BAND_STRIDE
        pixels = "".join(
            "*" if bitmap[base + x] & mask else "." for x in range(width)
        )
        out.append(f"{y:02d}{pixels}\n")
    out.append("\n")
    return "".join(out)


def rotate_byte(value: int) -> int:
    """Reverse the order of the eight bits of a byte."""
    result = 0
    for _ in range(8):
        result = (result << 1) | (value & 0x01)
        value >>= 1
    return result