"""Reconstruction of filtered PNG scanlines into RGBA pixels."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

INTERLACE_OFF_X = (0, 0, 4, 0, 2, 0, 1, 0)
INTERLACE_OFF_Y = (0, 0, 0, 4, 0, 2, 0, 1)
INTERLACE_DIV_X = (1, 8, 8, 4, 4, 2, 2, 1)
INTERLACE_DIV_Y = (1, 8, 8, 8, 4, 4, 2, 2)

_U32_MAX = 0xFFFFFFFF

# colour type -> (channels, allowed bit depths)
_COLOR_TYPES = {
    0: (1, (1, 2, 4, 8, 16)),
    2: (3, (8, 16)),
    3: (1, (1, 2, 4, 8)),
    4: (2, (8, 16)),
    6: (4, (8, 16)),
}

DrawCallback = Callable[[int, int, int, int, "tuple[int, int, int, int]"], None]


class PngError(ValueError):
    """Raised when PNG data is malformed or unsupported."""


@dataclass(frozen=True)
class Ihdr:
    """The fields of a PNG IHDR chunk."""

    width: int
    height: int
    depth: int
    color_type: int
    compression: int = 0
    filter: int = 0
    interlace: int = 0


def paeth(a: int, b: int, c: int) -> int:
    """The Paeth predictor of PNG filter type 4."""
    p = a + b - c
    pa = abs(p - a)
    pb = abs(p - b)
    pc = abs(p - c)
    if pa <= pb and pa <= pc:
        return a
    if pb <= pc:
        return b
    return c


def u32_clamp_add(a: int, b: int, top: int) -> int:
    """Add two unsigned 32-bit values, clamping at ``top`` and on overflow."""
    v = a + b
    if v > _U32_MAX or v > top:
        return top
    return v


def build_gamma_table(png_gamma: int, display_gamma: float, maxval: int) -> Optional[bytes]:
    """Build a lookup from sample value to corrected 8-bit intensity.

    ``png_gamma`` is the gAMA value (gamma times 100000). Returns None when
    gamma correction is disabled.
    """
    if display_gamma <= 0 or png_gamma == 0:
        return None
    exponent = 100000.0 / png_gamma / display_gamma
    return bytes(
        int(math.floor(math.pow(i / maxval, exponent) * 255.0 + 0.5)) & 0xFF
        for i in range(maxval + 1)
    )


def _channels(ihdr: Ihdr) -> int:
    try:
        channels, depths = _COLOR_TYPES[ihdr.color_type]
    except KeyError:
        raise PngError("Incorrect IHDR info") from None
    if ihdr.depth not in depths:
        raise PngError("Invalid bit depth")
    return channels


class ScanlineDecoder:
    """Unfilters decompressed image data and reports each pixel to a callback."""

    def __init__(self, ihdr: Ihdr, draw: Optional[DrawCallback] = None) -> None:
        self.channels = _channels(ihdr)
        if ihdr.compression != 0:
            raise PngError("Unsupported compression type in IHDR")
        if ihdr.filter != 0:
            raise PngError("Unsupported filter type in IHDR")
        self.ihdr = ihdr
        self.draw = draw
        self.pixel_depth = 8 if ihdr.color_type & 1 else ihdr.depth
        self.maxval = (1 << self.pixel_depth) - 1
        self.bytes_per_pixel = (self.channels * ihdr.depth + 7) // 8
        self.palette = b""
        self.trans_palette = b""
        self.gamma_table: Optional[bytes] = None
        self.set_pass(1 if ihdr.interlace else 0)

    def set_pass(self, interlace_pass: int) -> None:
        """Start interlace pass ``interlace_pass`` (0 for a non-interlaced image)."""
        if not 0 <= interlace_pass <= 7:
            raise ValueError(f"interlace pass out of range: {interlace_pass}")
        self.interlace_pass = interlace_pass
        div_x = INTERLACE_DIV_X[interlace_pass]
        off_x = INTERLACE_OFF_X[interlace_pass]
        scanline_pixels = (self.ihdr.width - off_x + div_x - 1) // div_x
        stride = (scanline_pixels * self.channels * self.ihdr.depth + 7) // 8
        self._ring = bytearray(stride + self.bytes_per_pixel * 2)
        self._cidx = 0
        self._remain = -1
        self.drawing_x = off_x
        self.drawing_y = INTERLACE_OFF_Y[interlace_pass]
        self.filter_type = -1

    def _push(self, value: int) -> None:
        self._ring[self._cidx] = value
        self._cidx = (self._cidx + 1) % len(self._ring)

    def feed(self, data: bytes) -> None:
        """Consume decompressed bytes: filter-type bytes followed by scanline data."""
        hdr = self.ihdr
        bpp = self.bytes_per_pixel
        ring = self._ring
        pos = 0
        while pos < len(data):
            if self.drawing_x >= hdr.width:
                self.drawing_x = INTERLACE_OFF_X[self.interlace_pass]
                self.drawing_y = u32_clamp_add(
                    self.drawing_y, INTERLACE_DIV_Y[self.interlace_pass], hdr.height
                )
                self.filter_type = -1

            if self.drawing_x >= hdr.width or self.drawing_y >= hdr.height:
                if self.interlace_pass == 0 or self.interlace_pass >= 7:
                    return
                # empty passes carry no filter byte, so move on without consuming
                self.set_pass(self.interlace_pass + 1)
                ring = self._ring
                continue

            if self.filter_type < 0:
                filter_type = data[pos]
                if filter_type > 4:
                    raise PngError("Invalid filter type is found")
                self.filter_type = filter_type
                pos += 1
                for _ in range(bpp):
                    self._push(0)
                continue

            size = len(ring)
            cidx = self._cidx
            c = ring[cidx]
            b = ring[(cidx + bpp) % size]
            a = ring[(cidx + size - bpp) % size]
            x = data[pos]
            pos += 1

            if self.filter_type == 1:
                x += a
            elif self.filter_type == 2:
                x += b
            elif self.filter_type == 3:
                x += (a + b) // 2
            elif self.filter_type == 4:
                x += paeth(a, b, c)
            self._push(x & 0xFF)

            if self._remain < 0:
                self._remain = bpp
            self._remain -= 1
            if self._remain == 0:
                xidx = (self._cidx + size - bpp) % size
                self._draw_pixels(xidx)
                self._remain = -1

    def _samples(self, ridx: int) -> Iterator[int]:
        ring = self._ring
        size = len(ring)
        depth = self.ihdr.depth
        if depth < 8:
            mask = (1 << depth) - 1
            bitcount = 0
            while True:
                if bitcount >= 8:
                    bitcount = 0
                    ridx = (ridx + 1) % size
                bitcount += depth
                yield (ring[ridx] >> (8 - bitcount)) & mask
        elif depth == 8:
            while True:
                yield ring[ridx]
                ridx = (ridx + 1) % size
        else:
            while True:
                high = ring[ridx]
                ridx = (ridx + 1) % size
                yield high * 0x100 + ring[ridx]
                ridx = (ridx + 1) % size

    def _is_trans_color(self, values: list[int], n: int) -> bool:
        trans = self.trans_palette
        if len(trans) < n * 2:
            return False
        return all(values[i] == trans[i * 2] * 0x100 + trans[i * 2 + 1] for i in range(n))

    def _draw_pixels(self, xidx: int) -> None:
        hdr = self.ihdr
        maxval = self.maxval
        color_type = hdr.color_type
        samples = self._samples(xidx)
        n_pixels = 1 if hdr.depth == 16 else 8 // hdr.depth
        p = self.interlace_pass

        for _ in range(n_pixels):
            if self.drawing_x >= hdr.width:
                break
            v = [next(samples) for _ in range(self.channels)] + [0] * (4 - self.channels)

            if color_type & 2:
                if color_type & 1:
                    pidx = v[0]
                    if pidx >= len(self.palette) // 3:
                        raise PngError("Color index is out of range")
                    v[0:3] = self.palette[pidx * 3:pidx * 3 + 3]
                    v[3] = self.trans_palette[pidx] if pidx < len(self.trans_palette) else maxval
                elif not color_type & 4:
                    v[3] = 0 if self._is_trans_color(v, 3) else maxval
            else:
                if color_type & 4:
                    v[3] = v[1]
                else:
                    v[3] = 0 if self._is_trans_color(v, 1) else maxval
                v[1] = v[2] = v[0]

            if self.draw is not None:
                rgba = [((s * 255 + maxval // 2) // maxval) & 0xFF for s in v]
                if self.gamma_table is not None:
                    for i in range(3):
                        rgba[i] = self.gamma_table[v[i]]
                w = min(INTERLACE_DIV_X[p] - INTERLACE_OFF_X[p], hdr.width - self.drawing_x)
                h = min(INTERLACE_DIV_Y[p] - INTERLACE_OFF_Y[p], hdr.height - self.drawing_y)
                self.draw(self.drawing_x, self.drawing_y, w, h, tuple(rgba))

            self.drawing_x = u32_clamp_add(self.drawing_x, INTERLACE_DIV_X[p], hdr.width)