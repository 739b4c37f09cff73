"""Scale selection and pixel collection for JPEG images shown on a small screen."""

from __future__ import annotations

import logging

from .colors import rgb565

log = logging.getLogger(__name__)

_FACTORS = {0: 1.0, 1: 0.5, 2: 0.25, 3: 0.125}


def get_scale(screen_width: int, screen_height: int, decode_width: int, decode_height: int) -> int:
    """Pick N so that an image shrunk by 1 / 2**N (N from 0 to 3) best fits the screen."""
    if screen_width <= 0 or screen_height <= 0:
        raise ValueError(f"invalid screen size: {screen_width}x{screen_height}")
    if screen_width >= decode_width and screen_height >= decode_height:
        return 0
    scale = max(decode_width / screen_width, decode_height / screen_height)
    log.debug("scale=%f", scale)
    if scale <= 2.0:
        return 1
    if scale <= 4.0:
        return 2
    return 3


def scaled_size(width: int, height: int, scale: int) -> tuple[int, int]:
    """Size of an image of ``width`` x ``height`` decoded at scale N."""
    try:
        factor = _FACTORS[scale]
    except KeyError:
        raise ValueError(f"scale must be 0 to 3: {scale}") from None
    return int(width * factor), int(height * factor)


class JpegCanvas:
    """Collects decoded RGB888 blocks as RGB565 pixels, cut to the screen size."""

    def __init__(self, screen_width: int, screen_height: int) -> None:
        if screen_width <= 0 or screen_height <= 0:
            raise ValueError(f"invalid screen size: {screen_width}x{screen_height}")
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.pixels = [[0] * screen_width for _ in range(screen_height)]

    def output(self, left: int, top: int, right: int, bottom: int, rgb: bytes) -> bool:
        """Store the block between two inclusive corners; always asks for more."""
        if right < left or bottom < top:
            raise ValueError("block corners are out of order")
        count = (right - left + 1) * (bottom - top + 1)
        if len(rgb) != 3 * count:
            raise ValueError(f"expected {3 * count} bytes of RGB data, got {len(rgb)}")
        triples = iter(zip(rgb[0::3], rgb[1::3], rgb[2::3]))
        for y in range(top, bottom + 1):
            for x in range(left, right + 1):
                r, g, b = next(triples)
                if y < self.screen_height and x < self.screen_width:
                    self.pixels[y][x] = rgb565(r, g, b)
        return True