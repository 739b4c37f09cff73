"""Software model of a small ST7735S TFT panel: drawing, FONTX text, PNG scanlines, BMP headers and an AXP192 power chip."""

__version__ = "0.1.0"