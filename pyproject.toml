[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tftkit"
version = "0.1.0"
description = "Software model of a small ST7735S TFT panel: frame buffer, drawing primitives, FONTX text, PNG scanline decoding and BMP headers"
requires-python = ">=3.10"
dependencies = []
keywords = ["tft", "st7735", "fontx", "png", "bmp", "rgb565", "framebuffer", "axp192"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tftkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
