"""Headers of Windows BMP files."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO

_FILE_HEADER = struct.Struct("<2sIHHI")
_DIB_HEADER = struct.Struct("<IIIHHIIIIII")


class BmpError(ValueError):
    """Raised when a stream does not hold a readable BMP header."""


@dataclass(frozen=True)
class BmpHeader:
    """The 14-byte file header."""

    magic: bytes
    filesz: int
    creator1: int
    creator2: int
    offset: int


@dataclass(frozen=True)
class DibHeader:
    """The 40-byte DIB (version 3) information header."""

    header_sz: int
    width: int
    height: int
    nplanes: int
    depth: int
    compress_type: int
    bmp_bytesz: int
    hres: int
    vres: int
    ncolors: int
    nimpcolors: int


@dataclass(frozen=True)
class BmpFile:
    """Both headers of a BMP file."""

    header: BmpHeader
    dib: DibHeader


def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise BmpError(f"truncated {what}")
    return data


def read_bmp_headers(stream: BinaryIO) -> BmpFile:
    """Read the file and DIB headers from a binary stream positioned at its start."""
    magic = _read_exact(stream, 2, "BMP signature")
    if magic != b"BM":
        raise BmpError("File is not BMP")
    rest = _read_exact(stream, _FILE_HEADER.size - 2, "BMP file header")
    header = BmpHeader(*_FILE_HEADER.unpack(magic + rest))
    dib = DibHeader(*_DIB_HEADER.unpack(_read_exact(stream, _DIB_HEADER.size, "DIB header")))
    return BmpFile(header, dib)