import io
import struct

import pytest

from tftkit.bmpfile import BmpError, BmpFile, BmpHeader, DibHeader, read_bmp_headers

FILE_FIELDS = (b"BM", 1234, 0, 0, 54)
DIB_FIELDS = (40, 80, 60, 1, 24, 0, 14400, 2835, 2835, 0, 0)


def _headers(magic=b"BM"):
    return struct.pack("<2sIHHI", magic, *FILE_FIELDS[1:]) + struct.pack(
        "<IIIHHIIIIII", *DIB_FIELDS
    )


def test_reads_all_fields():
    result = read_bmp_headers(io.BytesIO(_headers() + b"\x00" * 16))
    assert result == BmpFile(BmpHeader(*FILE_FIELDS), DibHeader(*DIB_FIELDS))


def test_stream_left_after_headers():
    stream = io.BytesIO(_headers() + b"pixels")
    read_bmp_headers(stream)
    assert stream.read() == b"pixels"


def test_header_sizes_fixed_by_format():
    stream = io.BytesIO(_headers())
    read_bmp_headers(stream)
    assert stream.tell() == 54


def test_dib_values():
    dib = read_bmp_headers(io.BytesIO(_headers())).dib
    assert (dib.width, dib.height, dib.depth, dib.compress_type) == (80, 60, 24, 0)


def test_rejects_wrong_magic():
    with pytest.raises(BmpError, match="not BMP"):
        read_bmp_headers(io.BytesIO(_headers(magic=b"BA")))


def test_rejects_empty_stream():
    with pytest.raises(BmpError):
        read_bmp_headers(io.BytesIO(b""))


def test_rejects_truncated_dib():
    with pytest.raises(BmpError, match="DIB"):
        read_bmp_headers(io.BytesIO(_headers()[:30]))


def test_error_is_value_error():
    with pytest.raises(ValueError):
        read_bmp_headers(io.BytesIO(b"BM\x00"))