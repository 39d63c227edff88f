import struct
import zlib

import pytest

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def raw_chunk(type_bytes, data):
    body = type_bytes + data
    return struct.pack(">I", len(data)) + body + zlib.crc32(body).to_bytes(4, "big")


def minimal_png_bytes(extra=b""):
    # 1x1 RGB image: IHDR, IDAT, IEND
    ihdr = raw_chunk(b"IHDR", struct.pack(">IIBBBBB", 1, 1, 8, 2, 0, 0, 0))
    idat = raw_chunk(b"IDAT", zlib.compress(b"\x00\x00\x00\x00"))
    iend = raw_chunk(b"IEND", b"")
    return PNG_SIGNATURE + ihdr + idat + extra + iend


@pytest.fixture
def png_bytes():
    return minimal_png_bytes()


@pytest.fixture
def png_file(tmp_path, png_bytes):
    path = tmp_path / "image.png"
    path.write_bytes(png_bytes)
    return path
