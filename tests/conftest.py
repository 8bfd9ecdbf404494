import struct
import zlib

import pytest
from PIL import Image

from bckt_photo.config import Config


def write_jpeg(path, size=(64, 48), exif=None, color="red"):
    """Writes a small JPEG, optionally carrying the given {tag_id: value} EXIF."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with Image.new("RGB", size, color=color) as im:
        if exif:
            e = Image.Exif()
            for tag, value in exif.items():
                e[tag] = value
            im.save(path, exif=e.tobytes())
        else:
            im.save(path)
    return path


def _png_chunk(kind, data):
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))


def write_png_header(path, width, height):
    """Writes a PNG that claims width x height but carries no pixel data."""
    path.parent.mkdir(parents=True, exist_ok=True)
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    path.write_bytes(b"\x89PNG\r\n\x1a\n" + _png_chunk(b"IHDR", ihdr) + _png_chunk(b"IDAT", b"") + _png_chunk(b"IEND", b""))
    return path


@pytest.fixture
def make_jpeg():
    return write_jpeg


@pytest.fixture
def cfg(tmp_path):
    """Config writing posts under tmp_path/posts with no EXIF mapping."""
    return Config(posts_dir=tmp_path / "posts")


@pytest.fixture
def make_png_header():
    return write_png_header
