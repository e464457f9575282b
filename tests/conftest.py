"""
Shared pytest fixtures for bbf tests.

This module provides:
- Configuration fixtures (default, small canvas for fast tests)
- Image fixtures (programmatically generated sources written to tmp_path)
- A factory for building photo directory trees
"""
from __future__ import annotations

import io
import random

import pytest
from pathlib import Path
from PIL import Image


# ==============================================================================
# Configuration fixtures
# ==============================================================================

@pytest.fixture
def default_config():
    """Return default configuration."""
    from bbf.config import FrameConfig
    return FrameConfig()


@pytest.fixture
def small_config():
    """Return a small-canvas configuration for fast tests."""
    from bbf.config import FrameConfig
    return FrameConfig(width=64, height=36, blur=2.0, radius=4, margin=4)


# ==============================================================================
# Image fixtures
# ==============================================================================

def make_image(size: tuple[int, int], left=(220, 30, 30), right=(30, 30, 220)) -> Image.Image:
    """Return an RGB image whose left half is *left* and right half is *right*."""
    img = Image.new("RGB", size, left)
    img.paste(right, (size[0] // 2, 0, size[0], size[1]))
    return img


def _noise_image(size: tuple[int, int] = (256, 256)) -> Image.Image:
    """Return incompressible RGB noise, large enough to span several PNG data chunks."""
    rng = random.Random(0)
    return Image.frombytes("RGB", size, rng.randbytes(size[0] * size[1] * 3))


def broken_chunk_png() -> bytes:
    """Return PNG bytes that identify fine but whose second IDAT chunk has a bad type."""
    buf = io.BytesIO()
    _noise_image().save(buf, format="PNG")
    data = bytearray(buf.getvalue())
    first = data.find(b"IDAT")
    second = data.find(b"IDAT", first + 4)
    assert second != -1, "expected the encoder to split image data across chunks"
    data[second:second + 4] = b"\x00\x01\x02\x03"
    return bytes(data)


def truncated_image(suffix: str) -> bytes:
    """Return image bytes for *suffix* with the second half of the file cut off."""
    buf = io.BytesIO()
    fmt = {".jpg": "JPEG", ".jpeg": "JPEG"}.get(suffix.lower(), "PNG")
    _noise_image().save(buf, format=fmt)
    data = buf.getvalue()
    return data[: len(data) // 2]


@pytest.fixture
def broken_png_bytes():
    """Return a PNG whose header is valid but whose pixel data breaks mid-stream."""
    return broken_chunk_png()


@pytest.fixture
def truncated_bytes():
    """Return :func:`truncated_image`, keyed by file suffix."""
    return truncated_image


@pytest.fixture
def image_factory():
    """Return :func:`make_image` for tests that need custom sizes."""
    return make_image


@pytest.fixture
def split_image():
    """Return a 128x72 image, red on the left half and blue on the right."""
    return make_image((128, 72))


@pytest.fixture
def photo_file(tmp_path):
    """Write an 800x600 PNG to tmp_path and return its path."""
    path = tmp_path / "photo.png"
    make_image((800, 600)).save(path)
    return path


@pytest.fixture
def photo_tree(tmp_path):
    """Factory building ``tmp_path/<name>`` with the given relative file names.

    Names ending in ``.txt`` or containing ``corrupt`` get non-image bytes,
    names containing ``broken`` get a PNG with a damaged chunk mid-stream,
    names containing ``truncated`` get an image cut short; everything else
    is a small PNG.
    """
    def _build(names: list[str], name: str = "photos") -> Path:
        root = tmp_path / name
        root.mkdir()
        for rel in names:
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if rel.endswith(".txt") or "corrupt" in rel:
                path.write_bytes(b"definitely not an image")
            elif "broken" in rel:
                path.write_bytes(broken_chunk_png())
            elif "truncated" in rel:
                path.write_bytes(truncated_image(path.suffix))
            else:
                make_image((96, 54)).save(path)
        return root

    return _build
