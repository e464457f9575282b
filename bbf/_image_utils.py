"""Pillow-backed image primitives used by the compositor and job runner."""
from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageFilter, ImageOps

from .errors import DecodeError, EncodeError

_RESAMPLE = Image.Resampling.LANCZOS


def decode(path: Path) -> Image.Image:
    """Open *path* and return a fully loaded RGB image."""
    try:
        with Image.open(path) as img:
            img.load()
            return img.convert("RGB")
    except (OSError, ValueError, SyntaxError, EOFError, Image.DecompressionBombError) as exc:
        raise DecodeError(path, exc) from exc


def encode(img: Image.Image, path: Path) -> None:
    """Write *img* to *path*; the format follows the file extension."""
    try:
        img.save(path)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(path, exc) from exc


def fill_resize(img: Image.Image, width: int, height: int) -> Image.Image:
    """Scale *img* to cover ``width × height`` and crop the overflow around the centre."""
    return ImageOps.fit(img, (width, height), method=_RESAMPLE, centering=(0.5, 0.5))


def fit_size(src_width: int, src_height: int, max_width: int, max_height: int) -> tuple[int, int]:
    """Return the largest aspect-preserving size that fits inside ``max_width × max_height``.

    One side always equals its bound; neither side drops below 1 pixel.
    """
    scale = min(max_width / src_width, max_height / src_height)
    width = min(max_width, max(1, round(src_width * scale)))
    height = min(max_height, max(1, round(src_height * scale)))
    return width, height


def fit_resize(img: Image.Image, max_width: int, max_height: int) -> Image.Image:
    """Scale *img* to fit entirely inside ``max_width × max_height`` without cropping."""
    size = fit_size(img.width, img.height, max_width, max_height)
    if size == img.size:
        return img.copy()
    return img.resize(size, _RESAMPLE)


def blur(img: Image.Image, strength: float) -> Image.Image:
    """Gaussian-blur *img*; a strength of 0 returns an unmodified copy."""
    if strength <= 0:
        return img.copy()
    return img.filter(ImageFilter.GaussianBlur(radius=strength))


def alpha_composite(
    background: Image.Image,
    overlay: Image.Image,
    offset: tuple[int, int],
    opacity: float = 1.0,
) -> Image.Image:
    """Blend *overlay* onto an opaque copy of *background* at *offset*.

    Per-pixel overlay alpha is the blend weight, scaled by *opacity*.
    Returns an RGB image the size of *background*.
    """
    canvas = background.convert("RGBA")
    layer = overlay.convert("RGBA")
    if opacity < 1.0:
        alpha = layer.getchannel("A").point(lambda v: round(v * max(opacity, 0.0)))
        layer.putalpha(alpha)
    canvas.alpha_composite(layer, dest=offset)
    return canvas.convert("RGB")
