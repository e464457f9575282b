"""
Frame composition: blurred fill background plus a rounded, centred overlay.

Pipeline
--------
1. Fill-resize the source to the canvas and blur it.
2. Fit-resize the source into the canvas minus the margin on every side.
3. Round the overlay's corners (radius clamped to half its shorter side).
4. Alpha-blend the overlay onto the background, centred.
"""
from __future__ import annotations

from PIL import Image

from ._image_utils import alpha_composite, blur, fill_resize, fit_resize
from .config import FrameConfig
from .mask import round_corners

_OVERLAY_OPACITY = 1.0


def overlay_box(config: FrameConfig) -> tuple[int, int]:
    """Return the ``(max_width, max_height)`` box the overlay must fit in."""
    return config.width - 2 * config.margin, config.height - 2 * config.margin


def make_background(src: Image.Image, config: FrameConfig) -> Image.Image:
    """Return the canvas-sized, blurred background."""
    bg = fill_resize(src, config.width, config.height)
    return blur(bg, config.blur)


def make_overlay(src: Image.Image, config: FrameConfig) -> Image.Image | None:
    """Return the rounded RGBA overlay, or ``None`` when the margin leaves no room."""
    max_width, max_height = overlay_box(config)
    if max_width <= 0 or max_height <= 0:
        return None

    overlay = fit_resize(src, max_width, max_height)
    radius = max(0.0, min(config.radius, min(overlay.size) / 2))
    return round_corners(overlay, radius, samples=config.samples)


def compose(src: Image.Image, config: FrameConfig) -> Image.Image:
    """Build the framed RGB image for *src* at ``config.width × config.height``."""
    bg = make_background(src, config)
    overlay = make_overlay(src, config)
    if overlay is None:
        return bg.convert("RGB")

    x = (config.width - overlay.width) // 2
    y = (config.height - overlay.height) // 2
    return alpha_composite(bg, overlay, (x, y), _OVERLAY_OPACITY)
