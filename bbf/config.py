from __future__ import annotations

import yaml
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

from .errors import UsageError


@dataclass(frozen=True)
class FrameConfig:
    """Canvas, background and overlay settings shared by every job in a run."""

    width: int = 1920  # canvas width in pixels
    height: int = 1080  # canvas height in pixels
    blur: float = 20.0  # Gaussian blur radius for the background
    radius: int = 20  # overlay corner radius in pixels (0 = square corners)
    margin: int = 20  # inset from each canvas edge before fitting the overlay
    prefix: str = "bbf_"  # tag prepended to derived output file/directory names
    samples: int = 4  # supersampling grid size per axis for corner anti-aliasing
    fallback_dir: str = "out"  # batch output fallback, created beside the input dir


_FIELD_NAMES = frozenset(f.name for f in fields(FrameConfig))
_INT_FIELDS = ("width", "height", "radius", "margin", "samples")


def load_config(path: Optional[Path]) -> FrameConfig:
    """Load configuration from a YAML file, returning defaults if *path* is None or missing.

    Keys that are not ``FrameConfig`` fields are ignored.
    """
    if path is None or not path.exists():
        return FrameConfig()

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, Mapping):
        raise UsageError(f"Config file '{path}' must contain a YAML mapping.")
    return load_config_from_dict(data)


def load_config_from_dict(data: Mapping[str, Any]) -> FrameConfig:
    """Build a config from a mapping using the same schema as the YAML file."""
    known = {k: v for k, v in data.items() if k in _FIELD_NAMES}
    return FrameConfig(**known)


def apply_overrides(config: FrameConfig, **values: Any) -> FrameConfig:
    """Return a copy of *config* with every non-``None`` value in *values* applied.

    Unknown names raise ``TypeError`` (the same as ``dataclasses.replace``).
    """
    overrides = {k: v for k, v in values.items() if v is not None}
    if not overrides:
        return config
    return replace(config, **overrides)


def validate_config(config: FrameConfig) -> FrameConfig:
    """Raise ``UsageError`` if any setting is outside its valid range.

    A margin wide enough to swallow the whole canvas is allowed; the
    compositor then produces a background-only frame.
    """
    for name in _INT_FIELDS:
        value = getattr(config, name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise UsageError(f"{name} must be an integer, got {value!r}.")
    if isinstance(config.blur, bool) or not isinstance(config.blur, (int, float)):
        raise UsageError(f"blur must be a number, got {config.blur!r}.")
    for name in ("prefix", "fallback_dir"):
        if not isinstance(getattr(config, name), str):
            raise UsageError(f"{name} must be a string, got {getattr(config, name)!r}.")

    if config.width <= 0 or config.height <= 0:
        raise UsageError(
            f"Canvas size must be positive, got {config.width}x{config.height}."
        )
    if config.blur < 0:
        raise UsageError(f"blur must be non-negative, got {config.blur}.")
    if config.radius < 0:
        raise UsageError(f"radius must be non-negative, got {config.radius}.")
    if config.margin < 0:
        raise UsageError(f"margin must be non-negative, got {config.margin}.")
    if config.samples < 1:
        raise UsageError(f"samples must be at least 1, got {config.samples}.")
    if not config.prefix:
        raise UsageError("prefix must not be empty.")
    if not config.fallback_dir:
        raise UsageError("fallback_dir must not be empty.")
    return config
