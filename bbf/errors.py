"""Error kinds raised and reported by the framing pipeline."""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class FrameError(Exception):
    """Base class for every error the package raises on purpose."""

    stage = "frame"


class UsageError(FrameError):
    """Bad flag combination, missing input or an invalid config value."""

    stage = "usage"


class _PathError(FrameError):
    """An error tied to a filesystem path, optionally wrapping an underlying cause."""

    _action = "process"

    def __init__(self, path: str | Path, cause: Optional[BaseException] = None) -> None:
        self.path = Path(path)
        self.cause = cause
        message = f"Failed to {self._action}: {path}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)


class PathResolutionError(_PathError):
    stage = "resolve"
    _action = "find absolute path"


class DirectoryCreationError(_PathError):
    stage = "mkdir"
    _action = "create directory"


class DecodeError(_PathError):
    stage = "decode"
    _action = "open image"


class EncodeError(_PathError):
    stage = "encode"
    _action = "save image"


class TraversalError(_PathError):
    stage = "walk"
    _action = "walk directory tree at"
