from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .api import frame_directory, frame_image
from .batch import BatchResult
from .config import FrameConfig
from .errors import (
    DecodeError,
    DirectoryCreationError,
    EncodeError,
    FrameError,
    PathResolutionError,
    TraversalError,
    UsageError,
)

try:
    __version__ = version("bbf")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "BatchResult",
    "DecodeError",
    "DirectoryCreationError",
    "EncodeError",
    "FrameConfig",
    "FrameError",
    "PathResolutionError",
    "TraversalError",
    "UsageError",
    "frame_directory",
    "frame_image",
]
