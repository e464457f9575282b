"""Programmatic API for framing images from Python code."""
from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from .batch import BatchResult, Reporter, run_batch
from .config import FrameConfig, load_config, load_config_from_dict, validate_config
from .errors import UsageError
from .jobs import Job, run_job


def frame_image(
    input_path: str | Path,
    output_path: str | Path | None = None,
    *,
    config: FrameConfig | Mapping[str, Any] | str | Path | None = None,
) -> Path:
    """Frame a single image and return the path it was written to.

    Args:
        input_path: Existing image file.
        output_path: Destination file.  Defaults to ``<prefix><name>`` beside
            the input.
        config: One of:
            - ``None`` (use defaults)
            - ``FrameConfig`` instance
            - dict-like mapping using the same schema as the YAML config
            - path to a YAML config file

    Raises:
        UsageError: *input_path* is not an existing file or *config* is invalid.
        DirectoryCreationError, DecodeError, EncodeError: the job failed.
    """
    resolved_config = validate_config(_resolve_config(config))
    path = Path(input_path)
    if not path.is_file():
        raise UsageError(f"Not a file / does not exist: {path}")

    result = run_job(Job(path, Path(output_path) if output_path else None, resolved_config))
    if result.error is not None:
        raise result.error
    return result.job.resolved_output()


def frame_directory(
    input_dir: str | Path,
    output_dir: str | Path | None = None,
    *,
    config: FrameConfig | Mapping[str, Any] | str | Path | None = None,
    report: Optional[Reporter] = None,
) -> BatchResult:
    """Frame every file under *input_dir* into a mirrored tree.

    Per-item failures do not raise; inspect ``BatchResult.failed`` and
    ``BatchResult.traversal_errors``.  *config* accepts the same forms as
    :func:`frame_image`.
    """
    resolved_config = validate_config(_resolve_config(config))
    path = Path(input_dir)
    if not path.is_dir():
        raise UsageError(f"Not a directory / does not exist: {path}")

    template = Job(input_path=path, config=resolved_config)
    return run_batch(path, output_dir, template, report=report)


def _resolve_config(
    config: FrameConfig | Mapping[str, Any] | str | Path | None,
) -> FrameConfig:
    if config is None:
        return FrameConfig()
    if isinstance(config, FrameConfig):
        return config
    if isinstance(config, Mapping):
        return load_config_from_dict(config)
    if isinstance(config, (str, Path)):
        return load_config(Path(config))
    raise TypeError(
        "config must be None, FrameConfig, dict-like mapping, or a config file path."
    )
