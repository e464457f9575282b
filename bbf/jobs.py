"""Single-image jobs: resolve the output path, make its directory, frame, save."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from ._image_utils import decode, encode
from .compositor import compose
from .config import FrameConfig
from .errors import DirectoryCreationError, FrameError


@dataclass(frozen=True)
class Job:
    """One source image, its destination and the settings to frame it with.

    An empty ``output_path`` means "derive from the input": the source's
    directory joined with ``config.prefix`` + the source's file name.
    """

    input_path: Path
    output_path: Optional[Path] = None
    config: FrameConfig = field(default_factory=FrameConfig)

    def resolved_output(self) -> Path:
        if not self.output_path or Path(self.output_path) == Path(""):
            return default_output_path(self.input_path, self.config.prefix)
        return Path(self.output_path)


@dataclass(frozen=True)
class JobResult:
    """Outcome of a single job; ``error`` is ``None`` on success."""

    job: Job
    error: Optional[FrameError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def stage(self) -> Optional[str]:
        """Name of the stage that failed (``mkdir``, ``decode``, ``encode``), if any."""
        return None if self.error is None else self.error.stage


def default_output_path(input_path: Path, prefix: str) -> Path:
    """Return ``<input dir>/<prefix><input name>``."""
    input_path = Path(input_path)
    return input_path.parent / f"{prefix}{input_path.name}"


def run_job(job: Job) -> JobResult:
    """Frame ``job.input_path`` into its output path.

    Directory, decode and encode failures are returned in the result rather
    than raised.
    """
    output_path = Path(job.resolved_output())
    job = replace(job, output_path=output_path)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        return JobResult(job, DirectoryCreationError(output_path.parent, exc))

    try:
        src = decode(Path(job.input_path))
        framed = compose(src, job.config)
        encode(framed, output_path)
    except FrameError as exc:
        return JobResult(job, exc)
    return JobResult(job)
