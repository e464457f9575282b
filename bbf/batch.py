"""
Batch runs: frame every file under an input directory into a mirrored tree.

Output paths are computed by relativizing each walked file against the input
root and joining the result onto the output root.  If the output root cannot
be created, the run relocates to a ``config.fallback_dir`` directory beside
the input directory.
"""
from __future__ import annotations

import os
import warnings
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, Iterator, Optional

from .errors import DirectoryCreationError, PathResolutionError, TraversalError
from .jobs import Job, JobResult, run_job

Reporter = Callable[[str], None]


@dataclass
class BatchResult:
    """Aggregate outcome of a batch run, in traversal order."""

    input_dir: Path
    output_dir: Path
    relocated: bool = False
    results: list[JobResult] = field(default_factory=list)
    traversal_errors: list[TraversalError] = field(default_factory=list)

    @property
    def succeeded(self) -> list[JobResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> list[JobResult]:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failed and not self.traversal_errors

    @property
    def exit_code(self) -> int:
        """0 when everything succeeded, 2 when any item or traversal step failed."""
        return 0 if self.ok else 2


def _warn(message: str) -> None:
    warnings.warn(message, RuntimeWarning, stacklevel=3)


def _absolute(path: str | Path) -> Path:
    """Return an absolute, normalized form of *path*, or raise ``PathResolutionError``."""
    try:
        return Path(os.path.normpath(Path(path).absolute()))
    except OSError as exc:
        raise PathResolutionError(path, exc) from exc


def default_output_dir(input_dir: Path, prefix: str) -> Path:
    """Return the sibling ``<parent>/<prefix><name>`` of *input_dir*."""
    return input_dir.parent / f"{prefix}{input_dir.name}"


def mirror_path(path: Path, input_dir: Path, output_dir: Path) -> Path:
    """Map *path* under *input_dir* onto the same relative location under *output_dir*."""
    return output_dir / path.relative_to(input_dir)


def prepare_output_dir(
    input_dir: Path,
    output_dir: Path,
    fallback_name: str,
    report: Reporter,
) -> tuple[Path, bool]:
    """Create *output_dir*, relocating beside *input_dir* if that fails.

    Returns ``(directory, relocated)``.  Raises ``DirectoryCreationError`` when
    the fallback cannot be created either.
    """
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        return output_dir, False
    except OSError as exc:
        fallback = _absolute(input_dir.parent / fallback_name)
        report(f"Failed to create output directory {output_dir} ({exc}), relocating to: {fallback}")

    try:
        fallback.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationError(fallback, exc) from exc
    return fallback, True


def _walk_files(
    root: Path,
    skip_dir: Path,
    on_error: Callable[[OSError], None],
) -> Iterator[Path]:
    """Yield every non-directory entry under *root* in sorted order, never entering *skip_dir*."""
    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = sorted(d for d in dirnames if Path(dirpath, d) != skip_dir)
        for name in sorted(filenames):
            yield Path(dirpath, name)


def run_batch(
    input_dir: str | Path,
    output_dir: str | Path | None,
    template: Job,
    *,
    report: Optional[Reporter] = None,
    on_start: Optional[Callable[[Job], None]] = None,
) -> BatchResult:
    """Frame every file under *input_dir* into a mirrored tree under *output_dir*.

    *template* supplies the settings; each file gets a copy with its own
    input and output paths.  Per-item failures and traversal errors are
    passed to *report* (``warnings.warn`` when omitted) and recorded in the
    result.  *on_start*, when given, is called with each item's job just
    before it runs.  Setup failures raise ``PathResolutionError`` or
    ``DirectoryCreationError``.
    """
    emit = report or _warn
    config = template.config

    abs_input = _absolute(input_dir)
    if output_dir is None or str(output_dir) == "":
        output_dir = default_output_dir(abs_input, config.prefix)
    abs_output = _absolute(output_dir)
    abs_output, relocated = prepare_output_dir(abs_input, abs_output, config.fallback_dir, emit)

    result = BatchResult(input_dir=abs_input, output_dir=abs_output, relocated=relocated)

    def _on_walk_error(exc: OSError) -> None:
        err = TraversalError(exc.filename or abs_input, exc)
        result.traversal_errors.append(err)
        emit(f"Error while walking the directory tree: {err}")

    for path in _walk_files(abs_input, abs_output, _on_walk_error):
        job = replace(
            template,
            input_path=path,
            output_path=mirror_path(path, abs_input, abs_output),
        )
        if on_start is not None:
            on_start(job)
        job_result = run_job(job)
        if not job_result.ok:
            emit(f"[{job_result.stage}] {job_result.error}")
        result.results.append(job_result)

    return result
