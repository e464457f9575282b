import argparse
import sys
from pathlib import Path

import yaml

from . import __version__
from .batch import run_batch
from .config import apply_overrides, load_config, validate_config
from .errors import FrameError, UsageError
from .jobs import Job, run_job

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_PARTIAL = 2


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit code 1."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="bbf",
        description="Frame photos on a blurred copy of themselves with a rounded, centred overlay",
    )
    parser.add_argument("--input", type=str, default="", help="Path to input image")
    parser.add_argument(
        "--output",
        type=str,
        default="",
        help="Path to output image (default: bbf_<name> beside the input)",
    )
    parser.add_argument("--input-dir", type=str, default="", help="Path to input directory")
    parser.add_argument(
        "--output-dir",
        type=str,
        default="",
        help="Path to output directory (default: bbf_<name> beside the input directory)",
    )
    parser.add_argument(
        "-c", "--config", type=Path, default=None, help="Path to config.yaml (optional)"
    )
    parser.add_argument("--blur", type=float, default=None, help="Blur radius for background (default: 20.0)")
    parser.add_argument("--width", type=int, default=None, help="Output image width (default: 1920)")
    parser.add_argument("--height", type=int, default=None, help="Output image height (default: 1080)")
    parser.add_argument("--radius", type=int, default=None, help="Overlay corner radius (default: 20)")
    parser.add_argument("--margin", type=int, default=None, help="Overlay margin (default: 20)")
    parser.add_argument(
        "--samples",
        type=int,
        default=None,
        help="Anti-aliasing samples per pixel axis for the corners (default: 4)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _fail(message: str, code: int = EXIT_USAGE) -> None:
    print(message, file=sys.stderr)
    sys.exit(code)


def _report(message: str) -> None:
    print(message, file=sys.stderr)


def _announce(job: Job) -> None:
    print(f"Framing '{job.input_path}' → '{job.resolved_output()}' …")


def _run_single(job: Job) -> int:
    _announce(job)
    result = run_job(job)
    if not result.ok:
        print(f"[{result.stage}] {result.error}", file=sys.stderr)
        return EXIT_USAGE
    print(f"Written → {result.job.output_path}")
    return EXIT_OK


def _run_batch(input_dir: str, output_dir: str, template: Job) -> int:
    print(f"Framing every file under '{input_dir}' …")
    try:
        result = run_batch(input_dir, output_dir, template, report=_report, on_start=_announce)
    except FrameError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    done = len(result.succeeded)
    total = len(result.results)
    print(f"Framed {done} of {total} files → {result.output_dir}")
    if result.traversal_errors:
        print(f"{len(result.traversal_errors)} directory entries could not be read.", file=sys.stderr)
    return result.exit_code


def main(argv=None) -> None:
    """CLI entry point: parse arguments, frame one image or a tree, exit with a status code."""
    args = _build_parser().parse_args(argv)

    input_used = bool(args.input)
    input_dir_used = bool(args.input_dir)

    if input_used and input_dir_used:
        _fail("You may only use --input OR --input-dir")
    if not input_used and not input_dir_used:
        _fail("You must use --input OR --input-dir")

    try:
        config = load_config(args.config)
        config = apply_overrides(
            config,
            blur=args.blur,
            width=args.width,
            height=args.height,
            radius=args.radius,
            margin=args.margin,
            samples=args.samples,
        )
        validate_config(config)
    except UsageError as exc:
        _fail(f"Error: {exc}")
    except (TypeError, yaml.YAMLError) as exc:
        _fail(f"Error: invalid config: {exc}")

    if input_used:
        input_path = Path(args.input)
        if not input_path.is_file():
            _fail(f"Not a file / does not exist: {args.input}")
        job = Job(input_path, Path(args.output) if args.output else None, config)
        sys.exit(_run_single(job))

    if not Path(args.input_dir).is_dir():
        _fail(f"Not a directory / does not exist: {args.input_dir}")
    template = Job(input_path=Path(args.input_dir), config=config)
    sys.exit(_run_batch(args.input_dir, args.output_dir, template))


if __name__ == "__main__":
    main()
