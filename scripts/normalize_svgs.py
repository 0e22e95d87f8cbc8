#!/usr/bin/env python3
"""Normalize SVG icons in a directory to a uniform square canvas."""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_normalize.normalize import (
    DEFAULT_DIRECTORY,
    DEFAULT_SIZE,
    FileProcessingError,
    NormalizeConfig,
    NormalizeReport,
    format_file_result,
    format_normalize_report,
    format_start_message,
    iter_normalize_directory,
    parse_target_size,
)


def build_config(argv: list[str] | None = None) -> NormalizeConfig:
    """Build the run configuration from command-line arguments.

    Only --dir and --size are recognized; everything else, including -h,
    is ignored. A flag given without a value keeps its default, and a
    non-numeric size falls back to the default size.

    Args:
        argv: Argument list (default: sys.argv[1:]).

    Returns:
        NormalizeConfig for the run.
    """
    parser = argparse.ArgumentParser(
        description="Normalize SVG icons in a directory to a uniform square canvas.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "--dir",
        type=Path,
        nargs="?",
        default=DEFAULT_DIRECTORY,
        help=f"Directory containing SVG files (default: {DEFAULT_DIRECTORY})",
    )
    parser.add_argument(
        "--size",
        type=str,
        nargs="?",
        help=f"Target square size in pixels (default: {DEFAULT_SIZE:g})",
    )

    args, _unknown = parser.parse_known_args(argv)

    return NormalizeConfig(
        directory=args.dir if args.dir is not None else DEFAULT_DIRECTORY,
        target_size=parse_target_size(args.size),
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code:
        - 0: Success (including skipped files)
        - 1: Missing directory, malformed path data or I/O error
    """
    config = build_config(argv)

    if not config.directory.is_dir():
        print(f"Error: Input folder does not exist: {config.directory}", file=sys.stderr)
        return 1

    print(format_start_message(config))

    target = config.target
    report = NormalizeReport(directory=config.directory, target_size=config.target_size)

    try:
        for result in iter_normalize_directory(config):
            report.results.append(result)
            if result.is_skipped:
                print(f"Warning: {format_file_result(result, target)}", file=sys.stderr)
            else:
                print(format_file_result(result, target))
    except FileProcessingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Failed to list directory: {e}", file=sys.stderr)
        return 1

    print(format_normalize_report(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
