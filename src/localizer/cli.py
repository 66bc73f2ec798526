"""Command-line entry point.

Scans a resource directory and generates accessor modules for every
base resource bundle found.

Exit Codes:
    0: All units generated or up to date
    1: Generation failed for at least one resource file
    2: Usage or configuration error

Python 3.13+. Uses Babel for i18n.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from localizer import __version__
from localizer.analysis.arguments import ArgCountStrategy
from localizer.config import GeneratorConfig
from localizer.constants import DEFAULT_LOCALE, DEFAULT_RUNTIME_MODULE
from localizer.diagnostics import LocalizerError
from localizer.generator import Generator
from localizer.scanner import FileSet

__all__ = ["main", "parse_args"]

logger = logging.getLogger("localizer")


def parse_args(args: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="localizer",
        description="Generate accessor modules from .properties resource bundles",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--base-dir",
        type=Path,
        required=True,
        help="Directory containing the resource files",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        required=True,
        help="Root directory of the generated modules",
    )
    parser.add_argument(
        "--include",
        action="append",
        default=[],
        metavar="GLOB",
        help="Include files matching pattern (can be repeated; default: all)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GLOB",
        help="Exclude files matching pattern (can be repeated)",
    )
    parser.add_argument(
        "--file-mask",
        default=None,
        metavar="NAME",
        help="Only process resource files with exactly this name",
    )
    parser.add_argument(
        "--runtime-module",
        default=DEFAULT_RUNTIME_MODULE,
        help=f"Module the generated code imports from (default: {DEFAULT_RUNTIME_MODULE})",
    )
    parser.add_argument(
        "--arg-count-strategy",
        choices=[strategy.value for strategy in ArgCountStrategy],
        default=ArgCountStrategy.PROBE.value,
        help="How accessor arity is inferred (default: probe)",
    )
    parser.add_argument(
        "--locale",
        default=DEFAULT_LOCALE,
        help=f"Locale used to render templates during inference (default: {DEFAULT_LOCALE})",
    )
    parser.add_argument(
        "--no-escape-markup",
        dest="escape_markup",
        action="store_false",
        help="Keep '&' and '<' unescaped in generated docstrings",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Process the remaining files after a failure",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log skipped files and per-unit details",
    )
    return parser.parse_args(args)


def main(args: Sequence[str] | None = None) -> int:
    """Main entry point.

    Args:
        args: Command line arguments (None uses sys.argv)

    Returns:
        Exit code: 0 success, 1 generation errors, 2 usage error
    """
    parsed = parse_args(args)
    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not parsed.base_dir.is_dir():
        print(f"[ERROR] Directory not found: {parsed.base_dir}", file=sys.stderr)
        return 2

    try:
        config = GeneratorConfig(
            output_dir=parsed.output_dir,
            base_dir=parsed.base_dir,
            file_mask=parsed.file_mask,
            runtime_module=parsed.runtime_module,
            arg_count_strategy=parsed.arg_count_strategy,
            locale=parsed.locale,
            escape_markup=parsed.escape_markup,
            fail_fast=not parsed.keep_going,
        )
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    fileset = FileSet(
        parsed.base_dir,
        includes=tuple(parsed.include) or ("**",),
        excludes=tuple(parsed.exclude),
    )
    generator = Generator(config, logger=logger)

    try:
        report = generator.run(fileset.scan())
    except LocalizerError as e:
        if e.diagnostic is not None:
            print(e.diagnostic.format_error(), file=sys.stderr)
        else:
            print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    if not report.ok:
        for path, _error in report.failed:
            print(f"[FAILED] {path}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
