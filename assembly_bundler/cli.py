"""Command-line interface for the Assembly Bundler.

WHY: Native builds (CMake, make, MSBuild exec steps) need to turn a set
of managed assemblies into C sources without embedding Python. The CLI
wires settings, the generator, and the optional JSON report behind a
single command.

HOW: Uses argparse to accept assembly paths, repeatable --config-file
paths, the output directory, the skip-unchanged switch, and a report
path. Logging is configured from --verbose / ASSEMBLY_BUNDLER_LOG_LEVEL.
Status messages go to stderr; the exit code is 1 when any assembly
failed.

RULES:
- Positional arguments: one or more assembly files
- Missing assembly files are reported before any output is written
- --skip-unchanged defaults to ASSEMBLY_BUNDLER_SKIP_UNCHANGED (true)
- --output-dir defaults to ASSEMBLY_BUNDLER_OUTPUT_DIR (obj/bundles)
- Status output goes to stderr (not stdout)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from assembly_bundler.config import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SKIP_UNCHANGED,
    BundleSettings,
)
from assembly_bundler.core.generator import BundleGenerator
from assembly_bundler.report import write_report


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, DEFAULT_LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Separate from main() so tests can inspect the parser without running
    a generation.
    """
    parser = argparse.ArgumentParser(
        prog="assembly_bundler",
        description="Embed managed assemblies and their .config files into C "
                    "sources for statically linked hosts.",
    )

    parser.add_argument(
        "assemblies",
        nargs="+",
        help="Assembly files (.dll/.exe) to bundle.",
    )

    parser.add_argument(
        "--config-file",
        dest="config_files",
        action="append",
        default=None,
        help="Candidate .config file. Can be specified multiple times; each "
             "assembly picks the one named <assembly>.config (any case).",
    )

    parser.add_argument(
        "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help="Directory for the generated .bundle.c files (default: %(default)s).",
    )

    parser.add_argument(
        "--skip-unchanged",
        action=argparse.BooleanOptionalAction,
        default=DEFAULT_SKIP_UNCHANGED,
        help="Keep outputs that are newer than their inputs (default: %(default)s).",
    )

    parser.add_argument(
        "--report",
        default=None,
        help="Write a JSON report of generated files and bundled configs to this path.",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m assembly_bundler``.

    argv=None means use sys.argv; explicit argv is for testing.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    missing = [a for a in args.assemblies if not Path(a).is_file()]
    if missing:
        for path in missing:
            _status("Error: Assembly not found: {}".format(path))
        sys.exit(1)

    try:
        settings = BundleSettings(output_dir=Path(args.output_dir), skip_unchanged=args.skip_unchanged)
    except ValueError as e:
        _status("Error: {}".format(e))
        sys.exit(1)

    generator = BundleGenerator(settings)
    ok = generator.execute(args.assemblies, args.config_files or [])
    result = generator.result

    if result is None:
        _status("Bundle generation aborted; see log for details.")
        sys.exit(1)

    regenerated = len(result.generated_files) - len(result.skipped)
    _status("Bundled {} assembly(ies) into {} ({} regenerated, {} unchanged)".format(
        len(result.generated_files), settings.output_dir, regenerated, len(result.skipped)
    ))
    for path in result.bundled_config_files:
        _status("  Config: {}".format(path))
    for failure in result.failures:
        _status("  Failed: {} ({})".format(failure.assembly_path, failure.message))

    if args.report:
        report_path = write_report(result, Path(args.report))
        _status("  Report: {}".format(report_path))

    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
