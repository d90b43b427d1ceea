"""Command-line interface for company_dedup."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from .config_manager import load_config, saved_preset_and_overrides
from .engine import CompanyDeduplicator, create_config, describe_config
from .errors import (
    DedupError,
    EmptyInputError,
    InputReadError,
    InvalidConfigurationError,
    UnsupportedFormatError,
)
from .file_loader import read_names
from .formatters import render, write_output
from .plugins.export_customizer import export_workbook
from .settings import DEFAULT_OUTPUT_FORMAT, DEFAULT_PRESET, OUTPUT_FORMATS, PRESET_NAMES

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_USAGE = 2


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="company-dedup",
        description="Find probable duplicate company names in a list.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  company-dedup companies.txt\n"
            "  company-dedup companies.csv --column Company --preset aggressive --format csv\n"
            "  company-dedup companies.txt --format xlsx -o groups.xlsx\n"
        ),
    )
    parser.add_argument("input_file", help="Text (one name per line), CSV or XLSX file")
    parser.add_argument(
        "--preset",
        choices=PRESET_NAMES,
        default=None,
        help=f"Threshold preset (default {DEFAULT_PRESET})",
    )
    parser.add_argument("--min-similarity", type=float, help="Override high similarity threshold (0-1)")
    parser.add_argument("--token-match", type=float, help="Override token match threshold (0-1)")
    parser.add_argument("--partial-match", type=float, help="Override partial match threshold (0-1)")
    parser.add_argument("--min-confidence", type=float, help="Override minimum confidence (0-1)")
    parser.add_argument("--max-results", type=int, help="Override max duplicates per name")
    parser.add_argument("--keep-suffixes", action="store_true", help="Do not strip Inc, Ltd, Studio, ...")
    parser.add_argument("--keep-accents", action="store_true", help="Do not fold accented characters")
    parser.add_argument("--remove-numbers", action="store_true", help="Strip digits before comparing")
    parser.add_argument("--column", help="Column holding the names (CSV/XLSX; default first column)")
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=DEFAULT_OUTPUT_FORMAT,
        help=f"Output format (default {DEFAULT_OUTPUT_FORMAT})",
    )
    parser.add_argument("-o", "--output", help="Save results to this file instead of stdout")
    parser.add_argument(
        "--saved-settings",
        action="store_true",
        help="Start from the preset and overrides saved by the desktop app",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show progress details")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    level_name = "INFO" if args.verbose else str(args.log_level).upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


def build_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {
        "high_similarity": args.min_similarity,
        "token_match": args.token_match,
        "partial_match": args.partial_match,
        "min_confidence": args.min_confidence,
        "max_results_per_name": args.max_results,
    }
    if args.keep_suffixes:
        overrides["remove_suffixes"] = False
    if args.keep_accents:
        overrides["handle_accents"] = False
    if args.remove_numbers:
        overrides["remove_numbers"] = True
    return {k: v for k, v in overrides.items() if v is not None}


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)

    preset = args.preset
    overrides: Dict[str, Any] = {}
    if args.saved_settings:
        saved_preset, overrides = saved_preset_and_overrides(load_config())
        preset = preset or saved_preset
    overrides.update(build_overrides(args))

    if args.format == "xlsx" and not args.output:
        logger.error("--format xlsx requires --output")
        return EXIT_USAGE

    try:
        config = create_config(preset or DEFAULT_PRESET, overrides)
    except InvalidConfigurationError as e:
        for err in e.errors:
            logger.error(f"Invalid configuration: {err}")
        return EXIT_USAGE

    try:
        companies = read_names(args.input_file, column=args.column)
    except (OSError, KeyError, EmptyInputError, InputReadError, UnsupportedFormatError) as e:
        logger.error(f"Could not read {args.input_file}: {e}")
        return EXIT_IO_ERROR
    logger.info(f"Loaded {len(companies)} companies")
    logger.info(describe_config(config))

    result = CompanyDeduplicator(config).find_duplicates(companies)

    try:
        if args.format == "xlsx":
            export_workbook(result, args.output)
        else:
            output = render(result, args.format)
            if args.output:
                write_output(args.output, output)
                logger.info(f"Results written to {args.output}")
            else:
                print(output)
    except (OSError, DedupError) as e:
        logger.error(f"Could not write results: {e}")
        return EXIT_IO_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
