# src/codesum/cli.py
import argparse
import os
import sys
from typing import List, Optional

from codesum.config import (
    DEFAULT_IGNORE_FILENAMES,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_WORKERS,
    LOG_LEVEL_ENV,
    MAX_WORKERS_ENV,
    VERSION,
)
from codesum.core.registry import STRATEGIES, create_aggregator
from codesum.errors import FatalPathError
from codesum.log import get_logger, setup_logging
from codesum.models import AggregationResult, WalkOptions
from codesum.utils.tokenizer import Tokenizer

def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number

def default_max_workers() -> int:
    raw = os.environ.get(MAX_WORKERS_ENV, "").strip()
    return int(raw) if raw.isdigit() else DEFAULT_MAX_WORKERS

def create_arg_parser():
    parser = argparse.ArgumentParser(
        prog="codesum",
        description="Aggregates all the code within a certain path into a single text blob.",
    )
    parser.add_argument("path", type=str, help="Directory (or single file) to aggregate")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Write the content to this file instead of stdout",
    )
    parser.add_argument(
        "-s", "--strategy",
        choices=sorted(STRATEGIES),
        default="concurrent",
        help="Aggregation strategy (default: concurrent)",
    )
    parser.add_argument(
        "-j", "--max-workers",
        type=non_negative_int,
        default=default_max_workers(),
        help=f"Concurrent reads in flight, 0 for one task per file (default: {DEFAULT_MAX_WORKERS}, env {MAX_WORKERS_ENV})",
    )
    parser.add_argument("--hidden", action="store_true", help="Include hidden files and directories")
    parser.add_argument("--no-ignore", action="store_true", help="Do not read ignore files")
    parser.add_argument(
        "--ignore-file",
        action="append",
        default=[],
        metavar="NAME",
        help=f"Additional per-directory ignore file name (always read: {', '.join(DEFAULT_IGNORE_FILENAMES)})",
    )
    parser.add_argument(
        "-e", "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Extra gitignore-style pattern, relative to PATH",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL,
        help=f"Diagnostic log level (default: {DEFAULT_LOG_LEVEL}, env {LOG_LEVEL_ENV})",
    )
    parser.add_argument("--stats", action="store_true", help="Print file and token counts to stderr")
    return parser

def build_options(args: argparse.Namespace) -> WalkOptions:
    filenames = list(DEFAULT_IGNORE_FILENAMES)
    filenames.extend(name for name in args.ignore_file if name not in filenames)
    return WalkOptions(
        hidden=args.hidden,
        respect_ignore_files=not args.no_ignore,
        ignore_filenames=tuple(filenames),
        extra_patterns=tuple(args.exclude),
    )

def write_result(result: AggregationResult, output: Optional[str]) -> None:
    if output:
        with open(output, "w", encoding="utf-8", newline="") as f:
            f.write(result.content)
    else:
        sys.stdout.write(result.content)
        sys.stdout.flush()

def main(argv: Optional[List[str]] = None):
    parser = create_arg_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging(args.log_level)
    except ValueError as e:
        parser.error(str(e))
    logger = get_logger("cli")

    strategy_options = {"options": build_options(args)}
    if args.strategy == "concurrent":
        strategy_options["max_workers"] = args.max_workers or None
    aggregator = create_aggregator(args.strategy, **strategy_options)
    logger.debug("Using %r", aggregator)

    try:
        result = aggregator.aggregate(args.path)
        write_result(result, args.output)
    except FatalPathError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        sys.exit(1)

    if args.stats:
        tokens = Tokenizer.count(result.content)
        print(f"Files: {result.file_count} | Tokens: {tokens}", file=sys.stderr)

if __name__ == "__main__":
    main()
