"""CLI entry point.

Uses stdlib argparse; each verb handler returns the process exit code.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .driver.count import run_count, run_headers
from .filtering.predicates import FilterOptions, GrepPart, SearchPredicate
from .filtering.select import run_filter, run_grep
from .stats.aggregate import run_stats
from .util.logger import Logger


def _logger(args: argparse.Namespace) -> Logger:
    return Logger(args.log_file, debug=args.debug)


def cmd_count(args: argparse.Namespace) -> int:
    logger = _logger(args)
    try:
        run_count(args.files, logger)
        return 0
    except Exception as e:
        logger.error(str(e))
        return 1


def cmd_headers(args: argparse.Namespace) -> int:
    logger = _logger(args)
    try:
        run_headers(args.files, logger, id_only=args.id_only, desc_only=args.desc_only)
        return 0
    except Exception as e:
        logger.error(str(e))
        return 1


def cmd_stats(args: argparse.Namespace) -> int:
    logger = _logger(args)
    try:
        run_stats(args.file, logger, top_n=args.top_n)
        return 0
    except OSError as e:
        logger.error(f"{args.file}: {e.strerror or e}")
        return 1
    except Exception as e:
        logger.error(str(e))
        return 1


def cmd_filter(args: argparse.Namespace) -> int:
    logger = _logger(args)
    try:
        opts = FilterOptions.build(
            min_len=args.min_len,
            max_len=args.max_len,
            number=args.number,
            ids=args.ids,
            ids_from_file=args.ids_from_file,
        )
        run_filter(args.file, opts, logger, output=args.output)
        return 0
    except OSError as e:
        logger.error(f"{e.filename or args.file}: {e.strerror or e}")
        return 1
    except Exception as e:
        logger.error(str(e))
        return 1


def cmd_grep(args: argparse.Namespace) -> int:
    logger = _logger(args)
    try:
        # Compiled before any input or output is touched
        predicate = SearchPredicate.build(
            args.pattern,
            part=GrepPart(args.part),
            invert=args.invert,
            insensitive=args.insensitive,
        )
        n = run_grep(args.files, predicate, logger, output=args.output)
        logger.debug(f"grep wrote {n} record(s)")
        return 0
    except Exception as e:
        logger.error(str(e))
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seqr",
        description="Query and summarize FASTA/FASTQ files",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-d", "--debug", action="store_true", help="Log debug messages to stderr")
    parser.add_argument("--log-file", type=Path, help="Also append log lines to this file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # count subcommand
    p_count = subparsers.add_parser("count", aliases=["co"], help="Count records per file")
    p_count.add_argument("files", nargs="*", metavar="FILE", default=["-"], help="Input file(s) (default: stdin)")
    p_count.set_defaults(func=cmd_count)

    # headers subcommand
    p_headers = subparsers.add_parser("headers", aliases=["he"], help="Show record headers")
    p_headers.add_argument("files", nargs="*", metavar="FILE", default=["-"], help="Input file(s) (default: stdin)")
    which = p_headers.add_mutually_exclusive_group()
    which.add_argument("-i", "--id", dest="id_only", action="store_true", help="Print ID only")
    which.add_argument("-d", "--desc", dest="desc_only", action="store_true", help="Print description only")
    p_headers.set_defaults(func=cmd_headers)

    # stats subcommand
    p_stats = subparsers.add_parser("stats", aliases=["st"], help="Sequence length statistics")
    p_stats.add_argument("file", nargs="?", metavar="FILE", default="-", help="Input file (default: stdin)")
    p_stats.add_argument("-t", "--top-n", type=int, default=100, metavar="TOP_N", help="Top N by length (default: 100)")
    p_stats.set_defaults(func=cmd_stats)

    # filter subcommand
    p_filter = subparsers.add_parser("filter", aliases=["fi"], help="Keep records by length and/or ID")
    p_filter.add_argument("file", nargs="?", metavar="FILE", default="-", help="Input file (default: stdin)")
    p_filter.add_argument("-m", "--min-len", type=int, default=0, metavar="LEN", help="Minimum sequence length (0: no minimum)")
    p_filter.add_argument("-x", "--max-len", type=int, default=0, metavar="LEN", help="Maximum sequence length (0: no maximum)")
    p_filter.add_argument("-n", "--number", type=int, default=0, metavar="NUM", help="Stop after NUM records (0: no limit)")
    p_filter.add_argument("-i", "--ids", nargs="*", default=[], metavar="IDS", help="Sequence IDs/descriptions to keep")
    p_filter.add_argument("-f", "--ids-from-file", metavar="FILE", help="Read IDs/descriptions to keep from FILE, one per line")
    p_filter.add_argument("-o", "--output", metavar="OUT", help="Output file (default: stdout)")
    p_filter.set_defaults(func=cmd_filter)

    # grep subcommand
    p_grep = subparsers.add_parser("grep", aliases=["gr"], help="Search for records matching a pattern")
    p_grep.add_argument("pattern", metavar="PATTERN", help="Regular expression")
    p_grep.add_argument("files", nargs="*", metavar="FILE", default=["-"], help="Input file(s) (default: stdin)")
    p_grep.add_argument("-o", "--output", metavar="OUTPUT", help="Output file (default: stdout)")
    p_grep.add_argument(
        "-p", "--part", choices=[p.value for p in GrepPart], default=GrepPart.HEAD.value,
        help="Record part to search (default: head)",
    )
    p_grep.add_argument("-v", "--invert-match", dest="invert", action="store_true", help="Select non-matching records")
    p_grep.add_argument("-i", "--insensitive", action="store_true", help="Case-insensitive search")
    p_grep.set_defaults(func=cmd_grep)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
