"""Command-line entry point."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from chesslens.cache_store import normalize_segment
from chesslens.chess_clients.archive_locator import YearMonth
from chesslens.config import get_settings
from chesslens.errors import ChesslensError
from chesslens.pipeline import format_report, run_insights
from chesslens.utils.logger import get_logger, resolve_level, set_level

logger = get_logger(__name__)


def _username(value: str) -> str:
    try:
        normalize_segment(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid username: {value!r}") from exc
    return value.strip()


def _period(value: str) -> YearMonth:
    try:
        return YearMonth.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _level(value: str) -> int:
    try:
        return resolve_level(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chesslens",
        description="Analyze a Chess.com player's archived games for a range of months.",
    )
    parser.add_argument("username", type=_username, help="Chess.com username")
    parser.add_argument("start", type=_period, help="first month, YYYY/MM")
    parser.add_argument("end", type=_period, nargs="?", help="last month, YYYY/MM (default: start)")
    parser.add_argument("--cache-dir", type=Path, help="directory for cached payloads")
    parser.add_argument("--log-level", type=_level, help="logging level, e.g. DEBUG")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    overrides: dict[str, object] = {}
    if args.cache_dir is not None:
        overrides["cache_dir"] = args.cache_dir
    settings = get_settings(**overrides)
    set_level(args.log_level if args.log_level is not None else settings.log_level)

    end = args.end or args.start
    try:
        report = run_insights(settings, args.username, args.start, end)
    except ChesslensError as exc:
        logger.error("Run failed: %s", exc)
        return 1
    print(format_report(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
