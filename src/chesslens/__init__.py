"""chesslens package entrypoints."""

from chesslens.analyzers import AnalyzeResult, AnalyzerRegistry, GameAnalyzer, default_registry
from chesslens.board_converter import convert_record, convert_records
from chesslens.cache_store import CacheKey, CacheStore
from chesslens.chess_clients import (
    ArchiveLocator,
    ChesscomClient,
    GameRetrievalPipeline,
    YearMonth,
    build_client,
    retrieve_games,
)
from chesslens.cli import main as cli_main
from chesslens.config import Settings, get_settings
from chesslens.pipeline import InsightReport, format_report, run_insights


def main() -> None:
    """Run the command-line interface."""
    raise SystemExit(cli_main())


__all__ = [
    "AnalyzeResult",
    "AnalyzerRegistry",
    "ArchiveLocator",
    "CacheKey",
    "CacheStore",
    "ChesscomClient",
    "GameAnalyzer",
    "GameRetrievalPipeline",
    "InsightReport",
    "Settings",
    "YearMonth",
    "build_client",
    "convert_record",
    "convert_records",
    "default_registry",
    "format_report",
    "get_settings",
    "main",
    "retrieve_games",
    "run_insights",
]
