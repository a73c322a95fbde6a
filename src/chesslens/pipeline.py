"""End-to-end run: retrieve games, convert boards, run analyzers."""

from __future__ import annotations

from dataclasses import dataclass, field

from chesslens.analyzers import AnalyzeResult, AnalyzerRegistry, default_registry
from chesslens.board_converter import ConversionFailure, convert_records
from chesslens.chess_clients.archive_locator import YearMonth
from chesslens.chess_clients.chesscom_client import build_client
from chesslens.chess_clients.game_retrieval import ArchiveFailure, GameRetrievalPipeline
from chesslens.config import Settings
from chesslens.ports.archive_source import ArchiveSource
from chesslens.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class InsightReport:
    """Everything one run produced."""

    username: str
    start: YearMonth
    end: YearMonth
    games_fetched: int = 0
    boards_converted: int = 0
    archive_failures: list[ArchiveFailure] = field(default_factory=list)
    conversion_failures: list[ConversionFailure] = field(default_factory=list)
    results: list[AnalyzeResult] = field(default_factory=list)


def run_insights(  # noqa: PLR0913
    settings: Settings,
    username: str,
    start: YearMonth,
    end: YearMonth,
    *,
    registry: AnalyzerRegistry | None = None,
    client: ArchiveSource | None = None,
) -> InsightReport:
    """Fetch, convert, and analyze a player's games for a period range.

    Args:
        settings: Active settings; supplies the cache root when no client is given.
        username: Chess.com username.
        start: Inclusive lower period bound.
        end: Inclusive upper period bound.
        registry: Analyzers to run; the bundled ones when omitted.
        client: Archive source; a cached Chess.com client when omitted.

    Returns:
        The run report, with one analyzer result per registered analyzer.

    Raises:
        ChesslensError: When the archive directory cannot be listed or the
            cache is unusable.
    """

    source = client or build_client(settings)
    analyzers = registry if registry is not None else default_registry()

    retrieval = GameRetrievalPipeline(source).collect(username, start, end)
    conversion = convert_records(retrieval.games)
    results = analyzers.run(conversion.boards)

    logger.info(
        "Run for %s complete: %s games, %s boards, %s reports",
        username,
        len(retrieval.games),
        len(conversion.boards),
        len(results),
    )
    return InsightReport(
        username=username,
        start=start,
        end=end,
        games_fetched=len(retrieval.games),
        boards_converted=len(conversion.boards),
        archive_failures=list(retrieval.failures),
        conversion_failures=list(conversion.failures),
        results=results,
    )


def format_report(report: InsightReport) -> str:
    lines = [
        f"{report.username} {report.start}..{report.end}: "
        f"{report.games_fetched} games, {report.boards_converted} boards "
        f"({len(report.archive_failures)} archives failed, "
        f"{len(report.conversion_failures)} games skipped)",
    ]
    for result in report.results:
        lines.append("")
        lines.append(f"--- {result.analyzer_name} ---")
        lines.append(result.description)
    return "\n".join(lines)
