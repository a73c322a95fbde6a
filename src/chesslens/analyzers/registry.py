"""Ordered analyzer registry and the runner that drives it."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

import chess

from chesslens.analyzers.base import AnalyzeResult, GameAnalyzer
from chesslens.analyzers.material_balance import MaterialBalanceAnalyzer
from chesslens.analyzers.piece_count import PieceCountAnalyzer
from chesslens.errors import AnalysisError
from chesslens.utils.logger import get_logger

logger = get_logger(__name__)


def run_analyses(
    boards: Iterable[chess.Board], analyzers: Iterable[GameAnalyzer]
) -> list[AnalyzeResult]:
    """Run each analyzer over the same boards, in order.

    Args:
        boards: Converted positions; frozen into a tuple before any analyzer runs.
        analyzers: Analyzers in registration order.

    Returns:
        Exactly one result per analyzer. An `AnalysisError` becomes a failed
        result for that analyzer and the run moves on.
    """

    snapshot = tuple(boards)
    results: list[AnalyzeResult] = []
    for analyzer in analyzers:
        name = analyzer.name()
        logger.info("Running %s on %s boards", name, len(snapshot))
        try:
            result = analyzer.analyze(snapshot)
        except AnalysisError as exc:
            logger.warning("Analyzer %s failed: %s", name, exc.message)
            result = AnalyzeResult(
                analyzer_name=name,
                description=f"Analysis failed: {exc.message}",
                error=exc.message,
            )
        results.append(result)
    return results


class AnalyzerRegistry:
    """Holds analyzers in the order they were registered."""

    def __init__(self, analyzers: Iterable[GameAnalyzer] = ()) -> None:
        self._analyzers: list[GameAnalyzer] = []
        for analyzer in analyzers:
            self.register(analyzer)

    def register(self, analyzer: GameAnalyzer) -> GameAnalyzer:
        """Append an analyzer.

        Raises:
            TypeError: When the object lacks ``name`` or ``analyze``.
            ValueError: When an analyzer with the same name is registered.
        """

        if not isinstance(analyzer, GameAnalyzer):
            raise TypeError(f"{type(analyzer).__name__} does not implement GameAnalyzer")
        name = analyzer.name()
        if name in self.names():
            raise ValueError(f"Analyzer already registered: {name}")
        self._analyzers.append(analyzer)
        return analyzer

    def names(self) -> list[str]:
        return [analyzer.name() for analyzer in self._analyzers]

    def run(self, boards: Sequence[chess.Board]) -> list[AnalyzeResult]:
        return run_analyses(boards, self._analyzers)

    def __iter__(self) -> Iterator[GameAnalyzer]:
        return iter(list(self._analyzers))

    def __len__(self) -> int:
        return len(self._analyzers)


def default_registry() -> AnalyzerRegistry:
    """Registry preloaded with the bundled analyzers."""

    return AnalyzerRegistry([PieceCountAnalyzer(), MaterialBalanceAnalyzer()])
