"""Analyzer protocol and result model."""

# pylint: disable=too-few-public-methods

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

import chess
from pydantic import BaseModel, ConfigDict


class AnalyzeResult(BaseModel):
    """One analyzer's report.

    Attributes:
        analyzer_name: Name of the analyzer that produced the report.
        description: Human-readable findings.
        error: Failure message when the analyzer could not finish.

    Example:
        >>> AnalyzeResult(analyzer_name="Piece Count Analyzer", description="...")
    """

    model_config = ConfigDict(frozen=True)

    analyzer_name: str
    description: str
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@runtime_checkable
class GameAnalyzer(Protocol):
    """Interface for analyzers run over a collection of boards.

    Implementations must not mutate the boards they receive and must return a
    result for any input, including an empty sequence. An analyzer that cannot
    finish raises `AnalysisError`.
    """

    def name(self) -> str:
        """Return the analyzer's display name."""

    def analyze(self, boards: Sequence[chess.Board]) -> AnalyzeResult:
        """Return insights for the given boards."""
