from __future__ import annotations

from collections.abc import Sequence

import chess

from chesslens.analyzers.base import AnalyzeResult


class PieceCountAnalyzer:
    """Reports how many pieces remain on the board on average."""

    def name(self) -> str:
        return "Piece Count Analyzer"

    def analyze(self, boards: Sequence[chess.Board]) -> AnalyzeResult:
        if not boards:
            return AnalyzeResult(
                analyzer_name=self.name(),
                description=(
                    "Piece Count Analysis:\n- Total boards analyzed: 0\n- No boards to analyze"
                ),
            )
        total_pieces = sum(len(board.piece_map()) for board in boards)
        average = total_pieces / len(boards)
        return AnalyzeResult(
            analyzer_name=self.name(),
            description=(
                "Piece Count Analysis:\n"
                f"- Total boards analyzed: {len(boards)}\n"
                f"- Average pieces per position: {average:.1f}"
            ),
        )
