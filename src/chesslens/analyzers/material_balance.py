from __future__ import annotations

from collections.abc import Sequence

import chess

from chesslens.analyzers.base import AnalyzeResult

PIECE_VALUES = {
    chess.QUEEN: 9,
    chess.ROOK: 5,
    chess.BISHOP: 3,
    chess.KNIGHT: 3,
    chess.PAWN: 1,
}


def material_for(board: chess.Board, color: chess.Color) -> int:
    """Sum of standard piece values for one side; kings count as zero."""

    return sum(
        value * len(board.pieces(piece_type, color)) for piece_type, value in PIECE_VALUES.items()
    )


class MaterialBalanceAnalyzer:
    """Compares White's and Black's material across positions."""

    def name(self) -> str:
        return "Material Balance Analyzer"

    def analyze(self, boards: Sequence[chess.Board]) -> AnalyzeResult:
        if not boards:
            return AnalyzeResult(
                analyzer_name=self.name(),
                description=(
                    "Material Balance Analysis:\n"
                    "- Total boards analyzed: 0\n"
                    "- No boards to analyze"
                ),
            )
        white_ahead = black_ahead = level = 0
        white_total = black_total = 0
        for board in boards:
            white = material_for(board, chess.WHITE)
            black = material_for(board, chess.BLACK)
            white_total += white
            black_total += black
            if white > black:
                white_ahead += 1
            elif black > white:
                black_ahead += 1
            else:
                level += 1
        count = len(boards)
        return AnalyzeResult(
            analyzer_name=self.name(),
            description=(
                "Material Balance Analysis:\n"
                f"- Total boards analyzed: {count}\n"
                f"- Average material (White/Black): {white_total / count:.1f} / "
                f"{black_total / count:.1f}\n"
                f"- White ahead: {white_ahead}, Black ahead: {black_ahead}, Level: {level}"
            ),
        )
