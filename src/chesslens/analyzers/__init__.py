"""Pluggable analyzers that turn boards into textual reports."""

from chesslens.analyzers.base import AnalyzeResult, GameAnalyzer
from chesslens.analyzers.material_balance import MaterialBalanceAnalyzer
from chesslens.analyzers.piece_count import PieceCountAnalyzer
from chesslens.analyzers.registry import AnalyzerRegistry, default_registry, run_analyses

__all__ = [
    "AnalyzeResult",
    "AnalyzerRegistry",
    "GameAnalyzer",
    "MaterialBalanceAnalyzer",
    "PieceCountAnalyzer",
    "default_registry",
    "run_analyses",
]
