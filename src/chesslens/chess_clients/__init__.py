"""Public exports for chess archive clients."""

from __future__ import annotations

from chesslens.chess_clients.archive_locator import ArchiveLocator, YearMonth
from chesslens.chess_clients.base_chess_client import BaseChessClient, BaseChessClientContext
from chesslens.chess_clients.chesscom_client import (
    ChesscomClient,
    ChesscomClientContext,
    build_client,
)
from chesslens.chess_clients.game_retrieval import (
    ArchiveFailure,
    GameRetrievalPipeline,
    RetrievalResult,
    retrieve_games,
)

__all__ = [
    "ArchiveFailure",
    "ArchiveLocator",
    "BaseChessClient",
    "BaseChessClientContext",
    "ChesscomClient",
    "ChesscomClientContext",
    "GameRetrievalPipeline",
    "RetrievalResult",
    "YearMonth",
    "build_client",
    "retrieve_games",
]
