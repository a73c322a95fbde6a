from __future__ import annotations

import logging
from dataclasses import dataclass

from chesslens.cache_store import CacheStore
from chesslens.chess_clients.archive_locator import ArchiveLocator
from chesslens.config import Settings


@dataclass(slots=True)
class BaseChessClientContext:
    """Shared context for chess API clients.

    Attributes:
        settings: Application settings used for API calls.
        logger: Logger for client-specific messages.
        cache: Store holding raw payloads between runs.
    """

    settings: Settings
    logger: logging.Logger
    cache: CacheStore


class BaseChessClient:
    """Base class for archive-based chess API clients.

    Subclasses are expected to implement `list_archives` and `fetch_archive`.
    """

    def __init__(self, context: BaseChessClientContext) -> None:
        self._context = context

    @property
    def settings(self) -> Settings:
        return self._context.settings

    @property
    def logger(self) -> logging.Logger:
        return self._context.logger

    @property
    def cache(self) -> CacheStore:
        return self._context.cache

    def list_archives(self, username: str) -> list[ArchiveLocator]:
        """Return the player's monthly archives, oldest first.

        Raises:
            NotImplementedError: When the subclass does not implement this method.
        """

        raise NotImplementedError("Subclasses must implement list_archives")

    def fetch_archive(self, username: str, locator: ArchiveLocator) -> list[dict]:
        """Return the raw game records stored in one monthly archive.

        Raises:
            NotImplementedError: When the subclass does not implement this method.
        """

        raise NotImplementedError("Subclasses must implement fetch_archive")
