"""Port interface for monthly archive sources."""

# pylint: disable=too-few-public-methods

from __future__ import annotations

from typing import Protocol

from chesslens.chess_clients.archive_locator import ArchiveLocator


class ArchiveSource(Protocol):
    """Stable interface for clients that serve games grouped by month."""

    def list_archives(self, username: str) -> list[ArchiveLocator]:
        """Return the player's archive locators."""

    def fetch_archive(self, username: str, locator: ArchiveLocator) -> list[dict]:
        """Return the raw game records of one archive."""
