"""Collect a player's games across monthly archives within a period range."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chesslens.chess_clients.archive_locator import ArchiveLocator, YearMonth
from chesslens.chess_clients.chesscom_client import build_client
from chesslens.config import Settings
from chesslens.errors import MalformedResponseError, RemoteError, TransportError
from chesslens.utils.logger import get_logger

if TYPE_CHECKING:
    from chesslens.ports.archive_source import ArchiveSource

logger = get_logger(__name__)

_ISOLATED_ARCHIVE_ERRORS = (RemoteError, MalformedResponseError, TransportError)


@dataclass(frozen=True, slots=True)
class ArchiveFailure:
    """One archive that could not be fetched, and why."""

    locator: ArchiveLocator
    error: Exception


@dataclass(slots=True)
class RetrievalResult:
    """Games gathered from every archive in range, plus isolated failures."""

    games: list[dict] = field(default_factory=list)
    fetched: list[ArchiveLocator] = field(default_factory=list)
    failures: list[ArchiveFailure] = field(default_factory=list)


class GameRetrievalPipeline:
    """Fetch archives in period order, isolating per-archive failures.

    Only a failure to list the archives aborts a run; a bad month is logged,
    recorded, and skipped.
    """

    def __init__(self, source: ArchiveSource, log: logging.Logger | None = None) -> None:
        self._source = source
        self._logger = log or logger

    def collect(self, username: str, start: YearMonth, end: YearMonth) -> RetrievalResult:
        """Gather games from archives whose period lies in ``[start, end]``.

        Args:
            username: Chess.com username.
            start: Inclusive lower period bound.
            end: Inclusive upper period bound.

        Returns:
            The aggregated games with the fetched locators and failures.

        Raises:
            RemoteError: When the archive directory cannot be listed.
            TransportError: When the archive directory cannot be reached.
            MalformedResponseError: When the archive directory is malformed.
            CacheIOError: When the cache cannot be read or written.
        """

        result = RetrievalResult()
        if start > end:
            self._logger.warning("Empty range: %s is after %s", start, end)
        locators = self._source.list_archives(username)
        in_range = self._unique_periods(
            [locator for locator in locators if locator.within(start, end)]
        )
        self._logger.info(
            "Selected %s of %s archives for %s between %s and %s",
            len(in_range),
            len(locators),
            username,
            start,
            end,
        )
        for locator in in_range:
            self._collect_archive(username, locator, result)
        self._logger.info(
            "Retrieved %s games from %s archives (%s failed)",
            len(result.games),
            len(result.fetched),
            len(result.failures),
        )
        return result

    def retrieve(self, username: str, start: YearMonth, end: YearMonth) -> list[dict]:
        """Return only the games of `collect`."""

        return self.collect(username, start, end).games

    def _unique_periods(self, locators: list[ArchiveLocator]) -> list[ArchiveLocator]:
        # first listed URL wins for a repeated month
        unique: dict[YearMonth, ArchiveLocator] = {}
        for locator in locators:
            if locator.period in unique:
                self._logger.warning(
                    "Ignoring duplicate archive %s (%s)", locator, locator.url
                )
                continue
            unique[locator.period] = locator
        return sorted(unique.values())

    def _collect_archive(
        self, username: str, locator: ArchiveLocator, result: RetrievalResult
    ) -> None:
        try:
            games = self._source.fetch_archive(username, locator)
        except _ISOLATED_ARCHIVE_ERRORS as exc:
            self._logger.warning("Skipping archive %s (%s): %s", locator, locator.url, exc)
            result.failures.append(ArchiveFailure(locator=locator, error=exc))
            return
        result.games.extend(games)
        result.fetched.append(locator)


def retrieve_games(
    settings: Settings, username: str, start: YearMonth, end: YearMonth
) -> RetrievalResult:
    """Run a retrieval against Chess.com using the configured cache root."""

    return GameRetrievalPipeline(build_client(settings)).collect(username, start, end)
