"""Chess.com archive client with on-disk payload caching."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import quote

import requests
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from chesslens.cache_store import CacheKey, CacheStore
from chesslens.chess_clients.archive_locator import ArchiveLocator
from chesslens.chess_clients.base_chess_client import BaseChessClient, BaseChessClientContext
from chesslens.chess_clients.payloads import parse_archive, parse_archive_index
from chesslens.config import Settings
from chesslens.errors import RemoteError, RetryableRemoteError, TransportError
from chesslens.utils.logger import get_logger

logger = get_logger(__name__)

SOURCE_CACHE = "cache"
SOURCE_REMOTE = "remote"
_MAX_BACKOFF_S = 10
_RETRYABLE_ERRORS = (RetryableRemoteError, requests.ConnectionError, requests.Timeout)

__all__ = [
    "ChesscomClient",
    "ChesscomClientContext",
    "build_client",
]


@dataclass(slots=True)
class ChesscomClientContext(BaseChessClientContext):
    """Context for Chess.com API interactions."""


class ChesscomClient(BaseChessClient):
    """Client for the Chess.com published-data archive endpoints.

    Every payload is cached verbatim after it validates; later calls for the
    same key are served from the cache without touching the network.
    """

    def list_archives(self, username: str) -> list[ArchiveLocator]:
        """Return the player's archive locators sorted by period.

        Args:
            username: Chess.com username.

        Returns:
            One locator per month with recorded games.

        Raises:
            RemoteError: When the directory endpoint answers with a non-2xx status.
            TransportError: When the directory endpoint cannot be reached.
            MalformedResponseError: When the payload lacks a valid ``archives`` list.
            CacheIOError: When the cache cannot be read or written.
        """

        key = CacheKey.for_archive_index(username)
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.info("Using cached archive index for %s", username)
            return self._parse_locators(cached, SOURCE_CACHE)

        url = self.settings.archives_url_template.format(username=quote(username, safe=""))
        raw = self._get(url)
        locators = self._parse_locators(raw, SOURCE_REMOTE)
        self.cache.put(key, raw)
        self.logger.info("Found %s archives for %s", len(locators), username)
        return locators

    def fetch_archive(self, username: str, locator: ArchiveLocator) -> list[dict]:
        """Return the raw game records of one monthly archive.

        Args:
            username: Chess.com username owning the archive.
            locator: Archive to fetch.

        Returns:
            Raw game dictionaries in the order served.

        Raises:
            RemoteError: When the archive endpoint answers with a non-2xx status.
            TransportError: When the archive endpoint cannot be reached.
            MalformedResponseError: When the payload lacks a valid ``games`` list.
            CacheIOError: When the cache cannot be read or written.
        """

        key = CacheKey.for_archive(username, locator.period.cache_name)
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Using cached archive %s for %s", locator, username)
            return parse_archive(cached, source=SOURCE_CACHE).games

        raw = self._get(locator.url)
        games = parse_archive(raw, source=SOURCE_REMOTE).games
        self.cache.put(key, raw)
        self.logger.info("Fetched %s games from archive %s", len(games), locator)
        return games

    @staticmethod
    def _parse_locators(raw: bytes, source: str) -> list[ArchiveLocator]:
        payload = parse_archive_index(raw, source=source)
        return sorted(ArchiveLocator.from_url(url, source=source) for url in payload.archives)

    def _get(self, url: str) -> bytes:
        """Fetch a URL, retrying rate limits, server errors, and transport failures.

        Args:
            url: URL to request.

        Returns:
            The response body bytes.

        Raises:
            RemoteError: When the final attempt answers with a non-2xx status.
            TransportError: When the final attempt gets no response at all.
        """

        retrying = Retrying(
            retry=retry_if_exception_type(_RETRYABLE_ERRORS),
            stop=stop_after_attempt(max(self.settings.max_retries, 0) + 1),
            wait=wait_exponential(
                multiplier=max(self.settings.retry_backoff_ms, 0) / 1000.0,
                max=_MAX_BACKOFF_S,
            ),
            reraise=True,
            before_sleep=before_sleep_log(self.logger, logging.WARNING),
        )
        try:
            return retrying(self._get_once, url)
        except requests.RequestException as exc:
            raise TransportError(url, str(exc)) from exc

    def _get_once(self, url: str) -> bytes:
        self.logger.info("Fetching %s", url)
        response = requests.get(
            url,
            headers={"User-Agent": self.settings.user_agent},
            timeout=self.settings.request_timeout_s,
        )
        if not 200 <= response.status_code < 300:  # noqa: PLR2004
            raise RemoteError.for_status(response.status_code, url)
        return response.content


def build_client(settings: Settings) -> ChesscomClient:
    """Create a client whose cache is rooted at ``settings.cache_dir``."""

    context = ChesscomClientContext(
        settings=settings,
        logger=logger,
        cache=CacheStore(settings.cache_dir),
    )
    return ChesscomClient(context)
