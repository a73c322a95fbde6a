import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import pytest
import requests

from chesslens.chess_clients.archive_locator import ArchiveLocator, YearMonth
from chesslens.chess_clients.game_retrieval import GameRetrievalPipeline, retrieve_games
from chesslens.errors import CacheIOError, MalformedResponseError, RemoteError, TransportError
from http_fakes import (
    START_FEN,
    FakeResponse,
    archive_url,
    index_url,
    make_routed_get,
    make_settings,
)

GET_TARGET = "chesslens.chess_clients.chesscom_client.requests.get"


def _locator(year: int, month: int) -> ArchiveLocator:
    return ArchiveLocator(YearMonth(year, month), archive_url("player1", year, month))


class FakeArchiveSource:
    """In-memory archive source that records every fetch."""

    def __init__(self, archives: dict[ArchiveLocator, list[dict] | Exception]) -> None:
        self.archives = archives
        self.fetched: list[ArchiveLocator] = []

    def list_archives(self, username: str) -> list[ArchiveLocator]:
        return list(self.archives)

    def fetch_archive(self, username: str, locator: ArchiveLocator) -> list[dict]:
        self.fetched.append(locator)
        outcome = self.archives[locator]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class DuplicateListingSource(FakeArchiveSource):
    """Lists every archive twice, the repeat under a different URL."""

    def list_archives(self, username: str) -> list[ArchiveLocator]:
        listed = list(self.archives)
        repeats = [ArchiveLocator(loc.period, f"{loc.url}?again") for loc in listed]
        return listed + repeats


class FailingDirectorySource(FakeArchiveSource):
    def __init__(self, error: Exception) -> None:
        super().__init__({})
        self.error = error

    def list_archives(self, username: str) -> list[ArchiveLocator]:
        raise self.error


class GameRetrievalPipelineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.source = FakeArchiveSource(
            {
                _locator(2023, 12): [{"fen": START_FEN, "url": "dec"}],
                _locator(2024, 2): [{"fen": START_FEN, "url": "feb"}],
                _locator(2024, 1): [{"fen": START_FEN, "url": "jan-1"}, {"url": "jan-2"}],
                _locator(2024, 3): [{"fen": START_FEN, "url": "mar"}],
            }
        )
        self.pipeline = GameRetrievalPipeline(self.source)

    def test_only_archives_in_range_are_fetched(self) -> None:
        games = self.pipeline.retrieve("player1", YearMonth(2024, 1), YearMonth(2024, 2))

        self.assertEqual([str(loc) for loc in self.source.fetched], ["2024/01", "2024/02"])
        self.assertEqual([game["url"] for game in games], ["jan-1", "jan-2", "feb"])

    def test_bounds_are_inclusive(self) -> None:
        games = self.pipeline.retrieve("player1", YearMonth(2023, 12), YearMonth(2023, 12))

        self.assertEqual([game["url"] for game in games], ["dec"])
        self.assertEqual(len(self.source.fetched), 1)

    def test_archives_are_fetched_in_period_order(self) -> None:
        self.pipeline.retrieve("player1", YearMonth(2023, 1), YearMonth(2025, 1))

        self.assertEqual(
            [str(loc) for loc in self.source.fetched],
            ["2023/12", "2024/01", "2024/02", "2024/03"],
        )

    def test_range_without_archives_returns_empty(self) -> None:
        result = self.pipeline.collect("player1", YearMonth(2020, 1), YearMonth(2020, 6))

        self.assertEqual(result.games, [])
        self.assertEqual(result.failures, [])
        self.assertEqual(self.source.fetched, [])

    def test_reversed_range_returns_empty(self) -> None:
        games = self.pipeline.retrieve("player1", YearMonth(2024, 3), YearMonth(2024, 1))

        self.assertEqual(games, [])
        self.assertEqual(self.source.fetched, [])

    def test_failed_archive_is_isolated(self) -> None:
        failure = RemoteError(500, archive_url("player1", 2024, 2))
        self.source.archives[_locator(2024, 2)] = failure

        with self.assertLogs("chesslens.chess_clients.game_retrieval", level="WARNING") as logs:
            result = self.pipeline.collect("player1", YearMonth(2024, 1), YearMonth(2024, 3))

        self.assertEqual([game["url"] for game in result.games], ["jan-1", "jan-2", "mar"])
        self.assertEqual([str(loc) for loc in result.fetched], ["2024/01", "2024/03"])
        self.assertEqual(len(result.failures), 1)
        self.assertEqual(str(result.failures[0].locator), "2024/02")
        self.assertIs(result.failures[0].error, failure)
        self.assertIn(archive_url("player1", 2024, 2), logs.output[0])

    def test_malformed_and_transport_failures_are_isolated(self) -> None:
        self.source.archives[_locator(2024, 1)] = MalformedResponseError("games", "cache")
        self.source.archives[_locator(2024, 3)] = TransportError(
            archive_url("player1", 2024, 3), "read timed out"
        )

        with self.assertLogs("chesslens.chess_clients.game_retrieval", level="WARNING"):
            result = self.pipeline.collect("player1", YearMonth(2024, 1), YearMonth(2024, 3))

        self.assertEqual([game["url"] for game in result.games], ["feb"])
        self.assertEqual(len(result.failures), 2)

    def test_month_listed_twice_is_fetched_once(self) -> None:
        source = DuplicateListingSource(self.source.archives)

        with self.assertLogs("chesslens.chess_clients.game_retrieval", level="WARNING") as logs:
            result = GameRetrievalPipeline(source).collect(
                "player1", YearMonth(2024, 1), YearMonth(2024, 2)
            )

        self.assertEqual(
            [loc.url for loc in source.fetched],
            [archive_url("player1", 2024, 1), archive_url("player1", 2024, 2)],
        )
        self.assertEqual([game["url"] for game in result.games], ["jan-1", "jan-2", "feb"])
        self.assertEqual(len(logs.output), 2)
        self.assertIn("duplicate", logs.output[0])

    def test_cache_io_errors_abort_the_run(self) -> None:
        self.source.archives[_locator(2024, 1)] = CacheIOError("k", Path("/nope"), "write")

        with self.assertRaises(CacheIOError):
            self.pipeline.collect("player1", YearMonth(2024, 1), YearMonth(2024, 3))

    def test_directory_failure_aborts_the_run(self) -> None:
        pipeline = GameRetrievalPipeline(FailingDirectorySource(RemoteError(404, "x")))

        with self.assertRaises(RemoteError):
            pipeline.retrieve("ghost", YearMonth(2024, 1), YearMonth(2024, 1))


@pytest.mark.parametrize("failing_month", [1, 2, 3])
def test_any_single_failure_keeps_the_other_months(failing_month: int) -> None:
    archives: dict[ArchiveLocator, list[dict] | Exception] = {
        _locator(2024, month): [{"fen": START_FEN, "url": f"m{month}"}] for month in (1, 2, 3)
    }
    archives[_locator(2024, failing_month)] = RemoteError(503, "x")
    source = FakeArchiveSource(archives)

    games = GameRetrievalPipeline(source).retrieve("player1", YearMonth(2024, 1), YearMonth(2024, 3))

    expected = [f"m{month}" for month in (1, 2, 3) if month != failing_month]
    assert [game["url"] for game in games] == expected


def test_retrieve_games_against_chesscom_uses_cache(tmp_path: Path) -> None:
    settings = make_settings(tmp_path / "cache")
    routes = {
        index_url("player1"): FakeResponse(
            200,
            json_data={
                "archives": [archive_url("player1", 2023, 12), archive_url("player1", 2024, 1)]
            },
        ),
        archive_url("player1", 2024, 1): FakeResponse(
            200, json_data={"games": [{"fen": START_FEN}, {"fen": START_FEN}]}
        ),
    }
    captured: list[str] = []

    with patch(GET_TARGET, side_effect=make_routed_get(routes, captured_urls=captured)):
        first = retrieve_games(settings, "player1", YearMonth(2024, 1), YearMonth(2024, 1))
        second = retrieve_games(settings, "player1", YearMonth(2024, 1), YearMonth(2024, 1))

    assert captured == [index_url("player1"), archive_url("player1", 2024, 1)]
    assert len(first.games) == 2
    assert first.games == second.games


def test_retrieve_games_records_http_failure(tmp_path: Path) -> None:
    settings = make_settings(tmp_path / "cache")
    routes = {
        index_url("player1"): FakeResponse(
            200,
            json_data={
                "archives": [archive_url("player1", 2024, 1), archive_url("player1", 2024, 2)]
            },
        ),
        archive_url("player1", 2024, 1): FakeResponse(500, json_data={}),
        archive_url("player1", 2024, 2): FakeResponse(200, json_data={"games": [{"fen": START_FEN}]}),
    }

    with patch(GET_TARGET, side_effect=make_routed_get(routes)):
        result = retrieve_games(settings, "player1", YearMonth(2024, 1), YearMonth(2024, 2))

    assert len(result.games) == 1
    assert isinstance(result.failures[0].error, RemoteError)
    assert result.failures[0].error.status == 500


def test_retrieve_games_records_unreachable_month(tmp_path: Path) -> None:
    settings = make_settings(tmp_path / "cache")
    routed = make_routed_get(
        {
            index_url("player1"): FakeResponse(
                200,
                json_data={
                    "archives": [archive_url("player1", 2024, 1), archive_url("player1", 2024, 2)]
                },
            ),
            archive_url("player1", 2024, 2): FakeResponse(
                200, json_data={"games": [{"fen": START_FEN}]}
            ),
        }
    )

    def fake_get(url: str, *args, **kwargs) -> FakeResponse:
        if url == archive_url("player1", 2024, 1):
            raise requests.ConnectionError("connection refused")
        return routed(url, *args, **kwargs)

    with patch(GET_TARGET, side_effect=fake_get):
        result = retrieve_games(settings, "player1", YearMonth(2024, 1), YearMonth(2024, 2))

    assert len(result.games) == 1
    assert isinstance(result.failures[0].error, TransportError)
    assert result.failures[0].error.url == archive_url("player1", 2024, 1)
