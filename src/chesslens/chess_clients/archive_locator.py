"""Period and archive locator value types."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from chesslens.errors import MalformedResponseError

_PERIOD_PATTERN = re.compile(r"^\s*(\d{4})[/-](\d{1,2})\s*$")
_ARCHIVE_URL_PATTERN = re.compile(r"/games/(\d{4})/(\d{1,2})/?$")
_MIN_MONTH = 1
_MAX_MONTH = 12


@dataclass(frozen=True, order=True, slots=True)
class YearMonth:
    """A calendar month, ordered by ``(year, month)``.

    Example:
        >>> YearMonth.parse("2024/01") <= YearMonth(2024, 3)
        True
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not _MIN_MONTH <= self.month <= _MAX_MONTH:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")

    @classmethod
    def parse(cls, value: str) -> YearMonth:
        """Parse ``YYYY/MM`` or ``YYYY-MM``.

        Raises:
            ValueError: When the text is not a valid period.
        """

        match = _PERIOD_PATTERN.match(value)
        if match is None:
            raise ValueError(f"Expected a period like YYYY/MM, got {value!r}")
        year, month = (int(part) for part in match.groups())
        return cls(year, month)

    @property
    def cache_name(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def __str__(self) -> str:
        return f"{self.year:04d}/{self.month:02d}"


@dataclass(frozen=True, order=True, slots=True)
class ArchiveLocator:
    """Reference to one month's archive; compares by period only."""

    period: YearMonth
    url: str = field(compare=False)

    @classmethod
    def from_url(cls, url: object, *, source: str) -> ArchiveLocator:
        """Build a locator from an archive URL ending in ``/games/YYYY/MM``.

        Args:
            url: Archive URL taken from a directory payload.
            source: Where the payload came from, ``"cache"`` or ``"remote"``.

        Raises:
            MalformedResponseError: When the URL does not name a month.
        """

        if not isinstance(url, str):
            raise MalformedResponseError("archives", source, f"non-string entry {url!r}")
        match = _ARCHIVE_URL_PATTERN.search(url)
        if match is None:
            raise MalformedResponseError("archives", source, f"unrecognized archive URL {url!r}")
        year, month = (int(part) for part in match.groups())
        try:
            period = YearMonth(year, month)
        except ValueError as exc:
            raise MalformedResponseError("archives", source, str(exc)) from exc
        return cls(period=period, url=url)

    def within(self, start: YearMonth, end: YearMonth) -> bool:
        return start <= self.period <= end

    def __str__(self) -> str:
        return str(self.period)
