"""Turn raw game records into python-chess boards."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

import chess

from chesslens.errors import ConversionError, InvalidEncodingError, MissingFieldError
from chesslens.utils.logger import get_logger

logger = get_logger(__name__)

FEN_FIELD = "fen"
_IDENTITY_FIELDS = ("url", "uuid")


@dataclass(frozen=True, slots=True)
class ConversionFailure:
    """A record that could not be converted."""

    index: int
    record_id: str
    error: ConversionError


@dataclass(slots=True)
class ConversionResult:
    boards: tuple[chess.Board, ...] = ()
    failures: list[ConversionFailure] = field(default_factory=list)


def record_identity(record: Mapping[str, object], index: int) -> str:
    """Best human-readable handle for a record in log messages."""

    for name in _IDENTITY_FIELDS:
        value = record.get(name)
        if isinstance(value, str) and value:
            return value
    return f"#{index}"


def convert_record(record: Mapping[str, object]) -> chess.Board:
    """Build a board from the record's FEN field.

    Args:
        record: Raw game record from an archive.

    Returns:
        The parsed position.

    Raises:
        MissingFieldError: When the record carries no usable FEN string.
        InvalidEncodingError: When the FEN does not parse.
    """

    fen = record.get(FEN_FIELD)
    if not isinstance(fen, str) or not fen.strip():
        raise MissingFieldError(FEN_FIELD)
    try:
        return chess.Board(fen)
    except ValueError as exc:
        raise InvalidEncodingError(fen, str(exc)) from exc


def convert_records(records: Iterable[Mapping[str, object]]) -> ConversionResult:
    """Convert every record, skipping the ones that fail.

    Args:
        records: Raw game records.

    Returns:
        The converted boards, in input order, and the isolated failures.
    """

    boards: list[chess.Board] = []
    failures: list[ConversionFailure] = []
    for index, record in enumerate(records):
        try:
            boards.append(convert_record(record))
        except ConversionError as exc:
            record_id = record_identity(record, index)
            logger.warning("Skipping game %s: %s", record_id, exc)
            failures.append(ConversionFailure(index=index, record_id=record_id, error=exc))
    if failures:
        logger.info("Converted %s boards, %s records skipped", len(boards), len(failures))
    return ConversionResult(boards=tuple(boards), failures=failures)
