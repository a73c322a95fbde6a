"""Validation models for chess.com archive payloads."""

from __future__ import annotations

import json

from pydantic import BaseModel, ValidationError

from chesslens.errors import MalformedResponseError


class ArchiveIndexPayload(BaseModel):
    """Directory listing body: ``{"archives": [url, ...]}``.

    Example:
        >>> ArchiveIndexPayload(archives=["https://api.chess.com/pub/player/a/games/2024/01"])
    """

    archives: list[str]


class ArchivePayload(BaseModel):
    """One month's body: ``{"games": [{...}, ...]}``."""

    games: list[dict]


def _decode(raw: bytes, source: str, field: str) -> object:
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedResponseError(field, source, f"invalid JSON: {exc}") from exc


def _validate(model: type[BaseModel], raw: bytes, source: str, field: str) -> BaseModel:
    data = _decode(raw, source, field)
    if not isinstance(data, dict) or field not in data:
        raise MalformedResponseError(field, source, "field missing")
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise MalformedResponseError(field, source, f"wrong shape: {exc.error_count()} error(s)") from exc


def parse_archive_index(raw: bytes, *, source: str) -> ArchiveIndexPayload:
    """Decode and validate a directory listing body.

    Raises:
        MalformedResponseError: When the body is not JSON or lacks ``archives``.
    """

    return _validate(ArchiveIndexPayload, raw, source, "archives")  # type: ignore[return-value]


def parse_archive(raw: bytes, *, source: str) -> ArchivePayload:
    """Decode and validate one month's archive body.

    Raises:
        MalformedResponseError: When the body is not JSON or lacks ``games``.
    """

    return _validate(ArchivePayload, raw, source, "games")  # type: ignore[return-value]
