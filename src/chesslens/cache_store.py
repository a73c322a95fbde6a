"""Flat on-disk store for raw remote payloads."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from chesslens.errors import CacheIOError
from chesslens.utils.logger import get_logger

logger = get_logger(__name__)

ARCHIVES_NAMESPACE = "archives"
GAMES_NAMESPACE = "games"
_ENTRY_SUFFIX = ".json"
_SEPARATORS = ("/", "\\")
_RESERVED_SEGMENTS = {"", ".", ".."}


def normalize_segment(value: str) -> str:
    """Make one key segment safe to use as a file or directory name.

    Args:
        value: Raw segment such as a username or ``2024/01``.

    Returns:
        The segment with path separators replaced by ``-``.

    Raises:
        ValueError: When nothing usable remains.
    """

    segment = value.strip()
    for separator in _SEPARATORS:
        segment = segment.replace(separator, "-")
    if segment in _RESERVED_SEGMENTS:
        raise ValueError(f"Unusable cache key segment: {value!r}")
    return segment


@dataclass(frozen=True, slots=True)
class CacheKey:
    """Location of one cache entry, relative to the cache root."""

    namespace: tuple[str, ...]
    name: str

    @classmethod
    def build(cls, namespace: tuple[str, ...], name: str) -> CacheKey:
        return cls(
            namespace=tuple(normalize_segment(part) for part in namespace),
            name=normalize_segment(name),
        )

    @classmethod
    def for_archive_index(cls, username: str) -> CacheKey:
        """Key for a player's archive directory listing."""

        return cls.build((ARCHIVES_NAMESPACE,), username.lower())

    @classmethod
    def for_archive(cls, username: str, period_name: str) -> CacheKey:
        """Key for one player's monthly archive, named ``YYYY-MM``."""

        return cls.build((GAMES_NAMESPACE, username.lower()), period_name)

    def relative_path(self) -> Path:
        return Path(*self.namespace, f"{self.name}{_ENTRY_SUFFIX}")

    def __str__(self) -> str:
        return "/".join((*self.namespace, self.name))


class CacheStore:
    """Read-through/write-through byte store rooted at a directory.

    Entries are never expired: once written, a key's payload is returned as-is
    until it is removed outside of chesslens.
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: CacheKey) -> Path:
        return self._root / key.relative_path()

    def contains(self, key: CacheKey) -> bool:
        return self.path_for(key).is_file()

    def get(self, key: CacheKey) -> bytes | None:
        """Return the stored payload, or None on a miss.

        Raises:
            CacheIOError: When the entry exists but cannot be read.
        """

        path = self.path_for(key)
        try:
            payload = path.read_bytes()
        except FileNotFoundError:
            logger.debug("Cache miss for %s", key)
            return None
        except OSError as exc:
            raise CacheIOError(str(key), path, "read") from exc
        logger.debug("Cache hit for %s (%s bytes)", key, len(payload))
        return payload

    def put(self, key: CacheKey, payload: bytes) -> Path:
        """Persist a payload verbatim, creating directories as needed.

        Raises:
            CacheIOError: When the directory or file cannot be written.
        """

        path = self.path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(payload)
        except OSError as exc:
            raise CacheIOError(str(key), path, "write") from exc
        logger.debug("Cached %s bytes for %s at %s", len(payload), key, path)
        return path
