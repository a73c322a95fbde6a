from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_BASE_URL = "https://api.chess.com/pub"
DEFAULT_USER_AGENT = "chesslens/0.1.0"


def _env_str(name: str, default: str) -> str:
    return os.getenv(name, default).strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _default_data_dir() -> Path:
    return Path(os.getenv("CHESSLENS_DATA_DIR", "data"))


def _default_cache_dir() -> Path:
    return Path(os.getenv("CHESSLENS_CACHE_DIR", _default_data_dir() / "cache"))


@dataclass(slots=True)
class Settings:
    """Runtime configuration for fetching, caching, and analysis."""

    base_url: str = field(default_factory=lambda: _env_str("CHESSLENS_BASE_URL", DEFAULT_BASE_URL))
    user_agent: str = field(
        default_factory=lambda: _env_str("CHESSLENS_USER_AGENT", DEFAULT_USER_AGENT)
    )
    cache_dir: Path = field(default_factory=_default_cache_dir)
    request_timeout_s: int = field(
        default_factory=lambda: _env_int("CHESSLENS_REQUEST_TIMEOUT_S", 20)
    )
    max_retries: int = field(default_factory=lambda: _env_int("CHESSLENS_MAX_RETRIES", 2))
    retry_backoff_ms: int = field(
        default_factory=lambda: _env_int("CHESSLENS_RETRY_BACKOFF_MS", 500)
    )
    log_level: str = field(default_factory=lambda: _env_str("CHESSLENS_LOG_LEVEL", "INFO"))

    def __post_init__(self) -> None:
        self.cache_dir = Path(self.cache_dir)
        self.base_url = self.base_url.rstrip("/")

    @property
    def archives_url_template(self) -> str:
        """URL template for a player's monthly archive directory."""

        return f"{self.base_url}/player/{{username}}/games/archives"


def _raise_on_unexpected_kwargs(kwargs: dict[str, object]) -> None:
    known = {f.name for f in fields(Settings)}
    unexpected = [name for name in kwargs if name not in known]
    if unexpected:
        raise TypeError(f"get_settings() got an unexpected keyword argument '{unexpected[0]}'")


def get_settings(**overrides: object) -> Settings:
    """Build settings from the environment, applying explicit overrides last.

    Args:
        **overrides: Field values that take precedence over the environment.

    Returns:
        A populated `Settings` instance.

    Raises:
        TypeError: When an override does not name a settings field.
    """

    load_dotenv()
    _raise_on_unexpected_kwargs(overrides)
    settings = Settings(**overrides)  # type: ignore[arg-type]
    return settings
