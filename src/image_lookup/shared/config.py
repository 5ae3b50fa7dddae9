"""
Runtime configuration for image lookup.

Values come from environment variables; explicit construction wins in tests
and library use.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from urllib.parse import urlparse

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://duckduckgo.com/"
DEFAULT_TIMEOUT = 10.0
DEFAULT_API_HOST = "127.0.0.1"
DEFAULT_API_PORT = 8765


@dataclass(frozen=True)
class LookupConfig:
    """
    Configuration for the image lookup pipeline and HTTP API.

    Attributes:
        base_url: Provider root page; the image endpoint is ``<base_url>i.js``
        timeout: Upper bound in seconds for each outbound call
        token_attempts: Total attempts for the token fetch (1 = no retry)
        api_host: Host the HTTP API binds to
        api_port: Port the HTTP API binds to
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    token_attempts: int = 1
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT

    def __post_init__(self) -> None:
        if not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", f"{self.base_url}/")
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if self.token_attempts < 1:
            raise ConfigurationError(f"token_attempts must be at least 1, got {self.token_attempts}")

    @property
    def search_url(self) -> str:
        """Image search endpoint."""
        return f"{self.base_url}i.js"

    @property
    def authority(self) -> str:
        """Host of the provider, sent as the ``authority`` header."""
        return urlparse(self.base_url).netloc

    @classmethod
    def from_env(cls) -> LookupConfig:
        """Load configuration from environment variables."""
        return cls(
            base_url=os.environ.get("IMAGE_LOOKUP_BASE_URL", DEFAULT_BASE_URL),
            timeout=_env_number("IMAGE_LOOKUP_TIMEOUT", DEFAULT_TIMEOUT, float),
            token_attempts=_env_number("IMAGE_LOOKUP_TOKEN_ATTEMPTS", 1, int),
            api_host=os.environ.get("IMAGE_LOOKUP_API_HOST", DEFAULT_API_HOST),
            api_port=_env_number("IMAGE_LOOKUP_API_PORT", DEFAULT_API_PORT, int),
        )


def _env_number(name: str, default, cast):
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"Invalid value for {name}: {raw!r}") from e


# Singleton config
_config: LookupConfig | None = None


def get_config() -> LookupConfig:
    """Get configuration singleton."""
    global _config
    if _config is None:
        _config = LookupConfig.from_env()
        logger.debug(f"Loaded config: {_config}")
    return _config


def reset_config() -> None:
    """Drop the cached configuration (used by tests)."""
    global _config
    _config = None
