"""
Application Service: Image Lookup

Turns free-text keywords into one representative image URL.

Pipeline (one invocation, strictly sequential):
    validate query → fetch vqd token → image search → first result's image

Each invocation opens and closes its own HTTP client, so nothing (token,
connection, result) carries over between calls.

Usage:
    >>> service = ImageLookupService()
    >>> url = await service.lookup("pizza")
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from image_lookup.infrastructure.duckduckgo import (
    execute_image_search,
    fetch_vqd_token,
    first_image_url,
)
from image_lookup.shared.async_utils import async_retry, with_deadline
from image_lookup.shared.config import LookupConfig
from image_lookup.shared.exceptions import (
    ImageLookupError,
    InputValidationError,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)


def validate_query(query: Any) -> str:
    """
    Check the caller's input before any network traffic.

    Raises:
        InputValidationError: Missing, non-string or blank query
    """
    if not isinstance(query, str) or not query.strip():
        raise InputValidationError(value=query)
    return query


class ImageLookupService:
    """
    Image lookup application service.

    Architecture:
        Presentation (api.server) → Application (here) → Infrastructure (duckduckgo)
    """

    def __init__(
        self,
        config: LookupConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            config: Pipeline settings (defaults to LookupConfig())
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        """
        self.config = config or LookupConfig()
        self._transport = transport

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self._transport,
            timeout=self.config.timeout,
            follow_redirects=True,
        )

    async def _fetch_token(self, client: httpx.AsyncClient, query: str) -> str:
        @async_retry(
            max_attempts=self.config.token_attempts,
            retryable_check=lambda e: isinstance(e, ServiceUnavailableError),
        )
        async def attempt() -> str:
            return await with_deadline(
                fetch_vqd_token(client, query, base_url=self.config.base_url),
                self.config.timeout,
                operation="token",
                service=self.config.authority,
            )

        return await attempt()

    async def fetch_results(self, query: Any) -> Any:
        """
        Run token acquisition and the image search; return the decoded body.

        Raises:
            InputValidationError, TokenNotFoundError, ServiceUnavailableError, ParseError
        """
        query = validate_query(query)

        async with self._new_client() as client:
            token = await self._fetch_token(client, query)
            return await with_deadline(
                execute_image_search(client, query, token, base_url=self.config.base_url),
                self.config.timeout,
                operation="search",
                service=self.config.authority,
            )

    async def lookup(self, query: Any) -> str:
        """
        Canonical image URL for ``query``.

        Raises:
            ImageLookupError: Any pipeline failure (see shared.exceptions)
        """
        body = await self.fetch_results(query)
        url = first_image_url(body)
        logger.info(f"Image lookup for {query!r} -> {url}")
        return url

    async def lookup_safe(self, query: Any) -> str:
        """
        Safe version of lookup that returns "" on error.

        Prefer lookup() when the failure kind matters.
        """
        try:
            return await self.lookup(query)
        except ImageLookupError as e:
            logger.warning(f"Error fetching image: {e}")
            return ""
