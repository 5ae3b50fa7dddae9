"""
DuckDuckGo session token (``vqd``) acquisition.

The image endpoint refuses queries without a ``vqd`` value minted for the same
query. The value is only exposed inside the HTML of the root page, so it is
scraped out with a fixed pattern. The page format is not under our control;
the pattern is matched as-is and not generalized.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urlparse

import httpx

from image_lookup.shared.exceptions import ServiceUnavailableError, TokenNotFoundError

logger = logging.getLogger(__name__)

VQD_PATTERN = re.compile(r"vqd=(?P<token>[\d-]+)&")


def extract_vqd_token(html: str) -> str:
    """
    Pull the session token out of a homepage body.

    Args:
        html: Response body of the provider root page

    Returns:
        Token text, e.g. ``"4-1234567890"``

    Raises:
        TokenNotFoundError: When the marker is absent
    """
    match = VQD_PATTERN.search(html)
    if match is None:
        raise TokenNotFoundError()
    return match.group("token")


async def fetch_vqd_token(
    client: httpx.AsyncClient,
    query: str,
    *,
    base_url: str,
) -> str:
    """
    POST the query to the provider root page and extract the session token.

    Exactly one request is made; retrying is the caller's decision.

    Raises:
        ServiceUnavailableError: Transport failure or non-2xx status
        TokenNotFoundError: Successful response without a token
    """
    service = urlparse(base_url).netloc
    try:
        response = await client.post(base_url, data={"q": query})
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.warning(f"Token request HTTP error {status}: {e.response.reason_phrase}")
        raise ServiceUnavailableError(
            f"HTTP {status}: {e.response.reason_phrase}",
            service=service,
            status_code=status,
            cause=f"status code {status}",
            operation="token",
        ) from e
    except httpx.RequestError as e:
        logger.warning(f"Token request failed: {e!r}")
        raise ServiceUnavailableError(
            f"Connection failed: {e}",
            service=service,
            cause=str(e) or type(e).__name__,
            operation="token",
        ) from e

    token = extract_vqd_token(response.text)
    logger.debug(f"Acquired vqd token {token} for query {query!r}")
    return token
