"""
DuckDuckGo image search request.

The ``i.js`` endpoint behaves differently (or refuses) unless the request
looks like the site's own XHR call, so the header set below is replicated
exactly. The query parameters are equally fixed:

- ``l``: locale, ``wt-wt`` means any region
- ``o``: output format
- ``f``: empty filter list (size, color, type, layout)
- ``p``: undocumented pagination/safe-search selector, kept at ``2`` verbatim
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import urlparse

import httpx

from image_lookup.shared.exceptions import ParseError, ServiceUnavailableError

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/55.0.2883.87 Safari/537.36"
)

LOCALE_ANY = "wt-wt"
OUTPUT_JSON = "json"
EMPTY_FILTERS = ",,,"
PAGINATION_SELECTOR = "2"


def build_search_headers(base_url: str) -> dict[str, str]:
    """Browser XHR headers for the image endpoint of ``base_url``."""
    return {
        "dnt": "1",
        "accept-encoding": "gzip, deflate, sdch, br",
        "x-requested-with": "XMLHttpRequest",
        "accept-language": "en-GB,en-US;q=0.8,en;q=0.6,ms;q=0.4",
        "user-agent": USER_AGENT,
        "accept": "application/json, text/javascript, */*; q=0.01",
        "referer": base_url,
        "authority": urlparse(base_url).netloc,
    }


def build_search_params(query: str, token: str) -> dict[str, str]:
    """Query string for one image search."""
    return {
        "l": LOCALE_ANY,
        "o": OUTPUT_JSON,
        "q": query,
        "vqd": token,
        "f": EMPTY_FILTERS,
        "p": PAGINATION_SELECTOR,
    }


async def execute_image_search(
    client: httpx.AsyncClient,
    query: str,
    token: str,
    *,
    base_url: str,
) -> Any:
    """
    Run the image search and return the decoded JSON body.

    Args:
        client: HTTP client for this invocation
        query: Original search text
        token: Session token fetched for this same query
        base_url: Provider root page (with trailing slash)

    Raises:
        ServiceUnavailableError: Transport failure or non-2xx status
        ParseError: Body is not valid JSON
    """
    service = urlparse(base_url).netloc
    url = f"{base_url}i.js"
    logger.debug(f"Image search: {url} q={query!r}")

    try:
        response = await client.get(
            url,
            params=build_search_params(query, token),
            headers=build_search_headers(base_url),
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.warning(f"Image search HTTP error {status}: {e.response.reason_phrase}")
        raise ServiceUnavailableError(
            f"HTTP {status}: {e.response.reason_phrase}",
            service=service,
            status_code=status,
            cause=f"status code {status}",
            operation="search",
        ) from e
    except httpx.RequestError as e:
        logger.warning(f"Image search request failed: {e!r}")
        raise ServiceUnavailableError(
            f"Connection failed: {e}",
            service=service,
            cause=str(e) or type(e).__name__,
            operation="search",
        ) from e

    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Image search returned non-JSON body ({len(response.content)} bytes)")
        raise ParseError("Invalid JSON response", source=service, cause=str(e)) from e
