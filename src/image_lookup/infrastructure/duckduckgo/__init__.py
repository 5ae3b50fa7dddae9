"""DuckDuckGo image search protocol: token, search request, result mapping."""

from .parser import first_image_url, parse_result_set
from .search import build_search_headers, build_search_params, execute_image_search
from .token import extract_vqd_token, fetch_vqd_token

__all__ = [
    "build_search_headers",
    "build_search_params",
    "execute_image_search",
    "extract_vqd_token",
    "fetch_vqd_token",
    "first_image_url",
    "parse_result_set",
]
