"""
Image Lookup - keywords in, one representative image URL out.

Queries DuckDuckGo's image endpoint using its two-step protocol: a session
token (``vqd``) scraped from the root page, then a browser-style XHR search.

Usage:
    from image_lookup import ImageLookupService

    service = ImageLookupService()
    url = await service.lookup("pizza")
"""

__version__ = "0.1.0"

from .application import ImageLookupService
from .shared import (
    ImageLookupError,
    InputValidationError,
    LookupConfig,
    NoResultsError,
    ParseError,
    ServiceUnavailableError,
    TokenNotFoundError,
)

__all__ = [
    "ImageLookupError",
    "ImageLookupService",
    "InputValidationError",
    "LookupConfig",
    "NoResultsError",
    "ParseError",
    "ServiceUnavailableError",
    "TokenNotFoundError",
    "__version__",
]
