"""Image lookup application service."""

from .service import ImageLookupService, validate_query

__all__ = ["ImageLookupService", "validate_query"]
