"""Domain entities."""

from .image import ImageCandidate, SearchResultSet

__all__ = ["ImageCandidate", "SearchResultSet"]
