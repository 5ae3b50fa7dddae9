"""Domain layer - pure data types, no I/O."""

from .entities import ImageCandidate, SearchResultSet

__all__ = ["ImageCandidate", "SearchResultSet"]
