"""
Domain Entities: ImageCandidate, SearchResultSet

Provider-neutral view of an image search response.
Source mapping is handled by Infrastructure layer parsers.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ImageCandidate:
    """One image returned by the provider."""

    image: str
    thumbnail: str | None = None
    title: str = ""
    url: str | None = None  # Page the image was found on
    width: int | None = None
    height: int | None = None
    source: str = ""


@dataclass(frozen=True)
class SearchResultSet:
    """
    Ordered image candidates as ranked by the provider.

    Position 0 is the canonical result; nothing is re-ranked.
    """

    candidates: tuple[ImageCandidate, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.candidates)

    @property
    def is_empty(self) -> bool:
        return not self.candidates

    @property
    def canonical(self) -> ImageCandidate | None:
        """First candidate, or None for an empty set."""
        return self.candidates[0] if self.candidates else None
