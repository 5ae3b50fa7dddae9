"""
Mapper from the ``i.js`` JSON body to domain entities.

Observed shape (not documented upstream)::

    {
        "results": [
            {"image": "...", "thumbnail": "...", "title": "...", "url": "...",
             "width": 800, "height": 600, "source": "Bing"},
            ...
        ],
        "next": "i.js?..."
    }

Only ``results[0].image`` is required; other fields with unexpected types are
read as missing. Later candidates without a string ``image`` are skipped; a
first candidate without one is a parse failure.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from image_lookup.domain.entities.image import ImageCandidate, SearchResultSet
from image_lookup.shared.exceptions import NoResultsError, ParseError

logger = logging.getLogger(__name__)

RESULTS_FIELD = "results"


class WireCandidate(BaseModel):
    """One element of ``results`` as sent by the provider."""

    model_config = ConfigDict(extra="ignore")

    image: str
    thumbnail: str | None = None
    title: str | None = None
    url: str | None = None
    width: int | None = None
    height: int | None = None
    source: str | None = None

    @field_validator("thumbnail", "title", "url", "width", "height", "source", mode="wrap")
    @classmethod
    def _drop_unusable(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        # Metadata never blocks a usable image; a bad value reads as missing.
        try:
            return handler(value)
        except ValidationError:
            return None

    def to_domain(self) -> ImageCandidate:
        return ImageCandidate(
            image=self.image,
            thumbnail=self.thumbnail,
            title=self.title or "",
            url=self.url,
            width=self.width,
            height=self.height,
            source=self.source or "",
        )


def parse_result_set(body: Any) -> SearchResultSet:
    """
    Validate a decoded body and map it to a SearchResultSet.

    Raises:
        NoResultsError: ``results`` is absent or null
        ParseError: Body or ``results`` has the wrong shape
    """
    if not isinstance(body, dict):
        raise ParseError(f"expected a JSON object, got {type(body).__name__}")

    raw = body.get(RESULTS_FIELD)
    if raw is None:
        raise NoResultsError(field_absent=True)
    if not isinstance(raw, list):
        raise ParseError(f"'{RESULTS_FIELD}' must be a list, got {type(raw).__name__}")

    candidates: list[ImageCandidate] = []
    for index, item in enumerate(raw):
        try:
            candidates.append(WireCandidate.model_validate(item).to_domain())
        except ValidationError as e:
            if index == 0:
                raise ParseError("first result has no usable image URL", cause=str(e)) from e
            logger.warning(f"Skipping malformed result #{index}: {e.error_count()} validation error(s)")

    return SearchResultSet(candidates=tuple(candidates))


def first_image_url(body: Any) -> str:
    """
    Canonical image URL: ``results[0].image``.

    Raises:
        NoResultsError: ``results`` is absent, null or empty
        ParseError: Body has the wrong shape
    """
    result_set = parse_result_set(body)
    if result_set.canonical is None:
        raise NoResultsError(field_absent=False)
    return result_set.canonical.image
