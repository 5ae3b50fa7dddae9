"""Application layer - use cases composing infrastructure."""

from .image_lookup import ImageLookupService

__all__ = ["ImageLookupService"]
