"""Caller-side services built on top of the distributor adapters."""

from .collection_service import CollectionResult, CollectionService, SourceError

__all__ = [
    "CollectionResult",
    "CollectionService",
    "SourceError",
]
