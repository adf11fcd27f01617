"""Storage module for the listing search index."""

from .meili_store import MeiliStore

__all__ = ["MeiliStore"]
