"""Search module: live web search and the hybrid search service."""

from .google_search import GoogleSearchProvider
from .hybrid_search import HybridSearchService

__all__ = ["GoogleSearchProvider", "HybridSearchService"]
