"""Ingestion module for loading releases from repack providers."""

from .normalizer import normalize_release, normalize_search_hit, resolve_access_url
from .repack_loader import DODI, FITGIRL, RepackLoader, default_loaders

__all__ = [
    "DODI",
    "FITGIRL",
    "RepackLoader",
    "default_loaders",
    "normalize_release",
    "normalize_search_hit",
    "resolve_access_url",
]
