"""
Record normalization.

Turns raw provider feed entries and web search hits into listings and
decides which single URL a listing exposes.
"""

import hashlib
from typing import Any, Optional
from urllib.parse import quote

from ..models import IndexedListing, LiveListing, RawRelease, RepackProvider

# Characters encodeURIComponent leaves untouched, besides alphanumerics and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def resolve_access_url(
    link: Optional[str],
    uris: Optional[list[Optional[str]]],
    title: str,
    search_url: str,
) -> str:
    """
    Pick the URL a listing exposes.

    1. A direct link starting with "http", verbatim.
    2. Otherwise the first alternative URI (often a magnet link), verbatim.
    3. Otherwise the provider's search page for the title.
    """
    if link and link.startswith("http"):
        return link
    if uris and uris[0]:
        return uris[0]
    return search_url.format(query=encode_uri_component(title))


def generate_listing_id(provider_key: str, title: str) -> str:
    """
    Generate a deterministic ID for a listing.

    The same provider/title pair always maps to the same ID, so re-syncing
    updates documents instead of duplicating them.
    """
    return hashlib.md5(f"{provider_key}-{title}".encode()).hexdigest()


def normalize_release(raw: RawRelease, provider: RepackProvider) -> IndexedListing:
    """Convert a provider feed entry into an indexed listing."""
    return IndexedListing(
        id=generate_listing_id(provider.key, raw.title),
        title=raw.title,
        source=provider.label,
        access_url=resolve_access_url(raw.link, raw.uris, raw.title, provider.search_url),
        size=raw.file_size or "Unknown",
        published_at=raw.upload_date,
    )


def normalize_search_hit(item: dict[str, Any]) -> LiveListing:
    """Convert a Custom Search API item into a live listing."""
    return LiveListing(
        title=item["title"],
        source=item.get("displayLink") or "",
        access_url=item["link"],
        snippet=item.get("snippet") or "",
    )
