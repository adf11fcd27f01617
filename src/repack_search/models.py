"""
Data models for Repack Search.

Defines the listing shapes returned by both search paths, the raw provider
feed record, and the response envelope every operation returns.
"""

from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, Field, field_validator

T = TypeVar("T")

ACCESS_URL_PREFIXES = ("http", "magnet:")


class Listing(BaseModel):
    """
    Fields shared by every search result.

    `access_url` is the only actionable link exposed to a consumer.
    """
    title: str = Field(..., description="Human-readable game name")
    source: str = Field(..., description="Provider label or display domain")
    access_url: str = Field(..., description="HTTP(S) URL or magnet URI")

    @field_validator("access_url")
    @classmethod
    def check_access_url(cls, value: str) -> str:
        if not value.startswith(ACCESS_URL_PREFIXES):
            raise ValueError("access_url must be either an HTTP URL or a magnet link")
        return value


class IndexedListing(Listing):
    """A listing stored in and served from the search index."""
    id: str = Field(..., description="Stable identifier, used as the upsert key")
    size: Optional[str] = Field(None, description="Free-text size, e.g. '65.8 GB'")
    published_at: Optional[str] = Field(None, description="Upload timestamp from the provider")


class LiveListing(Listing):
    """A listing returned by the live web search."""
    snippet: str = Field("", description="Excerpt from the search engine")


class RawRelease(BaseModel):
    """A single entry under `downloads` in a HydraLinks provider feed."""
    title: str
    link: Optional[str] = None
    uris: Optional[list[Optional[str]]] = None
    file_size: Optional[str] = Field(None, alias="fileSize")
    upload_date: Optional[str] = Field(None, alias="uploadDate")


class RepackProvider(BaseModel):
    """A named repack group whose releases are mirrored into the index."""
    key: str = Field(..., description="Short key, also the identifier hash prefix")
    name: str
    label: str = Field(..., description="Value written to Listing.source")
    feed_url: str
    search_url: str = Field(..., description="Search page template with a {query} placeholder")


class ServiceResponse(BaseModel, Generic[T]):
    """Uniform success/failure envelope."""
    success: bool
    message: str
    data: Optional[T] = None
    status_code: int = Field(..., serialization_alias="statusCode")

    @classmethod
    def ok(cls, message: str, data: Optional[T] = None, status_code: int = 200) -> "ServiceResponse[T]":
        return cls(success=True, message=message, data=data, status_code=status_code)

    @classmethod
    def fail(cls, message: str, data: Optional[T] = None, status_code: int = 400) -> "ServiceResponse[T]":
        return cls(success=False, message=message, data=data, status_code=status_code)
