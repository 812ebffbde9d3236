"""Data models for building requests.

Encodings, request bodies and form values are small frozen dataclasses
grouped into unions; each consumer handles every member of its union.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ether.codec import Encoder, JsonEncoder


Headers: TypeAlias = Mapping[str, str]
Parameters: TypeAlias = Mapping[str, object]


class Method(str, Enum):
    """HTTP request methods."""

    OPTIONS = "OPTIONS"
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    TRACE = "TRACE"
    CONNECT = "CONNECT"


# Parameter encodings


@dataclass(frozen=True)
class UrlQueryEncoding:
    """Percent-encode parameters into the URL query string."""


@dataclass(frozen=True)
class JsonEncoding:
    """Serialize parameters to an uncompressed JSON body."""


@dataclass(frozen=True)
class GZipEncoding:
    """Serialize parameters to a gzip-compressed JSON body."""


@dataclass(frozen=True)
class CustomEncoding:
    """Only set the Content-Type; the body is supplied by the caller.

    Attributes:
        content_type: Value for the Content-Type header.
    """

    content_type: str


ParameterEncoding: TypeAlias = UrlQueryEncoding | JsonEncoding | GZipEncoding | CustomEncoding

URL_QUERY = UrlQueryEncoding()
JSON = JsonEncoding()
GZIP = GZipEncoding()


# Request bodies


@dataclass(frozen=True)
class EncodableBody:
    """A structured value serialized by ``encoder``.

    Attributes:
        value: Any value the encoder understands.
        encoder: Encoder used to produce the body bytes.
    """

    value: Any
    encoder: Encoder = field(default_factory=JsonEncoder)


@dataclass(frozen=True)
class RawBody:
    """Pre-encoded body bytes, sent as is."""

    data: bytes


@dataclass(frozen=True)
class TextBody:
    """Plain text, sent UTF-8 encoded."""

    text: str


RequestBody: TypeAlias = EncodableBody | RawBody | TextBody


# Multipart form values


@dataclass(frozen=True)
class TextField:
    """A plain text form field."""

    text: str


@dataclass(frozen=True)
class FileField:
    """A file form field.

    Attributes:
        file_name: Name reported in the Content-Disposition header.
        file_data: Raw file contents.
        mime_type: Content-Type of the file part.
    """

    file_name: str
    file_data: bytes
    mime_type: str


FormValue: TypeAlias = TextField | FileField


class FetchableFilters(BaseModel):
    """Filters that narrow down plural fetches.

    Endpoints may or may not support them; plural routes decide how (and
    whether) each filter ends up in the URL.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    search_query: str | None = Field(default=None, description="Free-text search")
    date_range: tuple[datetime, datetime] | None = Field(
        default=None, description="Closed date range (start, end)"
    )

    @model_validator(mode="after")
    def validate_date_range(self) -> "FetchableFilters":
        """Ensure the date range is not inverted."""
        if self.date_range is not None:
            start, end = self.date_range
            if start > end:
                msg = f"date_range start {start} is after end {end}"
                raise ValueError(msg)
        return self
