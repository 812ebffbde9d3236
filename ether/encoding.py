"""Parameter encoding strategies.

Turns a parameter mapping into either URL query items or a JSON body
(optionally gzip-compressed), together with the headers each encoding
implies.
"""

import gzip
import json
import zlib
from dataclasses import dataclass, field
from typing import assert_never
from urllib.parse import quote

import httpx

from ether.constants import (
    CONTENT_ENCODING_GZIP,
    CONTENT_TYPE_FORM_URLENCODED,
    CONTENT_TYPE_JSON_UTF8,
    HEADER_CONTENT_ENCODING,
    HEADER_CONTENT_TYPE,
    JSON_PARAMETER_INDENT,
)
from ether.errors import BadQueryItemError, BadURLError, JsonEncodingError
from ether.models import (
    CustomEncoding,
    GZipEncoding,
    JsonEncoding,
    ParameterEncoding,
    Parameters,
    UrlQueryEncoding,
)


@dataclass(frozen=True)
class EncodedRequest:
    """Output of an encoding strategy.

    Attributes:
        url: Final request URL.
        headers: Headers implied by the encoding.
        content: Encoded body, or None when the encoding produces none.
    """

    url: httpx.URL
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes | None = None


def parameter_string(value: object) -> str:
    """Return the canonical string form of a parameter value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query_items(parameters: Parameters) -> str:
    """Percent-encode parameters as RFC 3986 query items.

    Raises:
        BadQueryItemError: If a key is not a non-empty string or a value is None.
    """
    items: list[str] = []
    for key, value in parameters.items():
        if not isinstance(key, str) or not key or value is None:
            raise BadQueryItemError((key, value))
        items.append(f"{quote(key, safe='')}={quote(parameter_string(value), safe='')}")
    return "&".join(items)


def url_query(url: httpx.URL, parameters: Parameters) -> EncodedRequest:
    """Append parameters to the URL's query, keeping existing items.

    Args:
        url: Base URL.
        parameters: Parameters to append.

    Returns:
        EncodedRequest with the new URL and form Content-Type.

    Raises:
        BadQueryItemError: If a parameter cannot become a query item.
        BadURLError: If the URL cannot be reassembled.
    """
    headers = {HEADER_CONTENT_TYPE: CONTENT_TYPE_FORM_URLENCODED}
    if not parameters:
        return EncodedRequest(url=url, headers=headers)

    encoded = encode_query_items(parameters)
    existing = url.query.decode("ascii")
    query = f"{existing}&{encoded}" if existing else encoded
    try:
        new_url = url.copy_with(query=query.encode("ascii"))
    except httpx.InvalidURL as e:
        raise BadURLError(str(url)) from e
    return EncodedRequest(url=new_url, headers=headers)


def json_body(parameters: Parameters) -> bytes:
    """Serialize parameters to a pretty-printed JSON object.

    Raises:
        JsonEncodingError: If a value is not JSON-serializable.
    """
    try:
        text = json.dumps(dict(parameters), indent=JSON_PARAMETER_INDENT, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise JsonEncodingError(e) from e
    return text.encode("utf-8")


def json_encoded(url: httpx.URL, parameters: Parameters) -> EncodedRequest:
    """Encode parameters as an uncompressed JSON body."""
    return EncodedRequest(
        url=url,
        headers={HEADER_CONTENT_TYPE: CONTENT_TYPE_JSON_UTF8},
        content=json_body(parameters),
    )


def gzip_encoded(url: httpx.URL, parameters: Parameters) -> EncodedRequest:
    """Encode parameters as a gzip-compressed JSON body.

    Raises:
        JsonEncodingError: If serialization or compression fails.
    """
    data = json_body(parameters)
    try:
        compressed = gzip.compress(data)
    except (OSError, zlib.error) as e:
        raise JsonEncodingError(e) from e
    return EncodedRequest(
        url=url,
        headers={
            HEADER_CONTENT_TYPE: CONTENT_TYPE_JSON_UTF8,
            HEADER_CONTENT_ENCODING: CONTENT_ENCODING_GZIP,
        },
        content=compressed,
    )


def apply_encoding(
    encoding: ParameterEncoding,
    url: httpx.URL,
    parameters: Parameters,
) -> EncodedRequest:
    """Apply the selected encoding strategy.

    Args:
        encoding: Encoding selector.
        url: Resolved request URL.
        parameters: Parameters to encode.

    Returns:
        EncodedRequest with the final URL, derived headers and body.
    """
    if isinstance(encoding, UrlQueryEncoding):
        return url_query(url, parameters)
    if isinstance(encoding, JsonEncoding):
        return json_encoded(url, parameters)
    if isinstance(encoding, GZipEncoding):
        return gzip_encoded(url, parameters)
    if isinstance(encoding, CustomEncoding):
        return EncodedRequest(url=url, headers={HEADER_CONTENT_TYPE: encoding.content_type})
    assert_never(encoding)
