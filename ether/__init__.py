"""Ether: an ergonomic async HTTP client layer over httpx.

This package provides:
- Typed GET/POST/multipart/custom request helpers
- Routes and typed routes resolvable to URLs
- URL-query, JSON, gzip-JSON and custom parameter encodings
- Per-domain trusted headers
- Fetchable sugar for singular/plural REST resources
"""

from ether.api import (
    configure,
    domain_headers,
    get,
    get_config,
    post,
    post_multipart_form,
    request,
    reset,
    set_domain_headers,
)
from ether.client import EtherClient
from ether.codec import Decoder, Encoder, JsonDecoder, JsonEncoder
from ether.config import DomainHeaders, EtherConfig
from ether.errors import (
    BadQueryItemError,
    BadResponseCodeError,
    BadURLError,
    EtherError,
    EtherErrorKind,
    JsonDecodingError,
    JsonEncodingError,
    MiscResponseIssueError,
    RequestFailedError,
    ResponseNotHTTPError,
)
from ether.fetchable import PluralFetchable, SingularFetchable
from ether.metrics import RequestMetrics
from ether.models import (
    GZIP,
    JSON,
    URL_QUERY,
    CustomEncoding,
    EncodableBody,
    FetchableFilters,
    FileField,
    FormValue,
    GZipEncoding,
    JsonEncoding,
    Method,
    ParameterEncoding,
    RawBody,
    RequestBody,
    TextBody,
    TextField,
    UrlQueryEncoding,
)
from ether.multipart import MultipartBody, build_multipart_body
from ether.observability import configure_logging, configure_logging_from_settings
from ether.response import Decoded, Raw, Response
from ether.route import Route, TypedRoute, resolve_url
from ether.settings import EtherSettings


__all__ = [
    # Client
    "EtherClient",
    # Module-level entry points
    "configure",
    "domain_headers",
    "get",
    "get_config",
    "post",
    "post_multipart_form",
    "request",
    "reset",
    "set_domain_headers",
    # Config
    "DomainHeaders",
    "EtherConfig",
    "EtherSettings",
    # Routes
    "Route",
    "TypedRoute",
    "resolve_url",
    "SingularFetchable",
    "PluralFetchable",
    # Models
    "Method",
    "ParameterEncoding",
    "UrlQueryEncoding",
    "JsonEncoding",
    "GZipEncoding",
    "CustomEncoding",
    "URL_QUERY",
    "JSON",
    "GZIP",
    "RequestBody",
    "EncodableBody",
    "RawBody",
    "TextBody",
    "FormValue",
    "TextField",
    "FileField",
    "FetchableFilters",
    "MultipartBody",
    "build_multipart_body",
    # Responses
    "Response",
    "Decoded",
    "Raw",
    # Codecs
    "Encoder",
    "Decoder",
    "JsonEncoder",
    "JsonDecoder",
    # Errors
    "EtherError",
    "EtherErrorKind",
    "RequestFailedError",
    "ResponseNotHTTPError",
    "BadURLError",
    "BadQueryItemError",
    "BadResponseCodeError",
    "JsonEncodingError",
    "JsonDecodingError",
    "MiscResponseIssueError",
    # Observability
    "RequestMetrics",
    "configure_logging",
    "configure_logging_from_settings",
]
