"""Responses and response classification."""

from dataclasses import dataclass
from typing import Any, Generic, TypeAlias, TypeVar

import httpx
import structlog

from ether.codec import Decoder
from ether.constants import HTTP_STATUS_OK_MAX, HTTP_STATUS_OK_MIN
from ether.errors import BadResponseCodeError
from ether.redact import describe_request, redact_headers


T = TypeVar("T")

logger = structlog.get_logger()


@dataclass(frozen=True)
class Decoded(Generic[T]):
    """Response body decoded into the requested type."""

    value: T


@dataclass(frozen=True)
class Raw:
    """Undecoded response body."""

    content: bytes


ResponseData: TypeAlias = Decoded[Any] | Raw


@dataclass(frozen=True)
class Response(Generic[T]):
    """Result of a dispatched request.

    Exactly one of ``decoded`` and ``raw`` is populated: ``decoded`` when a
    decode target was requested, ``raw`` otherwise.

    Attributes:
        data: Decoded value or raw bytes.
        status_code: HTTP status code.
        headers: Response headers.
    """

    data: Decoded[T] | Raw
    status_code: int
    headers: httpx.Headers

    @property
    def decoded(self) -> T | None:
        """The decoded value, if any."""
        if isinstance(self.data, Decoded):
            return self.data.value
        return None

    @property
    def raw(self) -> bytes | None:
        """The raw body, if no decoding was requested."""
        if isinstance(self.data, Raw):
            return self.data.content
        return None

    @property
    def reason_phrase(self) -> str:
        """Standard reason phrase for the status code."""
        return httpx.codes.get_reason_phrase(self.status_code)

    @property
    def is_success(self) -> bool:
        """Check if the status code is in the 2xx range."""
        return is_success_status(self.status_code)


def is_success_status(status_code: int) -> bool:
    """Check if a status code is in [200, 300)."""
    return HTTP_STATUS_OK_MIN <= status_code < HTTP_STATUS_OK_MAX


def classify_response(
    response: httpx.Response,
    request: httpx.Request,
    decode_type: Any | None,
    decoder: Decoder,
) -> Response[Any]:
    """Turn a transport response into a ``Response`` or an error.

    Args:
        response: Response received from the transport.
        request: The request that produced it, for diagnostics.
        decode_type: Type to decode into, or None for raw bytes.
        decoder: Decoder used when ``decode_type`` is set.

    Returns:
        Response with decoded or raw data.

    Raises:
        BadResponseCodeError: If the status code is outside the 2xx range.
        JsonDecodingError: If decoding into ``decode_type`` fails.
    """
    status_code = response.status_code
    if not is_success_status(status_code):
        error = BadResponseCodeError(status_code)
        logger.error(
            "ether_bad_response_code",
            component="ether",
            status_code=status_code,
            description=error.description,
            failure_reason=error.failure_reason,
            recovery_suggestion=error.recovery_suggestion,
            request=describe_request(request),
            response_headers=redact_headers(response.headers),
        )
        raise error

    content = response.content
    if decode_type is None:
        return Response(data=Raw(content), status_code=status_code, headers=response.headers)

    value = decoder.decode(content, decode_type)
    return Response(data=Decoded(value), status_code=status_code, headers=response.headers)
