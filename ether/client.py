"""Async HTTP client: request construction, dispatch and classification."""

import gzip
import time
import zlib
from collections.abc import Mapping
from types import TracebackType
from typing import Any, TypeVar, assert_never

import httpx
import structlog

from ether.codec import Decoder, JsonDecoder
from ether.config import EtherConfig
from ether.constants import (
    HEADER_USER_AGENT,
    HTTP_STATUS_VALID_MAX,
    HTTP_STATUS_VALID_MIN,
)
from ether.encoding import apply_encoding
from ether.errors import EtherError, JsonDecodingError, JsonEncodingError, ResponseNotHTTPError
from ether.fetchable import FetchMixin
from ether.headers import resolve_headers
from ether.metrics import RequestMetrics
from ether.models import (
    GZIP,
    URL_QUERY,
    CustomEncoding,
    EncodableBody,
    FormValue,
    GZipEncoding,
    Headers,
    Method,
    ParameterEncoding,
    Parameters,
    RawBody,
    RequestBody,
    TextBody,
)
from ether.multipart import build_multipart_body
from ether.redact import describe_request
from ether.response import Decoded, Response, classify_response
from ether.route import RouteLike, decoded_type_of, resolve_url


T = TypeVar("T")

logger = structlog.get_logger()


def encode_body(body: RequestBody) -> bytes:
    """Produce the wire bytes for a request body.

    Raises:
        JsonEncodingError: If an encodable value cannot be serialized.
    """
    if isinstance(body, EncodableBody):
        return body.encoder.encode(body.value)
    if isinstance(body, RawBody):
        return body.data
    if isinstance(body, TextBody):
        return body.text.encode("utf-8")
    assert_never(body)


class EtherClient(FetchMixin):
    """Async HTTP client with typed request/response helpers.

    Each call resolves its route, layers headers, encodes parameters and
    body, sends exactly one request through ``httpx`` and classifies the
    response. Transport errors propagate as ``httpx`` exceptions; every
    other failure is an ``EtherError``.

    Use as an async context manager, or call ``aclose()`` when done.
    """

    def __init__(
        self,
        config: EtherConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: httpx.AsyncClient | None = None,
        decoder: Decoder | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Pipeline configuration.
            transport: Transport for the owned httpx client (e.g. MockTransport).
            http_client: Pre-built httpx client to use instead of an owned one.
            decoder: Default decoder for responses.
        """
        self._config = config or EtherConfig()
        self._decoder = decoder or JsonDecoder()
        self._metrics = RequestMetrics.get_instance()
        self._log = logger.bind(component="ether")

        if http_client is not None:
            self._http = http_client
            self._owns_http = False
        else:
            client_kwargs: dict[str, Any] = {"transport": transport}
            if self._config.timeout_seconds is not None:
                client_kwargs["timeout"] = self._config.timeout_seconds
            if self._config.user_agent is not None:
                client_kwargs["headers"] = {HEADER_USER_AGENT: self._config.user_agent}
            self._http = httpx.AsyncClient(**client_kwargs)
            self._owns_http = True

    @property
    def config(self) -> EtherConfig:
        """The configuration in use."""
        return self._config

    async def __aenter__(self) -> "EtherClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the owned httpx client."""
        if self._owns_http:
            await self._http.aclose()

    def build_request(
        self,
        route: RouteLike,
        method: Method,
        headers: Headers | None = None,
        parameters: Parameters | None = None,
        body: RequestBody | None = None,
        decode_type: Any | None = None,
        encoding: ParameterEncoding = URL_QUERY,
    ) -> httpx.Request:
        """Assemble the outgoing request without sending it.

        Args:
            route: Route to resolve.
            method: HTTP method.
            headers: Caller headers.
            parameters: Parameters to encode.
            body: Request body.
            decode_type: Decode target; adds ``Accept: application/json``.
            encoding: Parameter encoding.

        Returns:
            The assembled httpx request.

        Raises:
            BadURLError: If the route cannot be resolved.
            BadQueryItemError: If a parameter cannot become a query item.
            JsonEncodingError: If parameters or body cannot be serialized.
        """
        url = resolve_url(route)
        encoded = apply_encoding(encoding, url, parameters or {})

        host = url.host or None
        trusted = self._config.domain_headers.get(host)
        final_headers = resolve_headers(
            decode_requested=decode_type is not None,
            trusted_headers=trusted,
            caller_headers=headers,
            encoding_headers=encoded.headers,
            known_domain=host if trusted is not None else None,
        )

        content = encoded.content
        if body is not None:
            content = encode_body(body)
            if isinstance(encoding, GZipEncoding):
                try:
                    content = gzip.compress(content)
                except (OSError, zlib.error) as e:
                    raise JsonEncodingError(e) from e

        return self._http.build_request(
            method.value,
            encoded.url,
            headers=final_headers,
            content=content,
        )

    async def request(
        self,
        route: RouteLike,
        method: Method,
        headers: Headers | None = None,
        parameters: Parameters | None = None,
        body: RequestBody | None = None,
        decode_type: type[T] | None = None,
        encoding: ParameterEncoding = URL_QUERY,
        decoder: Decoder | None = None,
    ) -> Response[T]:
        """Send a custom HTTP request.

        Args:
            route: Route to request.
            method: HTTP method.
            headers: Extra headers for this call.
            parameters: Parameters to encode.
            body: Request body.
            decode_type: Type to decode a 2xx response into; raw bytes if None.
            encoding: Parameter encoding (default: URL query).
            decoder: Decoder overriding the client default.

        Returns:
            Response holding the decoded value or the raw body.

        Raises:
            EtherError: For route, encoding, status or decoding failures.
            httpx.HTTPError: For transport failures, unwrapped.
        """
        decode_type = decode_type if decode_type is not None else decoded_type_of(route)
        request = self.build_request(
            route,
            method,
            headers=headers,
            parameters=parameters,
            body=body,
            decode_type=decode_type,
            encoding=encoding,
        )

        if self._config.request_logging_enabled:
            self._log.debug("ether_request", **describe_request(request, redact=False))

        start_time_ns = time.perf_counter_ns()
        try:
            response = await self._http.send(request)
        except httpx.HTTPError as e:
            self._metrics.record_failure(type(e).__name__)
            raise

        if not isinstance(response, httpx.Response) or not (
            HTTP_STATUS_VALID_MIN <= response.status_code < HTTP_STATUS_VALID_MAX
        ):
            self._metrics.record_failure(ResponseNotHTTPError.kind)
            raise ResponseNotHTTPError

        duration_ms = (time.perf_counter_ns() - start_time_ns) / 1_000_000
        self._metrics.record_response(response.status_code, len(response.content), duration_ms)

        try:
            return classify_response(response, request, decode_type, decoder or self._decoder)
        except EtherError as e:
            self._metrics.record_failure(e.kind)
            raise

    async def get(
        self,
        route: RouteLike,
        decode_type: type[T] | None = None,
        parameters: Parameters | None = None,
        decoder: Decoder | None = None,
    ) -> T:
        """Fetch and decode a resource with a GET request.

        Parameters are always sent as URL query items; use ``request`` for
        other encodings.

        Args:
            route: Route to request.
            decode_type: Type to decode into; defaults to a typed route's type.
            parameters: Query parameters.
            decoder: Decoder overriding the client default.

        Returns:
            The decoded value.

        Raises:
            TypeError: If no decode type is given or declared by the route.
        """
        decode_type = decode_type if decode_type is not None else decoded_type_of(route)
        if decode_type is None:
            msg = "get() needs a decode_type or a TypedRoute"
            raise TypeError(msg)

        response = await self.request(
            route,
            Method.GET,
            parameters=parameters,
            decode_type=decode_type,
            encoding=URL_QUERY,
            decoder=decoder,
        )
        if not isinstance(response.data, Decoded):
            raise JsonDecodingError
        return response.data.value

    async def post(
        self,
        route: RouteLike,
        body: RequestBody,
        encoding: ParameterEncoding = GZIP,
        decode_type: type[T] | None = None,
        decoder: Decoder | None = None,
    ) -> Response[T]:
        """Send data with a POST request.

        Args:
            route: Route to post to.
            body: Request body.
            encoding: Encoding (default: gzip-compressed JSON).
            decode_type: Type to decode the response into; raw if None.
            decoder: Decoder overriding the client default.

        Returns:
            Response holding the decoded value or the raw body.
        """
        return await self.request(
            route,
            Method.POST,
            body=body,
            decode_type=decode_type,
            encoding=encoding,
            decoder=decoder,
        )

    async def post_multipart_form(
        self,
        route: RouteLike,
        form_items: Mapping[str, FormValue] | None = None,
        decode_type: type[T] | None = None,
        decoder: Decoder | None = None,
    ) -> Response[T]:
        """Send form fields with a multipart/form-data POST request.

        Args:
            route: Route to post to.
            form_items: Field name to text or file value.
            decode_type: Type to decode the response into; raw if None.
            decoder: Decoder overriding the client default.

        Returns:
            Response holding the decoded value or the raw body.
        """
        multipart = build_multipart_body(form_items or {})
        return await self.request(
            route,
            Method.POST,
            body=RawBody(multipart.content),
            decode_type=decode_type,
            encoding=CustomEncoding(multipart.content_type),
            decoder=decoder,
        )
