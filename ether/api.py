"""Process-wide defaults and module-level entry points.

Applications that do not want to manage an ``EtherClient`` can register
trusted headers and flags once at startup and call ``ether.get`` /
``ether.post`` / ``ether.post_multipart_form`` / ``ether.request``
directly. Each call opens a short-lived client over the default config.

The default config is process-wide state guarded by a lock; tests should
call ``reset()`` between cases.
"""

import threading
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx

from ether.client import EtherClient
from ether.codec import Decoder
from ether.config import DomainHeaders, EtherConfig
from ether.models import GZIP, URL_QUERY, FormValue, Headers, Method, ParameterEncoding, Parameters, RequestBody
from ether.response import Response
from ether.route import RouteLike


T = TypeVar("T")

_config_lock = threading.Lock()
_default_config: EtherConfig | None = None
_default_transport: httpx.AsyncBaseTransport | None = None


def get_config() -> EtherConfig:
    """Get the process-wide default config, creating it on first use."""
    global _default_config  # noqa: PLW0603
    with _config_lock:
        if _default_config is None:
            _default_config = EtherConfig()
        return _default_config


def configure(
    *,
    log_requests: bool | None = None,
    timeout_seconds: float | None = None,
    user_agent: str | None = None,
    domain_headers: Mapping[str, Mapping[str, str]] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> EtherConfig:
    """Update the process-wide default config.

    Only the arguments given are changed. Trusted headers passed here are
    added to (not substituted for) the existing table.

    Args:
        log_requests: Log assembled requests at debug level.
        timeout_seconds: Transport timeout.
        user_agent: User-Agent header.
        domain_headers: Trusted headers per hostname to register.
        transport: Transport used by module-level calls.

    Returns:
        The new default config.
    """
    global _default_config, _default_transport  # noqa: PLW0603
    with _config_lock:
        current = _default_config or EtherConfig()
        values: dict[str, Any] = {
            "domain_headers": current.domain_headers,
            "log_requests": current.log_requests,
            "timeout_seconds": current.timeout_seconds,
            "user_agent": current.user_agent,
        }
        if log_requests is not None:
            values["log_requests"] = log_requests
        if timeout_seconds is not None:
            values["timeout_seconds"] = timeout_seconds
        if user_agent is not None:
            values["user_agent"] = user_agent

        new_config = EtherConfig(**values)
        for host, headers in (domain_headers or {}).items():
            new_config.domain_headers.set(host, headers)

        _default_config = new_config
        if transport is not None:
            _default_transport = transport
        return new_config


def set_domain_headers(host: str, headers: Mapping[str, str]) -> None:
    """Register trusted headers for a host on the default config."""
    get_config().domain_headers.set(host, headers)


def domain_headers() -> DomainHeaders:
    """The default config's trusted headers table."""
    return get_config().domain_headers


def reset() -> None:
    """Drop the default config and transport (for testing)."""
    global _default_config, _default_transport  # noqa: PLW0603
    with _config_lock:
        _default_config = None
        _default_transport = None


def _client() -> EtherClient:
    config = get_config()
    with _config_lock:
        transport = _default_transport
    return EtherClient(config, transport=transport)


async def get(
    route: RouteLike,
    decode_type: type[T] | None = None,
    parameters: Parameters | None = None,
    decoder: Decoder | None = None,
) -> T:
    """GET and decode a resource using the default config."""
    async with _client() as client:
        return await client.get(route, decode_type, parameters=parameters, decoder=decoder)


async def post(
    route: RouteLike,
    body: RequestBody,
    encoding: ParameterEncoding = GZIP,
    decode_type: type[T] | None = None,
    decoder: Decoder | None = None,
) -> Response[T]:
    """POST a body using the default config."""
    async with _client() as client:
        return await client.post(
            route, body, encoding=encoding, decode_type=decode_type, decoder=decoder
        )


async def post_multipart_form(
    route: RouteLike,
    form_items: Mapping[str, FormValue] | None = None,
    decode_type: type[T] | None = None,
    decoder: Decoder | None = None,
) -> Response[T]:
    """POST multipart form data using the default config."""
    async with _client() as client:
        return await client.post_multipart_form(
            route, form_items, decode_type=decode_type, decoder=decoder
        )


async def request(
    route: RouteLike,
    method: Method,
    headers: Headers | None = None,
    parameters: Parameters | None = None,
    body: RequestBody | None = None,
    decode_type: type[T] | None = None,
    encoding: ParameterEncoding = URL_QUERY,
    decoder: Decoder | None = None,
) -> Response[T]:
    """Send a custom request using the default config."""
    async with _client() as client:
        return await client.request(
            route,
            method,
            headers=headers,
            parameters=parameters,
            body=body,
            decode_type=decode_type,
            encoding=encoding,
            decoder=decoder,
        )
