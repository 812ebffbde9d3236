"""Request header resolution.

Headers are layered from lowest to highest precedence:

1. ``Accept: application/json`` when a decoded response is requested
2. Trusted headers registered for the request host
3. Headers passed by the caller
4. Headers derived from the parameter encoding

Later layers overwrite matching keys (case-insensitively) from earlier ones.
"""

from collections.abc import Mapping

import httpx
import structlog

from ether.constants import (
    CONTENT_TYPE_JSON,
    HEADER_ACCEPT,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_ENCODING,
    HEADER_CONTENT_TYPE,
)


logger = structlog.get_logger()

_MANAGED_HEADERS = frozenset(
    name.lower()
    for name in (
        HEADER_ACCEPT,
        HEADER_AUTHORIZATION,
        HEADER_CONTENT_TYPE,
        HEADER_CONTENT_ENCODING,
    )
)


def header_override_warning(
    name: str,
    value: str,
    known_domain: str | None,
) -> str | None:
    """Explain why manually setting a managed header is likely unintended.

    Args:
        name: Header name set by the caller.
        value: Header value set by the caller.
        known_domain: Host with trusted headers configured, if any.

    Returns:
        Warning text, or None if the header is not worth a warning.
    """
    key = name.lower()
    if key not in _MANAGED_HEADERS:
        return None

    if key == HEADER_ACCEPT.lower():
        return (
            f"Manually setting {name} in this request may cause the server "
            "to not return a decodable response."
        )
    if key == HEADER_AUTHORIZATION.lower():
        if known_domain is None:
            return None
        return (
            f"Manually setting {name} in this request will disrupt your "
            f"session headers for {known_domain}."
        )
    if key == HEADER_CONTENT_TYPE.lower():
        if value.startswith(CONTENT_TYPE_JSON):
            suggestion = f"{value} is supported natively; use the JSON encoding"
        else:
            suggestion = f"use CustomEncoding({value!r})"
        return (
            f"Setting {name} via headers is not supported; the parameter "
            f"encoding overwrites it. Instead, {suggestion} and remove the "
            "header."
        )
    return (
        f"Setting {name} via headers is not supported; it is overwritten in "
        "some cases, such as when gzipping a request."
    )


def check_for_header_issues(
    headers: Mapping[str, str],
    known_domain: str | None,
) -> list[str]:
    """Log a warning for every caller header that overrides a managed one.

    Args:
        headers: Caller-supplied headers.
        known_domain: Host with trusted headers configured, if any.

    Returns:
        The warnings that were logged.
    """
    warnings: list[str] = []
    for name, value in headers.items():
        warning = header_override_warning(name, value, known_domain)
        if warning is None:
            continue
        logger.warning(
            "header_override_warning",
            component="ether",
            header=name,
            domain=known_domain,
            detail=warning,
        )
        warnings.append(warning)
    return warnings


def resolve_headers(
    *,
    decode_requested: bool,
    trusted_headers: Mapping[str, str] | None,
    caller_headers: Mapping[str, str] | None,
    encoding_headers: Mapping[str, str],
    known_domain: str | None = None,
) -> httpx.Headers:
    """Merge header layers in precedence order.

    Args:
        decode_requested: Whether the caller asked for a decoded response.
        trusted_headers: Trusted headers for the request host.
        caller_headers: Explicit headers for this call.
        encoding_headers: Headers implied by the parameter encoding.
        known_domain: Host the trusted headers belong to, for warnings.

    Returns:
        Final request headers.
    """
    headers = httpx.Headers()

    if decode_requested:
        headers[HEADER_ACCEPT] = CONTENT_TYPE_JSON

    if trusted_headers:
        headers.update(trusted_headers)

    if caller_headers:
        check_for_header_issues(caller_headers, known_domain)
        headers.update(caller_headers)

    headers.update(encoding_headers)
    return headers
