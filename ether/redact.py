"""Redaction of secrets from request descriptions."""

import re
from collections.abc import Mapping

import httpx


# Headers whose values must never appear in production logs
SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "cookie",
        "x-api-key",
        "x-auth-token",
        "proxy-authorization",
        "set-cookie",
    }
)

REDACTED_VALUE = "[REDACTED]"

_URL_CREDENTIALS_PATTERN = re.compile(r"(https?://)([^:/@]+):([^@/]+)@")

# Body previews longer than this are truncated in request descriptions
MAX_BODY_PREVIEW_CHARS = 2048


def is_sensitive_header(header_name: str) -> bool:
    """Check if a header name is sensitive."""
    return header_name.lower() in SENSITIVE_HEADERS


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Replace sensitive header values with ``[REDACTED]``.

    Args:
        headers: Original headers (a dict or ``httpx.Headers``).

    Returns:
        New dictionary with sensitive values redacted.
    """
    return {
        key: REDACTED_VALUE if is_sensitive_header(key) else value
        for key, value in headers.items()
    }


def redact_url_credentials(url: str) -> str:
    """Redact ``user:password@`` credentials embedded in a URL."""
    return _URL_CREDENTIALS_PATTERN.sub(r"\1[REDACTED]:[REDACTED]@", url)


def body_preview(content: bytes) -> str:
    """Render a request body for logs, UTF-8 or a byte count."""
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        return f"<binary data: {len(content)} bytes>"
    if len(text) > MAX_BODY_PREVIEW_CHARS:
        return text[:MAX_BODY_PREVIEW_CHARS] + "..."
    return text


def describe_request(request: httpx.Request, *, redact: bool = True) -> dict[str, object]:
    """Describe an outgoing request for structured logging.

    Args:
        request: The assembled request.
        redact: Whether to hide credentials in the URL and sensitive headers.

    Returns:
        Dictionary with method, url, query items, headers and body.
    """
    url = str(request.url)
    headers: Mapping[str, str] = request.headers
    if redact:
        url = redact_url_credentials(url)
        headers = redact_headers(headers)
    return {
        "method": request.method,
        "url": url,
        "query_items": list(request.url.params.multi_items()),
        "headers": dict(headers),
        "body": body_preview(request.content),
    }
