"""Error types raised by the request pipeline.

Every failure of a single call surfaces as one of the ``EtherError``
subclasses below, except transport failures (DNS, refused connections,
TLS), which propagate as the ``httpx`` exception unchanged.
"""

from enum import Enum

from ether.constants import (
    HTTP_STATUS_CLIENT_ERROR_MIN,
    HTTP_STATUS_SERVER_ERROR_MAX,
    HTTP_STATUS_SERVER_ERROR_MIN,
)


class EtherErrorKind(str, Enum):
    """Classification of pipeline errors.

    - REQUEST_FAILED: Generic request failure
    - RESPONSE_NOT_HTTP: Transport returned something that is not HTTP
    - BAD_URL: A route could not be resolved to a URL
    - BAD_QUERY_ITEM: A query item could not be constructed
    - BAD_RESPONSE_CODE: Status code outside the 2xx range
    - JSON_ENCODING_FAILED: Parameters or body could not be serialized
    - JSON_DECODING_FAILED: Response body could not be decoded
    - MISC_RESPONSE_ISSUE: Anything not otherwise classified
    """

    REQUEST_FAILED = "REQUEST_FAILED"
    RESPONSE_NOT_HTTP = "RESPONSE_NOT_HTTP"
    BAD_URL = "BAD_URL"
    BAD_QUERY_ITEM = "BAD_QUERY_ITEM"
    BAD_RESPONSE_CODE = "BAD_RESPONSE_CODE"
    JSON_ENCODING_FAILED = "JSON_ENCODING_FAILED"
    JSON_DECODING_FAILED = "JSON_DECODING_FAILED"
    MISC_RESPONSE_ISSUE = "MISC_RESPONSE_ISSUE"


class EtherError(Exception):
    """Base exception for pipeline errors.

    Subclasses override ``description``, ``failure_reason`` and
    ``recovery_suggestion`` so callers can display or log a complete,
    human-readable account of what went wrong.
    """

    kind: EtherErrorKind = EtherErrorKind.MISC_RESPONSE_ISSUE

    def __init__(self) -> None:
        super().__init__(self.description)

    @property
    def description(self) -> str:
        """Short description of the error."""
        return "An unknown miscellaneous error occurred."

    @property
    def failure_reason(self) -> str | None:
        """Why the error happened, if known."""
        return None

    @property
    def recovery_suggestion(self) -> str | None:
        """How the caller might recover, if known."""
        return None

    def to_dict(self) -> dict[str, str | None]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "kind": self.kind.value,
            "description": self.description,
            "failure_reason": self.failure_reason,
            "recovery_suggestion": self.recovery_suggestion,
        }


class RequestFailedError(EtherError):
    """The request failed."""

    kind = EtherErrorKind.REQUEST_FAILED

    @property
    def description(self) -> str:
        return "The request failed."


class ResponseNotHTTPError(EtherError):
    """The transport returned a response that is not valid HTTP."""

    kind = EtherErrorKind.RESPONSE_NOT_HTTP

    @property
    def description(self) -> str:
        return "The response was not valid HTTP."

    @property
    def failure_reason(self) -> str:
        return "Only well-formed RFC 9110 HTTP responses can be handled."

    @property
    def recovery_suggestion(self) -> str:
        return (
            "Examine the response with a tool like curl or Postman. If "
            "something looks wrong with it, contact the server's "
            "administrator; otherwise please open an issue."
        )


class BadURLError(EtherError):
    """A route could not be resolved to a valid URL.

    Attributes:
        source: The string the route attempted to convert, if any.
    """

    kind = EtherErrorKind.BAD_URL

    def __init__(self, source: str | None = None) -> None:
        self.source = source
        super().__init__()

    @property
    def _shown_source(self) -> str:
        return self.source if self.source is not None else "(none)"

    @property
    def description(self) -> str:
        return f"The string provided as a route is not a valid URL: {self._shown_source}"

    @property
    def failure_reason(self) -> str:
        return (
            "The string provided as a route does not represent a valid "
            f"RFC 2396 URL: {self._shown_source}"
        )

    @property
    def recovery_suggestion(self) -> str:
        return f"Double-check this URL and try to find the issue: {self._shown_source}"


class BadQueryItemError(EtherError):
    """A query item could not be constructed from the parameters.

    Attributes:
        item: The offending (key, value) pair.
    """

    kind = EtherErrorKind.BAD_QUERY_ITEM

    def __init__(self, item: tuple[object, object]) -> None:
        self.item = item
        super().__init__()

    @property
    def description(self) -> str:
        key, value = self.item
        return f"One of the provided query items is invalid: {key!r}={value!r}"

    @property
    def recovery_suggestion(self) -> str:
        return "Query parameter keys must be non-empty strings and values must not be None."


class BadResponseCodeError(EtherError):
    """The server responded with a status code outside the 2xx range.

    Attributes:
        status_code: The HTTP status code received.
    """

    kind = EtherErrorKind.BAD_RESPONSE_CODE

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__()

    @property
    def description(self) -> str:
        return f"The server responded with a bad response code: {self.status_code}"

    @property
    def failure_reason(self) -> str:
        return (
            "The status code in an HTTP response must be between 200 and 299 "
            "to be considered a standard, satisfactory response. Anything "
            "else, particularly in the 400-499 and 500-599 range, indicates "
            f"that something unexpected happened. This time, the response "
            f"was {self.status_code}."
        )

    @property
    def recovery_suggestion(self) -> str:
        code = self.status_code
        message = ""
        if HTTP_STATUS_CLIENT_ERROR_MIN <= code < HTTP_STATUS_SERVER_ERROR_MIN:
            message += (
                f"Status code {code} is in the 4xx range, indicating that the "
                "server is claiming something's wrong with the request we "
                "made, and is therefore refusing to service it. "
            )
        elif HTTP_STATUS_SERVER_ERROR_MIN <= code < HTTP_STATUS_SERVER_ERROR_MAX:
            message += (
                f"Status code {code} is in the 5xx range, indicating that the "
                "server is encountering an error while attempting to service "
                "the request we made. "
            )
        message += (
            f"Check https://en.wikipedia.org/wiki/List_of_HTTP_status_codes#{code} "
            f"to learn more about status code {code}."
        )
        return message


class _CodecError(EtherError):
    """Shared behaviour for JSON encoding and decoding failures."""

    _verb = "Encoding to"

    def __init__(self, underlying: BaseException | None = None) -> None:
        self.underlying = underlying
        super().__init__()

    @property
    def description(self) -> str:
        if self.underlying is not None:
            return f"{self._verb} JSON failed: {self.underlying}"
        return f"{self._verb} JSON failed, but no further information is available."

    @property
    def failure_reason(self) -> str | None:
        if self.underlying is None:
            return None
        return type(self.underlying).__name__


class JsonEncodingError(_CodecError):
    """Parameters or body could not be serialized to JSON.

    Attributes:
        underlying: The encoder's exception, if available.
    """

    kind = EtherErrorKind.JSON_ENCODING_FAILED
    _verb = "Encoding to"

    @property
    def recovery_suggestion(self) -> str:
        return "Make sure every parameter and body value is JSON-serializable."


class JsonDecodingError(_CodecError):
    """The response body could not be decoded into the requested type.

    Attributes:
        underlying: The decoder's exception, if available.
    """

    kind = EtherErrorKind.JSON_DECODING_FAILED
    _verb = "Decoding from"

    @property
    def recovery_suggestion(self) -> str:
        return (
            "Compare the response body with the requested type; fields may be "
            "missing, renamed or of a different type."
        )


class MiscResponseIssueError(EtherError):
    """Catch-all for conditions not otherwise classified."""

    kind = EtherErrorKind.MISC_RESPONSE_ISSUE

    @property
    def description(self) -> str:
        return (
            "An unknown miscellaneous error occurred. Please report this to "
            "the maintainers."
        )
