"""Routes: values that resolve to a URL.

A route is a plain string, an ``httpx.URL``, or any object implementing
``as_url()``. Resolution has no side effects, so resolving the same route
twice yields equal URLs.
"""

import re
from typing import Any, ClassVar, Generic, Protocol, TypeAlias, TypeVar, runtime_checkable

import httpx

from ether.errors import BadURLError


T = TypeVar("T")

# RFC 2396 URI-reference characters: unreserved, reserved, escaped and the
# fragment delimiter; brackets are admitted for IPv6 literals (RFC 2732).
_URI_REFERENCE_PATTERN = re.compile(
    r"^(?:[A-Za-z0-9\-_.!~*'();/?:@&=+$,\[\]]|%[0-9A-Fa-f]{2})*"
    r"(?:#(?:[A-Za-z0-9\-_.!~*'();/?:@&=+$,\[\]]|%[0-9A-Fa-f]{2})*)?$"
)


@runtime_checkable
class Route(Protocol):
    """Protocol for objects that resolve to a URL."""

    def as_url(self) -> httpx.URL:
        """Resolve to a URL.

        Raises:
            BadURLError: If no valid URL can be produced.
        """
        ...


RouteLike: TypeAlias = Route | str | httpx.URL


class TypedRoute(Generic[T]):
    """A route associated with the type its responses decode into.

    Subclasses set ``decoded_type`` and implement ``as_url``; entry points
    use ``decoded_type`` whenever the caller does not pass one explicitly.
    """

    decoded_type: ClassVar[Any]

    def as_url(self) -> httpx.URL:
        raise NotImplementedError


def url_from_string(source: str) -> httpx.URL:
    """Parse a string into a URL.

    Args:
        source: Candidate URL string.

    Returns:
        The parsed URL.

    Raises:
        BadURLError: If the string is not a valid RFC 2396 URI reference.
    """
    if not source or not _URI_REFERENCE_PATTERN.match(source):
        raise BadURLError(source)
    try:
        return httpx.URL(source)
    except httpx.InvalidURL as e:
        raise BadURLError(source) from e


def resolve_url(route: RouteLike) -> httpx.URL:
    """Resolve any supported route value to a URL.

    Args:
        route: A string, ``httpx.URL`` or ``Route`` implementation.

    Returns:
        The resolved URL.

    Raises:
        BadURLError: If the route cannot produce a valid URL.
    """
    if isinstance(route, httpx.URL):
        return route
    if isinstance(route, str):
        return url_from_string(route)
    if isinstance(route, Route):
        return route.as_url()
    raise BadURLError(repr(route))


def decoded_type_of(route: RouteLike) -> Any | None:
    """Return the decoded type a typed route declares, if any."""
    if isinstance(route, TypedRoute):
        return getattr(type(route), "decoded_type", None)
    return None
