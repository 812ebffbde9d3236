"""Fetchable types: REST-style singular and plural resource retrieval.

A type that knows the route for one instance (``singular_route``) and/or
for a filtered collection (``plural_route``) can be fetched without the
caller building routes or naming decode types::

    class User(BaseModel):
        name: str

        @classmethod
        def singular_route(cls, id: str | None) -> RouteLike:
            return f"https://api.example.com/users/{id}"

    user = await client.fetch(User, id="1")
"""

from collections.abc import Callable
from typing import Any, Protocol, TypeVar, runtime_checkable

from ether.codec import Decoder
from ether.models import FetchableFilters, Parameters
from ether.route import RouteLike


T = TypeVar("T")
C = TypeVar("C")

# Locates the wanted value inside a container: an attribute/key name or a getter
ContainerKey = str | Callable[[Any], Any]


@runtime_checkable
class SingularFetchable(Protocol):
    """Types whose API returns single instances by identifier."""

    @classmethod
    def singular_route(cls, id: str | None) -> RouteLike:  # noqa: A002
        """Route for the instance with the given identifier.

        Args:
            id: Identifier, e.g. the ``1`` in ``https://site.com/users/1``.

        Returns:
            Route to the instance.
        """
        ...


@runtime_checkable
class PluralFetchable(Protocol):
    """Types whose API returns collections, optionally filtered."""

    @classmethod
    def plural_route(cls, filters: FetchableFilters | None) -> RouteLike:
        """Route for the collection, applying whichever filters the API supports."""
        ...


def extract(container: Any, key: ContainerKey) -> Any:
    """Pull a value out of a decoded container.

    Args:
        container: Decoded container instance.
        key: Callable, mapping key, or attribute name.

    Returns:
        The extracted value.
    """
    if callable(key):
        return key(container)
    if isinstance(container, dict):
        return container[key]
    return getattr(container, key)


class _Getter(Protocol):
    async def get(
        self,
        route: RouteLike,
        decode_type: Any | None = None,
        parameters: Parameters | None = None,
        decoder: Decoder | None = None,
    ) -> Any: ...


class FetchMixin:
    """Fetch helpers layered on a client's ``get``."""

    async def fetch(
        self: _Getter,
        cls: type[T],
        id: str | None = None,  # noqa: A002
        parameters: Parameters | None = None,
    ) -> T:
        """Fetch one instance of a singular-fetchable type."""
        route = cls.singular_route(id)  # type: ignore[attr-defined]
        result: T = await self.get(route, cls, parameters=parameters)
        return result

    async def fetch_with_container(
        self: _Getter,
        cls: type[Any],
        container: type[C],
        id: str | None = None,  # noqa: A002
        parameters: Parameters | None = None,
    ) -> C:
        """Fetch one instance wrapped in a response container, keeping the container."""
        route = cls.singular_route(id)
        result: C = await self.get(route, container, parameters=parameters)
        return result

    async def fetch_from_container(
        self,
        cls: type[T],
        container: type[Any],
        key: ContainerKey,
        id: str | None = None,  # noqa: A002
        parameters: Parameters | None = None,
    ) -> T:
        """Fetch one instance wrapped in a response container, unwrapping it."""
        wrapped = await self.fetch_with_container(cls, container, id=id, parameters=parameters)
        value: T = extract(wrapped, key)
        return value

    async def fetch_all(
        self: _Getter,
        cls: type[T],
        filters: FetchableFilters | None = None,
        parameters: Parameters | None = None,
    ) -> list[T]:
        """Fetch every instance of a plural-fetchable type matching the filters."""
        route = cls.plural_route(filters)  # type: ignore[attr-defined]
        result: list[T] = await self.get(route, list[cls], parameters=parameters)  # type: ignore[valid-type]
        return result

    async def fetch_all_with_container(
        self: _Getter,
        cls: type[Any],
        container: type[C],
        filters: FetchableFilters | None = None,
        parameters: Parameters | None = None,
    ) -> C:
        """Fetch a collection wrapped in a response container, keeping the container."""
        route = cls.plural_route(filters)
        result: C = await self.get(route, container, parameters=parameters)
        return result

    async def fetch_all_from_container(
        self,
        cls: type[T],
        container: type[Any],
        key: ContainerKey,
        filters: FetchableFilters | None = None,
        parameters: Parameters | None = None,
    ) -> list[T]:
        """Fetch a collection wrapped in a response container, unwrapping it."""
        wrapped = await self.fetch_all_with_container(
            cls, container, filters=filters, parameters=parameters
        )
        values: list[T] = extract(wrapped, key)
        return values
