"""JSON encoders and decoders for request bodies and responses.

Both are thin wrappers over ``pydantic.TypeAdapter`` so that any type
pydantic understands (models, dataclasses, TypedDicts, builtin containers)
can be sent and received without extra glue.
"""

from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import PydanticSchemaGenerationError, TypeAdapter

from ether.errors import JsonDecodingError, JsonEncodingError


T = TypeVar("T")


@runtime_checkable
class Encoder(Protocol):
    """Protocol for body encoders."""

    def encode(self, value: Any) -> bytes:
        """Serialize a value to bytes.

        Raises:
            JsonEncodingError: If the value cannot be serialized.
        """
        ...


@runtime_checkable
class Decoder(Protocol):
    """Protocol for response decoders."""

    def decode(self, data: bytes, target: type[T]) -> T:
        """Deserialize bytes into an instance of ``target``.

        Raises:
            JsonDecodingError: If the data does not match ``target``.
        """
        ...


class JsonEncoder:
    """Encode values to JSON bytes using pydantic serialization."""

    def __init__(
        self,
        *,
        indent: int | None = None,
        exclude_none: bool = False,
        by_alias: bool = True,
    ) -> None:
        """Initialize the encoder.

        Args:
            indent: Pretty-print indentation, or None for compact output.
            exclude_none: Drop fields whose value is None.
            by_alias: Write model fields under their aliases.
        """
        self.indent = indent
        self.exclude_none = exclude_none
        self.by_alias = by_alias

    def encode(self, value: Any) -> bytes:
        try:
            adapter: TypeAdapter[Any] = TypeAdapter(type(value))
            return adapter.dump_json(
                value,
                indent=self.indent,
                exclude_none=self.exclude_none,
                by_alias=self.by_alias,
            )
        except (PydanticSchemaGenerationError, ValueError, TypeError) as e:
            raise JsonEncodingError(e) from e


class JsonDecoder:
    """Decode JSON bytes into a target type using pydantic validation."""

    def __init__(self, *, strict: bool = False) -> None:
        """Initialize the decoder.

        Args:
            strict: Disable pydantic's lax type coercion.
        """
        self.strict = strict

    def decode(self, data: bytes, target: type[T]) -> T:
        try:
            adapter: TypeAdapter[T] = TypeAdapter(target)
            return adapter.validate_json(data, strict=self.strict)
        except (PydanticSchemaGenerationError, ValueError) as e:
            raise JsonDecodingError(e) from e
