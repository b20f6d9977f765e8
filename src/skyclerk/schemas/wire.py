"""
Wire-format mapping for API DTOs.

Every DTO declares an explicit WIRE_FIELDS table of
(attribute, JSON key, codec). The same table drives strict decoding
(from_api_response) and serialization (to_dict); there is no
reflection-based renaming.

Sentinel convention: several payloads use 0, 0.0 or "" to mean "absent".
Those fields use a sentinel codec so the Python side sees None, and the
sentinel is written back on the wire.
"""

from collections.abc import Callable
from typing import Any, ClassVar, NamedTuple, TypeVar

M = TypeVar("M", bound="WireModel")


class Codec:
    """Converts one JSON value to its Python value and back."""

    def decode(self, value: Any) -> Any:
        raise NotImplementedError

    def encode(self, value: Any) -> Any:
        raise NotImplementedError


class _IntCodec(Codec):
    def decode(self, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected integer, got {type(value).__name__}")
        return value

    def encode(self, value: int) -> int:
        return value


class _FloatCodec(Codec):
    def decode(self, value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"expected number, got {type(value).__name__}")
        return float(value)

    def encode(self, value: float) -> float:
        return value


class _StrCodec(Codec):
    def decode(self, value: Any) -> str:
        if not isinstance(value, str):
            raise TypeError(f"expected string, got {type(value).__name__}")
        return value

    def encode(self, value: str) -> str:
        return value


class Sentinel(Codec):
    """Maps a wire sentinel (0, 0.0, "") to None."""

    def __init__(self, inner: Codec, sentinel: Any):
        self.inner = inner
        self.sentinel = sentinel

    def decode(self, value: Any) -> Any:
        decoded = self.inner.decode(value)
        return None if decoded == self.sentinel else decoded

    def encode(self, value: Any) -> Any:
        return self.sentinel if value is None else self.inner.encode(value)


class Nested(Codec):
    """A nested JSON object decoded into another WireModel."""

    def __init__(self, model: type["WireModel"]):
        self.model = model

    def decode(self, value: Any) -> "WireModel":
        return self.model.from_api_response(value)

    def encode(self, value: "WireModel") -> dict[str, Any]:
        return value.to_dict()


class ListOf(Codec):
    """A JSON array whose items share one codec."""

    def __init__(self, inner: Codec):
        self.inner = inner

    def decode(self, value: Any) -> list:
        if not isinstance(value, list):
            raise TypeError(f"expected array, got {type(value).__name__}")
        return [self.inner.decode(item) for item in value]

    def encode(self, value: list) -> list:
        return [self.inner.encode(item) for item in value]


INT = _IntCodec()
FLOAT = _FloatCodec()
STR = _StrCodec()
OPTIONAL_INT = Sentinel(INT, 0)
OPTIONAL_FLOAT = Sentinel(FLOAT, 0.0)
OPTIONAL_STR = Sentinel(STR, "")


class WireField(NamedTuple):
    """One row of a DTO's key mapping table."""

    attr: str
    key: str
    codec: Codec


class WireModel:
    """Base for dataclass DTOs with an explicit wire mapping table."""

    WIRE_FIELDS: ClassVar[tuple[WireField, ...]] = ()

    @classmethod
    def from_api_response(cls: type[M], data: Any) -> M:
        """Strictly decode a JSON object; missing keys or wrong types raise."""
        return cls(**cls._decode_fields(data, cls.WIRE_FIELDS))

    @classmethod
    def _decode_fields(cls, data: Any, fields: tuple[WireField, ...]) -> dict[str, Any]:
        if not isinstance(data, dict):
            raise TypeError(f"{cls.__name__}: expected JSON object, got {type(data).__name__}")

        values: dict[str, Any] = {}
        for field in fields:
            if field.key not in data:
                raise KeyError(f"{cls.__name__}: missing key {field.key!r}")
            try:
                values[field.attr] = field.codec.decode(data[field.key])
            except TypeError as e:
                raise TypeError(f"{cls.__name__}.{field.key}: {e}") from e
        return values

    def to_dict(self) -> dict[str, Any]:
        """Serialize through the same mapping table."""
        return {
            field.key: field.codec.encode(getattr(self, field.attr))
            for field in self.WIRE_FIELDS
        }


def list_of(model: type[M]) -> Callable[[Any], list[M]]:
    """Build a decoder for a JSON array of `model` objects."""
    codec = ListOf(Nested(model))

    def decode(data: Any) -> list[M]:
        return codec.decode(data)

    return decode
