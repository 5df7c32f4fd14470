"""Typed DynamoDB attribute values.

The low-level client speaks in tagged dicts such as ``{"S": "text"}`` or
``{"N": "42"}``. This module turns them into one dataclass per tag so that
callers check the variant instead of blindly indexing into the dict.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Any, TypeVar, Union

from ddblocal.errors import TypeMismatchError


@dataclass(frozen=True)
class StringValue:
    value: str


@dataclass(frozen=True)
class NumberValue:
    value: Decimal


@dataclass(frozen=True)
class BinaryValue:
    value: bytes


@dataclass(frozen=True)
class StringSetValue:
    value: frozenset[str]


@dataclass(frozen=True)
class NumberSetValue:
    value: frozenset[Decimal]


@dataclass(frozen=True)
class BinarySetValue:
    value: frozenset[bytes]


@dataclass(frozen=True)
class MapValue:
    """Nested map. The contents are copied into a read-only view."""

    value: Mapping[str, "AttributeValue"] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", MappingProxyType(dict(self.value)))

    def __hash__(self) -> int:
        return hash(frozenset(self.value.items()))


@dataclass(frozen=True)
class ListValue:
    value: tuple["AttributeValue", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", tuple(self.value))


@dataclass(frozen=True)
class NullValue:
    pass


@dataclass(frozen=True)
class BoolValue:
    value: bool


AttributeValue = Union[
    StringValue,
    NumberValue,
    BinaryValue,
    StringSetValue,
    NumberSetValue,
    BinarySetValue,
    MapValue,
    ListValue,
    NullValue,
    BoolValue,
]

Item = dict[str, AttributeValue]

V = TypeVar("V")


def from_wire(data: Mapping[str, Any]) -> AttributeValue:
    """Convert a low-level attribute value dict to its typed variant.

    Raises:
        ValueError: The dict does not carry exactly one known tag.
    """
    if len(data) != 1:
        msg = f"Attribute value must have exactly one type tag, got {sorted(data)}"
        raise ValueError(msg)
    ((tag, raw),) = data.items()

    if tag == "S":
        return StringValue(raw)
    if tag == "N":
        return NumberValue(Decimal(raw))
    if tag == "B":
        return BinaryValue(bytes(raw))
    if tag == "SS":
        return StringSetValue(frozenset(raw))
    if tag == "NS":
        return NumberSetValue(frozenset(Decimal(n) for n in raw))
    if tag == "BS":
        return BinarySetValue(frozenset(bytes(b) for b in raw))
    if tag == "M":
        return MapValue({key: from_wire(value) for key, value in raw.items()})
    if tag == "L":
        return ListValue(tuple(from_wire(value) for value in raw))
    if tag == "NULL":
        return NullValue()
    if tag == "BOOL":
        return BoolValue(_parse_bool(raw))

    msg = f"Unknown attribute type tag: {tag}"
    raise ValueError(msg)


def _parse_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and raw.lower() in ("true", "false"):
        return raw.lower() == "true"
    msg = f"Invalid BOOL value: {raw!r}"
    raise ValueError(msg)


def to_wire(value: AttributeValue) -> dict[str, Any]:
    """Convert a typed attribute value back to the low-level dict."""
    if isinstance(value, StringValue):
        return {"S": value.value}
    if isinstance(value, NumberValue):
        return {"N": str(value.value)}
    if isinstance(value, BinaryValue):
        return {"B": value.value}
    if isinstance(value, StringSetValue):
        return {"SS": sorted(value.value)}
    if isinstance(value, NumberSetValue):
        return {"NS": [str(n) for n in sorted(value.value)]}
    if isinstance(value, BinarySetValue):
        return {"BS": sorted(value.value)}
    if isinstance(value, MapValue):
        return {"M": {key: to_wire(v) for key, v in value.value.items()}}
    if isinstance(value, ListValue):
        return {"L": [to_wire(v) for v in value.value]}
    if isinstance(value, NullValue):
        return {"NULL": True}
    if isinstance(value, BoolValue):
        return {"BOOL": value.value}

    msg = f"Not an attribute value: {type(value).__name__}"
    raise TypeError(msg)


def item_from_wire(item: Mapping[str, Mapping[str, Any]]) -> Item:
    return {key: from_wire(value) for key, value in item.items()}


def item_to_wire(item: Mapping[str, AttributeValue]) -> dict[str, dict[str, Any]]:
    return {key: to_wire(value) for key, value in item.items()}


def expect(value: AttributeValue, variant: type[V]) -> V:
    """Return ``value`` if it is a ``variant``.

    Raises:
        TypeMismatchError: ``value`` is some other variant.
    """
    if not isinstance(value, variant):
        raise TypeMismatchError(variant, value)
    return value


def get_string(item: Mapping[str, Any], key: str) -> str:
    """Read a string attribute from a typed or low-level item.

    Raises:
        KeyError: ``key`` is not in the item.
        TypeMismatchError: The attribute is not a string.
    """
    value = item[key]
    if isinstance(value, Mapping):
        value = from_wire(value)
    return expect(value, StringValue).value
