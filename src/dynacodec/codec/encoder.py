"""Encoder from native Python values to wire values.

This module provides the encode() function, which infers a type tag for a native
value and recursively encodes nested containers, and encode_root(), which encodes
a whole item without the enclosing map tag.
"""

from __future__ import annotations

import base64
import enum
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from ..exceptions import UnrepresentableValueError
from .encoded import Encoded
from .numbers import format_number, is_number
from .schema import RecordSchema, is_record
from .wire import Tag, WireValue

_BYTES_TYPES = (bytes, bytearray, memoryview)


def encode(value: Any) -> WireValue:
    """Encode a native value as a wire value.

    Tags are inferred in this order: Encoded values pass through, records become
    maps of their fields, then None, bools, numbers, mappings, strings, bytes,
    lists/tuples and finally sets.

    Args:
        value: Native value to encode

    Returns:
        Wire value with exactly one tag

    Raises:
        UnrepresentableValueError: If no tag can be inferred (empty or mixed set,
            non-finite number, unsupported type)

    Examples:
        >>> encode(34)
        {'N': '34'}
        >>> encode(["foo", 1])
        {'L': [{'S': 'foo'}, {'N': '1'}]}
        >>> encode({"name": "Bob", "tags": {"a", "b"}})
        {'M': {'name': {'S': 'Bob'}, 'tags': {'SS': ['a', 'b']}}}
    """
    return _encode(value, "$")


def encode_root(value: Any) -> dict[str, WireValue]:
    """Encode a mapping or record as a top-level item.

    The result is the payload of the map tag, i.e. attribute name to wire value,
    which is the shape the API expects for a whole item.

    Raises:
        UnrepresentableValueError: If ``value`` is not a mapping or record, or a
            nested value cannot be encoded

    Example:
        >>> encode_root({"id": 1, "name": "Bob"})
        {'id': {'N': '1'}, 'name': {'S': 'Bob'}}
    """
    if is_record(value) and not isinstance(value, Encoded):
        value = RecordSchema.for_type(type(value)).to_mapping(value)
    if not isinstance(value, Mapping):
        raise UnrepresentableValueError(
            f"root must be a mapping or a record, got {type(value).__name__}"
        )
    return _encode_map(value, "$")


def _encode(value: Any, path: str) -> WireValue:
    if isinstance(value, Encoded):
        return value.value

    if is_record(value):
        fields = RecordSchema.for_type(type(value)).to_mapping(value)
        return {Tag.MAP.value: _encode_map(fields, path)}

    if value is None:
        return {Tag.NULL.value: True}

    if isinstance(value, bool):
        return {Tag.BOOLEAN.value: value}

    if isinstance(value, enum.Enum):
        return _encode(value.value, path)

    if is_number(value):
        return {Tag.NUMBER.value: _format_number(value, path)}

    if isinstance(value, Mapping):
        return {Tag.MAP.value: _encode_map(value, path)}

    if isinstance(value, str):
        return {Tag.STRING.value: value}

    if isinstance(value, _BYTES_TYPES):
        return {Tag.BINARY.value: _b64(value)}

    if isinstance(value, (list, tuple)):
        return {
            Tag.LIST.value: [_encode(item, f"{path}[{i}]") for i, item in enumerate(value)]
        }

    if isinstance(value, (set, frozenset)):
        return _encode_set(value, path)

    raise UnrepresentableValueError(f"{path}: cannot encode value of type {type(value).__name__}")


def _encode_map(value: Mapping[Any, Any], path: str) -> dict[str, WireValue]:
    encoded: dict[str, WireValue] = {}
    for key, item in value.items():
        name = _stringify_key(key, path)
        encoded[name] = _encode(item, f"{path}.{name}")
    return encoded


def _encode_set(value: set[Any] | frozenset[Any], path: str) -> WireValue:
    if not value:
        raise UnrepresentableValueError(
            f"{path}: Cannot determine a proper data type for an empty set"
        )

    if all(is_number(item) for item in value):
        # equal numbers of different types (0.1 and Decimal("0.1")) share one text
        members = {_format_number(item, path) for item in value}
        return {Tag.NUMBER_SET.value: sorted(members, key=Decimal)}

    if all(isinstance(item, str) for item in value):
        return {Tag.STRING_SET.value: sorted(value)}

    if all(isinstance(item, _BYTES_TYPES) for item in value):
        return {Tag.BINARY_SET.value: [_b64(item) for item in sorted(bytes(v) for v in value)]}

    raise UnrepresentableValueError(
        f"{path}: All elements in a set must be only numbers, only strings or only binaries"
    )


def _stringify_key(key: Any, path: str) -> str:
    if isinstance(key, enum.Enum):
        return _stringify_key(key.value, path)
    if isinstance(key, str):
        return key
    if isinstance(key, int) and not isinstance(key, bool):
        return str(int(key))
    raise UnrepresentableValueError(
        f"{path}: map keys must be strings, got {type(key).__name__} {key!r}"
    )


def _format_number(value: Any, path: str) -> str:
    try:
        return format_number(value)
    except UnrepresentableValueError as e:
        raise UnrepresentableValueError(f"{path}: {e}") from e


def _b64(value: bytes | bytearray | memoryview) -> str:
    return base64.b64encode(bytes(value)).decode("ascii")
