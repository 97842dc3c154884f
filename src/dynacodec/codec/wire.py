"""Wire value model.

A wire value is a mapping with exactly one key, the type tag, whose value is the
tag's payload, e.g. ``{"S": "foo"}`` or ``{"M": {"age": {"N": "23"}}}``. Tag names
and payload shapes match the DynamoDB AttributeValue schema.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any, TypeAlias

from ..exceptions import MalformedWireValueError

WireValue: TypeAlias = dict[str, Any]


class Tag(str, enum.Enum):
    """The ten attribute type tags."""

    STRING = "S"
    NUMBER = "N"
    BINARY = "B"
    BOOLEAN = "BOOL"
    NULL = "NULL"
    STRING_SET = "SS"
    NUMBER_SET = "NS"
    BINARY_SET = "BS"
    LIST = "L"
    MAP = "M"

    @property
    def is_set(self) -> bool:
        return self in (Tag.STRING_SET, Tag.NUMBER_SET, Tag.BINARY_SET)


TAG_NAMES: frozenset[str] = frozenset(tag.value for tag in Tag)


def tag_of(value: Any) -> Tag:
    """Return the tag of a wire value.

    Args:
        value: Candidate wire value

    Returns:
        The single recognized tag carried by ``value``

    Raises:
        MalformedWireValueError: If ``value`` is not a mapping with exactly one
            recognized tag key

    Examples:
        >>> tag_of({"S": "foo"})
        <Tag.STRING: 'S'>
    """
    if not isinstance(value, Mapping) or len(value) != 1:
        raise MalformedWireValueError(
            "expected a mapping with a single key of the form {'<attribute type>': <value>}, "
            f"for example {{'S': 'foo'}} or {{'N': '123'}}, got {value!r}"
        )
    (key,) = value.keys()
    if key not in TAG_NAMES:
        raise MalformedWireValueError(
            f"unknown attribute type {key!r}, expected one of {sorted(TAG_NAMES)}"
        )
    return Tag(key)
