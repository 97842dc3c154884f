"""Decoder from wire values to native Python values.

This module provides the decode() function, which dispatches on the type tag of
a wire value and recursively decodes nested containers. Decoding can optionally
coerce the resulting mapping into a record type, after which the record's
post-decode hook runs. This is how nested maps get turned into nested records.
"""

from __future__ import annotations

import base64
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from structlog import get_logger

from ..exceptions import MalformedWireValueError, SchemaError
from .numbers import parse_number
from .schema import RecordSchema
from .wire import Tag, WireValue, tag_of

logger = get_logger()


@dataclass(frozen=True)
class DecodeOptions:
    """Options for decoding a wire value.

    Attributes:
        as_: Record type (or explicit RecordSchema) to decode into. When None,
            decoding yields plain dicts, lists, sets and scalars.
        use_decimal: Decode non-integral numbers as Decimal instead of float,
            keeping every digit of the wire text

    Examples:
        ```python
        decode(item, DecodeOptions(as_=User))
        decode(item, {"as": User})
        decode(item, as_=User)
        decode({"N": "0.1"}, use_decimal=True)   # Decimal("0.1")
        ```
    """

    as_: type | RecordSchema | None = None
    use_decimal: bool = False

    def __post_init__(self) -> None:
        if self.as_ is not None and not isinstance(self.as_, (type, RecordSchema)):
            raise SchemaError(
                f"'as' must be a record type or a RecordSchema, got {type(self.as_).__name__}"
            )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> DecodeOptions:
        """Build options from a mapping such as ``{"as": User}``.

        Raises:
            SchemaError: On unknown option names
        """
        unknown = set(options) - {"as", "use_decimal"}
        if unknown:
            raise SchemaError(
                f"unknown decode options {sorted(unknown)}, expected 'as' or 'use_decimal'"
            )
        return cls(as_=options.get("as"), use_decimal=bool(options.get("use_decimal", False)))

    @property
    def schema(self) -> RecordSchema | None:
        if self.as_ is None or isinstance(self.as_, RecordSchema):
            return self.as_
        return RecordSchema.for_type(self.as_)


def decode(
    value: WireValue,
    options: DecodeOptions | Mapping[str, Any] | None = None,
    *,
    as_: type | RecordSchema | None = None,
    use_decimal: bool = False,
) -> Any:
    """Decode a wire value to a native value.

    Args:
        value: Wire value with a single type tag
        options: DecodeOptions or the equivalent mapping
        as_: Shortcut for ``DecodeOptions(as_=...)``
        use_decimal: Shortcut for ``DecodeOptions(use_decimal=True)``

    Returns:
        The native value, or a populated record when a target type is given

    Raises:
        MalformedWireValueError: If the value or a nested value is not a valid wire value
        SchemaError: If the options are invalid or a record cannot be built

    Examples:
        ```python
        decode({"S": "bar"})                        # 'bar'
        decode({"M": {"foo": {"S": "bar"}}})        # {'foo': 'bar'}
        decode({"NS": ["1", "2", "3"]})             # {1, 2, 3}

        encoded = {"M": {"name": {"S": "Jane Doe"}, "age": {"N": "23"}}}
        decode(encoded, as_=User)                   # User(name='Jane Doe', age=23)
        ```
    """
    options = _resolve_options(options, as_, use_decimal)
    schema = options.schema
    if schema is None:
        return _decode(value, "$", options.use_decimal)

    if tag_of(value) is not Tag.MAP:
        raise SchemaError(
            f"cannot decode {next(iter(value))!r} value as {schema.record_type.__name__}, "
            f"expected a map"
        )
    return schema.build(_decode(value, "$", options.use_decimal))


def decode_root(
    root: Mapping[str, WireValue],
    options: DecodeOptions | Mapping[str, Any] | None = None,
    *,
    as_: type | RecordSchema | None = None,
    use_decimal: bool = False,
) -> Any:
    """Decode a top-level item (attribute name to wire value).

    Equivalent to decoding ``{"M": root}``.

    Example:
        >>> decode_root({"foo": {"S": "bar"}, "baz": {"N": "123"}})
        {'foo': 'bar', 'baz': 123}
    """
    if not isinstance(root, Mapping):
        raise MalformedWireValueError(f"root must be a mapping, got {type(root).__name__}")
    return decode({Tag.MAP.value: root}, options, as_=as_, use_decimal=use_decimal)


def _resolve_options(
    options: DecodeOptions | Mapping[str, Any] | None,
    as_: type | RecordSchema | None,
    use_decimal: bool,
) -> DecodeOptions:
    if options is None:
        return DecodeOptions(as_=as_, use_decimal=use_decimal)

    if isinstance(options, Mapping):
        options = DecodeOptions.from_mapping(options)
    elif not isinstance(options, DecodeOptions):
        raise SchemaError(f"expected DecodeOptions or a mapping, got {type(options).__name__}")

    if as_ is not None:
        if options.as_ is not None and options.as_ is not as_:
            raise SchemaError("conflicting 'as' given in options and as keyword")
        options = DecodeOptions(as_=as_, use_decimal=options.use_decimal)
    if use_decimal and not options.use_decimal:
        options = DecodeOptions(as_=options.as_, use_decimal=True)
    return options


def _decode(value: Any, path: str, use_decimal: bool = False) -> Any:
    try:
        tag = tag_of(value)
    except MalformedWireValueError as e:
        raise MalformedWireValueError(f"{path}: {e}") from e
    payload = value[tag.value]

    if tag is Tag.BOOLEAN:
        if payload is True or payload is False:
            return payload
        if payload in ("true", "false"):
            logger.debug("accepting textual boolean", path=path, payload=payload)
            return payload == "true"
        raise MalformedWireValueError(f"{path}: invalid BOOL payload {payload!r}")

    if tag is Tag.NULL:
        if payload is True:
            return None
        if payload == "true":
            logger.debug("accepting textual null", path=path)
            return None
        raise MalformedWireValueError(f"{path}: invalid NULL payload {payload!r}")

    if tag is Tag.BINARY:
        return _b64decode(payload, path)

    if tag is Tag.STRING:
        if not isinstance(payload, str):
            raise MalformedWireValueError(f"{path}: S payload must be text, got {payload!r}")
        return payload

    if tag is Tag.MAP:
        if not isinstance(payload, Mapping):
            raise MalformedWireValueError(f"{path}: M payload must be a mapping, got {payload!r}")
        return {key: _decode(item, f"{path}.{key}", use_decimal) for key, item in payload.items()}

    if tag is Tag.LIST:
        return [
            _decode(item, f"{path}[{i}]", use_decimal)
            for i, item in enumerate(_members(payload, tag, path))
        ]

    if tag is Tag.STRING_SET:
        members = _members(payload, tag, path)
        if not all(isinstance(item, str) for item in members):
            raise MalformedWireValueError(f"{path}: SS members must be text, got {payload!r}")
        return set(members)

    if tag is Tag.BINARY_SET:
        return {_b64decode(item, path) for item in _members(payload, tag, path)}

    if tag is Tag.NUMBER_SET:
        return {_parse_number(item, path, use_decimal) for item in _members(payload, tag, path)}

    return _parse_number(payload, path, use_decimal)


def _members(payload: Any, tag: Tag, path: str) -> list[Any] | tuple[Any, ...]:
    if not isinstance(payload, (list, tuple)):
        raise MalformedWireValueError(
            f"{path}: {tag.value} payload must be a list, got {payload!r}"
        )
    return payload


def _parse_number(payload: Any, path: str, use_decimal: bool) -> int | float | Decimal:
    try:
        return parse_number(payload, use_decimal)
    except MalformedWireValueError as e:
        raise MalformedWireValueError(f"{path}: {e}") from e


def _b64decode(payload: Any, path: str) -> bytes:
    if not isinstance(payload, (str, bytes)):
        raise MalformedWireValueError(f"{path}: binary payload must be base64 text, got {payload!r}")
    try:
        return base64.b64decode(payload, validate=True)
    except ValueError as e:
        raise MalformedWireValueError(f"{path}: invalid base64 {payload!r}: {e}") from e
