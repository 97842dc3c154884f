"""Numeric formatting shared by the encoder and the decoder.

Numbers travel as decimal text without exponent notation. Integral values are
written without a fractional part, so an integral float and the equal integer
share one wire form and decode to the integer.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any

from ..exceptions import MalformedWireValueError, UnrepresentableValueError

_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_RE = re.compile(r"[+-]?\d+")


def is_number(value: Any) -> bool:
    """Whether ``value`` is encoded under the N tag (bools are not numbers)."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def format_number(value: int | float | Decimal) -> str:
    """Render a number as canonical decimal text.

    Examples:
        >>> format_number(34)
        '34'
        >>> format_number(0.4)
        '0.4'
        >>> format_number(23.0)
        '23'
        >>> format_number(1e-7)
        '0.0000001'

    Raises:
        UnrepresentableValueError: For bools, NaN and infinities
    """
    if not is_number(value):
        raise UnrepresentableValueError(f"expected a number, got {type(value).__name__}")

    if isinstance(value, int):
        # Decimal avoids the interpreter's int-to-str digit limit
        return format(Decimal(int(value)), "f")

    if isinstance(value, float):
        if not math.isfinite(value):
            raise UnrepresentableValueError(f"cannot encode non-finite number {value!r}")
        # repr() gives the shortest digits that round-trip
        decimal = Decimal(repr(value))
    else:
        if not value.is_finite():
            raise UnrepresentableValueError(f"cannot encode non-finite number {value!r}")
        decimal = value

    if decimal.is_zero():
        return "0"
    # format() keeps every digit, unlike normalize() which rounds to the context precision
    text = format(decimal, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def parse_number(payload: Any, use_decimal: bool = False) -> int | float | Decimal:
    """Coerce an N payload to a Python number.

    Native ints and floats pass through. Text that is an integer literal becomes
    an int; other numeric text becomes a float, collapsing to int when integral
    (``"23.0"`` decodes to ``23``). With ``use_decimal`` non-integral text becomes
    a Decimal holding every digit instead of a float.

    Raises:
        MalformedWireValueError: If the payload is not a number or numeric text
    """
    if isinstance(payload, bool):
        raise MalformedWireValueError(f"expected numeric text, got {payload!r}")
    if isinstance(payload, (int, float)):
        return payload
    if isinstance(payload, Decimal):
        payload = str(payload)
    if not isinstance(payload, str) or not _NUMBER_RE.fullmatch(payload):
        raise MalformedWireValueError(f"expected numeric text, got {payload!r}")

    if _INTEGER_RE.fullmatch(payload):
        # Decimal avoids the interpreter's str-to-int digit limit
        return int(Decimal(payload))

    number = float(payload)
    if not math.isfinite(number):
        raise MalformedWireValueError(f"number {payload!r} is out of range")
    try:
        decimal = Decimal(payload)
    except InvalidOperation as e:
        raise MalformedWireValueError(f"number {payload!r} is out of range") from e
    if decimal == decimal.to_integral_value():
        return int(decimal)
    if use_decimal:
        return decimal
    return number
