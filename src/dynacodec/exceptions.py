"""Exception hierarchy for dynacodec.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from DynacodecError for easy catching of any dynacodec-specific error.
Each exception also carries an ErrorKind so callers can branch on the failure category
without matching on classes.
"""

from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    """Failure categories surfaced by the codec."""

    UNREPRESENTABLE = "unrepresentable"
    MALFORMED = "malformed"
    SCHEMA = "schema"


class DynacodecError(Exception):
    """Base exception for all dynacodec errors."""

    kind: ErrorKind | None = None


class EncodeError(DynacodecError):
    """Raised when encoding a native value fails."""

    kind = ErrorKind.UNREPRESENTABLE


class UnrepresentableValueError(EncodeError):
    """Raised when a native value has no inferable wire tag.

    Examples:
        - Empty set (no set tag can be chosen)
        - Set mixing numbers, strings and binaries
        - NaN or infinite numbers
        - Unsupported Python type or mapping key type
    """

    pass


class DecodeError(DynacodecError):
    """Raised when decoding a wire value fails."""

    kind = ErrorKind.MALFORMED


class MalformedWireValueError(DecodeError):
    """Raised when a wire value cannot be interpreted.

    Examples:
        - Not a mapping, or a mapping without exactly one tag key
        - Unknown tag
        - Invalid base64 under B or BS
        - Non-numeric text under N or NS
    """

    pass


class SchemaError(DynacodecError):
    """Raised when a record schema or decode option is invalid.

    Examples:
        - Target type is neither a pydantic model, a dataclass nor registered
        - Unknown decode option
        - Record coercion requested for a wire value that is not a map
    """

    kind = ErrorKind.SCHEMA
