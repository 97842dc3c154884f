"""Escape hatch for values that are already encoded."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .wire import WireValue, tag_of


@dataclass(frozen=True)
class Encoded:
    """A value that is already encoded as a wire value.

    The encoder returns the held value verbatim instead of inferring a tag, which
    lets callers override the default encoding for a single attribute. An
    Encoded value must not be nested inside another Encoded value.

    Examples:
        >>> encode(Encoded.new({"B": "dGhpcyBpcyBiaW5hcnk="}))
        {'B': 'dGhpcyBpcyBiaW5hcnk='}
        >>> encode({"blob": Encoded.new({"B": "AAE="}), "name": "bob"})
        {'M': {'blob': {'B': 'AAE='}, 'name': {'S': 'bob'}}}
    """

    value: WireValue

    @classmethod
    def new(cls, value: Mapping[str, Any]) -> Encoded:
        """Wrap an already-encoded wire value.

        Only the outer shape is checked (one recognized tag); the payload is
        passed through untouched.

        Raises:
            MalformedWireValueError: If ``value`` is not a single-tag mapping
        """
        tag_of(value)
        return cls(dict(value))
