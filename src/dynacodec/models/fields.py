"""Field helpers for records."""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo


def Excluded(default: Any = None, **kwargs: Any) -> FieldInfo:
    """Create a field that is never written to the wire.

    This is a convenience wrapper around Pydantic's Field(exclude=True). Excluded
    fields are still populated (with their default) when a record is decoded.

    Args:
        default: Default value
        **kwargs: Additional Field() arguments (description, default_factory, etc.)

    Example:
        >>> class User(BaseRecord):
        ...     name: str
        ...     session_token: str | None = Excluded()
    """
    if "default_factory" in kwargs:
        return cast(FieldInfo, Field(exclude=True, **kwargs))
    return cast(FieldInfo, Field(default, exclude=True, **kwargs))
