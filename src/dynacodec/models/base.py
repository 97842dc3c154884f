"""Base record class and dynacodec-specific Pydantic configuration.

This module provides the BaseRecord class that records may inherit from. Plain
pydantic models and dataclasses work with the codec too; BaseRecord adds the
post-decode hook, the exclusion class variable and wire conversion helpers.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict

from ..codec import WireValue, decode_root, encode_root


class BaseRecord(BaseModel):
    """Base class for records stored as attribute-value maps.

    Fields are declared with ordinary pydantic annotations. dynacodec-specific
    options are configured as ClassVar attributes:

    Example:
        >>> class Address(BaseRecord):
        ...     city: str = ""
        ...
        >>> class User(BaseRecord):
        ...     name: str
        ...     address: Address | dict = {}
        ...     password: str = ""
        ...
        ...     dynacodec_exclude: ClassVar[frozenset[str]] = frozenset({"password"})
        ...
        ...     def post_decode(self) -> User:
        ...         if isinstance(self.address, dict):
        ...             return self.model_copy(update={"address": Address(**self.address)})
        ...         return self

    Attributes:
        dynacodec_exclude: Field names left out when encoding
    """

    model_config = ConfigDict(
        # Lenient validation so decoded values (e.g. sets for list fields) coerce
        strict=False,
        arbitrary_types_allowed=True,
        validate_assignment=True,
        # Items often carry attributes a given record does not model
        extra="ignore",
    )

    dynacodec_exclude: ClassVar[frozenset[str]] = frozenset()

    def post_decode(self) -> Self:
        """Hook called after the record is populated from a decoded map.

        Override to reinterpret nested fields, e.g. convert a nested dict into
        another record type. Must return the (possibly new) instance.
        """
        return self

    def to_wire(self) -> dict[str, WireValue]:
        """Encode this record as a top-level item."""
        return encode_root(self)

    @classmethod
    def from_wire(cls, root: Mapping[str, Any]) -> Self:
        """Decode a top-level item into this record type."""
        return decode_root(root, as_=cls)
