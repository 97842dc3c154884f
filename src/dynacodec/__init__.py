"""dynacodec: DynamoDB attribute-value codec

A Python library that converts native values to the tagged, self-describing
attribute-value representation used by the DynamoDB API, and back.

Key Features:
- Type inference for scalars, lists, sets, nested maps and records
- Pydantic models and dataclasses as records, with field exclusion
- Post-decode hooks for turning nested maps into nested records
- Escape hatch for attributes that are already encoded

Quick Start:
    >>> from dynacodec import BaseRecord, decode_root, encode_root
    >>>
    >>> class User(BaseRecord):
    ...     name: str
    ...     age: int = 0
    ...     admin: bool = False
    >>>
    >>> item = encode_root(User(name="Jane Doe", age=23))
    >>> item
    {'name': {'S': 'Jane Doe'}, 'age': {'N': '23'}, 'admin': {'BOOL': False}}
    >>> decode_root(item, as_=User)
    User(name='Jane Doe', age=23, admin=False)
"""

from __future__ import annotations

from .codec import (
    DecodeOptions,
    Encoded,
    FieldSchema,
    RecordSchema,
    Tag,
    WireValue,
    decode,
    decode_root,
    encode,
    encode_root,
    is_record,
    register_schema,
    tag_of,
    unregister_schema,
)
from .exceptions import (
    DecodeError,
    DynacodecError,
    EncodeError,
    ErrorKind,
    MalformedWireValueError,
    SchemaError,
    UnrepresentableValueError,
)
from .models import BaseRecord, Excluded

__version__ = "0.1.0"

__all__ = [
    # Core API
    "encode",
    "encode_root",
    "decode",
    "decode_root",
    "DecodeOptions",
    "Encoded",
    # Wire model
    "Tag",
    "WireValue",
    "tag_of",
    # Records
    "BaseRecord",
    "Excluded",
    "FieldSchema",
    "RecordSchema",
    "register_schema",
    "unregister_schema",
    "is_record",
    # Exceptions
    "DynacodecError",
    "ErrorKind",
    "EncodeError",
    "UnrepresentableValueError",
    "DecodeError",
    "MalformedWireValueError",
    "SchemaError",
    # Version
    "__version__",
]
