"""Attribute-value codec for dynacodec.

This module provides encoding of native Python values to tagged wire values and
decoding of wire values back to native values or records.
"""

from __future__ import annotations

from .decoder import DecodeOptions, decode, decode_root
from .encoded import Encoded
from .encoder import encode, encode_root
from .numbers import format_number, parse_number
from .schema import FieldSchema, RecordSchema, is_record, register_schema, unregister_schema
from .wire import Tag, WireValue, tag_of

__all__ = [
    "encode",
    "encode_root",
    "decode",
    "decode_root",
    "DecodeOptions",
    "Encoded",
    "FieldSchema",
    "RecordSchema",
    "register_schema",
    "unregister_schema",
    "is_record",
    "format_number",
    "parse_number",
    "Tag",
    "WireValue",
    "tag_of",
]
