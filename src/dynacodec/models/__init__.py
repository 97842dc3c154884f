"""Pydantic record modeling for dynacodec.

This module provides the BaseRecord class and field helpers for defining records
that encode to and decode from attribute-value maps.
"""

from __future__ import annotations

from .base import BaseRecord
from .fields import Excluded

__all__ = [
    "BaseRecord",
    "Excluded",
]
