"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from dynacodec.codec.schema import SCHEMA_REGISTRY, _derive


@pytest.fixture(autouse=True)
def clean_registry() -> Iterator[None]:
    """Keep schema registrations from leaking between tests."""
    saved = dict(SCHEMA_REGISTRY)
    yield
    SCHEMA_REGISTRY.clear()
    SCHEMA_REGISTRY.update(saved)
    _derive.cache_clear()


@pytest.fixture
def sample_item() -> dict[str, Any]:
    """Sample item as returned by a GetItem response."""
    return {
        "id": {"S": "user#42"},
        "age": {"N": "23"},
        "score": {"N": "99.5"},
        "admin": {"BOOL": False},
        "avatar": {"B": "AAH/"},
        "tags": {"SS": ["a", "b"]},
        "lucky": {"NS": ["7", "13"]},
        "deleted_at": {"NULL": True},
        "history": {"L": [{"S": "login"}, {"N": "1"}]},
        "address": {"M": {"city": {"S": "Lisbon"}, "zip": {"S": "1000-001"}}},
    }
