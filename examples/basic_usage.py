#!/usr/bin/env python3
"""Basic usage example for dynacodec.

This example demonstrates:
1. Defining a record with Pydantic
2. Encoding it as a DynamoDB item
3. Decoding a response item back into the record
4. Overriding the encoding of a single attribute
"""

from __future__ import annotations

import json
from typing import Any, ClassVar

from pydantic import Field

from dynacodec import BaseRecord, Encoded, decode, decode_root, encode, encode_root


class Location(BaseRecord):
    """Where a sensor is installed."""

    site: str = ""
    floor: int = 0


class SensorReading(BaseRecord):
    """A sensor reading stored as one item.

    The nested location arrives as a plain map and is turned back into a
    Location by post_decode().
    """

    sensor_id: str
    celsius: float = 0.0
    alarms: set[str] | None = None
    location: Location | dict[str, Any] = Field(default_factory=Location)
    api_key: str = ""

    dynacodec_exclude: ClassVar[frozenset[str]] = frozenset({"api_key"})

    def post_decode(self) -> SensorReading:
        if isinstance(self.location, dict):
            return self.model_copy(update={"location": Location(**self.location)})
        return self


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("dynacodec Basic Usage Example")
    print("=" * 60)
    print()

    # Create a record instance
    print("1. Creating a sensor reading...")
    reading = SensorReading(
        sensor_id="s-17",
        celsius=21.5,
        alarms={"high-humidity"},
        location=Location(site="lab", floor=2),
        api_key="never sent",
    )
    print(f"   {reading!r}")
    print()

    # Encode as an item
    print("2. Encoding as a DynamoDB item...")
    item = encode_root(reading)
    print(json.dumps(item, indent=2, sort_keys=True))
    print()

    # Decode back into the record
    print("3. Decoding the item...")
    decoded = decode_root(item, as_=SensorReading)
    print(f"   {decoded!r}")
    print(f"   location is a {type(decoded.location).__name__}")
    print()

    # Generic decoding without a target record
    print("4. Decoding without a target record...")
    print(f"   {decode_root(item)!r}")
    print()

    # Escape hatch
    print("5. Forcing the encoding of a single attribute...")
    print(f"   {encode({'sensor_id': 's-18', 'celsius': Encoded.new({'N': '21.50'})})}")
    print(f"   {decode({'NS': ['1', '2.5', '3.0']})!r}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
