"""End-to-end integration tests."""

from __future__ import annotations

import enum
from typing import Any, ClassVar

import pytest
from pydantic import Field

from dynacodec import (
    BaseRecord,
    Encoded,
    Excluded,
    RecordSchema,
    decode,
    decode_root,
    encode,
    encode_root,
)
from dynacodec.exceptions import UnrepresentableValueError


class Plan(enum.Enum):
    """Subscription plan enum."""

    FREE = "free"
    PRO = "pro"


class Address(BaseRecord):
    """Postal address."""

    city: str = ""
    zip: str = ""


class Customer(BaseRecord):
    """Customer record with a nested record and excluded fields."""

    id: str
    age: int = 0
    score: float = 0.0
    admin: bool = False
    avatar: bytes = b""
    # sets cannot be empty on the wire, so an absent set is None
    tags: set[str] | None = None
    lucky: set[int] | None = None
    deleted_at: str | None = None
    history: list[Any] = Field(default_factory=list)
    address: Address | dict[str, Any] = Field(default_factory=Address)
    plan: str = Plan.FREE.value
    password: str = ""
    session: str | None = Excluded()

    dynacodec_exclude: ClassVar[frozenset[str]] = frozenset({"password"})

    def post_decode(self) -> Customer:
        if isinstance(self.address, dict):
            return self.model_copy(update={"address": Address(**self.address)})
        return self


class Order(BaseRecord):
    """Order with a list of nested customer records."""

    order_id: int
    customers: list[Any] = Field(default_factory=list)

    def post_decode(self) -> Order:
        schema = RecordSchema.for_type(Customer)
        customers = [schema.build(c) if isinstance(c, dict) else c for c in self.customers]
        return self.model_copy(update={"customers": customers})


class TestEndToEndWorkflow:
    """Test complete encode/decode workflows."""

    def test_response_item_to_record(self, sample_item: dict[str, Any]) -> None:
        """Test decoding a response item into a record with a nested record."""
        customer = decode_root(sample_item, as_=Customer)

        assert customer.id == "user#42"
        assert customer.age == 23
        assert customer.score == 99.5
        assert customer.avatar == b"\x00\x01\xff"
        assert customer.tags == {"a", "b"}
        assert customer.lucky == {7, 13}
        assert customer.deleted_at is None
        assert customer.history == ["login", 1]
        assert customer.address == Address(city="Lisbon", zip="1000-001")
        assert customer.plan == "free"
        assert customer.session is None

    def test_record_roundtrip(self) -> None:
        """Test a record survives encode_root/decode_root."""
        customer = Customer(
            id="c1",
            age=40,
            score=12.75,
            avatar=b"\x89PNG",
            tags={"vip"},
            lucky={3, 5},
            history=[{"event": "signup"}, None],
            address=Address(city="Porto"),
            plan=Plan.PRO.value,
            password="hunter2",
            session="s3cr3t",
        )

        item = customer.to_wire()
        decoded = Customer.from_wire(item)

        assert "password" not in item
        assert "session" not in item
        assert item["address"] == {"M": {"city": {"S": "Porto"}, "zip": {"S": ""}}}
        assert decoded.model_dump(exclude={"password", "session"}) == customer.model_dump(
            exclude={"password", "session"}
        )
        assert decoded.password == ""
        assert decoded.session is None

    def test_nested_records_through_hooks(self) -> None:
        """Test post-decode hooks turn nested maps into nested records."""
        order = Order(order_id=7, customers=[Customer(id="a"), Customer(id="b", age=3)])

        decoded = decode(encode(order), as_=Order)

        assert decoded.order_id == 7
        assert [c.id for c in decoded.customers] == ["a", "b"]
        assert all(isinstance(c, Customer) for c in decoded.customers)
        assert decoded.customers[1].age == 3
        assert isinstance(decoded.customers[0].address, Address)
        assert decoded.customers[0].tags is None
        assert decoded.customers[1].lucky is None

    def test_unknown_attributes_are_dropped(self) -> None:
        """Test attributes not modelled by the record are ignored."""
        item = encode_root({"id": "c1", "legacy_flag": True, "ttl": 1700000000})

        customer = Customer.from_wire(item)

        assert customer.id == "c1"
        assert not hasattr(customer, "legacy_flag")

    def test_escape_hatch_inside_record_item(self) -> None:
        """Test pre-encoded attributes mix with inferred ones."""
        item = encode_root(
            {
                "id": "c1",
                "lucky": Encoded.new({"NS": ["1", "2"]}),
                "tags": ["not", "a", "set"],
            }
        )

        assert item["lucky"] == {"NS": ["1", "2"]}
        assert item["tags"] == {"L": [{"S": "not"}, {"S": "a"}, {"S": "set"}]}
        assert Customer.from_wire(item).lucky == {1, 2}

    def test_empty_set_field_is_rejected(self) -> None:
        """Test a record holding an empty set cannot be encoded."""
        customer = Customer(id="c1", tags=set())

        with pytest.raises(UnrepresentableValueError, match=r"\$\.tags: Cannot determine"):
            customer.to_wire()
