"""Record schemas.

A RecordSchema describes how a record type crosses the codec: which fields it
declares (with their defaults), which fields the encoder leaves out, how an
instance is built from decoded values, and an optional hook that runs after
decoding. Schemas can be written out explicitly, derived from pydantic models
and dataclasses, or attached to any type through the registry.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from functools import cache
from operator import methodcaller
from typing import Any

from pydantic import BaseModel
from structlog import get_logger

from ..exceptions import SchemaError

logger = get_logger()

PostDecodeHook = Callable[[Any], Any]


def _identity(instance: Any) -> Any:
    return instance


@dataclass(frozen=True)
class FieldSchema:
    """Schema information for a single record field.

    Attributes:
        name: Field name, also the key used in the encoded map
        default: Value used when the field is absent from a decoded map
        default_factory: Called instead of using ``default`` when set
    """

    name: str
    default: Any = None
    default_factory: Callable[[], Any] | None = None

    def get_default(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default


class RecordSchema:
    """Schema information for a record type.

    Example:
        >>> schema = RecordSchema(
        ...     User,
        ...     [FieldSchema("name"), FieldSchema("age", 0)],
        ...     exclude={"password"},
        ... )
        >>> schema.build({"name": "Jane", "extra": 1})
        User(name='Jane', age=0)
    """

    def __init__(
        self,
        record_type: type,
        fields: Iterable[FieldSchema],
        *,
        factory: Callable[..., Any] | None = None,
        post_decode: PostDecodeHook | None = None,
        exclude: Iterable[str] = (),
    ) -> None:
        """Initialize an explicit schema.

        Args:
            record_type: The type this schema describes
            fields: Declared fields in encoding order
            factory: Builds an instance from field keyword arguments
                (defaults to ``record_type`` itself)
            post_decode: Hook applied to every decoded instance (defaults to identity)
            exclude: Field names the encoder omits
        """
        self.record_type = record_type
        self.fields: list[FieldSchema] = list(fields)
        self.factory: Callable[..., Any] = factory if factory is not None else record_type
        self.post_decode: PostDecodeHook = post_decode if post_decode is not None else _identity
        self.exclude: frozenset[str] = frozenset(exclude)

        names = self.field_names
        if len(names) != len(self.fields):
            raise SchemaError(f"{record_type.__name__}: duplicate field names in schema")
        unknown = self.exclude - names
        if unknown:
            raise SchemaError(
                f"{record_type.__name__}: cannot exclude undeclared fields {sorted(unknown)}"
            )

    def __repr__(self) -> str:
        return f"RecordSchema({self.record_type.__name__}, fields={[f.name for f in self.fields]})"

    @property
    def field_names(self) -> frozenset[str]:
        return frozenset(f.name for f in self.fields)

    @classmethod
    def from_model(cls, model_class: type[BaseModel]) -> RecordSchema:
        """Create a schema from a pydantic model.

        Required fields default to None. Fields declared with ``Field(exclude=True)``
        and names listed in the ``dynacodec_exclude`` class variable are excluded.
        Instances are built with ``model_construct`` so decoded values are stored
        as-is; a ``post_decode`` method, when defined, is used as the hook.
        """
        fields: list[FieldSchema] = []
        exclude = set(getattr(model_class, "dynacodec_exclude", ()))

        for name, field_info in model_class.model_fields.items():
            if field_info.default_factory is not None:
                fields.append(
                    FieldSchema(
                        name,
                        default_factory=lambda info=field_info: info.get_default(
                            call_default_factory=True
                        ),
                    )
                )
            elif field_info.is_required():
                fields.append(FieldSchema(name))
            else:
                fields.append(FieldSchema(name, field_info.default))

            if field_info.exclude:
                exclude.add(name)

        return cls(
            model_class,
            fields,
            factory=model_class.model_construct,
            post_decode=_method_hook(model_class),
            exclude=exclude,
        )

    @classmethod
    def from_dataclass(cls, dataclass_type: type) -> RecordSchema:
        """Create a schema from a dataclass (``init=False`` fields are skipped)."""
        fields: list[FieldSchema] = []
        for field in dataclasses.fields(dataclass_type):
            if not field.init:
                continue
            if field.default_factory is not dataclasses.MISSING:
                fields.append(FieldSchema(field.name, default_factory=field.default_factory))
            elif field.default is not dataclasses.MISSING:
                fields.append(FieldSchema(field.name, field.default))
            else:
                fields.append(FieldSchema(field.name))

        return cls(
            dataclass_type,
            fields,
            post_decode=_method_hook(dataclass_type),
            exclude=getattr(dataclass_type, "dynacodec_exclude", ()),
        )

    @classmethod
    def for_type(cls, record_type: type) -> RecordSchema:
        """Look up the schema for a record type.

        A schema registered for the type itself wins. Otherwise one is derived from
        the pydantic model or dataclass definition, and failing that the schema of
        the nearest registered base class is used. Derived schemas are cached until
        the registry changes.

        Raises:
            SchemaError: If the type is not registered, not a pydantic model and not a dataclass
        """
        registered = SCHEMA_REGISTRY.get(record_type)
        if registered is not None:
            return registered
        if _is_derivable(record_type):
            return _derive(record_type)
        for base in getattr(record_type, "__mro__", ())[1:]:
            if base in SCHEMA_REGISTRY:
                return SCHEMA_REGISTRY[base]
        return _derive(record_type)

    def replace(
        self,
        *,
        exclude: Iterable[str] | None = None,
        post_decode: PostDecodeHook | None = None,
    ) -> RecordSchema:
        """Return a copy with a different exclusion set and/or post-decode hook."""
        return RecordSchema(
            self.record_type,
            self.fields,
            factory=self.factory,
            post_decode=post_decode if post_decode is not None else self.post_decode,
            exclude=exclude if exclude is not None else self.exclude,
        )

    def to_mapping(self, instance: Any) -> dict[str, Any]:
        """Read the encodable fields of an instance, in declaration order."""
        return {
            f.name: getattr(instance, f.name) for f in self.fields if f.name not in self.exclude
        }

    def build(self, values: Mapping[str, Any]) -> Any:
        """Build an instance from a decoded mapping.

        Declared fields take the decoded value when present and their default
        otherwise; undeclared keys are dropped. The post-decode hook runs last.

        Raises:
            SchemaError: If the factory rejects the field values
        """
        kwargs = {
            f.name: values[f.name] if f.name in values else f.get_default() for f in self.fields
        }

        dropped = set(values) - self.field_names
        if dropped:
            logger.debug(
                "dropping undeclared fields",
                record=self.record_type.__name__,
                fields=sorted(dropped),
            )

        try:
            instance = self.factory(**kwargs)
        except (TypeError, ValueError) as e:
            raise SchemaError(f"Failed to construct {self.record_type.__name__}: {e}") from e

        return self.post_decode(instance)


# Global registry: record type -> schema
SCHEMA_REGISTRY: dict[type, RecordSchema] = {}


def register_schema(
    record_type: type,
    schema: RecordSchema | None = None,
    *,
    exclude: Iterable[str] | None = None,
    post_decode: PostDecodeHook | None = None,
) -> RecordSchema:
    """Attach a schema to a record type.

    Without ``schema`` the schema is derived from the type's definition. ``exclude``
    and ``post_decode`` override the corresponding parts of the schema, which is
    how a field-exclusion policy is attached to a type defined elsewhere.
    Registering a type again replaces its schema.

    Args:
        record_type: Type to register
        schema: Explicit schema for the type
        exclude: Field names the encoder omits
        post_decode: Hook applied after decoding

    Returns:
        The registered schema

    Raises:
        SchemaError: If ``schema`` describes another type

    Example:
        >>> register_schema(User, exclude={"password"})
        >>> encode_root(User(name="Jane", password="hunter2"))
        {'name': {'S': 'Jane'}}
    """
    if schema is None:
        schema = _derive(record_type)
    elif schema.record_type is not record_type:
        raise SchemaError(
            f"schema describes {schema.record_type.__name__}, not {record_type.__name__}"
        )

    if exclude is not None or post_decode is not None:
        schema = schema.replace(exclude=exclude, post_decode=post_decode)

    SCHEMA_REGISTRY[record_type] = schema
    _derive.cache_clear()
    return schema


def unregister_schema(record_type: type) -> None:
    """Remove a registered schema (no-op when the type is not registered)."""
    SCHEMA_REGISTRY.pop(record_type, None)
    _derive.cache_clear()


def is_record(value: Any) -> bool:
    """Whether ``value`` is a record instance.

    Instances of registered types (or their subclasses), pydantic models and
    dataclasses are records.
    """
    if isinstance(value, type):
        return False
    return (
        any(klass in SCHEMA_REGISTRY for klass in type(value).__mro__)
        or isinstance(value, BaseModel)
        or dataclasses.is_dataclass(value)
    )


def _is_derivable(record_type: Any) -> bool:
    return isinstance(record_type, type) and (
        issubclass(record_type, BaseModel) or dataclasses.is_dataclass(record_type)
    )


@cache
def _derive(record_type: type) -> RecordSchema:
    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        return RecordSchema.from_model(record_type)
    if isinstance(record_type, type) and dataclasses.is_dataclass(record_type):
        return RecordSchema.from_dataclass(record_type)
    raise SchemaError(
        f"{record_type!r} is not a record type. "
        f"Use a pydantic model, a dataclass, or register a RecordSchema for it."
    )


def _method_hook(record_type: type) -> PostDecodeHook | None:
    if callable(getattr(record_type, "post_decode", None)):
        return methodcaller("post_decode")
    return None
