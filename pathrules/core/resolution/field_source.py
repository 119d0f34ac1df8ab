"""
Field enumeration capability used by the PathResolver.

The resolver never inspects objects itself: it asks a FieldSource for the
readable fields of an object and whether a value can be walked into. Any
object graph can be validated by supplying a FieldSource that understands it.
"""

import dataclasses
import enum
import types
import uuid
from collections.abc import Mapping
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from fractions import Fraction
from pathlib import PurePath
from typing import Any, NamedTuple, Protocol, runtime_checkable

from pydantic import BaseModel

from pathrules.observability.logger import get_logger

logger = get_logger(__name__)

PRIMITIVE_TYPES = (
    str, bytes, bytearray, bool, int, float, complex, Decimal, Fraction,
    date, datetime, time, timedelta, uuid.UUID, enum.Enum, PurePath,
)

NON_WALKABLE_TYPES = (
    type, types.FunctionType, types.BuiltinFunctionType, types.MethodType, types.ModuleType,
)


class FieldInfo(NamedTuple):
    """A readable field of an object: its name, current value and whether it is sequence-valued."""

    name: str
    value: Any
    is_sequence: bool


@runtime_checkable
class FieldSource(Protocol):
    """Capability the PathResolver uses to walk an object graph."""

    def list_fields(self, obj: Any) -> list[FieldInfo]:
        ...

    def is_structured(self, value: Any) -> bool:
        ...

    def render(self, value: Any) -> str:
        ...


class AttributeFieldSource:
    """
    Default FieldSource for ordinary Python objects.

    Walks mappings (string keys only), pydantic models, dataclasses, objects
    with ``__slots__`` and plain objects (public instance attributes). Public
    properties declared on the class are listed after the instance fields.
    Lists and tuples are sequences; text, numbers, dates, enums and ``None``
    are primitives.

    A field whose value cannot be read is left out of the listing.
    """

    sequence_types: tuple[type, ...] = (list, tuple)

    def list_fields(self, obj: Any) -> list[FieldInfo]:
        if not self.is_structured(obj):
            return []

        if isinstance(obj, Mapping):
            return [
                self._field_info(key, value)
                for key, value in obj.items()
                if isinstance(key, str)
            ]

        fields: list[FieldInfo] = []
        seen: set[str] = set()
        for name in self._field_names(obj):
            if name in seen:
                continue
            seen.add(name)
            try:
                value = getattr(obj, name)
            except Exception as e:
                logger.debug(
                    f"Skipping unreadable field {type(obj).__name__}.{name}",
                    extra={"field_name": name, "error_type": type(e).__name__},
                )
                continue
            fields.append(self._field_info(name, value))
        return fields

    def is_structured(self, value: Any) -> bool:
        if value is None or isinstance(value, PRIMITIVE_TYPES + NON_WALKABLE_TYPES):
            return False
        if isinstance(value, self.sequence_types):
            return False
        if isinstance(value, (Mapping, BaseModel)):
            return True
        if dataclasses.is_dataclass(value):
            return True
        return hasattr(value, "__dict__") or hasattr(type(value), "__slots__")

    def render(self, value: Any) -> str:
        return str(value)

    def _field_info(self, name: str, value: Any) -> FieldInfo:
        return FieldInfo(name, value, isinstance(value, self.sequence_types))

    def _field_names(self, obj: Any) -> list[str]:
        if isinstance(obj, BaseModel):
            names = list(type(obj).model_fields)
        elif dataclasses.is_dataclass(obj):
            names = [field.name for field in dataclasses.fields(obj)]
        else:
            names = [name for name in getattr(obj, "__dict__", {}) if not name.startswith("_")]
            for klass in type(obj).__mro__:
                slots = klass.__dict__.get("__slots__", ())
                if isinstance(slots, str):
                    slots = (slots,)
                names.extend(slot for slot in slots if not slot.startswith("_"))

        for klass in type(obj).__mro__:
            if klass is object or klass.__module__.startswith("pydantic"):
                continue
            names.extend(
                name
                for name, attr in vars(klass).items()
                if isinstance(attr, property) and not name.startswith("_")
            )
        return names
