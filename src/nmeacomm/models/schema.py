"""Schema introspection for sentence message models.

This module provides utilities to analyze Pydantic models and extract the
information needed to write and read their fields as sentence fields: the
field order, the wire kind of each field, and whether it may be left empty.
"""

from __future__ import annotations

import enum
import types
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import SchemaError
from .fields import Register32

# Wire kinds, in the order they are checked
KIND_BOOL = "bool"
KIND_ENUM = "enum"
KIND_INT = "int"
KIND_FLOAT = "float"
KIND_STR = "str"
KIND_REGISTER = "register"

_SCALAR_KINDS: Dict[Any, str] = {
    int: KIND_INT,
    float: KIND_FLOAT,
    str: KIND_STR,
    Register32: KIND_REGISTER,
}


@dataclass(frozen=True)
class FieldSchema:
    """Schema information for a single field.

    Attributes:
        name: Field name
        python_type: Python type the field is read as
        kind: Wire kind (int, float, str, bool, enum, register)
        optional: Whether None is allowed (written as an empty field)
        enum_type: Enum class if field is an enum
    """

    name: str
    python_type: Type[Any]
    kind: str
    optional: bool
    enum_type: Optional[Type[enum.Enum]] = None

    def describe(self) -> str:
        """Return a short human-readable description of the wire form."""
        if self.enum_type is not None:
            members = ", ".join(f"{m.value}={m.name}" for m in self.enum_type)
            text = f"enum {self.enum_type.__name__} ({members})"
        elif self.kind == KIND_REGISTER:
            text = "register (hex)"
        elif self.kind == KIND_BOOL:
            text = "bool (0/1)"
        else:
            text = self.kind
        return f"{text}, optional" if self.optional else text


class MessageSchema:
    """Schema information for an entire message.

    This class introspects a Pydantic model and extracts the wire layout of
    each field. Schemas are cached per model class.

    Example:
        >>> schema = MessageSchema.from_model(GGAMessage)
        >>> for field in schema.fields:
        ...     print(f"{field.name}: {field.kind}")
    """

    _cache: ClassVar[Dict[type, "MessageSchema"]] = {}

    def __init__(self, model_class: Type[BaseModel]) -> None:
        """Initialize schema from a Pydantic model.

        Args:
            model_class: Pydantic model class to introspect

        Raises:
            SchemaError: If a field has an unsupported annotation
        """
        self.model_class = model_class
        self.fields: List[FieldSchema] = []
        self._introspect()

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> MessageSchema:
        """Create (or fetch the cached) schema for a Pydantic model.

        Args:
            model_class: Pydantic model class

        Returns:
            MessageSchema instance
        """
        schema = cls._cache.get(model_class)
        if schema is None:
            schema = cls(model_class)
            cls._cache[model_class] = schema
        return schema

    def _introspect(self) -> None:
        """Introspect the model and populate field schemas."""
        for field_name, field_info in self.model_class.model_fields.items():
            self.fields.append(self._extract_field_schema(field_name, field_info))

    def _extract_field_schema(self, name: str, field_info: FieldInfo) -> FieldSchema:
        """Extract schema information from a Pydantic FieldInfo.

        Args:
            name: Field name
            field_info: Pydantic FieldInfo object

        Returns:
            FieldSchema with extracted information
        """
        annotation = field_info.annotation
        if annotation is None:
            raise SchemaError(f"Field {name} has no type annotation")

        # Optional[T] / T | None
        optional = False
        if get_origin(annotation) in (Union, types.UnionType):
            non_none_args = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(non_none_args) != 1:
                raise SchemaError(f"Field {name}: only Optional[T] unions are supported")
            annotation = non_none_args[0]
            optional = True

        if annotation is bool:
            return FieldSchema(name=name, python_type=bool, kind=KIND_BOOL, optional=optional)

        if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
            if not all(
                isinstance(m.value, int) and not isinstance(m.value, bool) for m in annotation
            ):
                raise SchemaError(f"Field {name}: enum {annotation.__name__} needs integer values")
            return FieldSchema(
                name=name,
                python_type=annotation,
                kind=KIND_ENUM,
                optional=optional,
                enum_type=annotation,
            )

        kind = _SCALAR_KINDS.get(annotation)
        if kind is None:
            raise SchemaError(
                f"Field {name}: unsupported type {annotation!r}. "
                f"Supported: int, float, str, bool, Register32, int-valued Enum."
            )

        return FieldSchema(name=name, python_type=annotation, kind=kind, optional=optional)

    def field_names(self) -> List[str]:
        """Return the field names in wire order."""
        return [field.name for field in self.fields]
