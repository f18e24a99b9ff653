"""
Field and model definitions for SWeb IR.

A model is a named record type; its fields carry a type name, a
``required`` flag and an optional default value. Field types are kept as
plain strings: the four known kinds are listed in ``FieldTypeKind`` but
any identifier is accepted here.
"""

from __future__ import annotations

import re
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def check_identifier(value: str) -> str:
    """
    Ensure a name is safe to interpolate into generated markup and script.

    Names reach the generators verbatim, so they are restricted to the
    lexical identifier class even when the tree is built by hand.
    """
    if not IDENTIFIER_RE.match(value):
        raise ValueError(f"{value!r} is not a valid identifier")
    return value


class FieldTypeKind(StrEnum):
    """The field types the generators know how to render."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"


FIELD_TYPES = frozenset(kind.value for kind in FieldTypeKind)


class FieldSpec(BaseModel):
    """
    Specification for a single field of a model.

    Attributes:
        name: Field identifier
        type: Type name (normally one of FieldTypeKind, not enforced)
        required: Whether the form input is marked required
        default: Default value from a ``default = literal`` modifier
    """

    name: str
    type: str
    required: bool = False
    default: bool | int | float | str | None = Field(
        default=None, serialization_alias="defaultValue"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("name", "type")
    @classmethod
    def validate_names(cls, v: str) -> str:
        return check_identifier(v)

    @property
    def kind(self) -> FieldTypeKind:
        """Type used for rendering; unknown types render like text."""
        if self.type in FIELD_TYPES:
            return FieldTypeKind(self.type)
        return FieldTypeKind.TEXT

    @property
    def has_known_type(self) -> bool:
        return self.type in FIELD_TYPES


class ModelSpec(BaseModel):
    """
    A named record type.

    Attributes:
        name: Model identifier
        fields: Fields in declaration order (names are not required to be unique)
    """

    name: str
    fields: tuple[FieldSpec, ...] = ()

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return check_identifier(v)

    def get_field(self, name: str) -> FieldSpec | None:
        """Get the first field with the given name."""
        for field in self.fields:
            if field.name == name:
                return field
        return None
