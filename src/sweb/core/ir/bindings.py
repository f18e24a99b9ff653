"""
Presentational bindings for SWeb IR.

Forms, lists and views all bind a model (by name) and an ordered subset
of its fields. An empty subset means every field of the model. The model
and field names are resolved lazily, by the generators.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, field_validator

from .fields import check_identifier


class BindingKind(StrEnum):
    """Kinds of presentational binding."""

    FORM = "form"
    LIST = "list"
    VIEW = "view"


class BindingSpec(BaseModel):
    """
    Shared shape of forms, lists and views.

    Attributes:
        name: Binding identifier
        model: Name of the bound model
        fields: Field subset in display order; empty means all fields
    """

    name: str
    model: str
    fields: tuple[str, ...] = ()

    kind: ClassVar[BindingKind]

    model_config = ConfigDict(frozen=True)

    @field_validator("name", "model")
    @classmethod
    def validate_names(cls, v: str) -> str:
        return check_identifier(v)

    @field_validator("fields")
    @classmethod
    def validate_fields(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for name in v:
            check_identifier(name)
        return v


class FormSpec(BindingSpec):
    """An input form creating records of its model."""

    kind: ClassVar[BindingKind] = BindingKind.FORM


class ListSpec(BindingSpec):
    """A table of all records of its model, with edit and delete actions."""

    kind: ClassVar[BindingKind] = BindingKind.LIST


class ViewSpec(BindingSpec):
    """A read-only card display of the records of its model."""

    kind: ClassVar[BindingKind] = BindingKind.VIEW
