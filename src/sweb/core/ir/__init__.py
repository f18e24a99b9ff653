"""
SWeb Intermediate Representation (IR) types.

The parser produces an AppSpec; the generators consume it. All types are
frozen pydantic models and all collections are tuples.
"""

from .appspec import AppSpec
from .bindings import BindingKind, BindingSpec, FormSpec, ListSpec, ViewSpec
from .fields import (
    FIELD_TYPES,
    FieldSpec,
    FieldTypeKind,
    ModelSpec,
    check_identifier,
)
from .pages import PageSpec

__all__ = [
    "AppSpec",
    "BindingKind",
    "BindingSpec",
    "FormSpec",
    "ListSpec",
    "ViewSpec",
    "FIELD_TYPES",
    "FieldSpec",
    "FieldTypeKind",
    "ModelSpec",
    "check_identifier",
    "PageSpec",
]
