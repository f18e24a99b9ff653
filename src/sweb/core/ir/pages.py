"""
Page definitions for SWeb IR.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from .fields import check_identifier


class PageSpec(BaseModel):
    """
    A titled composition of components.

    Attributes:
        name: Page identifier
        title: Free-text title from the page's string literal
        components: Names of forms, lists or views, in display order
    """

    name: str
    title: str
    components: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return check_identifier(v)

    @field_validator("components")
    @classmethod
    def validate_components(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for name in v:
            check_identifier(name)
        return v
