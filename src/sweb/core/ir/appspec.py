"""
Application specification types for SWeb IR.

This module contains the AppSpec tree root produced by the parser.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .bindings import BindingSpec, FormSpec, ListSpec, ViewSpec
from .fields import ModelSpec
from .pages import PageSpec


class AppSpec(BaseModel):
    """
    Complete parsed application.

    Every collection keeps declaration order and tolerates duplicate
    names; lookups return the first match. Cross references are by name
    only.

    Attributes:
        models: Model declarations
        forms: Form declarations
        views: View declarations
        lists: List declarations
        pages: Page declarations
    """

    models: tuple[ModelSpec, ...] = ()
    forms: tuple[FormSpec, ...] = ()
    views: tuple[ViewSpec, ...] = ()
    lists: tuple[ListSpec, ...] = ()
    pages: tuple[PageSpec, ...] = ()

    model_config = ConfigDict(frozen=True)

    def get_model(self, name: str) -> ModelSpec | None:
        """Get model by name."""
        for model in self.models:
            if model.name == name:
                return model
        return None

    def get_form(self, name: str) -> FormSpec | None:
        """Get form by name."""
        for form in self.forms:
            if form.name == name:
                return form
        return None

    def get_list(self, name: str) -> ListSpec | None:
        """Get list by name."""
        for list_spec in self.lists:
            if list_spec.name == name:
                return list_spec
        return None

    def get_view(self, name: str) -> ViewSpec | None:
        """Get view by name."""
        for view in self.views:
            if view.name == name:
                return view
        return None

    def find_component(self, name: str) -> BindingSpec | None:
        """Resolve a page component: forms first, then lists, then views."""
        return self.get_form(name) or self.get_list(name) or self.get_view(name)

    def bindings_for_model(self, model_name: str) -> list[BindingSpec]:
        """Lists then views bound to a model, in declaration order."""
        return [b for b in (*self.lists, *self.views) if b.model == model_name]

    @property
    def main_page(self) -> PageSpec | None:
        """The first declared page, which is the only one linked from markup."""
        return self.pages[0] if self.pages else None
