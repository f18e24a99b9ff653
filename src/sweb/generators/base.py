"""
Base generator class for SWeb code generation.

Each generator produces one artifact (markup, script or stylesheet) from
a parsed AppSpec. Generators share name resolution: a binding's model
must exist, and its effective field list is either the declared subset
or every field of the model.
"""

import logging
from abc import ABC, abstractmethod

from ..core import ir
from ..core.errors import make_reference_error
from ..core.options import CompileOptions
from .fragments import form_fragment, list_fragment, missing_fragment, view_fragment

logger = logging.getLogger(__name__)


class Generator(ABC):
    """
    Base class for all artifact generators.

    Generators are single-use: create one per compilation, call
    ``generate()`` once, then read ``warnings``.

    Example:
        class StylesheetGenerator(Generator):
            def generate(self) -> str:
                return STYLESHEET
    """

    def __init__(self, app: ir.AppSpec, options: CompileOptions | None = None):
        """
        Initialize generator.

        Args:
            app: Parsed application
            options: Compiler options
        """
        self.app = app
        self.options = options or CompileOptions()
        self.warnings: list[str] = []

    @abstractmethod
    def generate(self) -> str:
        """
        Generate the artifact.

        Returns:
            Artifact text

        Raises:
            UnknownReferenceError: If a binding names an undeclared model or field
        """
        pass

    def warn(self, message: str) -> None:
        """Record a non-fatal warning."""
        logger.warning(message)
        self.warnings.append(message)

    def resolve_model(self, binding: ir.BindingSpec) -> ir.ModelSpec:
        """
        Look up the model a form, list or view is bound to.

        Raises:
            UnknownReferenceError: If no model has that name
        """
        model = self.app.get_model(binding.model)
        if model is None:
            raise make_reference_error("model", binding.model, binding.kind.value, binding.name)
        return model

    def resolve_fields(self, binding: ir.BindingSpec) -> list[ir.FieldSpec]:
        """
        Effective fields of a binding, in display order.

        An empty subset selects every field of the model in declaration
        order. Otherwise the subset order is kept; names the model does
        not declare either raise or, with ``validate_field_refs`` off,
        pass through as untyped text fields.
        """
        model = self.resolve_model(binding)
        if not binding.fields:
            return list(model.fields)

        fields = []
        for name in binding.fields:
            field = model.get_field(name)
            if field is None:
                if self.options.validate_field_refs:
                    raise make_reference_error(
                        "field", name, binding.kind.value, binding.name, model=model.name
                    )
                field = ir.FieldSpec(name=name, type=ir.FieldTypeKind.TEXT.value)
            fields.append(field)
        return fields

    def unique_models(self) -> list[ir.ModelSpec]:
        """Models in declaration order, keeping only the first of each name."""
        seen: set[str] = set()
        models = []
        for model in self.app.models:
            if model.name not in seen:
                seen.add(model.name)
                models.append(model)
        return models

    def render_binding(self, binding: ir.BindingSpec) -> str:
        """Render the HTML fragment of a form, list or view."""
        if isinstance(binding, ir.FormSpec):
            return form_fragment(binding, self.resolve_fields(binding))
        if isinstance(binding, ir.ListSpec):
            return list_fragment(binding, self.resolve_fields(binding))
        self.resolve_fields(binding)
        return view_fragment(binding)

    def render_component(self, page: ir.PageSpec, name: str) -> tuple[ir.BindingSpec | None, str]:
        """
        Resolve and render a page component.

        Names are looked up among forms, then lists, then views. An
        unknown name is not an error: it renders as a placeholder.

        Returns:
            (binding or None, fragment)
        """
        component = self.app.find_component(name)
        if component is None:
            self.warn(f"Component {name} on page {page.name} not found")
            return None, missing_fragment(name)
        return component, self.render_binding(component)
