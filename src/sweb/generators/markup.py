"""
Markup generator.

Only the first declared page is rendered; later pages exist solely as
script. Without pages, a fallback shell lists every form followed by
every list.
"""

from ..core import ir
from .base import Generator
from .fragments import app_shell, page_containers


class MarkupGenerator(Generator):
    """Generate the static HTML body of the application."""

    def generate(self) -> str:
        page = self.app.main_page
        if page is not None:
            return self.render_page(page)
        return self.render_fallback()

    def render_page(self, page: ir.PageSpec) -> str:
        """The page shell with every container pre-filled with its component."""
        fragments = {}
        for name in page.components:
            _, fragments[name] = self.render_component(page, name)
        return app_shell(page.title, page_containers(page, fragments), self.options.footer_text)

    def render_fallback(self) -> str:
        """All forms, then all lists, inline in the default shell."""
        sections = [self.render_binding(form) for form in self.app.forms]
        sections.extend(self.render_binding(list_spec) for list_spec in self.app.lists)
        return app_shell(self.options.app_title, "\n".join(sections), self.options.footer_text)
