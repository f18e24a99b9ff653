"""
HTML fragment builders shared by the markup and script generators.

Declared names are interpolated directly: the IR restricts them to the
identifier character class, so they cannot contain quotes, angle
brackets or braces. Free text (titles, string defaults, configured
headings) always goes through ``html.escape``.
"""

import html
import json
from typing import Any

from ..core import ir

INPUT_TYPES = {
    ir.FieldTypeKind.NUMBER: "number",
    ir.FieldTypeKind.BOOLEAN: "checkbox",
    ir.FieldTypeKind.DATE: "date",
}


def label(name: str) -> str:
    """Human label for a declared name: the first letter capitalized."""
    return name[:1].upper() + name[1:]


def js_literal(value: Any) -> str:
    """
    Encode a Python value as a script literal safe inside a ``<script>`` block.

    ``None`` becomes ``undefined``; everything else is JSON with ``</``
    neutralised so a string can never close the surrounding element.
    """
    if value is None:
        return "undefined"
    return json.dumps(value).replace("</", "<\\/")


def input_type(field: ir.FieldSpec) -> str:
    """HTML input type for a field, inferring email/password from text field names."""
    if field.kind in INPUT_TYPES:
        return INPUT_TYPES[field.kind]
    lowered = field.name.lower()
    if "email" in lowered:
        return "email"
    if "password" in lowered:
        return "password"
    return "text"


def _default_attribute(field: ir.FieldSpec) -> str:
    if field.default is None:
        return ""
    if field.kind == ir.FieldTypeKind.BOOLEAN:
        return " checked" if field.default is True else ""
    if isinstance(field.default, bool):
        value = "true" if field.default else "false"
    else:
        value = str(field.default)
    return f' value="{html.escape(value)}"'


def form_fragment(form: ir.FormSpec, fields: list[ir.FieldSpec]) -> str:
    """Render a form with one labelled input per field plus submit and reset buttons."""
    groups = []
    for field in fields:
        required = " required" if field.required else ""
        groups.append(f'''    <div class="sweb-form-group">
      <label for="{form.name}-{field.name}">{label(field.name)}</label>
      <input type="{input_type(field)}" id="{form.name}-{field.name}" name="{field.name}" class="sweb-input" data-field-type="{field.kind.value}"{required}{_default_attribute(field)}>
    </div>''')

    body = "\n".join(groups)
    return f'''<div id="{form.name}" class="sweb-form-container">
  <h3>{label(form.name)}</h3>
  <form id="{form.name}-form" class="sweb-form" onsubmit="return handleSubmit_{form.name}(event)">
{body}
    <div class="sweb-form-actions">
      <button type="submit" class="sweb-button sweb-primary">Submit</button>
      <button type="button" class="sweb-button sweb-secondary" onclick="resetForm_{form.name}()">Reset</button>
    </div>
  </form>
</div>'''


def list_fragment(list_spec: ir.ListSpec, fields: list[ir.FieldSpec]) -> str:
    """Render a table with a header per field and an Actions column; rows are filled by script."""
    headers = "".join(f"<th>{label(field.name)}</th>" for field in fields)
    return f'''<div id="{list_spec.name}" class="sweb-list-container">
  <h3>{label(list_spec.name)}</h3>
  <table class="sweb-table">
    <thead>
      <tr>{headers}<th>Actions</th></tr>
    </thead>
    <tbody id="{list_spec.name}-body"></tbody>
  </table>
</div>'''


def view_fragment(view: ir.ViewSpec) -> str:
    """Render the container for a read-only card view; cards are filled by script."""
    return f'''<div id="{view.name}" class="sweb-view-container">
  <h3>{label(view.name)}</h3>
  <div id="{view.name}-body" class="sweb-cards"></div>
</div>'''


def missing_fragment(name: str) -> str:
    """Placeholder for a page component that names no form, list or view."""
    return f'<div class="sweb-error">Component {name} not found</div>'


def app_shell(title: str, body: str, footer: str) -> str:
    """Wrap content in the header/main/footer application shell."""
    return f'''<div class="sweb-app">
  <header class="sweb-header">
    <h1>{html.escape(title)}</h1>
  </header>
  <main class="sweb-main">
{body}
  </main>
  <footer class="sweb-footer">
    <p>{html.escape(footer)}</p>
  </footer>
</div>'''


def page_containers(page: ir.PageSpec, fragments: dict[str, str] | None = None) -> str:
    """
    One container per page component, in listed order.

    Args:
        page: Page being rendered
        fragments: Component name to pre-rendered fragment; containers
            for names not in the mapping stay empty
    """
    fragments = fragments or {}
    containers = []
    for name in page.components:
        content = fragments.get(name, "")
        if content:
            content = f"\n{content}\n    "
        containers.append(
            f'    <div id="{name}-container" class="sweb-component">{content}</div>'
        )
    return "\n".join(containers)
