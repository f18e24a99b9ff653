"""
Script generator.

Emits plain browser JavaScript in this order:

1. Per-model runtime: metadata, an in-memory collection, CRUD functions
   and the ``refreshLists_<Model>`` broadcast
2. Per-form submit and reset handlers
3. Per-list refresh, edit and delete handlers
4. Per-view card renderers
5. Per-page render functions (every page, not just the first)
6. The ``DOMContentLoaded`` bootstrap

The only run-time nondeterminism is the ``Date.now()`` id expression
inside generated ``create`` functions; the emitted text itself is a pure
function of the tree.
"""

from ..core import ir
from .base import Generator
from .fragments import app_shell, js_literal, label, page_containers

# Script expressions coercing a prompt() answer held in ``newValue``
PROMPT_COERCIONS = {
    ir.FieldTypeKind.NUMBER: "Number(newValue)",
    ir.FieldTypeKind.BOOLEAN: 'newValue === "true"',
}


class ScriptGenerator(Generator):
    """Generate the application's behaviour script."""

    def generate(self) -> str:
        sections: list[str] = []

        for model in self.unique_models():
            sections.append(self.model_runtime(model))
            sections.append(self.refresh_broadcast(model))

        for form in self.app.forms:
            sections.append(self.form_runtime(form))

        for list_spec in self.app.lists:
            sections.append(self.list_runtime(list_spec))

        for view in self.app.views:
            sections.append(self.view_runtime(view))

        for page in self.app.pages:
            sections.append(self.page_runtime(page))

        sections.append(self.bootstrap())
        return "\n\n".join(sections) + "\n"

    # ------------------------------------------------------------------
    # Models
    # ------------------------------------------------------------------

    def model_runtime(self, model: ir.ModelSpec) -> str:
        """Metadata object, data array and CRUD functions for one model."""
        field_entries = []
        for field in model.fields:
            if not field.has_known_type:
                self.warn(
                    f"Field {model.name}.{field.name} has unknown type "
                    f"'{field.type}'; treating it as text"
                )
            field_entries.append(
                f"    {field.name}: {{ type: {js_literal(field.type)}, "
                f"required: {js_literal(field.required)}, "
                f"defaultValue: {js_literal(field.default)} }}"
            )
        fields_code = ",\n".join(field_entries)
        m = model.name

        return f"""// Model: {m}
const {m}Model = {{
  name: {js_literal(m)},
  fields: {{
{fields_code}
  }}
}};

const {m}Data = [];

function getAll_{m}() {{
  return {m}Data;
}}

function get_{m}(id) {{
  return {m}Data.find(item => item.id === id);
}}

function create_{m}(data) {{
  const id = Date.now().toString();
  const newItem = {{ ...data, id }};
  {m}Data.push(newItem);
  return newItem;
}}

function update_{m}(id, data) {{
  const index = {m}Data.findIndex(item => item.id === id);
  if (index === -1) {{
    return null;
  }}
  {m}Data[index] = {{ ...{m}Data[index], ...data }};
  return {m}Data[index];
}}

function delete_{m}(id) {{
  const index = {m}Data.findIndex(item => item.id === id);
  if (index === -1) {{
    return false;
  }}
  {m}Data.splice(index, 1);
  return true;
}}"""

    def refresh_broadcast(self, model: ir.ModelSpec) -> str:
        """``refreshLists_<Model>``: refresh every list and view over the model."""
        calls = []
        for binding in self.app.bindings_for_model(model.name):
            if isinstance(binding, ir.ListSpec):
                calls.append(f"  refreshList_{binding.name}();")
            else:
                calls.append(f"  refreshView_{binding.name}();")
        body = "\n".join(calls)
        if body:
            body += "\n"
        return f"""function refreshLists_{model.name}() {{
{body}}}"""

    # ------------------------------------------------------------------
    # Forms
    # ------------------------------------------------------------------

    def form_runtime(self, form: ir.FormSpec) -> str:
        """Submit handler coercing inputs by ``data-field-type``, plus reset."""
        self.resolve_fields(form)
        f = form.name
        m = form.model

        return f"""// Form: {f}
function handleSubmit_{f}(event) {{
  event.preventDefault();
  const formEl = document.getElementById("{f}-form");
  const formData = {{}};
  for (const element of formEl.elements) {{
    if (!element.name) {{
      continue;
    }}
    switch (element.getAttribute("data-field-type")) {{
      case "number":
        formData[element.name] = element.value !== "" ? Number(element.value) : null;
        break;
      case "boolean":
        formData[element.name] = element.checked;
        break;
      default:
        formData[element.name] = element.value;
    }}
  }}
  create_{m}(formData);
  resetForm_{f}();
  refreshLists_{m}();
  return false;
}}

function resetForm_{f}() {{
  const formEl = document.getElementById("{f}-form");
  if (formEl) {{
    formEl.reset();
  }}
}}"""

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def list_runtime(self, list_spec: ir.ListSpec) -> str:
        """Row renderer plus per-list edit and delete handlers."""
        fields = self.resolve_fields(list_spec)
        name = list_spec.name
        m = list_spec.model

        cells = []
        for field in fields:
            if field.kind == ir.FieldTypeKind.BOOLEAN:
                value = f'item.{field.name} ? "Yes" : "No"'
            else:
                value = f'item.{field.name} ?? ""'
            cells.append(f"    row.insertCell().textContent = {value};")
        cells_code = "\n".join(cells)

        prompts = []
        for field in fields:
            coerced = PROMPT_COERCIONS.get(field.kind, "newValue")
            prompts.append(f"""  if (confirm("Edit {field.name}? Current value: " + item.{field.name})) {{
    const newValue = prompt("Enter new value for {field.name}:", item.{field.name});
    if (newValue !== null) {{
      newData.{field.name} = {coerced};
    }}
  }}""")
        prompts_code = "\n".join(prompts)

        return f"""// List: {name}
function refreshList_{name}() {{
  const tbody = document.getElementById("{name}-body");
  if (!tbody) {{
    return;
  }}
  tbody.innerHTML = "";
  getAll_{m}().forEach(item => {{
    const row = tbody.insertRow();
{cells_code}
    const actionsCell = row.insertCell();
    const editBtn = document.createElement("button");
    editBtn.textContent = "Edit";
    editBtn.className = "sweb-button sweb-small";
    editBtn.onclick = () => editItem_{name}(item.id);
    const deleteBtn = document.createElement("button");
    deleteBtn.textContent = "Delete";
    deleteBtn.className = "sweb-button sweb-small sweb-danger";
    deleteBtn.onclick = () => deleteItem_{name}(item.id);
    actionsCell.appendChild(editBtn);
    actionsCell.appendChild(deleteBtn);
  }});
}}

function editItem_{name}(id) {{
  const item = get_{m}(id);
  if (!item) {{
    return;
  }}
  const newData = {{}};
{prompts_code}
  update_{m}(id, newData);
  refreshLists_{m}();
}}

function deleteItem_{name}(id) {{
  if (confirm("Are you sure you want to delete this item?")) {{
    delete_{m}(id);
    refreshLists_{m}();
  }}
}}"""

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def view_runtime(self, view: ir.ViewSpec) -> str:
        """Read-only card renderer: one card per record, one line per field."""
        fields = self.resolve_fields(view)
        name = view.name

        lines = []
        for field in fields:
            if field.kind == ir.FieldTypeKind.BOOLEAN:
                value = f'item.{field.name} ? "Yes" : "No"'
            else:
                value = f'item.{field.name} ?? ""'
            lines.append(f"    addLine({js_literal(label(field.name))}, {value});")
        lines_code = "\n".join(lines)

        return f"""// View: {name}
function refreshView_{name}() {{
  const container = document.getElementById("{name}-body");
  if (!container) {{
    return;
  }}
  container.innerHTML = "";
  getAll_{view.model}().forEach(item => {{
    const card = document.createElement("div");
    card.className = "sweb-card";
    const addLine = (text, value) => {{
      const line = document.createElement("div");
      const labelEl = document.createElement("span");
      labelEl.className = "sweb-card-label";
      labelEl.textContent = text + ":";
      line.appendChild(labelEl);
      line.appendChild(document.createTextNode(String(value)));
      card.appendChild(line);
    }};
{lines_code}
    container.appendChild(card);
  }});
}}"""

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def page_runtime(self, page: ir.PageSpec) -> str:
        """``renderPage_<page>``: replace the body, inject fragments, populate."""
        shell = app_shell(page.title, page_containers(page), self.options.footer_text)

        steps = []
        for name in page.components:
            component, fragment = self.render_component(page, name)
            steps.append(
                f'  document.getElementById("{name}-container").innerHTML = '
                f"{js_literal(fragment)};"
            )
            if isinstance(component, ir.ListSpec):
                steps.append(f"  setTimeout(() => refreshList_{name}(), 0);")
            elif isinstance(component, ir.ViewSpec):
                steps.append(f"  setTimeout(() => refreshView_{name}(), 0);")
        steps_code = "\n".join(steps)
        if steps_code:
            steps_code += "\n"

        return f"""// Page: {page.name}
function renderPage_{page.name}() {{
  document.body.innerHTML = {js_literal(shell)};
{steps_code}}}"""

    def bootstrap(self) -> str:
        """Start the first page, or populate every list and view without pages."""
        page = self.app.main_page
        if page is not None:
            return f"""document.addEventListener("DOMContentLoaded", renderPage_{page.name});"""

        calls = [f"  refreshList_{list_spec.name}();" for list_spec in self.app.lists]
        calls.extend(f"  refreshView_{view.name}();" for view in self.app.views)
        body = "\n".join(calls)
        if body:
            body += "\n"
        return f"""document.addEventListener("DOMContentLoaded", () => {{
{body}}});"""
