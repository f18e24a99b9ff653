"""End-to-end compilation tests: source text to markup, script and stylesheet."""

import pytest

from sweb import CompileOptions, CompileResult, compile_app, compile_source
from sweb.core import ir
from sweb.core.errors import UnknownReferenceError
from sweb.generators import STYLESHEET

FALLBACK_SOURCE = """
model Item { field name: text; field qty: number; }
model Tag { field label: text; }
form AddItem(Item) { }
list Items(Item) { name }
form AddTag(Tag) { label }
list Tags(Tag) { }
view ItemCards(Item) { }
"""


class TestArtifacts:
    """The three artifacts of a typical program."""

    def test_result_shape(self, task_source: str) -> None:
        result = compile_source(task_source)
        assert isinstance(result, CompileResult)
        assert result.markup
        assert result.script
        assert result.stylesheet == STYLESHEET
        assert result.warnings == []

    def test_to_dict(self, task_source: str) -> None:
        data = compile_source(task_source).to_dict()
        assert set(data) == {"html", "js", "css", "warnings"}

    def test_compile_app_matches_compile_source(
        self, task_app: ir.AppSpec, task_source: str
    ) -> None:
        assert compile_app(task_app) == compile_source(task_source)


class TestDeterminism:
    """Output is a pure function of the source."""

    def test_byte_identical(self, task_source: str) -> None:
        first = compile_source(task_source)
        second = compile_source(task_source)
        assert first.markup == second.markup
        assert first.script == second.script
        assert first.stylesheet == second.stylesheet

    def test_stylesheet_is_app_independent(self, task_source: str) -> None:
        assert compile_source(task_source).stylesheet == compile_source(FALLBACK_SOURCE).stylesheet

    def test_no_compile_time_ids(self, task_source: str) -> None:
        script = compile_source(task_source).script
        assert script.count("Date.now()") == 1


class TestReferenceResolution:
    """Model references fail hard; page components degrade."""

    @pytest.mark.parametrize("kind", ["form", "list", "view"])
    def test_unknown_model(self, kind: str) -> None:
        with pytest.raises(UnknownReferenceError) as exc_info:
            compile_source(f"{kind} Things(Ghost) {{ }}")
        error = exc_info.value
        assert error.kind == "model"
        assert error.name == "Ghost"
        assert error.owner == "Things"
        assert str(error) == f"Model Ghost not found for {kind} Things"

    def test_unknown_model_fails_even_off_page(self) -> None:
        source = 'model M { field a: text; } form Orphan(Ghost) { } page P("p") { }'
        with pytest.raises(UnknownReferenceError):
            compile_source(source)

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(UnknownReferenceError) as exc_info:
            compile_source("model M { field a: text; } list L(M) { a, b }")
        error = exc_info.value
        assert error.kind == "field"
        assert error.name == "b"
        assert str(error) == "Field b not found in model M for list L"

    def test_unknown_field_passes_through_when_unvalidated(self) -> None:
        options = CompileOptions(validate_field_refs=False)
        result = compile_source("model M { field a: text; } list L(M) { b }", options=options)
        assert 'item.b ?? ""' in result.script
        assert "<th>B</th>" in result.markup

    def test_missing_component_placeholder(self) -> None:
        result = compile_source('model M { field a: text; } page P("p") { Ghost }')
        assert "Component Ghost not found" in result.markup
        assert "Component Ghost not found" in result.script
        assert result.warnings == ["Component Ghost on page P not found"]

    def test_subset_order_is_kept(self) -> None:
        result = compile_source(
            "model M { field a: text; field b: text; field c: text; } list L(M) { c, a }"
        )
        assert "<th>C</th><th>A</th><th>Actions</th>" in result.markup


class TestFallbackMarkup:
    """Without pages, all forms then all lists in a default shell."""

    def test_forms_before_lists_exactly_once(self) -> None:
        markup = compile_source(FALLBACK_SOURCE).markup
        positions = [markup.index(f'id="{name}"') for name in ("AddItem", "AddTag", "Items", "Tags")]
        assert positions == sorted(positions)
        for name in ("AddItem", "AddTag", "Items", "Tags"):
            assert markup.count(f'id="{name}"') == 1

    def test_views_are_not_inlined(self) -> None:
        assert 'id="ItemCards"' not in compile_source(FALLBACK_SOURCE).markup

    def test_default_shell(self) -> None:
        markup = compile_source(FALLBACK_SOURCE).markup
        assert "<h1>SWeb Application</h1>" in markup
        assert "<p>Created with SWeb</p>" in markup

    def test_configured_shell_text(self) -> None:
        options = CompileOptions(app_title="Stock & Co", footer_text="v2")
        markup = compile_source(FALLBACK_SOURCE, options=options).markup
        assert "<h1>Stock &amp; Co</h1>" in markup
        assert "<p>v2</p>" in markup

    def test_bootstrap_refreshes_lists_and_views(self) -> None:
        script = compile_source(FALLBACK_SOURCE).script
        bootstrap = script[script.index('document.addEventListener("DOMContentLoaded", () => {') :]
        assert "refreshList_Items();" in bootstrap
        assert "refreshList_Tags();" in bootstrap
        assert "refreshView_ItemCards();" in bootstrap


class TestPages:
    """Only the first page reaches the markup; every page gets a render function."""

    SOURCE = """
    model M { field a: text; }
    form F(M) { }
    list L(M) { }
    page First("First Page") { L, F }
    page Second("Second Page") { F }
    """

    def test_first_page_only_in_markup(self) -> None:
        markup = compile_source(self.SOURCE).markup
        assert "<h1>First Page</h1>" in markup
        assert "Second Page" not in markup
        assert markup.index('id="L-container"') < markup.index('id="F-container"')

    def test_containers_are_prefilled(self) -> None:
        markup = compile_source(self.SOURCE).markup
        assert 'id="F-form"' in markup
        assert 'id="L-body"' in markup

    def test_every_page_renders_in_script(self) -> None:
        script = compile_source(self.SOURCE).script
        assert "function renderPage_First()" in script
        assert "function renderPage_Second()" in script
        assert 'document.addEventListener("DOMContentLoaded", renderPage_First);' in script

    def test_lists_scheduled_after_injection(self) -> None:
        script = compile_source(self.SOURCE).script
        assert "setTimeout(() => refreshList_L(), 0);" in script


class TestTrustBoundary:
    """Free text is escaped; the script never closes its own element."""

    SOURCE = """
    model Note { field body: text default = "</script><b>x</b>"; }
    form AddNote(Note) { }
    page Home("<i>Tom & \\"Jerry\\"</i>") { AddNote }
    """

    def test_title_escaped_in_markup(self) -> None:
        markup = compile_source(self.SOURCE).markup
        assert "<h1>&lt;i&gt;Tom &amp; &quot;Jerry&quot;&lt;/i&gt;</h1>" in markup

    def test_default_escaped_in_markup(self) -> None:
        markup = compile_source(self.SOURCE).markup
        assert 'value="&lt;/script&gt;&lt;b&gt;x&lt;/b&gt;"' in markup

    def test_script_has_no_closing_tags(self) -> None:
        script = compile_source(self.SOURCE).script
        assert "</" not in script
        assert 'defaultValue: "<\\/script><b>x<\\/b>"' in script

    def test_typical_script_has_no_closing_tags(self, task_source: str) -> None:
        assert "</" not in compile_source(task_source).script


class TestWarnings:
    """Non-fatal findings."""

    def test_unknown_type_warns_and_renders_as_text(self) -> None:
        result = compile_source("model M { field price: money; } form F(M) { }")
        assert result.warnings == ["Field M.price has unknown type 'money'; treating it as text"]
        assert 'type="text" id="F-price"' in result.markup
        assert 'data-field-type="text"' in result.markup

    def test_warnings_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING", logger="sweb"):
            compile_source("model M { field price: money; }")
        assert "unknown type 'money'" in caplog.text
