"""Tests for the SWeb parser."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from sweb.core import ir
from sweb.core.dsl_parser_impl import Parser, parse_dsl
from sweb.core.errors import ParseError
from sweb.core.lexer import tokenize
from sweb.core.options import CompileOptions
from sweb.core.parser import parse_file, parse_source

STRICT = CompileOptions(lenient=False)


def parse_field(decl: str, options: CompileOptions | None = None) -> ir.FieldSpec:
    app = parse_source(f"model M {{ {decl} }}", options=options)
    assert len(app.models[0].fields) == 1
    return app.models[0].fields[0]


class TestDeclarations:
    """Top-level declarations and their collections."""

    def test_counts_and_order(self, task_app: ir.AppSpec) -> None:
        assert [m.name for m in task_app.models] == ["Task"]
        assert [f.name for f in task_app.forms] == ["NewTask"]
        assert [lst.name for lst in task_app.lists] == ["AllTasks"]
        assert [v.name for v in task_app.views] == ["TaskCards"]
        assert [p.name for p in task_app.pages] == ["Home"]

    def test_model_count_fidelity(self) -> None:
        source = "\n".join(f"model M{i} {{ field x: text; }}" for i in range(7))
        app = parse_source(source)
        assert [m.name for m in app.models] == [f"M{i}" for i in range(7)]

    def test_duplicates_are_kept(self) -> None:
        app = parse_source("model A {} model A {} list L(A) {} list L(A) {}")
        assert len(app.models) == 2
        assert len(app.lists) == 2

    def test_empty_source(self) -> None:
        app = parse_source("")
        assert app == ir.AppSpec()

    def test_bindings_keep_model_by_name(self, task_app: ir.AppSpec) -> None:
        form = task_app.forms[0]
        assert isinstance(form, ir.FormSpec)
        assert form.model == "Task"
        assert form.fields == ("title", "estimate", "done")
        assert task_app.lists[0].fields == ()

    def test_page(self, task_app: ir.AppSpec) -> None:
        page = task_app.pages[0]
        assert page.title == "Task Tracker"
        assert page.components == ("NewTask", "AllTasks", "TaskCards")

    def test_unresolved_names_parse(self) -> None:
        app = parse_source('form F(Nope) { a } page P("x") { Ghost }')
        assert app.forms[0].model == "Nope"
        assert app.pages[0].components == ("Ghost",)


class TestFields:
    """Field declarations, modifiers and default literals."""

    def test_plain_number_field(self) -> None:
        field = parse_field("field age: number;")
        assert field == ir.FieldSpec(name="age", type="number", required=False, default=None)

    def test_boolean_default_true(self) -> None:
        field = parse_field("field isActive: boolean default = true;")
        assert field.required is False
        assert field.default is True

    def test_required_text(self) -> None:
        field = parse_field("field name: text required;")
        assert field.required is True
        assert field.default is None

    def test_last_default_wins(self) -> None:
        field = parse_field('field x: text default = "a" required default = "b";')
        assert field.default == "b"
        assert field.required is True

    def test_modifiers_in_any_order(self) -> None:
        field = parse_field("field x: number default = 3 required required;")
        assert field.default == 3
        assert field.required is True

    def test_integer_and_float_defaults(self) -> None:
        assert parse_field("field x: number default = 10;").default == 10
        assert isinstance(parse_field("field x: number default = 10;").default, int)
        assert parse_field("field x: number default = 2.5;").default == 2.5

    def test_string_default(self) -> None:
        assert parse_field('field x: text default = "hello world";').default == "hello world"

    def test_type_keywords_as_names(self) -> None:
        app = parse_source("model M { field date: date; field text: text; } list L(M) { date, text }")
        assert [f.name for f in app.models[0].fields] == ["date", "text"]
        assert app.lists[0].fields == ("date", "text")

    def test_unknown_type_is_accepted_by_default(self) -> None:
        field = parse_field("field price: money;")
        assert field.type == "money"
        assert field.has_known_type is False
        assert field.kind == ir.FieldTypeKind.TEXT

    def test_unknown_type_rejected_with_strict_types(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_field("field price: money;", CompileOptions(strict_types=True))
        assert exc_info.value.found == "IDENTIFIER"
        assert "'money'" in exc_info.value.message

    def test_default_needs_literal(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_field("field x: text default = ;")
        assert exc_info.value.expected == "literal"
        assert exc_info.value.found == "';'"

    def test_missing_semicolon(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_source("model M { field x: text }")
        assert exc_info.value.expected == "';'"
        assert exc_info.value.found == "'}'"


class TestLenientRecovery:
    """Skip-unrecognized-token recovery and its strict alternative."""

    def test_top_level_junk_is_skipped(self) -> None:
        app = parse_source("garbage ; 42 model A { field x: text; }")
        assert [m.name for m in app.models] == ["A"]

    def test_model_body_junk_is_skipped(self) -> None:
        app = parse_source("model A { junk = 1 field x: text; }")
        assert [f.name for f in app.models[0].fields] == ["x"]

    def test_unknown_modifier_is_skipped(self) -> None:
        field = parse_field("field x: text unique required;")
        assert field.required is True

    def test_skips_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING", logger="sweb"):
            parse_source("garbage model A {}")
        assert "Skipping unexpected IDENTIFIER 'garbage'" in caplog.text

    def test_strict_top_level(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_source("garbage model A {}", options=STRICT)
        assert exc_info.value.expected == "declaration"
        assert exc_info.value.found == "IDENTIFIER"

    def test_strict_model_body(self) -> None:
        with pytest.raises(ParseError):
            parse_source("model A { junk field x: text; }", options=STRICT)

    def test_strict_modifier(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_field("field x: text unique;", STRICT)
        assert exc_info.value.expected == "'required', 'default' or ';'"


class TestParseErrors:
    """Expected/found reporting with positions."""

    def test_eof_inside_model(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_source("model A {\n  field x: text;\n")
        error = exc_info.value
        assert error.expected == "'}'"
        assert error.found == "EOF"
        assert error.line == 3

    def test_names_need_commas(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_source("model M {} form F(M) { a b }")
        assert exc_info.value.expected == "'}'"
        assert exc_info.value.found == "IDENTIFIER"

    def test_trailing_comma_is_rejected(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_source("list L(M) { a, }")
        assert exc_info.value.expected == "IDENTIFIER"

    def test_page_title_must_be_string(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_source("page P(Home) {}")
        error = exc_info.value
        assert error.expected == "STRING"
        assert error.found == "IDENTIFIER"
        assert (error.line, error.column) == (1, 8)

    def test_binding_needs_parenthesized_model(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_source("form F { a }")
        assert exc_info.value.expected == "'('"
        assert exc_info.value.found == "'{'"

    def test_message_includes_file_location(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_dsl("model {", Path("app.sweb"))
        assert str(exc_info.value) == "app.sweb:1:7\nExpected IDENTIFIER, got '{'"


class TestTree:
    """Properties of the resulting AppSpec."""

    def test_deterministic(self, task_source: str) -> None:
        assert parse_source(task_source) == parse_source(task_source)

    def test_tree_is_immutable(self, task_app: ir.AppSpec) -> None:
        with pytest.raises(ValidationError):
            task_app.models = ()  # type: ignore[misc]
        assert isinstance(task_app.models, tuple)

    def test_parser_instance_is_single_use_cursor(self) -> None:
        parser = Parser(tokenize("model A {}"))
        assert parser.parse().models[0].name == "A"
        assert parser.parse() == ir.AppSpec()

    def test_parse_file(self, tmp_path: Path, task_source: str) -> None:
        path = tmp_path / "tasks.sweb"
        path.write_text(task_source)
        assert parse_file(path) == parse_source(task_source)


class TestIdentifierBoundary:
    """The IR refuses names that could break out of generated markup or script."""

    @pytest.mark.parametrize("name", ["<script>", 'a"b', "x}", "1abc", "", "a b"])
    def test_model_name_rejected(self, name: str) -> None:
        with pytest.raises(ValidationError):
            ir.ModelSpec(name=name)

    def test_binding_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ir.ListSpec(name="L", model="M", fields=["ok", "</tbody>"])

    def test_page_component_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ir.PageSpec(name="P", title="any <b>text</b>", components=["x'y"])

    def test_page_title_is_free_text(self) -> None:
        page = ir.PageSpec(name="P", title='Tom & "Jerry" </script>')
        assert page.title == 'Tom & "Jerry" </script>'
