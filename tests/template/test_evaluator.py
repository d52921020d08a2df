"""
Тесты для вычислителя шаблонов.
"""

import pytest

from grit.template.errors import NotIterable, RenderError, TypeMismatch, UndefinedVariable
from grit.template.evaluator import TemplateEvaluator, UndefinedPolicy, render_ast
from grit.template.parser import parse_template


def render(text, context, policy=UndefinedPolicy.LENIENT):
    return render_ast(parse_template(text), context, policy)


class TestVariableSubstitution:

    def test_simple_variable(self):
        assert render("Hello {{name}}!", {"name": "World"}) == "Hello World!"

    def test_text_passes_through(self):
        text = "# comment line\n\n  indented\ttext\n"
        assert render(text, {}) == text

    def test_scalar_values(self):
        """Скалярные значения: None, bool, строки, числа."""
        context = {"none": None, "yes": True, "no": False, "num": 42, "ratio": 0.5}

        assert render("[{{none}}]", context) == "[]"
        assert render("{{yes}}/{{no}}", context) == "true/false"
        assert render("#{{num}} {{ratio}}", context) == "#42 0.5"

    def test_dotted_key_in_context(self):
        """Ключ контекста может быть точечным путём."""
        assert render("{{commit.type}}", {"commit.type": "feat"}) == "feat"

    def test_nested_mapping(self):
        context = {"commit": {"scope": {"name": "api"}}}

        assert render("{{ commit.scope.name }}", context) == "api"

    def test_dotted_key_takes_precedence_over_nested_mapping(self):
        context = {"a.b": "flat", "a": {"b": "nested"}}

        assert render("{{a.b}}", context) == "flat"

    def test_list_substitution_is_type_mismatch(self):
        with pytest.raises(TypeMismatch) as exc:
            render("x\n  {{ items }}", {"items": ["a"]})

        assert exc.value.path == ("items",)
        assert exc.value.actual == "list"
        assert (exc.value.line, exc.value.column) == (2, 3)

    def test_mapping_substitution_is_type_mismatch(self):
        with pytest.raises(TypeMismatch):
            render("{{ commit }}", {"commit": {"type": "feat"}})


class TestUndefinedPolicy:

    def test_lenient_missing_variable_is_empty(self):
        assert render("[{{missing}}]", {}) == "[]"

    def test_lenient_missing_nested_path_is_empty(self):
        assert render("[{{a.b.c}}]", {"a": {"b": "x"}}) == "[]"

    def test_strict_missing_variable_raises(self):
        with pytest.raises(UndefinedVariable) as exc:
            render("ok\n{{ missing.path }}", {}, UndefinedPolicy.STRICT)

        assert exc.value.path == ("missing", "path")
        assert exc.value.line == 2
        assert "missing.path" in str(exc.value)

    def test_strict_null_is_not_undefined(self):
        """Явный None отличается от отсутствующей переменной."""
        assert render("[{{x}}]", {"x": None}, UndefinedPolicy.STRICT) == "[]"

    def test_missing_condition_is_false_in_strict_mode(self):
        assert render("{% if missing %}X{% end %}", {}, UndefinedPolicy.STRICT) == ""

    def test_missing_iterable(self):
        template = "{% for x in missing %}{{x}}{% end %}"

        assert render(template, {}) == ""
        with pytest.raises(UndefinedVariable):
            render(template, {}, UndefinedPolicy.STRICT)


class TestConditionals:

    def test_true_and_false_flag(self):
        assert render("{% if flag %}YES{% end %}", {"flag": True}) == "YES"
        assert render("{% if flag %}YES{% end %}", {"flag": False}) == ""

    @pytest.mark.parametrize("value,expected", [
        (True, True),
        (False, False),
        (None, False),
        ("", False),
        ("text", True),
        ([], False),
        (["a"], True),
        ({}, False),
        ({"k": "v"}, True),
        (0, True),
    ])
    def test_truthiness(self, value, expected):
        result = render("{% if v %}T{% end %}", {"v": value})

        assert result == ("T" if expected else "")

    def test_nested_conditions(self):
        template = "{% if a %}A{% if b %}B{% end %}{% end %}"

        assert render(template, {"a": True, "b": True}) == "AB"
        assert render(template, {"a": True, "b": False}) == "A"
        assert render(template, {"a": False, "b": True}) == ""


class TestLoops:

    def test_simple_loop(self):
        template = "{% for x in items %}{{x}},{% end %}"

        assert render(template, {"items": ["a", "b", "c"]}) == "a,b,c,"

    def test_empty_list(self):
        assert render("{% for x in items %}{{x}}{% end %}", {"items": []}) == ""

    def test_tuple_is_iterable(self):
        assert render("{% for x in items %}{{x}}{% end %}", {"items": ("a", "b")}) == "ab"

    def test_loop_over_mappings(self):
        context = {"footers": [{"key": "Refs", "value": "#1"}, {"key": "Closes", "value": "#2"}]}
        template = "{% for f in footers %}{{f.key}}: {{f.value}}\n{% end %}"

        assert render(template, context) == "Refs: #1\nCloses: #2\n"

    def test_nested_loops(self):
        context = {"rows": [["a", "b"], ["c"]]}
        template = "{% for row in rows %}[{% for cell in row %}{{cell}}{% end %}]{% end %}"

        assert render(template, context) == "[ab][c]"

    def test_condition_on_loop_variable(self):
        context = {"items": ["a", "", "c"]}
        template = "{% for x in items %}{% if x %}{{x}}{% end %}{% end %}"

        assert render(template, context) == "ac"

    def test_loop_variable_shadows_outer_binding_only_inside_body(self):
        context = {"x": "outer", "items": ["1", "2"]}
        template = "{{x}}|{% for x in items %}{{x}}{% end %}|{{x}}"

        assert render(template, context) == "outer|12|outer"

    def test_loop_variable_does_not_leak(self):
        template = "{% for x in items %}{% end %}[{{x}}]"

        assert render(template, {"items": ["a"]}) == "[]"
        with pytest.raises(UndefinedVariable):
            render(template, {"items": ["a"]}, UndefinedPolicy.STRICT)

    def test_outer_loop_variable_visible_in_inner_loop(self):
        context = {"groups": ["g1", "g2"], "items": ["a", "b"]}
        template = "{% for g in groups %}{% for i in items %}{{g}}{{i}} {% end %}{% end %}"

        assert render(template, context) == "g1a g1b g2a g2b "

    @pytest.mark.parametrize("value,actual", [
        ("abc", "string"),
        (True, "bool"),
        (None, "null"),
        ({"a": "b"}, "mapping"),
    ])
    def test_not_iterable(self, value, actual):
        with pytest.raises(NotIterable) as exc:
            render("\n{% for x in value %}{{x}}{% end %}", {"value": value})

        assert exc.value.actual == actual
        assert exc.value.line == 2


class TestRenderSemantics:

    def test_render_is_all_or_nothing(self):
        """Ошибка в конце шаблона не даёт частичного результата."""
        evaluator = TemplateEvaluator()
        ast = parse_template("long prefix {{ ok }} {% for x in bad %}{% end %}")

        with pytest.raises(RenderError):
            evaluator.render(ast, {"ok": "fine", "bad": "scalar"})

    def test_context_is_not_mutated(self):
        context = {"items": ["a", "b"], "x": "keep"}
        snapshot = {"items": ["a", "b"], "x": "keep"}

        render("{% for x in items %}{{x}}{% end %}", context)

        assert context == snapshot

    def test_evaluator_is_reusable(self):
        evaluator = TemplateEvaluator()
        ast = parse_template("{{a}}")

        assert evaluator.render(ast, {"a": "1"}) == "1"
        assert evaluator.render(ast, {"a": "2"}) == "2"
