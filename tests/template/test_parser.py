"""Тесты для парсера шаблонов TemplateParser."""
from typing import List

import pytest

from grit.template.errors import (
    InvalidExpression,
    InvalidIdentifier,
    NestingTooDeep,
    ParseError,
    UnbalancedBlock,
    UnexpectedEndOfInput,
    UnknownKeyword,
)
from grit.template.lexer import TemplateLexer
from grit.template.nodes import ForNode, IfNode, TextNode, VariableNode
from grit.template.parser import MAX_NESTING_DEPTH, TemplateParser, parse_template
from grit.template.tokens import Token, TokenType


class TestTemplateParser:
    """Основные тесты для TemplateParser."""

    def test_parse_empty_token_list(self):
        """Парсинг пустого списка токенов."""
        tokens: List[Token] = []

        assert TemplateParser(tokens).parse() == ()

    def test_parse_empty_template(self):
        assert parse_template("") == ()

    def test_parse_simple_text(self):
        ast = parse_template("Hello, world!")

        assert ast == (TextNode(text="Hello, world!"),)

    def test_parse_text_with_variable(self):
        ast = parse_template("Hello {{ name }}!")

        assert len(ast) == 3
        assert ast[0] == TextNode("Hello ")
        assert isinstance(ast[1], VariableNode)
        assert ast[1].path == ("name",)
        assert (ast[1].line, ast[1].column) == (1, 7)
        assert ast[2] == TextNode("!")

    def test_parse_dotted_path(self):
        ast = parse_template("{{ commit.footer.key }}")

        assert ast[0].path == ("commit", "footer", "key")

    def test_parse_if_block(self):
        ast = parse_template("{% if flag %}YES{% end %}")

        assert len(ast) == 1
        node = ast[0]
        assert isinstance(node, IfNode)
        assert node.condition == ("flag",)
        assert node.body == (TextNode("YES"),)
        assert (node.line, node.column) == (1, 1)

    def test_parse_for_block(self):
        ast = parse_template("{% for x in items %}{{x}},{% end %}")

        node = ast[0]
        assert isinstance(node, ForNode)
        assert node.loop_var == "x"
        assert node.iterable == ("items",)
        assert len(node.body) == 2
        assert node.body[0].path == ("x",)
        assert node.body[1] == TextNode(",")

    def test_parse_nested_blocks(self):
        """Вложенные блоки разбираются рекурсивно в порядке документа."""
        ast = parse_template(
            "A{% if a %}B{% for x in xs %}{% if x %}C{% end %}{% end %}D{% end %}E"
        )

        assert [type(n) for n in ast] == [TextNode, IfNode, TextNode]
        if_node = ast[1]
        assert [type(n) for n in if_node.body] == [TextNode, ForNode, TextNode]
        for_node = if_node.body[1]
        inner_if = for_node.body[0]
        assert isinstance(inner_if, IfNode)
        assert inner_if.condition == ("x",)
        assert inner_if.body == (TextNode("C"),)
        assert if_node.body[2] == TextNode("D")
        assert ast[2] == TextNode("E")

    def test_siblings_after_block(self):
        ast = parse_template("{% if a %}1{% end %}{% if b %}2{% end %}")

        assert len(ast) == 2
        assert ast[0].condition == ("a",)
        assert ast[1].condition == ("b",)

    def test_comments_do_not_produce_nodes(self):
        ast = parse_template("A{# hidden #}B")

        assert ast == (TextNode("A"), TextNode("B"))

    def test_ast_is_immutable(self):
        ast = parse_template("{% if a %}x{% end %}")

        assert isinstance(ast, tuple)
        assert isinstance(ast[0].body, tuple)
        with pytest.raises(AttributeError):
            ast[0].condition = ("b",)

    def test_parser_accepts_lazy_stream(self):
        """Парсер потребляет поток лексера напрямую, без промежуточного списка."""
        lexer = TemplateLexer("{{ a }}")
        ast = TemplateParser(lexer).parse()

        assert ast[0].path == ("a",)
        assert list(lexer) == []


class TestParserErrors:
    """Ошибки вложенности и формата управляющих тегов."""

    def test_missing_end_is_unbalanced_block(self):
        with pytest.raises(UnbalancedBlock) as exc:
            parse_template("{% if a %}{% for x in y %}{% end %}")

        # Незакрытым остаётся внешний if
        assert isinstance(exc.value, UnexpectedEndOfInput)
        assert exc.value.block == "if"
        assert (exc.value.line, exc.value.column) == (1, 1)

    def test_unexpected_end_of_input_reports_innermost_block(self):
        with pytest.raises(UnexpectedEndOfInput) as exc:
            parse_template("{% if a %}\n  {% for x in y %}\n")

        assert exc.value.block == "for"
        assert exc.value.line == 2

    def test_extra_end(self):
        with pytest.raises(UnbalancedBlock) as exc:
            parse_template("{% if a %}x{% end %}\n{% end %}")

        assert not isinstance(exc.value, UnexpectedEndOfInput)
        assert exc.value.expected is None
        assert exc.value.found == "end"
        assert exc.value.line == 2

    def test_end_without_block(self):
        with pytest.raises(UnbalancedBlock):
            parse_template("{% end %}")

    @pytest.mark.parametrize("template,keyword", [
        ("{% else %}", "else"),
        ("{% endif %}", "endif"),
        ("{% include x %}", "include"),
        ("{% %}", ""),
    ])
    def test_unknown_keyword(self, template, keyword):
        with pytest.raises(UnknownKeyword) as exc:
            parse_template(template)

        assert exc.value.keyword == keyword
        assert exc.value.line == 1

    def test_else_inside_if_is_unknown(self):
        """Ветка else грамматикой не поддерживается."""
        with pytest.raises(UnknownKeyword):
            parse_template("{% if a %}x{% else %}y{% end %}")

    @pytest.mark.parametrize("template", [
        "{% if %}x{% end %}",
        "{% for %}x{% end %}",
        "{% for x %}x{% end %}",
        "{% for x of items %}x{% end %}",
        "{% for x in %}x{% end %}",
        "{% for x in a b %}x{% end %}",
        "{% if a %}x{% end if %}",
    ])
    def test_invalid_expression(self, template):
        with pytest.raises(InvalidExpression):
            parse_template(template)

    @pytest.mark.parametrize("template", [
        "{% if a b %}x{% end %}",
        "{% if a-b %}x{% end %}",
        "{% for a.b in items %}x{% end %}",
        "{% for x in items. %}x{% end %}",
    ])
    def test_invalid_identifier_in_control_tag(self, template):
        with pytest.raises(InvalidIdentifier):
            parse_template(template)

    def test_all_compile_errors_are_parse_or_lex_errors(self):
        with pytest.raises(ParseError):
            parse_template("{% if a %}")

    def test_unexpected_token_is_reported(self):
        tokens = [Token(TokenType.VAR_CLOSE, "}}", 0, 1, 1)]

        with pytest.raises(ParseError) as exc:
            TemplateParser(tokens).parse()

        assert "VAR_CLOSE" in str(exc.value)


class TestNestingDepth:
    """Глубина вложенности блоков ограничена."""

    def test_max_depth_is_accepted(self):
        depth = MAX_NESTING_DEPTH
        ast = parse_template("{% if a %}" * depth + "X" + "{% end %}" * depth)

        node = ast[0]
        for _ in range(depth - 1):
            node = node.body[0]
        assert node.body == (TextNode("X"),)

    def test_too_deep_if_chain(self):
        depth = 400
        with pytest.raises(NestingTooDeep) as exc:
            parse_template("{% if a %}" * depth + "X" + "{% end %}" * depth)

        # Ошибка указывает на первый блок сверх предела
        assert exc.value.line == 1
        assert exc.value.column == MAX_NESTING_DEPTH * len("{% if a %}") + 1
        assert exc.value.limit == MAX_NESTING_DEPTH

    def test_too_deep_mixed_blocks(self):
        opening = "{% for x in xs %}\n{% if x %}\n"
        depth = MAX_NESTING_DEPTH

        with pytest.raises(NestingTooDeep) as exc:
            parse_template(opening * depth + "{% end %}\n" * (2 * depth))

        assert exc.value.line == MAX_NESTING_DEPTH + 1
        assert isinstance(exc.value, ParseError)
