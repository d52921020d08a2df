"""
Парсер шаблонов.

Преобразует поток токенов в AST с поддержкой вложенных условных блоков
и циклов. Рекурсивный спуск; стек открытых блоков отслеживает вложенность.

Грамматика:
block   → node*
node    → TEXT | "{{" path "}}" | if_node | for_node
if_node → "{%" "if" path "%}" block "{%" "end" "%}"
for_node → "{%" "for" ident "in" path "%}" block "{%" "end" "%}"
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import (
    InvalidExpression,
    InvalidIdentifier,
    NestingTooDeep,
    ParseError,
    UnbalancedBlock,
    UnexpectedEndOfInput,
    UnknownKeyword,
)
from .lexer import IDENTIFIER_PATH, TemplateLexer
from .nodes import ForNode, IfNode, TemplateAST, TemplateNode, TextNode, VariableNode, VariablePath
from .tokens import Keyword, Token, TokenType

# Переменная цикла: один сегмент без точек
LOOP_VARIABLE = re.compile(r'[A-Za-z0-9_]+')

# Предельная глубина вложенности блоков if/for
MAX_NESTING_DEPTH = 64


@dataclass(frozen=True)
class ControlTag:
    """Разобранный управляющий тег {% keyword expression %}."""
    open_token: Token
    keyword_token: Token
    expression_token: Optional[Token]

    @property
    def expression(self) -> str:
        return self.expression_token.value if self.expression_token else ""

    @property
    def expression_anchor(self) -> Token:
        """Токен, к которому привязывается диагностика выражения."""
        return self.expression_token or self.keyword_token


class TemplateParser:
    """
    Рекурсивный парсер для шаблонов.

    Потребляет поток токенов ровно один раз и строит неизменяемый AST.
    """

    def __init__(self, tokens: Iterable[Token]):
        self._tokens: Iterator[Token] = iter(tokens)
        self._current: Optional[Token] = None
        self._last_position = (0, 1, 1)

        # Стек открытых блоков: ключевое слово и открывающий токен
        self._open_blocks: List[Tuple[Keyword, Token]] = []

    def parse(self) -> TemplateAST:
        """
        Парсит всю последовательность токенов в AST.

        Returns:
            Кортеж корневых узлов AST

        Raises:
            ParseError: При ошибке синтаксического анализа
        """
        return tuple(self._parse_block())

    def _parse_block(self) -> List[TemplateNode]:
        """
        Парсит последовательность узлов до конца ввода (верхний уровень)
        или до {% end %}, закрывающего текущий блок.
        """
        nodes: List[TemplateNode] = []

        while True:
            current = self._current_token()

            if current.type == TokenType.EOF:
                if self._open_blocks:
                    keyword, open_token = self._open_blocks[-1]
                    raise UnexpectedEndOfInput(keyword.value, open_token.line, open_token.column)
                return nodes

            if current.type == TokenType.TEXT:
                self._advance()
                nodes.append(TextNode(text=current.value))
            elif current.type == TokenType.VAR_OPEN:
                nodes.append(self._parse_variable())
            elif current.type == TokenType.CONTROL_OPEN:
                tag = self._parse_control_tag()
                keyword = Keyword.lookup(tag.keyword_token.value)

                if keyword is Keyword.END:
                    self._check_end(tag)
                    return nodes
                elif keyword is Keyword.IF:
                    nodes.append(self._parse_if(tag))
                elif keyword is Keyword.FOR:
                    nodes.append(self._parse_for(tag))
                else:
                    raise UnknownKeyword(tag.keyword_token.value, tag.open_token.line, tag.open_token.column)
            else:
                raise ParseError(f"Unexpected token {current.type.name}", current.line, current.column)

    def _parse_variable(self) -> VariableNode:
        """Парсит подстановку {{ path }}."""
        open_token = self._consume(TokenType.VAR_OPEN)
        ident = self._consume(TokenType.IDENTIFIER)
        self._consume(TokenType.VAR_CLOSE)
        return VariableNode(
            path=self._split_path(ident.value, ident),
            line=open_token.line,
            column=open_token.column,
        )

    def _parse_control_tag(self) -> ControlTag:
        open_token = self._consume(TokenType.CONTROL_OPEN)
        keyword_token = self._consume(TokenType.KEYWORD)
        expression_token = None
        if self._current_token().type == TokenType.EXPRESSION:
            expression_token = self._advance()
        self._consume(TokenType.CONTROL_CLOSE)
        return ControlTag(open_token, keyword_token, expression_token)

    def _check_end(self, tag: ControlTag) -> None:
        """Проверяет, что {% end %} закрывает открытый блок."""
        if not self._open_blocks:
            raise UnbalancedBlock(None, "end", tag.open_token.line, tag.open_token.column)
        if tag.expression:
            anchor = tag.expression_anchor
            raise InvalidExpression(
                "end", tag.expression, "'end' takes no arguments", anchor.line, anchor.column
            )

    def _parse_if(self, tag: ControlTag) -> IfNode:
        """
        Парсит условный блок {% if path %} ... {% end %}.
        """
        if not tag.expression:
            anchor = tag.keyword_token
            raise InvalidExpression("if", "", "expected a variable path", anchor.line, anchor.column)

        condition = self._split_path(tag.expression, tag.expression_anchor)
        body = self._parse_body(Keyword.IF, tag.open_token)
        return IfNode(
            condition=condition,
            body=body,
            line=tag.open_token.line,
            column=tag.open_token.column,
        )

    def _parse_for(self, tag: ControlTag) -> ForNode:
        """
        Парсит цикл {% for item in path %} ... {% end %}.
        """
        anchor = tag.expression_anchor
        parts = tag.expression.split()
        if len(parts) != 3 or parts[1] != "in":
            raise InvalidExpression(
                "for", tag.expression, "expected '<name> in <path>'", anchor.line, anchor.column
            )

        loop_var, _, iterable_text = parts
        if not LOOP_VARIABLE.fullmatch(loop_var):
            raise InvalidIdentifier(loop_var, anchor.line, anchor.column)

        iterable = self._split_path(iterable_text, anchor)
        body = self._parse_body(Keyword.FOR, tag.open_token)
        return ForNode(
            loop_var=loop_var,
            iterable=iterable,
            body=body,
            line=tag.open_token.line,
            column=tag.open_token.column,
        )

    def _parse_body(self, keyword: Keyword, open_token: Token) -> Tuple[TemplateNode, ...]:
        """Парсит тело блока рекурсивным вызовом _parse_block."""
        if len(self._open_blocks) >= MAX_NESTING_DEPTH:
            raise NestingTooDeep(MAX_NESTING_DEPTH, open_token.line, open_token.column)
        self._open_blocks.append((keyword, open_token))
        try:
            return tuple(self._parse_block())
        finally:
            self._open_blocks.pop()

    @staticmethod
    def _split_path(text: str, token: Token) -> VariablePath:
        if not IDENTIFIER_PATH.fullmatch(text):
            raise InvalidIdentifier(text, token.line, token.column)
        return tuple(text.split("."))

    # Вспомогательные методы для работы с токенами

    def _current_token(self) -> Token:
        """Возвращает текущий токен без продвижения позиции."""
        if self._current is None:
            token = next(self._tokens, None)
            if token is None:
                # Поток исчерпан без явного EOF
                position, line, column = self._last_position
                token = Token(TokenType.EOF, "", position, line, column)
            self._current = token
        return self._current

    def _advance(self) -> Token:
        """Продвигается к следующему токену и возвращает текущий."""
        current = self._current_token()
        if current.type != TokenType.EOF:
            self._last_position = (current.position + len(current.value), current.line, current.column)
            self._current = None
        return current

    def _consume(self, expected_type: TokenType) -> Token:
        """
        Потребляет токен ожидаемого типа.

        Raises:
            ParseError: Если токен не соответствует ожидаемому типу
        """
        current = self._current_token()
        if current.type != expected_type:
            raise ParseError(
                f"Expected {expected_type.name}, got {current.type.name}",
                current.line,
                current.column,
            )
        return self._advance()


def parse_template(text: str) -> TemplateAST:
    """
    Удобная функция для парсинга шаблона из текста.

    Args:
        text: Исходный текст шаблона

    Returns:
        AST шаблона

    Raises:
        LexError: При ошибке лексического анализа
        ParseError: При ошибке синтаксического анализа
    """
    return TemplateParser(TemplateLexer(text)).parse()


__all__ = ["TemplateParser", "ControlTag", "parse_template", "MAX_NESTING_DEPTH"]
