"""
Ошибки движка шаблонов.

Ошибки компиляции (лексер и парсер) и ошибки рендеринга несут номер строки
и колонки исходного шаблона для диагностики пользователю.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..errors import GritUserError
from .tokens import DelimiterKind


def format_path(path: Sequence[str]) -> str:
    return ".".join(path)


class TemplateError(GritUserError):
    """Базовая ошибка шаблона с позицией в исходном тексте."""

    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message} at {line}:{column}")
        self.message = message
        self.line = line
        self.column = column


# ---------------------------- Компиляция ----------------------------

class CompileError(TemplateError):
    """Ошибка компиляции шаблона: AST не построен."""
    pass


class LexError(CompileError):
    """Ошибка лексического анализа."""
    pass


class UnterminatedDelimiter(LexError):
    """Открывающий разделитель без закрывающей пары до конца ввода."""

    def __init__(self, kind: DelimiterKind, line: int, column: int):
        super().__init__(
            f"Unterminated {kind.label} tag: '{kind.opening}' without matching '{kind.closing}'",
            line, column,
        )
        self.kind = kind


class InvalidIdentifier(LexError):
    """Некорректный путь идентификатора."""

    def __init__(self, text: str, line: int, column: int):
        super().__init__(f"Invalid identifier {text!r}", line, column)
        self.text = text


class ParseError(CompileError):
    """Ошибка синтаксического анализа."""
    pass


class UnbalancedBlock(ParseError):
    """Закрывающий тег не соответствует открытым блокам."""

    def __init__(
        self,
        expected: Optional[str],
        found: str,
        line: int,
        column: int,
        message: Optional[str] = None,
    ):
        if message is None:
            if expected is None:
                message = f"Unexpected '{found}': no open block to close"
            else:
                message = f"Expected '{expected}', found '{found}'"
        super().__init__(message, line, column)
        self.expected = expected
        self.found = found


class UnexpectedEndOfInput(UnbalancedBlock):
    """Ввод закончился при незакрытых блоках."""

    def __init__(self, block: str, line: int, column: int):
        super().__init__(
            "end", "end of input", line, column,
            message=f"Unexpected end of input: '{block}' block is never closed",
        )
        self.block = block


class NestingTooDeep(ParseError):
    """Вложенность блоков превышает допустимую глубину."""

    def __init__(self, limit: int, line: int, column: int):
        super().__init__(f"Blocks nested deeper than {limit} levels", line, column)
        self.limit = limit


class UnknownKeyword(ParseError):
    """Неизвестное ключевое слово в управляющем теге."""

    def __init__(self, keyword: str, line: int, column: int):
        if keyword:
            message = f"Unknown keyword '{keyword}'"
        else:
            message = "Empty control tag"
        super().__init__(message, line, column)
        self.keyword = keyword


class InvalidExpression(ParseError):
    """Некорректный хвост управляющего тега."""

    def __init__(self, keyword: str, expression: str, hint: str, line: int, column: int):
        super().__init__(f"Invalid '{keyword}' tag {expression!r}: {hint}", line, column)
        self.keyword = keyword
        self.expression = expression


# ---------------------------- Рендеринг ----------------------------

class RenderError(TemplateError):
    """Ошибка рендеринга: частичный результат не возвращается."""
    pass


class NotIterable(RenderError):
    def __init__(self, path: Sequence[str], actual: str, line: int, column: int):
        super().__init__(
            f"'{format_path(path)}' is not iterable (got {actual})", line, column
        )
        self.path = tuple(path)
        self.actual = actual


class UndefinedVariable(RenderError):
    def __init__(self, path: Sequence[str], line: int, column: int):
        super().__init__(f"Undefined variable '{format_path(path)}'", line, column)
        self.path = tuple(path)


class TypeMismatch(RenderError):
    def __init__(self, path: Sequence[str], expected: str, actual: str, line: int, column: int):
        super().__init__(
            f"'{format_path(path)}' must be {expected}, got {actual}", line, column
        )
        self.path = tuple(path)
        self.expected = expected
        self.actual = actual


__all__ = [
    "TemplateError",
    "CompileError",
    "LexError",
    "UnterminatedDelimiter",
    "InvalidIdentifier",
    "ParseError",
    "UnbalancedBlock",
    "UnexpectedEndOfInput",
    "NestingTooDeep",
    "UnknownKeyword",
    "InvalidExpression",
    "RenderError",
    "NotIterable",
    "UndefinedVariable",
    "TypeMismatch",
]
