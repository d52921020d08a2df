"""
Лексические типы.

Определяет типы токенов, ключевые слова управляющих тегов
и виды разделителей шаблона.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Типы токенов в шаблоне."""

    # Текстовый контент вне разделителей
    TEXT = "TEXT"

    # Подстановка переменной {{ path }}
    VAR_OPEN = "VAR_OPEN"            # {{
    IDENTIFIER = "IDENTIFIER"        # a.b.c
    VAR_CLOSE = "VAR_CLOSE"          # }}

    # Управляющий тег {% keyword expression %}
    CONTROL_OPEN = "CONTROL_OPEN"    # {%
    KEYWORD = "KEYWORD"              # if / for / end
    EXPRESSION = "EXPRESSION"        # сырой хвост тега
    CONTROL_CLOSE = "CONTROL_CLOSE"  # %}

    # Комментарии {# ... #} в поток не попадают, типы нужны для диагностики
    COMMENT_OPEN = "COMMENT_OPEN"    # {#
    COMMENT_CLOSE = "COMMENT_CLOSE"  # #}

    EOF = "EOF"


class Keyword(enum.Enum):
    """Ключевые слова управляющих тегов."""
    IF = "if"
    FOR = "for"
    END = "end"

    @classmethod
    def lookup(cls, word: str) -> Keyword | None:
        """Возвращает ключевое слово по тексту или None, если слово неизвестно."""
        for keyword in cls:
            if keyword.value == word:
                return keyword
        return None


class DelimiterKind(enum.Enum):
    """Виды парных разделителей шаблона."""
    VARIABLE = ("variable", "{{", "}}")
    CONTROL = ("control", "{%", "%}")
    COMMENT = ("comment", "{#", "#}")

    def __init__(self, label: str, opening: str, closing: str):
        self.label = label
        self.opening = opening
        self.closing = closing

    @classmethod
    def by_opening(cls, opening: str) -> DelimiterKind | None:
        for kind in cls:
            if kind.opening == opening:
                return kind
        return None


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики ошибок.
    """
    type: TokenType
    value: str
    position: int        # Позиция в исходном тексте
    line: int            # Номер строки (начиная с 1)
    column: int          # Номер колонки (начиная с 1)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


__all__ = ["TokenType", "Keyword", "DelimiterKind", "Token"]
