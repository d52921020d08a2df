"""
Компилятор шаблонов сообщений коммитов.

Синтаксис:
- {{ path }} подстановка переменной
- {% if path %} ... {% end %} условный блок
- {% for item in path %} ... {% end %} цикл
- {# ... #} комментарий
"""

from __future__ import annotations

from .errors import (
    CompileError,
    InvalidExpression,
    InvalidIdentifier,
    LexError,
    NestingTooDeep,
    NotIterable,
    ParseError,
    RenderError,
    TemplateError,
    TypeMismatch,
    UnbalancedBlock,
    UndefinedVariable,
    UnexpectedEndOfInput,
    UnknownKeyword,
    UnterminatedDelimiter,
)
from .evaluator import UndefinedPolicy
from .processor import CompiledTemplate, compile_template, render_template

compile = compile_template
render = render_template

__all__ = [
    "compile",
    "render",
    "compile_template",
    "render_template",
    "CompiledTemplate",
    "UndefinedPolicy",
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
