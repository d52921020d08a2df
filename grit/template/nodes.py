"""
AST-узлы шаблона.

Замкнутый набор неизменяемых узлов: текст, переменная, условие, цикл.
Тела блоков хранятся кортежами, поэтому скомпилированный шаблон
можно безопасно разделять между рендерами и потоками.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

# Путь переменной: сегменты идентификатора, разделённые точкой в шаблоне
VariablePath = Tuple[str, ...]


@dataclass(frozen=True)
class TextNode:
    """
    Обычный текстовый контент в шаблоне.

    Выводится в результат как есть.
    """
    text: str


@dataclass(frozen=True)
class VariableNode:
    """Подстановка {{ path }}."""
    path: VariablePath
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class IfNode:
    """
    Условный блок {% if path %} ... {% end %}.

    Тело выводится, если значение по пути истинно.
    """
    condition: VariablePath
    body: Tuple[TemplateNode, ...]
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class ForNode:
    """
    Цикл {% for item in path %} ... {% end %}.

    Переменная цикла видна только внутри тела.
    """
    loop_var: str
    iterable: VariablePath
    body: Tuple[TemplateNode, ...]
    line: int = 0
    column: int = 0


TemplateNode = Union[TextNode, VariableNode, IfNode, ForNode]

# Алиас для последовательности узлов верхнего уровня (AST)
TemplateAST = Tuple[TemplateNode, ...]


__all__ = [
    "VariablePath",
    "TextNode",
    "VariableNode",
    "IfNode",
    "ForNode",
    "TemplateNode",
    "TemplateAST",
]
