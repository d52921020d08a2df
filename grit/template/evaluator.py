"""
Вычислитель шаблонов.

Проходит по AST в порядке документа и собирает результат рендеринга
в контексте привязок переменных.
"""

from __future__ import annotations

import enum
from typing import Any, List, Mapping, Sequence

from .context import MISSING, RenderScope
from .errors import NotIterable, TypeMismatch, UndefinedVariable
from .nodes import ForNode, IfNode, TemplateNode, TextNode, VariableNode
from .values import is_scalar, is_truthy, to_text, type_name


class UndefinedPolicy(enum.Enum):
    """Поведение при обращении к переменной, отсутствующей в контексте."""
    LENIENT = "lenient"  # подставляется пустая строка
    STRICT = "strict"    # UndefinedVariable


class TemplateEvaluator:
    """
    Вычислитель AST шаблона.

    Не хранит состояние между вызовами render(): один экземпляр можно
    использовать для любого числа рендеров.
    """

    def __init__(self, policy: UndefinedPolicy = UndefinedPolicy.LENIENT):
        self.policy = policy

    def render(self, ast: Sequence[TemplateNode], context: Mapping[str, Any]) -> str:
        """
        Рендерит AST в строку.

        Args:
            ast: Узлы верхнего уровня
            context: Привязки переменных (не изменяются)

        Returns:
            Отрендеренный текст

        Raises:
            RenderError: При ошибке рендеринга; частичный результат не возвращается
        """
        out: List[str] = []
        self._render_nodes(ast, RenderScope(context), out)
        return "".join(out)

    def _render_nodes(self, nodes: Sequence[TemplateNode], scope: RenderScope, out: List[str]) -> None:
        for node in nodes:
            if isinstance(node, TextNode):
                out.append(node.text)
            elif isinstance(node, VariableNode):
                out.append(self._render_variable(node, scope))
            elif isinstance(node, IfNode):
                self._render_if(node, scope, out)
            elif isinstance(node, ForNode):
                self._render_for(node, scope, out)
            else:
                raise TypeError(f"Unknown template node: {type(node).__name__}")

    def _render_variable(self, node: VariableNode, scope: RenderScope) -> str:
        value = scope.resolve(node.path)
        if value is MISSING:
            if self.policy is UndefinedPolicy.STRICT:
                raise UndefinedVariable(node.path, node.line, node.column)
            return ""
        if not is_scalar(value):
            raise TypeMismatch(node.path, "a string, bool or null", type_name(value), node.line, node.column)
        return to_text(value)

    def _render_if(self, node: IfNode, scope: RenderScope, out: List[str]) -> None:
        # Отсутствующее значение в условии ложно при любой политике
        value = scope.resolve(node.condition)
        if value is not MISSING and is_truthy(value):
            self._render_nodes(node.body, scope, out)

    def _render_for(self, node: ForNode, scope: RenderScope, out: List[str]) -> None:
        items = scope.resolve(node.iterable)
        if items is MISSING:
            if self.policy is UndefinedPolicy.STRICT:
                raise UndefinedVariable(node.iterable, node.line, node.column)
            return
        if not isinstance(items, list):
            raise NotIterable(node.iterable, type_name(items), node.line, node.column)

        for item in items:
            self._render_nodes(node.body, scope.child(node.loop_var, item), out)


def render_ast(
    ast: Sequence[TemplateNode],
    context: Mapping[str, Any],
    policy: UndefinedPolicy = UndefinedPolicy.LENIENT,
) -> str:
    """Удобная функция для рендеринга AST."""
    return TemplateEvaluator(policy).render(ast, context)


__all__ = ["UndefinedPolicy", "TemplateEvaluator", "render_ast"]
