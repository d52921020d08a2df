"""
Область видимости рендеринга.

Связывает контекст вызывающего кода с переменными циклов. Каждая итерация
{% for %} получает дочернюю область, которая перекрывает внешние имена
только внутри тела цикла. Исходный контекст никогда не изменяется.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple

from .nodes import VariablePath
from .values import normalize

# Маркер отсутствующего значения (None является допустимым значением)
MISSING = object()


class RenderScope:
    """
    Цепочка областей видимости.

    Корневая область содержит контекст рендеринга, дочерние хранят
    по одной привязке переменной цикла.
    """

    def __init__(self, bindings: Mapping[str, Any], parent: Optional[RenderScope] = None):
        self._bindings = bindings
        self._parent = parent

    def child(self, name: str, value: Any) -> RenderScope:
        """Создает дочернюю область с одной привязкой."""
        return RenderScope({name: value}, parent=self)

    def resolve(self, path: VariablePath) -> Any:
        """
        Разрешает путь переменной.

        Порядок поиска:
        1. Переменные циклов, начиная с ближайшей, по первому сегменту пути
        2. Полный точечный ключ в корневом контексте ("commit.type")
        3. Обход вложенных словарей корневого контекста по сегментам

        Returns:
            Нормализованное значение или MISSING, если путь не найден
        """
        scope: Optional[RenderScope] = self
        while scope is not None and scope._parent is not None:
            if path[0] in scope._bindings:
                return _walk(scope._bindings[path[0]], path[1:])
            scope = scope._parent

        root = scope._bindings if scope is not None else {}
        dotted = ".".join(path)
        if len(path) > 1 and dotted in root:
            return normalize(root[dotted])
        if path[0] in root:
            return _walk(root[path[0]], path[1:])
        return MISSING


def _walk(value: Any, rest: Tuple[str, ...]) -> Any:
    for segment in rest:
        if not isinstance(value, Mapping) or segment not in value:
            return MISSING
        value = value[segment]
    return normalize(value)


__all__ = ["RenderScope", "MISSING"]
