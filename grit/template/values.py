"""
Значения контекста рендеринга.

Шаблон оперирует четырьмя видами значений: None, bool, str и список значений.
Для удобства вызывающего кода числа приводятся к строкам,
а вложенные словари обходятся по сегментам пути.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Union

Value = Union[None, bool, str, List["Value"]]


def normalize(value: Any) -> Any:
    """
    Приводит значение из контекста к виду, понятному вычислителю.

    - int/float превращаются в строки
    - кортежи превращаются в списки
    - остальное возвращается как есть (проверка типа выполняется при использовании)
    """
    if isinstance(value, bool) or value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, tuple):
        return list(value)
    return value


def type_name(value: Any) -> str:
    """Имя вида значения для диагностики."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "list"
    if isinstance(value, Mapping):
        return "mapping"
    return type(value).__name__


def is_truthy(value: Any) -> bool:
    """
    Истинность значения для {% if %}.

    Истинны: True, непустая строка, непустой список, непустой словарь.
    Ложны: None, False, пустая строка, пустой список, пустой словарь.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (str, list, tuple, Mapping)):
        return len(value) > 0
    return bool(value)


def is_scalar(value: Any) -> bool:
    return value is None or isinstance(value, (bool, str))


def to_text(value: Any) -> str:
    """Текстовое представление скалярного значения для подстановки."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


__all__ = ["Value", "normalize", "type_name", "is_truthy", "is_scalar", "to_text"]
