"""
Работа с буфером редактора: удаление строк-комментариев
и аннотирование буфера диагностикой компиляции.
"""

from __future__ import annotations

COMMENT_PREFIX = "#"


def strip_comments(content: str) -> str:
    """
    Удаляет строки, первый непробельный символ которых '#'.

    Оставшиеся строки склеиваются через '\\n', результат обрезается по краям.
    Пустой результат означает отказ от коммита.
    """
    lines = [
        line for line in content.splitlines()
        if not line.lstrip().startswith(COMMENT_PREFIX)
    ]
    return "\n".join(lines).strip()


def annotate_with_error(content: str, error: Exception) -> str:
    """
    Дописывает в буфер закомментированное описание ошибки,
    чтобы пользователь увидел его при повторном открытии редактора.

    Строки аннотации начинаются с '#' и будут удалены strip_comments().
    """
    diagnostic = "\n".join(f"# {line}" for line in str(error).splitlines() or [""])
    return (
        f"{content}\n\n"
        f"# {'=' * 50}\n"
        f"{diagnostic}\n"
        f"#\n"
        f"# Fix the error above and save again.\n"
    )


__all__ = ["strip_comments", "annotate_with_error", "COMMENT_PREFIX"]
