"""
Шаблон буфера редактора.

Текст, которым заполняется временный файл перед открытием редактора.
Все строки шаблона являются комментариями и удаляются после закрытия
редактора (см. strip_comments). Список типов подставляется компилятором.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional, Sequence

from ..template import CompiledTemplate, compile_template
from .commit_types import CommitType

EDITOR_TEMPLATE = """

# --- grit: conventional commit ---
#
# Format:  type(scope)!: description
#
# Types:  {% for type in types %} {{ type }}{% end %}
# Scope:   optional, alphanumeric, hyphens, underscores  e.g. (auth), (api)
# Breaking: add '!' before ':' and/or a 'BREAKING CHANGE: ...' footer
#
# --- Examples ---
# feat(auth): add OAuth 2.0 login
#
# Migrated from session-based auth to OAuth 2.0.
# All existing sessions will be invalidated on deploy.
#
# BREAKING CHANGE: session cookies are no longer valid after this release
# Refs: #142
# ---
# Lines starting with '#' are ignored.
# An empty message aborts the commit.
"""


@lru_cache(maxsize=1)
def _compiled() -> CompiledTemplate:
    return compile_template(EDITOR_TEMPLATE, name="editor")


def render_editor_template(types: Optional[Sequence[str]] = None) -> str:
    """
    Рендерит буфер редактора.

    Args:
        types: Типы коммитов для подсказки (по умолчанию все известные)
    """
    names = list(types) if types is not None else CommitType.all_names()
    return _compiled().render({"types": names}, strict=True)


__all__ = ["EDITOR_TEMPLATE", "render_editor_template"]
