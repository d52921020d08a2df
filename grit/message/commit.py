"""
Форматирование сообщения коммита.

Структурированные поля коммита превращаются в контекст рендеринга
и проходят через шаблон сообщения (встроенный или пользовательский).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import GritUserError
from ..template import CompiledTemplate, compile_template
from .commit_types import CommitType

BREAKING_KEYS = ("BREAKING CHANGE", "BREAKING-CHANGE")
# Footer-ссылки на задачи, значение обязано содержать "#"
ISSUE_KEYS = ("Refs", "Closes", "Fixes")
MAX_DESCRIPTION_LENGTH = 72

# Область: буквы в нижнем регистре, цифры, "-" и "_"
SCOPE_PATTERN = re.compile(r"[a-z0-9_-]+")

COMMIT_MESSAGE_TEMPLATE = (
    "{{ type }}{% if scope %}({{ scope }}){% end %}{% if breaking %}!{% end %}: {{ description }}"
    "{% if body %}\n\n{{ body }}{% end %}"
    "{% if footers %}\n\n{% for footer in footers %}{{ footer.key }}: {{ footer.value }}\n{% end %}{% end %}"
)


class InvalidFooter(GritUserError):
    def __init__(self, raw: str):
        super().__init__(f"Invalid footer {raw!r}. Expected 'Key: value'")
        self.raw = raw


class InvalidCommit(GritUserError):
    """Commit fields violate a conventional commit rule."""
    pass


@dataclass(frozen=True)
class Footer:
    """Footer вида 'Key: value' (Refs: #123, BREAKING CHANGE: ...)."""
    key: str
    value: str

    @classmethod
    def parse(cls, raw: str) -> Footer:
        key, sep, value = raw.partition(":")
        if not sep or not key.strip() or not value.strip():
            raise InvalidFooter(raw)
        return cls(key=key.strip(), value=value.strip())

    @property
    def is_breaking(self) -> bool:
        return self.key in BREAKING_KEYS


@dataclass(frozen=True)
class CommitFields:
    """
    Поля сообщения коммита, собранные из CLI, промптов или редактора.
    """
    type: CommitType
    description: str
    scope: Optional[str] = None
    breaking: bool = False
    body: Optional[str] = None
    footers: List[Footer] = field(default_factory=list)

    def validate(self) -> None:
        """
        Проверяет поля по правилам conventional commits.

        Raises:
            InvalidCommit: При первом нарушенном правиле
        """
        description = self.description.strip()
        if not description:
            raise InvalidCommit("Description must not be empty")
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise InvalidCommit(
                f"Description is {len(description)} characters long, "
                f"maximum is {MAX_DESCRIPTION_LENGTH}"
            )

        if self.scope is not None and not SCOPE_PATTERN.fullmatch(self.scope.strip()):
            raise InvalidCommit(
                f"Invalid scope {self.scope!r}: use lowercase letters, digits, '-' and '_'"
            )

        if self.body is not None and not self.body.strip():
            raise InvalidCommit("Body must not be empty when given")

        seen = set()
        for footer in self.footers:
            if not footer.key.strip() or not footer.value.strip():
                raise InvalidFooter(f"{footer.key}: {footer.value}")
            if footer.key in seen:
                raise InvalidCommit(f"Duplicate footer '{footer.key}'")
            seen.add(footer.key)
            if footer.key in ISSUE_KEYS and "#" not in footer.value:
                raise InvalidCommit(
                    f"Footer '{footer.key}' must reference an issue with '#', got {footer.value!r}"
                )

        has_breaking_footer = any(f.is_breaking for f in self.footers)
        if self.breaking and not has_breaking_footer:
            raise InvalidCommit("Breaking change '!' requires a 'BREAKING CHANGE: ...' footer")
        if has_breaking_footer and not self.breaking:
            raise InvalidCommit("'BREAKING CHANGE' footer requires '!' in the header")

    def to_context(self) -> Dict[str, Any]:
        """
        Контекст рендеринга. Footer'ы BREAKING CHANGE идут первыми,
        порядок остальных сохраняется.
        """
        ordered = [f for f in self.footers if f.is_breaking] + [f for f in self.footers if not f.is_breaking]
        return {
            "type": self.type.value,
            "scope": (self.scope or "").strip() or None,
            "breaking": self.breaking,
            "description": self.description.strip(),
            "body": (self.body or "").strip() or None,
            "footers": [{"key": f.key, "value": f.value} for f in ordered],
        }


def format_commit_message(
    fields: CommitFields,
    template: Optional[CompiledTemplate] = None,
    strict: bool = False,
) -> str:
    """
    Рендерит сообщение коммита.

    Args:
        fields: Поля коммита
        template: Пользовательский шаблон (по умолчанию COMMIT_MESSAGE_TEMPLATE)
        strict: Политика для неизвестных переменных

    Returns:
        Сообщение без завершающих пробельных символов

    Raises:
        InvalidCommit: Поля не проходят validate()
    """
    fields.validate()
    compiled = template or compile_template(COMMIT_MESSAGE_TEMPLATE, name="commit-message")
    return compiled.render(fields.to_context(), strict=strict).rstrip()


__all__ = [
    "COMMIT_MESSAGE_TEMPLATE",
    "BREAKING_KEYS",
    "Footer",
    "InvalidFooter",
    "InvalidCommit",
    "CommitFields",
    "ISSUE_KEYS",
    "MAX_DESCRIPTION_LENGTH",
    "format_commit_message",
]
