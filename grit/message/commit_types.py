"""
Conventional commit types shared by the whole tool.
"""

from __future__ import annotations

import enum
from typing import List

from ..errors import GritUserError


class InvalidCommitType(GritUserError):
    def __init__(self, value: str):
        allowed = ", ".join(CommitType.all_names())
        super().__init__(f"Invalid commit type '{value}'. Expected one of: {allowed}")
        self.value = value


class CommitType(enum.Enum):
    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERF = "perf"
    TEST = "test"
    BUILD = "build"
    CI = "ci"
    CHORE = "chore"
    REVERT = "revert"

    @classmethod
    def parse(cls, value: str) -> CommitType:
        """Case-insensitive lookup; surrounding whitespace is ignored."""
        normalized = value.strip().lower()
        for commit_type in cls:
            if commit_type.value == normalized:
                return commit_type
        raise InvalidCommitType(value.strip())

    @classmethod
    def all_names(cls) -> List[str]:
        return [commit_type.value for commit_type in cls]


__all__ = ["CommitType", "InvalidCommitType"]
