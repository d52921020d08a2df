from __future__ import annotations

from .comments import annotate_with_error, strip_comments
from .commit import COMMIT_MESSAGE_TEMPLATE, CommitFields, Footer, InvalidCommit, InvalidFooter, format_commit_message
from .commit_types import CommitType, InvalidCommitType
from .editor_template import EDITOR_TEMPLATE, render_editor_template

__all__ = [
    "strip_comments",
    "annotate_with_error",
    "COMMIT_MESSAGE_TEMPLATE",
    "CommitFields",
    "Footer",
    "InvalidFooter",
    "InvalidCommit",
    "format_commit_message",
    "CommitType",
    "InvalidCommitType",
    "EDITOR_TEMPLATE",
    "render_editor_template",
]
