"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from GritUserError.

Programming errors and bugs should NOT inherit from GritUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations


class GritUserError(Exception):
    """
    Base class for all user-facing errors in grit.

    These errors indicate problems that the user can fix:
    broken templates, invalid configuration, unknown commit types, etc.
    """
    pass


__all__ = ["GritUserError"]
