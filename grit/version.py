"""
Версия grit из метаданных установленного дистрибутива.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import metadata

# Имя дистрибутива из [project].name в pyproject.toml
DIST_NAME = "grit-commit"
# Версия для запуска из исходников без установки
UNKNOWN_VERSION = "0.0.0"


@lru_cache(maxsize=1)
def tool_version() -> str:
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return UNKNOWN_VERSION


__all__ = ["tool_version", "DIST_NAME", "UNKNOWN_VERSION"]
