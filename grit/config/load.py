"""
Загрузчик конфигурации .grit.yaml из корня репозитория.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import GritUserError
from ..message.commit_types import CommitType, InvalidCommitType
from .model import GritConfig, TemplateCfg

CONFIG_FILENAME = ".grit.yaml"

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


class ConfigError(GritUserError):
    """Configuration file is malformed or contains invalid values."""
    pass


def config_path(root: Path) -> Path:
    return root / CONFIG_FILENAME


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Failed to parse {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def _parse_types(raw: Any, path: Path) -> List[str]:
    if not isinstance(raw, list) or not raw:
        raise ConfigError(f"{path}: 'types' must be a non-empty list")
    types: List[str] = []
    for item in raw:
        if not isinstance(item, str):
            raise ConfigError(f"{path}: 'types' entries must be strings, got {item!r}")
        try:
            types.append(CommitType.parse(item).value)
        except InvalidCommitType as e:
            raise ConfigError(f"{path}: {e}") from e
    return types


def _parse_template(raw: Any, root: Path, path: Path) -> TemplateCfg:
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: 'template' must be a mapping")

    strict = raw.get("strict", False)
    if not isinstance(strict, bool):
        raise ConfigError(f"{path}: 'template.strict' must be a boolean")

    message: Optional[Path] = None
    message_raw = raw.get("message")
    if message_raw is not None:
        if not isinstance(message_raw, str) or not message_raw.strip():
            raise ConfigError(f"{path}: 'template.message' must be a path string")
        message = (root / message_raw).resolve()
        if not message.is_file():
            raise ConfigError(f"{path}: message template not found: {message}")

    return TemplateCfg(strict=strict, message=message)


def load_config(root: Path) -> GritConfig:
    """
    Загружает конфигурацию из <root>/.grit.yaml.

    Отсутствующий файл означает конфигурацию по умолчанию.

    Raises:
        ConfigError: При некорректном содержимом файла
    """
    path = config_path(root)
    raw = _read_yaml_map(path)
    if not raw:
        logger.debug("No config at %s, using defaults", path)
        return GritConfig()

    unknown = sorted(set(raw) - {"types", "template"})
    if unknown:
        raise ConfigError(f"{path}: unknown keys: {', '.join(unknown)}")

    types = _parse_types(raw["types"], path) if "types" in raw else CommitType.all_names()
    template = _parse_template(raw["template"], root, path) if "template" in raw else TemplateCfg()

    logger.debug("Loaded config %s: %d types, strict=%s", path, len(types), template.strict)
    return GritConfig(types=types, template=template)


__all__ = ["load_config", "config_path", "ConfigError", "CONFIG_FILENAME"]
