from __future__ import annotations

from .load import CONFIG_FILENAME, ConfigError, config_path, load_config
from .model import GritConfig, TemplateCfg

__all__ = ["load_config", "config_path", "ConfigError", "CONFIG_FILENAME", "GritConfig", "TemplateCfg"]
