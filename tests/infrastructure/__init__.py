"""
Unified test infrastructure for grit.

Modules:
- file_utils: Utilities for creating files and directories
- config_builders: .grit.yaml builders
- cli_utils: Running the CLI in a subprocess
"""

from .file_utils import write
from .config_builders import create_grit_yaml
from .cli_utils import run_cli

__all__ = [
    # File utilities
    "write",

    # Config builders
    "create_grit_yaml",

    # CLI utilities
    "run_cli",
]
