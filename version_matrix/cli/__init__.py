"""CLI module for version-matrix-action.

Supports both CLI arguments and environment variables for configuration.
"""

from .main import Config, build_config, cli, evaluate_boolean, main, run

__all__ = [
    "cli",
    "main",
    "run",
    "Config",
    "build_config",
    "evaluate_boolean",
]
