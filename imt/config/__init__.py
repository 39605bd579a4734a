"""
Runtime Configuration Module

Provides configuration loading for trees built from settings.
"""

from .runtime import (
    DEFAULT_ZERO_VALUE,
    TreeConfig,
    get_default_config_template,
    load_config,
)

__all__ = [
    "DEFAULT_ZERO_VALUE",
    "TreeConfig",
    "get_default_config_template",
    "load_config",
]
