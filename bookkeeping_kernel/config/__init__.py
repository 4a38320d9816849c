"""Configuration: schema dataclasses and YAML loading."""

from bookkeeping_kernel.config.loader import (
    DEFAULT_CONFIG_PATH,
    get_default_config,
    load_config,
)
from bookkeeping_kernel.config.schema import BookkeepingConfig, SeedAccount

__all__ = [
    "BookkeepingConfig",
    "SeedAccount",
    "DEFAULT_CONFIG_PATH",
    "get_default_config",
    "load_config",
]
