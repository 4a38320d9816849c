"""
YAML loading for BookkeepingConfig.

The packaged ``default.yaml`` carries the default rates and the seed chart
of accounts.  A deployment may point ``load_config`` at its own file; keys
it omits keep the dataclass defaults (not the packaged file's values).
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from bookkeeping_kernel.config.schema import BookkeepingConfig
from bookkeeping_kernel.logging_config import get_logger

logger = get_logger("config.loader")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_config(path: Path | str) -> BookkeepingConfig:
    """
    Load and validate a configuration file.

    Raises:
        FileNotFoundError: if the file does not exist.
        ValueError: if a value fails validation.
    """
    path = Path(path)
    data = load_yaml_file(path)
    config = BookkeepingConfig.from_dict(data)
    logger.info(
        "config_loaded",
        extra={
            "path": str(path),
            "seed_accounts": len(config.seed_chart),
            "voucher_number_width": config.voucher_number_width,
        },
    )
    return config


@lru_cache(maxsize=1)
def get_default_config() -> BookkeepingConfig:
    """The packaged default configuration, loaded once per process."""
    return load_config(DEFAULT_CONFIG_PATH)
