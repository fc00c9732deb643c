"""Config loading."""

from capital_path.config.loader import (
    compute_config_hash,
    load_config,
    parse_config,
    serialize_config,
)

__all__ = [
    "compute_config_hash",
    "load_config",
    "parse_config",
    "serialize_config",
]
