"""Configuration module."""

from .settings import (
    Config,
    get_config,
    load_json_config,
    find_config_file,
    create_sample_config,
)
from .taxonomy import LabelRule, Taxonomy

__all__ = [
    "Config",
    "get_config",
    "load_json_config",
    "find_config_file",
    "create_sample_config",
    "LabelRule",
    "Taxonomy",
]
