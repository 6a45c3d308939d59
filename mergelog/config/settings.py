"""Configuration management for mergelog."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .taxonomy import Taxonomy


DEFAULT_API_URL = "https://api.github.com"

logger = logging.getLogger(__name__)


class Config(BaseSettings):
    """Configuration settings for mergelog."""

    model_config = SettingsConfigDict(env_prefix="MERGELOG_", case_sensitive=False)

    github_api_url: str = DEFAULT_API_URL
    github_token: Optional[str] = None
    org: str = "AvaloniaUI"
    repo: str = "Avalonia"
    workers: int = Field(default=4, ge=1)
    taxonomy: Taxonomy = Field(default_factory=Taxonomy)
    config_file: Optional[str] = None

    @field_validator('github_api_url')
    @classmethod
    def normalize_api_url(cls, v):
        """Ensure the API URL has a protocol and no trailing slash."""
        if v and not v.startswith(('http://', 'https://')):
            v = f"https://{v}"
        return v.rstrip('/')


def load_json_config(config_path: str) -> dict:
    """Load configuration from JSON file.

    Args:
        config_path: Path to JSON configuration file

    Returns:
        Configuration dictionary
    """
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        raise ValueError(f"Error loading config file {config_path}: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"Error loading config file {config_path}: expected a JSON object")
    return data


def find_config_file() -> Optional[str]:
    """Find configuration file in common locations.

    Returns:
        Path to config file or None if not found
    """
    search_paths = [
        "mergelog.json",
        ".mergelog.json",
        "~/.mergelog.json",
        "~/.config/mergelog/config.json",
    ]

    for path_str in search_paths:
        path = Path(path_str).expanduser()
        if path.exists() and path.is_file():
            return str(path)

    return None


def get_config(config_file: Optional[str] = None) -> Config:
    """Load configuration from environment variables and/or JSON file.

    An explicitly named config file must load and validate; a discovered
    one that fails either is skipped with a warning.

    Args:
        config_file: Optional path to JSON config file

    Returns:
        Configuration object
    """
    config_data = {}

    if config_file:
        config_data.update(load_json_config(config_file))
        config_data['config_file'] = config_file
    else:
        found = find_config_file()
        if found:
            try:
                file_data = load_json_config(found)
                # pydantic's ValidationError is a ValueError
                Config(**file_data)
            except ValueError as e:
                logger.warning(f"Ignoring config file {found}: {e}")
            else:
                config_data.update(file_data)
                config_data['config_file'] = found

    # Environment variables override JSON config
    env_config = {
        'github_api_url': os.getenv('MERGELOG_GITHUB_API_URL'),
        'github_token': os.getenv('MERGELOG_GITHUB_TOKEN'),
        'org': os.getenv('MERGELOG_ORG'),
        'repo': os.getenv('MERGELOG_REPO'),
    }
    env_config = {k: v for k, v in env_config.items() if v is not None}
    config_data.update(env_config)

    return Config(**config_data)


def create_sample_config(path: str = "mergelog.json") -> None:
    """Create a sample configuration file.

    Args:
        path: Path where to create the sample config file
    """
    sample_config = {
        "github_api_url": DEFAULT_API_URL,
        "github_token": "your-github-token-here",
        "org": "AvaloniaUI",
        "repo": "Avalonia",
        "workers": 4,
        "taxonomy": Taxonomy().model_dump(mode='json'),
    }

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(sample_config, f, indent=2)

    logger.info(f"Sample configuration file created at: {path}")
