"""Configuration management for reporegistry.

Handles loading of the YAML application configuration: where repository
definitions are searched for and how logging is set up.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


CONFIG_PATH_ENV = "REPOREGISTRY_CONFIG"
DEFAULT_CONFIG_PATH = "/etc/reporegistry/config.yaml"

# Searched in order, earlier paths take precedence
DEFAULT_REPO_CONFIG_PATHS = [
    "/etc/reporegistry",
    "/usr/share/reporegistry",
]


@dataclass
class RepositoriesConfig:
    """Where repository definitions are loaded from."""

    config_paths: List[str] = field(
        default_factory=lambda: list(DEFAULT_REPO_CONFIG_PATHS)
    )


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    log_dir: str = "/var/log/reporegistry"
    file_logging: bool = False
    console_logging: bool = True


@dataclass
class RegistryConfig:
    """Top-level configuration for reporegistry."""

    repositories: RepositoriesConfig = field(default_factory=RepositoriesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def parse_repositories_config(repos_dict: Dict[str, Any]) -> RepositoriesConfig:
    """Parse the repositories section.

    Args:
        repos_dict: Repositories configuration dictionary

    Returns:
        RepositoriesConfig instance
    """
    paths = repos_dict.get("config_paths")
    if paths is None:
        return RepositoriesConfig()
    if isinstance(paths, str):
        paths = [paths]
    if not isinstance(paths, list):
        raise TypeError(
            f"repositories.config_paths must be a list, got {type(paths).__name__}"
        )
    return RepositoriesConfig(config_paths=[str(p) for p in paths])


def parse_logging_config(logging_dict: Dict[str, Any]) -> LoggingConfig:
    """Parse the logging section."""
    return LoggingConfig(
        level=logging_dict.get("level", "INFO"),
        log_dir=logging_dict.get("log_dir", "/var/log/reporegistry"),
        file_logging=logging_dict.get("file_logging", False),
        console_logging=logging_dict.get("console_logging", True),
    )


def parse_config(config_dict: Dict[str, Any]) -> RegistryConfig:
    """Parse the full configuration dictionary.

    Args:
        config_dict: Full configuration dictionary

    Returns:
        RegistryConfig instance
    """
    return RegistryConfig(
        repositories=parse_repositories_config(config_dict.get("repositories") or {}),
        logging=parse_logging_config(config_dict.get("logging") or {}),
    )


def default_config_path() -> str:
    """Get the configuration file path, honouring the environment override."""
    return os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file (default from environment)

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        TypeError: If the configuration root is not a mapping
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = default_config_path()
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_file.open("r") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise TypeError(
            f"Configuration root must be a mapping, got {type(config).__name__}"
        )

    return _expand_env_vars(config)


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand environment variables in string values."""
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        return os.path.expandvars(obj)
    else:
        return obj


def load_typed_config(config_path: Optional[str] = None) -> RegistryConfig:
    """Load and parse configuration into typed dataclass.

    Args:
        config_path: Path to configuration file (default from environment)

    Returns:
        RegistryConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
    """
    return parse_config(load_config(config_path))
