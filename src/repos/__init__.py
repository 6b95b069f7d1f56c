"""Distribution and architecture specific package repositories.

Loads repository definitions from configuration directories and selects
the repositories to use for a build target (distribution, architecture
and image type).
"""

from .base import (
    RepoConfig,
    DistrosRepoConfigs,
    Distro,
    Arch,
    ImageType,
    freeze_table,
)
from .errors import (
    RepoRegistryError,
    ConfigLoadError,
    NotFoundError,
    InvalidReferenceError,
)
from .loader import (
    load_all_repositories,
    load_repositories_from_file,
    parse_repo_config,
)
from .registry import RepoRegistry

__all__ = [
    "RepoConfig",
    "DistrosRepoConfigs",
    "Distro",
    "Arch",
    "ImageType",
    "freeze_table",
    "RepoRegistryError",
    "ConfigLoadError",
    "NotFoundError",
    "InvalidReferenceError",
    "load_all_repositories",
    "load_repositories_from_file",
    "parse_repo_config",
    "RepoRegistry",
]
