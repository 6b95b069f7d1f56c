"""Exceptions raised by the repository registry."""

from pathlib import Path
from typing import Optional, Union


class RepoRegistryError(Exception):
    """Base class for repository registry errors."""


class ConfigLoadError(RepoRegistryError):
    """Raised when repository configuration cannot be read or parsed."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = str(path) if path is not None else None


class NotFoundError(RepoRegistryError, LookupError):
    """Raised when no repositories are defined for a distro/arch pair."""

    def __init__(self, distro: str, arch: Optional[str] = None):
        if arch is None:
            message = f"there are no repositories for distribution '{distro}'"
        else:
            message = (
                f"there are no repositories for distribution '{distro}' "
                f"and architecture '{arch}'"
            )
        super().__init__(message)
        self.distro = distro
        self.arch = arch


class InvalidReferenceError(RepoRegistryError):
    """Raised when a descriptor is missing a required parent reference."""
