"""Registry of distribution and architecture specific repositories.

Image types are only considered for repositories that carry image type
tags. Untagged repositories apply to every image type of their distro and
architecture.
"""

from pathlib import Path
from typing import Iterable, List, Tuple, Union

from ..common.logger import get_logger
from .base import Arch, DistrosRepoConfigs, ImageType, RepoConfig, freeze_table
from .errors import InvalidReferenceError, NotFoundError
from .loader import load_all_repositories

logger = get_logger("reporegistry.registry")


class RepoRegistry:
    """Read-only index of repositories by distro and architecture.

    The table is set once at construction and never modified, so a
    registry can be shared between threads without locking.
    """

    def __init__(self, repos: DistrosRepoConfigs):
        self._repos = freeze_table(repos)
        logger.debug(f"Repository registry created for {len(self._repos)} distributions")

    @classmethod
    def new(cls, config_paths: Iterable[Union[str, Path]]) -> "RepoRegistry":
        """Create a registry from repository configuration directories.

        Args:
            config_paths: Configuration directories to load from

        Returns:
            RepoRegistry instance

        Raises:
            ConfigLoadError: If any repository file is unreadable or malformed
        """
        return cls(load_all_repositories(config_paths))

    @classmethod
    def from_table(cls, repos: DistrosRepoConfigs) -> "RepoRegistry":
        """Create a registry from an already built distro/arch table."""
        return cls(repos)

    def repos_by_image_type(self, image_type: ImageType) -> List[RepoConfig]:
        """Get repositories to use for building an image type.

        Args:
            image_type: Image type whose architecture and distribution
                are used for the lookup

        Returns:
            Ordered list of repositories

        Raises:
            InvalidReferenceError: If the image type has no architecture or
                its architecture has no distribution
            NotFoundError: If no repositories exist for the distro/arch
        """
        arch = image_type.arch
        if arch is None:
            raise InvalidReferenceError(
                "there is no architecture associated with the provided image type"
            )
        distro = arch.distro
        if distro is None:
            raise InvalidReferenceError(
                "there is no distribution associated with the architecture "
                "associated with the provided image type"
            )
        return self.repos_by_image_type_name(distro.name, arch.name, image_type.name)

    def repos_by_image_type_name(
        self, distro: str, arch: str, image_type: str
    ) -> List[RepoConfig]:
        """Get repositories to use for building an image type by name.

        All untagged repositories of the distro/arch are returned, plus
        those tagged with the image type name. The name is not checked
        against the image types the architecture actually defines.

        Raises:
            NotFoundError: If no repositories exist for the distro/arch
        """
        arch_repos = self.repos_by_arch_name(distro, arch, include_tagged=True)
        return [repo for repo in arch_repos if repo.applies_to(image_type)]

    def repos_by_arch(self, arch: Arch, include_tagged: bool) -> List[RepoConfig]:
        """Get repositories for an architecture.

        Args:
            arch: Architecture whose distribution is used for the lookup
            include_tagged: Also return repositories with image type tags

        Returns:
            Ordered list of repositories

        Raises:
            InvalidReferenceError: If the architecture has no distribution
            NotFoundError: If no repositories exist for the distro/arch
        """
        distro = arch.distro
        if distro is None:
            raise InvalidReferenceError(
                "there is no distribution associated with the provided architecture"
            )
        return self.repos_by_arch_name(distro.name, arch.name, include_tagged)

    def repos_by_arch_name(
        self, distro: str, arch: str, include_tagged: bool
    ) -> List[RepoConfig]:
        """Get repositories for a distro and architecture name.

        Untagged repositories are always returned. Tagged repositories are
        returned only if include_tagged is set. Order is preserved.

        Raises:
            NotFoundError: If no repositories exist for the distro/arch
        """
        arch_repos, found = self.distro_has_repos(distro, arch)
        if not found:
            raise NotFoundError(distro, arch)

        return [repo for repo in arch_repos if include_tagged or not repo.is_tagged]

    def distro_has_repos(self, distro: str, arch: str) -> Tuple[Tuple[RepoConfig, ...], bool]:
        """Get the stored repositories of a distro/arch and a found flag.

        Returns:
            Tuple of (repositories, found). Repositories is empty when
            the distro or the architecture is unknown.
        """
        arch_repos = self._repos.get(distro)
        if arch_repos is None or arch not in arch_repos:
            return (), False
        return arch_repos[arch], True

    def list_distros(self) -> List[str]:
        """List distributions with repository definitions."""
        return sorted(self._repos)

    def list_arches(self, distro: str) -> List[str]:
        """List architectures of a distribution.

        Raises:
            NotFoundError: If the distribution is unknown
        """
        if distro not in self._repos:
            raise NotFoundError(distro)
        return sorted(self._repos[distro])
