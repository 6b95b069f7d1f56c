"""Base data structures and protocols for the repository registry.

Defines the repository definition record, the distro/arch table type and
the narrow descriptor protocols the registry needs from a distribution
model graph.
"""

import hashlib
import json
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence, Tuple


@dataclass(frozen=True)
class RepoConfig:
    """Definition of a single package repository."""

    name: str = ""
    id: str = ""
    baseurls: Tuple[str, ...] = ()
    metalink: str = ""
    mirrorlist: str = ""
    gpgkeys: Tuple[str, ...] = ()
    check_gpg: Optional[bool] = None
    check_repo_gpg: Optional[bool] = None
    ignore_ssl: Optional[bool] = None
    rhsm: Optional[bool] = None
    metadata_expire: str = ""
    module_hotfixes: Optional[bool] = None
    enabled: Optional[bool] = None
    priority: Optional[int] = None
    image_type_tags: Tuple[str, ...] = ()  # empty means "all image types"
    package_sets: Tuple[str, ...] = ()
    sslcacert: str = ""
    sslclientkey: str = ""
    sslclientcert: str = ""

    @property
    def is_tagged(self) -> bool:
        """Check if the repository is restricted to specific image types."""
        return len(self.image_type_tags) > 0

    def applies_to(self, image_type: str) -> bool:
        """Check if the repository should be used for an image type name.

        Untagged repositories apply to every image type. Tagged ones only
        apply to image types listed in their tags (exact match).
        """
        if not self.image_type_tags:
            return True
        return image_type in self.image_type_tags

    def hash(self) -> str:
        """Get a stable digest identifying the package source."""
        ident = {
            "baseurls": list(self.baseurls),
            "metalink": self.metalink,
            "mirrorlist": self.mirrorlist,
            "gpgkeys": list(self.gpgkeys),
            "check_gpg": self.check_gpg,
            "check_repo_gpg": self.check_repo_gpg,
            "ignore_ssl": self.ignore_ssl,
            "metadata_expire": self.metadata_expire,
            "rhsm": self.rhsm,
            "module_hotfixes": self.module_hotfixes,
            "sslcacert": self.sslcacert,
            "sslclientkey": self.sslclientkey,
            "sslclientcert": self.sslclientcert,
        }
        payload = json.dumps(ident, sort_keys=True).encode("utf-8")
        return hashlib.sha256(payload).hexdigest()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary, omitting unset fields."""
        result: Dict[str, Any] = {}
        for key, value in self.__dict__.items():
            if value is None or value == "" or value == ():
                continue
            if isinstance(value, tuple):
                value = list(value)
            result[key] = value
        return result


# distro name -> arch name -> ordered repositories
DistrosRepoConfigs = Mapping[str, Mapping[str, Sequence[RepoConfig]]]


def freeze_table(table: DistrosRepoConfigs) -> DistrosRepoConfigs:
    """Copy a distro/arch table into read-only mappings of tuples.

    Args:
        table: Nested mapping of distro -> arch -> repositories

    Returns:
        Read-only copy of the table preserving repository order
    """
    frozen = {}
    for distro, arches in table.items():
        frozen[distro] = MappingProxyType(
            {arch: tuple(repos) for arch, repos in arches.items()}
        )
    return MappingProxyType(frozen)


class Distro(Protocol):
    """Anything that names a distribution."""

    @property
    def name(self) -> str: ...


class Arch(Protocol):
    """Architecture of a distribution."""

    @property
    def name(self) -> str: ...

    @property
    def distro(self) -> Optional[Distro]: ...


class ImageType(Protocol):
    """Image type buildable for an architecture."""

    @property
    def name(self) -> str: ...

    @property
    def arch(self) -> Optional[Arch]: ...
