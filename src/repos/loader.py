"""Loading of repository definitions from configuration directories.

Each configuration path may contain a ``repositories`` directory with one
file per distribution, named ``<distro>.json`` (or ``.yaml``/``.yml``).
A file maps architecture names to ordered lists of repositories::

    {
        "x86_64": [
            {"name": "baseos", "baseurl": "https://example.com/baseos"},
            {"name": "extras", "metalink": "https://example.com/metalink",
             "image_type_tags": ["qcow2"]}
        ]
    }
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import yaml

from ..common.logger import get_logger
from .base import DistrosRepoConfigs, RepoConfig, freeze_table
from .errors import ConfigLoadError

logger = get_logger("reporegistry.loader")

REPOSITORIES_DIR = "repositories"
REPO_FILE_SUFFIXES = (".json", ".yaml", ".yml")


def _string_list(value: Any, key: str, path: Optional[Path]) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigLoadError(f"'{key}' must be a list of strings", path)
    return tuple(value)


def _string(repo_dict: Dict[str, Any], key: str, path: Optional[Path]) -> str:
    value = repo_dict.get(key, "")
    if not isinstance(value, str):
        raise ConfigLoadError(
            f"'{key}' must be a string, got {type(value).__name__}", path
        )
    return value


def _optional_bool(
    repo_dict: Dict[str, Any], key: str, path: Optional[Path]
) -> Optional[bool]:
    value = repo_dict.get(key)
    if value is not None and not isinstance(value, bool):
        raise ConfigLoadError(
            f"'{key}' must be a boolean, got {type(value).__name__}", path
        )
    return value


def _optional_int(
    repo_dict: Dict[str, Any], key: str, path: Optional[Path]
) -> Optional[int]:
    value = repo_dict.get(key)
    # bool is an int subclass but not a valid priority
    if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
        raise ConfigLoadError(
            f"'{key}' must be an integer, got {type(value).__name__}", path
        )
    return value


def parse_repo_config(
    repo_dict: Dict[str, Any], path: Optional[Path] = None
) -> RepoConfig:
    """Parse a repository definition dictionary.

    Args:
        repo_dict: Repository definition as stored on disk
        path: File the definition was read from, for error reporting

    Returns:
        RepoConfig instance

    Raises:
        ConfigLoadError: If the definition is malformed
    """
    if not isinstance(repo_dict, dict):
        raise ConfigLoadError(
            f"repository definition must be a mapping, got {type(repo_dict).__name__}",
            path,
        )

    name = _string(repo_dict, "name", path)
    repo_id = _string(repo_dict, "id", path)
    baseurls = _string_list(repo_dict.get("baseurl"), "baseurl", path)
    metalink = _string(repo_dict, "metalink", path)
    mirrorlist = _string(repo_dict, "mirrorlist", path)
    if not (baseurls or metalink or mirrorlist):
        name = name or repo_id or "<unnamed>"
        raise ConfigLoadError(
            f"repository '{name}' must define one of baseurl, metalink or mirrorlist",
            path,
        )

    # A single gpgkey is listed ahead of any additional keys
    gpgkeys = _string_list(repo_dict.get("gpgkey"), "gpgkey", path)
    gpgkeys += _string_list(repo_dict.get("gpgkeys"), "gpgkeys", path)

    return RepoConfig(
        name=name,
        id=repo_id,
        baseurls=baseurls,
        metalink=metalink,
        mirrorlist=mirrorlist,
        gpgkeys=gpgkeys,
        check_gpg=_optional_bool(repo_dict, "check_gpg", path),
        check_repo_gpg=_optional_bool(repo_dict, "check_repo_gpg", path),
        ignore_ssl=_optional_bool(repo_dict, "ignore_ssl", path),
        rhsm=_optional_bool(repo_dict, "rhsm", path),
        metadata_expire=_string(repo_dict, "metadata_expire", path),
        module_hotfixes=_optional_bool(repo_dict, "module_hotfixes", path),
        enabled=_optional_bool(repo_dict, "enabled", path),
        priority=_optional_int(repo_dict, "priority", path),
        image_type_tags=_string_list(
            repo_dict.get("image_type_tags"), "image_type_tags", path
        ),
        package_sets=_string_list(repo_dict.get("package_sets"), "package_sets", path),
        sslcacert=_string(repo_dict, "sslcacert", path),
        sslclientkey=_string(repo_dict, "sslclientkey", path),
        sslclientcert=_string(repo_dict, "sslclientcert", path),
    )


def _read_repo_file(path: Path) -> Any:
    """Parse a repository file, choosing the parser by suffix."""
    try:
        with path.open("r", encoding="utf-8") as f:
            if path.suffix == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except OSError as e:
        raise ConfigLoadError(f"cannot read repository file {path}: {e}", path) from e
    except (json.JSONDecodeError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigLoadError(f"cannot parse repository file {path}: {e}", path) from e


def load_repositories_from_file(
    path: Union[str, Path],
) -> Dict[str, List[RepoConfig]]:
    """Load the repositories of a single distribution.

    ``.json`` files are read with the JSON parser, ``.yaml``/``.yml``
    files with the YAML parser.

    Args:
        path: Path to a distro repository file

    Returns:
        Dictionary mapping architecture name to ordered repositories

    Raises:
        ConfigLoadError: If the file is unreadable or malformed
    """
    path = Path(path)
    data = _read_repo_file(path)

    if not isinstance(data, dict):
        raise ConfigLoadError(
            f"repository file {path} must map architectures to repositories, "
            f"got {type(data).__name__}",
            path,
        )

    arch_repos: Dict[str, List[RepoConfig]] = {}
    for arch, repos in data.items():
        if not isinstance(repos, list):
            raise ConfigLoadError(
                f"repositories for architecture '{arch}' must be a list", path
            )
        arch_repos[str(arch)] = [parse_repo_config(repo, path) for repo in repos]

    return arch_repos


def _distro_files(repos_dir: Path) -> List[Tuple[str, Path]]:
    """List (distro, file) pairs found in a repositories directory."""
    try:
        entries = sorted(repos_dir.iterdir())
    except OSError as e:
        raise ConfigLoadError(
            f"cannot list repository directory {repos_dir}: {e}", repos_dir
        ) from e

    files = []
    for entry in entries:
        if entry.is_dir() or entry.suffix not in REPO_FILE_SUFFIXES:
            continue
        files.append((entry.stem, entry))
    return files


def load_all_repositories(config_paths: Iterable[Union[str, Path]]) -> DistrosRepoConfigs:
    """Load repository definitions of all distributions.

    Paths are searched in order and the first definition of a distribution
    wins. Paths without a repositories directory are skipped.

    Args:
        config_paths: Configuration directories to search

    Returns:
        Read-only table mapping distro -> arch -> repositories

    Raises:
        ConfigLoadError: If any repository file is unreadable or malformed
    """
    table: Dict[str, Dict[str, List[RepoConfig]]] = {}

    for config_path in config_paths:
        repos_dir = Path(config_path) / REPOSITORIES_DIR
        if not repos_dir.is_dir():
            logger.debug(f"No repository directory in {config_path}")
            continue

        for distro, repo_file in _distro_files(repos_dir):
            if distro in table:
                logger.debug(f"Skipping {repo_file}, '{distro}' already loaded")
                continue
            table[distro] = load_repositories_from_file(repo_file)
            logger.info(f"Loaded repository configuration file: {repo_file}")

    return freeze_table(table)
