"""CLI for inspecting the repository registry.

Usage:
    python -m src.repos --list
    python -m src.repos --list fedora
    python -m src.repos fedora x86_64
    python -m src.repos fedora x86_64 --include-tagged
    python -m src.repos fedora x86_64 --image-type qcow2
"""

import argparse
import sys
from typing import List, Optional

import yaml

from ..common.config import RegistryConfig, load_typed_config
from ..common.logger import setup_from_config
from .errors import ConfigLoadError, NotFoundError
from .registry import RepoRegistry

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="python -m src.repos",
        description="Show the repositories configured for a build target",
    )
    parser.add_argument("distro", nargs="?", help="Distribution name")
    parser.add_argument("arch", nargs="?", help="Architecture name")
    parser.add_argument(
        "--config",
        help="Configuration file (default: $REPOREGISTRY_CONFIG or /etc/reporegistry/config.yaml)",
    )
    parser.add_argument(
        "--repo-path",
        action="append",
        dest="repo_paths",
        metavar="DIR",
        help="Repository configuration directory, may be repeated "
        "(overrides the configured search paths)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    selection = parser.add_mutually_exclusive_group()
    selection.add_argument("--image-type", help="Select repositories for an image type")
    selection.add_argument(
        "--include-tagged",
        action="store_true",
        help="Include repositories restricted to specific image types",
    )
    selection.add_argument(
        "--list",
        action="store_true",
        help="List distributions, or architectures of DISTRO",
    )
    return parser


def _load_app_config(config_path: Optional[str]) -> RegistryConfig:
    try:
        return load_typed_config(config_path)
    except FileNotFoundError:
        if config_path is not None:
            raise
        # No configuration installed, run with defaults
        return RegistryConfig()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the registry CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.list and not (args.distro and args.arch):
        parser.print_usage(sys.stderr)
        print("error: DISTRO and ARCH are required unless --list is given", file=sys.stderr)
        return EXIT_ERROR

    try:
        config = _load_app_config(args.config)
    except (OSError, TypeError, yaml.YAMLError) as e:
        print(f"Error: cannot load configuration: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.verbose:
        config.logging.level = "DEBUG"
    try:
        setup_from_config(config.logging, "reporegistry")
    except (OSError, ValueError) as e:
        print(f"Error: cannot set up logging: {e}", file=sys.stderr)
        return EXIT_ERROR

    repo_paths = args.repo_paths or config.repositories.config_paths

    try:
        registry = RepoRegistry.new(repo_paths)
    except ConfigLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    try:
        if args.list:
            names = (
                registry.list_arches(args.distro) if args.distro else registry.list_distros()
            )
            for name in names:
                print(name)
            return EXIT_OK

        if args.image_type:
            repos = registry.repos_by_image_type_name(
                args.distro, args.arch, args.image_type
            )
        else:
            repos = registry.repos_by_arch_name(
                args.distro, args.arch, args.include_tagged
            )
    except NotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND

    print(yaml.safe_dump([repo.to_dict() for repo in repos], sort_keys=False), end="")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
