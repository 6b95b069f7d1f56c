"""Pytest configuration and shared fixtures."""

import json

import pytest

from tests.factories import REPO_A, REPO_B, REPO_C


@pytest.fixture
def sample_table():
    """Fedora x86_64 table with one untagged and two tagged repositories."""
    return {
        "fedora": {
            "x86_64": [REPO_A, REPO_B, REPO_C],
        },
    }


@pytest.fixture
def repo_config_dir(tmp_path):
    """Configuration directory with a fedora and a rhel repository file."""
    repos_dir = tmp_path / "config" / "repositories"
    repos_dir.mkdir(parents=True)

    (repos_dir / "fedora.json").write_text(
        json.dumps(
            {
                "x86_64": [
                    {
                        "name": "fedora",
                        "metalink": "https://mirrors.fedoraproject.org/metalink?repo=fedora-40&arch=x86_64",
                        "gpgkey": "-----BEGIN PGP PUBLIC KEY BLOCK-----",
                        "check_gpg": True,
                    },
                    {
                        "name": "cloud-tools",
                        "baseurl": "https://example.com/cloud/x86_64",
                        "image_type_tags": ["qcow2", "ami"],
                    },
                ],
                "aarch64": [
                    {
                        "name": "fedora",
                        "metalink": "https://mirrors.fedoraproject.org/metalink?repo=fedora-40&arch=aarch64",
                    },
                ],
            }
        )
    )
    (repos_dir / "rhel-9.4.yaml").write_text(
        """
x86_64:
  - name: baseos
    baseurl: https://cdn.example.com/rhel9/x86_64/baseos/os
    rhsm: true
    package_sets: [os, blueprint]
"""
    )
    return tmp_path / "config"
