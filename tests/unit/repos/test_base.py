"""Tests for repository base data structures."""

from dataclasses import FrozenInstanceError

import pytest

from src.repos.base import RepoConfig, freeze_table
from src.repos.errors import (
    ConfigLoadError,
    InvalidReferenceError,
    NotFoundError,
    RepoRegistryError,
)
from tests.factories import create_repo


class TestRepoConfig:
    """Tests for RepoConfig class."""

    def test_untagged_applies_to_everything(self):
        """Test that an untagged repository applies to any image type."""
        repo = create_repo("baseos")

        assert not repo.is_tagged
        assert repo.applies_to("qcow2")
        assert repo.applies_to("no-such-image-type")

    def test_tagged_applies_to_listed(self):
        """Test that a tagged repository applies only to its tags."""
        repo = create_repo("cloud", tags=["qcow2", "ami"])

        assert repo.is_tagged
        assert repo.applies_to("ami")
        assert not repo.applies_to("vhd")
        assert not repo.applies_to("AMI")

    def test_immutable(self):
        """Test that repository definitions cannot be changed."""
        repo = create_repo("baseos")

        with pytest.raises(FrozenInstanceError):
            repo.name = "other"

    def test_hash_stable(self):
        """Test that equal sources give equal hashes."""
        first = create_repo("baseos", gpgkeys=("KEY",))
        second = create_repo("baseos", gpgkeys=("KEY",))

        assert first.hash() == second.hash()
        assert len(first.hash()) == 64

    def test_hash_ignores_name_and_tags(self):
        """Test that only the package source contributes to the hash."""
        repo = RepoConfig(name="a", baseurls=("https://example.com",))
        renamed = RepoConfig(
            name="b", baseurls=("https://example.com",), image_type_tags=("ami",)
        )

        assert repo.hash() == renamed.hash()

    def test_hash_differs_by_source(self):
        """Test that different URLs give different hashes."""
        assert create_repo("a").hash() != create_repo("b").hash()

    def test_to_dict_omits_unset(self):
        """Test dictionary conversion."""
        repo = RepoConfig(
            name="updates",
            metalink="https://example.com/metalink",
            check_gpg=False,
            image_type_tags=("qcow2",),
        )

        assert repo.to_dict() == {
            "name": "updates",
            "metalink": "https://example.com/metalink",
            "check_gpg": False,
            "image_type_tags": ["qcow2"],
        }

    def test_to_dict_rhsm(self):
        """Test that rhsm is omitted when unset and kept when set."""
        assert "rhsm" not in create_repo("baseos").to_dict()
        assert create_repo("baseos", rhsm=True).to_dict()["rhsm"] is True
        assert create_repo("baseos", rhsm=False).to_dict()["rhsm"] is False


class TestFreezeTable:
    """Tests for freeze_table."""

    def test_preserves_order(self):
        """Test that repository order is kept."""
        repos = [create_repo(name) for name in ("c", "a", "b")]

        table = freeze_table({"fedora": {"x86_64": repos}})

        assert [r.name for r in table["fedora"]["x86_64"]] == ["c", "a", "b"]

    def test_copies_input(self):
        """Test that the frozen table is detached from its source."""
        source = {"fedora": {"x86_64": [create_repo("a")]}}

        table = freeze_table(source)
        source["fedora"]["x86_64"].append(create_repo("b"))
        source["fedora"]["aarch64"] = []

        assert len(table["fedora"]["x86_64"]) == 1
        assert "aarch64" not in table["fedora"]

    def test_read_only(self):
        """Test that the frozen table rejects assignment."""
        table = freeze_table({"fedora": {"x86_64": []}})

        with pytest.raises(TypeError):
            table["rhel"] = {}
        with pytest.raises(TypeError):
            table["fedora"]["x86_64"] = []


class TestErrors:
    """Tests for registry exceptions."""

    def test_hierarchy(self):
        """Test that all errors share a common base."""
        assert issubclass(ConfigLoadError, RepoRegistryError)
        assert issubclass(NotFoundError, RepoRegistryError)
        assert issubclass(InvalidReferenceError, RepoRegistryError)
        assert issubclass(NotFoundError, LookupError)
        assert not issubclass(InvalidReferenceError, NotFoundError)

    def test_not_found_message(self):
        """Test NotFoundError message and attributes."""
        error = NotFoundError("fedora", "aarch64")

        assert str(error) == (
            "there are no repositories for distribution 'fedora' "
            "and architecture 'aarch64'"
        )
        assert error.distro == "fedora"
        assert error.arch == "aarch64"

    def test_not_found_distro_only(self):
        """Test NotFoundError for a whole distribution."""
        error = NotFoundError("centos")

        assert str(error) == "there are no repositories for distribution 'centos'"
        assert error.arch is None

    def test_config_load_error_path(self, tmp_path):
        """Test that ConfigLoadError keeps the offending path."""
        error = ConfigLoadError("broken", tmp_path / "fedora.json")

        assert error.path == str(tmp_path / "fedora.json")
        assert ConfigLoadError("broken").path is None
