"""Tests for virtual-to-real path translation."""

import os

import pytest

from passthroughfs import MountConfig, resolve


class TestResolve:
    def test_root_maps_to_target_root(self):
        assert resolve("/data", "/") == "/data"

    @pytest.mark.parametrize("virtual,real", [
        ("/notes.txt", "/data/notes.txt"),
        ("/project-1/main.py", "/data/project-1/main.py"),
        ("//double", "/data/double"),
    ])
    def test_joins_relative_to_slash(self, virtual, real):
        assert resolve("/data", virtual) == real

    def test_leading_slash_is_not_host_root(self):
        assert resolve("/data", "/etc/passwd") == "/data/etc/passwd"

    def test_idempotent_and_touches_nothing(self, tmp_path):
        root = str(tmp_path / "does-not-exist")
        assert resolve(root, "/a/b") == resolve(root, "/a/b")
        assert not os.path.exists(root)


class TestMountConfig:
    def test_relative_target_anchored_to_startup_cwd(self):
        config = MountConfig.from_target("nfs", cwd="/srv")
        assert config.target_root == "/srv/nfs"
        assert config.cwd == "/srv"

    def test_absolute_target_kept(self):
        config = MountConfig.from_target("/data", cwd="/srv")
        assert config.target_root == "/data"

    def test_target_root_not_rederived_after_chdir(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        startup = os.getcwd()
        config = MountConfig.from_target("nfs")
        monkeypatch.chdir("/")
        assert config.target_root == os.path.join(startup, "nfs")

    def test_empty_target_rejected(self):
        with pytest.raises(ValueError):
            MountConfig.from_target("")

    def test_frozen(self):
        config = MountConfig.from_target("/data")
        with pytest.raises(AttributeError):
            config.target_root = "/elsewhere"

    def test_defaults(self):
        config = MountConfig.from_target("/data")
        assert config.kernel_cache is True
        assert config.readdir_plus is False
        assert config.follow_symlinks is True
        assert config.strict_errors is False
