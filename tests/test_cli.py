"""Tests for the passthroughfs command line."""

from unittest import mock

import pytest
from click.testing import CliRunner

from passthroughfs.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def mount():
    with mock.patch("passthroughfs.mount.mount") as mount:
        yield mount


class TestMain:
    def test_help_lists_options(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "--target" in result.output
        assert "MOUNTPOINT" in result.output

    def test_short_help_flag(self, runner):
        result = runner.invoke(main, ["-h"])
        assert result.exit_code == 0

    def test_target_required(self, runner, mount, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "mnt")])
        assert result.exit_code == 2
        mount.assert_not_called()

    def test_target_must_exist(self, runner, mount, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "mnt"), "--target", str(tmp_path / "nope")])
        assert result.exit_code == 2
        mount.assert_not_called()

    def test_mounts_with_defaults(self, runner, mount, target, tmp_path):
        mnt = str(tmp_path / "mnt")
        result = runner.invoke(main, [mnt, "--target", target])
        assert result.exit_code == 0, result.output

        config, mountpoint = mount.call_args.args
        assert mountpoint == mnt
        assert config.target_root == target
        assert config.name == "hello"
        assert config.contents == "Hello World!\n"
        assert config.kernel_cache is True
        assert config.strict_errors is False
        assert mount.call_args.kwargs == {
            "foreground": True,
            "nothreads": False,
            "debug": False,
        }

    def test_flags_reach_config(self, runner, mount, target, tmp_path):
        result = runner.invoke(main, [
            str(tmp_path / "mnt"), "--target", target,
            "--name", "greeting", "--contents", "hey",
            "--readdir-plus", "--no-follow-symlinks", "--strict-errors",
            "--no-kernel-cache", "--single-thread", "--background", "--debug",
        ])
        assert result.exit_code == 0, result.output

        config = mount.call_args.args[0]
        assert config.name == "greeting"
        assert config.contents == "hey"
        assert config.readdir_plus is True
        assert config.follow_symlinks is False
        assert config.strict_errors is True
        assert config.kernel_cache is False
        assert mount.call_args.kwargs == {
            "foreground": False,
            "nothreads": True,
            "debug": True,
        }

    def test_mount_failure_exits_nonzero(self, runner, mount, target, tmp_path):
        mount.side_effect = RuntimeError(1)
        result = runner.invoke(main, [str(tmp_path / "mnt"), "--target", target])
        assert result.exit_code == 1
