import os

import pytest

from init_fs_environment import build_environment
from passthroughfs import MountConfig, Passthrough


@pytest.fixture
def target(tmp_path):
    """Sample target tree: notes.txt plus two project directories."""
    target, _ = build_environment(str(tmp_path))
    return os.path.abspath(target)


@pytest.fixture
def config(target):
    return MountConfig.from_target(target)


@pytest.fixture
def fs(config):
    fs = Passthrough(config)
    yield fs
    fs.destroy("/")

