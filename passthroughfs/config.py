"""Mount configuration.

Built once at startup and handed to the operation surface; never mutated.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class MountConfig:
    """Process-wide settings for one mount.

    Attributes:
        target_root: Absolute path of the real directory the mount mirrors.
        cwd: Working directory at startup, used to resolve a relative target.
        name: Display name accepted on the command line (informational).
        contents: Display contents accepted on the command line (informational).
        kernel_cache: Let the kernel keep file data cached between opens.
        readdir_plus: Stat every entry while listing instead of sending only
            the inode and type hint.
        follow_symlinks: Report the metadata of symlink targets (``stat``)
            rather than of the links themselves (``lstat``).
        strict_errors: Surface the OS errno on failed file open/read instead
            of a generic EIO.
    """

    target_root: str
    cwd: str
    name: str = "hello"
    contents: str = "Hello World!\n"
    kernel_cache: bool = True
    readdir_plus: bool = False
    follow_symlinks: bool = True
    strict_errors: bool = False

    @classmethod
    def from_target(cls, target: str, cwd: str | None = None, **kwargs) -> MountConfig:
        """Build a config, anchoring ``target`` to the startup directory.

        Args:
            target: Target directory, absolute or relative to ``cwd``.
            cwd: Startup working directory (defaults to ``os.getcwd()``).
            **kwargs: Remaining ``MountConfig`` fields.

        Raises:
            ValueError: If ``target`` is empty.
        """
        if not target:
            raise ValueError("Passthrough mount requires a target directory")
        if cwd is None:
            cwd = os.getcwd()
        root = os.path.abspath(os.path.join(cwd, os.path.expanduser(target)))
        return cls(target_root=root, cwd=cwd, **kwargs)
