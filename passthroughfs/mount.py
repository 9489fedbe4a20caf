"""Bind ``Passthrough`` to the fusepy runtime.

fusepy's stock ``readdir`` callback drops the kernel's offset and its
``opendir`` drops the open flags; ``PassthroughFUSE`` forwards both so
listings can be resumed and write-mode opens rejected.

fusepy loads libfuse at import time, so it is imported here only, and
lazily, keeping the rest of the package usable without libfuse installed.
"""

from __future__ import annotations

import logging

from .config import MountConfig
from .operations import Passthrough

log = logging.getLogger(__name__)


def _fuse():
    import fuse

    return fuse


def build_fuse_class():
    """Return the ``fuse.FUSE`` subclass that forwards offsets and flags."""
    fuse = _fuse()

    class PassthroughFUSE(fuse.FUSE):

        def opendir(self, path, fip):
            fip.contents.fh = self.operations(
                "opendir", path.decode(self.encoding), fip.contents.flags)
            return 0

        def readdir(self, path, buf, filler, offset, fip):
            def emit(name, attrs, next_offset):
                st = fuse.c_stat()
                fuse.set_st_attrs(st, attrs)
                return filler(buf, name.encode(self.encoding), st, next_offset) != 0

            decoded = path.decode(self.encoding) if path is not None else None
            return self.operations("readdir", decoded, fip.contents.fh, offset, emit)

    return PassthroughFUSE


def build_operations(config: MountConfig, debug: bool = False) -> Passthrough:
    if not debug:
        return Passthrough(config)
    fuse = _fuse()

    class LoggingPassthrough(fuse.LoggingMixIn, Passthrough):
        pass

    return LoggingPassthrough(config)


def mount(config: MountConfig, mountpoint: str, foreground: bool = True,
          nothreads: bool = False, debug: bool = False) -> None:
    """Serve ``config.target_root`` at ``mountpoint`` until unmounted.

    Raises:
        RuntimeError: If libfuse fails to mount (e.g. already mounted).
    """
    operations = build_operations(config, debug=debug)
    fuse_class = build_fuse_class()
    log.info("mounting %s at %s", config.target_root, mountpoint)
    fuse_class(
        operations,
        mountpoint,
        nothreads=nothreads,
        foreground=foreground,
        debug=debug,
        ro=True,
        kernel_cache=config.kernel_cache,
        fsname=f"passthroughfs:{config.target_root}",
    )
