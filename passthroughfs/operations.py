"""Read-only passthrough operations.

``Passthrough`` follows fusepy's ``Operations`` calling convention, so the
runtime can drive it directly, but it does not import fusepy itself: errors
are plain ``OSError`` instances and fusepy returns their negated errno.
"""

from __future__ import annotations

import errno
import logging
import os
import stat

from .config import MountConfig
from .errors import AccessDenied, IOFailure, NotFound
from .handles import (
    STAT_KEYS,
    DirectoryHandle,
    DirectoryStream,
    Emit,
    FileHandle,
    HandleTable,
)
from .paths import resolve

log = logging.getLogger(__name__)

STATVFS_KEYS = (
    "f_bavail", "f_bfree", "f_blocks", "f_bsize", "f_favail",
    "f_ffree", "f_files", "f_flag", "f_frsize", "f_namemax"
)


def _read_only(flags: int) -> bool:
    return (flags & os.O_ACCMODE) == os.O_RDONLY


class Passthrough:
    """Mirror ``config.target_root`` read-only at the mount point."""

    def __init__(self, config: MountConfig):
        self.config = config
        self.handles = HandleTable()

    def __call__(self, op, *args):
        if not hasattr(self, op):
            raise OSError(errno.ENOSYS, os.strerror(errno.ENOSYS), op)
        return getattr(self, op)(*args)

    def _full_path(self, partial: str) -> str:
        full_path = resolve(self.config.target_root, partial)
        log.debug("%s -> %s", partial, full_path)
        return full_path

    # Lifecycle
    # =========

    def init(self, path):
        log.info("serving %s (name=%r, readdir_plus=%s, strict_errors=%s)",
                 self.config.target_root, self.config.name,
                 self.config.readdir_plus, self.config.strict_errors)

    def destroy(self, path):
        closed = self.handles.close_all()
        if closed:
            log.info("closed %d handle(s) left open at unmount", closed)

    # Metadata
    # ========

    def getattr(self, path, fh=None):
        if path == "/":
            attrs = dict.fromkeys(STAT_KEYS, 0)
            attrs.update(st_mode=stat.S_IFDIR | 0o755, st_nlink=2)
            return attrs

        full_path = self._full_path(path)
        exists = os.path.exists if self.config.follow_symlinks else os.path.lexists
        if not exists(full_path):
            raise NotFound(path)

        st = os.stat(full_path, follow_symlinks=self.config.follow_symlinks)
        return dict((key, getattr(st, key)) for key in STAT_KEYS)

    def readlink(self, path):
        full_path = self._full_path(path)
        target = os.readlink(full_path)
        root = self.config.target_root
        if os.path.isabs(target) and os.path.commonpath([root, target]) == root:
            return os.path.relpath(target, os.path.dirname(full_path))
        return target

    def statfs(self, path):
        stv = os.statvfs(self._full_path(path))
        return dict((key, getattr(stv, key)) for key in STATVFS_KEYS)

    # Directories
    # ===========

    def opendir(self, path, flags=os.O_RDONLY):
        full_path = self._full_path(path)
        if not os.path.exists(full_path):
            raise NotFound(path)
        if not _read_only(flags):
            raise AccessDenied(path)

        # errno from a failed scandir goes back to the client unchanged
        stream = DirectoryStream(full_path)
        return self.handles.add(DirectoryHandle(full_path, stream, plus=self.config.readdir_plus))

    def readdir(self, path, fh, offset, emit: Emit):
        handle = self.handles.get(fh, DirectoryHandle)
        handle.readdir(offset, emit)
        return 0

    def releasedir(self, path, fh):
        self.handles.release(fh, DirectoryHandle)
        return 0

    # Files
    # =====

    def open(self, path, flags):
        full_path = self._full_path(path)
        if not os.path.exists(full_path):
            raise NotFound(path)
        if not _read_only(flags):
            raise AccessDenied(path)

        try:
            fd = os.open(full_path, os.O_RDONLY)
        except OSError as e:
            log.debug("open %s failed: %s", full_path, e)
            if self.config.strict_errors:
                raise
            raise IOFailure(path) from e
        return self.handles.add(FileHandle(full_path, fd))

    def read(self, path, size, offset, fh):
        handle = self.handles.get(fh, FileHandle)
        try:
            return handle.pread(size, offset)
        except OSError as e:
            log.debug("read %s at %d failed: %s", handle.path, offset, e)
            if self.config.strict_errors:
                raise
            raise IOFailure(path) from e

    def release(self, path, fh):
        self.handles.release(fh, FileHandle)
        return 0
