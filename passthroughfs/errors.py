"""Errors raised by the operation surface.

fusepy turns any ``OSError`` escaping an operation into ``-errno``, so each
error here is an ``OSError`` carrying the code the client should see.
"""

from __future__ import annotations

import errno
import os


class NotFound(FileNotFoundError):
    """The resolved real path does not exist."""

    def __init__(self, path: str):
        super().__init__(errno.ENOENT, os.strerror(errno.ENOENT), path)


class AccessDenied(PermissionError):
    """The request asked for an access mode other than read-only."""

    def __init__(self, path: str):
        super().__init__(errno.EACCES, os.strerror(errno.EACCES), path)


class IOFailure(OSError):
    """A real open or read failed; the original errno is not preserved."""

    def __init__(self, path: str | None = None):
        super().__init__(errno.EIO, os.strerror(errno.EIO), path)


class BadHandle(OSError):
    """No open handle is registered under the given id."""

    def __init__(self, fh: int):
        super().__init__(errno.EBADF, os.strerror(errno.EBADF), str(fh))
        self.fh = fh
