"""Open directory and file handles, and the table that owns them.

The FUSE runtime hands back an integer ``fh`` on every call against an open
object. ``HandleTable`` maps those integers to typed handle objects so no
state lives in the integer itself.
"""

from __future__ import annotations

import itertools
import logging
import os
import stat
import threading
from dataclasses import dataclass
from typing import Callable, Union

from .errors import BadHandle

log = logging.getLogger(__name__)

# emit(name, attrs, next_offset) -> True when the caller's buffer is full
Emit = Callable[[str, dict, int], bool]

STAT_KEYS = (
    "st_mode", "st_ino", "st_dev", "st_nlink",
    "st_uid", "st_gid", "st_size", "st_atime",
    "st_mtime", "st_ctime"
)


@dataclass
class Entry:
    """One raw directory entry as produced by the stream."""

    name: str
    ino: int
    mode: int
    path: str | None = None


def _type_bits(entry: os.DirEntry) -> int:
    # Only the d_type hint; anything the hint can't name is left unknown.
    try:
        if entry.is_symlink():
            return stat.S_IFLNK
        if entry.is_dir(follow_symlinks=False):
            return stat.S_IFDIR
        if entry.is_file(follow_symlinks=False):
            return stat.S_IFREG
    except OSError:
        pass
    return 0


def _inode(path: str) -> int:
    try:
        return os.stat(path).st_ino
    except OSError:
        return 0


class DirectoryStream:
    """Seekable view over ``os.scandir``.

    Positions are ordinals: ``tell()`` is the number of entries consumed so
    far, counting the synthetic ``.`` and ``..`` that open every listing.
    Seeking backwards restarts the scan; seeking forwards skips entries.
    """

    def __init__(self, path: str):
        self.path = path
        self._scan = os.scandir(path)
        self._dots = [
            Entry(".", _inode(path), stat.S_IFDIR),
            Entry("..", _inode(os.path.dirname(path.rstrip("/")) or "/"), stat.S_IFDIR),
        ]
        self._position = 0

    def read(self) -> Entry | None:
        """Return the next entry, or None at end of directory."""
        if self._scan is None:
            return None
        if self._position < len(self._dots):
            entry = self._dots[self._position]
            self._position += 1
            return entry
        try:
            raw = next(self._scan)
        except StopIteration:
            return None
        except OSError as e:
            # a failing stream ends the listing early rather than erroring
            log.warning("reading %s stopped: %s", self.path, e)
            return None
        self._position += 1
        return Entry(raw.name, raw.inode(), _type_bits(raw), raw.path)

    def tell(self) -> int:
        return self._position

    def seek(self, offset: int) -> None:
        if self._scan is None:
            return
        if offset < self._position:
            self._scan.close()
            try:
                self._scan = os.scandir(self.path)
            except OSError as e:
                # directory went away after opendir; the listing just ends
                log.warning("rewinding %s stopped: %s", self.path, e)
                self._scan = None
                self._position = offset
                return
            self._position = 0
        while self._position < offset:
            if self.read() is None:
                break

    def close(self) -> None:
        if self._scan is not None:
            self._scan.close()


class DirectoryHandle:
    """Enumeration state for one ``opendir``.

    ``offset`` is always the last offset delivered to the caller. ``entry``
    holds an entry already pulled from the stream that the caller's buffer
    had no room for; it is delivered first on the next call.
    """

    def __init__(self, path: str, stream: DirectoryStream, plus: bool = False):
        self.path = path
        self.stream = stream
        self.plus = plus
        self.entry: Entry | None = None
        self.offset = 0
        self._lock = threading.Lock()

    def _attrs(self, entry: Entry) -> dict:
        if self.plus and entry.path is not None:
            try:
                st = os.lstat(entry.path)
            except OSError:
                pass
            else:
                return {key: getattr(st, key) for key in STAT_KEYS}
        return {"st_ino": entry.ino, "st_mode": entry.mode}

    def readdir(self, offset: int, emit: Emit) -> None:
        with self._lock:
            if offset != self.offset:
                log.debug("repositioning %s from %d to %d", self.path, self.offset, offset)
                self.stream.seek(offset)
                self.entry = None
                self.offset = offset

            while True:
                if self.entry is None:
                    self.entry = self.stream.read()
                    if self.entry is None:
                        break
                next_offset = self.stream.tell()
                if emit(self.entry.name, self._attrs(self.entry), next_offset):
                    break
                self.entry = None
                self.offset = next_offset

    def close(self) -> None:
        self.stream.close()


class FileHandle:
    """A read-only descriptor. Reads are positional; there is no cursor."""

    def __init__(self, path: str, fd: int):
        self.path = path
        self.fd = fd

    def pread(self, size: int, offset: int) -> bytes:
        return os.pread(self.fd, size, offset)

    def close(self) -> None:
        os.close(self.fd)


Handle = Union[DirectoryHandle, FileHandle]


class HandleTable:
    """Thread-safe registry of open handles keyed by ``fh``.

    Ids start at 1 and are never reused for the life of the table.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._table: dict[int, Handle] = {}
        self._ids = itertools.count(1)

    def add(self, handle: Handle) -> int:
        with self._lock:
            fh = next(self._ids)
            self._table[fh] = handle
        return fh

    def get(self, fh: int, kind: type[Handle]) -> Handle:
        handle = self._table.get(fh)
        if not isinstance(handle, kind):
            raise BadHandle(fh)
        return handle

    def release(self, fh: int, kind: type[Handle]) -> None:
        with self._lock:
            handle = self._table.get(fh)
            if not isinstance(handle, kind):
                raise BadHandle(fh)
            del self._table[fh]
        handle.close()

    def close_all(self) -> int:
        """Close every open handle. Returns how many were closed."""
        with self._lock:
            handles = list(self._table.values())
            self._table.clear()
        for handle in handles:
            try:
                handle.close()
            except OSError as e:
                log.warning("closing %s failed: %s", handle.path, e)
        return len(handles)

    def __len__(self) -> int:
        return len(self._table)
