"""passthroughfs: a read-only FUSE mirror of a real directory."""

from .config import MountConfig
from .errors import AccessDenied, BadHandle, IOFailure, NotFound
from .handles import DirectoryHandle, FileHandle, HandleTable
from .operations import Passthrough
from .paths import resolve

__all__ = [
    "AccessDenied",
    "BadHandle",
    "DirectoryHandle",
    "FileHandle",
    "HandleTable",
    "IOFailure",
    "MountConfig",
    "NotFound",
    "Passthrough",
    "resolve",
]
