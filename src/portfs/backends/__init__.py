"""Concrete FileSystem backends."""

from portfs.backends.host import HostFileSystem
from portfs.backends.posix import PosixFileSystem
from portfs.backends.windows import WindowsFileSystem

__all__ = [
    "HostFileSystem",
    "PosixFileSystem",
    "WindowsFileSystem",
]
