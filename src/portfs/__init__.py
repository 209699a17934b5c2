"""portfs - one Path/FileSystem contract over posix, windows and host backends."""

from portfs.backends import HostFileSystem, PosixFileSystem, WindowsFileSystem
from portfs.base import FileSystem
from portfs.directory import Directory
from portfs.errors import FailureKind, IllegalUsageError, IOFailure
from portfs.models import Attributes, EntryType, PosixFilePermission
from portfs.path import Path
from portfs.registry import default_file_system, get_file_system, make_path
from portfs.streams import FileInput, FileOutput

__version__ = "0.1.0"

__all__ = [
    "Attributes",
    "Directory",
    "EntryType",
    "FailureKind",
    "FileInput",
    "FileOutput",
    "FileSystem",
    "HostFileSystem",
    "IllegalUsageError",
    "IOFailure",
    "Path",
    "PosixFilePermission",
    "PosixFileSystem",
    "WindowsFileSystem",
    "default_file_system",
    "get_file_system",
    "make_path",
]
