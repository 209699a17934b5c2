"""Process-wide default filesystem backends."""

import logging
import os
import threading
from typing import TYPE_CHECKING

from portfs.backends import HostFileSystem, PosixFileSystem, WindowsFileSystem
from portfs.base import FileSystem

if TYPE_CHECKING:
    from portfs.config import Settings
    from portfs.path import Path

logger = logging.getLogger(__name__)

# Registry of available backends by name
_BACKEND_CLASSES: dict[str, type[FileSystem]] = {
    "posix": PosixFileSystem,
    "windows": WindowsFileSystem,
    "host": HostFileSystem,
}

_instances: dict[str, FileSystem] = {}
_lock = threading.Lock()


def available_backends() -> list[str]:
    """Names accepted by get_file_system()."""
    return list(_BACKEND_CLASSES)


def detect_backend() -> str:
    """Detect the native backend for the running platform.

    Returns:
        'windows' on Windows, 'posix' everywhere else
    """
    return "windows" if os.name == "nt" else "posix"


def _build(kind: str, settings: "Settings") -> FileSystem:
    backend_class = _BACKEND_CLASSES[kind]
    if issubclass(backend_class, PosixFileSystem):
        fs: FileSystem = backend_class(read_only=settings.read_only, copy_buffer_size=settings.copy_buffer_size)
    else:
        fs = backend_class(read_only=settings.read_only)
    logger.info(f"Initialized {fs!r}")
    return fs


def get_file_system(kind: str | None = None, settings: "Settings | None" = None) -> FileSystem:
    """Get the process-wide instance of a backend, creating it on first use.

    Args:
        kind: 'posix', 'windows', 'host', or None/'auto' for the configured
            default
        settings: Settings used on first creation. Uses global settings if
            not provided.

    Returns:
        FileSystem singleton for that backend

    Raises:
        ValueError: If the backend name is unknown
    """
    from portfs.config import get_settings

    settings = settings or get_settings()
    if kind is None or kind == "auto":
        kind = settings.backend if settings.backend != "auto" else detect_backend()

    if kind not in _BACKEND_CLASSES:
        raise ValueError(f"Unknown filesystem backend: {kind}\nAvailable backends: {', '.join(_BACKEND_CLASSES)}")

    with _lock:
        fs = _instances.get(kind)
        if fs is None:
            fs = _build(kind, settings)
            _instances[kind] = fs
        return fs


def default_file_system() -> FileSystem:
    """Get the configured default backend."""
    return get_file_system()


def reset_file_systems() -> None:
    """Forget every backend instance so the next lookup rebuilds it.

    Paths created by a forgotten instance stay bound to it and are not
    compatible with the new one.
    """
    with _lock:
        _instances.clear()


def make_path(name: str, *children: str) -> "Path":
    """Create a path on the default backend."""
    return default_file_system().path(name, *children)
