"""Shared fixtures for the portfs test suite."""

import os
from collections.abc import Iterator

import pytest

from portfs import FileSystem, HostFileSystem, Path, PosixFileSystem, WindowsFileSystem
from portfs.config import reload_settings
from portfs.registry import reset_file_systems

_NATIVE_BACKENDS = ["posix", "host"] + (["windows"] if os.name == "nt" else [])


def build_file_system(kind: str, **kwargs: object) -> FileSystem:
    """Create a fresh (non-singleton) backend instance."""
    classes: dict[str, type[FileSystem]] = {
        "posix": PosixFileSystem,
        "windows": WindowsFileSystem,
        "host": HostFileSystem,
    }
    return classes[kind](**kwargs)


@pytest.fixture(params=_NATIVE_BACKENDS)
def fs(request: pytest.FixtureRequest) -> FileSystem:
    """Every backend that can run natively on this platform."""
    return build_file_system(request.param)


@pytest.fixture
def test_folder(fs: FileSystem, tmp_path: os.PathLike) -> Iterator[Path]:
    """Scratch directory created through the backend under test."""
    folder = fs.path(str(tmp_path), "testFolder")
    fs.create_directory(folder)
    yield folder
    fs.delete_directory_recursively(folder)


@pytest.fixture
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: os.PathLike) -> Iterator[None]:
    """Isolate settings and registry singletons from the environment."""
    for key in list(os.environ):
        if key.startswith("PORTFS_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    reload_settings()
    reset_file_systems()
    yield
    monkeypatch.undo()
    reload_settings()
    reset_file_systems()
