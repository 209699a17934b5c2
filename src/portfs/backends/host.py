"""Filesystem backend built on the host runtime's high-level file API.

Uses ``pathlib`` and ``shutil`` in their synchronous forms. Absence of a
target short-circuits queries to False; every other host failure is
translated into an IOFailure naming the path(s) involved.
"""

import io
import logging
import pathlib
import shutil
import stat

from portfs.attributes import attributes_from_stat
from portfs.base import FileSystem
from portfs.directory import Directory
from portfs.errors import FailureKind, IOFailure, native_call
from portfs.models import Attributes
from portfs.path import Path
from portfs.streams import FileInput, FileOutput

logger = logging.getLogger(__name__)


class HostFileSystem(FileSystem):
    """FileSystem backed by ``pathlib.Path`` and ``shutil``."""

    @property
    def name(self) -> str:
        return "host"

    @staticmethod
    def _native(path: Path) -> pathlib.Path:
        return pathlib.Path(str(path))

    # --- Queries ---

    def exists(self, path: Path) -> bool:
        self.check_compatible(path)
        try:
            return self._native(path).exists()
        except OSError:
            return False

    def _lstat_mode(self, path: Path) -> int | None:
        if not self.exists(path):
            return None
        try:
            return self._native(path).lstat().st_mode
        except OSError:
            return None

    def is_file(self, path: Path) -> bool:
        mode = self._lstat_mode(path)
        return mode is not None and stat.S_ISREG(mode)

    def is_directory(self, path: Path) -> bool:
        mode = self._lstat_mode(path)
        return mode is not None and stat.S_ISDIR(mode)

    def read_attributes(self, path: Path) -> Attributes:
        self.check_compatible(path)
        with native_call(f"Failed to read attributes of {path}", path):
            st = self._native(path).stat()
        return attributes_from_stat(st, birth_time=self.birth_time)

    def open_directory(self, path: Path) -> Directory:
        self.check_compatible(path)
        if not self.exists(path):
            raise IOFailure(f"Directory {path} does not exist", FailureKind.NOT_FOUND, (path,))
        if not self.is_directory(path):
            raise IOFailure(f"Path {path} is not a directory", FailureKind.NOT_A_DIRECTORY, (path,))

        with native_call(f"Failed to list directory {path}", path):
            names = [entry.name for entry in self._native(path).iterdir()]
        return Directory(path, (path.joinpath(name) for name in names))

    # --- Mutations ---

    def create_file(self, path: Path) -> Path:
        self.check_compatible(path)
        self.check_writable(path)
        with native_call(f"Failed to create file {path}", path):
            with open(self._native(path), "xb"):
                pass
        logger.debug(f"Created file {path}")
        return path

    def create_directory(self, path: Path) -> Path:
        self.check_compatible(path)
        self.check_writable(path)
        with native_call(f"Failed to create directory {path}", path):
            self._native(path).mkdir()
        logger.debug(f"Created directory {path}")
        return path

    def delete_file(self, path: Path) -> bool:
        self.check_compatible(path)
        if self.is_read_only:
            logger.debug(f"Refusing to delete {path}: filesystem is read-only")
            return False
        try:
            if self.is_directory(path):
                self._native(path).rmdir()
            else:
                self._native(path).unlink()
        except OSError as e:
            logger.debug(f"Failed to delete {path}: {e}")
            return False
        return True

    def delete_directory_recursively(self, path: Path) -> bool:
        self.check_compatible(path)
        if not self.exists(path):
            return False
        self.check_writable(path)
        if self._native(path).is_symlink():
            raise IOFailure(f"Cannot delete symbolic link {path} recursively", FailureKind.NATIVE, (path,))
        self._delete_tree(path)
        logger.debug(f"Deleted directory tree {path}")
        return True

    def _delete_tree(self, path: Path) -> None:
        # iterdir never yields the "." and ".." pseudo-entries
        with native_call(f"Failed to list directory {path}", path):
            names = [entry.name for entry in self._native(path).iterdir()]

        for name in names:
            child = path.joinpath(name)
            if self.is_directory(child):
                self._delete_tree(child)
            else:
                with native_call(f"Failed to delete file {child}", child):
                    self._native(child).unlink()

        with native_call(f"Failed to delete directory {path}", path):
            self._native(path).rmdir()

    def copy(self, source: Path, target: Path) -> Path:
        self.check_compatible(source)
        self.check_compatible(target)
        self.check_writable(target)
        self.check_copy_target(source, target)

        src = self._native(source)
        dst = self._native(target)
        with native_call(f"Failed to copy {source} to {target}", source, target):
            if src.is_dir():
                # copytree refuses an existing target directory
                shutil.copytree(src, dst)
            else:
                with open(src, "rb") as fsrc, open(dst, "xb") as fdst:
                    shutil.copyfileobj(fsrc, fdst)
                shutil.copymode(src, dst)
        logger.debug(f"Copied {source} to {target}")
        return target

    def move(self, source: Path, target: Path) -> Path:
        self.check_compatible(source)
        self.check_compatible(target)
        self.check_writable(source, target)
        if self.exists(target):
            raise IOFailure(f"File {target} already exists", FailureKind.ALREADY_EXISTS, (source, target))

        with native_call(f"Failed to move {source} to {target}", source, target):
            self._native(source).rename(self._native(target))
        logger.debug(f"Moved {source} to {target}")
        return target

    # --- Streams ---

    def open_input(self, path: Path) -> FileInput:
        self.check_compatible(path)
        with native_call(f"Failed to create an input stream for {path}", path):
            raw = io.FileIO(self._native(path), "r")
        return FileInput(path, raw)

    def open_output(self, path: Path) -> FileOutput:
        self.check_compatible(path)
        self.check_writable(path)
        if self.is_directory(path):
            raise IOFailure(f"Cannot create output stream for directory {path}", FailureKind.NATIVE, (path,))

        with native_call(f"Failed to create an output stream for {path}", path):
            raw = io.FileIO(self._native(path), "w")
        return FileOutput(path, raw)
