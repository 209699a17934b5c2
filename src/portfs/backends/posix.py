"""Filesystem backend built on syscall-level ``os`` primitives."""

import io
import logging
import os
import stat

from portfs.attributes import read_attributes
from portfs.base import FileSystem
from portfs.directory import Directory
from portfs.errors import FailureKind, IOFailure, native_call
from portfs.models import Attributes
from portfs.path import Path
from portfs.streams import FileInput, FileOutput

logger = logging.getLogger(__name__)

# Only defined on Windows; keeps descriptors out of text mode there.
_O_BINARY = getattr(os, "O_BINARY", 0)

DEFAULT_COPY_BUFFER_SIZE = 64 * 1024


def _wrap_descriptor(fd: int, mode: str) -> io.FileIO:
    """Wrap an open descriptor, closing it if the wrapper refuses it.

    ``io.FileIO`` rejects a descriptor that refers to a directory but does
    not close it in that case.
    """
    try:
        return io.FileIO(fd, mode, closefd=True)
    except BaseException:
        os.close(fd)
        raise


class PosixFileSystem(FileSystem):
    """FileSystem talking to the OS through stat/open/mkdir/rename/unlink.

    Every operation is one blocking native call, or for recursive delete
    and copy a bounded sequence of them, with no rollback on failure.
    """

    #: Whether ``os.rename`` itself refuses to replace an existing target
    exclusive_rename: bool = False

    def __init__(self, read_only: bool = False, copy_buffer_size: int = DEFAULT_COPY_BUFFER_SIZE) -> None:
        """Initialize the backend.

        Args:
            read_only: Refuse every mutating operation
            copy_buffer_size: Chunk size used when copying file contents
        """
        super().__init__(read_only=read_only)
        self.copy_buffer_size = copy_buffer_size

    @property
    def name(self) -> str:
        return "posix"

    def _stat(self, path: Path) -> os.stat_result | None:
        try:
            return os.stat(str(path))
        except OSError:
            return None

    # --- Queries ---

    def exists(self, path: Path) -> bool:
        self.check_compatible(path)
        return self._stat(path) is not None

    def is_file(self, path: Path) -> bool:
        self.check_compatible(path)
        st = self._stat(path)
        return st is not None and stat.S_ISREG(st.st_mode)

    def is_directory(self, path: Path) -> bool:
        self.check_compatible(path)
        st = self._stat(path)
        return st is not None and stat.S_ISDIR(st.st_mode)

    def read_attributes(self, path: Path) -> Attributes:
        self.check_compatible(path)
        return read_attributes(path, birth_time=self.birth_time)

    def open_directory(self, path: Path) -> Directory:
        self.check_compatible(path)
        st = self._stat(path)
        if st is None:
            raise IOFailure(f"Directory {path} does not exist", FailureKind.NOT_FOUND, (path,))
        if not stat.S_ISDIR(st.st_mode):
            raise IOFailure(f"Path {path} is not a directory", FailureKind.NOT_A_DIRECTORY, (path,))

        with native_call(f"Failed to list directory {path}", path):
            with os.scandir(str(path)) as entries:
                names = [entry.name for entry in entries]
        return Directory(path, (path.joinpath(name) for name in names))

    # --- Mutations ---

    def create_file(self, path: Path) -> Path:
        self.check_compatible(path)
        self.check_writable(path)
        with native_call(f"Failed to create file {path}", path):
            fd = os.open(str(path), os.O_WRONLY | os.O_CREAT | os.O_EXCL | _O_BINARY, 0o666)
            os.close(fd)
        logger.debug(f"Created file {path}")
        return path

    def create_directory(self, path: Path) -> Path:
        self.check_compatible(path)
        self.check_writable(path)
        with native_call(f"Failed to create directory {path}", path):
            os.mkdir(str(path), 0o777)
        logger.debug(f"Created directory {path}")
        return path

    def delete_file(self, path: Path) -> bool:
        self.check_compatible(path)
        if self.is_read_only:
            logger.debug(f"Refusing to delete {path}: filesystem is read-only")
            return False
        try:
            if self.is_directory(path):
                os.rmdir(str(path))
            else:
                os.unlink(str(path))
        except OSError as e:
            logger.debug(f"Failed to delete {path}: {e}")
            return False
        return True

    def delete_directory_recursively(self, path: Path) -> bool:
        self.check_compatible(path)
        if not self.exists(path):
            return False
        self.check_writable(path)
        with native_call(f"Failed to call 'lstat' on file {path}", path):
            st = os.lstat(str(path))
        if stat.S_ISLNK(st.st_mode):
            raise IOFailure(f"Cannot delete symbolic link {path} recursively", FailureKind.NATIVE, (path,))
        self._delete_tree(path)
        logger.debug(f"Deleted directory tree {path}")
        return True

    def _delete_tree(self, path: Path) -> None:
        with native_call(f"Failed to list directory {path}", path):
            with os.scandir(str(path)) as it:
                entries = [(entry.name, entry.is_dir(follow_symlinks=False)) for entry in it]

        for name, is_dir in entries:
            child = path.joinpath(name)
            if is_dir:
                self._delete_tree(child)
            else:
                with native_call(f"Failed to delete file {child}", child):
                    os.unlink(str(child))

        with native_call(f"Failed to delete directory {path}", path):
            os.rmdir(str(path))

    def copy(self, source: Path, target: Path) -> Path:
        self.check_compatible(source)
        self.check_compatible(target)
        self.check_writable(target)
        self.check_copy_target(source, target)

        with native_call(f"Failed to copy {source} to {target}", source, target):
            st = os.stat(str(source))
        if stat.S_ISDIR(st.st_mode):
            self._copy_tree(source, target, st.st_mode)
        else:
            self._copy_file(source, target, st.st_mode)
        logger.debug(f"Copied {source} to {target}")
        return target

    def _copy_file(self, source: Path, target: Path, mode: int) -> None:
        message = f"Failed to copy {source} to {target}"
        with native_call(message, source, target):
            src_fd = os.open(str(source), os.O_RDONLY | _O_BINARY)
        try:
            # O_EXCL makes the open itself fail when the target exists
            with native_call(message, source, target):
                dst_fd = os.open(
                    str(target),
                    os.O_WRONLY | os.O_CREAT | os.O_EXCL | _O_BINARY,
                    stat.S_IMODE(mode),
                )
            try:
                with native_call(message, source, target):
                    while chunk := os.read(src_fd, self.copy_buffer_size):
                        view = memoryview(chunk)
                        while view:
                            written = os.write(dst_fd, view)
                            view = view[written:]
            finally:
                os.close(dst_fd)
        finally:
            os.close(src_fd)

    def _copy_tree(self, source: Path, target: Path, mode: int) -> None:
        message = f"Failed to copy {source} to {target}"
        # Listed before the target exists so it never appears among the children
        children = self.open_directory(source)
        with native_call(message, source, target):
            os.mkdir(str(target), 0o777)
        for child in children:
            child_target = target.joinpath(child.name)
            with native_call(f"Failed to copy {child} to {child_target}", child, child_target):
                st = os.stat(str(child))
            if stat.S_ISDIR(st.st_mode):
                self._copy_tree(child, child_target, st.st_mode)
            else:
                self._copy_file(child, child_target, st.st_mode)
        # Applied last so a read-only source still yields a populated copy
        with native_call(message, source, target):
            os.chmod(str(target), stat.S_IMODE(mode))

    def move(self, source: Path, target: Path) -> Path:
        self.check_compatible(source)
        self.check_compatible(target)
        self.check_writable(source, target)

        # os.rename replaces silently on POSIX, so the target is checked
        # first; the check and the rename are not atomic.
        if not self.exclusive_rename and self.exists(target):
            raise IOFailure(f"File {target} already exists", FailureKind.ALREADY_EXISTS, (source, target))

        with native_call(f"Failed to move {source} to {target}", source, target):
            os.rename(str(source), str(target))
        logger.debug(f"Moved {source} to {target}")
        return target

    # --- Streams ---

    def open_input(self, path: Path) -> FileInput:
        self.check_compatible(path)
        with native_call(f"Failed to create an input stream for {path}", path):
            fd = os.open(str(path), os.O_RDONLY | _O_BINARY)
            raw = _wrap_descriptor(fd, "r")
        return FileInput(path, raw)

    def open_output(self, path: Path) -> FileOutput:
        self.check_compatible(path)
        self.check_writable(path)
        if self.is_directory(path):
            raise IOFailure(f"Cannot create output stream for directory {path}", FailureKind.NATIVE, (path,))

        with native_call(f"Failed to create an output stream for {path}", path):
            fd = os.open(str(path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC | _O_BINARY, 0o666)
            raw = _wrap_descriptor(fd, "w")
        return FileOutput(path, raw)
