"""Abstract base class for filesystem backends."""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from portfs.attributes import read_descriptor_attributes
from portfs.errors import FailureKind, IllegalUsageError, IOFailure
from portfs.path import Path

if TYPE_CHECKING:
    from portfs.directory import Directory
    from portfs.models import Attributes
    from portfs.streams import FileInput, FileOutput

logger = logging.getLogger(__name__)


class FileSystem(ABC):
    """Contract shared by every filesystem backend (posix, windows, host).

    A FileSystem is stateless apart from its identity and read-only flag.
    Paths it creates can only be used with it; passing them anywhere else
    raises IllegalUsageError.
    """

    #: Primary separator used when joining and normalizing
    separator: str = "/"
    #: Other separators accepted on input and rewritten to ``separator``
    alt_separators: tuple[str, ...] = ()
    #: Report ``st_birthtime`` as creation time where the platform has it
    birth_time: bool = False

    def __init__(self, read_only: bool = False) -> None:
        """Initialize the filesystem.

        Args:
            read_only: Refuse every mutating operation
        """
        self._read_only = read_only

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the backend name (e.g., 'posix', 'host')."""
        ...

    @property
    def is_read_only(self) -> bool:
        return self._read_only

    def __repr__(self) -> str:
        flag = ", read_only" if self._read_only else ""
        return f"{type(self).__name__}({self.name!r}{flag})"

    # --- Paths ---

    def path(self, name: str, *children: str) -> Path:
        """Create a path from a name and optional child components.

        Args:
            name: Base path
            *children: Components joined with the separator

        Returns:
            Normalized Path bound to this filesystem
        """
        if not children:
            return Path(self, name)
        return Path(self, self.separator.join((name, *children)))

    def split_root(self, text: str) -> tuple[str, str]:
        """Split a separator-normalized string into (root, rest)."""
        if text.startswith(self.separator):
            return self.separator, text.lstrip(self.separator)
        return "", text

    def normalize(self, raw: str) -> str:
        """Normalize a path string.

        Rewrites alternative separators, collapses repeated separators and
        drops ``.`` components and the trailing separator. ``..`` is kept
        as written.
        """
        text = str(raw)
        for alt in self.alt_separators:
            text = text.replace(alt, self.separator)
        root, rest = self.split_root(text)
        parts = [part for part in rest.split(self.separator) if part and part != "."]
        if not parts:
            return root or "."
        return root + self.separator.join(parts)

    def split(self, normalized: str) -> tuple[str, ...]:
        """Split a normalized path into its root (if any) and components."""
        root, rest = self.split_root(normalized)
        parts = tuple(part for part in rest.split(self.separator) if part)
        return ((root,) if root else ()) + parts

    def is_root(self, part: str) -> bool:
        """Check whether a path component is a root."""
        return bool(part) and self.split_root(part)[0] == part

    def check_compatible(self, path: Path) -> None:
        """Ensure the path was created by this filesystem.

        Raises:
            IllegalUsageError: If the path belongs to another filesystem
        """
        owner = getattr(path, "file_system", None)
        if owner is not self:
            raise IllegalUsageError(f"FileSystem {owner} for path {path} is not compatible with {self}")

    def check_writable(self, *paths: Path) -> None:
        """Ensure mutating operations are allowed.

        Raises:
            IOFailure: If this filesystem is read-only
        """
        if self._read_only:
            joined = ", ".join(str(p) for p in paths)
            raise IOFailure(f"FileSystem {self.name} is read-only, cannot modify {joined}", FailureKind.READ_ONLY, paths)

    def check_copy_target(self, source: Path, target: Path) -> None:
        """Ensure a copy target does not lie inside its source.

        Raises:
            IOFailure: If target equals source or is one of its descendants
        """
        parts = source.parts
        if target.parts[: len(parts)] == parts:
            raise IOFailure(f"Cannot copy {source} into itself at {target}", FailureKind.NATIVE, (source, target))

    # --- Queries ---

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Check if a path exists. Never raises for a missing path."""
        ...

    @abstractmethod
    def is_file(self, path: Path) -> bool:
        """Check that the path exists and is a regular file."""
        ...

    @abstractmethod
    def is_directory(self, path: Path) -> bool:
        """Check that the path exists and is a directory."""
        ...

    @abstractmethod
    def read_attributes(self, path: Path) -> "Attributes":
        """Read a fresh attributes snapshot.

        Raises:
            IOFailure: If the entry cannot be stat'ed
        """
        ...

    def read_descriptor_attributes(self, fd: int) -> "Attributes":
        """Read a fresh attributes snapshot of an open descriptor.

        Raises:
            IOFailure: If the descriptor cannot be stat'ed
        """
        return read_descriptor_attributes(fd, birth_time=self.birth_time)

    @abstractmethod
    def open_directory(self, path: Path) -> "Directory":
        """Take a snapshot of the immediate children of a directory.

        Raises:
            IOFailure: ``not_found`` if the path does not exist,
                ``not_a_directory`` if it is not a directory
        """
        ...

    def list(self, path: Path) -> frozenset[Path]:
        """Return the set of immediate children of a directory.

        Ordering is not defined. Descendants deeper than one level are not
        included.

        Raises:
            IOFailure: ``not_found`` if the path does not exist
        """
        return self.open_directory(path).children

    # --- Mutations ---

    @abstractmethod
    def create_file(self, path: Path) -> Path:
        """Create an empty file. Fails if anything already exists there.

        Raises:
            IOFailure: If the file exists or cannot be created
        """
        ...

    @abstractmethod
    def create_directory(self, path: Path) -> Path:
        """Create a single directory.

        Raises:
            IOFailure: If the directory cannot be created
        """
        ...

    @abstractmethod
    def delete_file(self, path: Path) -> bool:
        """Delete a single file or empty directory, best effort.

        Returns:
            True if the entry was deleted, False on any failure
        """
        ...

    @abstractmethod
    def delete_directory_recursively(self, path: Path) -> bool:
        """Delete a directory and everything below it, depth first.

        Returns:
            False if the path does not exist, True once it is removed

        Raises:
            IOFailure: On the first entry that cannot be removed; entries
                removed before the failure stay removed
        """
        ...

    @abstractmethod
    def copy(self, source: Path, target: Path) -> Path:
        """Copy a file or a directory tree. Never overwrites.

        Raises:
            IOFailure: If the target exists or the copy fails
        """
        ...

    @abstractmethod
    def move(self, source: Path, target: Path) -> Path:
        """Rename a file or directory. Never overwrites.

        Raises:
            IOFailure: If the target exists or the rename fails
        """
        ...

    # --- Streams ---

    @abstractmethod
    def open_input(self, path: Path) -> "FileInput":
        """Open a binary input stream.

        Raises:
            IOFailure: If the file cannot be opened
        """
        ...

    @abstractmethod
    def open_output(self, path: Path) -> "FileOutput":
        """Open a binary output stream, creating or truncating the file.

        Raises:
            IOFailure: If the path is a directory or cannot be opened
        """
        ...
