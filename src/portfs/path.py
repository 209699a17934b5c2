"""Immutable, backend-bound filesystem path."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from portfs.base import FileSystem
    from portfs.directory import Directory
    from portfs.models import Attributes
    from portfs.streams import FileInput, FileOutput


class Path:
    """Location on one particular FileSystem.

    A Path only ever holds its normalized string and the FileSystem that
    created it. It carries no existence or type state; every query goes
    back to the filesystem.

    Two paths are equal when their normalized strings are equal and they
    belong to the same FileSystem instance.

    Example:
        >>> fs = PosixFileSystem()
        >>> fs.path("build//out/", "report.txt")
        Path('build/out/report.txt')
    """

    __slots__ = ("_file_system", "_normalized")

    def __init__(self, file_system: "FileSystem", raw: str) -> None:
        """Create a path.

        Use ``FileSystem.path`` rather than calling this directly.

        Args:
            file_system: Owning filesystem
            raw: Path string, normalized by the filesystem
        """
        object.__setattr__(self, "_file_system", file_system)
        object.__setattr__(self, "_normalized", file_system.normalize(raw))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def file_system(self) -> "FileSystem":
        """FileSystem that created this path."""
        return self._file_system

    def __str__(self) -> str:
        return self._normalized

    def __repr__(self) -> str:
        return f"Path({self._normalized!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._normalized == other._normalized and self._file_system is other._file_system

    def __hash__(self) -> int:
        return hash((self._normalized, id(self._file_system)))

    # --- Navigation ---

    @property
    def parts(self) -> tuple[str, ...]:
        """Components of the path; a leading root is kept as its own part."""
        return self._file_system.split(self._normalized)

    @property
    def name(self) -> str:
        """Last component, or an empty string for a root."""
        parts = self.parts
        if not parts or self._file_system.is_root(parts[-1]):
            return ""
        return parts[-1]

    @property
    def parent(self) -> "Path | None":
        """Containing path, or None for a root or a single relative component."""
        parts = self.parts
        if len(parts) < 2:
            return None
        return self._file_system.path(*parts[:-1])

    def joinpath(self, *children: str) -> "Path":
        """Return a new path with child components appended."""
        return self._file_system.path(self._normalized, *children)

    def __truediv__(self, child: str) -> "Path":
        return self.joinpath(child)

    # --- Operations, forwarded to the owning filesystem ---

    def exists(self) -> bool:
        return self._file_system.exists(self)

    def is_file(self) -> bool:
        return self._file_system.is_file(self)

    def is_directory(self) -> bool:
        return self._file_system.is_directory(self)

    def create_file(self) -> "Path":
        return self._file_system.create_file(self)

    def create_directory(self) -> "Path":
        return self._file_system.create_directory(self)

    def delete_file(self) -> bool:
        return self._file_system.delete_file(self)

    def delete_directory_recursively(self) -> bool:
        return self._file_system.delete_directory_recursively(self)

    def copy_to(self, target: "Path") -> "Path":
        return self._file_system.copy(self, target)

    def move_to(self, target: "Path") -> "Path":
        return self._file_system.move(self, target)

    def open_input(self) -> "FileInput":
        return self._file_system.open_input(self)

    def open_output(self) -> "FileOutput":
        return self._file_system.open_output(self)

    def read_attributes(self) -> "Attributes":
        return self._file_system.read_attributes(self)

    def open_directory(self) -> "Directory":
        return self._file_system.open_directory(self)

    def list(self) -> frozenset["Path"]:
        return self._file_system.list(self)
