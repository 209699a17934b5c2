"""Snapshot listing of a directory's immediate children."""

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from portfs.path import Path


class Directory:
    """Immediate children of a directory, captured when it was opened.

    The snapshot does not follow later changes on disk. Type queries
    (``files``/``directories``) still go to the filesystem.
    """

    def __init__(self, path: "Path", children: Iterable["Path"]) -> None:
        self._path = path
        self._children = frozenset(children)

    @property
    def path(self) -> "Path":
        return self._path

    @property
    def children(self) -> frozenset["Path"]:
        return self._children

    def files(self) -> list["Path"]:
        """Children that are currently regular files."""
        return [child for child in self._children if child.is_file()]

    def directories(self) -> list["Path"]:
        """Children that are currently directories."""
        return [child for child in self._children if child.is_directory()]

    def __iter__(self) -> Iterator["Path"]:
        return iter(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __contains__(self, item: object) -> bool:
        return item in self._children

    def __enter__(self) -> "Directory":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def __repr__(self) -> str:
        return f"Directory({str(self._path)!r}, {len(self._children)} entries)"
