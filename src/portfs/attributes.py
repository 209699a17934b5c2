"""Conversion of native stat results into Attributes."""

import os
import stat
from typing import TYPE_CHECKING

from portfs.errors import native_call
from portfs.models import Attributes, PosixFilePermission

if TYPE_CHECKING:
    from portfs.path import Path

_PERMISSION_BITS: tuple[tuple[int, PosixFilePermission], ...] = (
    (stat.S_IRUSR, PosixFilePermission.OWNER_READ),
    (stat.S_IWUSR, PosixFilePermission.OWNER_WRITE),
    (stat.S_IXUSR, PosixFilePermission.OWNER_EXECUTE),
    (stat.S_IRGRP, PosixFilePermission.GROUP_READ),
    (stat.S_IWGRP, PosixFilePermission.GROUP_WRITE),
    (stat.S_IXGRP, PosixFilePermission.GROUP_EXECUTE),
    # TODO: read S_IROTH/S_IWOTH/S_IXOTH once OTHERS_* permissions are modelled
)


def parse_permissions(mode: int) -> frozenset[PosixFilePermission]:
    """Extract owner and group permissions from native mode bits.

    Args:
        mode: ``st_mode`` value (type bits are ignored)

    Returns:
        Set of permission flags present in the mode
    """
    return frozenset(permission for bit, permission in _PERMISSION_BITS if mode & bit)


def _micros(ns: int) -> int:
    return ns // 1_000


def attributes_from_stat(st: os.stat_result, *, birth_time: bool = False) -> Attributes:
    """Build Attributes from a stat result.

    Args:
        st: Result of ``os.stat``/``os.fstat``/``Path.stat``
        birth_time: Use ``st_birthtime`` for the creation time when the
            platform reports it

    Returns:
        Attributes snapshot
    """
    file_type = stat.S_IFMT(st.st_mode)

    creation_ns = st.st_ctime_ns
    if birth_time:
        birth_ns = getattr(st, "st_birthtime_ns", None)
        if birth_ns is not None:
            creation_ns = birth_ns
        elif getattr(st, "st_birthtime", None) is not None:
            creation_ns = int(st.st_birthtime * 1_000_000_000)

    return Attributes(
        is_directory=file_type == stat.S_IFDIR,
        is_file=file_type == stat.S_IFREG,
        is_symbolic_link=False,
        creation_time_us=_micros(creation_ns),
        last_access_time_us=_micros(st.st_atime_ns),
        last_modified_time_us=_micros(st.st_mtime_ns),
        size_bytes=st.st_size,
        permissions=parse_permissions(st.st_mode),
    )


def read_attributes(path: "Path", *, birth_time: bool = False) -> Attributes:
    """Stat a path and convert the result.

    Raises:
        IOFailure: If the stat call fails
    """
    with native_call(f"Failed to call 'stat' on file {path}", path):
        st = os.stat(str(path))
    return attributes_from_stat(st, birth_time=birth_time)


def read_descriptor_attributes(fd: int, *, birth_time: bool = False) -> Attributes:
    """Stat an open descriptor and convert the result.

    Raises:
        IOFailure: If the fstat call fails
    """
    with native_call(f"Failed to call 'fstat' on descriptor {fd}"):
        st = os.fstat(fd)
    return attributes_from_stat(st, birth_time=birth_time)
