"""Error model shared by every filesystem backend."""

import errno
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from portfs.path import Path

logger = logging.getLogger(__name__)


class FailureKind(str, Enum):
    """Category of an I/O failure."""

    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    NOT_A_DIRECTORY = "not_a_directory"
    PERMISSION_DENIED = "permission_denied"
    READ_ONLY = "read_only"
    NATIVE = "native"


_ERRNO_KINDS: dict[int, FailureKind] = {
    errno.ENOENT: FailureKind.NOT_FOUND,
    errno.EEXIST: FailureKind.ALREADY_EXISTS,
    errno.ENOTDIR: FailureKind.NOT_A_DIRECTORY,
    errno.EACCES: FailureKind.PERMISSION_DENIED,
    errno.EPERM: FailureKind.PERMISSION_DENIED,
}


class IOFailure(OSError):
    """Failure of a filesystem operation.

    Every native failure, whatever its shape, is normalized into this one
    type. The native exception (if any) is chained as ``__cause__``.

    Attributes:
        message: Human readable description naming the operation and paths
        kind: Category of the failure
        paths: Paths involved in the failed operation
    """

    def __init__(
        self,
        message: str,
        kind: FailureKind = FailureKind.NATIVE,
        paths: "tuple[Path, ...]" = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.paths = tuple(paths)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"IOFailure({self.message!r}, kind={self.kind.value})"


class IllegalUsageError(RuntimeError):
    """Programming error, such as passing a Path to a foreign FileSystem.

    Not an OSError: callers must not treat it as a retryable I/O condition.
    """


def kind_from_os_error(exc: OSError) -> FailureKind:
    """Map a native OSError to a failure kind by its errno."""
    if exc.errno is None:
        return FailureKind.NATIVE
    return _ERRNO_KINDS.get(exc.errno, FailureKind.NATIVE)


@contextmanager
def native_call(message: str, *paths: "Path") -> Iterator[None]:
    """Translate any OSError raised in the block into an IOFailure.

    Args:
        message: Description of the operation, including the paths involved
        *paths: Paths to attach to the failure

    Raises:
        IOFailure: If the wrapped native call fails
    """
    try:
        yield
    except IOFailure:
        raise
    except OSError as e:
        kind = kind_from_os_error(e)
        logger.debug(f"Native call failed ({kind.value}): {message}: {e}")
        raise IOFailure(f"{message}: {e.strerror or e}", kind, paths) from e
