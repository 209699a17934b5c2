"""Binary streams bound to a native descriptor."""

import io
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from portfs.models import Attributes
    from portfs.path import Path


class FileInput(io.BufferedReader):
    """Buffered input stream owning a native descriptor.

    Use it as a context manager so the descriptor is released on every
    exit path:

        with fs.open_input(path) as stream:
            data = stream.read()
    """

    def __init__(self, path: "Path", raw: io.FileIO, buffer_size: int = io.DEFAULT_BUFFER_SIZE) -> None:
        super().__init__(raw, buffer_size)
        self.path = path

    def read_attributes(self) -> "Attributes":
        """Attributes of the open file, read from its descriptor."""
        return self.path.file_system.read_descriptor_attributes(self.fileno())

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"fd={self.fileno()}"
        return f"FileInput({str(self.path)!r}, {state})"


class FileOutput(io.BufferedWriter):
    """Buffered output stream owning a native descriptor."""

    def __init__(self, path: "Path", raw: io.FileIO, buffer_size: int = io.DEFAULT_BUFFER_SIZE) -> None:
        super().__init__(raw, buffer_size)
        self.path = path

    def read_attributes(self) -> "Attributes":
        """Attributes of the open file, read from its descriptor after a flush."""
        self.flush()
        return self.path.file_system.read_descriptor_attributes(self.fileno())

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"fd={self.fileno()}"
        return f"FileOutput({str(self.path)!r}, {state})"
