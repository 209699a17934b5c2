"""Windows variant of the Posix-family backend."""

import re

from portfs.backends.posix import PosixFileSystem

_DRIVE = re.compile(r"^[A-Za-z]:")


class WindowsFileSystem(PosixFileSystem):
    """Posix-family backend with Windows path syntax.

    Differences from PosixFileSystem:
    - paths use ``\\`` and accept ``/`` on input, with optional drive roots
    - creation time is the real birth time (``st_birthtime``)
    - ``os.rename`` refuses an existing target natively, so ``move`` relies
      on that instead of a separate existence check
    """

    separator = "\\"
    alt_separators = ("/",)
    birth_time = True
    exclusive_rename = True

    @property
    def name(self) -> str:
        return "windows"

    def split_root(self, text: str) -> tuple[str, str]:
        """Split ``C:\\dir``, ``C:dir``, ``\\dir`` and ``\\\\server\\share\\dir`` into root and rest.

        A UNC root keeps both leading separators and is normalized to
        ``\\\\server\\share\\``. A leading double separator without a share
        name is treated as a plain root.
        """
        sep = self.separator
        if text.startswith(sep * 2) and not text.startswith(sep * 3):
            server, _, rest = text[2:].partition(sep)
            share, _, rest = rest.lstrip(sep).partition(sep)
            if server and share:
                return f"{sep * 2}{server}{sep}{share}{sep}", rest.lstrip(sep)

        drive = ""
        match = _DRIVE.match(text)
        if match:
            drive = match.group(0).upper()
            text = text[len(drive):]
        if text.startswith(self.separator):
            return drive + self.separator, text.lstrip(self.separator)
        return drive, text
