"""
File system access for generated files.

The generator reads a destination file (to recover its preserved block)
immediately before writing it; distinct types write distinct files, so no
locking is needed across types.
"""

import shutil
from pathlib import Path
from typing import Dict, Optional, Union

from ...logging_config import get_logger
from .errors import OutputError

logger = get_logger(__name__)


class FileSystem:
    """Reads and writes generated files on disk."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def read_text(self, path: Union[str, Path]) -> Optional[str]:
        """
        Return the current content of ``path``, or None when it does not exist.

        Raises:
            OutputError: If the file exists but cannot be read
        """
        path = Path(path)
        if not path.exists():
            return None
        try:
            # newline="" keeps CRLF files intact for the keep-ts extraction
            with open(path, "r", encoding=self.encoding, newline="") as f:
                return f.read()
        except OSError as e:
            raise OutputError(f"Failed to read file: {e}", path=str(path)) from e

    def write_text(self, path: Union[str, Path], content: str) -> None:
        """
        Write ``content`` to ``path``, creating parent directories.

        Raises:
            OutputError: If the file cannot be written
        """
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding=self.encoding, newline="") as f:
                f.write(content)
        except OSError as e:
            raise OutputError(f"Failed to write file: {e}", path=str(path)) from e
        logger.debug("Wrote %s", path)

    def clear_directory(self, path: Union[str, Path]) -> None:
        """Remove everything inside ``path`` (the directory itself is kept)."""
        path = Path(path)
        if not path.exists():
            return
        try:
            for entry in path.iterdir():
                if entry.is_dir() and not entry.is_symlink():
                    shutil.rmtree(entry)
                else:
                    entry.unlink()
        except OSError as e:
            raise OutputError(f"Failed to clear directory: {e}", path=str(path)) from e
        logger.info("Cleared output directory %s", path)


class MemoryFileSystem(FileSystem):
    """
    In-memory file system, used for dry runs and previews.

    With ``read_through`` enabled, files not written yet are read from disk so
    that a preview keeps existing preserved blocks.
    """

    def __init__(
        self, files: Optional[Dict[str, str]] = None, read_through: bool = False
    ):
        super().__init__()
        self.read_through = read_through
        self.files: Dict[str, str] = {
            self._key(path): content for path, content in (files or {}).items()
        }

    @staticmethod
    def _key(path: Union[str, Path]) -> str:
        return Path(path).as_posix()

    def read_text(self, path: Union[str, Path]) -> Optional[str]:
        key = self._key(path)
        if key in self.files:
            return self.files[key]
        if self.read_through:
            return super().read_text(path)
        return None

    def write_text(self, path: Union[str, Path], content: str) -> None:
        self.files[self._key(path)] = content

    def clear_directory(self, path: Union[str, Path]) -> None:
        prefix = self._key(path).rstrip("/") + "/"
        for key in [k for k in self.files if k.startswith(prefix)]:
            del self.files[key]
