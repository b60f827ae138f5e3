import os
from pathlib import Path

from pastebin.domain.errors import InvalidPath, StorageError
from pastebin.infra.logging import get_logger

log = get_logger(__name__)

DIR_MODE = 0o755
FILE_MODE = 0o644


class BlobStore:
    """One plain file per identifier under ``root``; no index, no metadata."""

    def __init__(self, root: Path) -> None:
        self._root = Path(os.path.abspath(root))

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, identifier: str) -> Path:
        # Lexical check only: nothing on disk is touched before containment holds.
        if not identifier:
            raise InvalidPath(identifier, "empty")
        candidate = Path(os.path.normpath(self._root / identifier))
        if candidate == self._root or not candidate.is_relative_to(self._root):
            raise InvalidPath(identifier)
        return candidate

    def ensure_exists(self, path: Path) -> None:
        try:
            path.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
            if not path.exists():
                path.touch(mode=FILE_MODE)
                log.debug("blob created: %s", path)
            elif not path.is_file():
                raise IsADirectoryError(f"{path} is not a regular file")
        except (OSError, ValueError) as e:
            log.warning("ensure_exists failed for %s: %s", path, e)
            raise StorageError(str(e)) from e

    def read(self, path: Path) -> bytes:
        self.ensure_exists(path)
        try:
            return path.read_bytes()
        except OSError as e:
            log.warning("read failed for %s: %s", path, e)
            raise StorageError(str(e)) from e

    def write(self, path: Path, content: bytes) -> None:
        self.ensure_exists(path)
        try:
            path.write_bytes(content)
        except OSError as e:
            log.warning("write failed for %s: %s", path, e)
            raise StorageError(str(e)) from e
        log.debug("blob written: %s (%d bytes)", path, len(content))
