"""Where the persisted snapshot text lives between sessions."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from ..exceptions import StorageError

logger = logging.getLogger(__name__)


class SnapshotStorage(Protocol):
    def load(self) -> str | None: ...

    def save(self, text: str) -> None: ...

    def erase(self) -> None: ...


class MemoryStorage:
    """Keeps the snapshot text in memory; used in tests and ephemeral sessions."""

    def __init__(self, text: str | None = None):
        self.text = text
        self.writes = 0

    def load(self) -> str | None:
        return self.text

    def save(self, text: str) -> None:
        self.text = text
        self.writes += 1

    def erase(self) -> None:
        self.text = None


class JsonFileStorage:
    """Stores the snapshot as a JSON file, replaced atomically on each save."""

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    def load(self) -> str | None:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise StorageError(f"{self.path} is not UTF-8 text: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e

    def save(self, text: str) -> None:
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                os.replace(tmp, self.path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e

    def erase(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot remove {self.path}: {e}") from e
        logger.info("Erased snapshot %s", self.path)
