"""Writing generated files to disk."""

import asyncio
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..logging import get_logger
from .errors import ArtifactWriteError

logger = get_logger("writer")


@runtime_checkable
class FileWriter(Protocol):
    """Protocol for the collaborator that persists generated text."""

    async def write(self, path: Path, contents: str) -> None:
        """Write contents to path.

        Raises:
            ArtifactWriteError: If the file cannot be written
        """
        ...


class DiskWriter:
    """Writes UTF-8 files, creating parent directories as needed.

    Files that already hold the same contents are left untouched so their
    modification times do not change between identical runs.
    """

    def __init__(self):
        self.written: list[Path] = []

    async def write(self, path: Path, contents: str) -> None:
        path = Path(path)
        try:
            changed = await asyncio.to_thread(self._write_if_changed, path, contents)
        except OSError as e:
            raise ArtifactWriteError(path, e) from e

        if changed:
            self.written.append(path)
        else:
            logger.debug("Unchanged, skipping %s", path)

    @staticmethod
    def _write_if_changed(path: Path, contents: str) -> bool:
        if path.is_file() and path.read_text(encoding="utf-8") == contents:
            return False
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(contents, encoding="utf-8")
        return True
