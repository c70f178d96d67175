"""Local filesystem backend.

URLs look like ``file:///absolute/folder`` or ``file://relative/folder``.
Only the top level of the folder is listed.
"""

from __future__ import annotations

import logging
import os
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, TYPE_CHECKING

from backendtool.backends.base import (
    BackendError,
    FileMissingError,
    FolderMissingError,
    StreamingBackend,
)
from backendtool.core.types import FileEntry

if TYPE_CHECKING:
    from backendtool.core.config import BackendConfig

logger = logging.getLogger(__name__)


class FileBackend(StreamingBackend):
    """Local directory used as a storage container."""

    description = "Local folder (file:///path/to/folder)"

    def __init__(self, config: BackendConfig) -> None:
        super().__init__(config)
        if not config.location:
            raise BackendError("file backend requires a folder path")
        self._base_path = Path(config.location).expanduser()

    def _file_path(self, name: str) -> Path:
        """Get the local path for a remote name, refusing nested names."""
        if not name or Path(name).name != name:
            raise BackendError(f"Invalid file name: {name!r}")
        return self._base_path / name

    def list_files(self) -> list[FileEntry]:
        if not self._base_path.is_dir():
            raise FolderMissingError(f"Folder not found: {self._base_path}")

        entries = []
        with os.scandir(self._base_path) as it:
            for item in it:
                try:
                    stat = item.stat()
                except OSError as e:
                    # Dangling symlink: report the link itself
                    logger.warning(f"Cannot follow {item.path}: {e}")
                    stat = item.stat(follow_symlinks=False)
                is_folder = item.is_dir()
                entries.append(
                    FileEntry(
                        name=item.name,
                        is_folder=is_folder,
                        size=-1 if is_folder else stat.st_size,
                        last_modified=datetime.fromtimestamp(
                            stat.st_mtime, tz=timezone.utc
                        ),
                    )
                )
        return entries

    def test(self) -> None:
        if not self._base_path.is_dir():
            raise FolderMissingError(f"Folder not found: {self._base_path}")

    def create_folder(self) -> None:
        logger.debug(f"Creating folder {self._base_path}")
        self._base_path.mkdir(parents=True, exist_ok=True)

    def get_file(self, name: str, path: Path | str) -> None:
        source = self._file_path(name)
        if not source.is_file():
            raise FileMissingError(f"File not found: {name}")
        shutil.copyfile(source, path)

    def put_file(self, name: str, path: Path | str) -> None:
        shutil.copyfile(path, self._file_path(name))

    def get_stream(self, name: str, stream: IO[bytes]) -> None:
        source = self._file_path(name)
        if not source.is_file():
            raise FileMissingError(f"File not found: {name}")
        with source.open("rb") as f:
            shutil.copyfileobj(f, stream)

    def put_stream(self, name: str, stream: IO[bytes]) -> None:
        with self._file_path(name).open("wb") as f:
            shutil.copyfileobj(stream, f)

    def delete_file(self, name: str) -> None:
        target = self._file_path(name)
        if not target.is_file():
            raise FileMissingError(f"File not found: {name}")
        target.unlink()
