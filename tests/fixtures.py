"""In-memory backends for sync engine and CLI tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import IO

from backendtool.backends.base import (
    Backend,
    FileMissingError,
    FolderMissingError,
    StreamingBackend,
)
from backendtool.core.config import BackendConfig
from backendtool.core.types import FileEntry


class MemoryBackend(Backend):
    """Path-only backend keeping files in a dict.

    Attributes:
        files: Stored file contents by name.
        folders: Folder names reported by list_files.
        exists: Whether the container exists.
        calls: Log of (operation, name) tuples.
        failures: Operation name -> remaining number of times it raises.
    """

    def __init__(
        self,
        files: dict[str, bytes] | None = None,
        folders: list[str] | None = None,
        exists: bool = True,
    ) -> None:
        super().__init__(BackendConfig(url="memory://test"))
        self.files: dict[str, bytes] = dict(files or {})
        self.folders = list(folders or [])
        self.exists = exists
        self.closed = False
        self.calls: list[tuple[str, str]] = []
        self.failures: dict[str, int] = {}
        self.error_factory: Callable[[str], Exception] = lambda op: ConnectionError(
            f"{op} failed"
        )

    def _record(self, operation: str, name: str = "") -> None:
        self.calls.append((operation, name))
        remaining = self.failures.get(operation, 0)
        if remaining > 0:
            self.failures[operation] = remaining - 1
            raise self.error_factory(operation)

    def list_files(self) -> list[FileEntry]:
        self._record("list")
        if not self.exists:
            raise FolderMissingError("missing")
        entries = [FileEntry(name=f, is_folder=True) for f in self.folders]
        entries += [FileEntry(name=n, size=len(d)) for n, d in self.files.items()]
        return entries

    def test(self) -> None:
        self._record("test")
        if not self.exists:
            raise FolderMissingError("missing")

    def create_folder(self) -> None:
        self._record("create_folder")
        self.exists = True

    def get_file(self, name: str, path: Path | str) -> None:
        self._record("get_file", name)
        if name not in self.files:
            raise FileMissingError(name)
        Path(path).write_bytes(self.files[name])

    def put_file(self, name: str, path: Path | str) -> None:
        self._record("put_file", name)
        self.files[name] = Path(path).read_bytes()

    def delete_file(self, name: str) -> None:
        self._record("delete_file", name)
        if name not in self.files:
            raise FileMissingError(name)
        del self.files[name]

    def close(self) -> None:
        self.closed = True


class MemoryStreamingBackend(MemoryBackend, StreamingBackend):
    """In-memory backend that also supports stream transfers."""

    def get_stream(self, name: str, stream: IO[bytes]) -> None:
        self._record("get_stream", name)
        if name not in self.files:
            raise FileMissingError(name)
        stream.write(self.files[name])

    def put_stream(self, name: str, stream: IO[bytes]) -> None:
        self._record("put_stream", name)
        self.files[name] = stream.read()
