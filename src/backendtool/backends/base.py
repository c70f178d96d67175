"""Backend abstraction for remote storage.

This module provides:
- Backend: abstract interface bound to one remote storage location
- StreamingBackend: backends that can read and write file-like objects
- The backend error taxonomy
- local_target: download target that is removed on failure
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO, TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    import httpx

    from backendtool.core.config import BackendConfig
    from backendtool.core.types import FileEntry


class BackendError(Exception):
    """Base exception for backend operations."""


class FolderMissingError(BackendError):
    """The container targeted by the backend does not exist."""


class FileMissingError(BackendError):
    """The requested remote file does not exist."""


class TransportError(BackendError):
    """Transport-level failure, optionally carrying the HTTP response."""

    def __init__(self, message: str, response: httpx.Response | None = None) -> None:
        super().__init__(message)
        self.response = response

    @property
    def status_code(self) -> int | None:
        return self.response.status_code if self.response is not None else None


@contextmanager
def local_target(path: Path | str) -> Iterator[IO[bytes]]:
    """Open a local file for a download, removing it if the download fails."""
    target = Path(path)
    try:
        with target.open("wb") as f:
            yield f
    except BaseException:
        target.unlink(missing_ok=True)
        raise


class Backend(ABC):
    """Abstract interface for a remote storage location."""

    description: ClassVar[str] = ""

    def __init__(self, config: BackendConfig) -> None:
        self.config = config

    @property
    def supports_streaming(self) -> bool:
        """Whether files can be moved through in-memory streams."""
        return False

    @abstractmethod
    def list_files(self) -> list[FileEntry]:
        """List the entries in the container.

        Raises:
            FolderMissingError: If the container does not exist.
            BackendError: On transport or authentication failure.
        """

    @abstractmethod
    def test(self) -> None:
        """Check that the container exists and is reachable.

        Raises:
            FolderMissingError: If the container does not exist.
            BackendError: On any other failure.
        """

    @abstractmethod
    def create_folder(self) -> None:
        """Create the container."""

    @abstractmethod
    def get_file(self, name: str, path: Path | str) -> None:
        """Download a remote file to a local path.

        Raises:
            FileMissingError: If the remote file does not exist.
        """

    @abstractmethod
    def put_file(self, name: str, path: Path | str) -> None:
        """Upload a local file under the given remote name."""

    @abstractmethod
    def delete_file(self, name: str) -> None:
        """Delete a remote file.

        Raises:
            FileMissingError: If the remote file does not exist.
        """

    def close(self) -> None:
        """Release any connection held by the backend."""

    def __enter__(self) -> Backend:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class StreamingBackend(Backend):
    """Backend that can also transfer through file-like objects."""

    @property
    def supports_streaming(self) -> bool:
        return True

    @abstractmethod
    def get_stream(self, name: str, stream: IO[bytes]) -> None:
        """Write the contents of a remote file into a binary stream."""

    @abstractmethod
    def put_stream(self, name: str, stream: IO[bytes]) -> None:
        """Upload the remaining contents of a binary stream."""
