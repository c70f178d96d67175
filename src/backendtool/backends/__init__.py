"""Storage backends and the protocol registry.

This package provides:
- Backend / StreamingBackend: the interface the sync engine depends on
- FileBackend, WebDAVBackend, S3Backend: concrete protocols
- create_backend: factory picking a backend class from the URL scheme

Usage:
    from backendtool.backends import create_backend

    with create_backend("file:///srv/backup", {}) as backend:
        for entry in backend.list_files():
            ...
"""

from __future__ import annotations

from collections.abc import Mapping

from backendtool.backends.base import (
    Backend,
    BackendError,
    FileMissingError,
    FolderMissingError,
    StreamingBackend,
    TransportError,
)
from backendtool.backends.local import FileBackend
from backendtool.backends.s3 import S3Backend
from backendtool.backends.webdav import WebDAVBackend
from backendtool.core.config import BackendConfig
from backendtool.core.types import UserInformationError

BACKENDS: dict[str, type[Backend]] = {
    "file": FileBackend,
    "webdav": WebDAVBackend,
    "webdavs": WebDAVBackend,
    "s3": S3Backend,
}


def supported_backends() -> list[str]:
    """Protocol names accepted by create_backend."""
    return sorted(BACKENDS)


def create_backend(url: str, options: Mapping[str, str] | None = None) -> Backend:
    """Factory function to create a backend from a URL.

    Args:
        url: Backend URL, e.g. "s3://bucket/prefix".
        options: Backend options parsed from the command line.

    Returns:
        Configured Backend instance.

    Raises:
        UserInformationError: If the protocol is not supported.
    """
    config = BackendConfig(url=url, options=dict(options or {}))
    backend_class = BACKENDS.get(config.scheme)
    if backend_class is None:
        raise UserInformationError(f"Backend not supported: {config.scheme or url}")
    return backend_class(config)


__all__ = [
    # Interface
    "Backend",
    "StreamingBackend",
    # Errors
    "BackendError",
    "FileMissingError",
    "FolderMissingError",
    "TransportError",
    # Implementations
    "FileBackend",
    "S3Backend",
    "WebDAVBackend",
    # Registry
    "BACKENDS",
    "create_backend",
    "supported_backends",
]
