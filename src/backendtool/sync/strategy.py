"""Transfer strategy selection.

A file moves from source to destination either through an in-memory buffer
(STREAMING, when both backends can stream) or through a temporary file on
disk (SPOOLING). The choice is made once per run.
"""

from __future__ import annotations

import io
import logging
import tempfile
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from backendtool.backends.base import StreamingBackend

if TYPE_CHECKING:
    from backendtool.backends.base import Backend
    from backendtool.core.types import FileEntry

logger = logging.getLogger(__name__)

TransferFunc = Callable[["FileEntry"], None]


class TransferStrategy(str, Enum):
    """How file contents are relayed between backends."""

    STREAMING = "streaming"
    SPOOLING = "spooling"


def select_strategy(source: Backend, destination: Backend) -> TransferStrategy:
    """Pick STREAMING when both backends support it, SPOOLING otherwise."""
    if source.supports_streaming and destination.supports_streaming:
        return TransferStrategy.STREAMING
    return TransferStrategy.SPOOLING


@contextmanager
def spooled_file(temp_dir: Path | None = None) -> Iterator[Path]:
    """Yield the path of a temporary file that is removed on exit."""
    handle = tempfile.NamedTemporaryFile(
        prefix="backendtool-", dir=temp_dir, delete=False
    )
    handle.close()
    path = Path(handle.name)
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)


def make_transfer(
    strategy: TransferStrategy,
    source: Backend,
    destination: Backend,
    temp_dir: Path | None = None,
) -> TransferFunc:
    """Build the file transfer function used for the whole run.

    Args:
        strategy: Selected strategy.
        source: Backend files are read from.
        destination: Backend files are written to.
        temp_dir: Directory for spooled files (system default when None).

    Returns:
        Function copying one entry from source to destination.
    """
    if strategy is TransferStrategy.STREAMING:
        if not isinstance(source, StreamingBackend) or not isinstance(
            destination, StreamingBackend
        ):
            raise TypeError("Streaming strategy requires streaming backends")
        streaming_source = source
        streaming_destination = destination

        def stream_file(entry: FileEntry) -> None:
            with io.BytesIO() as buffer:
                streaming_source.get_stream(entry.name, buffer)
                buffer.seek(0)
                streaming_destination.put_stream(entry.name, buffer)

        return stream_file

    def spool_file(entry: FileEntry) -> None:
        with spooled_file(temp_dir) as path:
            logger.debug(f"Spooling {entry.name} through {path}")
            source.get_file(entry.name, path)
            destination.put_file(entry.name, path)

    return spool_file
