"""Tests for transfer strategy selection and the transfer functions."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from backendtool.core.types import FileEntry
from backendtool.sync.strategy import (
    TransferStrategy,
    make_transfer,
    select_strategy,
    spooled_file,
)
from tests.fixtures import MemoryBackend, MemoryStreamingBackend


class TestSelectStrategy:
    """Tests for select_strategy()."""

    def test_both_streaming(self) -> None:
        assert (
            select_strategy(MemoryStreamingBackend(), MemoryStreamingBackend())
            is TransferStrategy.STREAMING
        )

    @pytest.mark.parametrize(
        ("source", "destination"),
        [
            (MemoryBackend, MemoryStreamingBackend),
            (MemoryStreamingBackend, MemoryBackend),
            (MemoryBackend, MemoryBackend),
        ],
    )
    def test_spooling_when_either_cannot_stream(
        self, source: type[MemoryBackend], destination: type[MemoryBackend]
    ) -> None:
        assert select_strategy(source(), destination()) is TransferStrategy.SPOOLING


class TestStreamingTransfer:
    """Tests for the in-memory transfer path."""

    def test_copies_contents(self) -> None:
        source = MemoryStreamingBackend(files={"a.bin": b"hello"})
        destination = MemoryStreamingBackend()
        transfer = make_transfer(TransferStrategy.STREAMING, source, destination)

        transfer(FileEntry("a.bin", size=5))

        assert destination.files == {"a.bin": b"hello"}
        assert ("get_stream", "a.bin") in source.calls
        assert ("put_stream", "a.bin") in destination.calls

    def test_never_creates_temp_file(self) -> None:
        """Streaming should not touch the temporary file factory."""
        source = MemoryStreamingBackend(files={"a.bin": b"x" * 1024})
        destination = MemoryStreamingBackend()
        transfer = make_transfer(TransferStrategy.STREAMING, source, destination)

        with patch(
            "backendtool.sync.strategy.tempfile.NamedTemporaryFile"
        ) as temp_factory:
            transfer(FileEntry("a.bin", size=1024))

        temp_factory.assert_not_called()
        assert destination.files["a.bin"] == b"x" * 1024

    def test_requires_streaming_backends(self) -> None:
        with pytest.raises(TypeError):
            make_transfer(TransferStrategy.STREAMING, MemoryBackend(), MemoryStreamingBackend())


class TestSpoolingTransfer:
    """Tests for the temporary-file transfer path."""

    def test_copies_contents_through_path(self, tmp_path: Path) -> None:
        source = MemoryBackend(files={"b.txt": b"spooled"})
        destination = MemoryBackend()
        transfer = make_transfer(
            TransferStrategy.SPOOLING, source, destination, temp_dir=tmp_path
        )

        transfer(FileEntry("b.txt", size=7))

        assert destination.files == {"b.txt": b"spooled"}
        assert list(tmp_path.iterdir()) == []

    def test_temp_file_removed_on_error(self, tmp_path: Path) -> None:
        """The spooled file should be deleted when the upload fails."""
        source = MemoryBackend(files={"b.txt": b"data"})
        destination = MemoryBackend()
        destination.failures["put_file"] = 1
        transfer = make_transfer(
            TransferStrategy.SPOOLING, source, destination, temp_dir=tmp_path
        )

        with pytest.raises(ConnectionError):
            transfer(FileEntry("b.txt", size=4))

        assert list(tmp_path.iterdir()) == []


class TestSpooledFile:
    """Tests for spooled_file()."""

    def test_creates_and_removes_file(self, tmp_path: Path) -> None:
        with spooled_file(tmp_path) as path:
            assert path.exists()
            assert path.parent == tmp_path
            path.write_bytes(b"content")

        assert not path.exists()

    def test_removes_file_when_body_raises(self, tmp_path: Path) -> None:
        with pytest.raises(RuntimeError), spooled_file(tmp_path) as path:
            raise RuntimeError("boom")

        assert not path.exists()
