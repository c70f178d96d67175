"""Tests for shared backend helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from backendtool.backends.base import local_target


class TestLocalTarget:
    """Tests for local_target()."""

    def test_keeps_completed_download(self, tmp_path: Path) -> None:
        target = tmp_path / "done.bin"

        with local_target(target) as f:
            f.write(b"complete")

        assert target.read_bytes() == b"complete"

    def test_removes_partial_download(self, tmp_path: Path) -> None:
        """An error while writing removes the partially written file."""
        target = tmp_path / "partial.bin"

        with pytest.raises(ConnectionError):
            with local_target(target) as f:
                f.write(b"half")
                raise ConnectionError("connection reset")

        assert not target.exists()
