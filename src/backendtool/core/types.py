"""Shared types for backendtool.

This module defines types and enums used by backends, the sync engine
and the command line.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class UserInformationError(Exception):
    """Error caused by user input, reported without a traceback."""


@dataclass(frozen=True)
class FileEntry:
    """Immutable snapshot of one remote object taken at listing time.

    Attributes:
        name: Name of the object, unique within a listing.
        is_folder: Whether the entry is a folder.
        size: Size in bytes, or -1 when unknown.
        last_modified: Last modification time (advisory only).
    """

    name: str
    is_folder: bool = False
    size: int = -1
    last_modified: datetime | None = None

    @property
    def known_size(self) -> int:
        """Size in bytes, counting unknown sizes as zero."""
        return max(self.size, 0)


class SyncState(str, Enum):
    """State of a sync run.

    INIT -> SOURCE_LISTED -> DESTINATION_PROBED -> DESTINATION_LISTED
         -> DIFFED -> COPYING -> DELETING -> COMPLETE

    ABORTED is reachable from every non-terminal state.
    """

    INIT = "init"
    SOURCE_LISTED = "source_listed"
    DESTINATION_PROBED = "destination_probed"
    DESTINATION_LISTED = "destination_listed"
    DIFFED = "diffed"
    COPYING = "copying"
    DELETING = "deleting"
    COMPLETE = "complete"
    ABORTED = "aborted"
