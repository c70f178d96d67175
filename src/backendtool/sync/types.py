"""Shared types and exceptions for sync operations.

This module provides:
- SyncError, RetryExhaustedError, SyncCancelledError: Exception classes
- InvalidTransitionError: Raised on an illegal engine state change
- SyncResult: Overall sync operation result
- Type aliases for callbacks
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from backendtool.sync.differ import SyncPlan
    from backendtool.sync.strategy import TransferStrategy


class SyncError(Exception):
    """Base exception for sync errors."""


class RetryExhaustedError(SyncError):
    """A unit of work failed on every allowed attempt."""


class SyncCancelledError(SyncError):
    """The sync run was cancelled between items or attempts."""


class InvalidTransitionError(SyncError):
    """Raised when attempting an invalid engine state transition."""


@dataclass
class SyncResult:
    """Result of a completed sync run."""

    plan: SyncPlan
    strategy: TransferStrategy
    copied_bytes: int = 0
    deleted_bytes: int = 0
    retries: int = 0

    @property
    def changed(self) -> bool:
        """Whether the run copied or deleted anything."""
        return bool(self.plan.copy or self.plan.delete)


# Receives one human-readable progress line
Reporter = Callable[[str], None]

# Called with the zero-based attempt index before each attempt
AttemptCallback = Callable[[int], None]
