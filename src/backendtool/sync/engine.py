"""One-way sync engine.

States:
    INIT -> SOURCE_LISTED -> DESTINATION_PROBED -> DESTINATION_LISTED
         -> DIFFED -> COPYING -> DELETING -> COMPLETE

Any error moves the engine to ABORTED and is re-raised. The source is
authoritative: files missing or different in size on the destination are
copied, destination-only files are deleted.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from backendtool.backends.base import FolderMissingError
from backendtool.core.types import FileEntry, SyncState
from backendtool.core.units import format_size
from backendtool.sync.differ import SyncPlan, diff_listings
from backendtool.sync.progress import format_progress_bar
from backendtool.sync.retry import (
    BACKOFF_BASE,
    BACKOFF_UNIT,
    MAX_ATTEMPTS,
    run_with_retries,
)
from backendtool.sync.strategy import (
    TransferStrategy,
    make_transfer,
    select_strategy,
)
from backendtool.sync.types import (
    InvalidTransitionError,
    Reporter,
    SyncCancelledError,
    SyncResult,
)

if TYPE_CHECKING:
    from backendtool.backends.base import Backend

logger = logging.getLogger(__name__)

# Valid state transitions (ABORTED is handled separately)
VALID_TRANSITIONS: dict[SyncState, set[SyncState]] = {
    SyncState.INIT: {SyncState.SOURCE_LISTED},
    SyncState.SOURCE_LISTED: {SyncState.DESTINATION_PROBED},
    SyncState.DESTINATION_PROBED: {SyncState.DESTINATION_LISTED},
    SyncState.DESTINATION_LISTED: {SyncState.DIFFED},
    SyncState.DIFFED: {SyncState.COPYING},
    SyncState.COPYING: {SyncState.DELETING},
    SyncState.DELETING: {SyncState.COMPLETE},
    SyncState.COMPLETE: set(),  # Terminal
    SyncState.ABORTED: set(),  # Terminal
}

TERMINAL_STATES = frozenset({SyncState.COMPLETE, SyncState.ABORTED})


class SyncEngine:
    """Reconciles a destination backend with a source backend.

    The engine runs once; create a new engine for another run.
    """

    def __init__(
        self,
        source: Backend,
        destination: Backend,
        reporter: Reporter | None = None,
        temp_dir: Path | None = None,
        strategy: TransferStrategy | None = None,
        max_attempts: int = MAX_ATTEMPTS,
        backoff_base: float = BACKOFF_BASE,
        backoff_unit: float = BACKOFF_UNIT,
    ) -> None:
        """Initialize the engine.

        Args:
            source: Authoritative backend.
            destination: Backend updated to match the source.
            reporter: Receives human-readable progress lines (logs at INFO
                when omitted).
            temp_dir: Directory for spooled transfers.
            strategy: Force a transfer strategy instead of selecting one
                from backend capabilities.
            max_attempts: Attempts per file operation.
            backoff_base: Base of the exponential retry backoff.
            backoff_unit: Length of one backoff unit in seconds.
        """
        self._source = source
        self._destination = destination
        self._report: Reporter = reporter or logger.info
        self._temp_dir = temp_dir
        self._strategy = strategy
        self._max_attempts = max_attempts
        self._backoff_base = backoff_base
        self._backoff_unit = backoff_unit
        self._cancel_event = threading.Event()
        self._state = SyncState.INIT

    @property
    def state(self) -> SyncState:
        return self._state

    def cancel(self) -> None:
        """Request cancellation; honored between items and attempts."""
        self._cancel_event.set()

    def _transition(self, new_state: SyncState) -> None:
        if new_state not in VALID_TRANSITIONS[self._state]:
            raise InvalidTransitionError(
                f"Cannot transition from {self._state.name} to {new_state.name}"
            )
        logger.debug(f"Sync state {self._state.name} -> {new_state.name}")
        self._state = new_state

    def _check_cancelled(self) -> None:
        if self._cancel_event.is_set():
            raise SyncCancelledError("Sync cancelled")

    def run(self) -> SyncResult:
        """Run the sync.

        Returns:
            Result with the plan and transferred byte counts.

        Raises:
            RetryExhaustedError: If a file operation failed on every attempt.
            SyncCancelledError: If cancel() was called.
            BackendError: If listing or probing a backend failed.
        """
        if self._state is not SyncState.INIT:
            raise InvalidTransitionError(f"Engine already ran ({self._state.name})")
        try:
            return self._run()
        except Exception:
            if self._state not in TERMINAL_STATES:
                logger.debug(f"Sync aborted in state {self._state.name}")
                self._state = SyncState.ABORTED
            raise

    def _run(self) -> SyncResult:
        self._report("Listing source files...")
        source_list = self._source.list_files()
        self._transition(SyncState.SOURCE_LISTED)

        self._ensure_destination()
        self._transition(SyncState.DESTINATION_PROBED)

        self._report("Listing destination files...")
        dest_list = self._destination.list_files()
        self._transition(SyncState.DESTINATION_LISTED)

        plan = diff_listings(source_list, dest_list)
        self._report_plan(plan)
        self._transition(SyncState.DIFFED)

        strategy = self._strategy or select_strategy(self._source, self._destination)
        logger.debug(f"Using {strategy.value} transfer strategy")
        transfer = make_transfer(
            strategy, self._source, self._destination, self._temp_dir
        )
        result = SyncResult(plan=plan, strategy=strategy)

        self._transition(SyncState.COPYING)
        result.copied_bytes, copy_retries = self._process(
            plan.copy, plan.copy_size, "Syncing", transfer
        )

        self._transition(SyncState.DELETING)
        result.deleted_bytes, delete_retries = self._process(
            plan.delete,
            plan.delete_size,
            "Deleting",
            lambda entry: self._destination.delete_file(entry.name),
        )
        result.retries = copy_retries + delete_retries

        self._transition(SyncState.COMPLETE)
        self._report("Sync complete")
        return result

    def _ensure_destination(self) -> None:
        self._report("Ensuring folder exists on destination...")
        try:
            self._destination.test()
        except FolderMissingError:
            self._report("Creating folder on destination...")
            self._destination.create_folder()

    def _report_plan(self, plan: SyncPlan) -> None:
        if plan.folders:
            self._report(f"Ignoring {len(plan.folders)} folders")
        if plan.copy:
            self._report(
                f"Syncing  {len(plan.copy)} files ({format_size(plan.copy_size)})"
            )
        if plan.skip:
            self._report(
                f"Skipping {len(plan.skip)} files ({format_size(plan.skip_size)})"
            )
        if plan.delete:
            self._report(
                f"Deleting {len(plan.delete)} files "
                f"({format_size(plan.delete_size)}) from destination"
            )

    def _process(
        self,
        entries: list[FileEntry],
        total_size: int,
        verb: str,
        operation: Callable[[FileEntry], None],
    ) -> tuple[int, int]:
        """Run operation on each entry in order under the retry policy.

        Returns:
            Tuple of (bytes processed, retries used).
        """
        done = 0
        retries = 0
        for index, entry in enumerate(entries):
            self._check_cancelled()

            def report_attempt(attempt: int, entry: FileEntry = entry) -> None:
                self._report(
                    f"{index + 1}/{len(entries)} {verb} {entry.name} "
                    f"({format_size(entry.known_size)})"
                )
                bar = format_progress_bar(done, total_size)
                if bar is not None:
                    self._report(bar)

            retries += run_with_retries(
                lambda entry=entry: operation(entry),
                on_attempt=report_attempt,
                max_attempts=self._max_attempts,
                backoff_base=self._backoff_base,
                backoff_unit=self._backoff_unit,
                cancel_event=self._cancel_event,
            )
            done += entry.known_size
        return done, retries
