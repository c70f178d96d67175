"""One-way synchronization between two backends.

Architecture:
    list source -> probe/create destination -> list destination
    -> diff_listings -> copy pass -> delete pass

Components:
- **diff_listings**: Partitions listings into folders/skip/copy/delete
- **select_strategy / make_transfer**: In-memory or spooled file relay
- **run_with_retries**: Fixed retry policy with exponential backoff
- **SyncEngine**: Sequences the run and reports progress
"""

from backendtool.sync.differ import SyncPlan, diff_listings
from backendtool.sync.engine import SyncEngine
from backendtool.sync.progress import format_progress_bar
from backendtool.sync.retry import (
    BACKOFF_BASE,
    BACKOFF_UNIT,
    MAX_ATTEMPTS,
    backoff_delay,
    describe_error,
    run_with_retries,
)
from backendtool.sync.strategy import (
    TransferStrategy,
    make_transfer,
    select_strategy,
    spooled_file,
)
from backendtool.sync.types import (
    InvalidTransitionError,
    RetryExhaustedError,
    SyncCancelledError,
    SyncError,
    SyncResult,
)

__all__ = [
    # Differ
    "SyncPlan",
    "diff_listings",
    # Engine
    "SyncEngine",
    "SyncResult",
    # Progress
    "format_progress_bar",
    # Retry
    "BACKOFF_BASE",
    "BACKOFF_UNIT",
    "MAX_ATTEMPTS",
    "backoff_delay",
    "describe_error",
    "run_with_retries",
    # Strategy
    "TransferStrategy",
    "make_transfer",
    "select_strategy",
    "spooled_file",
    # Errors
    "InvalidTransitionError",
    "RetryExhaustedError",
    "SyncCancelledError",
    "SyncError",
]
