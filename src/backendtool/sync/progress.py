"""Text progress bar for sync output."""

from __future__ import annotations

BAR_WIDTH = 100


def format_progress_bar(done: int, total: int, width: int = BAR_WIDTH) -> str | None:
    """Render ``[=====     ] 50.00%`` for done/total.

    Returns None when the total is zero or negative, meaning no bar is shown.
    """
    if total <= 0:
        return None
    ratio = min(max(done / total, 0.0), 1.0)
    filled = "=" * int(ratio * width)
    return f"[{filled:<{width}}] {ratio:.2%}"
