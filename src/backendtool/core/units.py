"""Human-readable size formatting."""

from __future__ import annotations

KB = 1024
MB = KB * 1024
GB = MB * 1024
TB = GB * 1024


def format_size(size_bytes: int) -> str:
    """Format size in bytes to human-readable string."""
    if size_bytes >= TB:
        return f"{size_bytes / TB:.2f} TB"
    if size_bytes >= GB:
        return f"{size_bytes / GB:.2f} GB"
    if size_bytes >= MB:
        return f"{size_bytes / MB:.2f} MB"
    if size_bytes >= KB:
        return f"{size_bytes / KB:.2f} KB"
    return f"{size_bytes} bytes"
