"""Core module - Shared types, configuration and formatting."""

from backendtool.core.config import (
    BackendConfig,
    ToolOptions,
    apply_environment_fallbacks,
    extract_options,
    parse_bool_option,
)
from backendtool.core.types import FileEntry, SyncState, UserInformationError
from backendtool.core.units import format_size

__all__ = [
    # Config
    "BackendConfig",
    "ToolOptions",
    "apply_environment_fallbacks",
    "extract_options",
    "parse_bool_option",
    # Types
    "FileEntry",
    "SyncState",
    "UserInformationError",
    # Units
    "format_size",
]
