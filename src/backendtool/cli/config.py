"""Configuration utilities for the backendtool CLI.

This module provides argument splitting, backend option handling and
logging setup shared across CLI commands.
"""

from __future__ import annotations

import itertools
import logging
import sys
from collections.abc import Sequence

import click

from backendtool.core.config import (
    ToolOptions,
    apply_environment_fallbacks,
    extract_options,
)


def backend_arguments(args: Sequence[str]) -> tuple[str, list[str], dict[str, str]]:
    """Split raw command arguments into URL, extra positionals and options.

    Credential options fall back to the AUTH_USERNAME and AUTH_PASSWORD
    environment variables.

    Raises:
        click.UsageError: If no backend URL was given.
    """
    positional, options = extract_options(args)
    if not positional:
        raise click.UsageError("Missing backend URL")
    apply_environment_fallbacks(options)
    return positional[0], positional[1:], options


def split_sync_arguments(args: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split sync arguments into first and second backend arguments.

    The first backend owns its URL and the ``--`` options right after it;
    the first argument that is not an option starts the second backend.
    """
    first = list(args[:1])
    first.extend(itertools.takewhile(lambda a: a.startswith("--"), args[1:]))
    return first, list(args[len(first):])


def tool_options(args: Sequence[str]) -> ToolOptions:
    """Process-wide options, read from the first backend's arguments.

    Args:
        args: Command line arguments, starting with the command name.
    """
    if args and args[0].lower() == "sync":
        args = split_sync_arguments(args[1:])[0]
    _, options = extract_options(args)
    return ToolOptions.from_options(options)


def setup_logging(debug: bool = False) -> None:
    """Send backendtool log records to stdout.

    Args:
        debug: Log at DEBUG level instead of INFO.
    """
    package_logger = logging.getLogger("backendtool")
    # Remove handlers from a previous run in the same process
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
