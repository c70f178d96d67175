"""Sync command for the backendtool CLI.

Commands:
- sync: Make a second backend mirror the first one
"""

from __future__ import annotations

import click

from backendtool.backends import create_backend
from backendtool.cli.config import backend_arguments, split_sync_arguments
from backendtool.cli.files import BACKEND_COMMAND_SETTINGS
from backendtool.core.config import ToolOptions, extract_options
from backendtool.core.types import UserInformationError
from backendtool.sync import SyncEngine


@click.command("sync", context_settings=BACKEND_COMMAND_SETTINGS)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def sync(args: tuple[str, ...]) -> None:
    """Copy new and changed files from the first backend to the second.

    Files on the second backend that are missing from the first are deleted.
    """
    first_args, second_args = split_sync_arguments(args)
    url, _, options = backend_arguments(first_args)
    if not second_args:
        raise UserInformationError("SYNC requires parameters for a second backend")

    second_positional, second_options = extract_options(second_args)
    if not second_positional:
        raise UserInformationError("SYNC requires parameters for a second backend")
    settings = ToolOptions.from_options(options)

    with create_backend(url, options) as source, create_backend(
        second_positional[0], second_options
    ) as destination:
        engine = SyncEngine(
            source,
            destination,
            reporter=click.echo,
            temp_dir=settings.temp_dir,
        )
        engine.run()
