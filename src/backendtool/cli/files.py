"""Primitive backend commands for the backendtool CLI.

Commands:
- list: List the files in a backend folder
- create-folder: Create the backend folder
- get: Download one file
- put: Upload one file
- delete: Delete one file
"""

from __future__ import annotations

from pathlib import Path

import click

from backendtool.backends import create_backend
from backendtool.cli.config import backend_arguments
from backendtool.core.types import UserInformationError
from backendtool.core.units import format_size

BACKEND_COMMAND_SETTINGS = {
    "ignore_unknown_options": True,
    "help_option_names": [],
}


def _too_many_arguments(command: str, url: str, extra: list[str]) -> UserInformationError:
    return UserInformationError(f"too many arguments: {','.join([command, url, *extra])}")


def _single_filename(command: str, url: str, extra: list[str]) -> str:
    """Return the one filename argument of get/put/delete."""
    if not extra:
        raise UserInformationError(f"{command.upper()} requires a filename argument")
    if len(extra) > 1:
        raise _too_many_arguments(command, url, extra)
    return extra[0]


@click.command("list", context_settings=BACKEND_COMMAND_SETTINGS)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def list_files(args: tuple[str, ...]) -> None:
    """List the files in a backend folder."""
    url, extra, options = backend_arguments(args)
    if extra:
        raise _too_many_arguments("list", url, extra)

    with create_backend(url, options) as backend:
        click.echo("Name\tDir/File\tLastChange\tSize")
        for entry in backend.list_files():
            kind = "Dir" if entry.is_folder else "File"
            modified = entry.last_modified.isoformat() if entry.last_modified else ""
            size = "" if entry.size < 0 else format_size(entry.size)
            click.echo(f"{entry.name}\t{kind}\t{modified}\t{size}")


@click.command("create-folder", context_settings=BACKEND_COMMAND_SETTINGS)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def create_folder(args: tuple[str, ...]) -> None:
    """Create the backend folder."""
    url, extra, options = backend_arguments(args)
    if extra:
        raise _too_many_arguments("create-folder", url, extra)

    with create_backend(url, options) as backend:
        backend.create_folder()


@click.command("get", context_settings=BACKEND_COMMAND_SETTINGS)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def get_file(args: tuple[str, ...]) -> None:
    """Download FILE from the backend, named after its base name."""
    url, extra, options = backend_arguments(args)
    local = Path(_single_filename("get", url, extra))
    if local.exists():
        raise UserInformationError("File already exists, not overwriting!")

    with create_backend(url, options) as backend:
        backend.get_file(local.name, local)


@click.command("put", context_settings=BACKEND_COMMAND_SETTINGS)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def put_file(args: tuple[str, ...]) -> None:
    """Upload FILE to the backend under its base name."""
    url, extra, options = backend_arguments(args)
    local = Path(_single_filename("put", url, extra))
    if not local.is_file():
        raise UserInformationError(f"File not found: {local}")

    with create_backend(url, options) as backend:
        backend.put_file(local.name, local)


@click.command("delete", context_settings=BACKEND_COMMAND_SETTINGS)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def delete_file(args: tuple[str, ...]) -> None:
    """Delete the file named after FILE's base name from the backend."""
    url, extra, options = backend_arguments(args)
    local = Path(_single_filename("delete", url, extra))

    with create_backend(url, options) as backend:
        backend.delete_file(local.name)
