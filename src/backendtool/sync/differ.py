"""Listing differ.

Compares a source listing with a destination listing and partitions the
entries into the groups a one-way sync acts on.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from backendtool.core.types import FileEntry


@dataclass
class SyncPlan:
    """Classification of one source/destination pair.

    Attributes:
        folders: Source folders, counted but never transferred.
        skip: Source files with a same-named, same-size destination file.
        copy: Source files that are new or differ in size, in source order.
        delete: Destination files absent from the source, in destination order.
    """

    folders: list[FileEntry] = field(default_factory=list)
    skip: list[FileEntry] = field(default_factory=list)
    copy: list[FileEntry] = field(default_factory=list)
    delete: list[FileEntry] = field(default_factory=list)

    @property
    def copy_size(self) -> int:
        return sum(f.known_size for f in self.copy)

    @property
    def skip_size(self) -> int:
        return sum(f.known_size for f in self.skip)

    @property
    def delete_size(self) -> int:
        return sum(f.known_size for f in self.delete)


def diff_listings(
    source: Sequence[FileEntry], destination: Sequence[FileEntry]
) -> SyncPlan:
    """Partition source and destination entries into a SyncPlan.

    Size is the only equality signal; timestamps are not compared, so a
    changed file that kept its size is skipped. Destination-only folders
    are left alone.

    Args:
        source: Source listing, in transfer order.
        destination: Destination listing.

    Returns:
        The sync plan.
    """
    dest_by_name = {entry.name: entry for entry in destination}
    source_names: set[str] = set()
    plan = SyncPlan()

    for entry in source:
        source_names.add(entry.name)
        if entry.is_folder:
            plan.folders.append(entry)
            continue

        existing = dest_by_name.get(entry.name)
        if existing is not None and existing.size == entry.size:
            plan.skip.append(entry)
        else:
            plan.copy.append(entry)

    plan.delete = [
        entry
        for entry in dest_by_name.values()
        if not entry.is_folder and entry.name not in source_names
    ]
    return plan
