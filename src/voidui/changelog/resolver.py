# Copyright (c) 2025 VoidUI Project
# 
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
# 
#     http://www.apache.org/licenses/LICENSE-2.0
# 
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Selecting and rendering changelog entries between two versions."""

from typing import List, Sequence, Union

from voidui.models import ChangeType, ChangelogEntry, parse_timestamp


CHANGE_ICONS = {
    ChangeType.ADDED: "+",
    ChangeType.CHANGED: "~",
    ChangeType.DEPRECATED: "!",
    ChangeType.REMOVED: "-",
    ChangeType.FIXED: "*",
    ChangeType.SECURITY: "!",
}

CHANGE_LABELS = {
    ChangeType.ADDED: "Added",
    ChangeType.CHANGED: "Changed",
    ChangeType.DEPRECATED: "Deprecated",
    ChangeType.REMOVED: "Removed",
    ChangeType.FIXED: "Fixed",
    ChangeType.SECURITY: "Security",
}

NO_CHANGES_MESSAGE = "No changes found between these versions."


def change_icon(change_type: Union[ChangeType, str]) -> str:
    return CHANGE_ICONS[ChangeType(change_type)]


def change_label(change_type: Union[ChangeType, str]) -> str:
    return CHANGE_LABELS[ChangeType(change_type)]


def _index_of(entries: Sequence[ChangelogEntry], version: str) -> int:
    for index, entry in enumerate(entries):
        if entry.version == version:
            return index
    return -1


def entries_between(
    entries: Sequence[ChangelogEntry],
    from_version: str,
    to_version: str
) -> List[ChangelogEntry]:
    """
    Entries from ``from_version`` to ``to_version``, both inclusive.

    ``entries`` is newest-first. The result is oldest-first whichever
    direction the versions are given in. If either version is missing
    the result is empty.
    """
    from_index = _index_of(entries, from_version)
    to_index = _index_of(entries, to_version)

    if from_index == -1 or to_index == -1:
        return []

    start = min(from_index, to_index)
    end = max(from_index, to_index)
    return list(reversed(entries[start:end + 1]))


def summarize(entry: ChangelogEntry) -> str:
    """One ``<icon> <Label>: <description>`` line per change."""
    return "\n".join(
        f"  {change_icon(change.type)} {change_label(change.type)}: {change.description}"
        for change in entry.changes
    )


def format_entry_date(date: str) -> str:
    """Render an entry date as e.g. ``Jan 20, 2025``."""
    moment = parse_timestamp(date)
    return f"{moment.strftime('%b')} {moment.day}, {moment.year}"


def format_entry(entry: ChangelogEntry) -> str:
    """Version header followed by one line per change."""
    header = f"Version {entry.version} ({format_entry_date(entry.date)})"
    if entry.breaking:
        header += " BREAKING"

    lines = [header]
    for change in entry.changes:
        lines.append(f"  {change_icon(change.type)} {change.description}")
    return "\n".join(lines)


def format_changelog(
    entries: Sequence[ChangelogEntry],
    from_version: str,
    to_version: str
) -> str:
    """Render every entry between two versions, oldest first."""
    relevant = entries_between(entries, from_version, to_version)
    if not relevant:
        return NO_CHANGES_MESSAGE

    return "\n\n".join(format_entry(entry) for entry in relevant) + "\n"
