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

"""Unified diffs and terminal rendering of diffs and changelogs."""

import difflib
from typing import Sequence

from rich.text import Text

from voidui.changelog.resolver import change_icon, change_label, format_entry_date
from voidui.crypto.canonicalize import split_lines
from voidui.models import ChangeType, ChangelogEntry


CHANGE_STYLES = {
    ChangeType.ADDED: "green",
    ChangeType.CHANGED: "blue",
    ChangeType.DEPRECATED: "yellow",
    ChangeType.REMOVED: "red",
    ChangeType.FIXED: "cyan",
    ChangeType.SECURITY: "magenta",
}


def unified_diff(
    old_content: str,
    new_content: str,
    old_label: str,
    new_label: str,
    context_lines: int = 3
) -> str:
    """
    Generate a unified diff between two versions of a file.

    Lines are split on LF only, so a missing trailing newline shows up as
    a change. The output is for human inspection only. Identical inputs produce an
    empty string.
    """
    diff = difflib.unified_diff(
        split_lines(old_content),
        split_lines(new_content),
        fromfile=old_label,
        tofile=new_label,
        n=context_lines,
        lineterm=""
    )
    return "\n".join(diff)


def render_diff(diff_text: str) -> Text:
    """Apply terminal styles to unified diff text."""
    text = Text()
    for index, line in enumerate(diff_text.split("\n")):
        if index:
            text.append("\n")
        if line.startswith("---") or line.startswith("+++"):
            text.append(line, style="bold")
        elif line.startswith("@@"):
            text.append(line, style="cyan")
        elif line.startswith("+"):
            text.append(line, style="green")
        elif line.startswith("-"):
            text.append(line, style="red")
        else:
            text.append(line, style="dim")
    return text


def render_summary(entry: ChangelogEntry) -> Text:
    """Styled counterpart of ``summarize``."""
    text = Text()
    for index, change in enumerate(entry.changes):
        if index:
            text.append("\n")
        style = CHANGE_STYLES[ChangeType(change.type)]
        text.append(f"  {change_icon(change.type)} ")
        text.append(f"{change_label(change.type)}: {change.description}", style=style)
    return text


def render_changelog(entries: Sequence[ChangelogEntry]) -> Text:
    """Styled changelog for entries already in display order."""
    text = Text()
    for entry in entries:
        text.append(f"Version {entry.version}", style="bold")
        text.append(f" ({format_entry_date(entry.date)})", style="dim")
        if entry.breaking:
            text.append(" BREAKING", style="bold red")
        text.append("\n")
        for change in entry.changes:
            style = CHANGE_STYLES[ChangeType(change.type)]
            text.append(f"  {change_icon(change.type)} ")
            text.append(change.description, style=style)
            text.append("\n")
        text.append("\n")
    return text
