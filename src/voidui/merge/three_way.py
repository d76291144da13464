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

"""Line-based three-way merge.

Both sides are diffed against the common base. Hunks are grouped into
regions by their position in the base:

- a region changed by one side only takes that side's lines
- a region changed identically by both sides takes those lines once
- anything else becomes a conflict region wrapped in markers

Edits to adjacent but disjoint base lines do not conflict. The result
depends only on the three inputs and the labels.
"""

from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import List, Sequence, Tuple

from voidui.crypto.canonicalize import join_lines, split_lines
from voidui.models import MergeResult


CONFLICT_START = "<<<<<<<"
CONFLICT_SEPARATOR = "======="
CONFLICT_END = ">>>>>>>"

DEFAULT_OURS_LABEL = "your changes"
DEFAULT_THEIRS_LABEL = "theirs (upstream)"

OURS = "ours"
THEIRS = "theirs"


@dataclass(frozen=True)
class Hunk:
    """Replacement of base[start:end] by ``lines`` on one side."""
    side: str
    start: int
    end: int
    lines: Tuple[str, ...]


def compute_hunks(base: Sequence[str], other: Sequence[str], side: str) -> List[Hunk]:
    """Return the non-equal edits that turn ``base`` into ``other``."""
    # autojunk would make results depend on line popularity in long files
    matcher = SequenceMatcher(a=base, b=other, autojunk=False)
    hunks = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            continue
        hunks.append(Hunk(side=side, start=i1, end=i2, lines=tuple(other[j1:j2])))
    return hunks


def group_regions(hunks: List[Hunk]) -> List[List[Hunk]]:
    """
    Group hunks from both sides into merge regions.

    A hunk joins the current region when it starts strictly inside the
    region's base range, or at the region's first base line.
    """
    ordered = sorted(hunks, key=lambda h: (h.start, h.end, h.side))
    regions: List[List[Hunk]] = []

    for hunk in ordered:
        if regions:
            current = regions[-1]
            region_start = current[0].start
            region_end = max(h.end for h in current)
            if hunk.start < region_end or hunk.start == region_start:
                current.append(hunk)
                continue
        regions.append([hunk])

    return regions


def _render_side(base: Sequence[str], start: int, end: int, hunks: List[Hunk]) -> List[str]:
    """Render base[start:end] with one side's hunks applied."""
    out: List[str] = []
    pos = start
    for hunk in hunks:
        out.extend(base[pos:hunk.start])
        out.extend(hunk.lines)
        pos = hunk.end
    out.extend(base[pos:end])
    return out


def _conflict_block(ours: List[str], theirs: List[str], ours_label: str, theirs_label: str) -> List[str]:
    return [
        f"{CONFLICT_START} {ours_label}",
        *ours,
        CONFLICT_SEPARATOR,
        *theirs,
        f"{CONFLICT_END} {theirs_label}",
    ]


def three_way_merge(
    base: str,
    ours: str,
    theirs: str,
    ours_label: str = DEFAULT_OURS_LABEL,
    theirs_label: str = DEFAULT_THEIRS_LABEL
) -> MergeResult:
    """
    Merge local edits with an upstream update.

    Args:
        base: Content as originally installed
        ours: Current local content, possibly edited
        theirs: New upstream content
        ours_label: Text after the ``<<<<<<<`` marker
        theirs_label: Text after the ``>>>>>>>`` marker

    Returns:
        Merge result. Conflicts are reported in the result, never raised.
    """
    base_lines = split_lines(base)
    ours_lines = split_lines(ours)
    theirs_lines = split_lines(theirs)

    hunks = compute_hunks(base_lines, ours_lines, OURS) + compute_hunks(base_lines, theirs_lines, THEIRS)

    merged: List[str] = []
    conflict_count = 0
    pos = 0

    for region in group_regions(hunks):
        start = region[0].start
        end = max(h.end for h in region)
        merged.extend(base_lines[pos:start])

        ours_hunks = [h for h in region if h.side == OURS]
        theirs_hunks = [h for h in region if h.side == THEIRS]
        ours_version = _render_side(base_lines, start, end, ours_hunks)
        theirs_version = _render_side(base_lines, start, end, theirs_hunks)

        if not theirs_hunks:
            merged.extend(ours_version)
        elif not ours_hunks:
            merged.extend(theirs_version)
        elif ours_version == theirs_version:
            merged.extend(ours_version)
        else:
            conflict_count += 1
            merged.extend(_conflict_block(ours_version, theirs_version, ours_label, theirs_label))

        pos = end

    merged.extend(base_lines[pos:])

    return MergeResult(
        success=conflict_count == 0,
        content=join_lines(merged),
        conflict_count=conflict_count
    )
