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

"""Inspecting merged content for conflict markers."""

from pathlib import Path
from typing import Optional

from voidui.merge.three_way import CONFLICT_END, CONFLICT_SEPARATOR, CONFLICT_START
from voidui.models import MergeResult


def has_conflict_markers(content: str) -> bool:
    """True if all three conflict markers appear in ``content``."""
    return (
        CONFLICT_START in content
        and CONFLICT_SEPARATOR in content
        and CONFLICT_END in content
    )


def count_conflicts(content: str) -> int:
    """Number of conflict regions in ``content``."""
    return content.count(CONFLICT_START)


def format_merge_message(result: MergeResult, component_path: Path, component: Optional[str] = None) -> str:
    """User-facing summary of a merge result."""
    if result.success:
        return "✓ Successfully merged your changes with the latest version"

    component = component or Path(component_path).stem
    plural = "s" if result.conflict_count > 1 else ""

    return "\n".join([
        f"⚠️  Merge completed with {result.conflict_count} conflict{plural}",
        "",
        f"Conflict markers have been added to: {component_path}",
        "",
        "To resolve:",
        f'1. Open the file and search for "{CONFLICT_START}"',
        "2. Edit each conflict region to keep the code you want",
        f"3. Remove the conflict markers ({CONFLICT_START}, {CONFLICT_SEPARATOR}, {CONFLICT_END})",
        "4. Save the file",
        f"5. Run: voidui add {component} --scan --force",
    ])
