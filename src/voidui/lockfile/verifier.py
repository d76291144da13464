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

"""Drift detection for tracked component files."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from voidui.crypto.checksum import checksums_match, compute_checksum, compute_file_checksum
from voidui.locator import locate_component
from voidui.lockfile.store import get
from voidui.models import LockRecord, LockStore


class DriftStatus(str, Enum):
    """State of a component file relative to its lock record."""
    UNTRACKED = "untracked"
    MISSING = "missing"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"


@dataclass
class DriftReport:
    """Result of checking one component for drift."""
    component: str
    status: DriftStatus
    path: Optional[Path] = None
    installed_version: Optional[str] = None
    expected_checksum: Optional[str] = None
    actual_checksum: Optional[str] = None

    @property
    def is_modified(self) -> bool:
        return self.status == DriftStatus.MODIFIED


def has_drifted(record: LockRecord, content: Union[str, bytes]) -> bool:
    """True when ``content`` no longer matches the checksum recorded at install."""
    return not checksums_match(record.checksum, compute_checksum(content))


def verify_component(store: LockStore, component: str, path: Path) -> DriftReport:
    """
    Check a component file against its lock record.

    Args:
        store: Lock store to check against
        component: Component name
        path: Location of the component file

    Returns:
        Drift report for the component
    """
    record = get(store, component)
    if record is None:
        return DriftReport(component=component, status=DriftStatus.UNTRACKED, path=path)

    path = Path(path)
    if not path.exists():
        return DriftReport(
            component=component,
            status=DriftStatus.MISSING,
            path=path,
            installed_version=record.installed_version,
            expected_checksum=record.checksum
        )

    actual = compute_file_checksum(path)
    status = DriftStatus.UNCHANGED if checksums_match(record.checksum, actual) else DriftStatus.MODIFIED

    return DriftReport(
        component=component,
        status=status,
        path=path,
        installed_version=record.installed_version,
        expected_checksum=record.checksum,
        actual_checksum=actual
    )


def verify_project(store: LockStore, project_root: Path) -> List[DriftReport]:
    """Check every tracked component in a project, sorted by name."""
    reports = []
    for component in sorted(store.components):
        location = locate_component(component, project_root)
        reports.append(verify_component(store, component, location.path))
    return reports
