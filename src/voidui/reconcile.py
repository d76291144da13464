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

"""Installing and updating tracked components.

These functions carry the update flow between the drift detector, the merge
engine and the lock store. Prompting and output stay in the CLI.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from voidui.crypto.canonicalize import read_component_text, write_component_text
from voidui.crypto.checksum import compute_checksum
from voidui.errors import BaseUnavailableError, VoidUIError
from voidui.lockfile.store import get, upsert
from voidui.lockfile.verifier import has_drifted
from voidui.merge import DEFAULT_OURS_LABEL, three_way_merge
from voidui.models import LockRecord, LockStore, MergeResult, utc_timestamp

logger = logging.getLogger(__name__)


class UpdateStrategy(str, Enum):
    """How to apply an upstream update to a local file."""
    MERGE = "merge"
    OVERWRITE = "overwrite"


@dataclass
class UpdateOutcome:
    """Result of ``reconcile_update``."""
    store: LockStore
    component: str
    path: Path
    from_version: str
    to_version: str
    was_modified: bool
    merge_result: Optional[MergeResult] = None

    @property
    def merged(self) -> bool:
        return self.merge_result is not None

    @property
    def conflicts(self) -> int:
        return self.merge_result.conflict_count if self.merge_result else 0

    @property
    def success(self) -> bool:
        return self.conflicts == 0


def new_lock_record(
    version: str,
    content: Union[str, bytes],
    registry_url: Optional[str] = None,
    now: Optional[datetime] = None
) -> LockRecord:
    """Lock record for content that was just written."""
    return LockRecord(
        installed_version=version,
        installed_at=utc_timestamp(now),
        checksum=compute_checksum(content),
        registry_url=registry_url
    )


def track_component(
    store: LockStore,
    component: str,
    version: str,
    content: Union[str, bytes],
    registry_url: Optional[str] = None,
    now: Optional[datetime] = None
) -> LockStore:
    """Return a store that records ``content`` as the installed ``version``."""
    record = new_lock_record(version, content, registry_url, now)
    logger.debug(f"Tracking {component}@{version} ({record.checksum})")
    return upsert(store, component, record)


def reconcile_update(
    store: LockStore,
    component: str,
    path: Path,
    latest_version: str,
    latest_content: str,
    strategy: UpdateStrategy,
    base_content: Optional[str] = None,
    now: Optional[datetime] = None
) -> UpdateOutcome:
    """
    Update a tracked component file to ``latest_version``.

    An unmodified file is always overwritten. A modified file is merged
    when ``strategy`` is MERGE, otherwise overwritten. The file is written
    even when the merge leaves conflicts; the lock record then stores the
    checksum of the written content.

    Args:
        store: Current lock store
        component: Component name; must be tracked
        path: Local component file
        latest_version: Version being installed
        latest_content: Upstream source of ``latest_version``
        strategy: Merge or overwrite
        base_content: Source of the installed version, needed for merging
        now: Timestamp for the lock record

    Returns:
        Outcome holding the updated store

    Raises:
        BaseUnavailableError: Merging a modified file without ``base_content``.
            Nothing is written in that case.
    """
    record = get(store, component)
    if record is None:
        raise VoidUIError(f'Component "{component}" is not tracked in lock file')

    path = Path(path)
    ours = read_component_text(path)
    modified = has_drifted(record, ours)

    merge_result = None
    if strategy == UpdateStrategy.MERGE and modified:
        if base_content is None:
            raise BaseUnavailableError(component, record.installed_version)
        merge_result = three_way_merge(
            base_content,
            ours,
            latest_content,
            ours_label=DEFAULT_OURS_LABEL,
            theirs_label=f"v{latest_version}"
        )
        new_content = merge_result.content
        if not merge_result.success:
            logger.warning(f"Merge of {component} left {merge_result.conflict_count} conflict(s) in {path}")
    else:
        new_content = latest_content

    write_component_text(path, new_content)

    updated = record.model_copy(update={
        "installed_version": latest_version,
        "installed_at": utc_timestamp(now),
        "checksum": compute_checksum(new_content),
    })
    logger.info(f"Updated {component} from {record.installed_version} to {latest_version}")

    return UpdateOutcome(
        store=upsert(store, component, updated),
        component=component,
        path=path,
        from_version=record.installed_version,
        to_version=latest_version,
        was_modified=modified,
        merge_result=merge_result
    )
