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

"""Reading, writing and updating voidui.lock.json.

Lock stores are immutable values. ``upsert`` and ``remove`` return new
stores; only ``load`` and ``save`` touch the filesystem.
"""

import logging
from pathlib import Path
from typing import Optional

from voidui.config import config
from voidui.lockfile.schema import LOCK_FILE_SCHEMA
from voidui.models import LockRecord, LockStore
from voidui.validation import read_json_document, validate_document, write_json_document

logger = logging.getLogger(__name__)


def _remediation(path: Path) -> str:
    return f"Please delete {Path(path).name} and re-install components."


def create_empty() -> LockStore:
    """Create a new lock store with no tracked components."""
    return LockStore(version=config.lock_file_version, components={})


def load(path: Path) -> Optional[LockStore]:
    """
    Load a lock file.

    Returns:
        The lock store, or None if the file does not exist

    Raises:
        CorruptStateError: If the file exists but is not a valid lock file
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"No lock file at {path}")
        return None

    data = read_json_document(path, _remediation(path))
    store = validate_document(data, LOCK_FILE_SCHEMA, LockStore, path, _remediation(path))
    logger.debug(f"Loaded {len(store.components)} lock entries from {path}")
    return store


def load_or_create(path: Path) -> LockStore:
    """Load a lock file, or return an empty store if none exists."""
    store = load(path)
    if store is None:
        return create_empty()
    return store


def save(path: Path, store: LockStore) -> None:
    """Write a lock store to disk."""
    write_json_document(Path(path), store.to_dict())
    logger.info(f"Wrote lock file {path} ({len(store.components)} components)")


def upsert(store: LockStore, name: str, record: LockRecord) -> LockStore:
    """Return a new store with ``record`` stored under ``name``."""
    components = dict(store.components)
    components[name] = record
    return store.model_copy(update={"components": components})


def remove(store: LockStore, name: str) -> LockStore:
    """Return a new store without ``name``. Untracked names are ignored."""
    if name not in store.components:
        return store
    components = {key: value for key, value in store.components.items() if key != name}
    return store.model_copy(update={"components": components})


def get(store: LockStore, name: str) -> Optional[LockRecord]:
    return store.components.get(name)


def is_tracked(store: LockStore, name: str) -> bool:
    return name in store.components


class LockFileManager:
    """Binds a project's lock file path to load and save."""

    def __init__(self, project_root: Path = None, lock_file_name: str = None):
        """
        Initialize lock file manager.

        Args:
            project_root: Directory holding the lock file. Defaults to cwd
            lock_file_name: File name. Defaults to voidui.lock.json
        """
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.lockfile_path = self.project_root / (lock_file_name or config.lock_file_name)

    def exists(self) -> bool:
        return self.lockfile_path.exists()

    def load(self) -> Optional[LockStore]:
        return load(self.lockfile_path)

    def load_or_create(self) -> LockStore:
        return load_or_create(self.lockfile_path)

    def save(self, store: LockStore) -> None:
        save(self.lockfile_path, store)
