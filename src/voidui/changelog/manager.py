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

"""Reading, writing and extending component changelog files."""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import ValidationError

from voidui.config import config
from voidui.errors import ChangelogError
from voidui.models import ChangelogChange, ChangelogEntry, ComponentChangelog, is_semver, utc_timestamp
from voidui.validation import read_json_document, validate_document, write_json_document

logger = logging.getLogger(__name__)

SEMVER_PATTERN = r"^\d+\.\d+\.\d+$"

CHANGELOG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["component", "currentVersion", "entries"],
    "properties": {
        "component": {"type": "string", "minLength": 1},
        "currentVersion": {"type": "string", "pattern": SEMVER_PATTERN},
        "entries": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["version", "date", "changes"],
                "properties": {
                    "version": {"type": "string", "pattern": SEMVER_PATTERN},
                    "date": {"type": "string"},
                    "breaking": {"type": "boolean"},
                    "changes": {
                        "type": "array",
                        "minItems": 1,
                        "items": {
                            "type": "object",
                            "required": ["type", "description"],
                            "properties": {
                                "type": {"enum": [
                                    "added", "changed", "deprecated",
                                    "removed", "fixed", "security"
                                ]},
                                "description": {"type": "string", "minLength": 1}
                            }
                        }
                    }
                }
            }
        }
    }
}


@dataclass
class SnapshotResult:
    """Files written by ``create_snapshot``."""
    version_file: Path
    changelog_file: Path
    changelog: ComponentChangelog


def load_changelog(path: Path) -> Optional[ComponentChangelog]:
    """
    Load a changelog file.

    Returns:
        The changelog, or None if the file does not exist

    Raises:
        CorruptStateError: If the file is not a valid changelog
    """
    path = Path(path)
    if not path.exists():
        return None

    remediation = f"Fix or remove {path.name} before creating new snapshots."
    data = read_json_document(path, remediation)
    return validate_document(data, CHANGELOG_SCHEMA, ComponentChangelog, path, remediation)


def save_changelog(path: Path, changelog: ComponentChangelog) -> None:
    write_json_document(Path(path), changelog.to_dict())
    logger.info(f"Wrote changelog {path}")


def append_entry(
    changelog: Optional[ComponentChangelog],
    component: str,
    version: str,
    changes: Sequence[ChangelogChange],
    breaking: bool = False,
    date: Optional[str] = None
) -> ComponentChangelog:
    """
    Return a new changelog with an entry for ``version`` prepended.

    Args:
        changelog: Existing changelog, or None to start a new one
        component: Component name
        version: Released version (semver)
        changes: What changed; at least one
        breaking: Whether the release is breaking
        date: Release timestamp. Defaults to now

    Raises:
        ChangelogError: If the version is invalid or already recorded
    """
    if not is_semver(version):
        raise ChangelogError("Version must be in semver format (e.g., 1.0.0)")

    existing: List[ChangelogEntry] = list(changelog.entries) if changelog else []
    if any(entry.version == version for entry in existing):
        raise ChangelogError(f"Version {version} already exists in the changelog for {component}")

    try:
        entry = ChangelogEntry(
            version=version,
            date=date or utc_timestamp(),
            changes=list(changes),
            breaking=True if breaking else None
        )
        return ComponentChangelog(
            component=component,
            current_version=version,
            entries=[entry] + existing
        )
    except ValidationError as e:
        raise ChangelogError(f"Changelog validation failed: {e}") from e


def component_paths(registry_dir: Path, component: str):
    """Return (component file, changelog file, versions dir) for a component."""
    registry_dir = Path(registry_dir)
    return (
        registry_dir / f"{component}{config.component_extension}",
        registry_dir / f"{component}{config.changelog_suffix}",
        registry_dir / f"{component}{config.versions_dir_suffix}",
    )


def create_snapshot(
    registry_dir: Path,
    component: str,
    version: str,
    changes: Sequence[ChangelogChange],
    breaking: bool = False,
    date: Optional[str] = None
) -> SnapshotResult:
    """
    Freeze the current source of a component as a released version.

    Copies ``<component>.tsx`` to ``<component>.versions/<version>.tsx`` and
    prepends a changelog entry to ``<component>.changelog.json``.

    Raises:
        ChangelogError: If the component is missing, the version is invalid,
            or a snapshot for the version already exists
    """
    component_file, changelog_file, versions_dir = component_paths(registry_dir, component)

    if not component_file.exists():
        raise ChangelogError(f'Component "{component}" not found (expected {component_file})')

    if not is_semver(version):
        raise ChangelogError("Version must be in semver format (e.g., 1.0.0)")

    version_file = versions_dir / f"{version}{config.component_extension}"
    if version_file.exists():
        raise ChangelogError(f"Version {version} already exists ({version_file})")

    # Validate before touching the filesystem
    updated = append_entry(load_changelog(changelog_file), component, version, changes, breaking, date)

    versions_dir.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(component_file, version_file)
    logger.info(f"Created snapshot {version_file}")

    save_changelog(changelog_file, updated)

    return SnapshotResult(version_file=version_file, changelog_file=changelog_file, changelog=updated)
