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

"""Data models for lock files, changelogs and registry items."""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


SEMVER_RE = re.compile(r"\d+\.\d+\.\d+")
CHECKSUM_RE = re.compile(r"sha256:[a-f0-9]{64}")


def is_semver(value: str) -> bool:
    """Return True for plain ``MAJOR.MINOR.PATCH`` version strings."""
    return bool(SEMVER_RE.fullmatch(value))


def _check_semver(value: str) -> str:
    if not is_semver(value):
        raise ValueError("Version must be in semver format (e.g., 1.2.0)")
    return value


def _check_iso_datetime(value: str) -> str:
    # Require a full date-time, not just a date
    if "T" not in value:
        raise ValueError("Date must be in ISO 8601 format")
    try:
        parse_timestamp(value)
    except ValueError:
        raise ValueError("Date must be in ISO 8601 format")
    return value


class ChangeType(str, Enum):
    """Kinds of changelog changes."""
    ADDED = "added"
    CHANGED = "changed"
    DEPRECATED = "deprecated"
    REMOVED = "removed"
    FIXED = "fixed"
    SECURITY = "security"


class LockRecord(BaseModel):
    """Installed version of one tracked component."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    installed_version: str = Field(alias="installedVersion")
    installed_at: str = Field(alias="installedAt")
    checksum: str
    registry_url: Optional[str] = Field(default=None, alias="registryUrl")

    @field_validator("installed_version")
    @classmethod
    def _validate_version(cls, value: str) -> str:
        return _check_semver(value)

    @field_validator("installed_at")
    @classmethod
    def _validate_installed_at(cls, value: str) -> str:
        return _check_iso_datetime(value)

    @field_validator("checksum")
    @classmethod
    def _validate_checksum(cls, value: str) -> str:
        if not CHECKSUM_RE.fullmatch(value):
            raise ValueError("Checksum must be in format: sha256:[64 hex chars]")
        return value

    @field_validator("registry_url")
    @classmethod
    def _validate_registry_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        parsed = urlparse(value)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"Invalid registry URL: {value}")
        return value


class LockStore(BaseModel):
    """Contents of a ``voidui.lock.json`` file.

    Frozen only guards attribute assignment. ``components`` is a plain dict
    and must be treated as read-only; ``upsert`` and ``remove`` in
    ``voidui.lockfile.store`` build a new mapping instead of editing it.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    schema_url: Optional[str] = Field(default=None, alias="$schema")
    version: str
    components: Dict[str, LockRecord] = Field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize using the on-disk field names."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ChangelogChange(BaseModel):
    """A single line in a changelog entry."""
    model_config = ConfigDict(frozen=True)

    type: ChangeType
    description: str = Field(min_length=1)


class ChangelogEntry(BaseModel):
    """What changed in one released version."""
    model_config = ConfigDict(frozen=True)

    version: str
    date: str
    changes: List[ChangelogChange] = Field(min_length=1)
    breaking: Optional[bool] = None

    @field_validator("version")
    @classmethod
    def _validate_version(cls, value: str) -> str:
        return _check_semver(value)

    @field_validator("date")
    @classmethod
    def _validate_date(cls, value: str) -> str:
        return _check_iso_datetime(value)


class ComponentChangelog(BaseModel):
    """Release history of a component, newest entry first."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    component: str = Field(min_length=1)
    current_version: str = Field(alias="currentVersion")
    entries: List[ChangelogEntry] = Field(min_length=1)

    @field_validator("current_version")
    @classmethod
    def _validate_version(cls, value: str) -> str:
        return _check_semver(value)

    @model_validator(mode="after")
    def _current_is_newest(self) -> "ComponentChangelog":
        if self.entries[0].version != self.current_version:
            raise ValueError(
                f"currentVersion {self.current_version} does not match newest "
                f"entry {self.entries[0].version}"
            )
        return self

    def to_dict(self) -> dict:
        """Serialize using the on-disk field names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class RegistryFile(BaseModel):
    """A source file shipped with a registry item."""
    path: str
    content: str = ""
    type: str
    target: Optional[str] = None


class RegistryVersioning(BaseModel):
    """Versioning metadata attached to a registry item."""
    model_config = ConfigDict(populate_by_name=True)

    current_version: str = Field(alias="currentVersion")
    changelog: ComponentChangelog
    available_versions: List[str] = Field(default_factory=list, alias="availableVersions")


class RegistryMeta(BaseModel):
    versioning: Optional[RegistryVersioning] = None


class RegistryItem(BaseModel):
    """A component as served by the registry."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    type: str
    title: Optional[str] = None
    description: Optional[str] = None
    files: List[RegistryFile] = Field(default_factory=list)
    meta: Optional[RegistryMeta] = None
    dependencies: List[str] = Field(default_factory=list)
    dev_dependencies: List[str] = Field(default_factory=list, alias="devDependencies")

    @property
    def versioning(self) -> Optional[RegistryVersioning]:
        return self.meta.versioning if self.meta else None


@dataclass(frozen=True)
class MergeResult:
    """Outcome of a three-way merge."""
    success: bool
    content: str
    conflict_count: int


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. ``2025-01-20T10:30:00.000Z``."""
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z``."""
    return datetime.fromisoformat(value[:-1] + "+00:00" if value.endswith("Z") else value)
