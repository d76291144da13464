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

"""Component changelogs and version ranges."""

from .resolver import entries_between, summarize, format_changelog, format_entry, change_icon, change_label
from .manager import load_changelog, save_changelog, append_entry, create_snapshot, SnapshotResult

__all__ = [
    "entries_between",
    "summarize",
    "format_changelog",
    "format_entry",
    "change_icon",
    "change_label",
    "load_changelog",
    "save_changelog",
    "append_entry",
    "create_snapshot",
    "SnapshotResult"
]
