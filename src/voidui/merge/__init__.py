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

"""Three-way merging of component updates."""

from .three_way import three_way_merge, DEFAULT_OURS_LABEL, DEFAULT_THEIRS_LABEL
from .conflicts import has_conflict_markers, count_conflicts, format_merge_message

__all__ = [
    "three_way_merge",
    "DEFAULT_OURS_LABEL",
    "DEFAULT_THEIRS_LABEL",
    "has_conflict_markers",
    "count_conflicts",
    "format_merge_message"
]
