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

"""Lock file management for installed components."""

from .store import (
    LockFileManager,
    create_empty,
    load,
    load_or_create,
    save,
    upsert,
    remove,
    get,
    is_tracked
)
from .verifier import DriftReport, DriftStatus, has_drifted, verify_component, verify_project

__all__ = [
    "LockFileManager",
    "create_empty",
    "load",
    "load_or_create",
    "save",
    "upsert",
    "remove",
    "get",
    "is_tracked",
    "DriftReport",
    "DriftStatus",
    "has_drifted",
    "verify_component",
    "verify_project"
]
