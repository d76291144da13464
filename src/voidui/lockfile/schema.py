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

"""JSON schema for voidui.lock.json."""

SEMVER_PATTERN = r"^\d+\.\d+\.\d+$"
CHECKSUM_PATTERN = r"^sha256:[a-f0-9]{64}$"

LOCK_ENTRY_SCHEMA = {
    "type": "object",
    "required": ["installedVersion", "installedAt", "checksum"],
    "properties": {
        "installedVersion": {"type": "string", "pattern": SEMVER_PATTERN},
        "installedAt": {"type": "string", "minLength": 1},
        "checksum": {"type": "string", "pattern": CHECKSUM_PATTERN},
        "registryUrl": {"type": "string", "format": "uri"}
    }
}

LOCK_FILE_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["version", "components"],
    "properties": {
        "$schema": {"type": "string"},
        "version": {"type": "string"},
        "components": {
            "type": "object",
            "additionalProperties": LOCK_ENTRY_SCHEMA
        }
    }
}
