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

"""Configuration for the voidui CLI."""

import os
from typing import List

from pydantic import BaseModel, Field


DEFAULT_REGISTRY_URL = "https://voidui.dev/r"


class VoidUIConfig(BaseModel):
    """Runtime configuration."""

    # Registry settings
    registry_url: str = Field(
        default_factory=lambda: os.getenv("VOIDUI_REGISTRY_URL", DEFAULT_REGISTRY_URL)
    )
    request_timeout_seconds: float = Field(
        default_factory=lambda: float(os.getenv("VOIDUI_REQUEST_TIMEOUT", "10.0"))
    )
    max_retries: int = 1
    retry_delay_seconds: float = 2.0
    user_agent: str = "voidui-cli"

    # Lock file settings
    lock_file_name: str = "voidui.lock.json"
    lock_file_version: str = "1.0"

    # Component layout
    component_extension: str = ".tsx"
    versions_dir_suffix: str = ".versions"
    changelog_suffix: str = ".changelog.json"

    # Installer
    installer_command: List[str] = Field(
        default_factory=lambda: ["npx", "shadcn@latest", "add"]
    )

    log_level: str = Field(
        default_factory=lambda: os.getenv("VOIDUI_LOG_LEVEL", "WARNING")
    )


config = VoidUIConfig()
