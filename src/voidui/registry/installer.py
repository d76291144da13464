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

"""Installing component sources with the shadcn CLI."""

import logging
import subprocess
from typing import List, Optional

from voidui.config import config
from voidui.errors import InstallError

logger = logging.getLogger(__name__)


def build_install_command(component: str, registry_url: str, command: Optional[List[str]] = None) -> List[str]:
    """Command line that installs ``component`` from ``registry_url``."""
    base = list(command or config.installer_command)
    return base + [f"{registry_url.rstrip('/')}/{component}", "--yes", "--overwrite"]


def install_component(
    component: str,
    registry_url: Optional[str] = None,
    command: Optional[List[str]] = None,
    silent: bool = False
) -> None:
    """
    Copy a component's source files into the project.

    Args:
        component: Component name
        registry_url: Registry to install from
        command: Installer command prefix. Defaults to ``npx shadcn@latest add``
        silent: Capture installer output instead of showing it

    Raises:
        InstallError: If the installer cannot be run or fails
    """
    cmd = build_install_command(component, registry_url or config.registry_url, command)
    logger.info(f"Running: {' '.join(cmd)}")

    try:
        result = subprocess.run(cmd, capture_output=silent, text=True)
    except FileNotFoundError as e:
        raise InstallError(
            f"Failed to execute installer: {e}\nMake sure npx is available in your PATH."
        ) from e

    if result.returncode != 0:
        raise InstallError(f"Installer exited with code {result.returncode}. Installation failed.")
