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

"""Locating component files inside a user's project."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from voidui.config import config

logger = logging.getLogger(__name__)

FALLBACK_DIRS = [
    Path("components") / "ui",
    Path("src") / "components" / "ui",
    Path("app") / "components" / "ui",
    Path("lib") / "components" / "ui",
]


@dataclass
class ComponentLocation:
    """Where a component file is, or would be installed."""
    path: Path
    exists: bool


def _read_ui_alias(cwd: Path) -> Optional[str]:
    """Read the ui (or components) alias from components.json, if any."""
    config_path = cwd / "components.json"
    if not config_path.exists():
        return None

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Ignoring unreadable {config_path}: {e}")
        return None

    aliases = data.get("aliases") if isinstance(data, dict) else None
    if not isinstance(aliases, dict):
        return None
    return aliases.get("ui") or aliases.get("components")


def candidate_paths(component: str, cwd: Path) -> List[Path]:
    """Paths to try, in order, for a component file."""
    file_name = f"{component}{config.component_extension}"
    paths = []

    alias = _read_ui_alias(cwd)
    if alias:
        # "@/components/ui" -> "components/ui"
        clean_alias = alias[2:] if alias.startswith("@/") else alias
        paths.append(cwd / clean_alias / file_name)
        if not clean_alias.startswith("src/"):
            paths.append(cwd / "src" / clean_alias / file_name)

    paths.extend(cwd / directory / file_name for directory in FALLBACK_DIRS)
    return paths


def locate_component(component: str, cwd: Path = None) -> ComponentLocation:
    """
    Locate a component file in the project.

    Args:
        component: Component name (e.g. "separator")
        cwd: Project root. Defaults to the current directory

    Returns:
        The first existing candidate, or the default install path with
        ``exists=False``
    """
    cwd = Path(cwd) if cwd else Path.cwd()
    paths = candidate_paths(component, cwd)

    for path in paths:
        if path.exists():
            return ComponentLocation(path=path, exists=True)

    # First candidate is the alias path when one is configured
    return ComponentLocation(path=paths[0], exists=False)
