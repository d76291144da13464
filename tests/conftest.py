"""Pytest configuration and shared fixtures."""

import json
import sys
import pytest
from pathlib import Path

# Add the src directory to Python path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


BUTTON_V1 = """export function Button() {
  const size = "md"
  return <button className="btn">Click</button>
}
"""

BUTTON_V2 = """export function Button() {
  const size = "md"
  return <button className="btn btn-primary">Click</button>
}
"""


def changelog_data(component, versions):
    """Changelog dict for ``versions`` given newest first."""
    return {
        "component": component,
        "currentVersion": versions[0],
        "entries": [
            {
                "version": version,
                "date": f"2025-01-{20 - index:02d}T10:00:00.000Z",
                "changes": [{"type": "changed", "description": f"Release {version}"}]
            }
            for index, version in enumerate(versions)
        ]
    }


@pytest.fixture
def make_registry_item():
    """Factory for registry item payloads as served by the registry."""
    def _make(name="button", versions=("1.1.0", "1.0.0"), content=BUTTON_V2, versioning=True):
        item = {
            "name": name,
            "type": "registry:ui",
            "files": [
                {
                    "path": f"registry/components/ui/{name}.tsx",
                    "content": content,
                    "type": "registry:ui"
                }
            ],
            "dependencies": [],
            "devDependencies": []
        }
        if versioning:
            item["meta"] = {
                "versioning": {
                    "currentVersion": versions[0],
                    "availableVersions": list(versions),
                    "changelog": changelog_data(name, list(versions))
                }
            }
        return item

    return _make


@pytest.fixture
def sample_lockfile(tmp_path):
    """Create a sample lock file tracking button@1.0.0."""
    from voidui.crypto import compute_checksum

    lockfile = tmp_path / "voidui.lock.json"
    lockfile.write_text(json.dumps({
        "version": "1.0",
        "components": {
            "button": {
                "installedVersion": "1.0.0",
                "installedAt": "2025-01-15T10:30:00.000Z",
                "checksum": compute_checksum(BUTTON_V1),
                "registryUrl": "https://voidui.dev/r"
            }
        }
    }, indent=2))
    return lockfile
