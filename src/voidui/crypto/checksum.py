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

"""SHA-256 checksums used for drift detection."""

import hashlib
from pathlib import Path
from typing import Union

from voidui.crypto.canonicalize import canonicalize_content


CHECKSUM_PREFIX = "sha256:"


def compute_checksum(content: Union[str, bytes]) -> str:
    """
    Compute the checksum of component content.

    Line endings are normalized first so the same logical file checksums
    identically on every platform.

    Returns:
        Checksum in the form ``sha256:<64 hex chars>``
    """
    normalized = canonicalize_content(content)
    digest = hashlib.sha256(normalized.encode("utf-8")).hexdigest()
    return f"{CHECKSUM_PREFIX}{digest}"


def compute_file_checksum(path: Path) -> str:
    """Compute the checksum of a file on disk."""
    return compute_checksum(Path(path).read_bytes())


def checksums_match(expected: str, actual: str) -> bool:
    """Exact comparison of two checksum strings."""
    return expected == actual


def format_checksum(checksum: str) -> str:
    """Shorten a checksum for display, e.g. ``sha256:abc123...def789``."""
    if not checksum.startswith(CHECKSUM_PREFIX):
        return checksum

    digest = checksum[len(CHECKSUM_PREFIX):]
    if len(digest) <= 16:
        return checksum

    return f"{CHECKSUM_PREFIX}{digest[:6]}...{digest[-6:]}"
