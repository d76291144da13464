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

"""Content normalization applied before hashing and merging."""

from pathlib import Path
from typing import List, Union


def normalize_line_endings(text: str) -> str:
    """Convert CRLF line endings to LF."""
    return text.replace("\r\n", "\n")


def to_text(content: Union[str, bytes]) -> str:
    """Decode ``bytes`` as UTF-8, replacing invalid sequences; strings pass through unchanged."""
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="replace")
    return content


def read_component_text(path: Path) -> str:
    """
    Read a component file exactly as hashed.

    No newline translation is applied, so a lone ``\\r`` survives and the
    result agrees with ``compute_file_checksum``.
    """
    return to_text(Path(path).read_bytes())


def write_component_text(path: Path, content: str) -> None:
    """Write component content as UTF-8 without newline translation."""
    Path(path).write_bytes(content.encode("utf-8"))


def canonicalize_content(content: Union[str, bytes]) -> str:
    """
    Canonicalize file content for deterministic hashing.

    Steps:
    1. Decode bytes as UTF-8
    2. Normalize CRLF to LF
    """
    return normalize_line_endings(to_text(content))


def split_lines(text: str) -> List[str]:
    """Split text on LF only; a trailing newline yields a final empty line."""
    return text.split("\n")


def join_lines(lines: List[str]) -> str:
    return "\n".join(lines)
