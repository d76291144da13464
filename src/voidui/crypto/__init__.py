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

"""Checksum and normalization utilities."""

from .canonicalize import (
    canonicalize_content,
    normalize_line_endings,
    read_component_text,
    write_component_text,
    split_lines,
    join_lines
)
from .checksum import compute_checksum, compute_file_checksum, checksums_match, format_checksum

__all__ = [
    "canonicalize_content",
    "normalize_line_endings",
    "read_component_text",
    "write_component_text",
    "split_lines",
    "join_lines",
    "compute_checksum",
    "compute_file_checksum",
    "checksums_match",
    "format_checksum"
]
