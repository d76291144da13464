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

"""Boundary validation of persisted JSON documents."""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

from jsonschema import validate, ValidationError as SchemaValidationError
from pydantic import BaseModel, ValidationError

from voidui.errors import CorruptStateError


ModelT = TypeVar("ModelT", bound=BaseModel)


def read_json_document(path: Path, remediation: Optional[str] = None) -> Any:
    """Read a JSON file, converting parse failures to ``CorruptStateError``."""
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CorruptStateError(path, f"invalid JSON: {e}", remediation) from e


def validate_document(
    data: Any,
    schema: Dict[str, Any],
    model: Type[ModelT],
    path: Path,
    remediation: Optional[str] = None
) -> ModelT:
    """
    Validate raw JSON data against a schema and parse it into a model.

    The JSON schema checks document structure; the model enforces the
    field-level invariants (formats, cross-field rules).

    Raises:
        CorruptStateError: If either check fails
    """
    try:
        validate(instance=data, schema=schema)
    except SchemaValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise CorruptStateError(path, f"{location}: {e.message}", remediation) from e

    try:
        return model.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = "/".join(str(p) for p in first["loc"]) or "<root>"
        raise CorruptStateError(path, f"{location}: {first['msg']}", remediation) from e


def write_json_document(path: Path, data: Dict[str, Any]) -> None:
    """Write JSON with 2-space indentation and a trailing newline."""
    Path(path).write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
