# Copyright 2026 TIER IV, inc.
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

"""Bundled JSON Schemas for manifest validation."""

import json
from pathlib import Path
from typing import Dict


# Schema cache to avoid reloading files
_SCHEMA_CACHE: Dict[str, dict] = {}


def get_schema_path(name: str) -> Path:
    """Get the path to a bundled JSON Schema file.

    Args:
        name: Schema name without extension (e.g., "manifest")
    """
    return Path(__file__).parent / f"{name}.json"


def load_schema(name: str) -> dict:
    """Load a bundled JSON Schema file.

    Raises:
        FileNotFoundError: If the schema file doesn't exist
        json.JSONDecodeError: If the schema file is invalid JSON
    """
    if name in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[name]

    schema_path = get_schema_path(name)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found for '{name}': {schema_path}")

    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)
    except json.JSONDecodeError as e:
        raise json.JSONDecodeError(
            f"Invalid JSON in schema file {schema_path}: {e.msg}",
            e.doc,
            e.pos,
        ) from e

    _SCHEMA_CACHE[name] = schema
    return schema


def clear_cache() -> None:
    """Clear the schema cache. Useful for testing."""
    _SCHEMA_CACHE.clear()
