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

"""Parsed manifest documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


class ManifestKind:
    RUNNER_DEPLOYMENT = "RunnerDeployment"
    CONFIG_MAP = "ConfigMap"


SourceMap = Dict[str, Dict[str, int]]


@dataclass(frozen=True)
class SourceFile:
    """A manifest file as read from disk.

    ``text`` keeps the original line endings so text-level rules and the
    trailing-whitespace fix see exactly the bytes on disk.
    """

    path: Path
    text: str

    @property
    def lines(self) -> List[str]:
        return self.text.splitlines()


@dataclass(frozen=True)
class Document:
    """One YAML document of a manifest file."""

    path: Path
    source: SourceFile
    index: Optional[int] = None
    kind: Optional[str] = None
    raw: Any = None
    parse_error: Optional[str] = None
    source_map: SourceMap = field(default_factory=dict)
    embedded: Dict[str, Any] = field(default_factory=dict)
    embedded_errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_parsed(self) -> bool:
        return self.parse_error is None

    @property
    def is_first(self) -> bool:
        return self.index is None or self.index == 0

    @property
    def namespace(self) -> Optional[str]:
        if not isinstance(self.raw, dict):
            return None
        metadata = self.raw.get("metadata")
        if not isinstance(metadata, dict):
            return None
        namespace = metadata.get("namespace")
        if namespace is None:
            return None
        return str(namespace)

    def line_of(self, yaml_path: Optional[str]) -> Optional[int]:
        """Return the 1-based line of ``yaml_path``, or ``None`` when unknown."""
        if yaml_path is None:
            return None
        entry = self.source_map.get(yaml_path)
        if not entry:
            return None
        return entry.get("line")
