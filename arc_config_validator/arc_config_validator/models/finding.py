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

"""Rule outcomes and their classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path
from typing import Any, Dict, Optional


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Stage(IntEnum):
    """Rule pipeline stages; the integer value is the execution order."""

    SYNTAX = 0
    STRUCTURAL = 1
    SECURITY = 2
    BEST_PRACTICE = 3
    CROSS_FILE = 4


# Reserved rule ids that are not backed by a registered rule
SYNTAX_RULE_ID = "syntax-000"
ENVIRONMENT_RULE_ID = "env-000"
NO_FILES_RULE_ID = "env-001"


@dataclass(frozen=True)
class Finding:
    """One rule outcome, attributed to exactly one file and one rule."""

    file_path: Path
    rule_id: str
    severity: Severity
    message: str
    detail: Optional[Any] = None
    document_index: Optional[int] = None  # 0-based, multi-document files only
    line: Optional[int] = None  # 1-based

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    @property
    def location(self) -> str:
        if self.document_index is None:
            return str(self.file_path)
        return f"{self.file_path}#{self.document_index + 1}"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "file": str(self.file_path),
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.document_index is not None:
            data["document_index"] = self.document_index
        if self.line is not None:
            data["line"] = self.line
        if self.detail is not None:
            data["detail"] = self.detail
        return data
