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

"""Manifest envelope validation against the bundled JSON Schema."""

from typing import Iterable, List, Optional

from jsonschema import Draft7Validator

from ..models.document import Document
from ..models.finding import Finding, Severity, Stage
from ..schema import load_schema
from .base import Rule


class ManifestSchemaRule(Rule):
    """Every manifest needs an ``apiVersion``, a ``kind`` and a named ``metadata`` block."""

    id = "schema-001"
    stage = Stage.STRUCTURAL
    severity = Severity.ERROR
    description = "Manifest envelope does not match the Kubernetes object schema"

    def __init__(self, schema_name: str = "manifest"):
        self.schema_name = schema_name
        self._validator: Optional[Draft7Validator] = None

    @property
    def validator(self) -> Draft7Validator:
        if self._validator is None:
            self._validator = Draft7Validator(load_schema(self.schema_name))
        return self._validator

    def check(self, document: Document) -> Iterable[Finding]:
        if document.raw is None:
            return []
        if not isinstance(document.raw, dict):
            return [self.finding(document, "Root must be a mapping/object", yaml_path="")]

        errors = sorted(self.validator.iter_errors(document.raw), key=lambda e: list(map(str, e.absolute_path)))
        if not errors:
            return []

        issues: List[dict] = []
        for error in errors:
            path = "/" + "/".join(str(p) for p in error.absolute_path) if error.absolute_path else ""
            issues.append({"yaml_path": path, "message": error.message})

        first = issues[0]
        message = f"Invalid manifest: {first['message']}"
        if first["yaml_path"]:
            message += f" (at {first['yaml_path']})"
        if len(issues) > 1:
            message += f" and {len(issues) - 1} more issue(s)"
        return [self.finding(document, message, detail=issues, yaml_path=first["yaml_path"])]
