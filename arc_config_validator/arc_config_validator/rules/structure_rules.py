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

"""Structural checks on runner deployments and policy ConfigMaps."""

from typing import Iterable

from ..models.document import Document, ManifestKind
from ..models.finding import Finding, Severity, Stage
from .base import Rule, find_key

POLICY_KEY = "policy.yaml"


class RunnerTargetRule(Rule):
    id = "struct-001"
    stage = Stage.STRUCTURAL
    severity = Severity.ERROR
    description = "RunnerDeployment must reference a repository or an organization"
    kinds = (ManifestKind.RUNNER_DEPLOYMENT,)

    TARGET_KEYS = ("repository", "organization")

    def check(self, document: Document) -> Iterable[Finding]:
        for key in self.TARGET_KEYS:
            for _, value in find_key(document.raw, key):
                if value not in (None, ""):
                    return []
        return [self.finding(document, "Missing repository or organization field", yaml_path="/spec")]


class PolicyDataRule(Rule):
    id = "cm-001"
    stage = Stage.STRUCTURAL
    severity = Severity.WARNING
    description = "ConfigMap should carry policy.yaml data"
    kinds = (ManifestKind.CONFIG_MAP,)

    def check(self, document: Document) -> Iterable[Finding]:
        data = document.raw.get("data") if isinstance(document.raw, dict) else None
        if isinstance(data, dict) and POLICY_KEY in data:
            return []
        return [self.finding(document, f"ConfigMap doesn't contain {POLICY_KEY} data", yaml_path="/data")]
