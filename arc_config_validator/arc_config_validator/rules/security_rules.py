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

"""Security checks.

All checks here operate on the decoded tree. ConfigMap policy bodies are
inspected through the payloads the loader decoded into ``Document.embedded``,
so a ``securityContext`` mentioned in a comment or string never counts.
"""

from typing import Any, Iterable, List, Tuple

from ..models.document import Document, ManifestKind
from ..models.finding import Finding, Severity, Stage
from ..parsing.source_location import join_path
from .base import Rule, find_key, has_key
from .structure_rules import POLICY_KEY


def _is_false(value: Any) -> bool:
    if isinstance(value, bool):
        return value is False
    return isinstance(value, str) and value.strip().lower() == "false"


class SecurityContextRule(Rule):
    id = "sec-001"
    stage = Stage.SECURITY
    severity = Severity.WARNING
    description = "RunnerDeployment should define a securityContext"
    kinds = (ManifestKind.RUNNER_DEPLOYMENT,)

    def check(self, document: Document) -> Iterable[Finding]:
        if has_key(document.raw, "securityContext"):
            return []
        return [self.finding(document, "No securityContext defined (security best practice)", yaml_path="/spec")]


class ResourceLimitsRule(Rule):
    id = "sec-002"
    stage = Stage.SECURITY
    severity = Severity.WARNING
    description = "Resource requests should come with limits"
    kinds = (ManifestKind.RUNNER_DEPLOYMENT,)

    def check(self, document: Document) -> Iterable[Finding]:
        missing = [
            path for path, resources in find_key(document.raw, "resources")
            if isinstance(resources, dict) and "requests" in resources and "limits" not in resources
        ]
        if not missing:
            return []
        return [self.finding(
            document,
            "Resource requests defined but no limits",
            detail=missing,
            yaml_path=missing[0],
        )]


class RunAsRootRule(Rule):
    """Flags ``runAsNonRoot: false`` anywhere, embedded policy bodies included.

    Reports once per file; ``detail`` lists every offending location, prefixed
    with ``#N`` when it sits in the N-th document of a multi-document file.
    """

    id = "sec-003"
    stage = Stage.SECURITY
    severity = Severity.ERROR
    description = "runAsNonRoot must not be disabled"
    per_file = True

    def _locations(self, document: Document) -> List[Tuple[str, str]]:
        # (reported path, path used for the line lookup)
        locations = [(path, path) for path, value in find_key(document.raw, "runAsNonRoot") if _is_false(value)]
        for key, body in document.embedded.items():
            anchor = join_path("/data", key)
            for path, value in find_key(body, "runAsNonRoot"):
                if _is_false(value):
                    locations.append((anchor + path, anchor))
        return locations

    def check(self, document: Document) -> Iterable[Finding]:
        locations = self._locations(document)
        if not locations:
            return []
        return [self.finding(
            document,
            "runAsNonRoot is set to false (security risk)",
            detail=[path for path, _ in locations],
            yaml_path=locations[0][1],
        )]


class PolicySecurityContextRule(Rule):
    id = "cm-002"
    stage = Stage.SECURITY
    severity = Severity.WARNING
    description = "Runner policy should define a securityContext"
    kinds = (ManifestKind.CONFIG_MAP,)

    def check(self, document: Document) -> Iterable[Finding]:
        if POLICY_KEY not in document.embedded:
            return []
        if has_key(document.embedded[POLICY_KEY], "securityContext"):
            return []
        return [self.finding(
            document,
            "Policy doesn't define securityContext",
            yaml_path=join_path("/data", POLICY_KEY),
        )]


class EmbeddedPolicySyntaxRule(Rule):
    id = "cm-003"
    stage = Stage.SECURITY
    severity = Severity.WARNING
    description = "Embedded policy bodies must be valid YAML"
    kinds = (ManifestKind.CONFIG_MAP,)

    def check(self, document: Document) -> Iterable[Finding]:
        findings = []
        for key in sorted(document.embedded_errors):
            findings.append(self.finding(
                document,
                f"Embedded '{key}' is not valid YAML; its policy checks were skipped",
                detail=document.embedded_errors[key],
                yaml_path=join_path("/data", key),
            ))
        return findings
