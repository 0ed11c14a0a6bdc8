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

"""Namespace consistency between a manifest and the directory it lives in."""

from typing import Iterable, Tuple

from ..models.document import Document
from ..models.finding import Finding, Severity, Stage
from .base import Rule

NAMESPACE_PATH = "/metadata/namespace"


def _contains_any(value: str, needles: Tuple[str, ...]) -> bool:
    return any(needle in value for needle in needles)


class NamespaceRule(Rule):
    """Compares ``metadata.namespace`` with the level encoded in the file's directory."""

    stage = Stage.CROSS_FILE
    severity = Severity.WARNING

    # Directory substring that selects the files this rule looks at
    level_marker: str = ""

    def in_scope(self, document: Document) -> bool:
        return self.level_marker in document.path.parent.as_posix()

    def violates(self, namespace: str) -> bool:
        raise NotImplementedError

    def message(self, namespace: str) -> str:
        raise NotImplementedError

    def check(self, document: Document) -> Iterable[Finding]:
        namespace = document.namespace
        if not namespace or namespace == "null":
            return []
        if not self.in_scope(document) or not self.violates(namespace):
            return []
        return [self.finding(
            document,
            self.message(namespace),
            detail={"namespace": namespace},
            yaml_path=NAMESPACE_PATH,
        )]


class OrgLevelNamespaceRule(NamespaceRule):
    id = "ns-001"
    description = "Org-level configuration should live in a system namespace"
    level_marker = "org-level"

    def violates(self, namespace: str) -> bool:
        return not _contains_any(namespace, ("arc", "org"))

    def message(self, namespace: str) -> str:
        return f"Org-level config in namespace '{namespace}' (consider arc-systems or similar)"


class RepoLevelNamespaceRule(NamespaceRule):
    id = "ns-002"
    description = "Repo-level configuration should stay out of system namespaces"
    level_marker = "repo-level"

    def violates(self, namespace: str) -> bool:
        return _contains_any(namespace, ("arc", "system"))

    def message(self, namespace: str) -> str:
        return f"Repo-level config in system namespace '{namespace}'"
