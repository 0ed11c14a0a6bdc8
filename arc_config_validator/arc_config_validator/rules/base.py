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

"""Rule and rule set primitives.

A rule is a stateless check over one :class:`Document`. Rules never mutate the
document; the only rule allowed to touch a file is one marked ``fixable``, and
even then the write is performed by the session, not by the rule.
"""

import dataclasses
from typing import Any, Iterable, Iterator, List, Optional, Set, Tuple

from ..exceptions import ConfigValidatorError
from ..models.document import Document
from ..models.finding import Finding, Severity, Stage
from ..parsing.source_location import join_path


def walk(tree: Any, path: str = "", _active: Optional[Set[int]] = None) -> Iterator[Tuple[str, Any]]:
    """Yield ``(yaml_path, node)`` for every node of a decoded YAML tree.

    A container that contains itself through an alias is yielded once at the
    point where it recurs but not descended into again.
    """
    yield path, tree
    if not isinstance(tree, (dict, list)):
        return

    active = _active if _active is not None else set()
    if id(tree) in active:
        return
    active.add(id(tree))
    if isinstance(tree, dict):
        for key, value in tree.items():
            yield from walk(value, join_path(path, key), active)
    else:
        for idx, item in enumerate(tree):
            yield from walk(item, join_path(path, idx), active)
    active.discard(id(tree))


def find_key(tree: Any, key: str, path: str = "") -> Iterator[Tuple[str, Any]]:
    """Yield ``(yaml_path, value)`` for every mapping entry named ``key``."""
    for node_path, node in walk(tree, path):
        if isinstance(node, dict) and key in node:
            yield join_path(node_path, key), node[key]


def has_key(tree: Any, key: str) -> bool:
    return next(find_key(tree, key), None) is not None


class Rule:
    """Base class for a single named check."""

    id: str = ""
    stage: Stage = Stage.STRUCTURAL
    severity: Severity = Severity.WARNING
    description: str = ""

    # None means the rule applies to documents of any kind
    kinds: Optional[Tuple[str, ...]] = None

    # Text-level rules run once per file, on its first document
    file_scoped: bool = False
    fixable: bool = False

    # Findings from several documents of one file collapse into one
    per_file: bool = False

    def applies_to(self, kind: Optional[str]) -> bool:
        return self.kinds is None or kind in self.kinds

    def check(self, document: Document) -> Iterable[Finding]:
        raise NotImplementedError

    def merge(self, findings: List[Finding]) -> Finding:
        """Combine this rule's findings from several documents of one file."""
        detail: List[Any] = []
        for finding in findings:
            items = finding.detail if isinstance(finding.detail, list) else [finding.detail]
            if finding.document_index is not None:
                items = [f"#{finding.document_index + 1}{item}" for item in items]
            detail.extend(items)
        return dataclasses.replace(findings[0], detail=detail, document_index=None)

    def fix(self, text: str) -> str:
        """Return ``text`` with the issue this rule reports removed."""
        raise NotImplementedError(f"Rule {self.id} is not auto-fixable")

    def finding(
        self,
        document: Document,
        message: str,
        *,
        detail: Any = None,
        yaml_path: Optional[str] = None,
        line: Optional[int] = None,
    ) -> Finding:
        if line is None:
            line = document.line_of(yaml_path)
        return Finding(
            file_path=document.path,
            rule_id=self.id,
            severity=self.severity,
            message=message,
            detail=detail,
            document_index=None if self.file_scoped else document.index,
            line=line,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id} ({self.stage.name.lower()})>"


class RuleSet:
    """Ordered collection of rules, grouped into stages.

    Rules run in stage order and, within a stage, in registration order, so
    the findings of a document always come out in the same order.
    """

    def __init__(self, rules: Optional[Iterable[Rule]] = None):
        self._rules: List[Rule] = []
        for rule in rules or ():
            self.register(rule)

    def register(self, rule: Rule):
        if not rule.id:
            raise ConfigValidatorError(f"Rule {rule!r} has no id")
        if any(existing.id == rule.id for existing in self._rules):
            raise ConfigValidatorError(f"Duplicate rule id '{rule.id}'")
        self._rules.append(rule)

    @property
    def rules(self) -> List[Rule]:
        # sorted() is stable: declared order is kept inside each stage
        return sorted(self._rules, key=lambda rule: rule.stage)

    @property
    def fixable_rules(self) -> List[Rule]:
        return [rule for rule in self.rules if rule.fixable]

    def get(self, rule_id: str) -> Optional[Rule]:
        for rule in self._rules:
            if rule.id == rule_id:
                return rule
        return None

    def evaluate(self, document: Document) -> List[Finding]:
        """Run every applicable rule against ``document``.

        Syntax is validated by the loader, so syntax-stage rules and
        documents that failed to parse are skipped here.
        """
        findings: List[Finding] = []
        if not document.is_parsed:
            return findings

        for rule in self.rules:
            if rule.stage == Stage.SYNTAX:
                continue
            if rule.file_scoped and not document.is_first:
                continue
            if not rule.applies_to(document.kind):
                continue
            findings.extend(rule.check(document))
        return findings

    def evaluate_file(self, documents: Iterable[Document]) -> List[Finding]:
        """Evaluate every document of one file.

        Findings of ``per_file`` rules are merged into a single finding that
        takes the place of the first one.
        """
        findings: List[Finding] = []
        for document in documents:
            findings.extend(self.evaluate(document))

        for rule in self.rules:
            if not rule.per_file:
                continue
            own = [finding for finding in findings if finding.rule_id == rule.id]
            if not own:
                continue
            position = findings.index(own[0])
            findings = [finding for finding in findings if finding.rule_id != rule.id]
            findings.insert(position, rule.merge(own))
        return findings

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self):
        return iter(self.rules)
