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

"""Best-practice checks: template placeholders and text formatting."""

import re
from typing import Iterable, List, Pattern, Union

from ..config import DEFAULT_PLACEHOLDER_PATTERN
from ..models.document import Document
from ..models.finding import Finding, Severity, Stage
from .base import Rule, walk

TEMPLATES_SEGMENT = "templates"

_TRAILING_WHITESPACE = re.compile(r"[ \t]+(?=\r\n|\r|\n|\Z)")


class PlaceholderRule(Rule):
    """Unresolved ``__TOKEN__`` placeholders outside of a templates directory.

    Only keys and scalar values of the decoded tree are scanned, never comments.
    """

    id = "tmpl-001"
    stage = Stage.BEST_PRACTICE
    severity = Severity.WARNING
    description = "Manifest contains unresolved template placeholders"

    def __init__(self, pattern: Union[str, Pattern] = DEFAULT_PLACEHOLDER_PATTERN):
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    @staticmethod
    def is_template(document: Document) -> bool:
        return TEMPLATES_SEGMENT in document.path.parts

    def _tokens(self, document: Document) -> List[str]:
        tokens = set()
        for _, node in walk(document.raw):
            if isinstance(node, dict):
                for key in node:
                    if isinstance(key, str):
                        tokens.update(self.pattern.findall(key))
            elif isinstance(node, str):
                tokens.update(self.pattern.findall(node))
        return sorted(tokens)

    def check(self, document: Document) -> Iterable[Finding]:
        if self.is_template(document):
            return []
        tokens = self._tokens(document)
        if not tokens:
            return []
        return [self.finding(
            document,
            f"Contains template placeholders: {', '.join(tokens)}",
            detail=tokens,
        )]


class TabsRule(Rule):
    id = "fmt-001"
    stage = Stage.BEST_PRACTICE
    severity = Severity.WARNING
    description = "Indentation should use spaces, not tabs"
    file_scoped = True

    def check(self, document: Document) -> Iterable[Finding]:
        lines = [idx for idx, line in enumerate(document.source.lines, start=1) if "\t" in line]
        if not lines:
            return []
        return [self.finding(
            document,
            "Contains tabs, should use spaces for indentation",
            detail={"lines": lines},
            line=lines[0],
        )]


class TrailingWhitespaceRule(Rule):
    id = "fmt-002"
    stage = Stage.BEST_PRACTICE
    severity = Severity.WARNING
    description = "Lines should not end with whitespace"
    file_scoped = True
    fixable = True

    def check(self, document: Document) -> Iterable[Finding]:
        lines = [
            idx for idx, line in enumerate(document.source.lines, start=1)
            if line != line.rstrip(" \t")
        ]
        if not lines:
            return []
        return [self.finding(
            document,
            "Contains trailing whitespace",
            detail={"lines": lines},
            line=lines[0],
        )]

    def fix(self, text: str) -> str:
        return _TRAILING_WHITESPACE.sub("", text)


class LineLengthRule(Rule):
    id = "fmt-003"
    stage = Stage.BEST_PRACTICE
    severity = Severity.WARNING
    description = "Very long lines usually indicate formatting issues"
    file_scoped = True

    def __init__(self, max_length: int = 200):
        self.max_length = max_length

    def check(self, document: Document) -> Iterable[Finding]:
        lines = [
            idx for idx, line in enumerate(document.source.lines, start=1)
            if len(line) > self.max_length
        ]
        if not lines:
            return []
        return [self.finding(
            document,
            f"Contains very long lines (>{self.max_length} chars)",
            detail={"lines": lines},
            line=lines[0],
        )]
