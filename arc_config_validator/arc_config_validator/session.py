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

"""Validation session: drives the loader and the rule set over a directory.

Every per-file problem ends up as a :class:`Finding` in the report. Only
environment failures (missing root, no decoder for a discovered file) stop
the run, and they are reported as a single ``env-000`` finding rather than
raised.
"""

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .config import ValidatorConfig, validator_config
from .exceptions import EnvironmentFailure
from .models.document import SourceFile
from .models.finding import (
    ENVIRONMENT_RULE_ID,
    NO_FILES_RULE_ID,
    SYNTAX_RULE_ID,
    Finding,
    Severity,
)
from .models.report import Report
from .parsing.yaml_loader import YamlLoader
from .rules import RuleSet, default_rule_set
from .utils.logging_utils import PACKAGE_LOGGER

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationOptions:
    fix_mode: bool = False
    verbose: bool = False


class ValidationSession:
    """Runs one validation pass and owns the resulting report."""

    def __init__(
        self,
        options: Optional[ValidationOptions] = None,
        loader: Optional[YamlLoader] = None,
        rule_set: Optional[RuleSet] = None,
        config: Optional[ValidatorConfig] = None,
    ):
        self.options = options if options is not None else ValidationOptions()
        self.config = config if config is not None else validator_config
        self.loader = loader if loader is not None else YamlLoader(self.config)
        self.rule_set = rule_set if rule_set is not None else default_rule_set(self.config)

    def run(self, root_dir: Union[str, Path] = ".") -> Report:
        """Validate every manifest under ``root_dir``.

        Returns:
            The finalized report
        """
        root = Path(root_dir)
        report = Report(root)
        if self.options.verbose and not logging.getLogger(PACKAGE_LOGGER).handlers:
            self.config.set_logging(verbose=True)

        logger.info(f"Searching for YAML files in: {root}")
        try:
            files = self.loader.discover(root)
        except EnvironmentFailure as exc:
            logger.error(str(exc))
            report.abort(Finding(root, ENVIRONMENT_RULE_ID, Severity.ERROR, str(exc)))
            return report

        if not files:
            report.add_finding(Finding(root, NO_FILES_RULE_ID, Severity.WARNING, f"No YAML files found in {root}"))
            report.finalize()
            return report

        undecodable = [path for path in files if not self.loader.has_decoder(path)]
        if undecodable:
            message = f"No decoder available for: {', '.join(str(path) for path in undecodable)}"
            logger.error(message)
            report.abort(Finding(root, ENVIRONMENT_RULE_ID, Severity.ERROR, message))
            return report

        logger.info(f"Found {len(files)} YAML files")
        if self.options.fix_mode:
            logger.info("Fix mode enabled - will attempt to fix common issues")

        for path in files:
            self._validate_file(path, report)

        report.finalize()
        return report

    def _validate_file(self, path: Path, report: Report):
        report.add_file(path)
        logger.info(f"Validating: {path}")

        documents = self.loader.parse(path)
        first = documents[0]
        if not first.is_parsed:
            report.add_finding(Finding(path, SYNTAX_RULE_ID, Severity.ERROR, f"YAML syntax error: {first.parse_error}"))
            logger.info(f"Invalid: {path}")
            return

        findings = self.rule_set.evaluate_file(documents)

        if self.options.fix_mode:
            findings = self._apply_fixes(first.source, findings)

        report.add_findings(findings)
        if any(finding.is_error for finding in findings):
            logger.info(f"Invalid: {path}")
        else:
            logger.info(f"Valid: {path}")

    def _apply_fixes(self, source: SourceFile, findings: List[Finding]) -> List[Finding]:
        """Apply auto-fixable rules that reported ``source`` and write it back once."""
        reported = {finding.rule_id for finding in findings}
        fixers = [rule for rule in self.rule_set.fixable_rules if rule.id in reported]
        if not fixers:
            return findings

        text = source.text
        for rule in fixers:
            text = rule.fix(text)
        fixed_ids = {rule.id for rule in fixers}

        try:
            if text != source.text:
                source.path.write_bytes(text.encode("utf-8"))
        except OSError as exc:
            logger.error(f"Failed to write fixes to {source.path}: {exc}")
            return findings + [
                Finding(source.path, rule.id, rule.severity, f"Auto-fix could not be written: {exc}")
                for rule in fixers
            ]

        logger.info(f"Fixed {', '.join(sorted(fixed_ids))} in {source.path}")
        return [
            dataclasses.replace(finding, message=f"{finding.message} (fixed)")
            if finding.rule_id in fixed_ids else finding
            for finding in findings
        ]
