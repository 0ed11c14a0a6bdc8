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

"""Report rendering and the process exit-code contract."""

import json
from typing import List, Tuple

from .models.finding import Finding, Severity
from .models.report import Report

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ENVIRONMENT = 2

OUTPUT_FORMATS = ('human', 'json', 'github-actions')

_ANNOTATION_LEVELS = {
    Severity.ERROR: 'error',
    Severity.WARNING: 'warning',
    Severity.INFO: 'notice',
}


def exit_code_for(report: Report) -> int:
    """Warnings alone never fail a run."""
    if report.aborted:
        return EXIT_ENVIRONMENT
    if report.invalid_files > 0:
        return EXIT_INVALID
    return EXIT_OK


class Reporter:
    """Renders a finalized report. Rendering never mutates the report."""

    def __init__(self, verbose: bool = False, output_format: str = 'human'):
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format '{output_format}'. Expected one of: {', '.join(OUTPUT_FORMATS)}")
        self.verbose = verbose
        self.output_format = output_format

    def render(self, report: Report) -> Tuple[str, int]:
        if self.output_format == 'json':
            text = self._render_json(report)
        elif self.output_format == 'github-actions':
            text = self._render_annotations(report)
        else:
            text = self._render_human(report)
        return text, exit_code_for(report)

    @staticmethod
    def format_finding(finding: Finding) -> str:
        return f"{finding.severity.value.upper()} {finding.location}: {finding.rule_id} {finding.message}"

    def _render_human(self, report: Report) -> str:
        lines: List[str] = [
            "Validation Summary:",
            f"  Directory: {report.root_dir}",
            f"  Total files processed: {report.total_files}",
            f"  Valid files: {report.valid_files}",
            f"  Invalid files: {report.invalid_files}",
            f"  Errors: {report.error_count}",
            f"  Warnings: {report.warning_count}",
        ]

        if report.findings:
            lines.append("")
            lines.append("Findings:")
            for finding in report.findings:
                lines.append(self.format_finding(finding))
                if self.verbose and isinstance(finding.detail, list) and finding.detail:
                    lines.append(f"  detail: {', '.join(str(item) for item in finding.detail)}")

        if self.verbose and report.files:
            invalid = report.invalid_paths
            lines.append("")
            lines.append("Files:")
            for path in report.files:
                status = "INVALID" if path in invalid else "VALID"
                lines.append(f"  {status} {path}")

        lines.append("")
        lines.append(
            f"Tally: {report.error_count} error(s), {report.warning_count} warning(s) "
            f"across {report.total_files} file(s)"
        )
        if report.aborted:
            lines.append("Validation aborted: environment failure")
        elif report.invalid_files == 0:
            lines.append("All YAML files are valid!")
            if report.warning_count > 0:
                lines.append("Consider addressing the warnings above for better configuration.")
        else:
            lines.append(f"{report.invalid_files} file(s) have validation errors")
        return "\n".join(lines)

    @staticmethod
    def _render_json(report: Report) -> str:
        invalid = report.invalid_paths
        output = {
            'root': str(report.root_dir),
            'files': report.total_files,
            'valid_files': report.valid_files,
            'invalid_files': report.invalid_files,
            'errors': report.error_count,
            'warnings': report.warning_count,
            'aborted': report.aborted,
            'results': [
                {
                    'file': str(path),
                    'valid': path not in invalid,
                    'findings': [f.to_dict() for f in report.findings if f.file_path == path],
                }
                for path in report.files
            ],
            'findings': [f.to_dict() for f in report.findings],
        }
        return json.dumps(output, indent=2)

    @staticmethod
    def _render_annotations(report: Report) -> str:
        lines = []
        for finding in report.findings:
            level = _ANNOTATION_LEVELS[finding.severity]
            line = finding.line if finding.line is not None else 1
            lines.append(f"::{level} file={finding.file_path},line={line}::{finding.rule_id} {finding.message}")
        return "\n".join(lines)
