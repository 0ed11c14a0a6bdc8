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

"""Aggregated outcome of a validation run."""

from pathlib import Path
from typing import Iterable, List, Set

from ..exceptions import ConfigValidatorError
from .finding import Finding, Severity


class Report:
    """Container for every finding of one validation session.

    The session is the only writer. Once :meth:`finalize` has been called the
    report is read-only and can be rendered any number of times.
    """

    def __init__(self, root_dir: Path):
        """Initialize an empty report.

        Args:
            root_dir: Directory the session scanned
        """
        self.root_dir = Path(root_dir)
        self.files: List[Path] = []
        self.findings: List[Finding] = []
        self.aborted = False
        self._finalized = False

    def _check_writable(self):
        if self._finalized:
            raise ConfigValidatorError("Report is finalized and can no longer be modified")

    def add_file(self, file_path: Path):
        """Register a processed file, in discovery order."""
        self._check_writable()
        self.files.append(Path(file_path))

    def add_finding(self, finding: Finding):
        """Append one finding."""
        self._check_writable()
        self.findings.append(finding)

    def add_findings(self, findings: Iterable[Finding]):
        for finding in findings:
            self.add_finding(finding)

    def abort(self, finding: Finding):
        """Record an environment-level failure and stop accepting findings."""
        self.add_finding(finding)
        self.aborted = True
        self.finalize()

    def finalize(self):
        self._finalized = True

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def invalid_paths(self) -> Set[Path]:
        files = set(self.files)
        return {f.file_path for f in self.findings if f.is_error and f.file_path in files}

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def invalid_files(self) -> int:
        return len(self.invalid_paths)

    @property
    def valid_files(self) -> int:
        return self.total_files - self.invalid_files

    @property
    def error_count(self) -> int:
        return sum(1 for f in self.findings if f.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for f in self.findings if f.severity == Severity.WARNING)

    @property
    def info_count(self) -> int:
        return sum(1 for f in self.findings if f.severity == Severity.INFO)

    def findings_for(self, file_path: Path) -> List[Finding]:
        file_path = Path(file_path)
        return [f for f in self.findings if f.file_path == file_path]

    def is_valid(self, file_path: Path) -> bool:
        return Path(file_path) not in self.invalid_paths
