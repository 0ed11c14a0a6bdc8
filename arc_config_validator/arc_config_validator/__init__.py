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

"""Rule-based validation of ARC runner manifests."""

from pathlib import Path
from typing import Union

from .models import Finding, Report, Severity, Stage
from .reporter import Reporter
from .rules import Rule, RuleSet, default_rule_set
from .session import ValidationOptions, ValidationSession

__version__ = "0.1.0"

__all__ = [
    'Finding',
    'Report',
    'Reporter',
    'Rule',
    'RuleSet',
    'Severity',
    'Stage',
    'ValidationOptions',
    'ValidationSession',
    'default_rule_set',
    'validate_directory',
]


def validate_directory(
    root_dir: Union[str, Path] = ".",
    fix_mode: bool = False,
    verbose: bool = False,
) -> Report:
    """Validate every manifest under a directory.

    Args:
        root_dir: Directory to scan recursively
        fix_mode: Apply auto-fixable rules in place
        verbose: Narrate per-file progress

    Returns:
        The finalized Report
    """
    session = ValidationSession(ValidationOptions(fix_mode=fix_mode, verbose=verbose))
    return session.run(root_dir)
