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

"""Rule catalog for ARC manifest validation."""

from typing import Optional

from ..config import ValidatorConfig, validator_config
from .base import Rule, RuleSet, find_key, has_key, walk
from .format_rules import LineLengthRule, PlaceholderRule, TabsRule, TrailingWhitespaceRule
from .namespace_rules import OrgLevelNamespaceRule, RepoLevelNamespaceRule
from .schema_rules import ManifestSchemaRule
from .security_rules import (
    EmbeddedPolicySyntaxRule,
    PolicySecurityContextRule,
    ResourceLimitsRule,
    RunAsRootRule,
    SecurityContextRule,
)
from .structure_rules import PolicyDataRule, RunnerTargetRule

__all__ = ['Rule', 'RuleSet', 'default_rule_set', 'find_key', 'has_key', 'walk']


def default_rule_set(config: Optional[ValidatorConfig] = None) -> RuleSet:
    """Build the baseline rule catalog.

    Args:
        config: Validator configuration for rule thresholds. If None, uses global config.

    Returns:
        RuleSet with every built-in rule, in execution order
    """
    config = config if config is not None else validator_config

    return RuleSet([
        # Structural
        ManifestSchemaRule(),
        RunnerTargetRule(),
        PolicyDataRule(),
        # Security
        SecurityContextRule(),
        ResourceLimitsRule(),
        RunAsRootRule(),
        PolicySecurityContextRule(),
        EmbeddedPolicySyntaxRule(),
        # Best practice
        PlaceholderRule(config.placeholder_pattern),
        TabsRule(),
        TrailingWhitespaceRule(),
        LineLengthRule(config.max_line_length),
        # Cross-file
        OrgLevelNamespaceRule(),
        RepoLevelNamespaceRule(),
    ])
