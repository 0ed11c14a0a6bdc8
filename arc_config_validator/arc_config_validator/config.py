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

"""Configuration management for the validator."""

import os
import logging
from dataclasses import dataclass, field
from typing import Tuple

from .utils.logging_utils import configure_split_stream_logging

DEFAULT_EXTENSIONS = (".yaml", ".yml")
DEFAULT_PLACEHOLDER_PATTERN = r"__[A-Z0-9]+(?:_[A-Z0-9]+)*__"


def _split_extensions(raw: str) -> Tuple[str, ...]:
    extensions = []
    for item in raw.split(","):
        item = item.strip().lower()
        if not item:
            continue
        if not item.startswith("."):
            item = "." + item
        extensions.append(item)
    return tuple(extensions) or DEFAULT_EXTENSIONS


@dataclass
class ValidatorConfig:
    """Configuration class for a validation run."""
    log_level: str = "WARNING"
    print_level: str = "ERROR"

    # discovery
    extensions: Tuple[str, ...] = field(default=DEFAULT_EXTENSIONS)

    # rule thresholds
    max_line_length: int = 200
    placeholder_pattern: str = DEFAULT_PLACEHOLDER_PATTERN

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('ARC_VALIDATOR_LOG_LEVEL', 'WARNING'),
            print_level=os.getenv('ARC_VALIDATOR_PRINT_LEVEL', 'ERROR'),
            extensions=_split_extensions(os.getenv('ARC_VALIDATOR_EXTENSIONS', ','.join(DEFAULT_EXTENSIONS))),
            max_line_length=int(os.getenv('ARC_VALIDATOR_MAX_LINE_LENGTH', '200')),
            placeholder_pattern=os.getenv('ARC_VALIDATOR_PLACEHOLDER_PATTERN', DEFAULT_PLACEHOLDER_PATTERN),
        )

    def set_logging(self, verbose: bool = False) -> logging.Logger:
        """Setup logging based on configuration.

        Verbose runs lower the threshold to INFO so per-file narration shows up.
        """
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        if verbose:
            level = min(level, logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        return configure_split_stream_logging(level=level, stderr_level=stderr_level)


# Global configuration instance
validator_config = ValidatorConfig.from_env()
