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


"""Logging setup for the validator's package logger.

Narration (INFO) shares stdout with the rendered report; problems at or
above the stderr threshold go to stderr so CI logs can separate them.
"""

import logging
import sys
from typing import IO, Optional

PACKAGE_LOGGER = "arc_config_validator"

DEFAULT_FORMAT = "[%(levelname)s] %(message)s"


class _BelowLevelFilter(logging.Filter):
    def __init__(self, threshold: int) -> None:
        super().__init__()
        self._threshold = threshold

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self._threshold


def _stream_handler(stream: IO[str], level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(stream=stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def reset_package_logging() -> logging.Logger:
    """Drop every handler from the package logger and let records propagate again."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_split_stream_logging(
    *,
    level: int = logging.WARNING,
    stderr_level: int = logging.ERROR,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Logger:
    """Route the package logger to stdout and stderr by severity.

    Only the package logger is touched so embedding applications keep their
    own root configuration. Returns the package logger.
    """
    logger = reset_package_logging()
    logger.setLevel(level)
    logger.propagate = False

    formatter = formatter or logging.Formatter(DEFAULT_FORMAT)

    stdout_handler = _stream_handler(sys.stdout, logging.NOTSET, formatter)
    stdout_handler.addFilter(_BelowLevelFilter(stderr_level))
    logger.addHandler(stdout_handler)
    logger.addHandler(_stream_handler(sys.stderr, stderr_level, formatter))
    return logger
