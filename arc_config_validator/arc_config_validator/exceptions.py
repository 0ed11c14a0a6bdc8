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

"""Custom exceptions for the ARC configuration validator."""


class ConfigValidatorError(Exception):
    """Base exception for validator related errors."""
    pass


class ManifestDecodeError(ConfigValidatorError):
    """Exception raised when a manifest file cannot be decoded.

    Never escapes a validation run: the loader turns it into a parse failure
    on the document, which the session reports as ``syntax-000``.
    """
    pass


class EnvironmentFailure(ConfigValidatorError):
    """Exception raised when the run itself cannot proceed.

    Covers a missing root directory and files with no registered decoder.
    The session reports it as ``env-000`` and stops.
    """
    pass
