#!/usr/bin/env python3
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

"""CLI entry point for validating ARC YAML configuration files."""

import argparse
import sys
from typing import List

from .config import validator_config
from .reporter import OUTPUT_FORMATS, Reporter
from .session import ValidationOptions, ValidationSession

EPILOG = """\
Examples:
    arc-config-validate                  # Validate all YAML files in current directory
    arc-config-validate -v               # Verbose validation
    arc-config-validate -f               # Validate and fix issues where possible
    arc-config-validate -d runners/      # Validate only files in runners/ directory

Exit codes: 0 valid (warnings allowed), 1 invalid files, 2 environment failure.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='arc-config-validate',
        description='Validate ARC YAML configuration files for syntax and common issues',
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'directory',
        nargs='?',
        default=None,
        help='Directory to validate (default: current directory)',
    )
    parser.add_argument(
        '-d', '--dir',
        dest='dir_option',
        default=None,
        help='Directory to validate, same as the positional argument',
    )
    parser.add_argument(
        '-f', '--fix',
        action='store_true',
        help='Attempt to fix common issues automatically',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output',
    )
    parser.add_argument(
        '--format',
        choices=list(OUTPUT_FORMATS),
        default='human',
        help='Output format (default: human)',
    )
    return parser


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the validator CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.directory and args.dir_option and args.directory != args.dir_option:
        parser.error("conflicting directories given positionally and with --dir")
    root_dir = args.dir_option or args.directory or '.'

    validator_config.set_logging(verbose=args.verbose and args.format == 'human')

    session = ValidationSession(
        ValidationOptions(fix_mode=args.fix, verbose=args.verbose),
        config=validator_config,
    )
    report = session.run(root_dir)

    text, exit_code = Reporter(verbose=args.verbose, output_format=args.format).render(report)
    if text:
        print(text)
    sys.exit(exit_code)


if __name__ == '__main__':
    main()
