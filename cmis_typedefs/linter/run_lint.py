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

"""CLI entry point for linting CMIS type definition files."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List

from .. import CMIS_VERSION
from ..config import codec_config
from . import READERS, LintResult, lint_files


def find_type_definition_files(paths: List[str]) -> List[Path]:
    """Find all type definition files (by codec suffix) in given paths."""
    found = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            print(f"Warning: Path does not exist: {path}", file=sys.stderr)
            continue

        if path.is_file():
            if path.suffix.lower() in READERS:
                found.append(path)
            else:
                print(f"Warning: File is not a type definition file: {path}", file=sys.stderr)
        elif path.is_dir():
            for candidate in path.rglob('*'):
                if candidate.is_file() and candidate.suffix.lower() in READERS:
                    found.append(candidate)
        else:
            print(f"Warning: Path is neither file nor directory: {path}", file=sys.stderr)

    return sorted(set(found))


def _format_attribute(entry) -> str:
    return f" [{entry['attribute']}]" if 'attribute' in entry else ""


def print_results(results: List[LintResult], output_format: str) -> None:
    if output_format == 'json':
        output = {
            'cmis_version': CMIS_VERSION,
            'files': len(results),
            'errors': sum(len(r.errors) for r in results),
            'warnings': sum(len(r.warnings) for r in results),
            'results': [r.to_dict() for r in results],
        }
        print(json.dumps(output, indent=2))
    elif output_format == 'github-actions':
        for result in results:
            for error in result.errors:
                print(f"::error file={result.file_path}::{error['message']}{_format_attribute(error)}")
            for warning in result.warnings:
                print(f"::warning file={result.file_path}::{warning['message']}{_format_attribute(warning)}")
    else:  # human-readable
        for result in results:
            if result.errors or result.warnings:
                type_info = f" ({result.type_id})" if result.type_id else ""
                print(f"\n{result.file_path}{type_info}:")
                for error in result.errors:
                    print(f"  ERROR{_format_attribute(error)}: {error['message']}")
                for warning in result.warnings:
                    print(f"  WARNING{_format_attribute(warning)}: {warning['message']}")


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the linter CLI."""
    parser = argparse.ArgumentParser(
        description='Lint CMIS type definition files (XML, JSON or YAML)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='*',
        default=None,
        help='File paths or directories to lint (default: current directory)',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--strict',
        action='store_true',
        help='Report property definition issues as errors instead of warnings',
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging',
    )

    args = parser.parse_args(argv)

    if args.verbose:
        codec_config.log_level = 'DEBUG'
    codec_config.set_logging()

    if not args.paths:
        args.paths = ['.']

    files = find_type_definition_files(args.paths)

    if not files:
        print("No type definition files found.", file=sys.stderr)
        sys.exit(1)

    results = lint_files(files, strict=args.strict)
    print_results(results, args.format)

    # Exit with error code if any errors found
    total_errors = sum(len(r.errors) for r in results)
    if total_errors > 0:
        sys.exit(1)
    if args.format == 'human':
        print("Lint succeeded with no errors.")
    sys.exit(0)


if __name__ == '__main__':
    main()
