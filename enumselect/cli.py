#!/usr/bin/env python
"""
Command-line interface for enumselect.

Subcommands:
    check      Statically check decorated enum declarations in Python files
    generate   Render a Python module from a YAML schema
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from enumselect.constants import DEFAULT_EXCLUDE_DIRS, DEFAULT_LOG_FORMAT
from enumselect.core.exceptions import SchemaError, ValidationError
from enumselect.core.model import Diagnostic
from enumselect.generation.module_writer import render_module
from enumselect.schema.loader import load_schema
from enumselect.validation.validate import validate_directory, validate_file

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=DEFAULT_LOG_FORMAT,
    )


def handle_check(args) -> int:
    paths = [Path(p) for p in args.paths]
    exclude_dirs = set(args.exclude)

    all_violations: List[Diagnostic] = []
    for path in paths:
        if path.is_file() and path.suffix == '.py':
            all_violations.extend(validate_file(str(path)))
        elif path.is_dir():
            all_violations.extend(validate_directory(path, exclude_dirs))
        else:
            print(f"Warning: {path} is not a Python file or directory", file=sys.stderr)

    # Group violations by file
    violations_by_file: Dict[str, List[Diagnostic]] = {}
    for violation in all_violations:
        violations_by_file.setdefault(violation.location.file, []).append(violation)
    for violations in violations_by_file.values():
        violations.sort(key=lambda v: (v.location.line, v.location.column))

    output_file = open(args.output, 'w', encoding='utf-8') if args.output else sys.stdout
    try:
        if all_violations:
            print(f"Found {len(all_violations)} enumselect violations:", file=output_file)
            for file_path, violations in sorted(violations_by_file.items()):
                print(f"\n{file_path}:", file=output_file)
                for violation in violations:
                    print(f"  Line {violation.location.line}: {violation.kind.value} - {violation.message}",
                          file=output_file)
        else:
            print("No enumselect violations found.", file=output_file)
    finally:
        if args.output:
            output_file.close()

    if all_violations and args.fail_on_error:
        return 1
    return 0


def handle_generate(args) -> int:
    try:
        schema = load_schema(args.schema)
    except (SchemaError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    config = schema.config
    if args.no_header:
        config = dataclasses.replace(config, header=False)

    try:
        module_source = render_module(schema.declarations, config, source=Path(args.schema).name)
    except ValidationError as e:
        for diagnostic in e.diagnostics:
            print(str(diagnostic), file=sys.stderr)
        return 1

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(module_source)
        logger.info(f"Wrote {args.output}")
    else:
        sys.stdout.write(module_source)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="enumselect",
        description="Validate and generate indexable unit enumerations",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands. Use <command> -h for more details.")
    subparsers.required = True

    parser_check = subparsers.add_parser("check", help="Check decorated enum declarations in Python files.")
    parser_check.add_argument("paths", nargs="+", help="Files or directories to check")
    parser_check.add_argument("--exclude", nargs="+", default=list(DEFAULT_EXCLUDE_DIRS),
                              help="Directories to exclude from checking")
    parser_check.add_argument("--output", help="Output file for check results (default: stdout)")
    parser_check.add_argument("--fail-on-error", action="store_true",
                              help="Exit with non-zero status if violations are found")
    parser_check.set_defaults(func=handle_check)

    parser_generate = subparsers.add_parser("generate", help="Render a Python module from a YAML schema.")
    parser_generate.add_argument("schema", help="Path to the YAML schema")
    parser_generate.add_argument("-o", "--output", help="Output module path (default: stdout)")
    parser_generate.add_argument("--no-header", action="store_true",
                                 help="Omit the generated-file docstring")
    parser_generate.set_defaults(func=handle_generate)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the enumselect command."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
