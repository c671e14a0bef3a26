# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the BPMNml command-line interface."""

import argparse
import sys
from pathlib import Path
from typing import TextIO

from yachalk import chalk

from bpmnml.compiler.build import CompilerError, compile_file, load_model
from bpmnml.validation.checks import Diagnostic, Severity, describe, validate
from bpmnml.workspace.config import ConfigError, ProjectConfig, find_config, load_config

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the BPMNml CLI."""
    parser = argparse.ArgumentParser(
        prog="bpmnml",
        description="BPMNml - textual business process modeling",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Validate model artifacts",
        description="Link and validate BPMNml model artifacts and report all diagnostics.",
    )
    check_parser.add_argument(
        "files",
        nargs="+",
        help="Model artifacts (.bpmnml.json) to check",
    )
    _add_config_argument(check_parser)

    # compile subcommand
    compile_parser = subparsers.add_parser(
        "compile",
        help="Generate BPMN 2.0 XML from a model artifact",
        description=(
            "Validate a BPMNml model artifact and, if it has no errors, generate a "
            "BPMN 2.0 XML document with diagram layout."
        ),
    )
    compile_parser.add_argument("file", help="Model artifact (.bpmnml.json) to compile")
    compile_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the document to this path (default: standard output)",
    )
    _add_config_argument(compile_parser)

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_config_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=None,
        help="Configuration file (default: .bpmnml.yaml in the current directory, if present)",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "compile":
        return _cmd_compile(args)
    return 0


def _load_config(args: argparse.Namespace) -> ProjectConfig | None:
    """Load the configuration named on the command line, printing any error."""
    try:
        if args.config is not None:
            return load_config(Path(args.config))
        return find_config(Path.cwd())
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _print_diagnostic(source: Path, diagnostic: Diagnostic, *, stream: TextIO | None = None) -> None:
    """Print *diagnostic*; errors go to stderr and warnings to *stream* or stdout."""
    if diagnostic.severity is Severity.ERROR:
        label = chalk.red("error")
        out = sys.stderr
    else:
        label = chalk.yellow("warning")
        out = stream if stream is not None else sys.stdout
    print(f"{source}: {label}: {diagnostic.message} ({describe(diagnostic.element)})", file=out)


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    config = _load_config(args)
    if config is None:
        return 1

    has_errors = False
    has_warnings = False
    for name in args.files:
        source = Path(name)
        try:
            model = load_model(source)
        except CompilerError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            has_errors = True
            continue

        result = validate(model)
        for diagnostic in result.diagnostics:
            _print_diagnostic(source, diagnostic)
        has_errors = has_errors or result.has_errors
        has_warnings = has_warnings or bool(result.warnings)

    if has_errors:
        return 1
    if has_warnings:
        return 1 if config.fail_on_warnings else 0

    print(f"Checked {len(args.files)} model(s). No issues found.")
    return 0


def _cmd_compile(args: argparse.Namespace) -> int:
    """Handle the compile subcommand."""
    config = _load_config(args)
    if config is None:
        return 1

    source = Path(args.file)
    output = Path(args.output) if args.output is not None else None
    try:
        compiled = compile_file(source, output, config.generator_options())
    except CompilerError as exc:
        if exc.diagnostics:
            for diagnostic in exc.diagnostics:
                _print_diagnostic(source, diagnostic, stream=sys.stderr)
        else:
            print(f"Error: {exc}", file=sys.stderr)
        return 1

    # The document may be going to stdout; keep warnings off it.
    for diagnostic in compiled.diagnostics:
        _print_diagnostic(source, diagnostic, stream=sys.stderr)

    if output is None:
        sys.stdout.write(compiled.xml)
    else:
        print(f"Wrote '{output}'.", file=sys.stderr)
    return 0
