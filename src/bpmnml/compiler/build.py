# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compilation workflow from parsed artifacts to BPMN 2.0 XML.

The workflow is: read the artifact (which rebuilds and links the tree),
validate it, and only when no error-severity diagnostic was reported,
generate the document. Warnings never stop compilation; they are returned
alongside the output so the caller can show them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from bpmnml.compiler.artifact import read_artifact
from bpmnml.compiler.generator import GeneratorOptions, generate
from bpmnml.model.entities import ProcessModel
from bpmnml.validation.checks import Diagnostic, validate

# ###############
# Public Interface
# ###############


class CompilerError(Exception):
    """Raised when a model cannot be compiled.

    Covers unreadable or malformed artifacts and models with validation
    errors. In the latter case :attr:`diagnostics` holds every diagnostic
    reported, warnings included.
    """

    def __init__(self, message: str, diagnostics: list[Diagnostic] | None = None) -> None:
        super().__init__(message)
        self.diagnostics: list[Diagnostic] = diagnostics or []


@dataclass
class CompileResult:
    """Output of a successful compilation.

    Attributes:
        xml: The generated BPMN 2.0 document.
        diagnostics: Warnings reported by validation.
    """

    xml: str
    diagnostics: list[Diagnostic] = field(default_factory=list)


def load_model(source_file: Path) -> ProcessModel:
    """Read and link the model stored in *source_file*.

    Raises:
        CompilerError: If the file cannot be read or is not a valid artifact.
    """
    try:
        return read_artifact(source_file)
    except OSError as exc:
        raise CompilerError(f"Cannot read source file '{source_file}': {exc}") from exc
    except (ValueError, KeyError, TypeError) as exc:
        raise CompilerError(f"Invalid model artifact '{source_file}': {exc}") from exc


def compile_model(model: ProcessModel, options: GeneratorOptions | None = None) -> CompileResult:
    """Validate *model* and generate its BPMN document.

    Args:
        model: A linked model.
        options: Output settings passed on to the generator.

    Returns:
        The generated document and the warnings found.

    Raises:
        CompilerError: If validation reports any error.
    """
    result = validate(model)
    if result.has_errors:
        error_lines = "\n".join(f"  {d.format()}" for d in result.errors)
        raise CompilerError(f"Validation failed:\n{error_lines}", result.diagnostics)
    return CompileResult(xml=generate(model, options), diagnostics=result.diagnostics)


def compile_file(
    source_file: Path,
    output_file: Path | None = None,
    options: GeneratorOptions | None = None,
) -> CompileResult:
    """Compile the artifact at *source_file*, optionally writing the XML.

    Args:
        source_file: Path to a ``.bpmnml.json`` artifact.
        output_file: Where to write the document. Parent directories are
            created as needed. Nothing is written when None.
        options: Output settings passed on to the generator.

    Raises:
        CompilerError: On unreadable input, validation errors, or when the
            output cannot be written.
    """
    model = load_model(source_file)
    try:
        compiled = compile_model(model, options)
    except CompilerError as exc:
        raise CompilerError(f"Errors in '{source_file}': {exc}", exc.diagnostics) from exc

    if output_file is not None:
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            output_file.write_text(compiled.xml, encoding="utf-8")
        except OSError as exc:
            raise CompilerError(f"Cannot write output file '{output_file}': {exc}") from exc
    return compiled
