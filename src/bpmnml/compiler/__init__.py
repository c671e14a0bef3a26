# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler pipeline for BPMNml models: artifacts, identifiers, layout and XML generation."""

from bpmnml.compiler.artifact import deserialize, read_artifact, serialize, write_artifact
from bpmnml.compiler.build import CompileResult, CompilerError, compile_file, compile_model, load_model
from bpmnml.compiler.generator import GeneratorOptions, generate
from bpmnml.compiler.identifiers import IdentifierTable, sanitize

__all__ = [
    "serialize",
    "deserialize",
    "write_artifact",
    "read_artifact",
    "compile_model",
    "compile_file",
    "load_model",
    "CompileResult",
    "CompilerError",
    "generate",
    "GeneratorOptions",
    "IdentifierTable",
    "sanitize",
]
