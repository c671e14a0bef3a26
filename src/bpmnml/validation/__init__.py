# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Structural and naming checks for BPMNml models."""

from bpmnml.validation.checks import (
    Diagnostic,
    Severity,
    ValidationResult,
    check_connection,
    check_duplicate_node_names,
    check_lane_elements,
    check_pool_elements,
    validate,
)

__all__ = [
    "Diagnostic",
    "Severity",
    "ValidationResult",
    "check_connection",
    "check_duplicate_node_names",
    "check_lane_elements",
    "check_pool_elements",
    "validate",
]
