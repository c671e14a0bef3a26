# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""BPMNml: scoping, validation and BPMN 2.0 generation for textual process models."""
