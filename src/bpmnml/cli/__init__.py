# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Command-line interface for BPMNml."""
