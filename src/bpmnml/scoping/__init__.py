# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Name scoping and linking of connection endpoints."""

from bpmnml.scoping.resolver import (
    REFERENCE_PROPERTIES,
    collect_nodes,
    find_container,
    find_model,
    find_pool,
    global_nodes,
    link,
    scope_for_connection,
)

__all__ = [
    "REFERENCE_PROPERTIES",
    "collect_nodes",
    "find_container",
    "find_model",
    "find_pool",
    "global_nodes",
    "link",
    "scope_for_connection",
]
