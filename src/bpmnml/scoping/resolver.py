# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reference scoping for connection endpoints.

A connection names its source and target nodes. Which nodes such a name may
bind to depends on the connection kind and on where the connection sits:

- A message flow may reference any node inside any pool (lanes included),
  but never a node outside every pool.
- Any other connection sees the nodes of its enclosing pool, including all
  lanes of that pool, so lane boundaries do not restrict visibility.
- A connection outside every pool sees only the nodes placed directly at the
  top level of the document.

Scopes deliberately over-approximate: whether a particular source/target
pairing is legal is decided by validation, not here.
"""

from __future__ import annotations

from collections.abc import Iterator

from bpmnml.model.entities import Connection, Element, Lane, Node, Pool, ProcessModel
from bpmnml.model.types import FlowKind

# ###############
# Public Interface
# ###############

REFERENCE_PROPERTIES = ("source", "target")


def find_container(element: Element) -> Pool | Lane | None:
    """Return the nearest enclosing pool or lane of *element*, if any."""
    current = element.container
    while current is not None:
        if isinstance(current, (Pool, Lane)):
            return current
        current = current.container
    return None


def find_pool(element: Element) -> Pool | None:
    """Return the pool that transitively contains *element*, if any."""
    current = element.container
    while current is not None:
        if isinstance(current, Pool):
            return current
        current = current.container
    return None


def find_model(element: Element) -> ProcessModel | None:
    """Return the document root that contains *element*, if any."""
    current: Element | None = element
    while current is not None:
        if isinstance(current, ProcessModel):
            return current
        current = current.container
    return None


def collect_nodes(container: Pool | Lane) -> list[Node]:
    """Return all nodes in *container*, descending into nested lanes."""
    return list(_iter_nodes(container))


def global_nodes(model: ProcessModel) -> list[Node]:
    """Return the nodes placed directly at the top level of *model*."""
    return [element for element in model.elements if isinstance(element, Node)]


def scope_for_connection(connection: Connection, reference: str) -> list[Node]:
    """Return the nodes that *connection*'s *reference* endpoint may bind to.

    Args:
        connection: The connection whose endpoint is being resolved.
        reference: Either ``"source"`` or ``"target"``. Both endpoints share
            the same scope; the argument mirrors the linker's request.

    Returns:
        Candidate nodes in depth-first document order. Nodes with equal
        names are all kept.

    Raises:
        ValueError: If *reference* does not name an endpoint property.
    """
    if reference not in REFERENCE_PROPERTIES:
        raise ValueError(f"Unknown connection reference {reference!r}")

    if connection.flow_kind is FlowKind.MESSAGE:
        model = find_model(connection)
        if model is None:
            return []
        return [node for pool in _pools(model) for node in _iter_nodes(pool)]

    container = find_container(connection)
    if container is None:
        model = find_model(connection)
        return global_nodes(model) if model is not None else []
    if isinstance(container, Lane):
        pool = find_pool(container)
        # A lane always sits inside a pool once the tree is complete; a
        # detached lane falls back to its own contents.
        return collect_nodes(pool if pool is not None else container)
    return collect_nodes(container)


def link(model: ProcessModel) -> list[tuple[Connection, str]]:
    """Bind every connection endpoint in *model* to a node by name.

    Each reference binds to the first candidate of its scope whose name
    matches the reference text. References without a match are left
    unbound and reported to the caller; validation turns them into errors.

    Returns:
        ``(connection, reference)`` pairs that could not be bound.
    """
    unresolved: list[tuple[Connection, str]] = []
    for connection in _iter_connections(model):
        for reference in REFERENCE_PROPERTIES:
            node_ref = getattr(connection, reference)
            match = next(
                (node for node in scope_for_connection(connection, reference) if node.name == node_ref.name),
                None,
            )
            node_ref.bind(match)
            if match is None:
                unresolved.append((connection, reference))
    return unresolved


# ################
# Implementation
# ################


def _pools(model: ProcessModel) -> list[Pool]:
    return [element for element in model.elements if isinstance(element, Pool)]


def _iter_nodes(container: Pool | Lane) -> Iterator[Node]:
    for element in container.elements:
        if isinstance(element, Node):
            yield element
        elif isinstance(element, Lane):
            yield from _iter_nodes(element)


def _iter_connections(container: ProcessModel | Pool | Lane) -> Iterator[Connection]:
    for element in container.elements:
        if isinstance(element, Connection):
            yield element
        elif isinstance(element, (Pool, Lane)):
            yield from _iter_connections(element)
