# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Validation checks for BPMNml models.

These checks operate on linked models (connection endpoints already bound
where possible) and enforce the containment and naming rules a grammar
cannot express. Every check reports through an ``accept`` callback, so one
faulty element never stops the remaining checks from running.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from bpmnml.model.entities import Connection, Element, Event, Gateway, Lane, Node, Pool, ProcessModel, Task
from bpmnml.model.types import FlowKind
from bpmnml.scoping.resolver import find_pool

# ###############
# Public Interface
# ###############

# Scope name used for nodes outside every pool.
GLOBAL_SCOPE = "global"


class Severity(Enum):
    """How serious a diagnostic is."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A rule violation attached to the element that caused it.

    Attributes:
        severity: Errors block compilation; warnings are advisory.
        message: Human-readable description of the problem.
        element: The offending element.
        attribute: Name of the offending field of *element*, if a single
            field is at fault (``"source"``, ``"target"``, ``"name"``).
    """

    severity: Severity
    message: str
    element: Element
    attribute: str | None = None

    def format(self) -> str:
        """Return a one-line rendering such as ``error: ... (task 'Pay')``."""
        return f"{self.severity.value}: {self.message} ({describe(self.element)})"


# Signature of the callback every check reports through.
Accept = Callable[[Severity, str, Element, str | None], None]


@dataclass
class ValidationResult:
    """Diagnostics collected while validating one model.

    Attributes:
        diagnostics: All diagnostics in the order they were reported.
    """

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def accept(self, severity: Severity, message: str, element: Element, attribute: str | None = None) -> None:
        """Record a diagnostic."""
        self.diagnostics.append(Diagnostic(severity, message, element, attribute))

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        """Return True if any error-severity diagnostic was recorded."""
        return any(d.severity is Severity.ERROR for d in self.diagnostics)


def describe(element: Element) -> str:
    """Return a short human-readable label for *element*."""
    if isinstance(element, Connection):
        return f"connection '{element.source.name} {element.connector.value} {element.target.name}'"
    if isinstance(element, (Event, Task, Gateway, Pool, Lane)):
        return f"{element.kind} '{element.name}'"
    return type(element).__name__


def validate(model: ProcessModel) -> ValidationResult:
    """Run every validation check on a linked model.

    Checks performed:

    1. **Connections** (error/warning): each connection is checked with
       :func:`check_connection`.
    2. **Duplicate node names** (error/warning): see
       :func:`check_duplicate_node_names`.
    3. **Empty pools and lanes** (warning): see :func:`check_pool_elements`
       and :func:`check_lane_elements`.

    Args:
        model: The model to validate, with connection references linked.

    Returns:
        A :class:`ValidationResult` holding every diagnostic found.
    """
    result = ValidationResult()
    accept = result.accept

    for element in _walk(model):
        if isinstance(element, Connection):
            check_connection(element, accept)
        elif isinstance(element, Pool):
            check_pool_elements(element, accept)
        elif isinstance(element, Lane):
            check_lane_elements(element, accept)
    check_duplicate_node_names(model, accept)

    return result


def check_connection(connection: Connection, accept: Accept) -> None:
    """Check that a connection's endpoints exist and respect pool boundaries.

    Message flows must join nodes of two different pools. All other
    connections must stay inside one pool, or stay entirely outside pools.
    Connecting a node to itself is reported as a warning.
    """
    source = connection.source.ref
    target = connection.target.ref
    if source is None:
        accept(Severity.ERROR, "Connection source node is not defined.", connection, "source")
    if target is None:
        accept(Severity.ERROR, "Connection target node is not defined.", connection, "target")
    if source is None or target is None:
        return

    source_pool = find_pool(source)
    target_pool = find_pool(target)
    if connection.flow_kind is FlowKind.MESSAGE:
        if source_pool is None or target_pool is None:
            accept(Severity.ERROR, "Message flows must connect nodes in different pools.", connection, None)
        elif source_pool is target_pool:
            accept(Severity.ERROR, "Message flows cannot connect nodes within the same pool.", connection, None)
    elif source_pool is not None and target_pool is not None:
        if source_pool is not target_pool:
            accept(Severity.ERROR, "Connections cannot cross pool boundaries.", connection, None)
    elif source_pool is not None or target_pool is not None:
        accept(Severity.ERROR, "Connections cannot mix pooled and unpooled nodes.", connection, None)

    if source is target:
        accept(Severity.WARNING, "Self-loops are not recommended in BPMN.", connection, None)


def check_duplicate_node_names(model: ProcessModel, accept: Accept) -> None:
    """Report node names that repeat within a scope or across containers.

    A scope is identified by the dotted path of enclosing pool and lane
    names (``"Orders.Billing"``); nodes outside every pool belong to the
    ``"global"`` scope. A repeated name inside one scope is an error on each
    repetition. A node inside a pool or lane whose name was already used in a
    different scope only yields a warning.
    """
    scope_names: dict[str, set[str]] = {}
    name_scopes: dict[str, set[str]] = {}

    def _check_node(node: Node, path: str | None) -> None:
        scope = path or GLOBAL_SCOPE
        seen = scope_names.setdefault(scope, set())
        if node.name in seen:
            accept(Severity.ERROR, f"Duplicate node name '{node.name}' in {scope} scope.", node, "name")
        else:
            seen.add(node.name)

        used_in = name_scopes.setdefault(node.name, set())
        if path is not None and used_in - {scope}:
            accept(Severity.WARNING, f"Node name '{node.name}' is used in multiple containers.", node, "name")
        used_in.add(scope)

    def _process(elements: list, path: str | None) -> None:
        for element in elements:
            if isinstance(element, Node):
                _check_node(element, path)
            elif isinstance(element, Pool):
                _process(element.elements, element.name)
            elif isinstance(element, Lane):
                _process(element.elements, f"{path}.{element.name}" if path else element.name)

    _process(model.elements, None)


def check_pool_elements(pool: Pool, accept: Accept) -> None:
    """Warn about a pool without any direct elements."""
    if not pool.elements:
        accept(Severity.WARNING, "Pool is empty. Consider adding lanes or elements.", pool, "name")


def check_lane_elements(lane: Lane, accept: Accept) -> None:
    """Warn about a lane without any direct elements."""
    if not lane.elements:
        accept(Severity.WARNING, "Lane is empty. Consider adding elements.", lane, "name")


# ################
# Implementation
# ################


def _walk(container: ProcessModel | Pool | Lane) -> Iterator[Element]:
    """Yield every element below *container* in document order."""
    for element in container.elements:
        yield element
        if isinstance(element, (Pool, Lane)):
            yield from _walk(element)
