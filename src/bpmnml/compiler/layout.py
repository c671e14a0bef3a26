# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Deterministic diagram layout for generated processes.

Every compiled process occupies one horizontal row. Nodes are placed left to
right in document order at a fixed pitch; rows are stacked top to bottom in
the order the processes were compiled. A pool's participant shape encloses
its row with a fixed padding.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from bpmnml.model.entities import Event, Gateway, Node

# ###############
# Public Interface
# ###############

ROW_START_X = 100
NODE_SPACING_X = 180
ROW_START_Y = 80
ROW_SPACING_Y = 220
PARTICIPANT_PADDING = 40

EVENT_SIZE = (36, 36)
GATEWAY_SIZE = (50, 50)
TASK_SIZE = (100, 80)


@dataclass(frozen=True)
class Bounds:
    """An axis-aligned box in diagram coordinates."""

    x: int
    y: int
    width: int
    height: int

    @property
    def center(self) -> Waypoint:
        """Centre of the box, rounded half-up to integer coordinates."""
        return Waypoint(_round(self.x + self.width / 2), _round(self.y + self.height / 2))


@dataclass(frozen=True)
class Waypoint:
    """A point an edge passes through."""

    x: int
    y: int


@dataclass
class ShapeLayout:
    """A positioned shape for one BPMN element.

    Attributes:
        element_id: Identifier of the BPMN element drawn by the shape.
        bounds: Where the shape sits.
        is_horizontal: Set for participant (swimlane) shapes.
    """

    element_id: str
    bounds: Bounds
    is_horizontal: bool = False


@dataclass
class EdgeLayout:
    """A routed edge for one connection.

    Attributes:
        element_id: Identifier of the BPMN flow drawn by the edge.
        waypoints: Points of the polyline, source first.
    """

    element_id: str
    waypoints: list[Waypoint] = field(default_factory=list)


@dataclass
class DiagramLayout:
    """All shapes and edges of one diagram plane."""

    shapes: list[ShapeLayout] = field(default_factory=list)
    edges: list[EdgeLayout] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.shapes and not self.edges


def node_size(node: Node) -> tuple[int, int]:
    """Return the fixed ``(width, height)`` footprint of *node*."""
    if isinstance(node, Event):
        return EVENT_SIZE
    if isinstance(node, Gateway):
        return GATEWAY_SIZE
    return TASK_SIZE


def layout_row(nodes: list[Node], row: int) -> dict[Node, Bounds]:
    """Place *nodes* left to right on row number *row* (zero-based)."""
    y = ROW_START_Y + row * ROW_SPACING_Y
    boxes: dict[Node, Bounds] = {}
    for index, node in enumerate(nodes):
        width, height = node_size(node)
        boxes[node] = Bounds(ROW_START_X + index * NODE_SPACING_X, y, width, height)
    return boxes


def participant_bounds(boxes: list[Bounds]) -> Bounds | None:
    """Return the padded union of *boxes*, or None when there are none."""
    if not boxes:
        return None
    left = min(b.x for b in boxes)
    top = min(b.y for b in boxes)
    right = max(b.x + b.width for b in boxes)
    bottom = max(b.y + b.height for b in boxes)
    return Bounds(
        left - PARTICIPANT_PADDING,
        top - PARTICIPANT_PADDING,
        right - left + 2 * PARTICIPANT_PADDING,
        bottom - top + 2 * PARTICIPANT_PADDING,
    )


def edge_waypoints(source: Bounds | None, target: Bounds | None) -> list[Waypoint]:
    """Return a straight centre-to-centre route between two boxes.

    A missing box degrades to a two-point route at the origin instead of
    failing the whole diagram.
    """
    if source is None or target is None:
        return [Waypoint(0, 0), Waypoint(0, 0)]
    return [source.center, target.center]


# ################
# Implementation
# ################


def _round(value: float) -> int:
    return math.floor(value + 0.5)
