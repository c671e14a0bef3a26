# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Process elements and containers of the BPMNml semantic model.

Every element records the container it was placed in. The back-reference is
stamped by the container when it is constructed and is kept out of
serialization and equality: elements compare by identity, so two nodes that
happen to share a name remain distinct.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, PrivateAttr
from pydantic import Field as _Field

from bpmnml.model.types import Connector, EventType, FlowKind, GatewayType, TaskType

# ###############
# Public Interface
# ###############


class Element(BaseModel):
    """Base class of every tree element; tracks its owning container."""

    _container: Any = PrivateAttr(default=None)

    @property
    def container(self) -> Pool | Lane | ProcessModel | None:
        """The element that directly holds this one, or None for the root."""
        return self._container

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)


class Event(Element):
    """An event node (start, end or intermediate)."""

    kind: Literal["event"] = "event"
    name: str
    event_type: EventType | None = None


class Task(Element):
    """A unit of work."""

    kind: Literal["task"] = "task"
    name: str
    task_type: TaskType | None = None


class Gateway(Element):
    """A branching or merging point."""

    kind: Literal["gateway"] = "gateway"
    name: str
    gateway_type: GatewayType | None = None


# Any flow node. Usable with isinstance().
Node = Event | Task | Gateway


class NodeRef(BaseModel):
    """A by-name reference from a connection endpoint to a node.

    ``name`` is the reference text as written; the bound node is absent
    until the reference is linked.
    """

    name: str
    _ref: Any = PrivateAttr(default=None)

    @classmethod
    def to(cls, node: Node) -> NodeRef:
        """Return a reference already bound to *node*."""
        ref = cls(name=node.name)
        ref.bind(node)
        return ref

    @property
    def ref(self) -> Node | None:
        return self._ref

    def bind(self, node: Node | None) -> None:
        self._ref = node


class Connection(Element):
    """A directed edge between two nodes."""

    kind: Literal["connection"] = "connection"
    source: NodeRef
    target: NodeRef
    connector: Connector = Connector.SEQUENCE
    label: str | None = None

    @property
    def flow_kind(self) -> FlowKind:
        return self.connector.kind


class _Container(Element):
    """An element that owns an ordered list of child elements."""

    elements: list[Any] = _Field(default_factory=list)

    def model_post_init(self, __context: Any) -> None:
        for element in self.elements:
            element._container = self


class Lane(_Container):
    """A named partition of a pool; lanes may nest."""

    kind: Literal["lane"] = "lane"
    name: str
    elements: list[PoolElement] = _Field(default_factory=list)


class Pool(_Container):
    """A named participant holding nodes, connections and lanes."""

    kind: Literal["pool"] = "pool"
    name: str
    elements: list[PoolElement] = _Field(default_factory=list)


class ProcessModel(_Container):
    """Root of a parsed BPMNml document.

    Elements placed directly here (outside every pool) form the global scope.
    """

    elements: list[ModelElement] = _Field(default_factory=list)


# Children allowed inside a pool or a lane.
PoolElement = Annotated[
    Event | Task | Gateway | Connection | Lane,
    _Field(discriminator="kind"),
]

# Children allowed at the top level of a document.
ModelElement = Annotated[
    Event | Task | Gateway | Connection | Pool,
    _Field(discriminator="kind"),
]


# Resolve forward references in self-referential models.
Lane.model_rebuild()
Pool.model_rebuild()
ProcessModel.model_rebuild()
