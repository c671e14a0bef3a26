# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""BPMN 2.0 XML generation for validated BPMNml models.

The generator turns a model into a ``definitions`` document with three parts,
always in this order:

- One ``process`` per compiled group: the global group (elements outside
  every pool) when it has flow content or when there are no pools, then one
  per non-empty pool in declaration order.
- A ``collaboration`` when the model has pools or message flows. It lists a
  ``participant`` for every pool and all ``messageFlow`` elements.
- A ``BPMNDiagram`` with the computed layout, omitted when there is nothing
  to draw.

Generation is a pure function of the model. Identifier counters and layout
tables belong to a single call, so repeated calls produce identical text.
The generator assumes the model passed validation but never fails on
missing optional data: unset subtypes fall back to defaults and unbound
endpoints are left out of the output.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field

from lxml import etree

from bpmnml.compiler.identifiers import IdentifierTable
from bpmnml.compiler.layout import (
    Bounds,
    DiagramLayout,
    EdgeLayout,
    ShapeLayout,
    edge_waypoints,
    layout_row,
    participant_bounds,
)
from bpmnml.model.entities import Connection, Event, Gateway, Lane, Node, NodeRef, Pool, ProcessModel
from bpmnml.model.types import (
    DEFAULT_EVENT_TYPE,
    DEFAULT_GATEWAY_TYPE,
    DEFAULT_TASK_TYPE,
    Connector,
    EventType,
    FlowKind,
    GatewayType,
    TaskType,
)
from bpmnml.scoping.resolver import collect_nodes

# ###############
# Public Interface
# ###############

BPMN_NAMESPACE = "http://www.omg.org/spec/BPMN/20100524/MODEL"
BPMNDI_NAMESPACE = "http://www.omg.org/spec/BPMN/20100524/DI"
DC_NAMESPACE = "http://www.omg.org/spec/DD/20100524/DC"
DI_NAMESPACE = "http://www.omg.org/spec/DD/20100524/DI"

TARGET_NAMESPACE = "http://bpmn.io/schema/bpmn"
DEFINITIONS_ID = "Definitions_1"


@dataclass
class GeneratorOptions:
    """Output settings for :func:`generate`.

    Attributes:
        indent: Spaces per nesting level in the serialized document.
        include_diagram: Emit the ``BPMNDiagram`` section.
    """

    indent: int = 2
    include_diagram: bool = True


def generate(model: ProcessModel, options: GeneratorOptions | None = None) -> str:
    """Generate a BPMN 2.0 XML document from a validated model.

    Args:
        model: The linked model. It should be free of validation errors;
            the generator does not check.
        options: Output settings; defaults to :class:`GeneratorOptions`.

    Returns:
        The serialized document, starting with an XML declaration.
    """
    return _Generator(model, options or GeneratorOptions()).generate()


# ################
# Implementation
# ################

_EVENT_TAGS = {
    EventType.START: "startEvent",
    EventType.END: "endEvent",
    EventType.INTERMEDIATE: "intermediateThrowEvent",
}

_TASK_TAGS = {
    TaskType.TASK: "task",
    TaskType.USER: "userTask",
    TaskType.SERVICE: "serviceTask",
    TaskType.MANUAL: "manualTask",
    TaskType.SCRIPT: "scriptTask",
    TaskType.SEND: "sendTask",
    TaskType.RECEIVE: "receiveTask",
    TaskType.BUSINESS_RULE: "businessRuleTask",
}

_GATEWAY_TAGS = {
    GatewayType.EXCLUSIVE: "exclusiveGateway",
    GatewayType.PARALLEL: "parallelGateway",
    GatewayType.INCLUSIVE: "inclusiveGateway",
    GatewayType.EVENT_BASED: "eventBasedGateway",
    GatewayType.COMPLEX: "complexGateway",
}

_FLOW_ID_BASES = {
    FlowKind.SEQUENCE: "Flow",
    FlowKind.ASSOCIATION: "Association",
    FlowKind.MESSAGE: "MessageFlow",
}


@dataclass
class _Group:
    """Flow content compiled into one process.

    Attributes:
        pool: The owning pool, or None for the global group.
        nodes: Nodes in document order, lanes flattened.
        flows: Sequence flows and associations in document order.
        messages: Message flows, rendered in the collaboration instead.
        process_id: Identifier of the synthesized process once assigned.
    """

    pool: Pool | None
    nodes: list[Node] = field(default_factory=list)
    flows: list[Connection] = field(default_factory=list)
    messages: list[Connection] = field(default_factory=list)
    process_id: str | None = None

    @property
    def has_flow_content(self) -> bool:
        return bool(self.nodes or self.flows)


def _partition(elements: list, pool: Pool | None) -> _Group:
    """Collect the nodes and connections of one group, descending into lanes only."""
    group = _Group(pool=pool)

    def _visit(children: list) -> None:
        for element in children:
            if isinstance(element, Node):
                group.nodes.append(element)
            elif isinstance(element, Connection):
                if element.flow_kind is FlowKind.MESSAGE:
                    group.messages.append(element)
                else:
                    group.flows.append(element)
            elif isinstance(element, Lane):
                _visit(element.elements)

    _visit(elements)
    return group


def _node_tag(node: Node) -> str:
    if isinstance(node, Event):
        return _EVENT_TAGS[node.event_type or DEFAULT_EVENT_TYPE]
    if isinstance(node, Gateway):
        return _GATEWAY_TAGS[node.gateway_type or DEFAULT_GATEWAY_TYPE]
    return _TASK_TAGS[node.task_type or DEFAULT_TASK_TYPE]


def _qname(namespace: str, tag: str) -> str:
    return f"{{{namespace}}}{tag}"


def _sub(
    parent: etree._Element,
    tag: str,
    namespace: str = BPMN_NAMESPACE,
    **attributes: str | None,
) -> etree._Element:
    """Append a child element, setting attributes in order and skipping None values."""
    element = etree.SubElement(parent, _qname(namespace, tag))
    for key, value in attributes.items():
        if value is not None:
            element.set(key, value)
    return element


class _Generator:
    """Generates the document for a single model; not reusable across models."""

    def __init__(self, model: ProcessModel, options: GeneratorOptions) -> None:
        self._model = model
        self._options = options
        self._ids = IdentifierTable()
        # Node boxes across all groups; message flows resolve against these.
        self._boxes: dict[Node, Bounds] = {}
        self._layout = DiagramLayout()

    def generate(self) -> str:
        self._assign_element_ids(self._model.elements)

        pools = [element for element in self._model.elements if isinstance(element, Pool)]
        global_group = _partition(self._model.elements, None)
        pool_groups = [_partition(pool.elements, pool) for pool in pools]

        groups: list[_Group] = []
        if global_group.has_flow_content or not pools:
            groups.append(global_group)
        # An empty pool becomes a participant without a process.
        groups.extend(group for group in pool_groups if group.pool is not None and group.pool.elements)
        for group in groups:
            group.process_id = self._ids.fresh("Process")

        message_flows = global_group.messages + [flow for group in pool_groups for flow in group.messages]

        root = etree.Element(
            _qname(BPMN_NAMESPACE, "definitions"),
            nsmap={
                None: BPMN_NAMESPACE,
                "bpmndi": BPMNDI_NAMESPACE,
                "dc": DC_NAMESPACE,
                "di": DI_NAMESPACE,
            },
        )
        root.set("id", DEFINITIONS_ID)
        root.set("targetNamespace", TARGET_NAMESPACE)

        for row, group in enumerate(groups):
            self._build_process(root, group)
            self._layout_group(group, row)

        plane_target = groups[0].process_id if groups else None
        if pools or message_flows:
            plane_target = self._build_collaboration(root, pool_groups, message_flows)
        for flow in message_flows:
            self._layout.edges.append(self._edge(flow, self._boxes))

        if self._options.include_diagram and not self._layout.is_empty:
            self._build_diagram(root, plane_target)

        etree.indent(root, space=" " * max(self._options.indent, 0))
        return etree.tostring(root, xml_declaration=True, encoding="UTF-8").decode("utf-8") + "\n"

    # -------- identifiers --------

    def _assign_element_ids(self, elements: list) -> None:
        """Assign identifiers to pools, lanes, nodes and connections in document order."""
        for element in elements:
            if isinstance(element, Node):
                self._ids.of(element, element.name)
            elif isinstance(element, Connection):
                self._ids.of(element, _FLOW_ID_BASES[element.flow_kind])
            elif isinstance(element, (Pool, Lane)):
                self._ids.of(element, element.name)
                self._assign_element_ids(element.elements)

    def _id(self, element: Node | Connection | Pool | Lane) -> str:
        if isinstance(element, Connection):
            return self._ids.of(element, _FLOW_ID_BASES[element.flow_kind])
        return self._ids.of(element, element.name)

    def _ref_id(self, node_ref: NodeRef) -> str | None:
        node = node_ref.ref
        return self._id(node) if node is not None else None

    # -------- semantic elements --------

    def _build_process(self, root: etree._Element, group: _Group) -> None:
        process = _sub(
            root,
            "process",
            id=group.process_id,
            name=group.pool.name if group.pool is not None else None,
            isExecutable="false",
        )

        if group.pool is not None:
            lanes = [element for element in group.pool.elements if isinstance(element, Lane)]
            if lanes:
                self._build_lane_set(process, lanes, "laneSet")

        incoming: dict[Node, list[str]] = defaultdict(list)
        outgoing: dict[Node, list[str]] = defaultdict(list)
        for flow in group.flows:
            if flow.source.ref is not None:
                outgoing[flow.source.ref].append(self._id(flow))
            if flow.target.ref is not None:
                incoming[flow.target.ref].append(self._id(flow))

        for node in group.nodes:
            element = _sub(process, _node_tag(node), id=self._id(node), name=node.name)
            for flow_id in incoming.get(node, []):
                _sub(element, "incoming").text = flow_id
            for flow_id in outgoing.get(node, []):
                _sub(element, "outgoing").text = flow_id

        for flow in group.flows:
            if flow.flow_kind is FlowKind.SEQUENCE:
                _sub(
                    process,
                    "sequenceFlow",
                    id=self._id(flow),
                    sourceRef=self._ref_id(flow.source),
                    targetRef=self._ref_id(flow.target),
                    name=flow.label or None,
                )
            else:
                _sub(
                    process,
                    "association",
                    id=self._id(flow),
                    sourceRef=self._ref_id(flow.source),
                    targetRef=self._ref_id(flow.target),
                    associationDirection="One" if flow.connector is Connector.ASSOCIATION else "None",
                )

    def _build_lane_set(self, parent: etree._Element, lanes: list[Lane], tag: str) -> None:
        lane_set = _sub(parent, tag, id=self._ids.fresh("LaneSet"))
        for lane in lanes:
            lane_element = _sub(lane_set, "lane", id=self._id(lane), name=lane.name)
            for node in collect_nodes(lane):
                _sub(lane_element, "flowNodeRef").text = self._id(node)
            nested = [element for element in lane.elements if isinstance(element, Lane)]
            if nested:
                self._build_lane_set(lane_element, nested, "childLaneSet")

    def _build_collaboration(
        self,
        root: etree._Element,
        pool_groups: list[_Group],
        message_flows: list[Connection],
    ) -> str:
        collaboration_id = self._ids.fresh("Collaboration")
        collaboration = _sub(root, "collaboration", id=collaboration_id)
        for group in pool_groups:
            assert group.pool is not None
            _sub(
                collaboration,
                "participant",
                id=self._id(group.pool),
                name=group.pool.name,
                processRef=group.process_id,
            )
        for flow in message_flows:
            _sub(
                collaboration,
                "messageFlow",
                id=self._id(flow),
                sourceRef=self._ref_id(flow.source),
                targetRef=self._ref_id(flow.target),
                name=flow.label or None,
            )
        return collaboration_id

    # -------- diagram interchange --------

    def _layout_group(self, group: _Group, row: int) -> None:
        boxes = layout_row(group.nodes, row)
        self._boxes.update(boxes)

        if group.pool is not None:
            bounds = participant_bounds(list(boxes.values()))
            if bounds is not None:
                self._layout.shapes.append(ShapeLayout(self._id(group.pool), bounds, is_horizontal=True))
        for node in group.nodes:
            self._layout.shapes.append(ShapeLayout(self._id(node), boxes[node]))
        # Flows inside a process only connect nodes of the same row.
        for flow in group.flows:
            self._layout.edges.append(self._edge(flow, boxes))

    def _edge(self, flow: Connection, boxes: dict[Node, Bounds]) -> EdgeLayout:
        source = flow.source.ref
        target = flow.target.ref
        waypoints = edge_waypoints(
            boxes.get(source) if source is not None else None,
            boxes.get(target) if target is not None else None,
        )
        return EdgeLayout(self._id(flow), waypoints)

    def _build_diagram(self, root: etree._Element, plane_target: str | None) -> None:
        diagram = _sub(root, "BPMNDiagram", BPMNDI_NAMESPACE, id=self._ids.fresh("BPMNDiagram"))
        plane = _sub(
            diagram,
            "BPMNPlane",
            BPMNDI_NAMESPACE,
            id=self._ids.fresh("BPMNPlane"),
            bpmnElement=plane_target,
        )
        for shape in self._layout.shapes:
            shape_element = _sub(
                plane,
                "BPMNShape",
                BPMNDI_NAMESPACE,
                id=f"{shape.element_id}_di",
                bpmnElement=shape.element_id,
                isHorizontal="true" if shape.is_horizontal else None,
            )
            _sub(
                shape_element,
                "Bounds",
                DC_NAMESPACE,
                x=str(shape.bounds.x),
                y=str(shape.bounds.y),
                width=str(shape.bounds.width),
                height=str(shape.bounds.height),
            )
        for edge in self._layout.edges:
            edge_element = _sub(
                plane,
                "BPMNEdge",
                BPMNDI_NAMESPACE,
                id=f"{edge.element_id}_di",
                bpmnElement=edge.element_id,
            )
            for point in edge.waypoints:
                _sub(edge_element, "waypoint", DI_NAMESPACE, x=str(point.x), y=str(point.y))
