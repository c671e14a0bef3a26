# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic model for BPMNml (events, tasks, gateways, pools, lanes, flows)."""

from bpmnml.model.entities import (
    Connection,
    Element,
    Event,
    Gateway,
    Lane,
    ModelElement,
    Node,
    NodeRef,
    Pool,
    PoolElement,
    ProcessModel,
    Task,
)
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

__all__ = [
    # Vocabularies
    "EventType",
    "TaskType",
    "GatewayType",
    "DEFAULT_EVENT_TYPE",
    "DEFAULT_TASK_TYPE",
    "DEFAULT_GATEWAY_TYPE",
    "FlowKind",
    "Connector",
    # Elements
    "Element",
    "Event",
    "Task",
    "Gateway",
    "Node",
    "NodeRef",
    "Connection",
    "Lane",
    "Pool",
    "PoolElement",
    "ModelElement",
    "ProcessModel",
]
