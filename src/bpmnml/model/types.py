# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Subtype and connector vocabularies for the BPMNml semantic model."""

from __future__ import annotations

from enum import Enum

# ###############
# Public Interface
# ###############


class EventType(Enum):
    """Subtypes of an event node."""

    START = "start"
    END = "end"
    INTERMEDIATE = "intermediate"


class TaskType(Enum):
    """Subtypes of a task node."""

    TASK = "task"
    USER = "user"
    SERVICE = "service"
    MANUAL = "manual"
    SCRIPT = "script"
    SEND = "send"
    RECEIVE = "receive"
    BUSINESS_RULE = "business-rule"


class GatewayType(Enum):
    """Subtypes of a gateway node."""

    EXCLUSIVE = "exclusive"
    PARALLEL = "parallel"
    INCLUSIVE = "inclusive"
    EVENT_BASED = "event-based"
    COMPLEX = "complex"


# Subtype assumed when a node leaves it unspecified.
DEFAULT_EVENT_TYPE = EventType.INTERMEDIATE
DEFAULT_TASK_TYPE = TaskType.TASK
DEFAULT_GATEWAY_TYPE = GatewayType.EXCLUSIVE


class FlowKind(Enum):
    """Semantic kind of a connection."""

    SEQUENCE = "sequence"
    ASSOCIATION = "association"
    MESSAGE = "message"


class Connector(Enum):
    """Connector tokens as written between two node names."""

    SEQUENCE = "-->"
    ASSOCIATION = "..>"
    UNDIRECTED_ASSOCIATION = "..."
    MESSAGE = "~~>"

    @property
    def kind(self) -> FlowKind:
        """Return the flow kind this connector denotes."""
        if self is Connector.MESSAGE:
            return FlowKind.MESSAGE
        if self is Connector.SEQUENCE:
            return FlowKind.SEQUENCE
        return FlowKind.ASSOCIATION
