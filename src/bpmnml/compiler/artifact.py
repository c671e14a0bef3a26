# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of parsed BPMNml trees.

A parsed document is exchanged as a compact JSON artifact. Elements are
tagged objects keyed by ``kind``; connection endpoints are stored as the
referenced node names. Reading an artifact rebuilds the containment tree and
links every endpoint through the scope rules, leaving references that match
no visible node unbound for validation to report.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from bpmnml.model.entities import (
    Connection,
    Event,
    Gateway,
    Lane,
    NodeRef,
    Pool,
    ProcessModel,
    Task,
)
from bpmnml.model.types import Connector, EventType, GatewayType, TaskType
from bpmnml.scoping.resolver import link

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"


def serialize(model: ProcessModel) -> str:
    """Serialize a model to a compact JSON string."""
    return json.dumps(
        {"v": ARTIFACT_FORMAT_VERSION, "elements": [_element_to_dict(e) for e in model.elements]},
        separators=(",", ":"),
    )


def deserialize(data: str) -> ProcessModel:
    """Deserialize and link a model from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed :class:`ProcessModel` with connection endpoints
        bound wherever their scope contains a node of that name.

    Raises:
        ValueError: If the artifact format version or an element kind is not
            recognised, or the JSON is malformed.
    """
    obj = json.loads(data)
    if not isinstance(obj, dict):
        raise ValueError("Artifact must be a JSON object")
    version = obj.get("v")
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    model = ProcessModel(elements=[_element_from_dict(e, top_level=True) for e in _children(obj)])
    link(model)
    return model


def write_artifact(model: ProcessModel, path: Path) -> None:
    """Write a model artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(model), encoding="utf-8")


def read_artifact(path: Path) -> ProcessModel:
    """Read, deserialize and link a model artifact from *path*."""
    return deserialize(path.read_text(encoding="utf-8"))


# ################
# Implementation
# ################


def _element_to_dict(element: Any) -> dict[str, Any]:
    if isinstance(element, Event):
        return _node_to_dict(element, element.event_type)
    if isinstance(element, Task):
        return _node_to_dict(element, element.task_type)
    if isinstance(element, Gateway):
        return _node_to_dict(element, element.gateway_type)
    if isinstance(element, Connection):
        return _connection_to_dict(element)
    # Pool and Lane are the only remaining variants.
    assert isinstance(element, (Pool, Lane))
    return {
        "kind": element.kind,
        "name": element.name,
        "elements": [_element_to_dict(e) for e in element.elements],
    }


def _node_to_dict(node: Event | Task | Gateway, subtype: EventType | TaskType | GatewayType | None) -> dict[str, Any]:
    d: dict[str, Any] = {"kind": node.kind, "name": node.name}
    if subtype is not None:
        d["type"] = subtype.value
    return d


def _connection_to_dict(conn: Connection) -> dict[str, Any]:
    d: dict[str, Any] = {
        "kind": "connection",
        "source": conn.source.name,
        "target": conn.target.name,
        "connector": conn.connector.value,
    }
    if conn.label is not None:
        d["label"] = conn.label
    return d


def _element_from_dict(obj: Any, *, top_level: bool) -> Any:
    """Decode one element, checking that its kind may appear at this level."""
    if not isinstance(obj, dict):
        raise ValueError(f"Element must be a JSON object, got {type(obj).__name__}")
    kind = obj.get("kind")
    if kind == "event":
        return Event(name=obj["name"], event_type=_optional(EventType, obj.get("type")))
    if kind == "task":
        return Task(name=obj["name"], task_type=_optional(TaskType, obj.get("type")))
    if kind == "gateway":
        return Gateway(name=obj["name"], gateway_type=_optional(GatewayType, obj.get("type")))
    if kind == "connection":
        return Connection(
            source=NodeRef(name=obj["source"]),
            target=NodeRef(name=obj["target"]),
            connector=Connector(obj.get("connector", Connector.SEQUENCE.value)),
            label=obj.get("label"),
        )
    if kind == "pool" and top_level:
        return Pool(name=obj["name"], elements=[_element_from_dict(e, top_level=False) for e in _children(obj)])
    if kind == "lane" and not top_level:
        return Lane(name=obj["name"], elements=[_element_from_dict(e, top_level=False) for e in _children(obj)])
    where = "at the top level" if top_level else "inside a pool or lane"
    raise ValueError(f"Unknown element kind {kind!r} {where}")


def _optional(enum_type: Any, value: str | None) -> Any:
    return enum_type(value) if value is not None else None


def _children(obj: dict[str, Any]) -> list[Any]:
    """Return the encoded child elements of *obj*; absent means none."""
    children = obj.get("elements", [])
    if not isinstance(children, list):
        raise ValueError(f"'elements' must be a JSON array, got {type(children).__name__}")
    return children
