# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for BPMNml model artifact serialization."""

import json
from pathlib import Path

import pytest

from bpmnml.compiler.artifact import (
    ARTIFACT_FORMAT_VERSION,
    deserialize,
    read_artifact,
    serialize,
    write_artifact,
)
from bpmnml.model import (
    Connection,
    Connector,
    Event,
    EventType,
    Gateway,
    GatewayType,
    Lane,
    NodeRef,
    Pool,
    ProcessModel,
    Task,
    TaskType,
)

# ###############
# Helpers
# ###############


def _artifact(*elements: object) -> str:
    return json.dumps({"v": ARTIFACT_FORMAT_VERSION, "elements": list(elements)})


def _sample_model() -> ProcessModel:
    return ProcessModel(
        elements=[
            Pool(
                name="Shop",
                elements=[
                    Event(name="Order received", event_type=EventType.START),
                    Lane(
                        name="Billing",
                        elements=[Task(name="Charge", task_type=TaskType.SERVICE), Gateway(name="Paid?")],
                    ),
                    Connection(source=NodeRef(name="Order received"), target=NodeRef(name="Charge")),
                ],
            ),
            Pool(name="Customer", elements=[Task(name="Pay", task_type=TaskType.USER)]),
            Connection(
                source=NodeRef(name="Charge"),
                target=NodeRef(name="Pay"),
                connector=Connector.MESSAGE,
                label="invoice",
            ),
        ]
    )


# ###############
# Serialization
# ###############


class TestSerialize:
    def test_compact_output(self) -> None:
        model = ProcessModel(elements=[Task(name="A")])
        assert serialize(model) == '{"v":"1","elements":[{"kind":"task","name":"A"}]}'

    def test_subtypes_and_labels(self) -> None:
        data = json.loads(serialize(_sample_model()))
        shop = data["elements"][0]
        assert shop["kind"] == "pool"
        assert shop["elements"][0] == {"kind": "event", "name": "Order received", "type": "start"}
        assert shop["elements"][1]["elements"][0] == {"kind": "task", "name": "Charge", "type": "service"}
        assert shop["elements"][1]["elements"][1] == {"kind": "gateway", "name": "Paid?"}
        assert data["elements"][2] == {
            "kind": "connection",
            "source": "Charge",
            "target": "Pay",
            "connector": "~~>",
            "label": "invoice",
        }

    def test_reserialization_is_stable(self) -> None:
        text = serialize(_sample_model())
        assert serialize(deserialize(text)) == text


# ###############
# Deserialization
# ###############


class TestDeserialize:
    def test_rebuilds_containment(self) -> None:
        model = deserialize(serialize(_sample_model()))
        shop, customer, message = model.elements
        assert isinstance(shop, Pool) and shop.container is model
        lane = shop.elements[1]
        assert isinstance(lane, Lane) and lane.container is shop
        charge = lane.elements[0]
        assert charge.task_type is TaskType.SERVICE
        assert charge.container is lane
        assert isinstance(lane.elements[1], Gateway)
        assert lane.elements[1].gateway_type is None
        assert message.connector is Connector.MESSAGE

    def test_links_references(self) -> None:
        model = deserialize(serialize(_sample_model()))
        shop, customer, message = model.elements
        flow = shop.elements[2]
        assert flow.source.ref is shop.elements[0]
        assert flow.target.ref is shop.elements[1].elements[0]
        assert message.source.ref is shop.elements[1].elements[0]
        assert message.target.ref is customer.elements[0]

    def test_unresolved_reference_stays_unbound(self) -> None:
        model = deserialize(_artifact({"kind": "task", "name": "A"}, {"kind": "connection", "source": "A", "target": "B"}))
        connection = model.elements[1]
        assert connection.source.ref is model.elements[0]
        assert connection.target.ref is None
        assert connection.connector is Connector.SEQUENCE

    def test_gateway_subtype(self) -> None:
        model = deserialize(_artifact({"kind": "gateway", "name": "G", "type": "event-based"}))
        assert model.elements[0].gateway_type is GatewayType.EVENT_BASED

    def test_missing_elements_gives_empty_model(self) -> None:
        assert deserialize('{"v":"1"}').elements == []

    def test_rejects_unknown_version(self) -> None:
        with pytest.raises(ValueError, match="format version"):
            deserialize('{"v":"0","elements":[]}')

    def test_rejects_non_object(self) -> None:
        with pytest.raises(ValueError, match="JSON object"):
            deserialize("[]")

    def test_rejects_malformed_json(self) -> None:
        with pytest.raises(ValueError):
            deserialize("{")

    def test_rejects_unknown_kind(self) -> None:
        with pytest.raises(ValueError, match="'subprocess'"):
            deserialize(_artifact({"kind": "subprocess", "name": "S"}))

    def test_rejects_lane_at_top_level(self) -> None:
        with pytest.raises(ValueError, match="top level"):
            deserialize(_artifact({"kind": "lane", "name": "L", "elements": []}))

    def test_rejects_pool_inside_pool(self) -> None:
        with pytest.raises(ValueError, match="inside a pool"):
            deserialize(_artifact({"kind": "pool", "name": "P", "elements": [{"kind": "pool", "name": "Q"}]}))

    def test_rejects_unknown_subtype(self) -> None:
        with pytest.raises(ValueError):
            deserialize(_artifact({"kind": "task", "name": "A", "type": "robot"}))

    def test_rejects_element_that_is_not_an_object(self) -> None:
        with pytest.raises(ValueError, match="Element must be a JSON object"):
            deserialize(_artifact("Start"))

    def test_rejects_elements_that_are_not_an_array(self) -> None:
        with pytest.raises(ValueError, match="'elements' must be a JSON array"):
            deserialize('{"v":"1","elements":{"kind":"task","name":"A"}}')

    def test_rejects_nested_elements_that_are_not_an_array(self) -> None:
        with pytest.raises(ValueError, match="'elements' must be a JSON array"):
            deserialize(_artifact({"kind": "pool", "name": "P", "elements": "A"}))


# ###############
# Files
# ###############


class TestFiles:
    def test_write_and_read(self, tmp_path: Path) -> None:
        path = tmp_path / "out" / "shop.bpmnml.json"
        write_artifact(_sample_model(), path)
        assert path.exists()
        model = read_artifact(path)
        assert [element.kind for element in model.elements] == ["pool", "pool", "connection"]

    def test_read_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            read_artifact(tmp_path / "missing.bpmnml.json")
