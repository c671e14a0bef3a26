# Copyright 2026 BPMNml Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for BPMNml model validation."""

from bpmnml.model import Connection, Connector, Lane, NodeRef, Pool, ProcessModel, Task
from bpmnml.scoping import link
from bpmnml.validation import Diagnostic, Severity, ValidationResult, validate
from bpmnml.validation.checks import describe

# ###############
# Helpers
# ###############


def _conn(source: str, target: str, connector: Connector = Connector.SEQUENCE) -> Connection:
    return Connection(source=NodeRef(name=source), target=NodeRef(name=target), connector=connector)


def _validate(*elements) -> ValidationResult:
    model = ProcessModel(elements=list(elements))
    link(model)
    return validate(model)


def _messages(diagnostics: list[Diagnostic]) -> list[str]:
    return [d.message for d in diagnostics]


# ###############
# Valid Models
# ###############


class TestValidModels:
    def test_empty_model(self) -> None:
        assert _validate().diagnostics == []

    def test_simple_global_flow(self) -> None:
        result = _validate(Task(name="A"), Task(name="B"), _conn("A", "B"))
        assert result.diagnostics == []
        assert not result.has_errors

    def test_flow_between_lanes_of_one_pool(self) -> None:
        result = _validate(
            Pool(
                name="P",
                elements=[
                    Lane(name="L1", elements=[Task(name="T1")]),
                    Lane(name="L2", elements=[Task(name="T2")]),
                    _conn("T1", "T2"),
                ],
            )
        )
        assert result.diagnostics == []

    def test_message_flow_between_pools(self) -> None:
        result = _validate(
            Pool(name="P1", elements=[Task(name="A")]),
            Pool(name="P2", elements=[Task(name="B")]),
            _conn("A", "B", Connector.MESSAGE),
        )
        assert result.diagnostics == []

    def test_association_inside_pool(self) -> None:
        result = _validate(
            Pool(name="P", elements=[Task(name="A"), Task(name="B"), _conn("A", "B", Connector.ASSOCIATION)])
        )
        assert result.diagnostics == []


# ###############
# Connection Checks
# ###############


class TestConnectionChecks:
    def test_undefined_endpoints(self) -> None:
        conn = _conn("X", "Y")
        result = _validate(conn)
        assert _messages(result.errors) == [
            "Connection source node is not defined.",
            "Connection target node is not defined.",
        ]
        assert [d.attribute for d in result.errors] == ["source", "target"]
        assert all(d.element is conn for d in result.errors)

    def test_undefined_target_only(self) -> None:
        result = _validate(Task(name="A"), _conn("A", "Missing"))
        assert _messages(result.errors) == ["Connection target node is not defined."]

    def test_self_loop_is_a_warning(self) -> None:
        result = _validate(Task(name="A"), _conn("A", "A"))
        assert result.errors == []
        assert _messages(result.warnings) == ["Self-loops are not recommended in BPMN."]

    def test_cross_pool_sequence_flow(self) -> None:
        a, b = Task(name="A"), Task(name="B")
        conn = Connection(source=NodeRef.to(a), target=NodeRef.to(b))
        model = ProcessModel(elements=[Pool(name="P1", elements=[a, conn]), Pool(name="P2", elements=[b])])
        result = validate(model)
        assert _messages(result.errors) == ["Connections cannot cross pool boundaries."]
        assert result.errors[0].element is conn
        assert result.warnings == []

    def test_cross_pool_reference_is_unresolved_after_linking(self) -> None:
        result = _validate(
            Pool(name="P1", elements=[Task(name="A"), _conn("A", "B")]),
            Pool(name="P2", elements=[Task(name="B")]),
        )
        assert _messages(result.errors) == ["Connection target node is not defined."]

    def test_mixing_pooled_and_unpooled_nodes(self) -> None:
        a, b = Task(name="A"), Task(name="B")
        conn = Connection(source=NodeRef.to(a), target=NodeRef.to(b))
        model = ProcessModel(elements=[a, Pool(name="P", elements=[b]), conn])
        result = validate(model)
        assert _messages(result.errors) == ["Connections cannot mix pooled and unpooled nodes."]

    def test_message_flow_within_one_pool(self) -> None:
        result = _validate(
            Pool(name="P", elements=[Task(name="A"), Task(name="B")]),
            _conn("A", "B", Connector.MESSAGE),
        )
        assert _messages(result.errors) == ["Message flows cannot connect nodes within the same pool."]

    def test_message_flow_from_unpooled_node(self) -> None:
        a, b = Task(name="A"), Task(name="B")
        conn = Connection(source=NodeRef.to(a), target=NodeRef.to(b), connector=Connector.MESSAGE)
        model = ProcessModel(elements=[a, Pool(name="P", elements=[b]), conn])
        result = validate(model)
        assert _messages(result.errors) == ["Message flows must connect nodes in different pools."]

    def test_message_self_loop_reports_error_and_warning(self) -> None:
        result = _validate(Pool(name="P", elements=[Task(name="A")]), _conn("A", "A", Connector.MESSAGE))
        assert _messages(result.errors) == ["Message flows cannot connect nodes within the same pool."]
        assert _messages(result.warnings) == ["Self-loops are not recommended in BPMN."]


# ###############
# Name Checks
# ###############


class TestDuplicateNames:
    def test_duplicate_in_global_scope(self) -> None:
        second = Task(name="A")
        result = _validate(Task(name="A"), second)
        assert _messages(result.errors) == ["Duplicate node name 'A' in global scope."]
        assert result.errors[0].element is second
        assert result.errors[0].attribute == "name"

    def test_each_repetition_is_reported(self) -> None:
        result = _validate(Task(name="A"), Task(name="A"), Task(name="A"))
        assert len(result.errors) == 2

    def test_duplicate_in_pool_scope(self) -> None:
        result = _validate(Pool(name="P", elements=[Task(name="A"), Task(name="A")]))
        assert _messages(result.errors) == ["Duplicate node name 'A' in P scope."]
        assert result.warnings == []

    def test_duplicate_in_lane_scope(self) -> None:
        result = _validate(Pool(name="P", elements=[Lane(name="L", elements=[Task(name="A"), Task(name="A")])]))
        assert _messages(result.errors) == ["Duplicate node name 'A' in P.L scope."]

    def test_same_name_in_different_pools_is_a_warning(self) -> None:
        result = _validate(
            Pool(name="P1", elements=[Task(name="A")]),
            Pool(name="P2", elements=[Task(name="A")]),
        )
        assert result.errors == []
        assert _messages(result.warnings) == ["Node name 'A' is used in multiple containers."]

    def test_same_name_in_pool_and_its_lane_is_a_warning(self) -> None:
        result = _validate(Pool(name="P", elements=[Task(name="A"), Lane(name="L", elements=[Task(name="A")])]))
        assert result.errors == []
        assert len(result.warnings) == 1

    def test_global_node_after_pooled_node_is_not_warned(self) -> None:
        result = _validate(Pool(name="P", elements=[Task(name="A")]), Task(name="A"))
        assert result.diagnostics == []

    def test_pooled_node_after_global_node_is_warned(self) -> None:
        pooled = Task(name="A")
        result = _validate(Task(name="A"), Pool(name="P", elements=[pooled]))
        assert [d.element for d in result.warnings] == [pooled]


# ###############
# Container Checks
# ###############


class TestEmptyContainers:
    def test_empty_pool(self) -> None:
        pool = Pool(name="P")
        result = _validate(pool)
        assert _messages(result.warnings) == ["Pool is empty. Consider adding lanes or elements."]
        assert result.warnings[0].element is pool
        assert not result.has_errors

    def test_empty_lane(self) -> None:
        lane = Lane(name="L")
        result = _validate(Pool(name="P", elements=[lane]))
        assert _messages(result.warnings) == ["Lane is empty. Consider adding elements."]
        assert result.warnings[0].element is lane


# ###############
# Reporting
# ###############


class TestReporting:
    def test_checks_continue_after_errors(self) -> None:
        result = _validate(Task(name="A"), Task(name="A"), _conn("A", "X"), Pool(name="Empty"))
        assert _messages(result.diagnostics) == [
            "Connection target node is not defined.",
            "Pool is empty. Consider adding lanes or elements.",
            "Duplicate node name 'A' in global scope.",
        ]

    def test_describe(self) -> None:
        assert describe(Task(name="Pay")) == "task 'Pay'"
        assert describe(Pool(name="Shop")) == "pool 'Shop'"
        assert describe(_conn("A", "B", Connector.MESSAGE)) == "connection 'A ~~> B'"

    def test_format(self) -> None:
        diagnostic = Diagnostic(Severity.WARNING, "Lane is empty. Consider adding elements.", Lane(name="L"), "name")
        assert diagnostic.format() == "warning: Lane is empty. Consider adding elements. (lane 'L')"
