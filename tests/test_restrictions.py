"""Restriction pre-check tests."""

import pytest

from accessgate import (
    AccessContext,
    GateResult,
    Operation,
    Resource,
    RestrictionPredicateEvaluator,
    StaticGate,
)
from accessgate.gates import ResourceAccessGate

APP = {"access.context": "application"}
PAGE = Resource(path="/content/page", values={"title": "Home"})


def test_no_registrations_means_no_restrictions(registry):
    evaluator = RestrictionPredicateEvaluator(registry)
    for op in Operation:
        assert evaluator.has_restrictions(op, AccessContext.APPLICATION) is False


def test_restrictions_follow_declared_operations(registry, make_gate):
    gate = make_gate("deleter", delete="denied")
    registry.register(gate, {**APP, "operations": "delete"})
    evaluator = RestrictionPredicateEvaluator(registry)

    assert evaluator.has_delete_restrictions(AccessContext.APPLICATION) is True
    assert evaluator.has_read_restrictions(AccessContext.APPLICATION) is False
    assert evaluator.has_delete_restrictions(AccessContext.PROVIDER) is False
    assert gate.calls == []


def test_gate_predicate_can_lift_restriction(registry, make_gate):
    registry.register(make_gate("open", read="granted"), APP)
    evaluator = RestrictionPredicateEvaluator(registry)

    assert evaluator.has_read_restrictions(AccessContext.APPLICATION) is False
    assert evaluator.has_update_restrictions(AccessContext.APPLICATION) is True


def test_named_predicates_cover_every_operation(registry, make_gate):
    registry.register(make_gate("all"), APP)
    evaluator = RestrictionPredicateEvaluator(registry)
    context = AccessContext.APPLICATION

    assert evaluator.has_read_restrictions(context)
    assert evaluator.has_create_restrictions(context)
    assert evaluator.has_update_restrictions(context)
    assert evaluator.has_delete_restrictions(context)
    assert evaluator.has_execute_restrictions(context)
    assert evaluator.has_order_children_restrictions(context)


class LegacyGate(StaticGate):
    has_order_children_restrictions = ResourceAccessGate.has_order_children_restrictions


def test_order_children_restrictions_default_to_true(registry):
    gate = LegacyGate("legacy", verdicts={Operation.ORDER_CHILDREN: GateResult.GRANTED})
    registry.register(gate, APP)
    evaluator = RestrictionPredicateEvaluator(registry)

    assert evaluator.has_order_children_restrictions(AccessContext.APPLICATION) is True


class BrokenPredicateGate(StaticGate):
    def has_read_restrictions(self, resolver):
        raise RuntimeError("no idea")

    def can_read_all_values(self, resource):
        raise RuntimeError("no idea")


def test_failing_predicates_assume_restricted(registry):
    registry.register(BrokenPredicateGate("broken"), APP)
    evaluator = RestrictionPredicateEvaluator(registry)

    assert evaluator.has_read_restrictions(AccessContext.APPLICATION) is True
    assert evaluator.can_read_all_values(PAGE, AccessContext.APPLICATION) is False


def test_all_values_without_value_gates(registry, make_gate):
    registry.register(make_gate("other-path", value_verdicts={"read": "denied"}), {**APP, "path": "/apps/.*"})
    registry.register(make_gate("other-op", value_verdicts={"read": "denied"}), {**APP, "operations": "update"})
    evaluator = RestrictionPredicateEvaluator(registry)

    assert evaluator.can_read_all_values(PAGE, AccessContext.APPLICATION) is True
    assert evaluator.can_create_all_values(PAGE, AccessContext.APPLICATION) is True
    assert evaluator.can_update_all_values(PAGE, AccessContext.APPLICATION) is True
    assert evaluator.can_delete_all_values(PAGE, AccessContext.APPLICATION) is True


def test_all_values_with_applicable_value_gate(registry, make_gate):
    gate = make_gate("values", value_verdicts={"read": "denied"})
    registry.register(gate, APP)
    evaluator = RestrictionPredicateEvaluator(registry)

    assert evaluator.can_read_all_values(PAGE, AccessContext.APPLICATION) is False
    assert evaluator.can_update_all_values(PAGE, AccessContext.APPLICATION) is True
    assert gate.value_calls == []


def test_all_values_rejects_operations_without_values(registry):
    evaluator = RestrictionPredicateEvaluator(registry)
    with pytest.raises(ValueError):
        evaluator.can_all_values(Operation.EXECUTE, PAGE, AccessContext.APPLICATION)
