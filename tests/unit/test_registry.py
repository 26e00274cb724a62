"""Tests for the in-memory gate registry."""

import threading

from accessgate import REGISTRY, AccessContext, InMemoryGateRegistry, StaticGate, register_gate


def test_snapshot_orders_by_ranking_then_insertion(registry) -> None:
    low = StaticGate("low")
    first = StaticGate("first")
    second = StaticGate("second")
    registry.register(low, {"access.context": "application"}, ranking=1)
    registry.register(first, {"access.context": "application"}, ranking=5)
    registry.register(second, {"access.context": "application"}, ranking=5)

    names = [r.name for r in registry.snapshot(AccessContext.APPLICATION)]
    assert names == ["first", "second", "low"]


def test_snapshot_is_scoped_by_context(registry) -> None:
    registry.register(StaticGate("app"), {"access.context": "application"})
    registry.register(StaticGate("prov"), {"access.context": "provider"})

    assert [r.name for r in registry.snapshot(AccessContext.APPLICATION)] == ["app"]
    assert [r.name for r in registry.snapshot(AccessContext.PROVIDER)] == ["prov"]


def test_rejected_registration_never_enters_registry(registry, caplog) -> None:
    assert registry.register(StaticGate("bad"), {"path": "/.*"}) is None
    assert len(registry) == 0
    assert "access.context" in caplog.text


def test_invalid_explicit_ranking_never_enters_registry(registry, caplog) -> None:
    gate = StaticGate("x")
    assert registry.register(gate, {"access.context": "application"}, ranking="high") is None
    assert len(registry) == 0
    assert "high" in caplog.text


def test_unregister_removes_every_registration_of_gate(registry) -> None:
    gate = StaticGate("g")
    registry.register(gate, {"access.context": "application"})
    registry.register(gate, {"access.context": "provider"})
    registry.register(StaticGate("other"), {"access.context": "application"})

    assert registry.unregister(gate) is True
    assert registry.unregister(gate) is False
    assert [r.name for r in registry.snapshot(AccessContext.APPLICATION)] == ["other"]
    assert registry.snapshot(AccessContext.PROVIDER) == ()


def test_remove_single_registration(registry) -> None:
    gate = StaticGate("g")
    app_reg = registry.register(gate, {"access.context": "application"})
    registry.register(gate, {"access.context": "provider"})

    assert registry.remove(app_reg) is True
    assert registry.snapshot(AccessContext.APPLICATION) == ()
    assert len(registry.snapshot(AccessContext.PROVIDER)) == 1


def test_snapshot_is_not_affected_by_later_mutation(registry) -> None:
    registry.register(StaticGate("a"), {"access.context": "application"})
    snapshot = registry.snapshot(AccessContext.APPLICATION)
    registry.register(StaticGate("b"), {"access.context": "application"}, ranking=10)
    registry.clear()

    assert [r.name for r in snapshot] == ["a"]


def test_concurrent_registration_keeps_every_gate() -> None:
    registry = InMemoryGateRegistry()

    def worker(n: int) -> None:
        for i in range(50):
            registry.register(StaticGate(f"{n}-{i}"), {"access.context": "application"})

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    snapshot = registry.snapshot(AccessContext.APPLICATION)
    assert len(snapshot) == 200
    assert len({r.sequence for r in snapshot}) == 200


def test_register_gate_uses_module_registry() -> None:
    gate = StaticGate("global")
    try:
        assert register_gate(gate, {"access.context": "provider"}) is not None
        assert any(r.gate is gate for r in REGISTRY.snapshot(AccessContext.PROVIDER))
    finally:
        REGISTRY.unregister(gate)
