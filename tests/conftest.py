"""Shared fixtures for accessgate tests."""

from typing import Dict, List, Optional

import pytest

from accessgate import GateResult, InMemoryGateRegistry, Operation, StaticGate
from accessgate.config import EngineConfig


class RecordingGate(StaticGate):
    """Static gate remembering which decisions it was asked for.

    Operations listed in ``errors`` raise the given exception instead of
    answering.
    """

    def __init__(self, *args, errors: Optional[Dict[Operation, Exception]] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.errors = dict(errors or {})
        self.calls: List[Operation] = []
        self.value_calls: List[tuple] = []

    def _verdict(self, operation: Operation) -> GateResult:
        self.calls.append(operation)
        if operation in self.errors:
            raise self.errors[operation]
        return super()._verdict(operation)

    def _value_verdict(self, operation: Operation) -> GateResult:
        self.value_calls.append(operation)
        return super()._value_verdict(operation)


@pytest.fixture
def registry() -> InMemoryGateRegistry:
    return InMemoryGateRegistry()


@pytest.fixture
def engine_config() -> EngineConfig:
    return EngineConfig(gate_timeout=0.5)


@pytest.fixture
def make_gate():
    """Build a :class:`RecordingGate` from keyword verdicts.

    ``make_gate("a", read="denied")`` answers ``DENIED`` for reads.
    """

    def _make(name: str, value_verdicts=None, query_suffix: str = "", errors=None, **verdicts):
        return RecordingGate(
            name=name,
            verdicts={
                Operation.from_string(op.replace("_", "-")): GateResult(v)
                for op, v in verdicts.items()
            },
            value_verdicts={
                Operation.from_string(op): GateResult(v)
                for op, v in (value_verdicts or {}).items()
            },
            query_suffix=query_suffix,
            errors=errors,
        )

    return _make
