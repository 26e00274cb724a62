"""A gate answering fixed verdicts, used for declarative configuration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional

from ..config import StaticGateConfig
from ..contracts import GateResult, Operation, Resource
from ..errors import RegistrationError
from .base import ResourceAccessGate

if TYPE_CHECKING:
    from ..registry import GateRegistry

logger = logging.getLogger(__name__)


class StaticGate(ResourceAccessGate):
    """Gate whose answers are fixed at construction time.

    ``verdicts`` maps operations to the verdict returned for whole-resource
    checks, ``value_verdicts`` does the same for per-value checks. Anything
    not listed is ``CANT_DECIDE``. A gate restricts an operation when it has
    a verdict other than ``GRANTED`` for it. ``query_suffix`` is appended to
    every query passed through :meth:`transform_query`.
    """

    def __init__(
        self,
        name: str = "static",
        verdicts: Optional[Mapping[Operation, GateResult]] = None,
        value_verdicts: Optional[Mapping[Operation, GateResult]] = None,
        query_suffix: str = "",
    ) -> None:
        self.name = name
        self.verdicts: Dict[Operation, GateResult] = dict(verdicts or {})
        self.value_verdicts: Dict[Operation, GateResult] = dict(value_verdicts or {})
        self.query_suffix = query_suffix

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"StaticGate(name={self.name!r})"

    def _verdict(self, operation: Operation) -> GateResult:
        return self.verdicts.get(operation, GateResult.CANT_DECIDE)

    def _value_verdict(self, operation: Operation) -> GateResult:
        return self.value_verdicts.get(operation, GateResult.CANT_DECIDE)

    def _restricts(self, operation: Operation) -> bool:
        return self.verdicts.get(operation, GateResult.CANT_DECIDE) is not GateResult.GRANTED

    # ------------------------------------------------------------------
    async def can_read(self, resource: Resource) -> GateResult:
        return self._verdict(Operation.READ)

    async def can_create(self, path: str, resolver: Any) -> GateResult:
        return self._verdict(Operation.CREATE)

    async def can_update(self, resource: Resource) -> GateResult:
        return self._verdict(Operation.UPDATE)

    async def can_delete(self, resource: Resource) -> GateResult:
        return self._verdict(Operation.DELETE)

    async def can_execute(self, resource: Resource) -> GateResult:
        return self._verdict(Operation.EXECUTE)

    async def can_order_children(self, resource: Resource) -> GateResult:
        return self._verdict(Operation.ORDER_CHILDREN)

    async def can_read_value(self, resource: Resource, value_name: str) -> GateResult:
        return self._value_verdict(Operation.READ)

    async def can_create_value(self, resource: Resource, value_name: str) -> GateResult:
        return self._value_verdict(Operation.CREATE)

    async def can_update_value(self, resource: Resource, value_name: str) -> GateResult:
        return self._value_verdict(Operation.UPDATE)

    async def can_delete_value(self, resource: Resource, value_name: str) -> GateResult:
        return self._value_verdict(Operation.DELETE)

    async def transform_query(self, query: str, language: str, resolver: Any) -> str:
        return query + self.query_suffix

    # ------------------------------------------------------------------
    def has_read_restrictions(self, resolver: Any) -> bool:
        return self._restricts(Operation.READ)

    def has_create_restrictions(self, resolver: Any) -> bool:
        return self._restricts(Operation.CREATE)

    def has_update_restrictions(self, resolver: Any) -> bool:
        return self._restricts(Operation.UPDATE)

    def has_delete_restrictions(self, resolver: Any) -> bool:
        return self._restricts(Operation.DELETE)

    def has_execute_restrictions(self, resolver: Any) -> bool:
        return self._restricts(Operation.EXECUTE)

    def has_order_children_restrictions(self, resolver: Any) -> bool:
        return self._restricts(Operation.ORDER_CHILDREN)

    def can_read_all_values(self, resource: Resource) -> bool:
        return Operation.READ not in self.value_verdicts

    def can_create_all_values(self, resource: Resource) -> bool:
        return Operation.CREATE not in self.value_verdicts

    def can_update_all_values(self, resource: Resource) -> bool:
        return Operation.UPDATE not in self.value_verdicts

    def can_delete_all_values(self, resource: Resource) -> bool:
        return Operation.DELETE not in self.value_verdicts

    @classmethod
    def from_config(cls, config: StaticGateConfig) -> "StaticGate":
        """Build a gate from its declarative configuration.

        Raises:
            RegistrationError: If an operation or verdict name is unknown.
        """
        return cls(
            name=config.name,
            verdicts=_parse_verdicts(config.name, config.verdicts),
            value_verdicts=_parse_verdicts(config.name, config.value_verdicts),
            query_suffix=config.query_suffix,
        )


def _parse_verdicts(name: str, raw: Mapping[str, str]) -> Dict[Operation, GateResult]:
    verdicts: Dict[Operation, GateResult] = {}
    for op_name, verdict in raw.items():
        op = Operation.from_string(op_name)
        if op is None:
            raise RegistrationError(f"Gate {name} names unknown operation {op_name!r}")
        try:
            verdicts[op] = GateResult(str(verdict).lower())
        except ValueError:
            raise RegistrationError(
                f"Gate {name} has unknown verdict {verdict!r} for {op_name}"
            ) from None
    return verdicts


def load_gates(configs: Iterable[StaticGateConfig], registry: GateRegistry) -> List[StaticGate]:
    """Register a :class:`StaticGate` for every configured gate.

    Gates with invalid configuration are logged and skipped, like gates
    whose registration properties are rejected.
    """
    registered = []
    for config in configs:
        try:
            gate = StaticGate.from_config(config)
        except RegistrationError as exc:
            logger.warning(f"Ignoring configured gate: {exc}")
            continue
        if registry.register(gate, config.properties) is not None:
            registered.append(gate)
    return registered
