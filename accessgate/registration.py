"""Immutable metadata describing one registered gate."""

from __future__ import annotations

import logging
import re
from typing import Any, FrozenSet, Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import (
    CONTEXT,
    DEFAULT_PATH_PATTERN,
    FINALOPERATIONS,
    OPERATIONS,
    PATH,
    SERVICE_RANKING,
)
from .contracts import ALL_OPERATIONS, AccessContext, Operation
from .errors import RegistrationError
from .gates.base import gate_name

logger = logging.getLogger(__name__)


def parse_operations(value: Any, key: str = OPERATIONS) -> FrozenSet[Operation]:
    """Parse a list or comma separated string of operation names.

    Unknown names are logged and ignored.
    """
    if value is None:
        return frozenset()
    if isinstance(value, str):
        names: Iterable[Any] = value.split(",")
    else:
        names = value

    operations = set()
    for name in names:
        if isinstance(name, Operation):
            operations.add(name)
            continue
        text = str(name).strip()
        if not text:
            continue
        op = Operation.from_string(text)
        if op is None:
            logger.warning(f"Ignoring unknown operation {text!r} in {key!r}")
            continue
        operations.add(op)
    return frozenset(operations)


class GateRegistration(BaseModel):
    """A gate together with the properties it was registered with.

    Registrations never change once built; re-register the gate to change
    any of its properties.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    gate: Any
    context: AccessContext
    path_pattern: re.Pattern = Field(
        default_factory=lambda: re.compile(DEFAULT_PATH_PATTERN)
    )
    operations: FrozenSet[Operation] = ALL_OPERATIONS
    final_operations: FrozenSet[Operation] = frozenset()
    ranking: int = 0
    sequence: int = 0

    @field_validator("operations")
    @classmethod
    def _default_operations(cls, v: FrozenSet[Operation]) -> FrozenSet[Operation]:
        return v or ALL_OPERATIONS

    @property
    def name(self) -> str:
        return gate_name(self.gate)

    @property
    def sort_key(self) -> tuple:
        """Higher ranking first, then registration order."""
        return (-self.ranking, self.sequence)

    def matches(self, resource_path: str) -> bool:
        """Return ``True`` if the path pattern covers ``resource_path``."""
        return self.path_pattern.fullmatch(resource_path) is not None

    def applies(self, operation: Operation) -> bool:
        """Return ``True`` if the gate is consulted for ``operation``."""
        return operation in self.operations

    def is_final(self, operation: Operation) -> bool:
        return operation in self.final_operations

    def describe(self) -> str:
        ops = ",".join(sorted(op.value for op in self.operations))
        final = ",".join(sorted(op.value for op in self.final_operations)) or "-"
        return (
            f"{self.name} context={self.context.value} ranking={self.ranking} "
            f"path={self.path_pattern.pattern} operations={ops} final={final}"
        )

    @classmethod
    def from_properties(
        cls,
        gate: Any,
        properties: Mapping[str, Any],
        ranking: Optional[int] = None,
        sequence: int = 0,
    ) -> "GateRegistration":
        """Build a registration from string keyed registration properties.

        Raises:
            RegistrationError: If the context is missing or invalid, or the
                path pattern or ranking cannot be parsed.
        """
        raw_context = properties.get(CONTEXT)
        try:
            context = AccessContext(raw_context)
        except ValueError:
            raise RegistrationError(
                f"Gate {gate_name(gate)} has missing or invalid {CONTEXT!r}: {raw_context!r}"
            ) from None

        raw_path = properties.get(PATH) or DEFAULT_PATH_PATTERN
        try:
            pattern = re.compile(raw_path)
        except (re.error, TypeError) as exc:
            raise RegistrationError(
                f"Gate {gate_name(gate)} has invalid {PATH!r} pattern {raw_path!r}: {exc}"
            ) from exc

        raw_ranking = ranking if ranking is not None else properties.get(SERVICE_RANKING) or 0
        try:
            ranking = int(raw_ranking)
        except (TypeError, ValueError) as exc:
            raise RegistrationError(
                f"Gate {gate_name(gate)} has invalid ranking {raw_ranking!r}: {exc}"
            ) from exc

        operations = parse_operations(properties.get(OPERATIONS), OPERATIONS) or ALL_OPERATIONS
        final_operations = parse_operations(
            properties.get(FINALOPERATIONS), FINALOPERATIONS
        )
        unreachable = final_operations - operations
        if unreachable:
            logger.debug(
                f"Gate {gate_name(gate)} lists final operations it is never consulted for: "
                f"{sorted(op.value for op in unreachable)}"
            )

        try:
            return cls(
                gate=gate,
                context=context,
                path_pattern=pattern,
                operations=operations,
                final_operations=final_operations,
                ranking=ranking,
                sequence=sequence,
            )
        except ValidationError as exc:
            raise RegistrationError(f"Gate {gate_name(gate)} is malformed: {exc}") from exc
