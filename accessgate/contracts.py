"""Core value types shared by gates and the decision engine."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GateResult(str, Enum):
    """Verdict returned by a gate for a single operation.

    ``GRANTED`` means no restrictions, ``DENIED`` means no permission and
    ``CANT_DECIDE`` means the gate has no opinion.
    """

    GRANTED = "granted"
    DENIED = "denied"
    CANT_DECIDE = "cant-decide"


class Operation(str, Enum):
    """Operations a gate can be asked about."""

    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    EXECUTE = "execute"
    ORDER_CHILDREN = "order-children"

    @property
    def text(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str) -> Optional["Operation"]:
        """Return the operation named by ``value`` or ``None`` if unknown."""
        for op in cls:
            if op.value == value:
                return op
        return None


ALL_OPERATIONS = frozenset(Operation)

# Operations that also have a per-value check.
VALUE_OPERATIONS = frozenset(
    {Operation.READ, Operation.CREATE, Operation.UPDATE, Operation.DELETE}
)


class AccessContext(str, Enum):
    """Where a gate applies.

    Application gates see the whole resource tree, provider gates only
    resources from providers that opted into access checks.
    """

    APPLICATION = "application"
    PROVIDER = "provider"


class Resource(BaseModel):
    """A node of the resource tree as seen by gates."""

    model_config = ConfigDict(frozen=True)

    path: str
    resource_type: Optional[str] = None
    values: Dict[str, Any] = Field(default_factory=dict)


class DecisionRequest(BaseModel):
    """A single question put to the decision engine."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    resource_path: str
    operation: Operation
    context: AccessContext
    value_name: Optional[str] = None
    resource: Optional[Resource] = None
    resolver: Any = None

    @model_validator(mode="after")
    def _check_value_operation(self) -> "DecisionRequest":
        if self.value_name is not None and self.operation not in VALUE_OPERATIONS:
            raise ValueError(
                f"Operation {self.operation.value} has no per-value check"
            )
        return self

    @classmethod
    def for_resource(
        cls,
        resource: Resource,
        operation: Operation,
        context: AccessContext,
        value_name: Optional[str] = None,
        resolver: Any = None,
    ) -> "DecisionRequest":
        return cls(
            resource_path=resource.path,
            operation=operation,
            context=context,
            value_name=value_name,
            resource=resource,
            resolver=resolver,
        )
