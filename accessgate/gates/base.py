"""Base interface for resource access gates."""

from __future__ import annotations

import abc
from typing import Any, Callable, Dict, Tuple

from ..contracts import DecisionRequest, GateResult, Operation, Resource


class ResourceAccessGate(metaclass=abc.ABCMeta):
    """Restricts access to resources for a scope of paths and operations.

    Every gate registered for a matching path is consulted in ranking order,
    not only the most specific one. If one gate grants access for an
    operation, access is granted. Methods may be coroutines or plain
    functions; plain functions are run in a worker thread.
    """

    @abc.abstractmethod
    async def can_read(self, resource: Resource) -> GateResult:
        raise NotImplementedError

    @abc.abstractmethod
    async def can_create(self, path: str, resolver: Any) -> GateResult:
        raise NotImplementedError

    @abc.abstractmethod
    async def can_update(self, resource: Resource) -> GateResult:
        raise NotImplementedError

    @abc.abstractmethod
    async def can_delete(self, resource: Resource) -> GateResult:
        raise NotImplementedError

    @abc.abstractmethod
    async def can_execute(self, resource: Resource) -> GateResult:
        raise NotImplementedError

    async def can_order_children(self, resource: Resource) -> GateResult:
        """Gates that predate child ordering have no opinion on it."""
        return GateResult.CANT_DECIDE

    @abc.abstractmethod
    async def can_read_value(self, resource: Resource, value_name: str) -> GateResult:
        raise NotImplementedError

    @abc.abstractmethod
    async def can_create_value(self, resource: Resource, value_name: str) -> GateResult:
        raise NotImplementedError

    @abc.abstractmethod
    async def can_update_value(self, resource: Resource, value_name: str) -> GateResult:
        raise NotImplementedError

    @abc.abstractmethod
    async def can_delete_value(self, resource: Resource, value_name: str) -> GateResult:
        raise NotImplementedError

    @abc.abstractmethod
    async def transform_query(self, query: str, language: str, resolver: Any) -> str:
        """Narrow ``query`` to results the current user may see.

        Return the original query when nothing is transformed, never
        ``None``. Raise :class:`~accessgate.errors.AccessSecurityError` when
        the query cannot be safely rewritten.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def has_read_restrictions(self, resolver: Any) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def has_create_restrictions(self, resolver: Any) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def has_update_restrictions(self, resolver: Any) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def has_delete_restrictions(self, resolver: Any) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def has_execute_restrictions(self, resolver: Any) -> bool:
        raise NotImplementedError

    def has_order_children_restrictions(self, resolver: Any) -> bool:
        """Assume restricted unless a gate says otherwise."""
        return True

    @abc.abstractmethod
    def can_read_all_values(self, resource: Resource) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def can_create_all_values(self, resource: Resource) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def can_update_all_values(self, resource: Resource) -> bool:
        raise NotImplementedError

    @abc.abstractmethod
    def can_delete_all_values(self, resource: Resource) -> bool:
        raise NotImplementedError


def _resource(request: DecisionRequest) -> Resource:
    return request.resource or Resource(path=request.resource_path)


# A bound gate method together with the arguments to call it with.
BoundCall = Tuple[Callable[..., Any], Tuple[Any, ...]]
GateCall = Callable[[ResourceAccessGate, DecisionRequest], BoundCall]

# Whole-resource decisions, keyed by operation.
RESOURCE_DECISIONS: Dict[Operation, GateCall] = {
    Operation.READ: lambda gate, req: (gate.can_read, (_resource(req),)),
    Operation.CREATE: lambda gate, req: (gate.can_create, (req.resource_path, req.resolver)),
    Operation.UPDATE: lambda gate, req: (gate.can_update, (_resource(req),)),
    Operation.DELETE: lambda gate, req: (gate.can_delete, (_resource(req),)),
    Operation.EXECUTE: lambda gate, req: (gate.can_execute, (_resource(req),)),
    Operation.ORDER_CHILDREN: lambda gate, req: (gate.can_order_children, (_resource(req),)),
}

# Per-value decisions, keyed by operation.
VALUE_DECISIONS: Dict[Operation, GateCall] = {
    Operation.READ: lambda gate, req: (gate.can_read_value, (_resource(req), req.value_name)),
    Operation.CREATE: lambda gate, req: (gate.can_create_value, (_resource(req), req.value_name)),
    Operation.UPDATE: lambda gate, req: (gate.can_update_value, (_resource(req), req.value_name)),
    Operation.DELETE: lambda gate, req: (gate.can_delete_value, (_resource(req), req.value_name)),
}

RESTRICTION_PREDICATES: Dict[Operation, Callable[[ResourceAccessGate, Any], bool]] = {
    Operation.READ: lambda gate, resolver: gate.has_read_restrictions(resolver),
    Operation.CREATE: lambda gate, resolver: gate.has_create_restrictions(resolver),
    Operation.UPDATE: lambda gate, resolver: gate.has_update_restrictions(resolver),
    Operation.DELETE: lambda gate, resolver: gate.has_delete_restrictions(resolver),
    Operation.EXECUTE: lambda gate, resolver: gate.has_execute_restrictions(resolver),
    Operation.ORDER_CHILDREN: lambda gate, resolver: gate.has_order_children_restrictions(
        resolver
    ),
}

ALL_VALUES_PREDICATES: Dict[Operation, Callable[[ResourceAccessGate, Resource], bool]] = {
    Operation.READ: lambda gate, resource: gate.can_read_all_values(resource),
    Operation.CREATE: lambda gate, resource: gate.can_create_all_values(resource),
    Operation.UPDATE: lambda gate, resource: gate.can_update_all_values(resource),
    Operation.DELETE: lambda gate, resource: gate.can_delete_all_values(resource),
}


def decision_for(gate: ResourceAccessGate, request: DecisionRequest) -> BoundCall:
    """Return the decision method of ``gate`` matching ``request`` and its arguments.

    The method is not called here, so the caller decides how to run it.
    """
    if request.value_name is not None:
        call = VALUE_DECISIONS.get(request.operation)
        if call is None:
            raise ValueError(
                f"Operation {request.operation.value} has no per-value check"
            )
    else:
        call = RESOURCE_DECISIONS[request.operation]
    return call(gate, request)


def gate_name(gate: Any) -> str:
    """Human readable identity of a gate for logs."""
    return getattr(gate, "name", None) or type(gate).__name__
