"""Fast pre-checks telling callers whether full evaluation is needed."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .contracts import VALUE_OPERATIONS, AccessContext, Operation, Resource
from .gates.base import ALL_VALUES_PREDICATES, RESTRICTION_PREDICATES
from .registry import REGISTRY, GateRegistry

logger = logging.getLogger(__name__)


class RestrictionPredicateEvaluator:
    """Answers "could any gate restrict this?" without asking for verdicts.

    Decision methods are never invoked here. When no registration applies the
    answer is immediate; otherwise the candidate gates' own predicates are
    consulted, and a predicate that fails is read as "restricted".
    """

    def __init__(self, registry: Optional[GateRegistry] = None) -> None:
        self._registry = registry if registry is not None else REGISTRY

    def has_restrictions(
        self, operation: Operation, context: AccessContext, resolver: Any = None
    ) -> bool:
        predicate = RESTRICTION_PREDICATES[operation]
        for registration in self._registry.snapshot(context):
            if not registration.applies(operation):
                continue
            try:
                restricted = predicate(registration.gate, resolver)
            except Exception:
                logger.exception(
                    f"Gate {registration.name} failed answering "
                    f"{operation.value} restrictions; assuming restricted"
                )
                return True
            if restricted is not False:
                return True
        return False

    def can_all_values(
        self, operation: Operation, resource: Resource, context: AccessContext
    ) -> bool:
        """Return ``True`` if no gate restricts ``operation`` on single values."""
        if operation not in VALUE_OPERATIONS:
            raise ValueError(f"Operation {operation.value} has no per-value check")
        predicate = ALL_VALUES_PREDICATES[operation]
        for registration in self._registry.snapshot(context):
            if not (registration.matches(resource.path) and registration.applies(operation)):
                continue
            try:
                allowed = predicate(registration.gate, resource)
            except Exception:
                logger.exception(
                    f"Gate {registration.name} failed answering all-values "
                    f"{operation.value} on {resource.path}; assuming restricted"
                )
                return False
            if allowed is not True:
                return False
        return True

    # ------------------------------------------------------------------
    def has_read_restrictions(self, context: AccessContext, resolver: Any = None) -> bool:
        return self.has_restrictions(Operation.READ, context, resolver)

    def has_create_restrictions(self, context: AccessContext, resolver: Any = None) -> bool:
        return self.has_restrictions(Operation.CREATE, context, resolver)

    def has_update_restrictions(self, context: AccessContext, resolver: Any = None) -> bool:
        return self.has_restrictions(Operation.UPDATE, context, resolver)

    def has_delete_restrictions(self, context: AccessContext, resolver: Any = None) -> bool:
        return self.has_restrictions(Operation.DELETE, context, resolver)

    def has_execute_restrictions(self, context: AccessContext, resolver: Any = None) -> bool:
        return self.has_restrictions(Operation.EXECUTE, context, resolver)

    def has_order_children_restrictions(
        self, context: AccessContext, resolver: Any = None
    ) -> bool:
        return self.has_restrictions(Operation.ORDER_CHILDREN, context, resolver)

    def can_read_all_values(self, resource: Resource, context: AccessContext) -> bool:
        return self.can_all_values(Operation.READ, resource, context)

    def can_create_all_values(self, resource: Resource, context: AccessContext) -> bool:
        return self.can_all_values(Operation.CREATE, resource, context)

    def can_update_all_values(self, resource: Resource, context: AccessContext) -> bool:
        return self.can_all_values(Operation.UPDATE, resource, context)

    def can_delete_all_values(self, resource: Resource, context: AccessContext) -> bool:
        return self.can_all_values(Operation.DELETE, resource, context)
