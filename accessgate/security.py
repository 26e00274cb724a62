"""Resource access security facade used by resource resolvers."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .config import EngineConfig, load_config
from .contracts import AccessContext, DecisionRequest, GateResult, Operation, Resource
from .engine import DecisionEngine
from .query import QueryTransformer
from .registry import REGISTRY, GateRegistry
from .restrictions import RestrictionPredicateEvaluator

logger = logging.getLogger(__name__)


class ResourceAccessSecurity:
    """All access checks for one context, backed by a shared registry.

    Application security applies to every resource; provider security only
    to resources from providers that asked for access checks.
    """

    def __init__(
        self,
        context: AccessContext,
        registry: Optional[GateRegistry] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        registry = registry if registry is not None else REGISTRY
        config = config or load_config().engine
        self.context = context
        self.engine = DecisionEngine(registry, config)
        self.queries = QueryTransformer(registry, config)
        self.restrictions = RestrictionPredicateEvaluator(registry)

    async def check(
        self,
        resource: Resource | str,
        operation: Operation,
        value_name: Optional[str] = None,
        resolver: Any = None,
    ) -> GateResult:
        """Evaluate ``operation`` on a resource or a bare path."""
        if isinstance(resource, str):
            resource = Resource(path=resource)
        request = DecisionRequest.for_resource(
            resource, operation, self.context, value_name=value_name, resolver=resolver
        )
        return await self.engine.evaluate(request)

    # Whole-resource checks ---------------------------------------------
    async def can_read(self, resource: Resource | str, resolver: Any = None) -> GateResult:
        return await self.check(resource, Operation.READ, resolver=resolver)

    async def can_create(self, path: str, resolver: Any = None) -> GateResult:
        return await self.check(path, Operation.CREATE, resolver=resolver)

    async def can_update(self, resource: Resource | str, resolver: Any = None) -> GateResult:
        return await self.check(resource, Operation.UPDATE, resolver=resolver)

    async def can_delete(self, resource: Resource | str, resolver: Any = None) -> GateResult:
        return await self.check(resource, Operation.DELETE, resolver=resolver)

    async def can_execute(self, resource: Resource | str, resolver: Any = None) -> GateResult:
        return await self.check(resource, Operation.EXECUTE, resolver=resolver)

    async def can_order_children(
        self, resource: Resource | str, resolver: Any = None
    ) -> GateResult:
        return await self.check(resource, Operation.ORDER_CHILDREN, resolver=resolver)

    # Per-value checks --------------------------------------------------
    async def can_read_value(
        self, resource: Resource, value_name: str, resolver: Any = None
    ) -> GateResult:
        return await self.check(resource, Operation.READ, value_name, resolver)

    async def can_create_value(
        self, resource: Resource, value_name: str, resolver: Any = None
    ) -> GateResult:
        return await self.check(resource, Operation.CREATE, value_name, resolver)

    async def can_update_value(
        self, resource: Resource, value_name: str, resolver: Any = None
    ) -> GateResult:
        return await self.check(resource, Operation.UPDATE, value_name, resolver)

    async def can_delete_value(
        self, resource: Resource, value_name: str, resolver: Any = None
    ) -> GateResult:
        return await self.check(resource, Operation.DELETE, value_name, resolver)

    # Pre-checks --------------------------------------------------------
    def has_read_restrictions(self, resolver: Any = None) -> bool:
        return self.restrictions.has_read_restrictions(self.context, resolver)

    def has_create_restrictions(self, resolver: Any = None) -> bool:
        return self.restrictions.has_create_restrictions(self.context, resolver)

    def has_update_restrictions(self, resolver: Any = None) -> bool:
        return self.restrictions.has_update_restrictions(self.context, resolver)

    def has_delete_restrictions(self, resolver: Any = None) -> bool:
        return self.restrictions.has_delete_restrictions(self.context, resolver)

    def has_execute_restrictions(self, resolver: Any = None) -> bool:
        return self.restrictions.has_execute_restrictions(self.context, resolver)

    def has_order_children_restrictions(self, resolver: Any = None) -> bool:
        return self.restrictions.has_order_children_restrictions(self.context, resolver)

    def can_read_all_values(self, resource: Resource) -> bool:
        return self.restrictions.can_read_all_values(resource, self.context)

    def can_create_all_values(self, resource: Resource) -> bool:
        return self.restrictions.can_create_all_values(resource, self.context)

    def can_update_all_values(self, resource: Resource) -> bool:
        return self.restrictions.can_update_all_values(resource, self.context)

    def can_delete_all_values(self, resource: Resource) -> bool:
        return self.restrictions.can_delete_all_values(resource, self.context)

    # Queries -----------------------------------------------------------
    async def transform_query(self, query: str, language: str, resolver: Any = None) -> str:
        return await self.queries.transform(query, language, self.context, resolver)

    async def readable_values(
        self, resource: Resource, resolver: Any = None
    ) -> Optional[Dict[str, Any]]:
        """Return the values of ``resource`` the caller may read.

        ``None`` means the resource itself is not readable.
        """
        if await self.can_read(resource, resolver) is not GateResult.GRANTED:
            return None
        if self.can_read_all_values(resource):
            return dict(resource.values)

        readable = {}
        for name, value in resource.values.items():
            if await self.can_read_value(resource, name, resolver) is GateResult.GRANTED:
                readable[name] = value
            else:
                logger.debug(f"Hiding value {name!r} of {resource.path}")
        return readable


def application_security(
    registry: Optional[GateRegistry] = None, config: Optional[EngineConfig] = None
) -> ResourceAccessSecurity:
    """Security applied to the whole resource tree."""
    return ResourceAccessSecurity(AccessContext.APPLICATION, registry, config)


def provider_security(
    registry: Optional[GateRegistry] = None, config: Optional[EngineConfig] = None
) -> ResourceAccessSecurity:
    """Security applied to providers that opted into access checks."""
    return ResourceAccessSecurity(AccessContext.PROVIDER, registry, config)
