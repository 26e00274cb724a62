"""Combines the verdicts of all applicable gates into one decision."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from .config import EngineConfig, load_config
from .contracts import AccessContext, DecisionRequest, GateResult, Operation
from .gates.base import decision_for
from .registration import GateRegistration
from .registry import REGISTRY, GateRegistry
from .utils.calls import settle

logger = logging.getLogger(__name__)


class DecisionEngine:
    """Folds gate verdicts for whole-resource and per-value operations.

    Gates are asked in ranking order. The first ``GRANTED`` wins outright.
    A ``DENIED`` is remembered and ends the fold early when the operation is
    final for that gate. ``CANT_DECIDE`` is ignored. When the list runs out
    any remembered denial wins, otherwise the configured default applies.
    """

    def __init__(
        self,
        registry: Optional[GateRegistry] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self._registry = registry if registry is not None else REGISTRY
        self._config = config or load_config().engine

    @property
    def default_result(self) -> GateResult:
        """Verdict when no applicable gate decides."""
        return GateResult.GRANTED if self._config.default_allow else GateResult.DENIED

    def applicable(
        self, context: AccessContext, resource_path: str, operation: Operation
    ) -> List[GateRegistration]:
        """Registrations consulted for ``operation`` on ``resource_path``."""
        return [
            registration
            for registration in self._registry.snapshot(context)
            if registration.matches(resource_path) and registration.applies(operation)
        ]

    async def evaluate(self, request: DecisionRequest) -> GateResult:
        """Return the combined verdict for ``request``."""
        registrations = self.applicable(
            request.context, request.resource_path, request.operation
        )
        if not registrations:
            logger.debug(
                f"No {request.context.value} gate for {request.operation.value} "
                f"on {request.resource_path}"
            )
            return self.default_result

        saw_denied = False
        for registration in registrations:
            result = await self._ask(registration, request)
            if result is GateResult.GRANTED:
                logger.debug(
                    f"{registration.name} granted {request.operation.value} "
                    f"on {request.resource_path}"
                )
                return GateResult.GRANTED
            if result is GateResult.DENIED:
                saw_denied = True
                if registration.is_final(request.operation):
                    logger.debug(
                        f"{registration.name} finally denied {request.operation.value} "
                        f"on {request.resource_path}"
                    )
                    return GateResult.DENIED

        if saw_denied:
            return GateResult.DENIED
        return self.default_result

    async def _ask(
        self, registration: GateRegistration, request: DecisionRequest
    ) -> GateResult:
        """Invoke one gate; faults and timeouts count as ``CANT_DECIDE``."""
        try:
            func, args = decision_for(registration.gate, request)
            result = await settle(func, *args, timeout=self._config.gate_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                f"Gate {registration.name} timed out after {self._config.gate_timeout}s "
                f"deciding {request.operation.value} on {request.resource_path}"
            )
            return GateResult.CANT_DECIDE
        except Exception:
            logger.exception(
                f"Gate {registration.name} failed deciding {request.operation.value} "
                f"on {request.resource_path}"
            )
            return GateResult.CANT_DECIDE

        if not isinstance(result, GateResult):
            logger.warning(
                f"Gate {registration.name} returned {result!r} for "
                f"{request.operation.value} on {request.resource_path}; ignoring it"
            )
            return GateResult.CANT_DECIDE

        logger.debug(
            f"{registration.name}: {result.value} for {request.operation.value} "
            f"on {request.resource_path}"
        )
        return result
