"""Chains query rewriting across gates."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from .config import EngineConfig, load_config
from .contracts import AccessContext
from .errors import AccessSecurityError
from .registry import REGISTRY, GateRegistry
from .utils.calls import settle

logger = logging.getLogger(__name__)


class QueryTransformer:
    """Passes a query through every gate of a context in ranking order.

    Each gate receives the output of the previous one. Transformation only
    narrows result sets; every result is still checked on read.
    """

    def __init__(
        self,
        registry: Optional[GateRegistry] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self._registry = registry if registry is not None else REGISTRY
        self._config = config or load_config().engine

    async def transform(
        self,
        query: str,
        language: str,
        context: AccessContext,
        resolver: Any = None,
    ) -> str:
        """Return ``query`` as rewritten by all gates of ``context``.

        Raises:
            AccessSecurityError: If any gate cannot transform the query. The
                chain stops at that gate.
        """
        current = query
        for registration in self._registry.snapshot(context):
            try:
                transformed = await settle(
                    registration.gate.transform_query,
                    current,
                    language,
                    resolver,
                    timeout=self._config.gate_timeout,
                )
            except AccessSecurityError:
                logger.error(
                    f"Gate {registration.name} refused to transform {language} query"
                )
                raise
            except asyncio.TimeoutError as exc:
                logger.error(
                    f"Gate {registration.name} timed out transforming {language} query"
                )
                raise AccessSecurityError(
                    f"Gate {registration.name} timed out transforming query"
                ) from exc
            except Exception as exc:
                logger.exception(
                    f"Gate {registration.name} failed transforming {language} query"
                )
                raise AccessSecurityError(
                    f"Gate {registration.name} failed transforming query: {exc}"
                ) from exc

            if not isinstance(transformed, str):
                raise AccessSecurityError(
                    f"Gate {registration.name} returned {transformed!r} instead of a query"
                )
            if transformed != current:
                logger.debug(f"{registration.name} transformed query to {transformed!r}")
            current = transformed
        return current
