"""Registry abstraction consumed by the decision engine."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Tuple

from ..contracts import AccessContext
from ..registration import GateRegistration


class GateRegistry(Protocol):
    """Protocol for collections of live gate registrations."""

    def register(
        self, gate: Any, properties: Mapping[str, Any], ranking: Optional[int] = None
    ) -> Optional[GateRegistration]:
        """Register ``gate``; return ``None`` if its properties are rejected."""

    def unregister(self, gate: Any) -> bool:
        """Withdraw every registration of ``gate``."""

    def snapshot(self, context: AccessContext) -> Tuple[GateRegistration, ...]:
        """Return registrations for ``context`` in evaluation order."""
