"""Gate registry and module level default instance."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..registration import GateRegistration
from .base import GateRegistry
from .inmemory import InMemoryGateRegistry

# Process wide registry used when callers do not pass their own. Registrars
# add gates here at start-up and withdraw them on shutdown.
REGISTRY = InMemoryGateRegistry()


def register_gate(
    gate: Any, properties: Mapping[str, Any], ranking: Optional[int] = None
) -> Optional[GateRegistration]:
    """Add ``gate`` to ``REGISTRY`` with ``properties``.

    Returns ``None`` when the properties are rejected; the gate is then not
    consulted at all.
    """

    return REGISTRY.register(gate, properties, ranking)


__all__ = [
    "GateRegistry",
    "InMemoryGateRegistry",
    "REGISTRY",
    "register_gate",
]
