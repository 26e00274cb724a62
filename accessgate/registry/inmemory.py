"""In-memory, thread-safe gate registry."""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Any, Mapping, Optional, Tuple

from ..contracts import AccessContext
from ..errors import RegistrationError
from ..registration import GateRegistration
from .base import GateRegistry

logger = logging.getLogger(__name__)


class InMemoryGateRegistry(GateRegistry):
    """Keep registrations in local memory.

    The registrations live in an immutable tuple kept in evaluation order.
    Mutations build a new tuple under a lock and swap it in, so readers
    take a snapshot without locking and never see a partial update.
    """

    def __init__(self) -> None:
        self._registrations: Tuple[GateRegistration, ...] = ()
        self._lock = threading.Lock()
        self._sequence = itertools.count()

    def __len__(self) -> int:
        return len(self._registrations)

    # ------------------------------------------------------------------
    def add(self, registration: GateRegistration) -> GateRegistration:
        """Insert an already built registration.

        The registration is re-stamped with the next insertion sequence so
        that ties in ranking keep registration order.
        """
        with self._lock:
            registration = registration.model_copy(
                update={"sequence": next(self._sequence)}
            )
            self._registrations = tuple(
                sorted(
                    self._registrations + (registration,),
                    key=lambda r: r.sort_key,
                )
            )
        logger.info(f"Registered gate {registration.describe()}")
        return registration

    def register(
        self, gate: Any, properties: Mapping[str, Any], ranking: Optional[int] = None
    ) -> Optional[GateRegistration]:
        try:
            registration = GateRegistration.from_properties(gate, properties, ranking)
        except RegistrationError as exc:
            logger.warning(f"Ignoring gate registration: {exc}")
            return None
        return self.add(registration)

    def unregister(self, gate: Any) -> bool:
        with self._lock:
            remaining = tuple(r for r in self._registrations if r.gate is not gate)
            removed = len(remaining) != len(self._registrations)
            self._registrations = remaining
        if removed:
            logger.info(f"Unregistered gate {gate!r}")
        return removed

    def remove(self, registration: GateRegistration) -> bool:
        """Withdraw a single registration."""
        with self._lock:
            remaining = tuple(r for r in self._registrations if r is not registration)
            removed = len(remaining) != len(self._registrations)
            self._registrations = remaining
        if removed:
            logger.info(f"Unregistered gate {registration.name}")
        return removed

    def clear(self) -> None:
        with self._lock:
            self._registrations = ()

    def snapshot(self, context: AccessContext) -> Tuple[GateRegistration, ...]:
        registrations = self._registrations
        return tuple(r for r in registrations if r.context is context)
