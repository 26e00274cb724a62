"""Gate interface and built-in gates."""

from __future__ import annotations

from .base import ResourceAccessGate, decision_for, gate_name
from .static import StaticGate, load_gates

__all__ = ["ResourceAccessGate", "StaticGate", "decision_for", "gate_name", "load_gates"]
