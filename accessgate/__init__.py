"""accessgate: combines pluggable access gates into one authorization decision."""

from .contracts import AccessContext, DecisionRequest, GateResult, Operation, Resource
from .engine import DecisionEngine
from .errors import AccessGateError, AccessSecurityError, RegistrationError
from .gates import ResourceAccessGate, StaticGate, load_gates
from .query import QueryTransformer
from .registration import GateRegistration
from .registry import REGISTRY, GateRegistry, InMemoryGateRegistry, register_gate
from .restrictions import RestrictionPredicateEvaluator
from .security import ResourceAccessSecurity, application_security, provider_security

__version__ = "0.1.0"
__all__ = [
    "AccessContext",
    "AccessGateError",
    "AccessSecurityError",
    "DecisionEngine",
    "DecisionRequest",
    "GateRegistration",
    "GateRegistry",
    "GateResult",
    "InMemoryGateRegistry",
    "Operation",
    "QueryTransformer",
    "REGISTRY",
    "RegistrationError",
    "Resource",
    "ResourceAccessGate",
    "ResourceAccessSecurity",
    "RestrictionPredicateEvaluator",
    "StaticGate",
    "application_security",
    "load_gates",
    "provider_security",
    "register_gate",
]
