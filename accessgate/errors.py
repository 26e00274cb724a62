"""Exceptions raised by accessgate."""

from __future__ import annotations


class AccessGateError(Exception):
    """Base class for all accessgate errors."""


class RegistrationError(AccessGateError):
    """A gate registration carries malformed properties."""


class AccessSecurityError(AccessGateError):
    """A query could not be safely transformed.

    Callers receiving this error must not run the partially transformed
    query.
    """
