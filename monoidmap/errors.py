"""Exceptions raised by monoidmap.

Ordinary absence is never an error: a missing key simply maps to the
identity value. Exceptions are reserved for asking a value type for an
operation it does not support, and for broken invariants.
"""

from __future__ import annotations

from collections.abc import Iterable


class MonoidMapError(Exception):
    """Base class for all monoidmap errors."""


class CapabilityError(MonoidMapError, TypeError):
    """An operation needs a capability the value type does not declare.

    Example: ``minus`` on a map of natural numbers, which have no inverse.
    """

    def __init__(self, operation: str, monoid: str, missing: Iterable[str]) -> None:
        self.operation = operation
        self.monoid = monoid
        self.missing = tuple(missing)
        super().__init__(
            f"'{operation}' requires {', '.join(self.missing)} "
            f"but monoid '{monoid}' does not declare it"
        )


class InvariantError(MonoidMapError, AssertionError):
    """A map or a monoid descriptor violates one of its laws."""
