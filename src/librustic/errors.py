"""Exception hierarchy for librustic.

These are raised only for programming mistakes (misusing the API or the
environment). Failures of user operations are never raised by the library;
they travel as ``Error`` values.
"""

from __future__ import annotations


class LibrusticError(Exception):
    """Base exception for all librustic errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(LibrusticError):
    """Environment configuration could not be resolved."""


class SealedHierarchyError(LibrusticError, TypeError):
    """Something tried to add a variant to the closed ``Result`` set."""


class InvalidResultError(LibrusticError, TypeError):
    """A value that must be a ``Result`` (or an ``Error`` payload) was not.

    Raised when a ``flat_map`` transform returns a non-``Result``, and, with
    validation enabled, when an ``Error`` is built around a payload that is
    not an exception.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        received_type: type | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.received_type = received_type
