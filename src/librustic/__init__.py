"""librustic: a closed Result type for fallible operations.

Public API:
    - ok(value) / ok(): Build an ``Ok`` or an ``EmptyOk``
    - error(exception): Build an ``Error``
    - Result, Ok, EmptyOk, Error: The type and its three variants
    - Settings, configure, resolve_settings: Opt-in configuration
"""

from __future__ import annotations

import logging

from librustic.config import Settings, configure, current_settings, resolve_settings
from librustic.errors import (
    ConfigurationError,
    InvalidResultError,
    LibrusticError,
    SealedHierarchyError,
)
from librustic.result import EmptyOk, Error, Ok, Result, error, ok

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("librustic")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("librustic").addHandler(logging.NullHandler())

__all__ = [
    "ConfigurationError",
    "EmptyOk",
    "Error",
    "InvalidResultError",
    "LibrusticError",
    "Ok",
    "Result",
    "SealedHierarchyError",
    "Settings",
    "configure",
    "current_settings",
    "error",
    "ok",
    "resolve_settings",
]
