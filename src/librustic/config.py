"""Configuration: opt-in toggles for payload validation and tracing.

Resolution follows the precedence ``defaults < .env < environment < overrides``.
Only ``LIBRUSTIC_*`` keys are read from either source, and ``.env`` values are
never copied into ``os.environ``.

Nothing is resolved implicitly. Results always consult the active settings,
which stay at the defaults until :func:`configure` is called; building or
chaining a result never touches the environment or the filesystem.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from librustic.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

ENV_PREFIX = "LIBRUSTIC_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"", "0", "false", "no", "off"})


class Settings(BaseModel):
    """Validated, immutable librustic settings.

    Attributes:
        strict_payloads: Reject ``Error`` payloads that are neither ``None``
            nor an exception. Off by default; the payload is then opaque.
        trace: Emit DEBUG records for every ``map``/``flat_map`` decision.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    strict_payloads: bool = False
    trace: bool = False

    @field_validator("strict_payloads", "trace", mode="before")
    @classmethod
    def coerce_flag(cls, v: Any) -> Any:
        """Accept the usual on/off spellings for flags read from the environment."""
        if not isinstance(v, str):
            return v
        normalized = v.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        raise ValueError(f"expected an on/off flag, got {v!r}")


_active = Settings()


def _scoped(source: Mapping[str, str | None]) -> dict[str, str]:
    config: dict[str, str] = {}
    for key, value in source.items():
        if value is None or not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        if field_name in Settings.model_fields:
            config[field_name] = value
    return config


def load_env() -> dict[str, str]:
    """Return ``LIBRUSTIC_*`` variables that name a known setting.

    Keys are lower-cased with the prefix stripped. Unknown variables are ignored.
    """
    return _scoped(os.environ)


def load_dotenv_file() -> dict[str, str]:
    """Return known ``LIBRUSTIC_*`` entries from the nearest ``.env`` file.

    The file is looked up from the working directory upwards and parsed
    without modifying the process environment.
    """
    path = find_dotenv(usecwd=True)
    if not path:
        return {}
    return _scoped(dotenv_values(path))


def resolve_settings(overrides: Mapping[str, Any] | None = None) -> Settings:
    """Resolve settings from ``.env``, the environment and optional overrides.

    Resolving does not activate the result; see :func:`configure`.

    Args:
        overrides: Programmatic values that win over every other source.

    Returns:
        A frozen ``Settings`` instance.

    Raises:
        ConfigurationError: If a value cannot be interpreted or an override
            names an unknown setting.
    """
    merged: dict[str, Any] = {
        **load_dotenv_file(),
        **load_env(),
        **(overrides or {}),
    }
    try:
        return Settings.model_validate(merged)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(part) for part in err.get("loc", ()))
        msg = err.get("msg") or "invalid value"
        # Pydantic prefixes validator messages with "Value error, "
        if msg.startswith("Value error, "):
            msg = msg[13:]
        if field in Settings.model_fields:
            hint = f"Set {ENV_PREFIX}{field.upper()} to 1 or 0."
        else:
            hint = f"Known settings: {', '.join(sorted(Settings.model_fields))}."
        raise ConfigurationError(
            f"Configuration validation failed for {field or 'settings'}: {msg}",
            hint=hint,
        ) from e


def configure(settings: Settings | None = None) -> Settings:
    """Activate settings for the process and return them.

    With no ``settings``, they are resolved through :func:`resolve_settings`
    first, so configuration errors surface here and never from
    ``map``/``flat_map``. Pass ``Settings()`` to restore the defaults.
    """
    global _active
    if settings is None:
        settings = resolve_settings()
    _active = settings
    return settings


def current_settings() -> Settings:
    """Return the active settings (defaults until :func:`configure` is called)."""
    return _active
