"""Result: a closed success-or-failure type for fallible operations.

A ``Result[T]`` is exactly one of three frozen variants:

- ``Ok(value)``: success carrying a value, which may itself be ``None``.
- ``EmptyOk()``: success carrying nothing (the "void" success).
- ``Error(exception)``: failure carrying an exception, which may be ``None``.

Build them with :func:`ok` and :func:`error`, then inspect them with the
predicates and accessors or destructure them with ``match``::

    match divide(10, 0):
        case Ok(value):
            print(value)
        case EmptyOk():
            print("done")
        case Error(exception):
            print(f"failed: {exception}")

``Ok(None)`` and ``EmptyOk()`` are different states. Both report no value
through :meth:`Result.get_value`; :meth:`Result.is_void_ok` tells them apart.

Chaining with :meth:`Result.map` and :meth:`Result.flat_map` never changes
an ``EmptyOk`` or ``Error`` and never calls the transform for them, so a
chain of fallible steps stops at the first failure and carries it to the end.
Exceptions raised by a transform are not caught.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import dataclasses
import logging
from typing import TYPE_CHECKING, Any, Final, final, overload

from librustic.config import current_settings
from librustic.errors import InvalidResultError, SealedHierarchyError

if TYPE_CHECKING:
    from collections.abc import Callable

log = logging.getLogger(__name__)

_VARIANTS: Final[frozenset[str]] = frozenset({"Ok", "EmptyOk", "Error"})

# Flipped once the three variants below exist; no subclass is accepted after that
_sealed = False

# Distinguishes ok() from ok(None)
_MISSING: Final[Any] = object()


class Result[T](ABC):
    """Outcome of a fallible operation: ``Ok``, ``EmptyOk`` or ``Error``.

    The variant set is closed; subclassing outside this module raises
    ``SealedHierarchyError``.
    """

    __slots__ = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if (
            _sealed
            or cls.__module__ != __name__
            or cls.__qualname__ not in _VARIANTS
        ):
            raise SealedHierarchyError(
                f"Cannot subclass {cls.__qualname__!r} from Result: the variant set is closed",
                hint="Construct results with ok(), ok(value) or error(exception).",
            )

    def is_ok(self) -> bool:
        """Return True for ``Ok`` and ``EmptyOk``, whether or not a value is present."""
        return not isinstance(self, Error)

    def is_void_ok(self) -> bool:
        """Return True only for ``EmptyOk``."""
        return isinstance(self, EmptyOk)

    def is_error(self) -> bool:
        """Return True only for ``Error``."""
        return isinstance(self, Error)

    def get_value(self) -> T | None:
        """Return the success value, or None.

        None is returned for ``EmptyOk``, ``Error``, and ``Ok(None)``.
        Use :meth:`is_void_ok` to tell the first from the last.
        """
        return self.value if isinstance(self, Ok) else None

    def get_exception(self) -> BaseException | object | None:
        """Return the failure payload, or None for successes and ``Error(None)``."""
        return self.exception if isinstance(self, Error) else None

    @abstractmethod
    def map[U](self, transform: Callable[[T], U]) -> Result[U]:
        """Transform the value of an ``Ok``, keeping the variant.

        ``Ok(v)`` becomes ``Ok(transform(v))``; ``v`` may be None and is passed
        as-is. ``EmptyOk`` and ``Error`` come back as fresh instances of the
        same variant and ``transform`` is not called.
        """

    @abstractmethod
    def flat_map[U](self, transform: Callable[[T], Result[U]]) -> Result[U]:
        """Chain another fallible step onto an ``Ok``.

        ``Ok(v)`` returns ``transform(v)`` unchanged, whatever variant it is.
        ``EmptyOk`` and ``Error`` come back as fresh instances of the same
        variant and ``transform`` is not called.

        Raises:
            InvalidResultError: If ``transform`` returns something other than
                a ``Result``.
        """


@final
@dataclasses.dataclass(frozen=True, slots=True)
class Ok[T](Result[T]):
    """A success carrying a value (possibly None)."""

    value: T

    def map[U](self, transform: Callable[[T], U]) -> Result[U]:
        _require_callable(transform, "map")
        _trace("map applied to Ok")
        return Ok(transform(self.value))

    def flat_map[U](self, transform: Callable[[T], Result[U]]) -> Result[U]:
        _require_callable(transform, "flat_map")
        _trace("flat_map applied to Ok")
        result = transform(self.value)
        if not isinstance(result, Result):
            raise InvalidResultError(
                f"flat_map transform must return a Result, got {type(result).__name__}",
                hint="Wrap plain values with ok(value), or use map() instead.",
                received_type=type(result),
            )
        return result


@final
@dataclasses.dataclass(frozen=True, slots=True)
class EmptyOk[T](Result[T]):
    """A success with no value at all."""

    def map[U](self, transform: Callable[[T], U]) -> Result[U]:
        _require_callable(transform, "map")
        _trace("map short-circuited on EmptyOk")
        return EmptyOk()

    def flat_map[U](self, transform: Callable[[T], Result[U]]) -> Result[U]:
        _require_callable(transform, "flat_map")
        _trace("flat_map short-circuited on EmptyOk")
        return EmptyOk()


@final
@dataclasses.dataclass(frozen=True, slots=True)
class Error[T](Result[T]):
    """A failure carrying an exception (possibly None, or an opaque payload)."""

    exception: BaseException | object | None

    def __post_init__(self) -> None:
        payload = self.exception
        if payload is None or isinstance(payload, BaseException):
            return
        if current_settings().strict_payloads:
            raise InvalidResultError(
                f"Error payload must be an exception or None, got {type(payload).__name__}",
                hint="Disable strict_payloads to allow opaque payloads.",
                received_type=type(payload),
            )

    def map[U](self, transform: Callable[[T], U]) -> Result[U]:
        _require_callable(transform, "map")
        _trace("map short-circuited on Error: %r", self.exception)
        return Error(self.exception)

    def flat_map[U](self, transform: Callable[[T], Result[U]]) -> Result[U]:
        _require_callable(transform, "flat_map")
        _trace("flat_map short-circuited on Error: %r", self.exception)
        return Error(self.exception)


_sealed = True


@overload
def ok[T]() -> EmptyOk[T]: ...


@overload
def ok[T](value: T) -> Ok[T]: ...


def ok(value: Any = _MISSING) -> Result[Any]:
    """Create a success.

    ``ok(value)`` wraps ``value`` in ``Ok``, including when it is None.
    ``ok()`` with no argument returns ``EmptyOk``.
    """
    if value is _MISSING:
        return EmptyOk()
    return Ok(value)


def error[T](exception: BaseException | object | None) -> Error[T]:
    """Create a failure around ``exception``; None is kept as-is.

    The payload is normally an exception but is not inspected unless
    ``strict_payloads`` is active.
    """
    return Error(exception)


def _require_callable(transform: object, operation: str) -> None:
    if not callable(transform):
        raise TypeError(
            f"{operation}() expects a callable, got {type(transform).__name__}"
        )


def _trace(msg: str, *args: object) -> None:
    if current_settings().trace:
        log.debug(msg, *args)
