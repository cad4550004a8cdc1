"""Explicit result type for device interactions.

Device collaborators (biometrics, picker, recorder, player, notifications,
printing) report outcomes as a :class:`Result` instead of bare callbacks or
optionals. Failures carry an :class:`ErrorKind` so the view layer can decide
between inline text, a modal alert, or nothing at all.
"""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from loguru import logger

from .exceptions import AuthenticationError, DaybookError, MediaIOError, PermissionDeniedError

T = TypeVar("T")


class ErrorKind(Enum):
    """Failure taxonomy surfaced to the view layer."""

    AUTHENTICATION_FAILURE = "authentication_failure"  # inline text, retry by tapping again
    PERMISSION_DENIED = "permission_denied"  # modal alert pointing at system settings
    MEDIA_IO_FAILURE = "media_io_failure"  # logged, otherwise a no-op
    NOT_FOUND = "not_found"  # silent no-op


_EXCEPTION_KINDS: dict[type[Exception], ErrorKind] = {
    AuthenticationError: ErrorKind.AUTHENTICATION_FAILURE,
    PermissionDeniedError: ErrorKind.PERMISSION_DENIED,
    MediaIOError: ErrorKind.MEDIA_IO_FAILURE,
}


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a device interaction.

    Attributes:
        ok: Whether the interaction succeeded.
        value: Payload on success (may be None).
        error_kind: Failure category, None on success.
        message: Human-readable failure reason.
    """

    ok: bool
    value: T | None = None
    error_kind: ErrorKind | None = None
    message: str = ""

    @classmethod
    def success(cls, value: T | None = None) -> Result[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str = "") -> Result[T]:
        return cls(ok=False, error_kind=kind, message=message)

    def __bool__(self) -> bool:
        return self.ok

    def __repr__(self) -> str:
        if self.ok:
            return f"Result.success({self.value!r})"
        kind = self.error_kind.value if self.error_kind else "unknown"
        return f"Result.failure({kind}, {self.message!r})"


def kind_for(exc: BaseException, default: ErrorKind) -> ErrorKind:
    """Map a raised exception onto an ErrorKind."""
    for exc_type, kind in _EXCEPTION_KINDS.items():
        if isinstance(exc, exc_type):
            return kind
    return default


async def capture(awaitable: Awaitable[Any], kind: ErrorKind, action: str = "device call") -> Result[Any]:
    """Await a collaborator call and fold daybook/OS errors into a failure Result.

    Anything other than DaybookError or OSError propagates: those are bugs,
    not device failures.
    """
    try:
        value = await awaitable
    except (DaybookError, OSError) as e:
        resolved = kind_for(e, kind)
        logger.warning(f"{action} failed ({resolved.value}): {e}")
        return Result.failure(resolved, str(e))
    return Result.success(value)
