"""Lock screen: a biometric gate in front of the journal.

Once unlocked the journal stays open for the rest of the process; there
is no idle re-lock.
"""

from __future__ import annotations

from loguru import logger

from daybook.core.result import ErrorKind, Result, capture

from .protocols import Authenticator

DEFAULT_PROMPT = "Authenticate to view your journal."


class LockScreen:
    """Tracks whether the journal is unlocked and the last failure text."""

    def __init__(self, authenticator: Authenticator, prompt: str = DEFAULT_PROMPT):
        self._authenticator = authenticator
        self.prompt = prompt
        self._unlocked = False
        self.error: str | None = None

    @classmethod
    def from_config(cls, config, authenticator: Authenticator) -> LockScreen:
        """Build from a :class:`daybook.core.config.Config` (``auth.prompt``)."""
        return cls(authenticator, prompt=config.get("auth.prompt") or DEFAULT_PROMPT)

    @property
    def is_unlocked(self) -> bool:
        return self._unlocked

    async def unlock(self) -> Result[None]:
        """Ask the device to authenticate. Safe to call again after a failure."""
        if self._unlocked:
            return Result.success()

        result = await capture(
            self._authenticator.authenticate(self.prompt),
            ErrorKind.AUTHENTICATION_FAILURE,
            action="authentication",
        )
        if result.ok and result.value:
            self._unlocked = True
            self.error = None
            logger.info("Journal unlocked")
            return Result.success()

        message = result.message or "Authentication failed."
        self.error = message
        return Result.failure(ErrorKind.AUTHENTICATION_FAILURE, message)
