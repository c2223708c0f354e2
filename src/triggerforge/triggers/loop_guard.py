"""Loop guard for triggerforge.

Counts completed dispatches per handler identity and enforces an optional
ceiling to stop runaway re-entrant invocation.

The host invokes a handler once per phase per batch, so a logical insert of
N records produces ``batch_count(N, batch_size)`` before-invocations and as
many after-invocations. Ceilings must be sized with that multiplier; the
guard cannot infer it.
"""

import logging

from triggerforge.triggers.errors import LoopLimitExceeded

logger = logging.getLogger(__name__)


class LoopGuard:
    """Per-identity invocation counter with optional ceilings."""

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._ceilings: dict[str, int] = {}

    def set_max_loop_count(self, identity: str, max_count: int) -> None:
        """Set the ceiling for an identity. A value <= 0 disables the guard."""
        if max_count <= 0:
            self.clear_max_loop_count(identity)
            return
        self._ceilings[identity] = max_count

    def clear_max_loop_count(self, identity: str) -> None:
        """Remove the ceiling for an identity. No error if none was set."""
        self._ceilings.pop(identity, None)

    def max_loop_count(self, identity: str) -> int | None:
        return self._ceilings.get(identity)

    def count(self, identity: str) -> int:
        return self._counts.get(identity, 0)

    def increment(self, identity: str) -> int:
        """Count one invocation and enforce the ceiling.

        Returns:
            The new count for the identity

        Raises:
            LoopLimitExceeded: If a ceiling is set and the new count exceeds it
        """
        count = self._counts.get(identity, 0) + 1
        self._counts[identity] = count

        ceiling = self._ceilings.get(identity)
        if ceiling is not None and count > ceiling:
            logger.error(
                "Handler '%s' exceeded loop ceiling %d (invocation %d)",
                identity,
                ceiling,
                count,
            )
            raise LoopLimitExceeded(identity, ceiling, count)
        return count

    def reset(self, identity: str | None = None) -> None:
        """Reset counts for one identity, or for all identities.

        Ceilings are left in place.
        """
        if identity is None:
            self._counts.clear()
        else:
            self._counts.pop(identity, None)
