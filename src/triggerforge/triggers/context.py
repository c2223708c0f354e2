"""Unit-of-work state for triggerforge.

A UnitOfWork owns the bypass registry, the loop guard and the seen-sets for
one request or transaction. The host boundary constructs it and hands it to
the dispatcher; independent instances share nothing.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from triggerforge.triggers.bypass import BypassLookup, BypassRegistry
from triggerforge.triggers.loop_guard import LoopGuard
from triggerforge.triggers.markers import SeenSet
from triggerforge.triggers.types import handler_identity

if TYPE_CHECKING:
    from triggerforge.config import TriggerConfig


class UnitOfWork:
    """Shared dispatch state for one unit of work.

    Attributes:
        bypasses: Bypassed handler identities and section names
        loop_guard: Per-identity invocation counts and ceilings
        seen_record_ids: Record identifiers already handled by handler code
        seen_keys: Arbitrary strings already handled by handler code
    """

    def __init__(self, bypass_lookup: BypassLookup | None = None):
        self.bypasses = BypassRegistry(lookup=bypass_lookup)
        self.loop_guard = LoopGuard()
        self._seen: dict[str, SeenSet[Any]] = {}
        self.seen_record_ids: SeenSet[Any] = self.seen("recordIds")
        self.seen_keys: SeenSet[str] = self.seen("keys")

    @classmethod
    def from_config(cls, config: TriggerConfig) -> UnitOfWork:
        """Create a unit of work seeded from the configured bypass file."""
        from triggerforge.config import file_bypass_lookup

        if config.bypass_file is None:
            return cls()
        return cls(bypass_lookup=file_bypass_lookup(config.bypass_file))

    # -- Bypass surface ------------------------------------------------------

    def bypass(self, name: Any) -> None:
        """Bypass a section name, or a handler instance, type or identity."""
        self.bypasses.bypass(handler_identity(name))

    def clear_bypass(self, name: Any) -> None:
        self.bypasses.clear_bypass(handler_identity(name))

    def clear_all_bypasses(self) -> None:
        self.bypasses.clear_all_bypasses()

    def is_bypassed(self, name: Any) -> bool:
        return self.bypasses.is_bypassed(handler_identity(name))

    @contextmanager
    def bypassing(self, *names: Any) -> Iterator[None]:
        """Bypass names for the duration of a block, then clear them.

        Names that were already bypassed before the block stay bypassed.
        """
        identities = [handler_identity(name) for name in names]
        added = [name for name in identities if not self.bypasses.is_bypassed(name)]
        for name in added:
            self.bypasses.bypass(name)
        try:
            yield
        finally:
            for name in added:
                self.bypasses.clear_bypass(name)

    # -- Loop guard surface --------------------------------------------------

    def set_max_loop_count(self, handler: Any, max_count: int) -> None:
        """Set the loop ceiling for a handler instance, type or identity."""
        self.loop_guard.set_max_loop_count(handler_identity(handler), max_count)

    def clear_max_loop_count(self, handler: Any) -> None:
        self.loop_guard.clear_max_loop_count(handler_identity(handler))

    def loop_count(self, handler: Any) -> int:
        return self.loop_guard.count(handler_identity(handler))

    # -- Seen-sets -----------------------------------------------------------

    def seen(self, name: str) -> SeenSet[Any]:
        """Return the named seen-set, creating it on first access."""
        if name not in self._seen:
            self._seen[name] = SeenSet()
        return self._seen[name]
