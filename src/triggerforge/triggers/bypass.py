"""Bypass registry for triggerforge.

Tracks handler identities and named code sections whose execution is
suppressed for the remainder of a unit of work. Follows the same
idempotent register/lookup shape as the handler registries.
"""

import logging
from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)

# Lookup signature: () -> names the declarative source marks active
BypassLookup = Callable[[], Iterable[str]]


class BypassRegistry:
    """Set of currently bypassed handler identities and section names.

    Presence in the set means "bypassed". Mutations are visible to every
    later check made against the same registry, so one handler can suppress
    another's execution.

    When a declarative lookup is supplied it is invoked once, on the first
    operation, and its names are merged into the set. Clearing a name
    removes it regardless of where it came from.

    Example:
        registry = BypassRegistry(lookup=file_bypass_lookup(path))
        registry.bypass("AccountHandler")
        if not registry.is_bypassed("sendWelcomeEmail"):
            ...
    """

    def __init__(self, lookup: BypassLookup | None = None):
        self._lookup = lookup
        self._loaded = lookup is None
        self._names: set[str] = set()

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        configured = set(self._lookup())
        self._loaded = True
        if configured:
            logger.debug("Seeding bypasses from configuration: %s", sorted(configured))
        self._names |= configured

    def bypass(self, name: str) -> None:
        """Mark a handler identity or section name as bypassed.

        Idempotent — bypassing an already bypassed name is a no-op.
        """
        self._ensure_loaded()
        self._names.add(name)

    def clear_bypass(self, name: str) -> None:
        """Remove a name from the bypassed set. No error if absent."""
        self._ensure_loaded()
        self._names.discard(name)

    def clear_all_bypasses(self) -> None:
        """Empty the bypassed set, including configured bypasses."""
        self._ensure_loaded()
        self._names.clear()

    def is_bypassed(self, name: str) -> bool:
        """Check whether a name is currently bypassed."""
        self._ensure_loaded()
        return name in self._names

    def bypassed_names(self) -> list[str]:
        """List all bypassed names."""
        self._ensure_loaded()
        return sorted(self._names)
