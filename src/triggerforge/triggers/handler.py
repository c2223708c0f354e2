"""Handler capability for triggerforge.

A handler is any value exposing the seven phase methods. TriggerHandler
gives every phase an inert default so subclasses override only what they
need; CallbackHandler builds one from plain functions.

Usage:
    class AccountHandler(TriggerHandler):
        def before_insert(self, new):
            for record in new:
                record.setdefault("status", "active")
"""

from collections.abc import Callable, Sequence
from typing import Any, Protocol

from triggerforge.triggers.types import Phase

# Batch signature: ordered sequence of opaque record handles
Batch = Sequence[Any]


class PhaseHandler(Protocol):
    """Protocol for values the dispatcher can route phases to."""

    def before_insert(self, new: Batch) -> None: ...

    def before_update(self, new: Batch, old: Batch) -> None: ...

    def before_delete(self, new: Batch) -> None: ...

    def after_insert(self, new: Batch) -> None: ...

    def after_update(self, new: Batch, old: Batch) -> None: ...

    def after_delete(self, new: Batch) -> None: ...

    def after_undelete(self, new: Batch) -> None: ...


class TriggerHandler:
    """Base handler with a no-op implementation for every phase.

    The handler identity defaults to the fully-qualified class name; set a
    ``name`` class attribute to pin it.
    """

    def before_insert(self, new: Batch) -> None:
        pass

    def before_update(self, new: Batch, old: Batch) -> None:
        pass

    def before_delete(self, new: Batch) -> None:
        pass

    def after_insert(self, new: Batch) -> None:
        pass

    def after_update(self, new: Batch, old: Batch) -> None:
        pass

    def after_delete(self, new: Batch) -> None:
        pass

    def after_undelete(self, new: Batch) -> None:
        pass


class CallbackHandler(TriggerHandler):
    """Handler assembled from optional per-phase callables.

    Example:
        handler = CallbackHandler(
            "contactRollup",
            after_insert=lambda new: rollup(new),
        )
    """

    def __init__(self, name: str, **callbacks: Callable[..., None]):
        unknown = set(callbacks) - {p.method_name for p in Phase}
        if unknown:
            raise ValueError(f"Unknown phase callback(s): {', '.join(sorted(unknown))}")
        self._trigger_identity = name
        self.callbacks: dict[Phase, Callable[..., None]] = {
            p: callbacks[p.method_name] for p in Phase if p.method_name in callbacks
        }

    @property
    def name(self) -> str:
        """Handler identity fixed at construction."""
        return self._trigger_identity

    def _call(self, phase: Phase, *batches: Batch) -> None:
        callback = self.callbacks.get(phase)
        if callback is not None:
            callback(*batches)

    def before_insert(self, new: Batch) -> None:
        self._call(Phase.BEFORE_INSERT, new)

    def before_update(self, new: Batch, old: Batch) -> None:
        self._call(Phase.BEFORE_UPDATE, new, old)

    def before_delete(self, new: Batch) -> None:
        self._call(Phase.BEFORE_DELETE, new)

    def after_insert(self, new: Batch) -> None:
        self._call(Phase.AFTER_INSERT, new)

    def after_update(self, new: Batch, old: Batch) -> None:
        self._call(Phase.AFTER_UPDATE, new, old)

    def after_delete(self, new: Batch) -> None:
        self._call(Phase.AFTER_DELETE, new)

    def after_undelete(self, new: Batch) -> None:
        self._call(Phase.AFTER_UNDELETE, new)

    def __repr__(self) -> str:
        phases = ", ".join(p.value for p in self.callbacks)
        return f"CallbackHandler({self.name!r}, phases=[{phases}])"
