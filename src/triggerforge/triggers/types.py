"""Trigger system types for triggerforge.

Defines the core data structures for record lifecycle dispatch:
- Phase: the seven lifecycle moments the host emits
- Operation: the mutation that produced a set of phases
- PhaseContext: runtime snapshot handed to the dispatcher per invocation
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Operation(Enum):
    """The type of mutation being emitted."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    UNDELETE = "undelete"

    @property
    def phases(self) -> tuple["Phase", ...]:
        """Phases the host emits for this operation, in order."""
        if self is Operation.UNDELETE:
            return (Phase.AFTER_UNDELETE,)
        return tuple(p for p in Phase if p.operation is self)


class Phase(Enum):
    """Lifecycle moment at which the host invokes the dispatcher."""

    BEFORE_INSERT = "beforeInsert"
    BEFORE_UPDATE = "beforeUpdate"
    BEFORE_DELETE = "beforeDelete"
    AFTER_INSERT = "afterInsert"
    AFTER_UPDATE = "afterUpdate"
    AFTER_DELETE = "afterDelete"
    AFTER_UNDELETE = "afterUndelete"

    @property
    def is_before(self) -> bool:
        return self.value.startswith("before")

    @property
    def is_after(self) -> bool:
        return not self.is_before

    @property
    def operation(self) -> Operation:
        return _PHASE_OPERATIONS[self]

    @property
    def has_previous(self) -> bool:
        """True when the host supplies the previous record batch."""
        return self.operation is Operation.UPDATE

    @property
    def method_name(self) -> str:
        """Name of the handler method this phase routes to."""
        return self.name.lower()


_PHASE_OPERATIONS = {
    Phase.BEFORE_INSERT: Operation.INSERT,
    Phase.BEFORE_UPDATE: Operation.UPDATE,
    Phase.BEFORE_DELETE: Operation.DELETE,
    Phase.AFTER_INSERT: Operation.INSERT,
    Phase.AFTER_UPDATE: Operation.UPDATE,
    Phase.AFTER_DELETE: Operation.DELETE,
    Phase.AFTER_UNDELETE: Operation.UNDELETE,
}


@dataclass(frozen=True)
class PhaseContext:
    """Snapshot of what phase is executing and on which records.

    Attributes:
        phase: The lifecycle phase being emitted
        is_executing: True only inside a genuine host emission window
        new: Current record batch (ordered, opaque record handles)
        old: Previous record batch, update phases only, paired with new by position
    """

    phase: Phase
    is_executing: bool
    new: Sequence[Any]
    old: Sequence[Any] | None = None

    def __post_init__(self) -> None:
        if self.phase.has_previous:
            if self.old is None:
                raise ValueError(f"{self.phase.value} requires the previous record batch")
            if len(self.old) != len(self.new):
                raise ValueError(
                    f"{self.phase.value} batches differ in length: "
                    f"{len(self.new)} current, {len(self.old)} previous"
                )
        elif self.old is not None:
            raise ValueError(f"{self.phase.value} does not take a previous record batch")


def handler_identity(handler: Any) -> str:
    """Return the stable identity used to key bypass and loop state.

    Handler types may declare a ``name`` class attribute; otherwise the
    fully-qualified name of the concrete type is used. Instance attributes
    never change the identity, except the one CallbackHandler fixes at
    construction. Identity strings and handler types are accepted as-is so
    callers can address a handler they do not hold an instance of.
    """
    if isinstance(handler, str):
        return handler
    if not isinstance(handler, type):
        bound = getattr(handler, "_trigger_identity", None)
        if isinstance(bound, str) and bound:
            return bound
    handler_type = handler if isinstance(handler, type) else type(handler)
    declared = getattr(handler_type, "name", None)
    if isinstance(declared, str) and declared:
        return declared
    return f"{handler_type.__module__}.{handler_type.__qualname__}"
