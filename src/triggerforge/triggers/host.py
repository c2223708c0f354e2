"""In-memory host integration for triggerforge.

Stands in for the platform's event emission: it splits a mutation into
batches, opens an emission window, and invokes the dispatcher once per phase
per batch for every handler registered on the record type. Handler code may
call back into the host to perform nested mutations; those emit
synchronously, exactly as a platform would.
"""

import logging
import math
from collections.abc import Sequence
from typing import Any

from triggerforge.triggers.context import UnitOfWork
from triggerforge.triggers.dispatcher import Dispatcher
from triggerforge.triggers.handler import PhaseHandler
from triggerforge.triggers.types import Operation, Phase, PhaseContext, handler_identity

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 200


def batch_count(total: int, batch_size: int = DEFAULT_BATCH_SIZE) -> int:
    """Number of batches a mutation of ``total`` records is split into."""
    if batch_size <= 0:
        raise ValueError("batch_size must be positive")
    return math.ceil(total / batch_size) if total > 0 else 0


class RecordHost:
    """Emits lifecycle phases for mutations on registered record types.

    Handlers for a record type run in registration order for each phase.
    """

    def __init__(self, unit_of_work: UnitOfWork, batch_size: int = DEFAULT_BATCH_SIZE):
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.unit_of_work = unit_of_work
        self.batch_size = batch_size
        self.dispatcher = Dispatcher(unit_of_work)
        self._handlers: dict[str, list[PhaseHandler]] = {}
        self._depth = 0

    def register(self, record_type: str, handler: PhaseHandler) -> None:
        """Register a handler for a record type.

        Idempotent — registering the same identity twice is a no-op.
        """
        handlers = self._handlers.setdefault(record_type, [])
        identity = handler_identity(handler)
        if any(handler_identity(h) == identity for h in handlers):
            return
        handlers.append(handler)

    def handlers_for(self, record_type: str) -> list[PhaseHandler]:
        return list(self._handlers.get(record_type, []))

    @property
    def is_executing(self) -> bool:
        """True while an emission is in progress (including nested ones)."""
        return self._depth > 0

    def insert(self, record_type: str, records: Sequence[Any]) -> None:
        self._mutate(Operation.INSERT, record_type, records)

    def update(
        self, record_type: str, records: Sequence[Any], previous: Sequence[Any]
    ) -> None:
        if len(records) != len(previous):
            raise ValueError("update requires one previous record per record")
        self._mutate(Operation.UPDATE, record_type, records, previous)

    def delete(self, record_type: str, records: Sequence[Any]) -> None:
        self._mutate(Operation.DELETE, record_type, records)

    def undelete(self, record_type: str, records: Sequence[Any]) -> None:
        self._mutate(Operation.UNDELETE, record_type, records)

    def _mutate(
        self,
        operation: Operation,
        record_type: str,
        records: Sequence[Any],
        previous: Sequence[Any] | None = None,
    ) -> None:
        handlers = self.handlers_for(record_type)
        logger.debug(
            "%s of %d %s record(s) in %d batch(es)",
            operation.value,
            len(records),
            record_type,
            batch_count(len(records), self.batch_size),
        )
        for start in range(0, len(records), self.batch_size):
            new = records[start : start + self.batch_size]
            old = previous[start : start + self.batch_size] if previous is not None else None
            for phase in operation.phases:
                self._emit(handlers, phase, new, old)

    def _emit(
        self,
        handlers: list[PhaseHandler],
        phase: Phase,
        new: Sequence[Any],
        old: Sequence[Any] | None,
    ) -> None:
        context = PhaseContext(
            phase=phase,
            is_executing=True,
            new=new,
            old=old if phase.has_previous else None,
        )
        self._depth += 1
        try:
            for handler in handlers:
                self.dispatcher.run(handler, context)
        finally:
            self._depth -= 1
