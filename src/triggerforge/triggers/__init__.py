"""triggerforge record lifecycle dispatch.

Routes host-emitted lifecycle phases to handler methods:
- beforeInsert / beforeUpdate / beforeDelete: before the batch is written
- afterInsert / afterUpdate / afterDelete / afterUndelete: after the write

Cross-cutting controls live on the UnitOfWork: bypasses (skip a handler or a
named code section) and loop ceilings (stop runaway re-entrant runs).

Usage:
    from triggerforge.triggers import Dispatcher, TriggerHandler, UnitOfWork

    class ContactHandler(TriggerHandler):
        def after_update(self, new, old):
            ...

    uow = UnitOfWork()
    uow.set_max_loop_count(ContactHandler, 2)
    Dispatcher(uow).run(ContactHandler(), context)
"""

from triggerforge.triggers.bypass import BypassLookup, BypassRegistry
from triggerforge.triggers.context import UnitOfWork
from triggerforge.triggers.dispatcher import Dispatcher, DispatchOutcome
from triggerforge.triggers.errors import ContextError, LoopLimitExceeded, TriggerError
from triggerforge.triggers.handler import (
    Batch,
    CallbackHandler,
    PhaseHandler,
    TriggerHandler,
)
from triggerforge.triggers.host import DEFAULT_BATCH_SIZE, RecordHost, batch_count
from triggerforge.triggers.loop_guard import LoopGuard
from triggerforge.triggers.markers import SeenSet
from triggerforge.triggers.types import Operation, Phase, PhaseContext, handler_identity

__all__ = [
    "Batch",
    "BypassLookup",
    "BypassRegistry",
    "CallbackHandler",
    "ContextError",
    "DEFAULT_BATCH_SIZE",
    "DispatchOutcome",
    "Dispatcher",
    "LoopGuard",
    "LoopLimitExceeded",
    "Operation",
    "Phase",
    "PhaseContext",
    "PhaseHandler",
    "RecordHost",
    "SeenSet",
    "TriggerError",
    "TriggerHandler",
    "UnitOfWork",
    "batch_count",
    "handler_identity",
]
