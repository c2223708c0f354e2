"""Dispatcher for triggerforge.

Decides whether a handler runs for an emitted phase, and routes the phase to
exactly one handler method:

1. Outside a host emission window -> ContextError
2. Handler identity bypassed -> no-op success
3. Loop ceiling exceeded -> LoopLimitExceeded
4. Otherwise the phase method runs once with the phase's batch(es)

Faults raised by handler methods propagate unchanged.
"""

import logging
from enum import Enum

from triggerforge.triggers.context import UnitOfWork
from triggerforge.triggers.errors import ContextError
from triggerforge.triggers.handler import PhaseHandler
from triggerforge.triggers.types import PhaseContext, handler_identity

logger = logging.getLogger(__name__)


class DispatchOutcome(Enum):
    """Successful end state of a run() call."""

    COMPLETED = "completed"
    BYPASSED = "bypassed"


class Dispatcher:
    """Routes emitted phases to handlers within one unit of work."""

    def __init__(self, unit_of_work: UnitOfWork):
        self.unit_of_work = unit_of_work

    def run(self, handler: PhaseHandler, context: PhaseContext) -> DispatchOutcome:
        """Dispatch one phase of one batch to a handler.

        Args:
            handler: Any value implementing the phase methods
            context: Phase and record batch(es) supplied by the host

        Returns:
            COMPLETED if the phase method ran, BYPASSED if the handler is bypassed

        Raises:
            ContextError: If the host is not inside an emission window
            LoopLimitExceeded: If the handler's loop ceiling is exceeded
        """
        identity = handler_identity(handler)

        if not context.is_executing:
            raise ContextError(identity)

        if self.unit_of_work.bypasses.is_bypassed(identity):
            logger.info("Handler '%s' bypassed for %s", identity, context.phase.value)
            return DispatchOutcome.BYPASSED

        self.unit_of_work.loop_guard.increment(identity)

        logger.debug(
            "Dispatching %s to '%s' (%d record(s))",
            context.phase.value,
            identity,
            len(context.new),
        )
        method = getattr(handler, context.phase.method_name)
        if context.phase.has_previous:
            method(context.new, context.old)
        else:
            method(context.new)

        return DispatchOutcome.COMPLETED
