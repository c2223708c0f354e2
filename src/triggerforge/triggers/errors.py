"""Errors raised by the trigger dispatcher."""


class TriggerError(Exception):
    """Base class for dispatcher failures."""
    pass


class ContextError(TriggerError):
    """run() was invoked outside a host emission window."""

    def __init__(self, identity: str):
        self.identity = identity
        super().__init__(
            f"Trigger handler '{identity}' called outside of trigger execution"
        )


class LoopLimitExceeded(TriggerError):
    """A handler ran more times than its configured ceiling allows.

    Attributes:
        identity: Handler identity whose ceiling was exceeded
        max_count: The configured ceiling
        count: The count reached by the failing invocation
    """

    def __init__(self, identity: str, max_count: int, count: int):
        self.identity = identity
        self.max_count = max_count
        self.count = count
        super().__init__(
            f"Maximum loop count of {max_count} reached in {identity} "
            f"(invocation {count})"
        )
