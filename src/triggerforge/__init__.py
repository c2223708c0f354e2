"""triggerforge — record lifecycle event dispatch."""

__version__ = "0.1.0"
