"""Runtime configuration for triggerforge."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from triggerforge.config.loader import (
    BypassSetting,
    active_bypass_names,
    file_bypass_lookup,
    load_bypass_settings,
)
from triggerforge.triggers.host import DEFAULT_BATCH_SIZE

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class TriggerConfig:
    """Host integration configuration.

    Attributes:
        bypass_file: YAML file of declarative bypasses, or None
        batch_size: Records per host invocation
        log_level: Logging level name
    """

    bypass_file: Path | None = None
    batch_size: int = DEFAULT_BATCH_SIZE
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> TriggerConfig:
        """Create config from environment variables.

        - TRIGGERFORGE_BYPASS_FILE: path to the bypass YAML file
        - TRIGGERFORGE_BATCH_SIZE: records per host invocation (default 200)
        - TRIGGERFORGE_LOG_LEVEL: logging level name (default WARNING)

        Raises:
            ValueError: If the batch size is not a positive integer
        """
        bypass_file = os.environ.get("TRIGGERFORGE_BYPASS_FILE")
        raw_batch_size = os.environ.get("TRIGGERFORGE_BATCH_SIZE", str(DEFAULT_BATCH_SIZE))
        try:
            batch_size = int(raw_batch_size)
        except ValueError:
            raise ValueError(
                f"TRIGGERFORGE_BATCH_SIZE must be an integer, got {raw_batch_size!r}"
            ) from None
        if batch_size <= 0:
            raise ValueError(f"TRIGGERFORGE_BATCH_SIZE must be positive, got {batch_size}")

        return cls(
            bypass_file=Path(bypass_file) if bypass_file else None,
            batch_size=batch_size,
            log_level=os.environ.get("TRIGGERFORGE_LOG_LEVEL", "WARNING").upper(),
        )


def configure_logging(level: str = "WARNING") -> None:
    """Configure root logging for command-line use."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


__all__ = [
    "BypassSetting",
    "LOG_FORMAT",
    "TriggerConfig",
    "active_bypass_names",
    "configure_logging",
    "file_bypass_lookup",
    "load_bypass_settings",
]
