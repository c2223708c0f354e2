"""Load declarative bypass settings from YAML files.

A bypass file lists handler identities and code section names that start
the unit of work bypassed:

    bypasses:
      - developerName: app.handlers.AccountHandler
        active: true
      - developerName: sendWelcomeEmail
        active: false
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from triggerforge.triggers.bypass import BypassLookup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BypassSetting:
    """One declarative bypass entry.

    Attributes:
        developer_name: Handler identity or section name
        active: Whether the name starts out bypassed
        description: Human-readable note
    """

    developer_name: str
    active: bool = True
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BypassSetting":
        """Create BypassSetting from YAML dict."""
        name = data.get("developerName")
        if not isinstance(name, str) or not name:
            raise ValueError(f"Bypass entry is missing developerName: {data!r}")
        active = data.get("active", True)
        if not isinstance(active, bool):
            raise ValueError(f"Bypass '{name}' has a non-boolean active flag: {active!r}")
        return cls(
            developer_name=name,
            active=active,
            description=data.get("description", ""),
        )


def load_bypass_settings(path: Path) -> list[BypassSetting]:
    """Load bypass settings from a YAML file.

    Returns an empty list if the file does not exist or is empty.

    Raises:
        ValueError: If the document is not a mapping with a ``bypasses`` list
    """
    if not path.exists():
        logger.warning("Bypass file %s not found, no configured bypasses", path)
        return []

    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return []
    if not isinstance(data, dict) or not isinstance(data.get("bypasses", []), list):
        raise ValueError(f"{path}: expected a mapping with a 'bypasses' list")

    entries = data.get("bypasses") or []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError(f"{path}: bypass entries must be mappings, got {entry!r}")
    return [BypassSetting.from_dict(entry) for entry in entries]


def active_bypass_names(settings: list[BypassSetting]) -> set[str]:
    """Names of the settings marked active."""
    return {s.developer_name for s in settings if s.active}


def file_bypass_lookup(path: Path) -> BypassLookup:
    """Build a lookup that reads the bypass file when first invoked.

    The BypassRegistry invokes it at most once per unit of work.
    """

    def lookup() -> set[str]:
        names = active_bypass_names(load_bypass_settings(path))
        logger.debug("Loaded %d active bypass(es) from %s", len(names), path)
        return names

    return lookup
