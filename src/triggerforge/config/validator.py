"""
config/validator.py — JSON Schema validation for bypass YAML files.

Usage:
    from triggerforge.config.validator import validate_bypass_file

    for issue in validate_bypass_file(Path("bypasses.yaml")):
        print(issue)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

logger = logging.getLogger(__name__)

_SCHEMAS_DIR = Path(__file__).parent / "schemas"

BYPASS_SCHEMA = "bypass.schema.json"


@dataclass
class ValidationIssue:
    """A single validation finding for a bypass YAML file."""

    file: Path
    message: str
    path: str = ""          # location within the document, e.g. "bypasses[0]"
    severity: str = "error" # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


def _load_schema(name: str) -> dict[str, Any]:
    schema_path = _SCHEMAS_DIR / name
    with schema_path.open() as fh:
        return json.load(fh)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def validate_bypass_file(yaml_path: Path) -> list[ValidationIssue]:
    """
    Validate a bypass YAML file against the bypass schema.

    Duplicate developer names are reported as warnings.

    Returns:
        A list of :class:`ValidationIssue` objects (empty on success).
    """
    try:
        with yaml_path.open() as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return [ValidationIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if raw is None:
        return [
            ValidationIssue(file=yaml_path, message="File is empty or contains only whitespace")
        ]

    validator = Draft202012Validator(_load_schema(BYPASS_SCHEMA))
    issues = [
        ValidationIssue(file=yaml_path, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(raw), key=lambda e: [str(p) for p in e.path])
    ]
    if issues:
        return issues

    seen: set[str] = set()
    for i, entry in enumerate(raw["bypasses"]):
        name = entry["developerName"]
        if name in seen:
            issues.append(
                ValidationIssue(
                    file=yaml_path,
                    message=f"Duplicate developerName '{name}'",
                    path=f"bypasses[{i}]",
                    severity="warning",
                )
            )
        seen.add(name)

    logger.debug("Validated %s: %d issue(s)", yaml_path, len(issues))
    return issues
