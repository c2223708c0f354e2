"""Bypass CLI commands — validate and list declarative bypasses."""

from pathlib import Path

import click

from triggerforge.config import TriggerConfig, load_bypass_settings
from triggerforge.config.validator import validate_bypass_file
from triggerforge.triggers.host import batch_count


def _resolve_bypass_file(path: Path | None) -> Path:
    """Use the given path, falling back to TRIGGERFORGE_BYPASS_FILE."""
    if path is not None:
        return path
    configured = TriggerConfig.from_env().bypass_file
    if configured is None:
        click.echo(
            "Error: no bypass file given and TRIGGERFORGE_BYPASS_FILE is not set",
            err=True,
        )
        raise SystemExit(1)
    if not configured.exists():
        click.echo(f"Error: bypass file {configured} does not exist", err=True)
        raise SystemExit(1)
    return configured


@click.group()
def bypass():
    """Declarative bypass commands."""
    pass


@bypass.command()
@click.argument("path", required=False, type=click.Path(exists=True, path_type=Path))
def validate(path: Path | None):
    """Validate a bypass YAML file against its JSON Schema."""
    path = _resolve_bypass_file(path)
    issues = validate_bypass_file(path)

    errors = [i for i in issues if i.severity == "error"]
    warnings = [i for i in issues if i.severity == "warning"]

    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    if errors:
        click.echo(
            click.style(
                f"\n{len(errors)} error(s) found"
                + (f", {len(warnings)} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    settings = load_bypass_settings(path)
    active = sum(1 for s in settings if s.active)
    click.echo(
        click.style(
            f"Bypass file is valid ({len(settings)} entries, {active} active).",
            fg="green",
            bold=True,
        )
    )


@bypass.command("list")
@click.argument("path", required=False, type=click.Path(exists=True, path_type=Path))
@click.option(
    "--all",
    "show_all",
    is_flag=True,
    default=False,
    help="Show inactive entries too.",
)
def list_cmd(path: Path | None, show_all: bool):
    """List the names a bypass file starts out bypassing."""
    path = _resolve_bypass_file(path)
    try:
        settings = load_bypass_settings(path)
    except ValueError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)

    shown = settings if show_all else [s for s in settings if s.active]
    if not shown:
        click.echo("No active bypasses.")
        return

    for setting in sorted(shown, key=lambda s: s.developer_name):
        if show_all:
            state = "active" if setting.active else "inactive"
            click.echo(f"  {setting.developer_name} ({state})")
        else:
            click.echo(f"  {setting.developer_name}")


@click.command()
@click.argument("total", type=click.IntRange(min=0))
@click.option(
    "--batch-size",
    type=click.IntRange(min=1),
    default=None,
    help="Records per host invocation (defaults to TRIGGERFORGE_BATCH_SIZE or 200).",
)
@click.option(
    "--phases",
    type=click.IntRange(min=1),
    default=2,
    show_default=True,
    help="Phases emitted per batch (before + after = 2).",
)
def batches(total: int, batch_size: int | None, phases: int):
    """Show how many handler runs a mutation of TOTAL records produces.

    Use the result to size loop ceilings.
    """
    if batch_size is None:
        batch_size = TriggerConfig.from_env().batch_size
    count = batch_count(total, batch_size)
    click.echo(f"{total} record(s) in batches of {batch_size}: {count} batch(es)")
    click.echo(f"Handler runs per operation: {count * phases}")
