"""triggerforge CLI entry point."""

import click

from triggerforge.config import TriggerConfig, configure_logging


@click.group()
@click.option(
    "--log-level",
    default=None,
    help="Logging level (defaults to TRIGGERFORGE_LOG_LEVEL or WARNING).",
)
def cli(log_level: str | None):
    """triggerforge — record lifecycle dispatch CLI."""
    configure_logging(log_level or TriggerConfig.from_env().log_level)


# Register subcommand groups
from triggerforge.cli.bypass_cmd import batches, bypass  # noqa: E402

cli.add_command(bypass)
cli.add_command(batches)
