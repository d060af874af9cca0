import logging
import os
from pathlib import Path

import click

from flutter_sync.cli.commands.status import status_cmd
from flutter_sync.cli.commands.sync import sync_cmd
from flutter_sync.cli.ensure import Ensure
from flutter_sync.core.config import ConfigError
from flutter_sync.core.context import create_context
from flutter_sync.core.shell.abc import UnsupportedPlatformError

# Enable debug logging if FLUTTER_SYNC_DEBUG environment variable is set
if os.getenv("FLUTTER_SYNC_DEBUG"):
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="flutter-sync")
@click.option(
    "-d",
    "--working-directory",
    "working_directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project directory containing pubspec.yaml (default: current directory).",
)
@click.pass_context
def cli(ctx: click.Context, working_directory: Path | None) -> None:
    """Keep the installed Flutter SDK in sync with your project."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is not None:
        return
    try:
        ctx.obj = create_context(cwd=working_directory)
    except (UnsupportedPlatformError, ConfigError) as e:
        Ensure.fail(str(e))


cli.add_command(status_cmd)
cli.add_command(sync_cmd)


def main() -> None:
    """CLI entry point used by the `flutter-sync` console script."""
    cli()
