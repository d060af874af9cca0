import click

from flutter_sync.cli.output import render_status, user_output
from flutter_sync.core.context import SyncContext


@click.command("status")
@click.pass_obj
def status_cmd(ctx: SyncContext) -> None:
    """Show the project's declared Flutter version and the installed SDK."""
    user_output(f"Project directory: {ctx.cwd}")
    status = ctx.reconciler().refresh_status()
    render_status(status)
