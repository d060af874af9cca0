"""Output utilities for CLI commands with clear intent.

user_output is for messages meant for humans and goes to stderr, keeping
stdout free for anything a script might parse.
"""

from typing import TYPE_CHECKING, Any

import click
from rich.panel import Panel
from rich.text import Text

if TYPE_CHECKING:
    from flutter_sync.core.reconciler import SyncReport
    from flutter_sync.core.status import Status


def user_output(message: Any = "", nl: bool = True) -> None:
    """Print a human-facing message to stderr."""
    click.echo(message, nl=nl, err=True)


def format_duration(seconds: float) -> str:
    """Format a duration as '45s' or '1m 23s'."""
    total = int(round(seconds))
    minutes, secs = divmod(total, 60)
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def render_status(status: "Status", title: str = "Status") -> None:
    """Print a status snapshot, one labelled line per field."""
    user_output(click.style(title, bold=True))
    for label, value in status.display_lines():
        styled = click.style(value, fg="cyan") if value != "None" else click.style(value, dim=True)
        user_output(f"  {label}: {styled}")


def format_sync_summary(report: "SyncReport", total_duration: float) -> Panel:
    """Format final summary box with outcome, target, versions and errors.

    Args:
        report: Report returned by the reconciler
        total_duration: Total execution time in seconds

    Returns:
        Rich Panel with formatted summary
    """
    from flutter_sync.core.reconciler import SyncState

    lines: list[Text] = []

    if report.state is SyncState.NO_ACTION_NEEDED:
        lines.append(Text("✅ Already in sync", style="green"))
    elif report.ok:
        lines.append(Text("✅ Status: Success", style="green"))
    else:
        lines.append(Text("❌ Status: Failed", style="red"))

    if report.desired is not None:
        lines.append(Text(f"🎯 Target: {report.desired}"))
    lines.append(Text(f"📦 Flutter version: {report.status.sdk_version or 'None'}"))
    lines.append(Text(f"⏱  Duration: {format_duration(total_duration)}"))

    if report.steps:
        executed = sum(1 for step in report.steps if step.success)
        lines.append(Text(f"🔧 Steps: {executed}/{len(report.steps)} succeeded"))

    if report.residual_mismatch:
        lines.append(Text(""))
        lines.append(
            Text(
                f"Flutter reports {report.status.sdk_version or 'no version'} "
                f"instead of {report.desired}",
                style="yellow",
            )
        )

    if report.error:
        lines.append(Text(""))
        lines.append(Text("Error:", style="red bold"))
        lines.append(Text(report.error, style="red"))

    content = Text("\n").join(lines)
    title = "Sync Complete" if report.ok else "Sync Failed"
    return Panel(content, title=title, border_style="green" if report.ok else "red", padding=(1, 2))
