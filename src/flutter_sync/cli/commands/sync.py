"""CLI command entry point for sync."""

import dataclasses
import logging
import time

import click
from rich.console import Console

from flutter_sync.cli.ensure import Ensure
from flutter_sync.cli.output import format_sync_summary, render_status, user_output
from flutter_sync.core.context import SyncContext
from flutter_sync.core.reconciler import SyncState
from flutter_sync.core.shell.dry_run import DryRunShell

logger = logging.getLogger(__name__)


@click.command("sync")
@click.option(
    "-v",
    "--desired-version",
    "desired_version",
    default=None,
    help="Channel (stable, beta, main, master) or git reference to switch to. "
    "Overrides environment.flutter from pubspec.yaml.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show the commands that would change the SDK without running them.",
)
@click.pass_obj
def sync_cmd(ctx: SyncContext, desired_version: str | None, dry_run: bool) -> None:
    """Switch the Flutter SDK to the version the project expects.

    The target is --desired-version when given, otherwise environment.flutter
    from pubspec.yaml. A channel name runs `flutter channel`; anything else is
    checked out in the SDK's git repository, followed by doctor, clean and
    pub upgrade (and pod install on macOS).

    Steps run in order and stop at the first failure. Nothing is rolled back.
    """
    if dry_run and not ctx.dry_run:
        ctx = dataclasses.replace(ctx, shell=DryRunShell(ctx.shell), dry_run=True)

    start_time = time.time()
    user_output(f"Project directory: {ctx.cwd}")
    if desired_version is not None and desired_version.strip():
        user_output(f"Desired version: {desired_version.strip()}")

    reconciler = ctx.reconciler()
    status = reconciler.refresh_status()
    render_status(status, title="Current status")

    report = reconciler.sync(status, desired_version)
    logger.debug("Sync finished: state=%s, steps=%d", report.state.name, len(report.steps))

    Ensure.invariant(
        report.state is not SyncState.UNAVAILABLE, report.reason or "sync unavailable"
    )

    if report.state is SyncState.DONE:
        render_status(report.status, title="Updated status")
        if report.residual_mismatch:
            user_output(
                click.style("Warning: ", fg="yellow")
                + f"Flutter reports {report.status.sdk_version or 'no version'}, "
                f"expected {report.desired}"
            )

    Console(stderr=True).print(format_sync_summary(report, time.time() - start_time))

    if not report.ok:
        raise SystemExit(1)
