"""CLI command for listing service URLs."""

import click

from .common import CONTEXT_SETTINGS, console, fail_unknown_target, get_manager, print_start_hints, print_urls

URL_TARGETS = ["all", "ai", "supabase"]


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("target", default="all")
@click.pass_context
def urls(ctx, target):
    """Show URLs for the services that are currently running."""
    if target not in URL_TARGETS:
        fail_unknown_target(target, URL_TARGETS)

    manager = get_manager(ctx)
    reporter = manager.reporter

    console.print()
    reporter.emit("header", "Service URLs:")
    console.print()

    snapshot = manager.aggregator.snapshot()
    if not snapshot.any_running:
        reporter.emit("warning", "No services are currently running")
        console.print()
        reporter.emit("info", "Start services to see their URLs:")
        print_start_hints()
        console.print()
        return

    print_urls(target, snapshot)

    reporter.emit("info", "Quick actions:")
    console.print("  Status: 📊 aistack status")
    console.print("  Logs:   📦 aistack logs")
    console.print("  Stop:   🛑 aistack stop")
    console.print()
