"""CLI command for stopping the stack."""

import click

from .common import CONTEXT_SETTINGS, console, fail_unknown_target, get_manager, print_start_hints

STOP_TARGETS = ["all", "ai", "supabase"]


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("target", default="all")
@click.option(
    "-f", "--force", is_flag=True, help="Also remove volumes and orphaned containers."
)
@click.pass_context
def stop(ctx, target, force):
    """Stop the AI stack and/or Supabase.

    TARGET is one of: all (default), ai, supabase. The AI stack is torn
    down with the profile it is currently running.
    """
    if target not in STOP_TARGETS:
        fail_unknown_target(target, STOP_TARGETS)

    manager = get_manager(ctx)
    reporter = manager.reporter

    try:
        console.print()
        reporter.emit("header", "Stopping Local AI Stack")
        console.print()

        reporter.emit("info", "Checking current status...")
        snapshot = manager.aggregator.snapshot()
        if not snapshot.any_running:
            reporter.emit("info", "No services are currently running")
            reporter.emit("success", "Nothing to stop")
            return
        if snapshot.ai_running:
            reporter.emit("info", "AI stack services are running")
        if snapshot.supabase.running:
            reporter.emit(
                "info",
                f"Supabase is running ({snapshot.supabase.container_count} containers)",
            )

        console.print()
        reporter.emit("info", f"Target: {target}")
        if force:
            reporter.emit("warning", "Mode: Force stop with cleanup")
        console.print()

        ai_ok = True
        supabase_ok = True
        if target in ("all", "ai"):
            ai_ok = manager.stop_ai(force)
            console.print()
        if target == "supabase" or (target == "all" and ai_ok):
            supabase_ok = manager.stop_supabase()
    except KeyboardInterrupt:
        console.print()
        reporter.emit("warning", "Stop interrupted")
        raise SystemExit(0)

    console.print()
    if not (ai_ok and supabase_ok):
        reporter.emit("error", "Some services failed to stop properly")
        reporter.emit("warning", "You may need to check and stop them manually")
        raise SystemExit(1)

    reporter.emit("success", "All services stopped successfully")
    console.print()
    reporter.emit("info", "To start again:")
    print_start_hints()
