"""CLI command for viewing service logs."""

import click

from aistack.errors import AIStackError

from .common import CONTEXT_SETTINGS, console, get_manager


def _list_services(manager) -> None:
    reporter = manager.reporter
    reporter.emit("info", "Available services:")
    console.print()

    services = manager.compose_services()
    if services:
        reporter.emit("info", "AI Stack:")
        for service in services:
            console.print(f"  [cyan]{service}[/cyan]")
        console.print()

    prefix = manager.settings.supabase_prefix
    containers = manager.supabase_containers()
    if containers:
        reporter.emit("info", "Supabase:")
        for container in containers:
            short = container.removeprefix(prefix).split("_")[0]
            console.print(f"  [cyan]{short}[/cyan] ({container})")
        console.print()


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("target", default="all")
@click.option("-f", "--follow", is_flag=True, help="Follow log output.")
@click.option(
    "-t", "--tail", default=None, help="Number of lines to show from the end (default: 50)."
)
@click.option("-s", "--since", default=None, help="Show logs since a time (e.g. 2h, 30m).")
@click.pass_context
def logs(ctx, target, follow, tail, since):
    """Show logs for the stack or a single service.

    TARGET is one of: all (default), ai, supabase, list, or a service
    name such as n8n, ollama or qdrant. Press Ctrl+C to stop following.
    """
    manager = get_manager(ctx)
    reporter = manager.reporter
    if tail is None:
        tail = str(manager.settings.default_tail)

    console.print()
    if target == "list":
        _list_services(manager)
        return

    if target == "all":
        reporter.emit("header", f"Viewing logs from all services (last {tail} lines)")
    elif target == "ai":
        reporter.emit("header", f"Viewing AI stack logs (last {tail} lines)")
    elif target == "supabase":
        reporter.emit("header", "Viewing Supabase logs")
    else:
        reporter.emit("header", f"Viewing {target} logs (last {tail} lines)")
    if follow:
        reporter.emit("info", "Following logs in real-time... (Ctrl+C to stop)")
    console.print()

    try:
        code = manager.show_logs(target, follow=follow, tail=tail, since=since)
    except KeyboardInterrupt:
        console.print()
        reporter.emit("info", "Log viewing stopped")
        return
    except AIStackError as e:
        reporter.emit("error", f"Error: {e}")
        console.print()
        reporter.emit("info", "Available targets: all, ai, supabase, [service-name]")
        reporter.emit("info", "Use 'aistack logs list' to see available services")
        raise SystemExit(1)

    if code != 0:
        reporter.emit("error", f"Log command exited with code {code}")
        raise SystemExit(1)
