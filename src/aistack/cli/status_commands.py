"""CLI command for inspecting stack status."""

import click
from rich.table import Table

from aistack.stack.health import HealthState, check_all, health_targets
from aistack.stack.status import ServiceSnapshot

from .common import CONTEXT_SETTINGS, console, get_manager, print_start_hints

_AI_LABELS = {
    "postgres": "PostgreSQL",
    "n8n": "n8n Workflows",
    "ollama": "Ollama LLM",
    "qdrant": "Qdrant Vector DB",
    "openwebui": "Open WebUI",
}


def _status_icon(running: bool) -> str:
    return "[green]✅[/green]" if running else "[red]●[/red]"


def _service_table(snapshot: ServiceSnapshot) -> Table:
    table = Table(title="AI Stack")
    table.add_column("", width=3)
    table.add_column("Service", style="bold")
    table.add_column("State")
    for slot, running in snapshot.ai.as_dict().items():
        table.add_row(
            _status_icon(running),
            _AI_LABELS[slot],
            "running" if running else "stopped",
        )
    return table


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option(
    "-d", "--detailed", is_flag=True, help="Show container, resource and disk details."
)
@click.pass_context
def status(ctx, detailed):
    """Show service status and health checks."""
    manager = get_manager(ctx)
    reporter = manager.reporter

    console.print()
    reporter.emit("header", "Local AI Stack Status")
    console.print()

    snapshot = manager.aggregator.snapshot()

    console.print(_service_table(snapshot))
    console.print(
        f"  [cyan]Status: {snapshot.ai_running_count}/{len(_AI_LABELS)} services running[/cyan]"
    )
    console.print()

    reporter.emit("info", "Supabase:")
    project = manager.linked_project()
    label = "Supabase Stack"
    if project:
        label += f" (Linked to {project.name})"
    console.print(f"  {_status_icon(snapshot.supabase.running)}  {label}")
    if snapshot.supabase.running:
        console.print(f"  [cyan]Containers: {snapshot.supabase.container_count} running[/cyan]")
        if project:
            console.print(f"  [cyan]Project ID: {project.project_id}[/cyan]")
            console.print(f"  [cyan]Org ID: {project.org_id}[/cyan]")
    console.print()

    targets = health_targets(snapshot)
    if targets:
        reporter.emit("info", "Health Checks:")
        for result in check_all(targets, timeout=manager.settings.health_timeout):
            if result.state == HealthState.REACHABLE:
                console.print(f"  [green]✅[/green]  {result.label} ({result.url})")
            elif result.state == HealthState.DEGRADED:
                console.print(
                    f"  [yellow]⚠[/yellow]  {result.label} ({result.url}) - "
                    f"[yellow]HTTP {result.status_code}[/yellow]"
                )
            else:
                console.print(
                    f"  [red]●[/red]  {result.label} ({result.url}) - [red]Not responding[/red]"
                )
        console.print()

    if detailed:
        reporter.emit("info", "Detailed Information:")
        console.print()
        tables = manager.detailed_tables()
        for key, title in (
            ("ai", "AI Stack Containers:"),
            ("supabase", "Supabase Containers:"),
            ("resources", "Resource Usage:"),
            ("system", "Docker System Usage:"),
        ):
            if tables.get(key):
                reporter.emit("info", title)
                console.print(tables[key], markup=False, highlight=False)
                console.print()

    if snapshot.any_running:
        reporter.emit("success", "Stack is operational!")
        console.print()
        reporter.emit("info", "Quick actions:")
        console.print("  URLs:  🌐 aistack urls")
        console.print("  Logs:  📦 aistack logs")
        console.print("  Stop:  🛑 aistack stop")
    else:
        reporter.emit("warning", "No services are currently running")
        console.print()
        reporter.emit("info", "Start services:")
        print_start_hints()
    console.print()
