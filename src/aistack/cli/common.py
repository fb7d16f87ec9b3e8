"""Helpers shared by the aistack CLI commands."""

import click
from rich.console import Console

from aistack.config import StackSettings
from aistack.output import ConsoleReporter
from aistack.stack.manager import StackManager
from aistack.stack.status import ServiceSnapshot
from aistack.stack.urls import endpoints_for

console = Console()

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_ICONS = {"ai": "🧠", "supabase": "🗄️ "}


def get_settings(ctx: click.Context) -> StackSettings:
    obj = ctx.find_root().obj or {}
    return obj.get("settings") or StackSettings()


def get_manager(ctx: click.Context) -> StackManager:
    return StackManager(ConsoleReporter(console), get_settings(ctx))


def fail_unknown_target(target: str, valid: list[str]) -> None:
    reporter = ConsoleReporter(console)
    reporter.emit("error", f"Unknown target: {target}")
    reporter.emit("warning", f"Valid targets: {', '.join(valid)}")
    raise SystemExit(1)


def print_urls(stack: str = "all", snapshot: ServiceSnapshot | None = None) -> None:
    """Print service URLs, limited to running services when a snapshot is given."""
    reporter = ConsoleReporter(console)
    running = snapshot.ai.as_dict() if snapshot else None
    for name, title in (("ai", "AI Services:"), ("supabase", "Supabase Services:")):
        if stack not in ("all", name):
            continue
        if snapshot is not None:
            if name == "ai" and not snapshot.ai_running:
                continue
            if name == "supabase" and not snapshot.supabase.running:
                continue

        reporter.emit("info", title)
        for endpoint in endpoints_for(name):
            if running is not None and endpoint.slot and not running.get(endpoint.slot):
                continue
            console.print(f"  {_ICONS[name]} {endpoint.label + ':':<20}[cyan]{endpoint.url}[/cyan]")
        console.print()


def print_start_hints() -> None:
    console.print("  🚀 aistack start")
    console.print("  🚀 aistack start ai")
    console.print("  🚀 aistack start supabase")
