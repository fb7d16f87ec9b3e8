"""aistack CLI - Main entry point."""

import logging
from pathlib import Path

import click

from aistack import __version__
from aistack.config import load_settings
from aistack.errors import ConfigError

from .common import CONTEXT_SETTINGS, console

_LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
_handler: logging.Handler | None = None


def _setup_logging(verbose: bool) -> None:
    """Attach one stderr handler to the root logger."""
    global _handler
    root_logger = logging.getLogger()
    if _handler is not None:
        root_logger.removeHandler(_handler)

    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root_logger.addHandler(_handler)
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="aistack")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to aistack.yaml (default: ./aistack.yaml if present).",
)
@click.pass_context
def cli(ctx, verbose, config_path):
    """aistack - manage the local AI stack and Supabase.

    Starts, stops, inspects and tails logs for the n8n / Ollama / Qdrant /
    Open WebUI compose project and the local Supabase instance.
    """
    _setup_logging(verbose)
    try:
        settings = load_settings(Path(config_path) if config_path else None)
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    ctx.obj = {"settings": settings}


from .logs_commands import logs  # noqa: E402
from .start_commands import start  # noqa: E402
from .status_commands import status  # noqa: E402
from .stop_commands import stop  # noqa: E402
from .urls_commands import urls  # noqa: E402

cli.add_command(start)
cli.add_command(stop)
cli.add_command(status)
cli.add_command(logs)
cli.add_command(urls)


if __name__ == "__main__":
    cli()
