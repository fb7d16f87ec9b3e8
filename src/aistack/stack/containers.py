"""Container listing via the docker CLI."""

from typing import Optional

from .parsers import parse_container_names
from .runner import CommandRunner


def list_container_names(
    runner: CommandRunner,
    name_filter: Optional[str] = None,
) -> list[str]:
    """List names of running containers, optionally filtered by name.

    Raises:
        CommandError: If docker is missing or the listing fails.
    """
    cmd = ["docker", "ps"]
    if name_filter:
        cmd.extend(["--filter", f"name={name_filter}"])
    cmd.extend(["--format", "{{.Names}}"])
    result = runner.check(cmd)
    return parse_container_names(result.stdout)
