"""Argument vectors for docker compose and docker logs invocations.

Everything here is pure: same inputs, same command, no I/O.
"""

from typing import Optional, Union

from .profiles import NO_PROFILE, Profile

COMPOSE_BASE = ("docker", "compose")
DEFAULT_TUNNEL_PROFILE = "cloudflare"


class ComposeInvocation(tuple):
    """Ordered compose arguments: program tokens plus profile selections.

    Callers add a subcommand and its flags with ``extend``.
    """

    def extend(self, *args: str) -> list[str]:
        return [*self, *args]


def build_compose_command(
    profile: Union[Profile, str],
    tunnel: bool = False,
    base: tuple[str, ...] = COMPOSE_BASE,
    tunnel_profile: str = DEFAULT_TUNNEL_PROFILE,
) -> ComposeInvocation:
    """Build the compose base command for a profile and feature toggles.

    Args:
        profile: Concrete profile, or ``"none"`` to select no profile.
        tunnel: Also enable the tunnel feature profile.
        base: Program tokens (``docker compose`` by default).
        tunnel_profile: Name of the tunnel feature profile.
    """
    value = profile.value if isinstance(profile, Profile) else profile
    cmd = list(base)
    if value != NO_PROFILE:
        cmd.extend(["--profile", value])
    if tunnel:
        cmd.extend(["--profile", tunnel_profile])
    return ComposeInvocation(cmd)


def up_command(invocation: ComposeInvocation) -> list[str]:
    return invocation.extend("up", "-d")


def down_command(invocation: ComposeInvocation, force: bool = False) -> list[str]:
    args = ["down"]
    if force:
        args.extend(["--volumes", "--remove-orphans"])
    return invocation.extend(*args)


def _log_flags(follow: bool, tail: Optional[Union[int, str]], since: Optional[str]) -> list[str]:
    flags = []
    if follow:
        flags.append("--follow")
    if tail is not None and str(tail) != "":
        flags.extend(["--tail", str(tail)])
    if since:
        flags.extend(["--since", since])
    return flags


def compose_logs_command(
    invocation: ComposeInvocation,
    follow: bool = False,
    tail: Optional[Union[int, str]] = None,
    since: Optional[str] = None,
    service: Optional[str] = None,
) -> list[str]:
    """``docker compose logs`` for the whole project or one service."""
    args = ["logs", *_log_flags(follow, tail, since)]
    if service:
        args.append(service)
    return invocation.extend(*args)


def docker_logs_command(
    container: str,
    follow: bool = False,
    tail: Optional[Union[int, str]] = None,
    since: Optional[str] = None,
) -> list[str]:
    """``docker logs`` for a single container outside the compose project."""
    return ["docker", "logs", *_log_flags(follow, tail, since), container]
