"""Service status aggregation for the AI stack and Supabase."""

import logging
from dataclasses import dataclass, field, fields
from typing import Optional

from aistack.config import StackSettings

from .containers import list_container_names
from .fallback import or_else
from .parsers import ComposeServiceState, parse_compose_ps
from .runner import CommandRunner

logger = logging.getLogger(__name__)

AI_SERVICE_NAMES = ["postgres", "n8n", "ollama", "qdrant", "openwebui"]
# Compose service names that map to a slot by exact match
_EXACT_SLOTS = {
    "postgres": "postgres",
    "n8n": "n8n",
    "qdrant": "qdrant",
    "open-webui": "openwebui",
}


@dataclass(frozen=True)
class AIServices:
    postgres: bool = False
    n8n: bool = False
    ollama: bool = False
    qdrant: bool = False
    openwebui: bool = False

    def as_dict(self) -> dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class SupabaseStatus:
    running: bool = False
    container_count: int = 0

    def __post_init__(self) -> None:
        if self.container_count < 0:
            raise ValueError("container_count must be >= 0")
        if not self.running and self.container_count != 0:
            raise ValueError("container_count must be 0 when Supabase is not running")


@dataclass(frozen=True)
class ServiceSnapshot:
    """Point-in-time view of which services are running."""

    ai: AIServices = field(default_factory=AIServices)
    supabase: SupabaseStatus = field(default_factory=SupabaseStatus)

    @property
    def ai_running(self) -> bool:
        return any(self.ai.as_dict().values())

    @property
    def ai_running_count(self) -> int:
        return sum(self.ai.as_dict().values())

    @property
    def any_running(self) -> bool:
        return self.ai_running or self.supabase.running


def slot_for_service(service: str) -> Optional[str]:
    """Map a compose service name to its AI-stack slot.

    Any name containing "ollama" counts as the ollama slot so GPU
    variants (ollama-gpu, ollama-gpu-amd) are recognized.
    """
    if service in ("postgres", "n8n", "qdrant"):
        return _EXACT_SLOTS[service]
    if "ollama" in service:
        return "ollama"
    if service == "open-webui":
        return "openwebui"
    return None


def fold_ai_services(states: list[ComposeServiceState]) -> AIServices:
    """Fold compose service records into the fixed AI-stack slots."""
    running = {}
    for state in states:
        if not state.running:
            continue
        slot = slot_for_service(state.service)
        if slot is None:
            logger.debug(f"Ignoring unrecognized service '{state.service}'")
            continue
        running[slot] = True
    return AIServices(**running)


class StatusAggregator:
    """Builds a ServiceSnapshot from live compose, docker and supabase queries."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        settings: Optional[StackSettings] = None,
    ) -> None:
        self.settings = settings or StackSettings()
        self.runner = runner or CommandRunner(self.settings.project_dir or None)

    def compose_states(self) -> list[ComposeServiceState]:
        """Per-service state reported by ``docker compose ps``.

        Raises:
            CommandError: If compose is missing or fails.
        """
        cmd = [*self.settings.compose_command, "ps", "--format", "json"]
        result = self.runner.check(cmd)
        return parse_compose_ps(result.stdout)

    def supabase_running(self) -> bool:
        """Whether ``supabase status`` reports the local stack as up."""
        result = self.runner.run([*self.settings.supabase_command, "status"])
        return result.ok

    def supabase_container_count(self) -> int:
        return len(list_container_names(self.runner, self.settings.supabase_prefix))

    def ai_services(self) -> AIServices:
        states = or_else([], self.compose_states, "Compose status query")
        return fold_ai_services(states)

    def supabase_status(self) -> SupabaseStatus:
        if not or_else(False, self.supabase_running, "Supabase status query"):
            return SupabaseStatus()
        count = or_else(0, self.supabase_container_count, "Supabase container listing")
        return SupabaseStatus(running=True, container_count=count)

    def snapshot(self) -> ServiceSnapshot:
        """Query everything and return a snapshot. Never raises."""
        try:
            return ServiceSnapshot(ai=self.ai_services(), supabase=self.supabase_status())
        except Exception as e:
            logger.error(f"Error checking service status: {e}")
            return ServiceSnapshot()
