"""Stack operations: start, stop, inspect and tail logs.

One StackManager is created per CLI invocation. It holds no state
beyond its collaborators.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from aistack.config import StackSettings
from aistack.errors import CommandError, ServiceNotFoundError
from aistack.output import Reporter

from .compose import (
    ComposeInvocation,
    build_compose_command,
    compose_logs_command,
    docker_logs_command,
    down_command,
    up_command,
)
from .containers import list_container_names
from .fallback import or_else
from .parsers import LinkedProject, parse_container_names, parse_projects_list
from .preflight import CheckResult, run_preflight
from .profiles import AUTO_GPU, GPU, NO_PROFILE, Profile, detect_active_profile, resolve_profile
from .runner import CommandRunner
from .status import StatusAggregator

logger = logging.getLogger(__name__)

AI_LOG_SERVICES = ["n8n", "postgres", "ollama", "qdrant", "open-webui"]


class StackManager:
    """Drives the compose project and the local Supabase stack."""

    def __init__(
        self,
        reporter: Reporter,
        settings: Optional[StackSettings] = None,
        runner: Optional[CommandRunner] = None,
    ) -> None:
        self.reporter = reporter
        self.settings = settings or StackSettings()
        self.runner = runner or CommandRunner(self.settings.project_dir or None)
        self.aggregator = StatusAggregator(self.runner, self.settings)

    @property
    def project_dir(self) -> Path:
        if self.settings.project_dir:
            return Path(self.settings.project_dir).expanduser()
        return Path.cwd()

    def compose(
        self, profile: Union[Profile, str] = NO_PROFILE, tunnel: bool = False
    ) -> ComposeInvocation:
        return build_compose_command(
            profile,
            tunnel=tunnel,
            base=tuple(self.settings.compose_command),
            tunnel_profile=self.settings.tunnel_profile,
        )

    def _supabase(self, *args: str) -> list[str]:
        return [*self.settings.supabase_command, *args]

    # --- Preflight ---

    def preflight(self) -> list[CheckResult]:
        return run_preflight(self.runner, self.project_dir, self.settings.required_files)

    # --- Start ---

    def start_ai(self, profile: str = "cpu", tunnel: bool = False) -> bool:
        """Bring up the compose project. Returns False on failure."""
        self.reporter.emit("header", f"Starting AI Stack ({profile} profile)...")
        if profile in (AUTO_GPU, GPU):
            self.reporter.emit("info", "Auto-detecting GPU...")
        resolved = resolve_profile(profile)
        if profile in (AUTO_GPU, GPU):
            self.reporter.emit("info", f"Detected profile: {resolved.value}")

        cmd = up_command(self.compose(resolved, tunnel))
        self.reporter.emit("info", f"Running: {' '.join(cmd)}")
        try:
            code = self.runner.stream(cmd)
        except CommandError as e:
            self.reporter.emit("error", f"Failed to start AI stack: {e}")
            return False

        if code != 0:
            self.reporter.emit("error", f"Failed to start AI stack: exit code {code}")
            return False
        self.reporter.emit("success", "AI Stack started successfully")
        return True

    def start_supabase(self) -> bool:
        """Start Supabase unless it is already running."""
        self.reporter.emit("header", "Starting Supabase...")
        if or_else(False, self.aggregator.supabase_running, "Supabase status query"):
            self.reporter.emit("success", "Supabase is already running")
            return True

        self.reporter.emit("info", "Initializing Supabase...")
        try:
            code = self.runner.stream(self._supabase("start"))
        except CommandError as e:
            self.reporter.emit("error", f"Failed to start Supabase: {e}")
            self.reporter.emit("warning", "Make sure the Supabase CLI is installed: npm i -g supabase")
            return False

        if code != 0:
            self.reporter.emit("error", f"Failed to start Supabase: exit code {code}")
            return False
        self.reporter.emit("success", "Supabase started successfully")
        return True

    # --- Stop ---

    def stop_ai(self, force: bool = False) -> bool:
        """Tear down the compose project using the profile it runs with."""
        self.reporter.emit("header", "Stopping AI Stack...")
        profile = detect_active_profile(
            self.runner,
            gpu_marker=self.settings.gpu_worker_marker,
            amd_marker=self.settings.amd_marker,
        )
        logger.info(f"Active profile: {profile.value}")

        cmd = down_command(self.compose(profile, tunnel=True), force=force)
        if force:
            self.reporter.emit("warning", "Force mode: removing volumes and orphaned containers")
        self.reporter.emit("info", f"Running: {' '.join(cmd)}")
        try:
            code = self.runner.stream(cmd)
        except CommandError as e:
            self.reporter.emit("error", f"Failed to stop AI stack: {e}")
            return False

        if code != 0:
            self.reporter.emit("error", f"Failed to stop AI stack: exit code {code}")
            return False
        self.reporter.emit("success", "AI Stack stopped successfully")
        return True

    def stop_supabase(self) -> bool:
        """Stop Supabase if it is running."""
        self.reporter.emit("header", "Stopping Supabase...")
        if not or_else(False, self.aggregator.supabase_running, "Supabase status query"):
            self.reporter.emit("info", "Supabase is not running")
            return True

        try:
            code = self.runner.stream(self._supabase("stop"))
        except CommandError as e:
            self.reporter.emit("error", f"Failed to stop Supabase: {e}")
            return False

        if code != 0:
            self.reporter.emit("error", f"Failed to stop Supabase: exit code {code}")
            return False
        self.reporter.emit("success", "Supabase stopped successfully")
        return True

    # --- Inspection ---

    def linked_project(self) -> Optional[LinkedProject]:
        def query() -> Optional[LinkedProject]:
            result = self.runner.check(self._supabase("projects", "list"))
            return parse_projects_list(result.stdout)

        return or_else(None, query, "Supabase project lookup")

    def compose_services(self) -> list[str]:
        """Service names declared in the compose file."""
        def query() -> list[str]:
            result = self.runner.check(self.compose().extend("config", "--services"))
            return parse_container_names(result.stdout)

        return or_else([], query, "Compose service listing")

    def supabase_containers(self) -> list[str]:
        return or_else(
            [],
            lambda: list_container_names(self.runner, self.settings.supabase_prefix),
            "Supabase container listing",
        )

    def _table(self, cmd: list[str], what: str) -> Optional[str]:
        def query() -> str:
            return self.runner.check(cmd).stdout

        output = or_else(None, query, what)
        return output if output and output.strip() else None

    def detailed_tables(self) -> dict[str, Optional[str]]:
        """Human-readable tables for ``status --detailed``."""
        prefix = self.settings.supabase_prefix
        return {
            "ai": self._table(self.compose().extend("ps", "--format", "table"), "Compose ps"),
            "supabase": self._table(
                [
                    "docker", "ps",
                    "--filter", f"name={prefix}",
                    "--format", "table {{.Names}}\t{{.Image}}\t{{.Status}}\t{{.Ports}}",
                ],
                "Supabase container table",
            ),
            "resources": self._table(
                [
                    "docker", "stats", "--no-stream",
                    "--format", "table {{.Name}}\t{{.CPUPerc}}\t{{.MemUsage}}",
                ],
                "Container stats",
            ),
            "system": self._table(["docker", "system", "df"], "Docker system df"),
        }

    # --- Logs ---

    def resolve_log_command(
        self,
        target: str,
        follow: bool = False,
        tail: Optional[Union[int, str]] = None,
        since: Optional[str] = None,
    ) -> Optional[list[str]]:
        """Build the log command for a target.

        Returns None when the target is Supabase and none of its
        containers are running.

        Raises:
            ServiceNotFoundError: If no service or container matches.
        """
        if tail is None:
            tail = self.settings.default_tail

        if target in ("all", "ai"):
            return compose_logs_command(self.compose(), follow, tail, since)

        if target == "supabase":
            containers = self.supabase_containers()
            if not containers:
                return None
            return docker_logs_command(containers[0], follow, tail, since)

        if target in AI_LOG_SERVICES or "ollama" in target:
            return compose_logs_command(self.compose(), follow, tail, since, service=target)

        if target.startswith("supabase"):
            return docker_logs_command(target, follow, tail, since)

        matches = or_else(
            [],
            lambda: list_container_names(self.runner, target),
            f"Container lookup for '{target}'",
        )
        if matches:
            return docker_logs_command(matches[0], follow, tail, since)

        raise ServiceNotFoundError(f"Service '{target}' not found")

    def show_logs(
        self,
        target: str,
        follow: bool = False,
        tail: Optional[Union[int, str]] = None,
        since: Optional[str] = None,
    ) -> int:
        """Stream logs for a target and return the exit code."""
        cmd = self.resolve_log_command(target, follow, tail, since)
        if cmd is None:
            self.reporter.emit("warning", "No Supabase containers found")
            return 0
        logger.debug(f"Log command: {' '.join(cmd)}")
        return self.runner.stream(cmd)
