"""Prerequisite checks run before starting the stack."""

from dataclasses import dataclass
from pathlib import Path

from aistack.errors import CommandError

from .runner import CommandRunner


@dataclass
class CheckResult:
    """Result of a single preflight check."""

    name: str
    passed: bool
    message: str


def check_docker_running(runner: CommandRunner) -> CheckResult:
    """Check that the docker daemon answers ``docker info``."""
    try:
        result = runner.run(["docker", "info"], timeout=15)
    except CommandError as e:
        return CheckResult(name="Docker running", passed=False, message=str(e))
    if result.ok:
        return CheckResult(name="Docker running", passed=True, message="Available")
    return CheckResult(
        name="Docker running",
        passed=False,
        message="Docker is not running or not installed",
    )


def check_required_files(project_dir: Path, required: list[str]) -> CheckResult:
    """Check that the compose project files are present."""
    missing = [name for name in required if not (project_dir / name).exists()]
    if missing:
        return CheckResult(
            name="Environment files",
            passed=False,
            message=f"Missing required files: {', '.join(missing)}",
        )
    return CheckResult(name="Environment files", passed=True, message="Present")


def run_preflight(
    runner: CommandRunner,
    project_dir: Path,
    required: list[str],
) -> list[CheckResult]:
    return [
        check_docker_running(runner),
        check_required_files(project_dir, required),
    ]
