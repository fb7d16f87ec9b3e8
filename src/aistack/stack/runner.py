"""External command execution for compose, docker and supabase calls."""

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Optional

from aistack.errors import CommandError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Captured result of a finished command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner:
    """Runs external commands via subprocess.

    Commands run to completion one at a time. Nothing here times out
    except where a caller passes an explicit timeout.
    """

    def __init__(self, cwd: Optional[str] = None) -> None:
        self.cwd = os.path.expanduser(cwd) if cwd else None

    def _check_cwd(self) -> None:
        if self.cwd and not os.path.isdir(self.cwd):
            raise CommandError(f"Project directory not found: {self.cwd}")

    def run(self, cmd: list[str], timeout: Optional[float] = None) -> CommandResult:
        """Run a command and capture its output.

        Raises:
            CommandError: If the binary or the working directory is missing.
        """
        self._check_cwd()
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            proc = subprocess.run(
                cmd,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except FileNotFoundError:
            raise CommandError(f"Command not found: {cmd[0]}") from None
        except subprocess.TimeoutExpired as e:
            raise CommandError(f"Command timed out after {e.timeout}s: {' '.join(cmd)}") from e
        except OSError as e:
            raise CommandError(f"Failed to run {cmd[0]}: {e}") from e

        return CommandResult(
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )

    def check(self, cmd: list[str]) -> CommandResult:
        """Run a command that is expected to succeed.

        Raises:
            CommandError: If the command is missing or exits non-zero.
        """
        result = self.run(cmd)
        if not result.ok:
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            raise CommandError(
                f"'{' '.join(cmd)}' failed: {detail}", returncode=result.returncode
            )
        return result

    def stream(self, cmd: list[str]) -> int:
        """Run a command attached to this terminal and return its exit code.

        On Ctrl+C the child is stopped before KeyboardInterrupt propagates,
        so the caller can end the whole operation.

        Raises:
            CommandError: If the binary or the working directory is missing.
        """
        self._check_cwd()
        logger.debug(f"Streaming: {' '.join(cmd)}")
        try:
            proc = subprocess.Popen(cmd, cwd=self.cwd)
        except FileNotFoundError:
            raise CommandError(f"Command not found: {cmd[0]}") from None
        except OSError as e:
            raise CommandError(f"Failed to run {cmd[0]}: {e}") from e

        try:
            return proc.wait()
        except KeyboardInterrupt:
            logger.debug(f"Interrupted, stopping PID {proc.pid}")
            proc.terminate()
            try:
                proc.wait(timeout=10)
            except subprocess.TimeoutExpired:
                proc.kill()
                proc.wait()
            raise
