"""Shared fixtures for aistack tests."""

import pytest

from aistack.errors import CommandError
from aistack.stack.runner import CommandResult, CommandRunner


class FakeRunner(CommandRunner):
    """CommandRunner that answers from a table instead of spawning processes.

    Keys are the space-joined command line. Values are CommandResult
    instances or exceptions to raise. Unknown commands behave like a
    missing binary. A KeyboardInterrupt value passes through ``stream``
    the way the real runner re-raises Ctrl+C after stopping the child.
    """

    COMPOSE_PS = "docker compose ps --format json"
    SUPABASE_STATUS = "npx supabase status"
    SUPABASE_CONTAINERS = "docker ps --filter name=supabase_ --format {{.Names}}"
    GPU_CONTAINERS = "docker ps --filter name=ollama-gpu --format {{.Names}}"

    def __init__(self, responses=None, stream_code=0):
        super().__init__()
        self.responses = dict(responses or {})
        self.stream_code = stream_code
        self.calls = []
        self.streamed = []

    @staticmethod
    def ok(stdout=""):
        return CommandResult(returncode=0, stdout=stdout)

    @staticmethod
    def failed(code=1, stderr="error"):
        return CommandResult(returncode=code, stderr=stderr)

    def run(self, cmd, timeout=None):
        key = " ".join(cmd)
        self.calls.append(key)
        response = self.responses.get(key)
        if response is None:
            raise CommandError(f"Command not found: {cmd[0]}")
        if isinstance(response, BaseException):
            raise response
        return response

    def stream(self, cmd):
        key = " ".join(cmd)
        self.streamed.append(key)
        response = self.responses.get(key)
        if isinstance(response, BaseException):
            raise response
        return self.stream_code


@pytest.fixture
def make_runner():
    """Factory for FakeRunner instances."""
    return FakeRunner
