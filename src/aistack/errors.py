"""Exception hierarchy for aistack."""


class AIStackError(Exception):
    """Base class for errors surfaced to the operator."""


class CommandError(AIStackError):
    """An external tool is missing or failed where success was required."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class ServiceNotFoundError(AIStackError):
    """A log target does not match any known service or container."""


class ConfigError(AIStackError):
    """Raised when configuration loading or validation fails."""
