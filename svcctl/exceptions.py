"""Exception types raised by svcctl."""

from typing import Any, List, Optional


class SvcctlError(Exception):
    """Base class for all svcctl errors."""

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class ConfigIOError(SvcctlError, OSError):
    """A configuration or manifest file could not be opened, read or written."""

    def __init__(self, message: str, detail: Optional[str] = None, path: Optional[str] = None):
        super().__init__(message, detail)
        self.path = path


class SerializationError(SvcctlError):
    """A value could not be encoded to or decoded from JSON or YAML.

    Attributes:
        partial: Zero-valued or partially converted result, if one was produced
    """

    def __init__(self, message: str, detail: Optional[str] = None, partial: Any = None):
        super().__init__(message, detail)
        self.partial = partial


class CommandError(SvcctlError):
    """An external command exited non-zero, failed to spawn or timed out.

    Attributes:
        command: Command line that was run
        returncode: Exit code, or None if the process never completed
        output: Combined stdout and stderr captured so far
    """

    def __init__(self, message: str, command: List[str], returncode: Optional[int] = None,
                 output: str = "", detail: Optional[str] = None):
        super().__init__(message, detail)
        self.command = command
        self.returncode = returncode
        self.output = output
