"""
Exception hierarchy for shellgate.

Authorization failures are raised before any process is spawned. Execution
outcomes (timeouts, non-zero exits, launch failures) are never raised here;
they are recorded on the ExecutionResult instead.
"""

from __future__ import annotations

from typing import Sequence


class ShellGateError(Exception):
    """Base class for all shellgate errors."""


class ConfigurationError(ShellGateError, ValueError):
    """Raised for invalid programmatic configuration."""


class SecurityViolation(ShellGateError):
    """
    Raised when a command is denied by the security policy.

    Attributes:
        command: The command that was denied.
        reason: Human-readable reason, suitable for returning to an agent.
    """

    def __init__(self, reason: str, command: str = "") -> None:
        self.command = command
        self.reason = reason
        super().__init__(f"Security violation: {reason}")


class EmptyCommand(SecurityViolation):
    """The request carried no command."""

    def __init__(self, command: str = "") -> None:
        super().__init__("command is required", command)


class MetacharactersRejected(SecurityViolation):
    """The command contains shell control operators and they are not allowed."""

    def __init__(self, command: str = "") -> None:
        super().__init__(
            "command contains shell metacharacters; "
            "set allow_shell_metacharacters to true to override",
            command,
        )


class BlockedPattern(SecurityViolation):
    """The command matched an entry of the block-list."""

    def __init__(self, pattern: str, command: str = "") -> None:
        self.pattern = pattern
        super().__init__(
            f"command blocked by security policy: matches blocked pattern '{pattern}'",
            command,
        )


class NotAllowed(SecurityViolation):
    """The command matched none of the allow-list entries."""

    def __init__(self, allowed_patterns: Sequence[str], command: str = "") -> None:
        self.allowed_patterns = list(allowed_patterns)
        super().__init__(
            f"command not in allowed list. Allowed patterns: {self.allowed_patterns}",
            command,
        )


class WorkingDirNotAllowed(SecurityViolation):
    """The resolved working directory is outside every allowed root."""

    def __init__(self, working_dir: str, allowed_dirs: Sequence[str], command: str = "") -> None:
        self.working_dir = working_dir
        self.allowed_dirs = list(allowed_dirs)
        super().__init__(
            f"working directory '{working_dir}' is not under an allowed directory: "
            f"{self.allowed_dirs}",
            command,
        )


class WorkingDirResolutionFailed(SecurityViolation):
    """No working directory could be determined."""

    def __init__(self, detail: str, command: str = "") -> None:
        super().__init__(f"failed to get working directory: {detail}", command)


class CommandError(ShellGateError):
    """Raised by ExecutionResult.raise_for_status() on a non-clean outcome."""
