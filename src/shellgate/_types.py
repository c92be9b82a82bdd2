"""
Core type definitions for shellgate.

Uses dataclasses and enums for lightweight, typed request/result objects.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping

from shellgate.errors import CommandError

if TYPE_CHECKING:
    from shellgate.api import CommandGate
    from shellgate.security.policy import SecurityPolicy


class SecurityLevel(Enum):
    """Preset security posture for the gate."""

    PERMISSIVE = "permissive"  # Block-list only, metacharacters allowed
    STANDARD = "standard"  # Built-in allow-list and block-list
    PARANOID = "paranoid"  # Caller-supplied allow-list only


class Shell(Enum):
    """Shell used to run a command."""

    AUTO = "auto"
    SH = "sh"
    BASH = "bash"
    ZSH = "zsh"
    CMD = "cmd"
    POWERSHELL = "powershell"
    PWSH = "pwsh"

    @classmethod
    def parse(cls, value: Shell | str | None) -> Shell:
        """Map a request value to a Shell, falling back to AUTO for unknown names."""
        if isinstance(value, Shell):
            return value
        if not value:
            return cls.AUTO
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.AUTO


class Outcome(Enum):
    """How an executed command ended."""

    SUCCESS = "success"
    TIMEOUT = "timeout"
    EXIT_NON_ZERO = "exit_non_zero"
    LAUNCH_FAILED = "launch_failed"


@dataclass(frozen=True, slots=True)
class CommandRequest:
    """A single command invocation as received from the host caller."""

    command: str
    working_dir: str | None = None
    shell: Shell | None = None
    timeout_seconds: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CommandRequest:
        """
        Build a request from the host request shape.

        Accepts both camelCase and snake_case keys.
        """
        working_dir = data.get("workingDir") or data.get("working_dir") or None
        timeout = data.get("timeoutSeconds")
        if timeout in (None, ""):
            timeout = data.get("timeout_seconds")
        try:
            timeout_seconds = int(timeout) if timeout not in (None, "") else None
        except (TypeError, ValueError, OverflowError):
            # Treated like a missing timeout: the policy default applies
            timeout_seconds = None
        shell = data.get("shell")
        return cls(
            command=str(data.get("command") or ""),
            working_dir=str(working_dir) if working_dir is not None else None,
            shell=Shell.parse(shell) if shell else None,
            timeout_seconds=timeout_seconds,
        )


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Immutable result of one command execution."""

    command: str
    working_dir: str
    stdout: str
    stderr: str
    exit_code: int
    error: str | None = None
    outcome: Outcome = Outcome.SUCCESS

    @property
    def success(self) -> bool:
        """Return True if the command exited cleanly."""
        return self.outcome is Outcome.SUCCESS

    @property
    def timed_out(self) -> bool:
        return self.outcome is Outcome.TIMEOUT

    def raise_for_status(self) -> None:
        """Raise CommandError if the command did not exit cleanly."""
        if not self.success:
            raise CommandError(
                f"Command failed with exit code {self.exit_code}: "
                f"{self.error or self.stderr or self.stdout}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Return the response document; 'error' is present only on failure."""
        doc: dict[str, Any] = {
            "command": self.command,
            "working_dir": self.working_dir,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "exit_code": self.exit_code,
        }
        if self.error is not None:
            doc["error"] = self.error
        return doc

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


@dataclass
class ShellToolkit:
    """
    Toolkit returned by create_shell_tool(), ready to hand to an AI agent.

    Attributes:
        gate: The command gate that authorizes and runs commands.
        tool_prompt: Generated prompt describing the active policy for the LLM.
        security: The security policy in effect when the toolkit was built.
    """

    gate: CommandGate
    tool_prompt: str
    security: SecurityPolicy

    async def run(
        self,
        command: str,
        *,
        working_dir: str | None = None,
        shell: Shell | str | None = None,
        timeout_seconds: int | None = None,
    ) -> ExecutionResult:
        """Authorize and execute a command through the gate."""
        request = CommandRequest(
            command=command,
            working_dir=working_dir,
            shell=Shell.parse(shell) if shell else None,
            timeout_seconds=timeout_seconds,
        )
        return await self.gate.evaluate(request)

    async def close(self) -> None:
        """Release the underlying sandbox."""
        await self.gate.close()

    async def __aenter__(self) -> ShellToolkit:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
