"""
Abstract base class for sandbox implementations.

A sandbox only runs commands; authorization happens in the CommandGate
before a sandbox is ever called.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shellgate._types import ExecutionResult, Shell


class Sandbox(ABC):
    """
    Abstract base for all sandbox implementations.

    Provides a consistent interface for executing already-authorized commands.
    """

    @abstractmethod
    async def execute(
        self,
        command: str,
        *,
        working_dir: str,
        shell: Shell | str | None = None,
        timeout: int = 60,
    ) -> ExecutionResult:
        """
        Execute a command and return the result.

        Args:
            command: The command string to run.
            working_dir: Absolute directory to run the command in.
            shell: Shell to run it under.
            timeout: Maximum seconds before the process is killed.

        Returns:
            ExecutionResult with stdout, stderr, exit_code and error.
            Process failures are reported in the result, never raised.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """
        Clean up sandbox resources.

        Idempotent - safe to call multiple times.
        """
        ...

    async def __aenter__(self) -> Sandbox:
        """Enter async context manager."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Exit async context manager, cleaning up resources."""
        await self.close()
