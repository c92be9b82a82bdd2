"""
PydanticAI integration for shellgate.

Provides helpers to create PydanticAI-compatible tools.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

try:
    from pydantic_ai import RunContext
except ImportError:
    raise ImportError(
        "PydanticAI integration requires 'pydantic-ai'. "
        "Install with `pip install shellgate[pydantic-ai]`"
    )

from shellgate.errors import SecurityViolation

if TYPE_CHECKING:
    from shellgate._types import ShellToolkit


def create_shell_tool(toolkit: ShellToolkit) -> Callable:
    """
    Create a PydanticAI tool function for policy-gated shell execution.

    Returns an async function taking the run context that can be registered
    with an Agent.

    Example:
        >>> from pydantic_ai import Agent
        >>> shell_tool = create_shell_tool(create_shell_toolkit())
        >>> agent = Agent("openai:gpt-4o", tools=[shell_tool])
    """

    async def shell(
        ctx: RunContext[Any],
        command: str,
        working_dir: str | None = None,
        timeout_seconds: int | None = None,
    ) -> str:
        """
        Execute a shell command.
        Only commands allowed by the security policy will run.
        """
        try:
            result = await toolkit.run(
                command,
                working_dir=working_dir,
                timeout_seconds=timeout_seconds,
            )
        except SecurityViolation as e:
            return f"Denied: {e.reason}"
        return result.to_json()

    shell.__doc__ = f"{shell.__doc__}\n{toolkit.tool_prompt}"
    return shell
