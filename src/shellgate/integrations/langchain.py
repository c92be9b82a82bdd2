"""LangChain integration for shellgate."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from shellgate.errors import SecurityViolation

if TYPE_CHECKING:
    from shellgate._types import ShellToolkit

HAS_LANGCHAIN = False
_StructuredTool: Any = None

try:
    import langchain_core.tools

    _StructuredTool = langchain_core.tools.StructuredTool
    HAS_LANGCHAIN = True
except ImportError:
    pass


def create_langchain_tools(toolkit: ShellToolkit) -> dict[str, Any]:
    """
    Create LangChain tools from a ShellToolkit.

    Args:
        toolkit: The shell toolkit to wrap.

    Returns:
        Dictionary of LangChain StructuredTool instances.

    Raises:
        ImportError: If langchain-core is not installed.

    Example:
        >>> toolkit = create_shell_toolkit(agent_dir="./agents/dev")
        >>> tools = create_langchain_tools(toolkit)
        >>> agent = create_react_agent(llm, list(tools.values()))
    """
    if not HAS_LANGCHAIN:
        raise ImportError(
            "LangChain integration requires langchain-core. "
            "Install with: pip install shellgate[langchain]"
        )

    async def arun_shell(
        command: str,
        working_dir: str | None = None,
        shell: str | None = None,
        timeout_seconds: int | None = None,
    ) -> str:
        """Run a shell command through the security policy."""
        try:
            result = await toolkit.run(
                command,
                working_dir=working_dir,
                shell=shell,
                timeout_seconds=timeout_seconds,
            )
        except SecurityViolation as e:
            return f"Denied: {e.reason}"
        return result.to_json()

    def run_shell(
        command: str,
        working_dir: str | None = None,
        shell: str | None = None,
        timeout_seconds: int | None = None,
    ) -> str:
        """Run a shell command through the security policy."""
        return asyncio.run(arun_shell(command, working_dir, shell, timeout_seconds))

    shell_tool = _StructuredTool.from_function(
        func=run_shell,
        coroutine=arun_shell,
        name="shell",
        description=f"Execute a shell command. {toolkit.tool_prompt}",
    )

    return {"shell": shell_tool}
