"""
Main entry points: the CommandGate engine and the create_shell_toolkit factory.

CommandGate is the single narrow interface hosts call: it takes a
CommandRequest and returns an ExecutionResult, raising SecurityViolation
when the request is denied.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Literal, Mapping, Optional, Union

from shellgate._types import CommandRequest, ExecutionResult, SecurityLevel, ShellToolkit
from shellgate.errors import ConfigurationError
from shellgate.prompt import generate_tool_prompt
from shellgate.sandbox._base import Sandbox
from shellgate.sandbox.local import LocalSandbox
from shellgate.security.paths import resolve_working_dir
from shellgate.security.policy import SecurityPolicy
from shellgate.settings import load_policy

logger = logging.getLogger(__name__)

PolicySource = Optional[Union[SecurityPolicy, SecurityLevel, Callable[[], SecurityPolicy]]]


class CommandGate:
    """
    Authorizes and executes shell commands.

    Each request is checked against a fresh policy snapshot: shell
    metacharacters, then the block-list, then the allow-list, then the
    working directory. Only then is the command handed to the sandbox.

    Example:
        >>> gate = CommandGate(security=SecurityPolicy.standard())
        >>> result = await gate.evaluate(CommandRequest("git status", working_dir="."))
        >>> print(result.to_json())
    """

    def __init__(
        self,
        *,
        security: PolicySource = None,
        sandbox: Sandbox | None = None,
        agent_dir: str | None = None,
    ) -> None:
        """
        Initialize the gate.

        Args:
            security: A fixed policy, a preset level, or a callable returning
                the policy for each request. Defaults to loading the settings
                file for agent_dir on every request.
            sandbox: Execution backend. Defaults to LocalSandbox.
            agent_dir: Agent directory, used for settings lookup and as the
                fallback working directory.
        """
        self.agent_dir = agent_dir
        self._sandbox = sandbox or LocalSandbox()
        self._policy_source = _policy_loader(security, agent_dir)

    def current_policy(self) -> SecurityPolicy:
        """Return the policy snapshot that the next request will use."""
        return self._policy_source()

    async def evaluate(self, request: CommandRequest | Mapping[str, Any]) -> ExecutionResult:
        """
        Authorize a request and run it.

        Args:
            request: A CommandRequest or the raw host request mapping.

        Returns:
            The ExecutionResult. Timeouts, non-zero exits and launch failures
            are reported in the result.

        Raises:
            SecurityViolation: If the command or working directory is denied.
        """
        if not isinstance(request, CommandRequest):
            request = CommandRequest.from_dict(request)

        policy = self.current_policy()
        policy.authorize(request.command)
        working_dir = resolve_working_dir(
            request.working_dir, policy, agent_dir=self.agent_dir, command=request.command
        )
        timeout = policy.effective_timeout(request.timeout_seconds)

        logger.debug("Authorized %r in %s", request.command, working_dir)
        return await self._sandbox.execute(
            request.command,
            working_dir=working_dir,
            shell=request.shell,
            timeout=timeout,
        )

    def evaluate_sync(self, request: CommandRequest | Mapping[str, Any]) -> ExecutionResult:
        """Blocking variant of evaluate() for callers without an event loop."""
        return asyncio.run(self.evaluate(request))

    async def close(self) -> None:
        await self._sandbox.close()

    async def __aenter__(self) -> CommandGate:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()


def _policy_loader(security: PolicySource, agent_dir: str | None) -> Callable[[], SecurityPolicy]:
    if security is None:
        return lambda: load_policy(agent_dir)
    if isinstance(security, SecurityLevel):
        policy = SecurityPolicy.from_level(security)
        return lambda: policy
    if isinstance(security, SecurityPolicy):
        return lambda: security
    if callable(security):
        return security
    raise ConfigurationError(f"Unsupported security setting: {security!r}")


def create_shell_toolkit(
    *,
    security: PolicySource = None,
    sandbox: Sandbox | Literal["local"] = "local",
    agent_dir: str | None = None,
    extra_instructions: str | None = None,
) -> ShellToolkit:
    """
    Create a policy-gated shell tool for AI agents.

    Args:
        security: Policy, preset level, or per-request policy loader.
                  Defaults to the settings file for agent_dir, falling back
                  to the built-in standard policy.
        sandbox: Sandbox backend. Currently only "local" is supported.
                 Pass a Sandbox instance for custom implementations.
        agent_dir: Agent directory for settings lookup and default working dir.
        extra_instructions: Additional context for the LLM prompt.

    Returns:
        ShellToolkit with a run() method and a tool prompt.

    Example:
        >>> toolkit = create_shell_toolkit(security=SecurityPolicy.paranoid(["ls *", "pwd"]))
        >>> result = await toolkit.run("ls -la", working_dir=".")
        >>> print(result.stdout)
    """
    sandbox_instance: Sandbox
    if isinstance(sandbox, str):
        if sandbox != "local":
            raise ConfigurationError(
                f"Unknown sandbox type: {sandbox}. Use 'local' or provide a Sandbox instance."
            )
        sandbox_instance = LocalSandbox()
    else:
        sandbox_instance = sandbox

    gate = CommandGate(security=security, sandbox=sandbox_instance, agent_dir=agent_dir)
    policy = gate.current_policy()

    return ShellToolkit(
        gate=gate,
        tool_prompt=generate_tool_prompt(policy, extra_instructions=extra_instructions),
        security=policy,
    )
