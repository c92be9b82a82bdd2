"""
Local subprocess-based sandbox implementation.

Runs one child process per command using asyncio.subprocess. The child gets
its own process group so that a timeout or a cancelled caller kills the
whole tree, not just the shell.
"""

from __future__ import annotations

import asyncio
import logging
import os
import signal
import subprocess
from typing import Mapping, Sequence

from shellgate._types import ExecutionResult, Outcome, Shell
from shellgate.sandbox._base import Sandbox
from shellgate.sandbox.shells import build_argv
from shellgate.security.policy import DEFAULT_TIMEOUT_SECONDS, clamp_timeout

logger = logging.getLogger(__name__)

_READ_CHUNK = 65536


class LocalSandbox(Sandbox):
    """
    Subprocess-based sandbox running commands on the host.

    Features:
    - Shell selection with per-shell non-interactive flags
    - Timeout enforcement with process-group termination
    - Independent stdout/stderr capture, partial output kept on timeout
    - Process failures reported in the result instead of raised

    Example:
        >>> sandbox = LocalSandbox()
        >>> result = await sandbox.execute("ls -la", working_dir="/tmp", shell="sh")
        >>> print(result.stdout)
    """

    def __init__(
        self,
        *,
        env: dict[str, str] | None = None,
        default_timeout: int = DEFAULT_TIMEOUT_SECONDS,
        platform: str | None = None,
        shells: Mapping[Shell, Sequence[str]] | None = None,
    ) -> None:
        """
        Initialize a local sandbox.

        Args:
            env: Environment for child processes. Defaults to the current environment.
            default_timeout: Timeout used when a call passes none.
            platform: Platform string for auto shell selection (defaults to sys.platform).
            shells: Replacement shell table.
        """
        self._env = env
        self._default_timeout = default_timeout
        self._platform = platform
        self._shells = shells
        self._closed = False

    async def execute(
        self,
        command: str,
        *,
        working_dir: str,
        shell: Shell | str | None = None,
        timeout: int | None = None,
    ) -> ExecutionResult:
        """
        Execute a command in the given working directory.

        Args:
            command: The command string, passed to the shell as one argument.
            working_dir: Directory to run in. It must exist.
            shell: Shell to use; None or "auto" picks the platform default.
            timeout: Seconds before the process group is killed, clamped to [1, 300].

        Returns:
            ExecutionResult describing the outcome.

        Raises:
            RuntimeError: If the sandbox has been closed.
        """
        if self._closed:
            raise RuntimeError("Sandbox has been closed")

        timeout = clamp_timeout(timeout, self._default_timeout)
        argv = build_argv(command, shell, platform=self._platform, shells=self._shells)
        logger.debug("Launching %s in %s (timeout %ss)", argv[:-1], working_dir, timeout)

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                cwd=working_dir,
                env=self._env,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                **_new_process_group_options(),
            )
        except (OSError, ValueError) as e:
            logger.warning("Failed to launch %r: %s", command, e)
            return ExecutionResult(
                command=command,
                working_dir=working_dir,
                stdout="",
                stderr="",
                exit_code=-1,
                error=str(e),
                outcome=Outcome.LAUNCH_FAILED,
            )

        stdout_buf = bytearray()
        stderr_buf = bytearray()
        try:
            await asyncio.wait_for(
                asyncio.gather(
                    _drain(proc.stdout, stdout_buf),
                    _drain(proc.stderr, stderr_buf),
                    proc.wait(),
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            await _kill_process_group(proc)
            logger.warning("Command %r timed out after %s seconds", command, timeout)
            return ExecutionResult(
                command=command,
                working_dir=working_dir,
                stdout=_decode(stdout_buf),
                stderr=_decode(stderr_buf),
                exit_code=-1,
                error=f"command timed out after {timeout} seconds",
                outcome=Outcome.TIMEOUT,
            )
        except asyncio.CancelledError:
            await _kill_process_group(proc)
            raise

        returncode = proc.returncode if proc.returncode is not None else -1
        logger.debug("Command %r exited with %s", command, returncode)

        if returncode == 0:
            return ExecutionResult(
                command=command,
                working_dir=working_dir,
                stdout=_decode(stdout_buf),
                stderr=_decode(stderr_buf),
                exit_code=0,
            )

        return ExecutionResult(
            command=command,
            working_dir=working_dir,
            stdout=_decode(stdout_buf),
            stderr=_decode(stderr_buf),
            # Signal deaths have no exit status of their own
            exit_code=returncode if returncode > 0 else -1,
            error=_describe_exit(returncode),
            outcome=Outcome.EXIT_NON_ZERO,
        )

    async def close(self) -> None:
        """
        Mark the sandbox closed.

        Safe to call multiple times.
        """
        self._closed = True


def _new_process_group_options() -> dict[str, object]:
    if os.name == "nt":
        return {"creationflags": subprocess.CREATE_NEW_PROCESS_GROUP}
    return {"start_new_session": True}


async def _drain(stream: asyncio.StreamReader | None, buf: bytearray) -> None:
    if stream is None:
        return
    while True:
        chunk = await stream.read(_READ_CHUNK)
        if not chunk:
            break
        buf.extend(chunk)


async def _kill_process_group(proc: asyncio.subprocess.Process) -> None:
    """Kill the child and everything in its process group, then reap it."""
    if os.name == "nt":
        # taskkill /T walks the process tree
        try:
            killer = await asyncio.create_subprocess_exec(
                "taskkill", "/F", "/T", "/PID", str(proc.pid),
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
            await killer.wait()
        except OSError as e:
            logger.debug("taskkill unavailable, killing shell only: %s", e)
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
    else:
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except (ProcessLookupError, PermissionError):
            # Group already gone
            pass
    await proc.wait()


def _decode(data: bytes | bytearray) -> str:
    return data.decode("utf-8", errors="replace")


def _describe_exit(exit_code: int) -> str:
    if exit_code < 0:
        try:
            name = signal.Signals(-exit_code).name
        except ValueError:
            name = str(-exit_code)
        return f"terminated by signal {name}"
    return f"exit status {exit_code}"
