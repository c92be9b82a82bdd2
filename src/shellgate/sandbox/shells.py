"""
Shell selection.

Maps a Shell choice to the argv prefix that runs a command string
non-interactively. The command itself is always appended as one argument.
"""

from __future__ import annotations

import sys
from typing import Mapping, Sequence

from shellgate._types import Shell

SHELL_COMMANDS: Mapping[Shell, tuple[str, ...]] = {
    Shell.SH: ("sh", "-c"),
    Shell.BASH: ("bash", "-c"),
    Shell.ZSH: ("zsh", "-c"),
    Shell.CMD: ("cmd", "/C"),
    Shell.POWERSHELL: ("powershell", "-NoProfile", "-NonInteractive", "-Command"),
    Shell.PWSH: ("pwsh", "-NoProfile", "-NonInteractive", "-Command"),
}


def default_shell(platform: str | None = None) -> Shell:
    """Return the shell used for Shell.AUTO on the given platform."""
    platform = platform if platform is not None else sys.platform
    return Shell.CMD if platform.startswith("win") else Shell.SH


def build_argv(
    command: str,
    shell: Shell | str | None = None,
    *,
    platform: str | None = None,
    shells: Mapping[Shell, Sequence[str]] | None = None,
) -> list[str]:
    """
    Build the argv that runs a command under the chosen shell.

    Args:
        command: Command string, passed through untouched.
        shell: Shell choice; None, "auto" and unknown names pick the platform default.
        platform: Platform string used for auto-selection (defaults to sys.platform).
        shells: Replacement shell table.

    Returns:
        The argv list, ending with the command.
    """
    table = shells if shells is not None else SHELL_COMMANDS
    choice = Shell.parse(shell)
    if choice is Shell.AUTO or choice not in table:
        choice = default_shell(platform)
    return [*table[choice], command]
