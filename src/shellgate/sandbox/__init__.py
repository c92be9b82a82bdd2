"""
Sandbox backends.
"""

from shellgate.sandbox._base import Sandbox
from shellgate.sandbox.local import LocalSandbox
from shellgate.sandbox.shells import SHELL_COMMANDS, build_argv, default_shell

__all__ = [
    "Sandbox",
    "LocalSandbox",
    "SHELL_COMMANDS",
    "build_argv",
    "default_shell",
]
