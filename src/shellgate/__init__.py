"""
Top-level facade for shellgate.
"""

from shellgate._types import (
    CommandRequest,
    ExecutionResult,
    Outcome,
    SecurityLevel,
    Shell,
    ShellToolkit,
)
from shellgate.api import CommandGate, create_shell_toolkit
from shellgate.errors import (
    BlockedPattern,
    CommandError,
    ConfigurationError,
    EmptyCommand,
    MetacharactersRejected,
    NotAllowed,
    SecurityViolation,
    ShellGateError,
    WorkingDirNotAllowed,
    WorkingDirResolutionFailed,
)
from shellgate.prompt import generate_tool_prompt
from shellgate.sandbox import LocalSandbox, Sandbox
from shellgate.security import SecurityPolicy, contains_shell_metacharacters, matches_pattern
from shellgate.settings import default_settings, load_policy, policy_from_settings

__version__ = "0.1.0"

# Exports
__all__ = [
    "CommandGate",
    "create_shell_toolkit",
    "CommandRequest",
    "ExecutionResult",
    "Outcome",
    "SecurityLevel",
    "Shell",
    "ShellToolkit",
    "Sandbox",
    "LocalSandbox",
    "SecurityPolicy",
    "matches_pattern",
    "contains_shell_metacharacters",
    "generate_tool_prompt",
    "default_settings",
    "load_policy",
    "policy_from_settings",
    "ShellGateError",
    "ConfigurationError",
    "SecurityViolation",
    "EmptyCommand",
    "MetacharactersRejected",
    "BlockedPattern",
    "NotAllowed",
    "WorkingDirNotAllowed",
    "WorkingDirResolutionFailed",
    "CommandError",
]
