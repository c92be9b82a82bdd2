"""
Security policy with allow-list, block-list and metacharacter checks.

This is the core security layer that decides whether a command may run.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable

from shellgate._types import SecurityLevel
from shellgate.errors import (
    BlockedPattern,
    ConfigurationError,
    EmptyCommand,
    MetacharactersRejected,
    NotAllowed,
)
from shellgate.security.patterns import contains_shell_metacharacters, matches_pattern

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60
MIN_TIMEOUT_SECONDS = 1
MAX_TIMEOUT_SECONDS = 300

# Common developer tool invocations
DEFAULT_ALLOWED_PATTERNS: tuple[str, ...] = (
    "./scripts/*",
    "git *",
    "go *",
    "make *",
    "npm *",
    "ls *",
    "cat *",
    "echo *",
    "pwd",
    "which *",
    "env",
)

# Well-known destructive commands
DEFAULT_BLOCKED_PATTERNS: tuple[str, ...] = (
    "rm -rf /*",
    "rm -rf ~/*",
    "sudo *",
    "> /dev/*",
    "curl * | sh",
    "curl * | bash",
    "wget * | sh",
    "wget * | bash",
    "chmod 777 *",
    ":(){ :|:& };:",
    "dd if=*",
    "mkfs.*",
    "eval *",
)


def clamp_timeout(requested: int | None, fallback: int = DEFAULT_TIMEOUT_SECONDS) -> int:
    """Resolve a requested timeout into whole seconds within [1, 300]."""
    timeout = requested if requested and requested > 0 else fallback
    if timeout <= 0:
        timeout = DEFAULT_TIMEOUT_SECONDS
    return int(max(MIN_TIMEOUT_SECONDS, min(timeout, MAX_TIMEOUT_SECONDS)))


@dataclass
class SecurityPolicy:
    """
    Configurable policy for command authorization.

    Checks run in a fixed order: empty command, shell metacharacters,
    block-list, allow-list. The block-list always wins over the allow-list.
    An empty allow-list allows everything the block-list lets through.

    Three presets are provided:
    - permissive(): block-list only, metacharacters allowed
    - standard(): built-in allow-list and block-list (default)
    - paranoid(): only the given allow-list, built-in block-list
    """

    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    default_working_dir: str | None = None
    allowed_working_dirs: list[str] = field(default_factory=list)
    allowed_patterns: list[str] = field(default_factory=list)
    blocked_patterns: list[str] = field(default_factory=list)
    allow_shell_metacharacters: bool = False
    strict_containment: bool = False

    @classmethod
    def permissive(cls) -> SecurityPolicy:
        """
        Create a permissive policy.

        Only the built-in block-list applies. Use in trusted environments.
        """
        return cls(
            blocked_patterns=list(DEFAULT_BLOCKED_PATTERNS),
            allow_shell_metacharacters=True,
        )

    @classmethod
    def standard(cls) -> SecurityPolicy:
        """Create the built-in default policy (recommended)."""
        return cls(
            allowed_patterns=list(DEFAULT_ALLOWED_PATTERNS),
            blocked_patterns=list(DEFAULT_BLOCKED_PATTERNS),
        )

    @classmethod
    def paranoid(cls, allowed: Iterable[str]) -> SecurityPolicy:
        """
        Create a policy that only allows the given patterns.

        Args:
            allowed: Allow-list patterns (e.g., ["ls *", "cat *", "pwd"]).
        """
        return cls(
            allowed_patterns=list(allowed),
            blocked_patterns=list(DEFAULT_BLOCKED_PATTERNS),
        )

    @classmethod
    def from_level(cls, level: SecurityLevel) -> SecurityPolicy:
        if level == SecurityLevel.PERMISSIVE:
            return cls.permissive()
        if level == SecurityLevel.STANDARD:
            return cls.standard()
        raise ConfigurationError(
            "SecurityLevel.PARANOID requires an allowlist. "
            "Use SecurityPolicy.paranoid(allowed=[...]) instead."
        )

    def authorize(self, command: str) -> None:
        """
        Validate a command against the policy.

        Args:
            command: The command string to validate.

        Raises:
            EmptyCommand: If the command is empty.
            MetacharactersRejected: If it contains shell operators and they are not allowed.
            BlockedPattern: If it matches the block-list.
            NotAllowed: If the allow-list is non-empty and nothing matches.
        """
        if not command or not command.strip():
            raise EmptyCommand(command)

        if not self.allow_shell_metacharacters and contains_shell_metacharacters(command):
            logger.warning("Rejected command with shell metacharacters: %r", command)
            raise MetacharactersRejected(command)

        for pattern in self.blocked_patterns:
            if matches_pattern(command, pattern):
                logger.warning("Blocked command %r (pattern %r)", command, pattern)
                raise BlockedPattern(pattern, command)

        if not self.allowed_patterns:
            return

        for pattern in self.allowed_patterns:
            if matches_pattern(command, pattern):
                return

        logger.warning("Command %r not in allow-list", command)
        raise NotAllowed(self.allowed_patterns, command)

    def effective_timeout(self, requested: int | None = None) -> int:
        """
        Pick the timeout for a request.

        Non-positive or missing values fall back to the policy timeout, then
        to 60 seconds. The result is clamped to [1, 300].
        """
        return clamp_timeout(requested, self.timeout_seconds)

    def add_blocked_pattern(self, pattern: str) -> None:
        """
        Append a block-list pattern.

        Args:
            pattern: Pattern string, e.g. "docker rm *".
        """
        self.blocked_patterns.append(pattern)

    def add_allowed_pattern(self, pattern: str) -> None:
        """
        Append an allow-list pattern.

        Args:
            pattern: Pattern string, e.g. "pytest *".
        """
        self.allowed_patterns.append(pattern)

    def to_settings(self) -> dict[str, Any]:
        """Return the policy as a settings document."""
        settings = asdict(self)
        settings["default_working_dir"] = self.default_working_dir or ""
        return settings
