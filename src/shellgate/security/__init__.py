"""Security module for shellgate."""

from shellgate.errors import SecurityViolation
from shellgate.security.paths import expand_tilde, resolve_working_dir
from shellgate.security.patterns import (
    SHELL_METACHARACTERS,
    contains_shell_metacharacters,
    matches_pattern,
)
from shellgate.security.policy import (
    DEFAULT_ALLOWED_PATTERNS,
    DEFAULT_BLOCKED_PATTERNS,
    SecurityPolicy,
)

__all__ = [
    "DEFAULT_ALLOWED_PATTERNS",
    "DEFAULT_BLOCKED_PATTERNS",
    "SHELL_METACHARACTERS",
    "SecurityPolicy",
    "SecurityViolation",
    "contains_shell_metacharacters",
    "expand_tilde",
    "matches_pattern",
    "resolve_working_dir",
]
