"""
Command pattern matching and shell metacharacter scanning.

Patterns are plain strings with at most one meaningful '*' wildcard. Matching
is prefix/suffix based, not globbing: there are no character classes, no
multiple wildcards and no escaping.
"""

from __future__ import annotations

# Checked as plain substrings; quoting is not parsed.
SHELL_METACHARACTERS: tuple[str, ...] = (
    "\n",
    "&&",
    "||",
    "|",
    ";",
    "&",
    ">",
    "<",
    "`",
    "$(",
)


def matches_pattern(command: str, pattern: str) -> bool:
    """
    Check whether a command matches an allow/block rule.

    Supported forms:
        "pwd"            exact match only
        "git *"          prefix; also matches the bare "git"
        "* --version"    suffix
        "curl * | sh"    prefix and suffix around the first '*'

    Args:
        command: The literal command string.
        pattern: The rule to test against.

    Returns:
        True if the command matches the rule.
    """
    if command == pattern:
        return True

    if "*" not in pattern:
        return False

    if pattern.endswith("*"):
        prefix = pattern[:-1]
        if command.startswith(prefix):
            return True
        # "ls *" should also accept a bare "ls"
        if prefix.endswith(" ") and command == prefix[:-1]:
            return True

    if pattern.startswith("*"):
        if command.endswith(pattern[1:]):
            return True

    head, tail = pattern.split("*", 1)
    return command.startswith(head) and command.endswith(tail)


def contains_shell_metacharacters(command: str) -> bool:
    """Return True if the command contains any chaining, redirection or substitution operator."""
    return any(op in command for op in SHELL_METACHARACTERS)
