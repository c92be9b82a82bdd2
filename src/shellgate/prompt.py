"""
LLM prompt generation.

Describes the active policy so that an agent can pick commands that will be
allowed, instead of learning the rules from denials.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shellgate.security.policy import SecurityPolicy

# Keeps tool descriptions short for large policies
MAX_LISTED_PATTERNS = 40


def _format_patterns(patterns: list[str]) -> str:
    shown = ", ".join(f"`{p}`" for p in patterns[:MAX_LISTED_PATTERNS])
    remaining = len(patterns) - MAX_LISTED_PATTERNS
    if remaining > 0:
        shown += f", and {remaining} more"
    return shown


def generate_tool_prompt(
    policy: SecurityPolicy,
    *,
    extra_instructions: str | None = None,
) -> str:
    """
    Generate an LLM-oriented description of a policy.

    The prompt includes:
    - Allowed command patterns (or a note that anything not blocked is allowed)
    - Blocked command patterns
    - Whether shell operators may be used
    - Timeout and working directory restrictions
    - Any extra instructions provided

    Args:
        policy: The policy to describe.
        extra_instructions: Additional context for the LLM.

    Returns:
        A formatted prompt string.
    """
    lines: list[str] = []

    if policy.allowed_patterns:
        lines.append(f"Allowed commands: {_format_patterns(policy.allowed_patterns)}")
        lines.append("A trailing '*' matches any arguments; 'ls *' also allows a bare 'ls'.")
    else:
        lines.append("Any command is allowed unless it matches a blocked pattern.")

    if policy.blocked_patterns:
        lines.append(f"Blocked commands: {_format_patterns(policy.blocked_patterns)}")

    if not policy.allow_shell_metacharacters:
        lines.append(
            "Shell operators (&&, ||, |, ;, &, >, <, backticks, $() and newlines) "
            "are rejected. Run one command per call."
        )

    lines.append(f"Commands are killed after {policy.effective_timeout()} seconds.")

    if policy.allowed_working_dirs:
        lines.append(f"Working directory must be under: {', '.join(policy.allowed_working_dirs)}")

    if extra_instructions:
        lines.append("")
        lines.append(extra_instructions)

    return "\n".join(lines)
