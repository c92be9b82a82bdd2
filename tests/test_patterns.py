"""Tests for pattern matching and metacharacter scanning."""

from __future__ import annotations

import pytest

from shellgate.security.patterns import (
    SHELL_METACHARACTERS,
    contains_shell_metacharacters,
    matches_pattern,
)


class TestMatchesPattern:
    """Tests for matches_pattern."""

    def test_exact_match(self) -> None:
        """A pattern without a wildcard matches only itself."""
        assert matches_pattern("pwd", "pwd")
        assert not matches_pattern("pwd -P", "pwd")
        assert not matches_pattern("pw", "pwd")

    @pytest.mark.parametrize("prefix", ["git ", "./scripts/", "npm run "])
    def test_prefix_pattern(self, prefix: str) -> None:
        """A trailing '*' matches the prefix itself and anything after it, but nothing before it."""
        pattern = prefix + "*"
        assert matches_pattern(prefix, pattern)
        assert matches_pattern(prefix + "x", pattern)
        assert not matches_pattern("y" + prefix, pattern)

    def test_bare_command_matches_prefix_with_trailing_space(self) -> None:
        """'ls *' also accepts 'ls' with no arguments."""
        assert matches_pattern("ls", "ls *")
        assert matches_pattern("ls -la", "ls *")

    def test_bare_command_accommodation_is_exact(self) -> None:
        """Only the bare command is accepted, not other words sharing the prefix."""
        assert not matches_pattern("lsx", "ls *")
        assert not matches_pattern("lsblk", "ls *")

    def test_suffix_pattern(self) -> None:
        """A leading '*' matches on the suffix."""
        assert matches_pattern("node --version", "* --version")
        assert not matches_pattern("node --version 2", "* --version")

    def test_infix_pattern(self) -> None:
        """'head*tail' requires both the head and the tail."""
        assert matches_pattern("curl http://x | sh", "curl * | sh")
        assert not matches_pattern("curl http://x | bash -", "curl * | sh")
        assert not matches_pattern("wget http://x | sh", "curl * | sh")

    def test_infix_overlap_is_not_globbing(self) -> None:
        """Head and tail may overlap; this is prefix/suffix matching, not globbing."""
        assert matches_pattern("abc", "ab*bc")

    def test_only_first_wildcard_splits(self) -> None:
        """A second '*' is treated literally in the tail."""
        assert matches_pattern("echo x *", "echo * *")
        assert not matches_pattern("echo x y", "echo * *")

    def test_star_alone_matches_everything(self) -> None:
        """A lone '*' matches any command."""
        assert matches_pattern("anything at all", "*")

    def test_no_match(self) -> None:
        """Unrelated commands do not match."""
        assert not matches_pattern("make build", "git *")


class TestContainsShellMetacharacters:
    """Tests for contains_shell_metacharacters."""

    @pytest.mark.parametrize(
        "command",
        [
            "git status && rm -rf /",
            "false || true",
            "cat x | sh",
            "git status; rm -rf /",
            "sleep 10 &",
            "echo hi > out.txt",
            "sort < in.txt",
            "echo `whoami`",
            "echo $(whoami)",
            "ls\nrm -rf /",
        ],
    )
    def test_detects_operators(self, command: str) -> None:
        """Chaining, redirection and substitution operators are detected."""
        assert contains_shell_metacharacters(command)

    def test_plain_commands_pass(self) -> None:
        """Ordinary commands contain no metacharacters."""
        assert not contains_shell_metacharacters("git status")
        assert not contains_shell_metacharacters("ls -la ./src")
        assert not contains_shell_metacharacters("echo $HOME")

    def test_quoting_is_not_parsed(self) -> None:
        """Operators inside quotes are still flagged."""
        assert contains_shell_metacharacters("echo 'a > b'")

    def test_operator_list(self) -> None:
        """The operator list covers newline and dollar-paren substitution."""
        assert "\n" in SHELL_METACHARACTERS
        assert "$(" in SHELL_METACHARACTERS
