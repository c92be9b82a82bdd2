"""Pytest configuration and fixtures for shellgate tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio

from shellgate import CommandGate, LocalSandbox, SecurityPolicy


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory(prefix="shellgate_test_") as tmp:
        yield Path(tmp)


@pytest_asyncio.fixture
async def sandbox(temp_dir: Path) -> AsyncGenerator[LocalSandbox, None]:
    """Create a LocalSandbox for testing."""
    (temp_dir / "test.txt").write_text("hello world")

    sandbox = LocalSandbox()
    try:
        yield sandbox
    finally:
        await sandbox.close()


@pytest_asyncio.fixture
async def gate(temp_dir: Path) -> AsyncGenerator[CommandGate, None]:
    """Create a CommandGate with the standard policy rooted at temp_dir."""
    policy = SecurityPolicy.standard()
    policy.default_working_dir = str(temp_dir)
    gate = CommandGate(security=policy)
    try:
        yield gate
    finally:
        await gate.close()


@pytest.fixture
def standard_policy() -> SecurityPolicy:
    """Create the built-in standard policy."""
    return SecurityPolicy.standard()


@pytest.fixture
def paranoid_policy() -> SecurityPolicy:
    """Create a paranoid policy with a few basic commands."""
    return SecurityPolicy.paranoid(allowed=["ls *", "cat *", "echo *", "git *"])
