"""
Pytest configuration and fixtures for agentcore tests.

This module provides shared fixtures used across unit and integration
tests.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from agentcore.schema import CoreConfig
from agentcore.tools.base import ToolContext
from agentcore.tools.state import ToolState
from agentcore.util.platform import current_platform


class StubProvider:
    """SystemProvider rooted at a test directory with a fixed environment."""

    def __init__(self, cwd: Path, home: Path | None = None, env: dict[str, str] | None = None) -> None:
        self._cwd = str(cwd)
        self._home = str(home) if home is not None else None
        self.env = dict(env or {})

    def cwd(self) -> str:
        return self._cwd

    def home(self) -> str | None:
        return self._home

    def env_var(self, name: str) -> str | None:
        return self.env.get(name)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def provider(temp_dir: Path) -> StubProvider:
    """Provider whose working and home directory is temp_dir."""
    return StubProvider(cwd=temp_dir, home=temp_dir)


@pytest.fixture
def state() -> ToolState:
    """Fresh session state."""
    return ToolState()


@pytest.fixture
def context(provider: StubProvider, state: ToolState) -> ToolContext:
    """ToolContext resolving relative paths against temp_dir."""
    return ToolContext(
        provider=provider,
        config=CoreConfig(),
        platform=current_platform(),
        state=state,
    )


@pytest.fixture
def sample_config_yaml() -> str:
    """Return a config YAML overriding a few limits."""
    return """
log_level: DEBUG
tools:
  ls:
    max_entries: 50
  fsRead:
    max_bytes: 1024
  executeCmd:
    shell: bash
"""
