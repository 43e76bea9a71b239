"""
System access abstraction.

Tools never read the process working directory, home directory or
environment directly. They go through a SystemProvider so tests can point
relative paths at a temporary directory and stub variables.
"""

import os
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class SystemProvider(Protocol):
    """Where relative paths, `~` and `$VARS` are resolved from."""

    def cwd(self) -> str:
        """Directory that relative paths are joined onto."""
        ...

    def home(self) -> str | None:
        """Home directory used to expand a leading `~`."""
        ...

    def env_var(self, name: str) -> str | None:
        """Look up an environment variable, None if unset."""
        ...


class RealProvider:
    """SystemProvider backed by the running process."""

    def cwd(self) -> str:
        return os.getcwd()

    def home(self) -> str | None:
        try:
            return str(Path.home())
        except RuntimeError:
            return None

    def env_var(self, name: str) -> str | None:
        return os.environ.get(name)

    def __repr__(self) -> str:
        return "<RealProvider>"
