"""
Platform capabilities.

Everything that differs between operating system families is kept behind
the Platform interface: the line terminator used when editing files, the
shell used to run commands, and the long-format rendering of directory
entries. Tools ask the Platform instead of branching on sys.platform.

Implementations:
    - PosixPlatform: Linux and macOS (macOS also fixes screenshot file names)
    - WindowsPlatform: Windows
"""

import logging
import os
import stat
import sys
from abc import ABC, abstractmethod
from datetime import UTC, datetime

logger = logging.getLogger(__name__)

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_mtime(seconds: int) -> str:
    """Format a unix timestamp like `ls -l` does, e.g. `Mar 07 14:05` (UTC)."""
    dt = datetime.fromtimestamp(seconds, tz=UTC)
    return f"{_MONTHS[dt.month - 1]} {dt.day:02d} {dt.hour:02d}:{dt.minute:02d}"


def format_ftype(st_mode: int) -> str:
    """Single-character file type flag: `l`, `d` or `-`."""
    if stat.S_ISLNK(st_mode):
        return "l"
    if stat.S_ISREG(st_mode):
        return "-"
    if stat.S_ISDIR(st_mode):
        return "d"
    logger.warning("unknown file type in mode %o", st_mode)
    return "-"


def format_mode(mode: int) -> str:
    """Format permission bits the way `ls` does, e.g. 0o644 -> `rw-r--r--`."""
    chars = []
    for shift in (6, 3, 0):
        bits = (mode >> shift) & 0o7
        chars.append("r" if bits & 0o4 else "-")
        chars.append("w" if bits & 0o2 else "-")
        chars.append("x" if bits & 0o1 else "-")
    return "".join(chars)


class Platform(ABC):
    """OS-family specific behavior used by the built-in tools."""

    name: str = ""
    newline: str = "\n"
    default_shell: str = ""
    fix_screenshot_names: bool = False

    @abstractmethod
    def shell_args(self, command: str) -> list[str]:
        """Arguments passed to the shell to run `command` non-interactively."""
        ...

    @abstractmethod
    def listing_prefix(self) -> list[str]:
        """Lines shown before a directory listing."""
        ...

    @abstractmethod
    def format_long_entry(self, path: str, st: os.stat_result) -> str:
        """Render one directory entry as a single long-format line."""
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self.name}>"


class PosixPlatform(Platform):
    """Linux and macOS."""

    newline = "\n"
    default_shell = "bash"

    def __init__(self, macos: bool = False) -> None:
        self.name = "macos" if macos else "posix"
        self.fix_screenshot_names = macos

    def shell_args(self, command: str) -> list[str]:
        return ["--noprofile", "--norc", "-c", command]

    def listing_prefix(self) -> list[str]:
        return [f"User id: {os.geteuid()}"]

    def format_long_entry(self, path: str, st: os.stat_result) -> str:
        return (
            f"{format_ftype(st.st_mode)}{format_mode(st.st_mode)} "
            f"{st.st_nlink} {st.st_uid} {st.st_gid} {st.st_size} "
            f"{format_mtime(int(st.st_mtime))} {path}"
        )


class WindowsPlatform(Platform):
    """Windows, where commands run under PowerShell."""

    name = "windows"
    newline = "\r\n"
    default_shell = "pwsh"

    def shell_args(self, command: str) -> list[str]:
        return ["-NoProfile", "-NonInteractive", "-Command", command]

    def listing_prefix(self) -> list[str]:
        return []

    def format_long_entry(self, path: str, st: os.stat_result) -> str:
        return f"{format_ftype(st.st_mode)} {st.st_size} {format_mtime(int(st.st_mtime))} {path}"


def current_platform() -> Platform:
    """Return the Platform for the running interpreter."""
    if sys.platform == "win32":
        return WindowsPlatform()
    return PosixPlatform(macos=sys.platform == "darwin")
