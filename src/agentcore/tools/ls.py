"""
Directory listing tool for agentcore.

ls lists a directory breadth-first down to a requested depth:
- Entries matching a caller ignore glob are skipped before they are stat'ed
- Entries in each directory are listed most recently modified first
- Commonly ignored directories (.git, node_modules, ...) are listed but not
  descended into
- At most `max_entries` lines are returned; when the limit is hit a notice
  naming the truncated directory is placed before the listing
- A directory with more than `max_entries_per_dir` entries is flagged, and
  its truncation notice marks the count with "+"
"""

import asyncio
import logging
import os
import stat
from collections import deque
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import Field

from agentcore.errors import CustomExecutionError, IoExecutionError
from agentcore.tools.base import BuiltInToolModel, ToolContext, ToolExecutionOutput
from agentcore.tools.names import BuiltInToolName
from agentcore.util.glob import matches_any_pattern
from agentcore.util.path import canonicalize_path

logger = logging.getLogger(__name__)

LS_TOOL_DESCRIPTION = """
A tool for listing directory contents.

HOW TO USE:
- Provide the path to the directory you want to view
- Optionally provide a depth to recursively list directory contents
- Optionally provide a list of glob patterns to exclude files and directories from being searched

LIMITATIONS:
- Only 1000 entries will be returned
- Directories containing over 10000 entries will be truncated
"""

LS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "path": {
            "type": "string",
            "description": "Path to the directory",
        },
        "depth": {
            "type": "integer",
            "description": "Depth of a recursive directory listing",
            "default": 0,
        },
        "ignore": {
            "type": "array",
            "description": "List of glob patterns to ignore",
            "items": {
                "type": "string",
                "description": "Glob pattern to ignore",
            },
        },
    },
    "required": ["path"],
}


@dataclass(frozen=True)
class Entry:
    """A directory entry with its lstat result."""

    path: str
    stat: os.stat_result

    @property
    def last_modified(self) -> int:
        """Seconds since the unix epoch."""
        return int(self.stat.st_mtime)

    @property
    def is_dir(self) -> bool:
        # lstat result: a symlink to a directory is not a directory here
        return stat.S_ISDIR(self.stat.st_mode)


@dataclass(frozen=True)
class DirectoryRead:
    """Entries read from one directory."""

    entries: list[Entry]
    exceeded_threshold: bool


def read_directory(dir_path: str, ignore: list[str], max_entries: int) -> DirectoryRead:
    """
    Read every entry of a directory, skipping ignored paths.

    The directory is marked as exceeding the threshold once more than
    `max_entries` entries were read. The scan itself is not cut short.

    Raises:
        IoExecutionError: If the directory or an entry cannot be read
    """
    entries: list[Entry] = []
    exceeded = False
    try:
        it = os.scandir(dir_path)
    except OSError as e:
        raise IoExecutionError(io_context=f"failed to read directory path '{dir_path}'", source=e) from e

    with it:
        for ent in it:
            if ignore and matches_any_pattern(ignore, ent.path):
                logger.debug("ignoring file: %s", ent.path)
                continue
            try:
                st = ent.stat(follow_symlinks=False)
            except OSError as e:
                raise IoExecutionError(io_context=f"failed to get metadata for {ent.path}", source=e) from e
            entries.append(Entry(path=ent.path, stat=st))
            if len(entries) > max_entries:
                exceeded = True

    return DirectoryRead(entries=entries, exceeded_threshold=exceeded)


class Ls(BuiltInToolModel):
    """
    List a directory, optionally recursively.

    Arguments:
        path (str): Directory to list (required)
        depth (int): How many levels below `path` to descend, default 0
        ignore (list[str]): Glob patterns of entries to leave out
    """

    tool_name: ClassVar[BuiltInToolName] = BuiltInToolName.LS
    TOOL_DESCRIPTION: ClassVar[str] = LS_TOOL_DESCRIPTION
    INPUT_SCHEMA: ClassVar[dict[str, Any] | None] = LS_SCHEMA

    DEFAULT_DEPTH: ClassVar[int] = 0

    path: str
    depth: int | None = Field(default=None, ge=0)
    ignore: list[str] | None = None

    @property
    def max_depth(self) -> int:
        return self.depth if self.depth is not None else self.DEFAULT_DEPTH

    async def validate_tool(self, ctx: ToolContext) -> list[str]:
        try:
            path = canonicalize_path(self.path, ctx.provider)
        except ValueError as e:
            return [str(e)]

        if not await asyncio.to_thread(os.path.exists, path):
            return [f"Directory not found: {path}"]
        try:
            st = await asyncio.to_thread(os.lstat, path)
        except OSError as e:
            return [f"failed to check file metadata for path '{path}': {e}"]
        if not stat.S_ISDIR(st.st_mode):
            return [f"Path is not a directory: {path}"]
        return []

    async def execute(self, ctx: ToolContext) -> ToolExecutionOutput:
        try:
            root = canonicalize_path(self.path, ctx.provider)
        except ValueError as e:
            raise CustomExecutionError(message=str(e)) from e

        limits = ctx.config.tools.ls
        max_depth = self.max_depth
        ignore = self.ignore or []
        logger.debug("Reading directory at %s with depth %d", root, max_depth)

        # Lines shown before the listing results
        prefix = ctx.platform.listing_prefix()
        result: list[str] = []

        queue: deque[tuple[str, int]] = deque([(root, 0)])
        truncated = False
        while queue and not truncated:
            dir_path, depth = queue.popleft()
            if depth > max_depth:
                break

            listing = await asyncio.to_thread(read_directory, dir_path, ignore, limits.max_entries_per_dir)
            entries = sorted(listing.entries, key=lambda ent: ent.last_modified)
            entries.reverse()

            for entry in entries:
                if len(result) >= limits.max_entries:
                    prefix.append(
                        f"Directory at {dir_path} was truncated "
                        f"(has total {len(entries)}{'+' if listing.exceeded_threshold else ''} entries)"
                    )
                    truncated = True
                    break

                result.append(ctx.platform.format_long_entry(entry.path, entry.stat))

                if entry.is_dir:
                    if matches_any_pattern(limits.ignore_directories, entry.path):
                        continue
                    queue.append((entry.path, depth + 1))

        return ToolExecutionOutput.text("\n".join(prefix) + "\n" + "\n".join(result))
