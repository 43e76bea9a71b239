"""
File reading tool for agentcore.

fsRead returns the text of a file, optionally a range of its lines. At most
`tools.fs_read.max_bytes` bytes are read; longer files are cut on a
character boundary and marked with a truncation suffix.
"""

import asyncio
from pathlib import Path
from typing import ClassVar

from pydantic import Field

from agentcore.errors import CustomExecutionError
from agentcore.tools.base import BuiltInToolModel, TextItem, ToolContext, ToolExecutionOutput
from agentcore.tools.fs_write import split_lines
from agentcore.tools.names import BuiltInToolName
from agentcore.util.path import canonicalize_path
from agentcore.util.text import read_file_with_max_limit

TRUNCATED_SUFFIX = "\n...[truncated]"

FS_READ_TOOL_DESCRIPTION = """
A tool for reading text files.

WHEN TO USE THIS TOOL:
- Use when you need to see the contents of a file

HOW TO USE:
- Provide the path to the file you want to read
- Optionally provide `offset` and `limit` to read a range of lines

LIMITATIONS:
- Only the first 250,000 bytes of a file are returned
"""


class FsRead(BuiltInToolModel):
    """
    Read a text file.

    Arguments:
        path (str): Path to the file to read (required)
        offset (int): First line to return, 0-indexed, default 0
        limit (int): Maximum number of lines to return, default all
    """

    tool_name: ClassVar[BuiltInToolName] = BuiltInToolName.FS_READ
    TOOL_DESCRIPTION: ClassVar[str] = FS_READ_TOOL_DESCRIPTION

    path: str = Field(..., description="Path to the file")
    offset: int = Field(default=0, ge=0, description="First line to return, 0-indexed")
    limit: int | None = Field(default=None, ge=1, description="Maximum number of lines to return")

    async def validate_tool(self, ctx: ToolContext) -> list[str]:
        if not self.path:
            return ["Path must not be empty"]
        try:
            path = Path(canonicalize_path(self.path, ctx.provider))
        except ValueError as e:
            return [str(e)]

        if not await asyncio.to_thread(path.exists):
            return [f"File not found: {path}"]
        if not await asyncio.to_thread(path.is_file):
            return [f"Path is not a file: {path}"]
        return []

    def select_lines(self, content: str) -> str:
        """Apply offset and limit to the file content."""
        if self.offset == 0 and self.limit is None:
            return content
        lines = split_lines(content)
        end = None if self.limit is None else self.offset + self.limit
        return "".join(lines[self.offset : end])

    async def execute(self, ctx: ToolContext) -> ToolExecutionOutput:
        try:
            path = canonicalize_path(self.path, ctx.provider)
        except ValueError as e:
            raise CustomExecutionError(message=str(e)) from e

        max_bytes = ctx.config.tools.fs_read.max_bytes
        content, truncated_bytes = await read_file_with_max_limit(path, max_bytes, TRUNCATED_SUFFIX)

        items = [TextItem(self.select_lines(content))]
        if truncated_bytes:
            items.append(TextItem(f"File was truncated: {truncated_bytes} bytes were not returned"))
        return ToolExecutionOutput(items)
