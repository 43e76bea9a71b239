"""
File writing tool for agentcore.

fsWrite creates and edits text files. Exactly one command is active per call:
- create: write a file, creating missing parent directories
- strReplace: replace an exact occurrence of a string
- insert: insert content after a given line, or append it

Edit Policy:
    strReplace counts exact occurrences before touching the file. Zero
    occurrences is an error, and so is more than one unless replaceAll is
    set, so an ambiguous edit is always reported instead of applied.

Files are read and written as UTF-8 with no newline translation, so line
endings already in a file are kept byte for byte.
"""

import asyncio
import difflib
import logging
from abc import abstractmethod
from pathlib import Path
from typing import Annotated, Any, ClassVar, Literal

from pydantic import Field, TypeAdapter

from agentcore.errors import CustomExecutionError, IoExecutionError
from agentcore.tools.base import BuiltInToolModel, ToolContext, ToolExecutionOutput
from agentcore.tools.names import BuiltInToolName
from agentcore.util.path import canonicalize_path

logger = logging.getLogger(__name__)

FS_WRITE_TOOL_DESCRIPTION = """
A tool for creating and editing text files.

WHEN TO USE THIS TOOL:
- Use when you need to create a new file, or modify an existing file
- Perfect for updating text-based file formats

HOW TO USE:
- Provide the path to the file you want to create or modify
- Specify the operation to perform: one of `create`, `strReplace`, or `insert`
- Use `create` to create a new file. Required parameter is `content`. Parent directories will be created if they are missing.
- Use `strReplace` to replace and update the content of an existing file.
- Use `insert` to insert content at a specific line, or append content to the end of a file.

TIPS:
- To append content to the end of a file, use `insert` with no `insertLine`
"""

FS_WRITE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "command": {
            "type": "string",
            "enum": ["create", "strReplace", "insert"],
            "description": "The commands to run. Allowed options are: `create`, `strReplace`, `insert`",
        },
        "content": {
            "description": "Required parameter of `create` and `insert` commands.",
            "type": "string",
        },
        "insertLine": {
            "description": (
                "Optional parameter of `insert` command. Line is 0-indexed. `content` will be "
                "inserted at the provided line. If not provided, content will be inserted at the "
                "end of the file on a new line, inserting a newline at the end of the file if it "
                "is missing."
            ),
            "type": "integer",
        },
        "newStr": {
            "description": "Required parameter of `strReplace` command containing the new string.",
            "type": "string",
        },
        "oldStr": {
            "description": "Required parameter of `strReplace` command containing the string in `path` to replace.",
            "type": "string",
        },
        "replaceAll": {
            "description": (
                "Optional parameter of `strReplace` command. Default is false. When true, all "
                "instances of `oldStr` will be replaced with `newStr`."
            ),
            "type": "boolean",
        },
        "path": {
            "description": "Path to the file",
            "type": "string",
        },
    },
    "required": ["command", "path"],
}


def split_lines(text: str) -> list[str]:
    """Split text into lines, each keeping its trailing `\\n` if it has one."""
    if not text:
        return []
    lines = [line + "\n" for line in text.split("\n")]
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    return lines


def _read_text(path: Path) -> str:
    with path.open("r", encoding="utf-8", newline="") as f:
        return f.read()


def _write_text(path: Path, content: str) -> None:
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(content)


def _diff_counts(before: list[str], after: list[str]) -> tuple[int, int]:
    added = removed = 0
    matcher = difflib.SequenceMatcher(None, before, after, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag in ("replace", "delete"):
            removed += i2 - i1
        if tag in ("replace", "insert"):
            added += j2 - j1
    return added, removed


class FsWriteCommand(BuiltInToolModel):
    """
    Shared behavior of the three fsWrite commands.

    Subclasses implement render(), which turns the current file content
    into the new content. Reading, writing and line statistics are handled
    here.
    """

    tool_name: ClassVar[BuiltInToolName] = BuiltInToolName.FS_WRITE
    TOOL_DESCRIPTION: ClassVar[str] = FS_WRITE_TOOL_DESCRIPTION
    INPUT_SCHEMA: ClassVar[dict[str, Any] | None] = FS_WRITE_SCHEMA

    # Whether the target file must already exist and be read as UTF-8.
    requires_existing: ClassVar[bool] = True

    path: str

    def canonical_path(self, ctx: ToolContext) -> Path:
        return Path(canonicalize_path(self.path, ctx.provider))

    async def validate_tool(self, ctx: ToolContext) -> list[str]:
        errors = []
        if not self.path:
            errors.append("Path must not be empty")
        return errors

    @abstractmethod
    def render(self, original: str, newline: str) -> str:
        """Return the new file content given the current content."""
        ...

    async def _read_original(self, path: Path) -> str:
        if self.requires_existing:
            try:
                return await asyncio.to_thread(_read_text, path)
            except OSError as e:
                raise IoExecutionError(io_context=f"failed to read {path}", source=e) from e
            except UnicodeDecodeError as e:
                raise IoExecutionError(io_context=f"failed to read {path}") from e
            except ValueError as e:
                # e.g. a path holding a null byte
                raise CustomExecutionError(message=f"failed to read {path}: {e}") from e

        # create overwrites; the old content only feeds the line statistics
        if not await asyncio.to_thread(path.is_file):
            return ""
        try:
            raw = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise IoExecutionError(io_context=f"failed to read {path}", source=e) from e
        except ValueError as e:
            raise CustomExecutionError(message=f"failed to read {path}: {e}") from e
        return raw.decode("utf-8", errors="replace")

    async def _write(self, path: Path, content: str) -> None:
        try:
            await asyncio.to_thread(_write_text, path, content)
        except OSError as e:
            raise IoExecutionError(io_context=f"failed to write to {path}", source=e) from e
        except ValueError as e:
            raise CustomExecutionError(message=f"failed to write to {path}: {e}") from e

    async def execute(self, ctx: ToolContext) -> ToolExecutionOutput:
        try:
            path = self.canonical_path(ctx)
        except ValueError as e:
            raise CustomExecutionError(message=str(e)) from e

        original = await self._read_original(path)
        updated = self.render(original, ctx.platform.newline)
        await self._write(path, updated)
        logger.debug("%s wrote %s", self.command, path)

        if ctx.state is not None:
            before_lines = split_lines(original)
            after_lines = split_lines(updated)
            added, removed = _diff_counts(before_lines, after_lines)
            tracker = ctx.state.line_tracker(str(path))
            tracker.record(len(before_lines), len(after_lines), added, removed)

        return ToolExecutionOutput()


class FsWriteCreate(FsWriteCommand):
    """Create a file, overwriting any existing content in full."""

    requires_existing: ClassVar[bool] = False

    command: Literal["create"]
    content: str

    def render(self, original: str, newline: str) -> str:
        return self.content

    async def _write(self, path: Path, content: str) -> None:
        parent = path.parent
        if not await asyncio.to_thread(parent.exists):
            try:
                await asyncio.to_thread(parent.mkdir, parents=True, exist_ok=True)
            except OSError as e:
                raise IoExecutionError(io_context=f"failed to create directory {parent}", source=e) from e
            except ValueError as e:
                raise CustomExecutionError(message=f"failed to create directory {parent}: {e}") from e
        await super()._write(path, content)


class FsWriteStrReplace(FsWriteCommand):
    """Replace an exact occurrence of `old_str` with `new_str`."""

    command: Literal["strReplace"]
    old_str: str = Field(alias="oldStr")
    new_str: str = Field(alias="newStr")
    replace_all: bool = Field(default=False, alias="replaceAll")

    async def validate_tool(self, ctx: ToolContext) -> list[str]:
        errors = await super().validate_tool(ctx)
        try:
            path = self.canonical_path(ctx)
        except ValueError as e:
            return errors + [str(e)]
        if not await asyncio.to_thread(path.exists):
            errors.append(
                "The provided path must exist in order to replace or insert contents into it"
            )
        return errors

    def render(self, original: str, newline: str) -> str:
        occurrences = original.count(self.old_str)
        if occurrences == 0:
            raise CustomExecutionError(message=f'no occurrences of "{self.old_str}" were found')
        if occurrences == 1:
            return original.replace(self.old_str, self.new_str, 1)
        if not self.replace_all:
            raise CustomExecutionError(
                message=f"{occurrences} occurrences of old_str were found when only 1 is expected"
            )
        return original.replace(self.old_str, self.new_str)


class FsWriteInsert(FsWriteCommand):
    """
    Insert content after `insert_line` lines, or append it.

    `insert_line` is 0-indexed and clamped to the file's line count.
    Without it, content is appended on a new line.
    """

    command: Literal["insert"]
    content: str
    insert_line: int | None = Field(default=None, alias="insertLine")

    async def validate_tool(self, ctx: ToolContext) -> list[str]:
        errors = await super().validate_tool(ctx)
        if not self.content:
            errors.append("Content to insert must not be empty")
        return errors

    def render(self, original: str, newline: str) -> str:
        if self.insert_line is None:
            if not original.endswith(newline):
                original += newline
            return original + self.content

        lines = split_lines(original)
        insert_line = min(max(self.insert_line, 0), len(lines))
        offset = sum(len(line) for line in lines[:insert_line])

        content = self.content
        if not content.endswith(newline):
            content += newline
        return original[:offset] + content + original[offset:]


FsWrite = Annotated[
    FsWriteCreate | FsWriteStrReplace | FsWriteInsert,
    Field(discriminator="command"),
]

fs_write_adapter: TypeAdapter[FsWriteCreate | FsWriteStrReplace | FsWriteInsert] = TypeAdapter(FsWrite)
