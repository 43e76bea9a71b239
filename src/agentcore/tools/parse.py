"""
Turning a raw tool use into a typed Tool.

A raw tool use is a name plus JSON-like arguments, as produced by a model.
Parsing resolves the name, strips the cross-cutting `toolUsePurpose`
field, and validates the remaining arguments against the tool's payload
model. Every failure is a ToolParseError; nothing is executed here.
"""

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from agentcore.errors import ToolParseError, ToolParseErrorKind
from agentcore.tools.base import ToolContext, ToolExecutionOutput
from agentcore.tools.catalog import model_for
from agentcore.tools.execute_cmd import ExecuteCmd
from agentcore.tools.fs_read import FsRead
from agentcore.tools.fs_write import FsWriteCreate, FsWriteInsert, FsWriteStrReplace, fs_write_adapter
from agentcore.tools.image_read import ImageRead
from agentcore.tools.ls import Ls
from agentcore.tools.mcp import McpTool
from agentcore.tools.names import (
    AgentName,
    BuiltInName,
    BuiltInToolName,
    CanonicalToolName,
    McpName,
    parse_tool_name,
)
from agentcore.tools.unimplemented import Grep, Introspect, Mkdir, SpawnSubagent

logger = logging.getLogger(__name__)

TOOL_USE_PURPOSE_FIELD = "toolUsePurpose"

BuiltInTool = (
    FsRead
    | FsWriteCreate
    | FsWriteStrReplace
    | FsWriteInsert
    | Grep
    | Ls
    | Mkdir
    | ImageRead
    | ExecuteCmd
    | Introspect
    | SpawnSubagent
)

ToolKind = BuiltInTool | McpTool


@dataclass(frozen=True)
class Tool:
    """
    A parsed tool call, ready to be validated and executed.

    Attributes:
        kind: Typed payload of a built-in tool, or an McpTool
        tool_use_purpose: Why the model says it is calling the tool, if given
    """

    kind: ToolKind
    tool_use_purpose: str | None = None

    @property
    def canonical_tool_name(self) -> CanonicalToolName:
        return self.kind.canonical_tool_name()

    @property
    def builtin_tool_name(self) -> BuiltInToolName | None:
        name = self.canonical_tool_name
        return name.name if isinstance(name, BuiltInName) else None

    @property
    def mcp_server_name(self) -> str | None:
        return self.kind.server_name if isinstance(self.kind, McpTool) else None

    @property
    def mcp_tool_name(self) -> str | None:
        return self.kind.tool_name if isinstance(self.kind, McpTool) else None

    async def validate(self, ctx: ToolContext) -> list[str]:
        """Run the tool's pre-execution checks. Empty means valid."""
        return await self.kind.validate_tool(ctx)

    async def execute(self, ctx: ToolContext) -> ToolExecutionOutput:
        return await self.kind.execute(ctx)


def _split_purpose(raw_args: Any) -> tuple[Any, str | None]:
    if not isinstance(raw_args, dict):
        return raw_args, None
    if TOOL_USE_PURPOSE_FIELD not in raw_args:
        return raw_args, None
    args = dict(raw_args)
    purpose = args.pop(TOOL_USE_PURPOSE_FIELD)
    # Stripped for every tool; only a string is kept as the purpose
    return args, purpose if isinstance(purpose, str) else None


def _parse_builtin(name: BuiltInToolName, args: Any) -> BuiltInTool:
    try:
        if name == BuiltInToolName.FS_WRITE:
            return fs_write_adapter.validate_python(args)
        return model_for(name).model_validate(args)
    except ValidationError as e:
        raise ToolParseError(kind=ToolParseErrorKind.SCHEMA_FAILURE, detail=str(e), tool=name.value) from e


def _parse_mcp(name: McpName, args: Any) -> McpTool:
    if not isinstance(args, dict):
        raise ToolParseError(
            kind=ToolParseErrorKind.INVALID_ARGS,
            detail=f"Arguments must be an object, instead found {type(args).__name__}: {args!r}",
            tool=str(name),
        )
    return McpTool(server_name=name.server_name, tool_name=name.tool_name, params=args)


def parse_tool(name: str | CanonicalToolName, raw_args: Any) -> Tool:
    """
    Parse a raw tool use into a Tool.

    Args:
        name: Tool name string or an already resolved CanonicalToolName
        raw_args: JSON-like arguments; the caller's object is never mutated

    Returns:
        Tool carrying the typed payload and the tool use purpose

    Raises:
        ToolParseError: If the name is unknown or the arguments don't fit
    """
    canonical = parse_tool_name(name) if isinstance(name, str) else name
    args, purpose = _split_purpose(raw_args)
    logger.debug("Parsing tool use for %s", canonical)

    if isinstance(canonical, BuiltInName):
        kind: ToolKind = _parse_builtin(canonical.name, args)
    elif isinstance(canonical, McpName):
        kind = _parse_mcp(canonical, args)
    elif isinstance(canonical, AgentName):
        raise ToolParseError(kind=ToolParseErrorKind.OTHER, detail="Unimplemented", tool=str(canonical))
    else:
        raise TypeError(f"Unexpected tool name type: {type(canonical).__name__}")

    return Tool(kind=kind, tool_use_purpose=purpose)
