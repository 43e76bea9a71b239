"""
Tool identity.

Every tool has exactly one canonical name. Built-in tools are addressed by
their wire name ("fsWrite"); externally registered MCP tools by the pair
(server_name, tool_name), written "@server/tool"; agents are reserved and
written "#agent".
"""

from dataclasses import dataclass
from enum import Enum

from agentcore.errors import ToolParseError, ToolParseErrorKind


class BuiltInToolName(str, Enum):
    """Wire names of the built-in tools, in catalog order."""

    FS_READ = "fsRead"
    FS_WRITE = "fsWrite"
    EXECUTE_CMD = "executeCmd"
    IMAGE_READ = "imageRead"
    LS = "ls"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BuiltInName:
    """Canonical name of a built-in tool."""

    name: BuiltInToolName

    def __str__(self) -> str:
        return self.name.value


@dataclass(frozen=True)
class McpName:
    """
    Canonical name of an externally registered tool.

    The tool name alone is not unique; two servers may expose tools with
    the same name.
    """

    server_name: str
    tool_name: str

    def __str__(self) -> str:
        return f"@{self.server_name}/{self.tool_name}"


@dataclass(frozen=True)
class AgentName:
    """Canonical name of an agent. Reserved: agents cannot be invoked yet."""

    agent_name: str

    def __str__(self) -> str:
        return f"#{self.agent_name}"


CanonicalToolName = BuiltInName | McpName | AgentName


def parse_tool_name(name: str) -> CanonicalToolName:
    """
    Resolve a tool name string into a CanonicalToolName.

    Raises:
        ToolParseError: If the name is malformed or names no built-in tool
    """
    if name.startswith("@"):
        server_name, sep, tool_name = name[1:].partition("/")
        if not sep or not server_name or not tool_name:
            raise ToolParseError(kind=ToolParseErrorKind.NAME_DOES_NOT_EXIST, detail=name, tool=name)
        return McpName(server_name=server_name, tool_name=tool_name)

    if name.startswith("#"):
        if len(name) == 1:
            raise ToolParseError(kind=ToolParseErrorKind.NAME_DOES_NOT_EXIST, detail=name, tool=name)
        return AgentName(agent_name=name[1:])

    try:
        return BuiltInName(BuiltInToolName(name))
    except ValueError as e:
        raise ToolParseError(kind=ToolParseErrorKind.NAME_DOES_NOT_EXIST, detail=name, tool=name) from e
