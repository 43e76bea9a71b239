"""
Tools module for agentcore.

This module provides the tool identity model, the built-in tools and the
parser that turns raw tool uses into typed Tools.

Built-in tools:
    - fsRead: Read a text file
    - fsWrite: Create a file, replace a string in it, or insert content
    - executeCmd: Run a shell command
    - imageRead: Read images as raw bytes
    - ls: List a directory breadth-first

Externally registered tools are addressed as "@server/tool" and forwarded
to an McpClient.

Architecture:
    - BuiltInToolModel: Base class of the typed built-in payloads
    - ToolContext: Runtime context passed to tools (provider, config, state)
    - ToolExecutionOutput: Ordered items returned by a successful execution
    - Tool: A parsed call, produced by parse_tool()
"""

from agentcore.tools.base import (
    BuiltInToolModel,
    ImageBlock,
    ImageFormat,
    ImageItem,
    JsonItem,
    McpClient,
    TextItem,
    ToolContext,
    ToolExecutionOutput,
)
from agentcore.tools.catalog import all_tool_specs, list_builtin_tools, spec_for
from agentcore.tools.names import (
    AgentName,
    BuiltInName,
    BuiltInToolName,
    CanonicalToolName,
    McpName,
    parse_tool_name,
)
from agentcore.tools.parse import Tool, parse_tool
from agentcore.tools.state import FileLineTracker, ToolState

__all__ = [
    "AgentName",
    "BuiltInName",
    "BuiltInToolModel",
    "BuiltInToolName",
    "CanonicalToolName",
    "FileLineTracker",
    "ImageBlock",
    "ImageFormat",
    "ImageItem",
    "JsonItem",
    "McpClient",
    "McpName",
    "TextItem",
    "Tool",
    "ToolContext",
    "ToolExecutionOutput",
    "ToolState",
    "all_tool_specs",
    "list_builtin_tools",
    "parse_tool",
    "parse_tool_name",
    "spec_for",
]
