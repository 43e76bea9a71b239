"""
Externally registered (MCP) tools.

An MCP tool is addressed by the pair (server_name, tool_name) and takes an
arbitrary JSON object as parameters. agentcore does not speak the MCP
transport itself; calls are forwarded to the McpClient in the ToolContext.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from agentcore.errors import CustomExecutionError, IoExecutionError
from agentcore.tools.base import (
    JsonItem,
    McpClient,
    ToolContext,
    ToolExecutionOutput,
)
from agentcore.tools.names import McpName

logger = logging.getLogger(__name__)

__all__ = ["McpClient", "McpTool"]


@dataclass(frozen=True)
class McpTool:
    """
    A call to an externally registered tool.

    Attributes:
        server_name: Server the tool is registered on
        tool_name: Tool name on that server
        params: JSON object passed through unchanged
    """

    server_name: str
    tool_name: str
    params: dict[str, Any] = field(default_factory=dict)

    def canonical_tool_name(self) -> McpName:
        return McpName(server_name=self.server_name, tool_name=self.tool_name)

    async def validate_tool(self, ctx: ToolContext) -> list[str]:
        # The server validates its own parameters.
        return []

    async def execute(self, ctx: ToolContext) -> ToolExecutionOutput:
        if ctx.mcp_client is None:
            raise CustomExecutionError(
                message=f"No MCP client is available to call {self.canonical_tool_name()}"
            )

        logger.debug("Forwarding %s to MCP client", self.canonical_tool_name())
        try:
            result = await ctx.mcp_client.call_tool(self.server_name, self.tool_name, dict(self.params))
        except OSError as e:
            raise IoExecutionError(io_context=f"failed to call {self.canonical_tool_name()}", source=e) from e

        if isinstance(result, ToolExecutionOutput):
            return result
        if isinstance(result, str):
            return ToolExecutionOutput.text(result)
        return ToolExecutionOutput([JsonItem(result)])
