"""
Dispatch layer for agentcore.

The ToolDispatcher is the entry point a model loop uses to run a tool call.
It coordinates between:
- Parsing: resolve the name and type the raw arguments
- Validation: pre-execution checks that must not mutate anything
- Execution: the built-in tool, or the McpClient for external tools

Execution Flow:
    1. Resolve the tool name into a CanonicalToolName
    2. Parse the raw arguments into a Tool (stripping toolUsePurpose)
    3. Validate; any problems stop the call before it touches anything
    4. Execute and return the ToolExecutionOutput
    5. invoke() folds each outcome into a ToolCallResult

Design Principles:
    - Parse, validation and execution failures are reported, never retried
    - A declared but unwired built-in is a defect and propagates
    - Session state is owned by the caller and passed in per call
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from agentcore.errors import (
    AgentCoreError,
    ToolExecutionError,
    ToolParseError,
    ToolValidationError,
)
from agentcore.schema import CoreConfig, ToolCallStatus
from agentcore.tools.base import McpClient, ToolContext, ToolExecutionOutput
from agentcore.tools.names import CanonicalToolName, parse_tool_name
from agentcore.tools.parse import Tool, parse_tool
from agentcore.tools.state import ToolState
from agentcore.util.platform import Platform, current_platform
from agentcore.util.providers import RealProvider, SystemProvider

logger = logging.getLogger(__name__)


@dataclass
class ToolCallResult:
    """
    Result of dispatching a single tool call.

    Attributes:
        tool_name: Tool name as given by the caller
        status: Outcome status
        output: Output if successful
        error: Error message if the call failed
        error_code: Numeric code of the error, if any
        tool_use_purpose: Purpose stated by the model, if parsing got that far
        duration_ms: Time spent in the dispatcher in milliseconds
    """

    tool_name: str
    status: ToolCallStatus
    output: ToolExecutionOutput | None = None
    error: str | None = None
    error_code: int | None = None
    tool_use_purpose: str | None = None
    duration_ms: float = 0.0

    @property
    def success(self) -> bool:
        """Whether the call executed successfully."""
        return self.status == ToolCallStatus.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "tool_name": self.tool_name,
            "status": self.status.value,
            "output": self.output.to_dict() if self.output is not None else None,
            "error": self.error,
            "error_code": self.error_code,
            "tool_use_purpose": self.tool_use_purpose,
            "duration_ms": self.duration_ms,
        }


class ToolDispatcher:
    """
    Runs tool calls end to end.

    Usage:
        dispatcher = ToolDispatcher()
        state = ToolState()
        result = await dispatcher.invoke("ls", {"path": "."}, state)
        print(result.status, result.output)

    Attributes:
        provider: Resolves relative paths, `~` and environment variables
        config: Limits and shell selection
        platform: OS-family specific behavior
        mcp_client: Transport for "@server/tool" calls, if any
    """

    def __init__(
        self,
        provider: SystemProvider | None = None,
        config: CoreConfig | None = None,
        platform: Platform | None = None,
        mcp_client: McpClient | None = None,
    ) -> None:
        self.provider = provider or RealProvider()
        self.config = config or CoreConfig()
        self.platform = platform or current_platform()
        self.mcp_client = mcp_client

    def context(self, state: ToolState | None = None) -> ToolContext:
        """Build the ToolContext for one call."""
        return ToolContext(
            provider=self.provider,
            config=self.config,
            platform=self.platform,
            state=state,
            mcp_client=self.mcp_client,
        )

    def resolve(self, name: str) -> CanonicalToolName:
        """
        Resolve a tool name string.

        Raises:
            ToolParseError: If no tool has that name
        """
        return parse_tool_name(name)

    def parse(self, name: str | CanonicalToolName, args: Any) -> Tool:
        """
        Parse a raw tool use into a Tool.

        Raises:
            ToolParseError: If the name or arguments are rejected
        """
        return parse_tool(name, args)

    async def execute(self, tool: Tool, state: ToolState | None = None) -> ToolExecutionOutput:
        """
        Validate and then execute a parsed tool.

        Args:
            tool: The parsed tool
            state: Session state updated by the tool, if any

        Returns:
            ToolExecutionOutput of the tool

        Raises:
            ToolValidationError: If validation found problems (nothing ran)
            ToolExecutionError: If the tool failed while running
            ToolNotImplementedError: If the tool is declared but unwired
        """
        ctx = self.context(state)
        name = str(tool.canonical_tool_name)

        logger.debug("Validating %s", name)
        errors = await tool.validate(ctx)
        if errors:
            raise ToolValidationError(tool=name, errors=errors)

        logger.debug("Executing %s", name)
        return await tool.execute(ctx)

    async def invoke(self, name: str, args: Any, state: ToolState | None = None) -> ToolCallResult:
        """
        Parse, validate and execute a tool call, reporting every outcome.

        Args:
            name: Tool name as given by the model
            args: JSON-like arguments as given by the model
            state: Session state updated by the tool, if any

        Returns:
            ToolCallResult describing the outcome

        Raises:
            ToolNotImplementedError: If the tool is declared but unwired
        """
        start_time = datetime.now(UTC)

        def _finish(result: ToolCallResult) -> ToolCallResult:
            result.duration_ms = (datetime.now(UTC) - start_time).total_seconds() * 1000
            return result

        def _failed(status: ToolCallStatus, error: AgentCoreError, purpose: str | None) -> ToolCallResult:
            return _finish(
                ToolCallResult(
                    tool_name=name,
                    status=status,
                    error=error.message,
                    error_code=error.code,
                    tool_use_purpose=purpose,
                )
            )

        try:
            tool = self.parse(name, args)
        except ToolParseError as e:
            logger.info("Failed to parse tool use for %s: %s", name, e.message)
            return _failed(ToolCallStatus.PARSE_ERROR, e, None)

        try:
            output = await self.execute(tool, state)
        except ToolValidationError as e:
            logger.info("Validation failed for %s: %s", name, e.message)
            return _failed(ToolCallStatus.VALIDATION_ERROR, e, tool.tool_use_purpose)
        except ToolExecutionError as e:
            logger.warning("Execution failed for %s: %s", name, e.message)
            return _failed(ToolCallStatus.EXECUTION_ERROR, e, tool.tool_use_purpose)

        return _finish(
            ToolCallResult(
                tool_name=name,
                status=ToolCallStatus.SUCCESS,
                output=output,
                tool_use_purpose=tool.tool_use_purpose,
            )
        )
