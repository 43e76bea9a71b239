"""
Built-in tools that are declared but not wired up.

Grep, Mkdir, Introspect and SpawnSubagent are reserved members of the
built-in tool set. They have no wire name and no implementation yet;
reaching any of them raises ToolNotImplementedError.
"""

from dataclasses import dataclass, field
from typing import Any

from agentcore.errors import ToolNotImplementedError
from agentcore.tools.base import ToolContext, ToolExecutionOutput
from agentcore.tools.names import BuiltInName


@dataclass(frozen=True)
class UnwiredBuiltInTool:
    """Base of the reserved built-ins. Holds the raw arguments only."""

    args: dict[str, Any] = field(default_factory=dict)

    def _not_implemented(self) -> ToolNotImplementedError:
        return ToolNotImplementedError(tool=self.__class__.__name__)

    def canonical_tool_name(self) -> BuiltInName:
        raise self._not_implemented()

    async def validate_tool(self, ctx: ToolContext) -> list[str]:
        raise self._not_implemented()

    async def execute(self, ctx: ToolContext) -> ToolExecutionOutput:
        raise self._not_implemented()


class Grep(UnwiredBuiltInTool):
    """Content search. Reserved."""


class Mkdir(UnwiredBuiltInTool):
    """Directory creation. Reserved."""


class Introspect(UnwiredBuiltInTool):
    """Self-description of the agent. Reserved."""


class SpawnSubagent(UnwiredBuiltInTool):
    """Subagent launch. Reserved."""


UNWIRED_TOOLS: tuple[type[UnwiredBuiltInTool], ...] = (Grep, Mkdir, Introspect, SpawnSubagent)
