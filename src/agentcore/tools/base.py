"""
Base classes for the tool interface.

This module defines the core abstractions shared by every built-in tool:
- BuiltInToolModel: Base class of the typed built-in tool payloads
- ToolContext: Runtime context passed to validation and execution
- ToolExecutionOutput: The ordered items a successful execution returns
- McpClient: The interface MCP tool calls are forwarded through

Design Principles:
    - Tool payloads are immutable pydantic models parsed from raw arguments
    - Validation reports problems as prose and never mutates anything
    - Execution returns ToolExecutionOutput or raises ToolExecutionError
    - Tools hold no state; session state arrives through ToolContext
"""

import base64
import copy
from abc import abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from agentcore.schema import CoreConfig, ToolSpec
from agentcore.tools.names import BuiltInName, BuiltInToolName
from agentcore.tools.state import ToolState
from agentcore.util.platform import Platform, current_platform
from agentcore.util.providers import RealProvider, SystemProvider


# =============================================================================
# Output Model
# =============================================================================


class ImageFormat(str, Enum):
    """Image formats that can be passed through to a model."""

    PNG = "png"
    JPEG = "jpeg"
    GIF = "gif"
    WEBP = "webp"

    @classmethod
    def from_extension(cls, extension: str) -> "ImageFormat | None":
        """Map a file extension (without dot, any case) to a format."""
        ext = extension.lower()
        if ext == "jpg":
            ext = "jpeg"
        try:
            return cls(ext)
        except ValueError:
            return None


@dataclass(frozen=True)
class ImageBlock:
    """Raw image bytes tagged with their format. The bytes are not decoded."""

    format: ImageFormat
    source: bytes


@dataclass(frozen=True)
class TextItem:
    """Plain text output."""

    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class JsonItem:
    """Structured JSON output."""

    value: Any

    def to_dict(self) -> dict[str, Any]:
        return {"type": "json", "value": self.value}


@dataclass(frozen=True)
class ImageItem:
    """Image output."""

    image: ImageBlock

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "image",
            "format": self.image.format.value,
            "bytes": base64.b64encode(self.image.source).decode("ascii"),
        }


ToolExecutionOutputItem = TextItem | JsonItem | ImageItem


def _default_items() -> list[ToolExecutionOutputItem]:
    return [TextItem("")]


@dataclass
class ToolExecutionOutput:
    """
    Ordered output of a successful tool execution.

    There is always at least one item. A tool with nothing to report
    returns a single empty TextItem.
    """

    items: list[ToolExecutionOutputItem] = field(default_factory=_default_items)

    def __post_init__(self) -> None:
        if not self.items:
            self.items = _default_items()

    @classmethod
    def text(cls, text: str) -> "ToolExecutionOutput":
        """Create an output holding a single text item."""
        return cls([TextItem(text)])

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"items": [item.to_dict() for item in self.items]}


# =============================================================================
# Execution Context
# =============================================================================


@runtime_checkable
class McpClient(Protocol):
    """Transport to externally registered (MCP) tool servers."""

    async def call_tool(self, server_name: str, tool_name: str, params: dict[str, Any]) -> Any:
        """
        Invoke `tool_name` on `server_name`.

        May return a ToolExecutionOutput, a string, or any JSON-like value.
        """
        ...


@dataclass
class ToolContext:
    """
    Runtime context passed to tools during validation and execution.

    Attributes:
        provider: Resolves the working directory, home and environment
        config: Limits and shell selection
        platform: OS-family specific behavior
        state: Session state, if the caller keeps any
        mcp_client: Transport for MCP tools, if any are reachable
    """

    provider: SystemProvider = field(default_factory=RealProvider)
    config: CoreConfig = field(default_factory=CoreConfig)
    platform: Platform = field(default_factory=current_platform)
    state: ToolState | None = None
    mcp_client: McpClient | None = None


# =============================================================================
# Built-in Tool Base
# =============================================================================


def clean_json_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Strip pydantic-specific keys from a generated JSON schema."""
    cleaned = {
        k: v
        for k, v in schema.items()
        if k not in ("$defs", "title", "$schema", "definitions", "description")
    }
    cleaned.setdefault("type", "object")
    cleaned.setdefault("properties", {})
    cleaned.setdefault("required", [])
    for prop in cleaned["properties"].values():
        if isinstance(prop, dict):
            prop.pop("title", None)
    return cleaned


class BuiltInToolModel(BaseModel):
    """
    Abstract base class for the typed built-in tool payloads.

    Subclasses set:
        tool_name - the BuiltInToolName the payload belongs to
        TOOL_DESCRIPTION - prose shown to the model
        INPUT_SCHEMA - hand-written JSON schema, or None to generate one

    and implement execute(). Override validate_tool() to add semantic
    checks that must pass before execution.
    """

    # Unknown fields are ignored; wrong JSON types are rejected.
    model_config = ConfigDict(frozen=True, extra="ignore", strict=True, populate_by_name=True)

    tool_name: ClassVar[BuiltInToolName]
    TOOL_DESCRIPTION: ClassVar[str] = ""
    INPUT_SCHEMA: ClassVar[dict[str, Any] | None] = None

    @classmethod
    def description(cls) -> str:
        """Description shown to the model."""
        return cls.TOOL_DESCRIPTION

    @classmethod
    def input_schema(cls) -> dict[str, Any]:
        """JSON schema of the tool arguments."""
        if cls.INPUT_SCHEMA is not None:
            return copy.deepcopy(cls.INPUT_SCHEMA)
        return clean_json_schema(cls.model_json_schema(by_alias=True))

    @classmethod
    def tool_spec(cls) -> ToolSpec:
        """Build the machine-readable spec for this tool."""
        return ToolSpec(
            name=cls.tool_name.value,
            description=cls.description(),
            input_schema=cls.input_schema(),
        )

    def canonical_tool_name(self) -> BuiltInName:
        """Canonical name of the tool this payload invokes."""
        return BuiltInName(self.tool_name)

    async def validate_tool(self, ctx: ToolContext) -> list[str]:
        """
        Check that the tool can run.

        Must not mutate anything. The default implementation accepts
        every payload.

        Returns:
            Problems found, in check order (empty if valid)
        """
        return []

    @abstractmethod
    async def execute(self, ctx: ToolContext) -> ToolExecutionOutput:
        """
        Run the tool.

        Called only after validate_tool() returned no errors.

        Raises:
            ToolExecutionError: On IO or domain failures
        """
        ...
