"""
Exception hierarchy for agentcore.

All agentcore exceptions inherit from AgentCoreError, allowing callers to catch
every agentcore-specific failure with a single except clause.

Exception Categories:
    - ToolParseError: The tool name or argument shape was rejected
    - ToolValidationError: A pre-execution check failed (nothing was mutated)
    - ToolExecutionError: The tool failed while running (IO or domain failure)
    - ConfigError: Configuration could not be loaded
    - ToolNotImplementedError: A declared built-in was reached but is not wired

Design Principles:
    - All errors have error codes for programmatic handling
    - Messages are plain prose; the consumer is usually a language model
    - IO errors keep the underlying OSError for diagnostics
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# =============================================================================
# Error Codes
# =============================================================================

# Parse errors: 1xxx
ERROR_PARSE_NAME_DOES_NOT_EXIST = 1001
ERROR_PARSE_SCHEMA_FAILURE = 1002
ERROR_PARSE_INVALID_ARGS = 1003
ERROR_PARSE_OTHER = 1004

# Validation errors: 2xxx
ERROR_VALIDATION_FAILED = 2001

# Execution errors: 3xxx
ERROR_EXECUTION_IO = 3001
ERROR_EXECUTION_CUSTOM = 3002
ERROR_TOOL_NOT_IMPLEMENTED = 3003

# Config errors: 4xxx
ERROR_CONFIG_INVALID = 4001


# =============================================================================
# Base Exception
# =============================================================================


@dataclass
class AgentCoreError(Exception):
    """
    Base exception for all agentcore errors.

    Attributes:
        message: Human-readable error description
        code: Numeric error code for programmatic handling
        suggestion: Optional hint for how to resolve the error
        context: Optional dict with additional debugging info
    """

    message: str = ""
    code: int = 0
    suggestion: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Format error for display."""
        parts = [f"[E{self.code}] {self.message}"]
        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")
        return "".join(parts)

    def __repr__(self) -> str:
        """Format error for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code}, "
            f"context={self.context!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "suggestion": self.suggestion,
            "context": self.context,
        }


# =============================================================================
# Parse Errors
# =============================================================================


class ToolParseErrorKind(str, Enum):
    """Stage at which turning a raw tool use into a Tool failed."""

    NAME_DOES_NOT_EXIST = "name_does_not_exist"
    SCHEMA_FAILURE = "schema_failure"
    INVALID_ARGS = "invalid_args"
    OTHER = "other"


_PARSE_CODES = {
    ToolParseErrorKind.NAME_DOES_NOT_EXIST: ERROR_PARSE_NAME_DOES_NOT_EXIST,
    ToolParseErrorKind.SCHEMA_FAILURE: ERROR_PARSE_SCHEMA_FAILURE,
    ToolParseErrorKind.INVALID_ARGS: ERROR_PARSE_INVALID_ARGS,
    ToolParseErrorKind.OTHER: ERROR_PARSE_OTHER,
}

_PARSE_TEMPLATES = {
    ToolParseErrorKind.NAME_DOES_NOT_EXIST: "A tool with the name '{}' does not exist",
    ToolParseErrorKind.SCHEMA_FAILURE: "The tool input does not match the tool schema: {}",
    ToolParseErrorKind.INVALID_ARGS: "The tool arguments failed validation: {}",
    ToolParseErrorKind.OTHER: "An unexpected error occurred parsing the tools: {}",
}


@dataclass
class ToolParseError(AgentCoreError):
    """
    Raised when a tool use cannot be turned into a Tool.

    Parse failures are always recoverable and are reported to the caller
    separately from execution failures.

    Attributes:
        kind: Which parsing stage failed
        detail: The stage-specific detail (tool name, schema error, ...)
        tool: The tool name as given by the caller
    """

    kind: ToolParseErrorKind = ToolParseErrorKind.OTHER
    detail: str = ""
    tool: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = _PARSE_TEMPLATES[self.kind].format(self.detail)
        if self.code == 0:
            self.code = _PARSE_CODES[self.kind]
        if not self.suggestion and self.kind == ToolParseErrorKind.NAME_DOES_NOT_EXIST:
            self.suggestion = "Check the tool name spelling against the tool catalog"
        self.context.update({
            "kind": self.kind.value,
            "detail": self.detail,
            "tool": self.tool,
        })


# =============================================================================
# Validation Errors
# =============================================================================


@dataclass
class ToolValidationError(AgentCoreError):
    """
    Raised when a parsed tool fails its pre-execution checks.

    Attributes:
        tool: Name of the tool that failed validation
        errors: Every individual problem found, in check order
    """

    tool: str = ""
    errors: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = "\n".join(self.errors)
        if self.code == 0:
            self.code = ERROR_VALIDATION_FAILED
        self.context.update({
            "tool": self.tool,
            "errors": list(self.errors),
        })


# =============================================================================
# Execution Errors
# =============================================================================


@dataclass
class ToolExecutionError(AgentCoreError):
    """
    Base class for failures raised while a tool is executing.

    These errors occur after validation has passed. They are reported
    upward to the caller and never retried.
    """

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if self.code == 0:
            self.code = ERROR_EXECUTION_CUSTOM


@dataclass
class IoExecutionError(ToolExecutionError):
    """
    Raised when a filesystem or process operation fails.

    Attributes:
        io_context: What was being attempted, including the path involved
        source: The underlying OS error, if any
    """

    io_context: str = ""
    source: OSError | None = None

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = self.io_context
            if self.source is not None:
                self.message = f"{self.io_context}: {self.source}"
        if self.code == 0:
            self.code = ERROR_EXECUTION_IO
        super().__post_init__()
        self.context["io_context"] = self.io_context
        if self.source is not None:
            self.context["source"] = str(self.source)


@dataclass
class CustomExecutionError(ToolExecutionError):
    """Raised for domain failures such as an ambiguous string replacement."""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if self.code == 0:
            self.code = ERROR_EXECUTION_CUSTOM
        super().__post_init__()


@dataclass
class ToolNotImplementedError(AgentCoreError, NotImplementedError):
    """
    Raised when a declared but unwired built-in tool is reached.

    This is a programming defect, not a tool failure. Dispatch lets it
    propagate instead of turning it into a result.
    """

    tool: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Built-in tool {self.tool} is not implemented"
        if self.code == 0:
            self.code = ERROR_TOOL_NOT_IMPLEMENTED
        self.context["tool"] = self.tool


# =============================================================================
# Config Errors
# =============================================================================


@dataclass
class ConfigError(AgentCoreError):
    """Raised when a config or tool call file cannot be loaded."""

    path: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if self.code == 0:
            self.code = ERROR_CONFIG_INVALID
        self.context["path"] = self.path
