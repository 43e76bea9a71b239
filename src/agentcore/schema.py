"""
Schema definitions for agentcore.

This module defines the Pydantic models shared across agentcore:
- ToolSpec: Machine-readable description of a tool (name, description, schema)
- ToolCallRequest: A raw tool call as read from a file or the CLI
- ToolCallStatus: Outcome of a dispatched tool call
- CoreConfig and the per-tool config models: Limits and shell selection

Design Decisions:
    - Config models are frozen and forbid unknown keys
    - Defaults reproduce the built-in limits, so an empty config is valid
    - Per-tool sections use the wire tool names as YAML keys (fsRead, ls, ...)
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from agentcore.errors import ConfigError

# Maximum size of an image accepted by imageRead.
MAX_IMAGE_SIZE_BYTES = 10 * 1024 * 1024

# Maximum number of entry lines returned by ls.
MAX_LS_ENTRIES = 1000

# Maximum number of entries read from a single directory by ls.
MAX_ENTRY_COUNT_PER_DIR = 10_000

# Maximum number of bytes returned by fsRead.
MAX_FS_READ_BYTES = 250_000

# Environment variable selecting the shell used by executeCmd.
SHELL_ENV_VAR = "AGENTCORE_CHAT_SHELL"


# =============================================================================
# Enums
# =============================================================================


class ToolCallStatus(str, Enum):
    """Outcome of a dispatched tool call."""

    SUCCESS = "success"
    PARSE_ERROR = "parse_error"
    VALIDATION_ERROR = "validation_error"
    EXECUTION_ERROR = "execution_error"


# =============================================================================
# Tool Specs
# =============================================================================


class ToolSpec(BaseModel):
    """
    Machine-readable description of a tool, as published to a model.

    Attributes:
        name: Wire name of the tool
        description: Prose description shown to the model
        input_schema: JSON schema of the tool arguments
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="Wire name of the tool")
    description: str = Field(..., description="Description shown to the model")
    input_schema: dict[str, Any] = Field(..., description="JSON schema of the arguments")


class ToolCallRequest(BaseModel):
    """
    A raw tool call: a tool name plus JSON-like arguments.

    Attributes:
        tool: Canonical tool name (e.g. "fsWrite", "@server/tool")
        args: Arguments passed to the tool, untyped
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tool: str = Field(..., min_length=1, description="Canonical tool name")
    args: Any = Field(default_factory=dict, description="Arguments passed to the tool")


# =============================================================================
# Config Models
# =============================================================================


class FsReadConfig(BaseModel):
    """
    Limits for the fsRead tool.

    Attributes:
        max_bytes: Maximum number of bytes of file content returned
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_bytes: int = Field(
        default=MAX_FS_READ_BYTES,
        description="Maximum number of bytes of file content returned",
        gt=0,
    )


class LsConfig(BaseModel):
    """
    Limits for the ls tool.

    Attributes:
        max_entries: Maximum number of entry lines across the whole listing
        max_entries_per_dir: Entry count above which a directory is flagged as exceeded
        ignore_directories: Directory names that are listed but never descended
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_entries: int = Field(
        default=MAX_LS_ENTRIES,
        description="Maximum number of entry lines across the whole listing",
        gt=0,
    )
    max_entries_per_dir: int = Field(
        default=MAX_ENTRY_COUNT_PER_DIR,
        description="Entry count above which a directory is flagged as exceeded",
        gt=0,
    )
    ignore_directories: list[str] = Field(
        default_factory=lambda: ["node_modules", "bin", "build", "dist", "out", ".cache", ".git"],
        description="Directory names that are listed but never descended into",
    )


class ImageReadConfig(BaseModel):
    """
    Limits for the imageRead tool.

    Attributes:
        max_size_bytes: Maximum size of a single image
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_size_bytes: int = Field(
        default=MAX_IMAGE_SIZE_BYTES,
        description="Maximum size of a single image in bytes",
        gt=0,
    )


class ExecuteCmdConfig(BaseModel):
    """
    Shell selection for the executeCmd tool.

    The environment variable named by `shell_env_var` wins over `shell`,
    which wins over the platform default.

    Attributes:
        shell: Shell binary to use instead of the platform default
        shell_env_var: Environment variable that overrides the shell
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    shell: str | None = Field(
        default=None,
        description="Shell binary to use instead of the platform default",
    )
    shell_env_var: str = Field(
        default=SHELL_ENV_VAR,
        description="Environment variable that overrides the shell",
        min_length=1,
    )


class ToolConfigs(BaseModel):
    """
    Container for all tool-specific config sections.

    Attributes:
        fs_read: Config for fsRead
        ls: Config for ls
        image_read: Config for imageRead
        execute_cmd: Config for executeCmd
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    # Aliases match the wire tool names used in YAML
    fs_read: FsReadConfig = Field(default_factory=FsReadConfig, alias="fsRead")
    ls: LsConfig = Field(default_factory=LsConfig, alias="ls")
    image_read: ImageReadConfig = Field(default_factory=ImageReadConfig, alias="imageRead")
    execute_cmd: ExecuteCmdConfig = Field(default_factory=ExecuteCmdConfig, alias="executeCmd")


class CoreConfig(BaseModel):
    """
    Complete agentcore configuration.

    Attributes:
        tools: Tool-specific config sections
        log_level: Level used when the CLI configures logging
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    tools: ToolConfigs = Field(default_factory=ToolConfigs)
    log_level: str = Field(default="WARNING", description="Logging level for the CLI")


# =============================================================================
# Loading Helpers
# =============================================================================


def _load_yaml(content: str, source: str) -> Any:
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(message=f"Invalid YAML in {source}: {e}", path=source) from e


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(message=f"Unable to read {path}: {e}", path=str(path)) from e


def load_config_from_string(content: str, source: str = "<string>") -> CoreConfig:
    """
    Load a config from a YAML string.

    An empty document yields the default config.

    Raises:
        ConfigError: If the YAML is malformed or doesn't match the schema
    """
    data = _load_yaml(content, source) or {}
    try:
        return CoreConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(message=f"Invalid config in {source}: {e}", path=source) from e


def load_config(path: Path | str) -> CoreConfig:
    """
    Load a config from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        Validated CoreConfig object

    Raises:
        ConfigError: If the file can't be read or doesn't match the schema
    """
    path = Path(path)
    return load_config_from_string(_read(path), source=str(path))


def load_tool_call(path: Path | str) -> ToolCallRequest:
    """
    Load a single tool call from a YAML or JSON file.

    The file holds a mapping with a `tool` name and optional `args`.

    Raises:
        ConfigError: If the file can't be read or doesn't match the schema
    """
    path = Path(path)
    content = _read(path)
    if path.suffix == ".json":
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ConfigError(message=f"Invalid JSON in {path}: {e}", path=str(path)) from e
    else:
        data = _load_yaml(content, str(path))
    try:
        return ToolCallRequest.model_validate(data)
    except ValidationError as e:
        raise ConfigError(message=f"Invalid tool call in {path}: {e}", path=str(path)) from e
