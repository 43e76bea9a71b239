"""
Unit tests for schema validation.

Tests cover:
- ToolSpec and ToolCallRequest models
- Config models and their defaults
- YAML/JSON loading helpers
- Edge cases and error handling
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from agentcore.errors import ConfigError
from agentcore.schema import (
    MAX_ENTRY_COUNT_PER_DIR,
    MAX_IMAGE_SIZE_BYTES,
    MAX_LS_ENTRIES,
    CoreConfig,
    LsConfig,
    ToolCallRequest,
    ToolCallStatus,
    ToolSpec,
    load_config,
    load_config_from_string,
    load_tool_call,
)


# =============================================================================
# Model Tests
# =============================================================================


class TestToolSpec:
    """Tests for ToolSpec model."""

    def test_valid_spec(self) -> None:
        spec = ToolSpec(name="ls", description="d", input_schema={"type": "object"})
        assert spec.name == "ls"

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ToolSpec(name="", description="d", input_schema={})

    def test_frozen(self) -> None:
        spec = ToolSpec(name="ls", description="d", input_schema={})
        with pytest.raises(ValidationError):
            spec.name = "other"  # type: ignore[misc]


class TestToolCallRequest:
    """Tests for ToolCallRequest model."""

    def test_args_default_to_empty(self) -> None:
        request = ToolCallRequest(tool="ls")
        assert request.args == {}

    def test_args_are_untyped(self) -> None:
        """Argument shape is checked later, by the tool."""
        request = ToolCallRequest(tool="@srv/t", args=[1, 2])
        assert request.args == [1, 2]

    def test_extra_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ToolCallRequest(tool="ls", extra="x")  # type: ignore[call-arg]


class TestToolCallStatus:
    """Tests for ToolCallStatus enum."""

    def test_values(self) -> None:
        assert ToolCallStatus.SUCCESS.value == "success"
        assert ToolCallStatus.PARSE_ERROR.value == "parse_error"
        assert ToolCallStatus.VALIDATION_ERROR.value == "validation_error"
        assert ToolCallStatus.EXECUTION_ERROR.value == "execution_error"


# =============================================================================
# Config Tests
# =============================================================================


class TestCoreConfig:
    """Tests for config defaults and overrides."""

    def test_defaults_match_limits(self) -> None:
        config = CoreConfig()
        assert config.tools.ls.max_entries == MAX_LS_ENTRIES
        assert config.tools.ls.max_entries_per_dir == MAX_ENTRY_COUNT_PER_DIR
        assert config.tools.image_read.max_size_bytes == MAX_IMAGE_SIZE_BYTES
        assert config.tools.execute_cmd.shell is None
        assert config.tools.execute_cmd.shell_env_var == "AGENTCORE_CHAT_SHELL"
        assert ".git" in config.tools.ls.ignore_directories
        assert "node_modules" in config.tools.ls.ignore_directories

    def test_limits_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            LsConfig(max_entries=0)

    def test_unknown_keys_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CoreConfig.model_validate({"tools": {"grep": {}}})


class TestLoadConfig:
    """Tests for the config loaders."""

    def test_load_from_string(self, sample_config_yaml: str) -> None:
        """Sections are keyed by wire tool names."""
        config = load_config_from_string(sample_config_yaml)
        assert config.log_level == "DEBUG"
        assert config.tools.ls.max_entries == 50
        assert config.tools.fs_read.max_bytes == 1024
        assert config.tools.execute_cmd.shell == "bash"
        # Untouched sections keep their defaults
        assert config.tools.image_read.max_size_bytes == MAX_IMAGE_SIZE_BYTES

    def test_empty_document_is_default(self) -> None:
        assert load_config_from_string("") == CoreConfig()

    def test_invalid_yaml(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_string("tools: [unclosed")
        assert "Invalid YAML" in exc_info.value.message

    def test_schema_mismatch(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_string("tools:\n  ls:\n    max_entries: -1\n")
        assert "Invalid config" in exc_info.value.message

    def test_load_from_file(self, temp_dir: Path, sample_config_yaml: str) -> None:
        path = temp_dir / "agentcore.yaml"
        path.write_text(sample_config_yaml)
        config = load_config(path)
        assert config.tools.ls.max_entries == 50

    def test_missing_file(self, temp_dir: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(temp_dir / "missing.yaml")
        assert exc_info.value.path.endswith("missing.yaml")


class TestLoadToolCall:
    """Tests for load_tool_call."""

    def test_yaml_call(self, temp_dir: Path) -> None:
        path = temp_dir / "call.yaml"
        path.write_text("tool: ls\nargs:\n  path: .\n  depth: 1\n")
        request = load_tool_call(path)
        assert request.tool == "ls"
        assert request.args == {"path": ".", "depth": 1}

    def test_json_call(self, temp_dir: Path) -> None:
        path = temp_dir / "call.json"
        path.write_text('{"tool": "fsWrite", "args": {"command": "create", "path": "a", "content": "x"}}')
        request = load_tool_call(path)
        assert request.tool == "fsWrite"
        assert request.args["command"] == "create"

    def test_invalid_json(self, temp_dir: Path) -> None:
        path = temp_dir / "call.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            load_tool_call(path)

    def test_missing_tool(self, temp_dir: Path) -> None:
        path = temp_dir / "call.yaml"
        path.write_text("args: {}\n")
        with pytest.raises(ConfigError):
            load_tool_call(path)
