"""
Unit tests for tool identity and the built-in tool catalog.

Tests cover:
- Canonical name parsing and string forms
- Catalog order and specs
- Description and schema sources
"""

import pytest

from agentcore.errors import ToolParseError, ToolParseErrorKind
from agentcore.tools.base import ImageFormat, clean_json_schema
from agentcore.tools.catalog import all_tool_specs, list_builtin_tools, model_for, spec_for
from agentcore.tools.execute_cmd import ExecuteCmd
from agentcore.tools.fs_read import FsRead
from agentcore.tools.fs_write import FsWriteCommand
from agentcore.tools.names import (
    AgentName,
    BuiltInName,
    BuiltInToolName,
    McpName,
    parse_tool_name,
)


# =============================================================================
# Name Tests
# =============================================================================


class TestBuiltInToolName:
    """Tests for BuiltInToolName."""

    def test_wire_names(self) -> None:
        assert [name.value for name in BuiltInToolName] == [
            "fsRead",
            "fsWrite",
            "executeCmd",
            "imageRead",
            "ls",
        ]

    def test_str_is_wire_name(self) -> None:
        assert str(BuiltInToolName.FS_WRITE) == "fsWrite"


class TestParseToolName:
    """Tests for parse_tool_name."""

    def test_builtin(self) -> None:
        assert parse_tool_name("fsWrite") == BuiltInName(BuiltInToolName.FS_WRITE)

    def test_mcp(self) -> None:
        name = parse_tool_name("@github/create_issue")
        assert name == McpName(server_name="github", tool_name="create_issue")
        assert str(name) == "@github/create_issue"

    def test_mcp_tool_name_may_contain_slash(self) -> None:
        name = parse_tool_name("@srv/a/b")
        assert name == McpName(server_name="srv", tool_name="a/b")

    def test_agent(self) -> None:
        name = parse_tool_name("#reviewer")
        assert name == AgentName(agent_name="reviewer")
        assert str(name) == "#reviewer"

    @pytest.mark.parametrize("bad", ["fs_write", "grep", "", "@srv", "@/tool", "@srv/", "#"])
    def test_unknown_names(self, bad: str) -> None:
        with pytest.raises(ToolParseError) as exc_info:
            parse_tool_name(bad)
        assert exc_info.value.kind == ToolParseErrorKind.NAME_DOES_NOT_EXIST

    def test_same_tool_name_on_two_servers(self) -> None:
        """MCP identity is the (server, tool) pair."""
        assert parse_tool_name("@a/search") != parse_tool_name("@b/search")


# =============================================================================
# Catalog Tests
# =============================================================================


class TestCatalog:
    """Tests for the catalog functions."""

    def test_list_builtin_tools_in_enum_order(self) -> None:
        assert list_builtin_tools() == [BuiltInName(name) for name in BuiltInToolName]

    def test_model_for(self) -> None:
        assert model_for("fsRead") is FsRead
        assert model_for(BuiltInToolName.FS_WRITE) is FsWriteCommand
        assert model_for(BuiltInName(BuiltInToolName.EXECUTE_CMD)) is ExecuteCmd

    def test_model_for_unknown(self) -> None:
        with pytest.raises(ValueError):
            model_for("grep")

    def test_spec_names(self) -> None:
        for name in BuiltInToolName:
            assert spec_for(name).name == name.value

    def test_specs_are_deterministic(self) -> None:
        assert spec_for("ls") == spec_for("ls")
        assert all_tool_specs() == all_tool_specs()

    def test_spec_schema_is_a_copy(self) -> None:
        """Mutating a returned schema does not affect later specs."""
        spec = spec_for("ls")
        spec.input_schema["properties"].clear()
        assert "path" in spec_for("ls").input_schema["properties"]

    def test_all_tool_specs(self) -> None:
        specs = all_tool_specs()
        assert [spec.name for spec in specs] == [name.value for name in BuiltInToolName]
        for spec in specs:
            assert spec.description.strip()
            assert spec.input_schema["type"] == "object"

    def test_image_read_description_lists_formats(self) -> None:
        description = spec_for("imageRead").description
        assert "{IMAGE_FORMATS}" not in description
        for fmt in ImageFormat:
            assert fmt.value in description

    def test_fs_write_schema(self) -> None:
        schema = spec_for("fsWrite").input_schema
        assert schema["required"] == ["command", "path"]
        assert schema["properties"]["command"]["enum"] == ["create", "strReplace", "insert"]
        assert "oldStr" in schema["properties"]
        assert "insertLine" in schema["properties"]

    def test_ls_schema(self) -> None:
        schema = spec_for("ls").input_schema
        assert schema["required"] == ["path"]
        assert schema["properties"]["ignore"]["type"] == "array"

    def test_fs_read_schema_is_generated(self) -> None:
        """fsRead's schema comes from its model, without pydantic noise."""
        schema = spec_for("fsRead").input_schema
        assert schema["required"] == ["path"]
        assert set(schema["properties"]) == {"path", "offset", "limit"}
        assert "title" not in schema
        assert "title" not in schema["properties"]["path"]


class TestCleanJsonSchema:
    """Tests for clean_json_schema."""

    def test_strips_pydantic_keys(self) -> None:
        schema = {
            "title": "X",
            "description": "doc",
            "$defs": {},
            "type": "object",
            "properties": {"a": {"title": "A", "type": "string"}},
        }
        assert clean_json_schema(schema) == {
            "type": "object",
            "properties": {"a": {"type": "string"}},
            "required": [],
        }
