"""
Integration tests for the ToolDispatcher.

Tests cover:
- End-to-end tool calls through invoke()
- Parse, validation and execution failures as results
- Session state across calls
- MCP forwarding
- Unwired built-ins propagating
"""

from pathlib import Path
from typing import Any

import pytest

from agentcore.engine import ToolCallResult, ToolDispatcher
from agentcore.errors import (
    ERROR_PARSE_NAME_DOES_NOT_EXIST,
    ERROR_VALIDATION_FAILED,
    CustomExecutionError,
    ToolNotImplementedError,
    ToolValidationError,
)
from agentcore.schema import ToolCallStatus
from agentcore.tools.base import JsonItem, TextItem
from agentcore.tools.names import BuiltInName, BuiltInToolName, McpName
from agentcore.tools.parse import Tool
from agentcore.tools.state import ToolState
from agentcore.tools.unimplemented import Mkdir


# =============================================================================
# Test Fixtures
# =============================================================================


class RecordingMcpClient:
    """McpClient that records calls and returns a canned result."""

    def __init__(self, result: Any) -> None:
        self.result = result
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    async def call_tool(self, server_name: str, tool_name: str, params: dict[str, Any]) -> Any:
        self.calls.append((server_name, tool_name, params))
        return self.result


@pytest.fixture
def dispatcher(provider) -> ToolDispatcher:
    """Dispatcher resolving relative paths against temp_dir."""
    return ToolDispatcher(provider=provider)


# =============================================================================
# Dispatch Tests
# =============================================================================


class TestResolveAndParse:
    """Tests for resolve() and parse()."""

    def test_resolve(self, dispatcher: ToolDispatcher) -> None:
        assert dispatcher.resolve("ls") == BuiltInName(BuiltInToolName.LS)
        assert dispatcher.resolve("@srv/t") == McpName("srv", "t")

    def test_parse(self, dispatcher: ToolDispatcher) -> None:
        tool = dispatcher.parse("ls", {"path": ".", "toolUsePurpose": "look"})
        assert tool.tool_use_purpose == "look"


class TestInvoke:
    """Tests for invoke()."""

    @pytest.mark.asyncio
    async def test_write_then_read(self, dispatcher: ToolDispatcher, temp_dir: Path) -> None:
        """A file written through fsWrite can be read back with fsRead."""
        state = ToolState()
        write = await dispatcher.invoke(
            "fsWrite",
            {"command": "create", "path": "notes/todo.md", "content": "- item\n", "toolUsePurpose": "record"},
            state,
        )
        assert write.status == ToolCallStatus.SUCCESS
        assert write.success
        assert write.tool_use_purpose == "record"
        assert write.output is not None
        assert write.output.items == [TextItem("")]

        read = await dispatcher.invoke("fsRead", {"path": "notes/todo.md"}, state)
        assert read.success
        assert read.output.items == [TextItem("- item\n")]

        assert str(temp_dir / "notes" / "todo.md") in state.file_line_trackers

    @pytest.mark.asyncio
    async def test_parse_error(self, dispatcher: ToolDispatcher) -> None:
        result = await dispatcher.invoke("readFile", {"path": "x"})
        assert result.status == ToolCallStatus.PARSE_ERROR
        assert result.error == "A tool with the name 'readFile' does not exist"
        assert result.error_code == ERROR_PARSE_NAME_DOES_NOT_EXIST
        assert result.output is None

    @pytest.mark.asyncio
    async def test_validation_error(self, dispatcher: ToolDispatcher, temp_dir: Path) -> None:
        """Validation failures stop the call before anything changes."""
        result = await dispatcher.invoke(
            "fsWrite",
            {"command": "strReplace", "path": "missing.txt", "oldStr": "a", "newStr": "b"},
        )
        assert result.status == ToolCallStatus.VALIDATION_ERROR
        assert result.error_code == ERROR_VALIDATION_FAILED
        assert not (temp_dir / "missing.txt").exists()

    @pytest.mark.asyncio
    async def test_validation_messages_joined(self, dispatcher: ToolDispatcher) -> None:
        result = await dispatcher.invoke("imageRead", {"paths": ["a.txt", "b.txt"]})
        assert result.status == ToolCallStatus.VALIDATION_ERROR
        assert len(result.error.split("\n")) == 2

    @pytest.mark.asyncio
    async def test_execution_error(self, dispatcher: ToolDispatcher, temp_dir: Path) -> None:
        (temp_dir / "f.txt").write_text("a a")
        result = await dispatcher.invoke(
            "fsWrite",
            {"command": "strReplace", "path": "f.txt", "oldStr": "a", "newStr": "b"},
        )
        assert result.status == ToolCallStatus.EXECUTION_ERROR
        assert result.error == "2 occurrences of old_str were found when only 1 is expected"
        assert (temp_dir / "f.txt").read_text() == "a a"

    @pytest.mark.asyncio
    async def test_ls(self, dispatcher: ToolDispatcher, temp_dir: Path) -> None:
        (temp_dir / "keep.txt").write_text("")
        (temp_dir / "ignore.log").write_text("")
        result = await dispatcher.invoke("ls", {"path": ".", "ignore": ["*.log"]})
        assert result.success
        text = result.output.items[0].text
        assert "keep.txt" in text
        assert "ignore.log" not in text

    @pytest.mark.asyncio
    async def test_result_to_dict(self, dispatcher: ToolDispatcher) -> None:
        result = await dispatcher.invoke("readFile", {})
        data = result.to_dict()
        assert data["status"] == "parse_error"
        assert data["output"] is None
        assert data["duration_ms"] >= 0


class TestExecute:
    """Tests for execute() on parsed tools."""

    @pytest.mark.asyncio
    async def test_raises_validation_error(self, dispatcher: ToolDispatcher) -> None:
        tool = dispatcher.parse("ls", {"path": "missing"})
        with pytest.raises(ToolValidationError) as exc_info:
            await dispatcher.execute(tool)
        assert exc_info.value.tool == "ls"

    @pytest.mark.asyncio
    async def test_unwired_tool_propagates(self, dispatcher: ToolDispatcher) -> None:
        with pytest.raises(ToolNotImplementedError):
            await dispatcher.execute(Tool(kind=Mkdir()))


class TestMcpDispatch:
    """Tests for forwarding to an McpClient."""

    @pytest.mark.asyncio
    async def test_forwards_params(self, provider) -> None:
        client = RecordingMcpClient({"issue": 7})
        dispatcher = ToolDispatcher(provider=provider, mcp_client=client)

        result = await dispatcher.invoke("@github/create_issue", {"title": "bug", "toolUsePurpose": "file it"})
        assert result.success
        assert result.tool_use_purpose == "file it"
        assert result.output.items == [JsonItem({"issue": 7})]
        assert client.calls == [("github", "create_issue", {"title": "bug"})]

    @pytest.mark.asyncio
    async def test_text_result(self, provider) -> None:
        dispatcher = ToolDispatcher(provider=provider, mcp_client=RecordingMcpClient("done"))
        result = await dispatcher.invoke("@srv/t", {})
        assert result.output.items == [TextItem("done")]

    @pytest.mark.asyncio
    async def test_invalid_args(self, provider) -> None:
        dispatcher = ToolDispatcher(provider=provider, mcp_client=RecordingMcpClient("x"))
        result = await dispatcher.invoke("@srv/t", [1, 2])
        assert result.status == ToolCallStatus.PARSE_ERROR
        assert "Arguments must be an object" in result.error

    @pytest.mark.asyncio
    async def test_no_client(self, dispatcher: ToolDispatcher) -> None:
        result = await dispatcher.invoke("@srv/t", {})
        assert result.status == ToolCallStatus.EXECUTION_ERROR
        assert "No MCP client" in result.error

    @pytest.mark.asyncio
    async def test_client_errors_reported(self, provider) -> None:
        class FailingClient:
            async def call_tool(self, server_name: str, tool_name: str, params: dict[str, Any]) -> Any:
                raise CustomExecutionError(message="server unavailable")

        dispatcher = ToolDispatcher(provider=provider, mcp_client=FailingClient())
        result: ToolCallResult = await dispatcher.invoke("@srv/t", {})
        assert result.status == ToolCallStatus.EXECUTION_ERROR
        assert result.error == "server unavailable"

    @pytest.mark.asyncio
    async def test_transport_errors_reported(self, provider) -> None:
        class DisconnectedClient:
            async def call_tool(self, server_name: str, tool_name: str, params: dict[str, Any]) -> Any:
                raise ConnectionError("connection refused")

        dispatcher = ToolDispatcher(provider=provider, mcp_client=DisconnectedClient())
        result = await dispatcher.invoke("@srv/t", {})
        assert result.status == ToolCallStatus.EXECUTION_ERROR
        assert result.error == "failed to call @srv/t: connection refused"

    @pytest.mark.asyncio
    async def test_null_args_rejected(self, provider) -> None:
        dispatcher = ToolDispatcher(provider=provider, mcp_client=RecordingMcpClient("x"))
        result = await dispatcher.invoke("@srv/t", None)
        assert result.status == ToolCallStatus.PARSE_ERROR


class TestNullBytes:
    """Arguments holding a NUL character come back as results, not exceptions."""

    @pytest.mark.asyncio
    async def test_execute_cmd(self, dispatcher: ToolDispatcher) -> None:
        result = await dispatcher.invoke("executeCmd", {"command": "echo a\x00b"})
        assert result.status == ToolCallStatus.EXECUTION_ERROR
        assert result.error.startswith("failed to execute command")

    @pytest.mark.asyncio
    async def test_fs_write_create(self, dispatcher: ToolDispatcher, temp_dir: Path) -> None:
        result = await dispatcher.invoke("fsWrite", {"command": "create", "path": "a\x00b.txt", "content": "x"})
        assert result.status == ToolCallStatus.EXECUTION_ERROR
        assert result.error.startswith("failed to write to")
        assert list(temp_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_fs_write_insert(self, dispatcher: ToolDispatcher) -> None:
        result = await dispatcher.invoke("fsWrite", {"command": "insert", "path": "a\x00b.txt", "content": "x"})
        assert result.status == ToolCallStatus.EXECUTION_ERROR
        assert result.error.startswith("failed to read")

    @pytest.mark.asyncio
    async def test_image_read(self, dispatcher: ToolDispatcher) -> None:
        result = await dispatcher.invoke("imageRead", {"paths": ["a\x00b.png"]})
        assert result.status == ToolCallStatus.VALIDATION_ERROR
        assert result.error.startswith("failed to read file metadata for path")

    @pytest.mark.asyncio
    async def test_fs_read(self, dispatcher: ToolDispatcher) -> None:
        result = await dispatcher.invoke("fsRead", {"path": "a\x00b.txt"})
        assert result.status == ToolCallStatus.VALIDATION_ERROR
