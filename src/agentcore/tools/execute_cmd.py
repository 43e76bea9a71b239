"""
Shell command tool for agentcore.

executeCmd runs a single command through a non-interactive shell and
returns what it printed. The shell does not load user profiles, stdin is
closed, and the child inherits the current environment plus user-agent
variables identifying agentcore.

A non-zero exit status is not an error: the model sees the output (or the
exit code, when nothing was printed) and decides what to do next.
"""

import asyncio
import logging
import os
from typing import Any, ClassVar

from agentcore import __version__
from agentcore.errors import CustomExecutionError, IoExecutionError
from agentcore.tools.base import BuiltInToolModel, ToolContext, ToolExecutionOutput
from agentcore.tools.names import BuiltInToolName
from agentcore.util.env import expand_env_vars
from agentcore.util.platform import WindowsPlatform, current_platform

logger = logging.getLogger(__name__)

USER_AGENT_ENV_VAR = "AGENTCORE_USER_AGENT"
USER_AGENT_APP_NAME = "agentcore-cli"
USER_AGENT_VERSION_KEY = "AGENTCORE_USER_AGENT_VERSION"

EXECUTE_CMD_TOOL_DESCRIPTION = """
A tool for executing bash commands.

WHEN TO USE THIS TOOL:
- Use only as a last-resort when no other available tool can accomplish the task

HOW TO USE:
- Provide the command to execute

LIMITATIONS:
- Does not respect user's bash profile

TIPS:
- Use the fsRead and fsWrite tools for reading and modifying files
"""

EXECUTE_CMD_WINDOWS_TOOL_DESCRIPTION = """
A tool for executing PowerShell commands.

WHEN TO USE THIS TOOL:
- Use only as a last-resort when no other available tool can accomplish the task

HOW TO USE:
- Provide the command to execute

LIMITATIONS:
- Does not respect user's PowerShell profile

TIPS:
- Use the fsRead and fsWrite tools for reading and modifying files
"""

EXECUTE_CMD_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "command": {
            "type": "string",
            "description": "Command to execute",
        },
    },
    "required": ["command"],
}


def resolve_shell(ctx: ToolContext) -> str:
    """
    Pick the shell binary for executeCmd.

    The override environment variable wins, then the configured shell, then
    the platform default.
    """
    settings = ctx.config.tools.execute_cmd
    override = ctx.provider.env_var(settings.shell_env_var)
    if override:
        return override
    if settings.shell:
        return settings.shell
    return ctx.platform.default_shell


def build_env() -> dict[str, str]:
    """Environment for the child: inherited variables plus the user agent."""
    injected = expand_env_vars({
        USER_AGENT_ENV_VAR: USER_AGENT_APP_NAME,
        USER_AGENT_VERSION_KEY: __version__,
    })
    env = dict(os.environ)
    env.update(injected)
    return env


def format_command_output(stdout: str, stderr: str, exit_code: int) -> str:
    """Join stdout and stderr, or report the exit code if both are empty."""
    result = stdout
    if stderr:
        if result:
            result += "\n"
        result += stderr
    if not result:
        result = f"Command exited with code {exit_code}"
    return result


class ExecuteCmd(BuiltInToolModel):
    """
    Run a shell command.

    Arguments:
        command (str): Command line passed to the shell (required)
    """

    tool_name: ClassVar[BuiltInToolName] = BuiltInToolName.EXECUTE_CMD
    INPUT_SCHEMA: ClassVar[dict[str, Any] | None] = EXECUTE_CMD_SCHEMA

    command: str

    @classmethod
    def description(cls) -> str:
        if isinstance(current_platform(), WindowsPlatform):
            return EXECUTE_CMD_WINDOWS_TOOL_DESCRIPTION
        return EXECUTE_CMD_TOOL_DESCRIPTION

    async def validate_tool(self, ctx: ToolContext) -> list[str]:
        if not self.command:
            return ["Command must not be empty"]
        return []

    async def execute(self, ctx: ToolContext) -> ToolExecutionOutput:
        shell = resolve_shell(ctx)
        args = ctx.platform.shell_args(self.command)
        logger.debug("Running %r with %s", self.command, shell)

        try:
            proc = await asyncio.create_subprocess_exec(
                shell,
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=build_env(),
                cwd=ctx.provider.cwd(),
            )
            stdout, stderr = await proc.communicate()
        except OSError as e:
            raise IoExecutionError(io_context="failed to execute command", source=e) from e
        except ValueError as e:
            # e.g. an embedded null byte in the command
            raise CustomExecutionError(message=f"failed to execute command: {e}") from e

        exit_code = proc.returncode if proc.returncode is not None and proc.returncode >= 0 else -1
        logger.debug("Command exited with code %d", exit_code)

        text = format_command_output(
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
            exit_code,
        )
        return ToolExecutionOutput.text(text)
