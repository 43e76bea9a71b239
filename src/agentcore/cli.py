"""
CLI entry point for agentcore.

This module provides the Typer-based command-line interface for agentcore.
It is a developer tool for inspecting the tool catalog and running single
tool calls by hand.

Commands:
    tools       List the built-in tools
    spec        Print the spec (description and input schema) of a tool
    call        Parse, validate and execute one tool call
    doctor      Check the environment tools run in

Architecture Note:
    The CLI is intentionally thin - it parses arguments and delegates to the
    ToolDispatcher for actual execution, so the same core can be driven
    programmatically by a model loop.
"""

import asyncio
import json
import shutil
import sys
import traceback
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from agentcore import __version__
from agentcore.engine import ToolCallResult, ToolDispatcher
from agentcore.errors import AgentCoreError
from agentcore.logging_utils import configure_logging
from agentcore.schema import CoreConfig, ToolCallStatus, load_config, load_tool_call
from agentcore.tools.base import ImageItem, JsonItem, TextItem, ToolContext
from agentcore.tools.catalog import all_tool_specs, spec_for
from agentcore.tools.execute_cmd import resolve_shell
from agentcore.tools.state import ToolState
from agentcore.util.platform import current_platform

# Initialize Typer app with metadata
app = typer.Typer(
    name="agentcore",
    help="Inspect and run agent tool calls.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for formatted output
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold]agentcore[/bold] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    agentcore - Tool invocation and execution core for coding agents.

    List the built-in tools, print their specs, and run tool calls the same
    way a model loop would.
    """
    pass


def _output_json_error(error_type: str, message: str, include_traceback: bool = False) -> None:
    """Output an error in JSON format."""
    output = {
        "error": True,
        "error_type": error_type,
        "message": message,
    }
    if include_traceback:
        output["traceback"] = traceback.format_exc()
    print(json.dumps(output, indent=2))


def _load_config_option(config_path: Path | None) -> CoreConfig:
    if config_path is None:
        return CoreConfig()
    return load_config(config_path)


@app.command()
def tools(
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output results in JSON format.",
        ),
    ] = False,
) -> None:
    """
    List the built-in tools.

    Example:
        $ agentcore tools
    """
    specs = all_tool_specs()

    if json_output:
        print(json.dumps([spec.model_dump() for spec in specs], indent=2))
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Tool", style="cyan")
    table.add_column("Description")

    for spec in specs:
        summary = next((line for line in spec.description.splitlines() if line.strip()), "")
        table.add_row(spec.name, summary)

    console.print(table)


@app.command()
def spec(
    name: Annotated[
        str,
        typer.Argument(help="Wire name of a built-in tool, e.g. fsWrite."),
    ],
) -> None:
    """
    Print the spec of a built-in tool as JSON.

    Example:
        $ agentcore spec ls
    """
    try:
        tool_spec = spec_for(name)
    except ValueError:
        console.print(f"[red]Unknown built-in tool: {name}[/red]")
        raise typer.Exit(code=1)

    print(json.dumps(tool_spec.model_dump(), indent=2))


@app.command()
def call(
    name: Annotated[
        Optional[str],
        typer.Argument(help="Tool name, e.g. ls or @server/tool. Read from --file if omitted."),
    ] = None,
    args_json: Annotated[
        Optional[str],
        typer.Option(
            "--args",
            "-a",
            help="Tool arguments as a JSON object.",
        ),
    ] = None,
    call_file: Annotated[
        Optional[Path],
        typer.Option(
            "--file",
            "-f",
            help="YAML or JSON file holding a tool call ({tool, args}).",
            exists=True,
            readable=True,
            resolve_path=True,
        ),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="Path to an agentcore config YAML file.",
            exists=True,
            readable=True,
            resolve_path=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            help="Enable verbose output for debugging.",
        ),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            help="Enable debug logging and full error tracebacks.",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output results in JSON format.",
        ),
    ] = False,
) -> None:
    """
    Parse, validate and execute a single tool call.

    Exits with code 0 if the tool executed successfully, 1 otherwise.

    Example:
        $ agentcore call ls --args '{"path": ".", "depth": 1}'
        $ agentcore call --file call.yaml --json
    """
    # Load config and arguments
    try:
        config = _load_config_option(config_path)
        tool_name, tool_args = _resolve_call(name, args_json, call_file)
        configure_logging("DEBUG" if debug else config.log_level)
    except (AgentCoreError, ValueError) as e:
        message = e.message if isinstance(e, AgentCoreError) else str(e)
        if json_output:
            _output_json_error("input_error", message, debug)
        else:
            console.print(f"Error: {message}", style="red", markup=False)
        raise typer.Exit(code=1)

    if verbose and not json_output:
        console.print(f"[dim]Calling {tool_name}[/dim]")
        if config_path:
            console.print(f"[dim]Loaded config: {config_path}[/dim]")

    dispatcher = ToolDispatcher(config=config)
    try:
        result = asyncio.run(dispatcher.invoke(tool_name, tool_args, ToolState()))
    except Exception as e:
        if json_output:
            _output_json_error("dispatch_error", str(e), debug)
        else:
            console.print(f"Dispatch error: {e}", style="red", markup=False)
            if debug:
                console.print(traceback.format_exc(), style="dim", markup=False)
        raise typer.Exit(code=1)

    if json_output:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        _display_call_result(result, verbose)

    raise typer.Exit(code=0 if result.success else 1)


def _resolve_call(
    name: str | None,
    args_json: str | None,
    call_file: Path | None,
) -> tuple[str, Any]:
    """
    Work out the tool name and raw arguments from the command line.

    Raises:
        ValueError: If the options conflict or the JSON is malformed
        ConfigError: If the call file cannot be loaded
    """
    if args_json is not None and call_file is not None:
        raise ValueError("Use either --args or --file, not both")

    if call_file is not None:
        request = load_tool_call(call_file)
        return name or request.tool, request.args

    if name is None:
        raise ValueError("A tool name is required unless --file is given")

    if args_json is None:
        return name, {}
    try:
        return name, json.loads(args_json)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in --args: {e}") from e


def _display_call_result(result: ToolCallResult, verbose: bool) -> None:
    """Display a tool call result in a formatted way."""
    if result.status == ToolCallStatus.SUCCESS:
        status_icon = "[green]✓[/green]"
        status_style = "green"
    else:
        status_icon = "[red]✗[/red]"
        status_style = "red"

    console.print(
        f"{status_icon} [bold]{result.tool_name}[/bold]: "
        f"[{status_style}]{result.status.value}[/{status_style}]"
    )
    if verbose and result.tool_use_purpose:
        console.print(f"[dim]Purpose: {result.tool_use_purpose}[/dim]")

    if result.output is not None:
        for item in result.output.items:
            if isinstance(item, TextItem):
                console.print(item.text, markup=False, highlight=False)
            elif isinstance(item, JsonItem):
                console.print_json(data=item.value)
            elif isinstance(item, ImageItem):
                console.print(
                    f"[cyan][image: {item.image.format.value}, {len(item.image.source)} bytes][/cyan]"
                )
    elif result.error:
        console.print(f"E{result.error_code}: {result.error}", style="red", markup=False, highlight=False)

    if verbose:
        console.print(f"[dim]Duration: {result.duration_ms:.1f}ms[/dim]")


@app.command()
def doctor(
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="Path to an agentcore config YAML file.",
            exists=True,
            readable=True,
            resolve_path=True,
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output results in JSON format.",
        ),
    ] = False,
) -> None:
    """
    Check the environment tools run in.

    Verifies that:
    - Python is 3.11+
    - The config (if given) loads
    - The shell executeCmd would use is on PATH

    Example:
        $ agentcore doctor
    """
    checks = []
    all_ok = True

    # Check 1: Python version
    py_version = sys.version_info
    py_version_str = f"{py_version.major}.{py_version.minor}.{py_version.micro}"
    py_ok = py_version >= (3, 11)
    checks.append({
        "name": "Python version",
        "ok": py_ok,
        "value": py_version_str,
        "message": "OK" if py_ok else "Requires Python 3.11+",
    })
    if not py_ok:
        all_ok = False

    # Check 2: Config
    config = CoreConfig()
    config_ok = True
    if config_path is None:
        config_message = "Using built-in defaults"
    else:
        try:
            config = load_config(config_path)
            config_message = "Loaded"
        except AgentCoreError as e:
            config_ok = False
            config_message = e.message
    checks.append({
        "name": "Config",
        "ok": config_ok,
        "value": str(config_path) if config_path else "(none)",
        "message": config_message,
    })
    if not config_ok:
        all_ok = False

    # Check 3: Shell used by executeCmd
    platform = current_platform()
    shell = resolve_shell(ToolContext(config=config, platform=platform))
    shell_path = shutil.which(shell)
    shell_ok = shell_path is not None
    checks.append({
        "name": "Shell",
        "ok": shell_ok,
        "value": shell,
        "message": f"Found at {shell_path} ({platform.name})" if shell_ok else "Not found on PATH",
    })
    if not shell_ok:
        all_ok = False

    # Output results
    if json_output:
        output = {
            "ok": all_ok,
            "version": __version__,
            "checks": checks,
        }
        print(json.dumps(output, indent=2))
    else:
        console.print(f"[bold]agentcore doctor[/bold] v{__version__}")
        console.print()

        for check in checks:
            icon = "[green]✓[/green]" if check["ok"] else "[red]✗[/red]"
            if check["ok"]:
                console.print(f"{icon} {check['name']}: [dim]{check['value']}[/dim] - {check['message']}")
            else:
                console.print(f"{icon} {check['name']}: [dim]{check['value']}[/dim]")
                console.print(f"    [red]{check['message']}[/red]")

        console.print()
        if all_ok:
            console.print("[green]All checks passed![/green]")
        else:
            console.print("[yellow]Some checks failed. See above for details.[/yellow]")

    raise typer.Exit(code=0 if all_ok else 1)


if __name__ == "__main__":
    app()
