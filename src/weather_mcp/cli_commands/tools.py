"""``weather-mcp tools`` — inspect and call the tool catalog locally."""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any

import click

from weather_mcp.cli_commands._output import (
    console,
    err_console,
    load_settings_or_exit,
    print_tools_table,
)


@click.group()
def tools() -> None:
    """List and call tools without starting a server."""


@tools.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print the raw tools/list entries.")
@click.option("--config", "-c", type=click.Path(exists=True), default=None, help="Settings YAML file.")
def list_tools(as_json: bool, config: str | None) -> None:
    """Print the tool catalog."""
    from weather_mcp.server import build_dispatcher

    dispatcher = build_dispatcher(load_settings_or_exit(config))
    response = asyncio.run(
        dispatcher.handle_message({"jsonrpc": "2.0", "id": 1, "method": "tools/list"})
    )
    assert response is not None
    print_tools_table(response["result"]["tools"], as_json=as_json)


@tools.command("call")
@click.argument("name")
@click.argument("arguments", required=False, default="{}")
@click.option("--config", "-c", type=click.Path(exists=True), default=None, help="Settings YAML file.")
def call_tool(name: str, arguments: str, config: str | None) -> None:
    """Call tool NAME with ARGUMENTS given as a JSON object.

    Example: weather-mcp tools call get_alerts '{"state": "CA"}'
    """
    from weather_mcp.server import build_dispatcher

    try:
        parsed: Any = json.loads(arguments)
    except json.JSONDecodeError as exc:
        err_console.print(f"[red]Invalid JSON arguments:[/red] {exc}")
        sys.exit(2)

    dispatcher = build_dispatcher(load_settings_or_exit(config))
    request = {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "tools/call",
        "params": {"name": name, "arguments": parsed},
    }
    response = asyncio.run(dispatcher.handle_message(request))
    assert response is not None

    error = response.get("error")
    if error is not None:
        err_console.print(f"[red]Error {error['code']}:[/red] {error['message']}")
        sys.exit(1)

    for block in response["result"]["content"]:
        console.print(block["text"], markup=False, highlight=False, soft_wrap=True)
