"""Shared CLI output helpers and logging setup."""

from __future__ import annotations

import json
import logging
import sys
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

if TYPE_CHECKING:
    from weather_mcp.config import ServerSettings

console = Console()
err_console = Console(stderr=True)


def configure_logging(*, verbose: bool = False) -> None:
    """Route all logging to stderr; stdout may carry protocol traffic."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def load_settings_or_exit(config: str | None) -> ServerSettings:
    """Load settings, printing the error and exiting with status 1 on failure."""
    from weather_mcp.config import load_settings
    from weather_mcp.errors import ConfigError

    try:
        return load_settings(config)
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)


def print_tools_table(tools: list[dict[str, Any]], *, as_json: bool = False) -> None:
    """Pretty-print ``tools/list`` entries as a table."""
    if as_json:
        console.print_json(json.dumps(tools))
        return

    table = Table(title="Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Arguments")

    for tool in tools:
        schema = tool.get("inputSchema", {})
        required = set(schema.get("required", []))
        args = [
            f"{name}: {prop.get('type', '?')}" + ("" if name in required else " (optional)")
            for name, prop in schema.get("properties", {}).items()
        ]
        table.add_row(
            tool.get("name", "?"),
            _truncate(tool.get("description", "")),
            ", ".join(args) or "-",
        )

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
