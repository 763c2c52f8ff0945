"""weather-mcp CLI entrypoint."""

from __future__ import annotations

import click

from weather_mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="weather-mcp")
def main() -> None:
    """weather-mcp — NWS weather tools over JSON-RPC."""


# Register subcommands
from weather_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
