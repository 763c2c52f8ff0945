"""``weather-mcp image`` — generate an image with Replicate."""

from __future__ import annotations

import asyncio
import sys
import webbrowser
from typing import Any

import click

from weather_mcp.cli_commands._output import console, err_console, load_settings_or_exit


@click.group()
def image() -> None:
    """Image generation (independent of the JSON-RPC server)."""


@image.command("generate")
@click.argument("prompt")
@click.option("--width", type=int, default=None, help="Image width in pixels.")
@click.option("--height", type=int, default=None, help="Image height in pixels.")
@click.option("--steps", type=int, default=None, help="Number of inference steps.")
@click.option("--guidance-scale", type=float, default=None, help="Classifier-free guidance scale.")
@click.option("--negative-prompt", default=None, help="What the image should not contain.")
@click.option("--open", "open_browser", is_flag=True, help="Open the result in a browser.")
@click.option("--config", "-c", type=click.Path(exists=True), default=None, help="Settings YAML file.")
def generate(
    prompt: str,
    width: int | None,
    height: int | None,
    steps: int | None,
    guidance_scale: float | None,
    negative_prompt: str | None,
    open_browser: bool,
    config: str | None,
) -> None:
    """Generate an image for PROMPT and print its URL."""
    from weather_mcp.clients.errors import ClientError
    from weather_mcp.clients.replicate import ReplicateClient

    settings = load_settings_or_exit(config)
    client = ReplicateClient(
        settings.replicate_api_token,
        base_url=settings.replicate_base_url,
        model_version=settings.replicate_model_version,
    )

    options: dict[str, Any] = {
        key: value
        for key, value in {
            "width": width,
            "height": height,
            "num_inference_steps": steps,
            "guidance_scale": guidance_scale,
            "negative_prompt": negative_prompt,
        }.items()
        if value is not None
    }

    try:
        url = asyncio.run(client.generate_image(prompt, **options))
    except ClientError as exc:
        err_console.print(f"[red]Image generation error:[/red] {exc}")
        sys.exit(1)

    console.print(url, markup=False, highlight=False, soft_wrap=True)
    if open_browser:
        webbrowser.open(url)
        err_console.print(f"Image displayed at {url}")
