"""Tests for ReplicateClient."""

from __future__ import annotations

import json

import httpx
import pytest

from weather_mcp.clients.errors import ImageGenerationError, MissingCredentialsError
from weather_mcp.clients.replicate import DEFAULT_MODEL_VERSION, ReplicateClient


def _client(handler) -> ReplicateClient:  # type: ignore[no-untyped-def]
    return ReplicateClient("r8_test", transport=httpx.MockTransport(handler))


class TestBuildPayload:
    def test_defaults(self) -> None:
        payload = ReplicateClient("t").build_payload("a lighthouse")
        assert payload["version"] == DEFAULT_MODEL_VERSION
        assert payload["input"]["prompt"] == "a lighthouse"
        assert payload["input"]["width"] == 768
        assert payload["input"]["num_inference_steps"] == 25
        assert payload["input"]["apply_watermark"] is False

    def test_options_override_defaults(self) -> None:
        payload = ReplicateClient("t").build_payload("x", width=1024, guidance_scale=5.0)
        assert payload["input"]["width"] == 1024
        assert payload["input"]["guidance_scale"] == 5.0
        assert payload["input"]["height"] == 768


class TestGenerateImage:
    async def test_missing_token(self) -> None:
        with pytest.raises(MissingCredentialsError, match="REPLICATE_API_TOKEN"):
            await ReplicateClient(None).generate_image("x")

    async def test_returns_first_output(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                201, json={"id": "p1", "output": ["https://img.test/1.png", "https://img.test/2.png"]}
            )

        url = await _client(handler).generate_image("a storm", width=512)

        assert url == "https://img.test/1.png"
        request = seen[0]
        assert request.url.path == "/v1/predictions"
        assert request.headers["authorization"] == "Token r8_test"
        assert request.headers["prefer"] == "wait"
        assert json.loads(request.content)["input"]["width"] == 512

    async def test_http_error_status(self) -> None:
        client = _client(lambda request: httpx.Response(422, text="invalid version"))
        with pytest.raises(ImageGenerationError, match="invalid version"):
            await client.generate_image("x")

    async def test_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(ImageGenerationError, match="unreachable"):
            await _client(handler).generate_image("x")

    async def test_reported_error(self) -> None:
        client = _client(lambda request: httpx.Response(200, json={"error": "NSFW content"}))
        with pytest.raises(ImageGenerationError, match="NSFW content"):
            await client.generate_image("x")

    @pytest.mark.parametrize("body", [{"output": []}, {"output": None}, {}])
    async def test_empty_output(self, body: dict) -> None:  # type: ignore[type-arg]
        client = _client(lambda request: httpx.Response(200, json=body))
        with pytest.raises(ImageGenerationError, match="No output"):
            await client.generate_image("x")

    async def test_invalid_json(self) -> None:
        client = _client(lambda request: httpx.Response(200, content=b"oops"))
        with pytest.raises(ImageGenerationError, match="Invalid prediction response"):
            await client.generate_image("x")
