"""ReplicateClient — thin adapter for the Replicate predictions API.

Independent of the JSON-RPC server; used by ``weather-mcp image generate``.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel

from weather_mcp.clients.errors import ImageGenerationError, MissingCredentialsError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.replicate.com/v1"
DEFAULT_MODEL_VERSION = "7762fd07cf82c948538e41f63f77d685e02b063e37e496e96eefd46c929f9bdc"


class ImageGenerationInput(BaseModel):
    """Generation parameters sent as the prediction ``input``."""

    prompt: str
    width: int = 768
    height: int = 768
    refine: str = "expert_ensemble_refiner"
    scheduler: str = "K_EULER"
    lora_scale: float = 0.6
    num_outputs: int = 1
    guidance_scale: float = 7.5
    apply_watermark: bool = False
    high_noise_frac: float = 0.8
    negative_prompt: str = ""
    prompt_strength: float = 0.8
    num_inference_steps: int = 25


class PredictionResponse(BaseModel):
    """The subset of a prediction response this client reads."""

    id: str = ""
    output: list[str] | None = None
    error: str | None = None


class ReplicateClient:
    """Creates a prediction and waits for it to finish (``Prefer: wait``).

    Usage::

        client = ReplicateClient(api_token=settings.replicate_api_token)
        url = await client.generate_image("a lighthouse in a storm", width=1024)
    """

    def __init__(
        self,
        api_token: str | None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        model_version: str = DEFAULT_MODEL_VERSION,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_token = api_token
        self._base_url = base_url.rstrip("/")
        self._model_version = model_version
        self._timeout = timeout
        self._transport = transport

    def build_payload(self, prompt: str, **options: Any) -> dict[str, Any]:
        """Merge *options* over the default input and wrap with the model version."""
        generation = ImageGenerationInput(prompt=prompt, **options)
        return {"version": self._model_version, "input": generation.model_dump()}

    async def generate_image(self, prompt: str, **options: Any) -> str:
        """Run a prediction and return the first output URL.

        Raises:
            MissingCredentialsError: If no API token was configured.
            ImageGenerationError: On HTTP failure, a reported error, or empty output.
        """
        if not self._api_token:
            raise MissingCredentialsError("REPLICATE_API_TOKEN")

        payload = self.build_payload(prompt, **options)
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Token {self._api_token}",
            "Prefer": "wait",
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self._base_url}/predictions",
                    headers=headers,
                    json=payload,
                )
        except httpx.HTTPError as exc:
            logger.error("Error generating image with Replicate: %s", exc)
            raise ImageGenerationError(str(exc)) from exc

        if response.is_error:
            detail = response.text or "Failed to create prediction"
            logger.error("Replicate returned %s: %s", response.status_code, detail)
            raise ImageGenerationError(detail)

        try:
            prediction = PredictionResponse.model_validate(response.json())
        except ValueError as exc:
            raise ImageGenerationError(f"Invalid prediction response: {exc}") from exc

        if prediction.error:
            raise ImageGenerationError(prediction.error)
        if not prediction.output:
            raise ImageGenerationError("No output generated or invalid output format")

        return prediction.output[0]
