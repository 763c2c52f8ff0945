"""External API clients — weather data and image generation."""

from weather_mcp.clients.errors import ClientError, ImageGenerationError, MissingCredentialsError
from weather_mcp.clients.nws import NWSClient
from weather_mcp.clients.replicate import ImageGenerationInput, ReplicateClient

__all__ = [
    "ClientError",
    "ImageGenerationError",
    "ImageGenerationInput",
    "MissingCredentialsError",
    "NWSClient",
    "ReplicateClient",
]
