"""Error types for external API clients."""


class ClientError(Exception):
    """Base error for all external-client failures."""


class MissingCredentialsError(ClientError):
    """A client was used without the credentials it needs."""

    def __init__(self, variable: str) -> None:
        self.variable = variable
        super().__init__(f"{variable} environment variable is not set")


class ImageGenerationError(ClientError):
    """The image-generation service rejected a request or returned no output."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Image generation failed" + (f": {detail}" if detail else ""))
