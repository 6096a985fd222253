"""Failure taxonomy for the Gemini insight chain."""

from typing import Optional


class GeminiClientError(RuntimeError):
    """Base class for every failure between a prompt and a parsed insight."""


class ConfigurationError(GeminiClientError):
    """Raised when no API key is configured."""


class TransportError(GeminiClientError):
    """Raised when the HTTP call fails or returns a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ProtocolError(GeminiClientError):
    """Raised when a success response lacks the expected candidate text."""


class ParseError(GeminiClientError):
    """Raised when the model's text is not the JSON shape we asked for."""
