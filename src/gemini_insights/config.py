from __future__ import annotations

"""Typed configuration helpers for the Gemini insights toolkit."""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_TIMEOUT = 30.0
ENDPOINT_TEMPLATE = (
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
)
BACKENDS = ("rest", "sdk")


@dataclass(frozen=True)
class GenerationSettings:
    """Sampling parameters sent with every generateContent request."""

    temperature: float = 0.7
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 1024


@dataclass(frozen=True)
class GeminiSettings:
    """Settings that steer Gemini API access."""

    endpoint: str
    api_key: Optional[str]
    timeout: float = DEFAULT_TIMEOUT
    model: str = DEFAULT_MODEL
    backend: str = "rest"
    language: str = "English"
    generation: GenerationSettings = field(default_factory=GenerationSettings)

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)


def _to_float(name: str, value: Optional[str], default: float) -> float:
    if value is None or value == "":
        return default
    try:
        parsed = float(value)
    except ValueError:
        raise RuntimeError(
            f"Environment variable '{name}' must be a number, got {value!r}"
        ) from None
    if parsed <= 0:
        raise RuntimeError(f"Environment variable '{name}' must be positive")
    return parsed


def _to_backend(value: Optional[str]) -> str:
    backend = (value or "rest").strip().lower()
    if backend not in BACKENDS:
        raise RuntimeError(
            f"GEMINI_BACKEND must be one of {', '.join(BACKENDS)}, got {value!r}"
        )
    return backend


def load_settings(environ: Mapping[str, str]) -> GeminiSettings:
    """Build settings from an arbitrary mapping of environment-style values."""

    model = environ.get("GEMINI_MODEL") or DEFAULT_MODEL
    endpoint = environ.get("GEMINI_ENDPOINT") or ENDPOINT_TEMPLATE.format(model=model)

    return GeminiSettings(
        endpoint=endpoint,
        api_key=environ.get("GEMINI_API_KEY") or None,
        timeout=_to_float("GEMINI_TIMEOUT", environ.get("GEMINI_TIMEOUT"), DEFAULT_TIMEOUT),
        model=model,
        backend=_to_backend(environ.get("GEMINI_BACKEND")),
        language=environ.get("INSIGHTS_LANGUAGE") or "English",
    )


def configure_logging(level: int = logging.INFO) -> None:
    """
    Set up console logging for apps and scripts.

    httpx logs every request URL at INFO, and the REST backend carries the API
    key in the query string, so its logger is held at WARNING.
    """

    logging.basicConfig(level=level)
    logging.getLogger("httpx").setLevel(logging.WARNING)


@lru_cache()
def get_settings() -> GeminiSettings:
    """
    Load configuration from environment variables exactly once.

    Call this at process start and hand the result to `InsightClient`; library
    code never reads the environment on its own.
    """

    load_dotenv()
    return load_settings(os.environ)
