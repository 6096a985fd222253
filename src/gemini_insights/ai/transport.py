from __future__ import annotations

"""Transport helpers that turn a prompt into Gemini's raw reply text."""

import logging
from typing import Any, Awaitable, Callable, Optional

import httpx

from ..config import GeminiSettings, GenerationSettings
from ..errors import ProtocolError, TransportError

logger = logging.getLogger(__name__)

Generator = Callable[[str], Awaitable[str]]


def build_request_body(prompt: str, generation: GenerationSettings) -> dict:
    """Return the generateContent JSON body for a single-turn text prompt."""

    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": generation.temperature,
            "topK": generation.top_k,
            "topP": generation.top_p,
            "maxOutputTokens": generation.max_output_tokens,
        },
    }


def extract_candidate_text(envelope: Any) -> str:
    """
    Pull `candidates[0].content.parts[0].text` out of a response envelope.

    Raises `ProtocolError` when any level is missing or the text is empty.
    """

    try:
        text = envelope["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise ProtocolError("Unexpected response shape from Gemini") from exc
    if not isinstance(text, str) or not text:
        raise ProtocolError("Gemini response did not contain any text")
    return text


class RestGenerator:
    """Call the generateContent REST endpoint with `httpx`."""

    def __init__(
        self,
        settings: GeminiSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self._transport = transport

    async def __call__(self, prompt: str) -> str:
        body = build_request_body(prompt, self.settings.generation)

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.settings.endpoint,
                    params={"key": self.settings.api_key},
                    json=body,
                )
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Request to Gemini failed ({exc.__class__.__name__}: {exc})"
            ) from exc

        if not response.is_success:
            raise TransportError(
                f"Gemini API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            envelope = response.json()
        except ValueError as exc:
            raise ProtocolError("Gemini returned a body that is not JSON") from exc
        return extract_candidate_text(envelope)


class SdkGenerator:
    """Issue the same request through the `google-genai` SDK."""

    def __init__(self, settings: GeminiSettings, client: Any = None) -> None:
        self.settings = settings
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            from google import genai
            from google.genai import types as genai_types

            self._client = genai.Client(
                api_key=self.settings.api_key,
                http_options=genai_types.HttpOptions(
                    timeout=int(self.settings.timeout * 1000)
                ),
            )
        return self._client

    async def __call__(self, prompt: str) -> str:
        from google.genai import errors as genai_errors
        from google.genai import types as genai_types

        generation = self.settings.generation
        config = genai_types.GenerateContentConfig(
            temperature=generation.temperature,
            top_k=generation.top_k,
            top_p=generation.top_p,
            max_output_tokens=generation.max_output_tokens,
        )

        try:
            response = await self._get_client().aio.models.generate_content(
                model=self.settings.model,
                contents=prompt,
                config=config,
            )
        except genai_errors.APIError as exc:
            raise TransportError(
                f"Gemini API error: {exc.code} - {exc.message}",
                status_code=exc.code,
                body=str(exc.message or ""),
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                f"Request to Gemini failed ({exc.__class__.__name__}: {exc})"
            ) from exc

        text = getattr(response, "text", None)
        if not isinstance(text, str) or not text:
            raise ProtocolError("Gemini response did not contain any text")
        return text


def resolve_generator(settings: GeminiSettings) -> Generator:
    """Pick the generator for the configured backend (`rest` or `sdk`)."""

    if settings.backend == "sdk":
        logger.info(f"Using google-genai SDK backend for model {settings.model}")
        return SdkGenerator(settings)
    logger.info(f"Using REST backend at {settings.endpoint}")
    return RestGenerator(settings)
