from __future__ import annotations

"""Gemini-backed insight operations that always return a usable payload."""

import json
import logging
import random
import re
from typing import Any, Optional, Sequence, Sized

from ..config import GeminiSettings
from ..errors import ConfigurationError, GeminiClientError, ParseError, ProtocolError
from ..models import AnalyticsInsights, InsightResult, InventoryInsights, Product
from .fallbacks import (
    BUSINESS_RECOMMENDATION_FALLBACK,
    SALES_PREDICTION_FALLBACK,
    analytics_fallback,
    inventory_fallback,
)
from .prompts import (
    build_analytics_prompt,
    build_inventory_prompt,
    build_prediction_prompt,
    build_recommendation_prompt,
)
from .transport import Generator, resolve_generator

logger = logging.getLogger(__name__)

_FENCED = re.compile(r"^\s*```(?:json)?[ \t]*\n?(.*?)\n?[ \t]*```\s*$", re.DOTALL)


def parse_json_reply(reply: str) -> Any:
    """Decode a model reply as JSON, ignoring a Markdown code fence wrapped around it."""

    match = _FENCED.match(reply)
    cleaned = (match.group(1) if match else reply).strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Gemini reply is not valid JSON: {exc}") from exc


class InsightClient:
    """
    Ask Gemini for analytics, inventory and sales-prediction insights.

    Every public `get_*` coroutine is total: configuration, transport,
    protocol and parse failures are logged and replaced by a fallback payload.
    The returned `InsightResult` says which of the two the caller received.

    Parameters
    ----------
    settings:
        Explicit configuration, usually `get_settings()` resolved once at start.
    generator:
        Optional coroutine function `prompt -> text`. Defaults to the backend
        named in `settings`.
    rng:
        When given, fallback top-product sales counts are drawn from it instead
        of being derived from rank.
    """

    def __init__(
        self,
        settings: GeminiSettings,
        generator: Optional[Generator] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings
        self._generator = generator or resolve_generator(settings)
        self._rng = rng

    async def generate(self, prompt: str) -> str:
        """Return Gemini's raw reply text for `prompt`."""

        if not self.settings.has_credential:
            raise ConfigurationError(
                "API key is not configured. Set GEMINI_API_KEY in your environment or .env."
            )
        return await self._generator(prompt)

    async def _generate_text(self, prompt: str) -> str:
        text = (await self.generate(prompt)).strip()
        if not text:
            raise ProtocolError("Gemini reply contained only whitespace")
        return text

    def _degrade(self, operation: str, exc: Exception) -> None:
        if isinstance(exc, GeminiClientError):
            logger.warning(f"{operation} fell back to static content: {exc}")
        else:
            logger.exception(f"{operation} failed unexpectedly, using fallback")

    async def get_analytics_insights(
        self, sales: Sized, products: Sized
    ) -> InsightResult[AnalyticsInsights]:
        prompt = build_analytics_prompt(len(sales), len(products), self.settings.language)
        try:
            reply = await self.generate(prompt)
            insights = AnalyticsInsights.from_payload(parse_json_reply(reply))
        except Exception as exc:
            self._degrade("Analytics insights", exc)
            return InsightResult.fallback(analytics_fallback(), exc)
        return InsightResult.live(insights)

    async def get_inventory_insights(
        self, products: Sequence[Product]
    ) -> InsightResult[InventoryInsights]:
        prompt = build_inventory_prompt(products, self.settings.language)
        try:
            reply = await self.generate(prompt)
            insights = InventoryInsights.from_payload(parse_json_reply(reply))
        except Exception as exc:
            self._degrade("Inventory insights", exc)
            return InsightResult.fallback(inventory_fallback(products, self._rng), exc)
        return InsightResult.live(insights)

    async def get_sales_prediction(self, sales: Sized) -> InsightResult[str]:
        prompt = build_prediction_prompt(len(sales), self.settings.language)
        try:
            reply = await self._generate_text(prompt)
        except Exception as exc:
            self._degrade("Sales prediction", exc)
            return InsightResult.fallback(SALES_PREDICTION_FALLBACK, exc)
        return InsightResult.live(reply)

    async def get_business_recommendation(self, context: str) -> InsightResult[str]:
        prompt = build_recommendation_prompt(context, self.settings.language)
        try:
            reply = await self._generate_text(prompt)
        except Exception as exc:
            self._degrade("Business recommendation", exc)
            return InsightResult.fallback(BUSINESS_RECOMMENDATION_FALLBACK, exc)
        return InsightResult.live(reply)
