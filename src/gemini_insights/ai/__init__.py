"""Convenience exports for Gemini-powered insight helpers."""

from .insights import InsightClient, parse_json_reply
from .prompts import (
    build_analytics_prompt,
    build_inventory_prompt,
    build_prediction_prompt,
    build_recommendation_prompt,
    select_low_stock,
    select_top_products,
)
from .transport import RestGenerator, SdkGenerator, resolve_generator

__all__ = [
    "InsightClient",
    "parse_json_reply",
    "build_analytics_prompt",
    "build_inventory_prompt",
    "build_prediction_prompt",
    "build_recommendation_prompt",
    "select_low_stock",
    "select_top_products",
    "RestGenerator",
    "SdkGenerator",
    "resolve_generator",
]
