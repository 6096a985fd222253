from __future__ import annotations

"""Prompt templates for the three insight categories.

Every builder is a pure function of its arguments: no I/O, no clock, no
randomness, so the same counts always produce the same prompt text.
"""

from typing import List, Sequence

from ..models import Product

LOW_STOCK_THRESHOLD = 10
TOP_PRODUCT_LIMIT = 5


def select_low_stock(
    products: Sequence[Product], threshold: int = LOW_STOCK_THRESHOLD
) -> List[Product]:
    """Return products whose on-hand stock is strictly below `threshold`."""

    return [product for product in products if product.stock < threshold]


def select_top_products(
    products: Sequence[Product], limit: int = TOP_PRODUCT_LIMIT
) -> List[Product]:
    """
    Return the `limit` products with the highest on-hand stock.

    Note this ranks by stock level, not by units sold. `sorted` is stable, so
    ties keep their input order.
    """

    return sorted(products, key=lambda product: product.stock, reverse=True)[:limit]


def build_analytics_prompt(sale_count: int, product_count: int, language: str = "English") -> str:
    return f"""As a business analytics expert, analyse this sales and inventory data:

Total sales: {sale_count}
Products in inventory: {product_count}

Provide:
1. A brief executive summary (maximum 100 words)
2. 3-5 specific recommendations to improve sales
3. 2-3 trends you can identify
4. Important alerts if any products are running low on stock

Answer in {language} as valid JSON with exactly this shape:
{{
  "summary": "text here",
  "recommendations": ["rec1", "rec2"],
  "trends": ["trend1", "trend2"],
  "alerts": ["alert1", "alert2"]
}}"""


def build_inventory_prompt(products: Sequence[Product], language: str = "English") -> str:
    low_stock = select_low_stock(products)
    top_products = select_top_products(products)

    return f"""As an inventory management expert, analyse these products:

Products with low stock (fewer than {LOW_STOCK_THRESHOLD} units): {len(low_stock)}
Top products considered: {len(top_products)}
Total products: {len(products)}

Provide:
1. A list of products with critical stock
2. The top {TOP_PRODUCT_LIMIT} products by turnover
3. 3-5 specific insights to optimise inventory

Answer in {language} as valid JSON with exactly this shape:
{{
  "lowStock": [
    {{"productName": "Name", "currentStock": 5, "recommendedStock": 20}}
  ],
  "topProducts": [
    {{"productName": "Name", "salesCount": 50}}
  ],
  "insights": ["insight1", "insight2"]
}}"""


def build_prediction_prompt(sale_count: int, language: str = "English") -> str:
    return f"""Based on historical sales data, give a prediction for next month.
Total transactions: {sale_count}

Reply in {language} with a brief, concise prediction of no more than 50 words.
Return plain text without Markdown or styling."""


def build_recommendation_prompt(context: str, language: str = "English") -> str:
    return f"""As a business consultant, give specific recommendations based on this context:
{context.strip()}

Provide 3 practical, actionable recommendations in {language}."""
