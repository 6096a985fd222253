from __future__ import annotations

"""Static and locally recomputed payloads used when Gemini is unavailable."""

import random
from typing import Optional, Sequence

from ..models import AnalyticsInsights, InventoryInsights, LowStockItem, Product, TopProduct
from .prompts import select_low_stock, select_top_products

MIN_RECOMMENDED_STOCK = 20
RESTOCK_MULTIPLIER = 3
SALES_COUNT_RANGE = (50, 150)

SALES_PREDICTION_FALLBACK = (
    "Based on historical trends, moderate sales growth is expected next month."
)
BUSINESS_RECOMMENDATION_FALLBACK = (
    "1. Optimise your inventory\n"
    "2. Improve the customer experience\n"
    "3. Analyse sales trends regularly"
)


def analytics_fallback() -> AnalyticsInsights:
    return AnalyticsInsights(
        summary="Analysing sales and inventory data...",
        recommendations=(
            "Review your fastest-moving products",
            "Adjust prices to match demand",
            "Optimise inventory levels",
        ),
        trends=(
            "Steady growth in sales",
            "Higher demand for electronics",
        ),
        alerts=("Set up low-stock alerts for critical products",),
    )


def recommended_stock(current_stock: int) -> int:
    return max(MIN_RECOMMENDED_STOCK, current_stock * RESTOCK_MULTIPLIER)


def synthetic_sales_count(rank: int, rng: Optional[random.Random] = None) -> int:
    """
    Placeholder sales count for the product at `rank` (0 = most stock).

    Without `rng` the value is derived from the rank alone: 149, 129, 109, ...
    never dropping below the bottom of the range. With `rng` it is drawn
    uniformly from [50, 150).
    """

    low, high = SALES_COUNT_RANGE
    if rng is not None:
        return rng.randrange(low, high)
    return max(low, high - 1 - rank * 20)


def inventory_fallback(
    products: Sequence[Product], rng: Optional[random.Random] = None
) -> InventoryInsights:
    """Rebuild inventory insights from the real product list."""

    low_stock = tuple(
        LowStockItem(
            product_name=product.name,
            current_stock=product.stock,
            recommended_stock=recommended_stock(product.stock),
        )
        for product in select_low_stock(products)
    )
    top_products = tuple(
        TopProduct(product_name=product.name, sales_count=synthetic_sales_count(rank, rng))
        for rank, product in enumerate(select_top_products(products))
    )
    return InventoryInsights(
        low_stock=low_stock,
        top_products=top_products,
        insights=(
            "Consider restocking products with low stock",
            "Review product turnover every month",
            "Set up automatic reorder levels",
        ),
    )
