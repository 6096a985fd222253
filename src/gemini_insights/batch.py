from __future__ import annotations

"""Run the three insight categories together and keep the latest display state."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Sized

from .ai.insights import InsightClient
from .models import AnalyticsInsights, InsightResult, InventoryInsights, Product

logger = logging.getLogger(__name__)

LATEST_ISSUED = "latest_issued"
LAST_SETTLED = "last_settled"
BATCH_ERROR_MESSAGE = "Could not load insights. Check your connection and API key."


@dataclass(frozen=True)
class InsightBatch:
    """One analytics/inventory/prediction triple produced by a single refresh."""

    analytics: InsightResult[AnalyticsInsights]
    inventory: InsightResult[InventoryInsights]
    prediction: InsightResult[str]
    sequence: int = 0

    @property
    def degraded(self) -> bool:
        return any(
            result.is_fallback for result in (self.analytics, self.inventory, self.prediction)
        )

    def to_dict(self) -> dict:
        return {
            "sequence": self.sequence,
            "analytics": {"source": self.analytics.source, **self.analytics.value.to_dict()},
            "inventory": {"source": self.inventory.source, **self.inventory.value.to_dict()},
            "prediction": {"source": self.prediction.source, "text": self.prediction.value},
        }


async def run_insight_batch(
    client: InsightClient,
    sales: Sized,
    products: Sequence[Product],
    sequence: int = 0,
) -> InsightBatch:
    """Issue the three category calls concurrently and wait for all of them."""

    analytics, inventory, prediction = await asyncio.gather(
        client.get_analytics_insights(sales, products),
        client.get_inventory_insights(products),
        client.get_sales_prediction(sales),
    )
    return InsightBatch(
        analytics=analytics,
        inventory=inventory,
        prediction=prediction,
        sequence=sequence,
    )


class InsightBoard:
    """
    Display state fed by overlapping insight batches.

    Each `refresh` is numbered. With the default `latest_issued` policy only
    the most recently issued batch is shown; any older batch that settles is
    dropped, even if nothing newer has arrived yet. `last_settled` keeps the
    simpler behaviour where whichever batch finishes last wins.
    """

    def __init__(self, client: InsightClient, policy: str = LATEST_ISSUED) -> None:
        if policy not in (LATEST_ISSUED, LAST_SETTLED):
            raise ValueError(f"Unknown refresh policy: {policy!r}")
        self.client = client
        self.policy = policy
        self.batch: Optional[InsightBatch] = None
        self.error: Optional[str] = None
        self.in_flight = 0
        self._issued = 0
        self._inputs: Optional[tuple] = None

    @property
    def loading(self) -> bool:
        return self.in_flight > 0

    @property
    def issued(self) -> int:
        return self._issued

    def _accepts(self, sequence: int) -> bool:
        if self.policy == LAST_SETTLED:
            return True
        return sequence == self._issued

    async def refresh(self, sales: Sized, products: Sequence[Product]) -> Optional[InsightBatch]:
        """Run a new batch unconditionally; earlier batches keep running."""

        self._issued += 1
        sequence = self._issued
        self._inputs = (sales, products)
        self.in_flight += 1
        try:
            batch = await run_insight_batch(self.client, sales, products, sequence)
        except Exception:
            logger.exception(f"Insight batch #{sequence} could not be completed")
            if self._accepts(sequence):
                self.error = BATCH_ERROR_MESSAGE
            return None
        finally:
            self.in_flight -= 1

        if self._accepts(sequence):
            self.batch = batch
            self.error = None
        else:
            logger.info(
                f"Discarding insight batch #{sequence}; #{self._issued} has been issued since"
            )
        return batch

    async def refresh_if_changed(
        self, sales: Sized, products: Sequence[Product]
    ) -> Optional[InsightBatch]:
        """Refresh only when `sales` or `products` is a different object than last time."""

        if self._inputs is not None:
            last_sales, last_products = self._inputs
            if last_sales is sales and last_products is products:
                return self.batch
        return await self.refresh(sales, products)
