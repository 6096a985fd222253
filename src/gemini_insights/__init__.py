"""
Gemini-powered narrative insights for a small sales and inventory dashboard.

The package provides four main capabilities:

* Configuration helpers (`config`) for reading environment variables once.
* Data helpers (`data_access`) for loading products and sales with pandas.
* Gemini helpers (`ai`) for building prompts, calling the API and falling back
  to static content whenever the call chain fails.
* Orchestration (`batch`) for running the three insight categories together.

Importing the package does not trigger any network calls; build an
`InsightClient` from `get_settings()` when you need one.
"""

from .ai import InsightClient
from .batch import InsightBatch, InsightBoard, run_insight_batch
from .config import (
    GeminiSettings,
    GenerationSettings,
    configure_logging,
    get_settings,
    load_settings,
)
from .data_access import load_products, load_sales, load_sample_data
from .errors import (
    ConfigurationError,
    GeminiClientError,
    ParseError,
    ProtocolError,
    TransportError,
)
from .models import (
    AnalyticsInsights,
    InsightResult,
    InventoryInsights,
    LowStockItem,
    Product,
    Sale,
    TopProduct,
)

__all__ = [
    "AnalyticsInsights",
    "ConfigurationError",
    "GeminiClientError",
    "GeminiSettings",
    "GenerationSettings",
    "InsightBatch",
    "InsightBoard",
    "InsightClient",
    "InsightResult",
    "InventoryInsights",
    "LowStockItem",
    "ParseError",
    "Product",
    "ProtocolError",
    "Sale",
    "TopProduct",
    "TransportError",
    "configure_logging",
    "get_settings",
    "load_products",
    "load_sales",
    "load_sample_data",
    "load_settings",
    "run_insight_batch",
]
