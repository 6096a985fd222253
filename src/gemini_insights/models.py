from __future__ import annotations

"""Value objects exchanged between the dashboard data and the insight client."""

from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, Optional, Tuple, TypeVar

from .errors import ParseError

T = TypeVar("T")

LIVE = "live"
FALLBACK = "fallback"


@dataclass(frozen=True)
class Product:
    """An inventory item; only `name` and `stock` feed the insight prompts."""

    name: str
    stock: int
    id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise ValueError(f"Product {self.name!r} has negative stock: {self.stock}")


@dataclass(frozen=True)
class Sale:
    """A completed transaction. The insight core only counts these."""

    id: Optional[str] = None
    product: Optional[str] = None
    quantity: Optional[int] = None
    total: Optional[float] = None


def _require_text(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise ParseError(f"Expected '{key}' to be a string, got {type(value).__name__}")
    return value


def _require_texts(payload: Mapping[str, Any], key: str) -> Tuple[str, ...]:
    value = payload.get(key)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ParseError(f"Expected '{key}' to be a list of strings")
    return tuple(value)


def _require_count(payload: Mapping[str, Any], key: str) -> int:
    value = payload.get(key)
    # bool is an int subclass; "true" is not a stock level
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"Expected '{key}' to be a number, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ParseError(f"Expected '{key}' to be a whole number, got {value!r}")
        value = int(value)
    return value


def _require_objects(payload: Mapping[str, Any], key: str) -> list:
    value = payload.get(key)
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise ParseError(f"Expected '{key}' to be a list of objects")
    return value


@dataclass(frozen=True)
class AnalyticsInsights:
    summary: str
    recommendations: Tuple[str, ...] = ()
    trends: Tuple[str, ...] = ()
    alerts: Tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> "AnalyticsInsights":
        if not isinstance(payload, dict):
            raise ParseError("Analytics insights must be a JSON object")
        return cls(
            summary=_require_text(payload, "summary"),
            recommendations=_require_texts(payload, "recommendations"),
            trends=_require_texts(payload, "trends"),
            alerts=_require_texts(payload, "alerts"),
        )

    def to_dict(self) -> dict:
        return {
            "summary": self.summary,
            "recommendations": list(self.recommendations),
            "trends": list(self.trends),
            "alerts": list(self.alerts),
        }


@dataclass(frozen=True)
class LowStockItem:
    product_name: str
    current_stock: int
    recommended_stock: int

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "LowStockItem":
        return cls(
            product_name=_require_text(payload, "productName"),
            current_stock=_require_count(payload, "currentStock"),
            recommended_stock=_require_count(payload, "recommendedStock"),
        )

    def to_dict(self) -> dict:
        return {
            "productName": self.product_name,
            "currentStock": self.current_stock,
            "recommendedStock": self.recommended_stock,
        }


@dataclass(frozen=True)
class TopProduct:
    product_name: str
    sales_count: int

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TopProduct":
        return cls(
            product_name=_require_text(payload, "productName"),
            sales_count=_require_count(payload, "salesCount"),
        )

    def to_dict(self) -> dict:
        return {"productName": self.product_name, "salesCount": self.sales_count}


@dataclass(frozen=True)
class InventoryInsights:
    low_stock: Tuple[LowStockItem, ...] = ()
    top_products: Tuple[TopProduct, ...] = ()
    insights: Tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> "InventoryInsights":
        if not isinstance(payload, dict):
            raise ParseError("Inventory insights must be a JSON object")
        return cls(
            low_stock=tuple(
                LowStockItem.from_payload(item)
                for item in _require_objects(payload, "lowStock")
            ),
            top_products=tuple(
                TopProduct.from_payload(item)
                for item in _require_objects(payload, "topProducts")
            ),
            insights=_require_texts(payload, "insights"),
        )

    def to_dict(self) -> dict:
        return {
            "lowStock": [item.to_dict() for item in self.low_stock],
            "topProducts": [item.to_dict() for item in self.top_products],
            "insights": list(self.insights),
        }


@dataclass(frozen=True)
class InsightResult(Generic[T]):
    """
    An insight payload tagged with where it came from.

    `source` is `"live"` when the remote model produced the value and
    `"fallback"` when a static or locally recomputed value was substituted.
    `error` holds the exception that forced the fallback.
    """

    value: T
    source: str = LIVE
    error: Optional[BaseException] = field(default=None, compare=False)

    @classmethod
    def live(cls, value: T) -> "InsightResult[T]":
        return cls(value=value, source=LIVE)

    @classmethod
    def fallback(cls, value: T, error: Optional[BaseException] = None) -> "InsightResult[T]":
        return cls(value=value, source=FALLBACK, error=error)

    @property
    def is_live(self) -> bool:
        return self.source == LIVE

    @property
    def is_fallback(self) -> bool:
        return self.source == FALLBACK
