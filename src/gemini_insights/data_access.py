from __future__ import annotations

"""Utilities for loading product and sales collections with pandas."""

from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from .models import Product, Sale

PathOrFrame = Union[str, Path, pd.DataFrame]

SAMPLE_DIR = Path(__file__).resolve().parents[2] / "assets" / "sample"


def _read_frame(source: PathOrFrame) -> pd.DataFrame:
    if isinstance(source, pd.DataFrame):
        return source
    return pd.read_csv(source)


def _pick_column(df: pd.DataFrame, *aliases: str) -> Optional[str]:
    # Normalise column names to make the loader resilient to different exports
    normalised = {col.strip().lower().replace(" ", "_"): col for col in df.columns}
    for alias in aliases:
        if alias in normalised:
            return normalised[alias]
    return None


def _optional(row: pd.Series, column: Optional[str]):
    if column is None:
        return None
    value = row[column]
    return None if pd.isna(value) else value


def load_products(source: PathOrFrame) -> List[Product]:
    """
    Load products from a CSV path or an existing DataFrame.

    Accepts `name`/`product_name` and `stock`/`current_stock` columns; an
    optional `id`/`product_id` column is carried through as a string.
    """

    df = _read_frame(source)
    name_col = _pick_column(df, "name", "product_name", "product")
    stock_col = _pick_column(df, "stock", "current_stock", "quantity_on_hand")
    id_col = _pick_column(df, "id", "product_id", "sku")

    if name_col is None or stock_col is None:
        available = ", ".join(map(str, df.columns))
        raise ValueError(
            "Product data must include name and stock columns. "
            f"Available columns: {available}"
        )

    stock = pd.to_numeric(df[stock_col], errors="coerce").fillna(0).astype(int)

    products = []
    for (_, row), units in zip(df.iterrows(), stock):
        product_id = _optional(row, id_col)
        products.append(
            Product(
                name=str(row[name_col]).strip(),
                stock=int(units),
                id=str(product_id) if product_id is not None else None,
            )
        )
    return products


def load_sales(source: PathOrFrame) -> List[Sale]:
    """Load sale records from a CSV path or DataFrame. Every column is optional."""

    df = _read_frame(source)
    id_col = _pick_column(df, "id", "sale_id", "order_id")
    product_col = _pick_column(df, "product", "product_name", "name")
    quantity_col = _pick_column(df, "quantity", "qty", "units")
    total_col = _pick_column(df, "total", "amount", "revenue")

    sales = []
    for _, row in df.iterrows():
        sale_id = _optional(row, id_col)
        product = _optional(row, product_col)
        quantity = _optional(row, quantity_col)
        total = _optional(row, total_col)
        sales.append(
            Sale(
                id=str(sale_id) if sale_id is not None else None,
                product=str(product) if product is not None else None,
                quantity=int(quantity) if quantity is not None else None,
                total=float(total) if total is not None else None,
            )
        )
    return sales


def load_sample_data(sample_dir: Optional[Path] = None) -> tuple[List[Sale], List[Product]]:
    """Return the bundled demo `(sales, products)` pair."""

    sample_dir = sample_dir or SAMPLE_DIR
    return (
        load_sales(sample_dir / "sales.csv"),
        load_products(sample_dir / "products.csv"),
    )
