#!/usr/bin/env python
"""
Run one insight batch over CSV files and print the result as JSON.

Usage:
    uv run python scripts/print_insights.py [products.csv sales.csv]
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path


def _ensure_src_on_path() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


# Make shared helpers importable even when the script is executed via `uv run`.
_ensure_src_on_path()


def main(argv: list[str]) -> int:
    from gemini_insights import (
        InsightClient,
        get_settings,
        load_products,
        load_sales,
        load_sample_data,
        run_insight_batch,
    )

    if len(argv) == 2:
        products = load_products(Path(argv[0]))
        sales = load_sales(Path(argv[1]))
    elif not argv:
        sales, products = load_sample_data()
    else:
        print(__doc__.strip())
        return 2

    client = InsightClient(get_settings())
    batch = asyncio.run(run_insight_batch(client, sales, products, sequence=1))
    print(json.dumps(batch.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    _ensure_src_on_path()
    from gemini_insights import configure_logging

    configure_logging()
    try:
        sys.exit(main(sys.argv[1:]))
    except Exception as exc:
        print(f"❌ {exc}")
        sys.exit(1)
