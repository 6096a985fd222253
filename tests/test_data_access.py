import pandas as pd
import pytest

from gemini_insights import load_products, load_sales, load_sample_data


def test_load_products_accepts_aliased_columns():
    df = pd.DataFrame(
        {"Product Name": ["Mouse ", "Hub"], "Current Stock": [12, None], "SKU": ["A1", "B2"]}
    )

    products = load_products(df)

    assert [(p.name, p.stock, p.id) for p in products] == [("Mouse", 12, "A1"), ("Hub", 0, "B2")]


def test_load_products_requires_name_and_stock():
    with pytest.raises(ValueError, match="name and stock"):
        load_products(pd.DataFrame({"name": ["Mouse"]}))


def test_load_sales_from_csv(tmp_path):
    path = tmp_path / "sales.csv"
    path.write_text("id,product,quantity,total\nS1,Mouse,2,39.98\nS2,Hub,,\n")

    sales = load_sales(path)

    assert len(sales) == 2
    assert sales[0].quantity == 2
    assert sales[0].total == pytest.approx(39.98)
    assert sales[1].quantity is None


def test_sample_data_ships_with_repo():
    sales, products = load_sample_data()

    assert len(sales) == 10
    assert len(products) == 8
    assert sum(1 for p in products if p.stock < 10) == 3
