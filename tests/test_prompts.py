from gemini_insights import Product
from gemini_insights.ai.prompts import (
    build_analytics_prompt,
    build_inventory_prompt,
    build_prediction_prompt,
    build_recommendation_prompt,
    select_low_stock,
    select_top_products,
)


def test_builders_are_pure(products):
    assert build_analytics_prompt(12, 4) == build_analytics_prompt(12, 4)
    assert build_inventory_prompt(products) == build_inventory_prompt(list(products))
    assert build_prediction_prompt(12) == build_prediction_prompt(12)


def test_analytics_prompt_embeds_counts_and_keys():
    prompt = build_analytics_prompt(sale_count=12, product_count=4, language="Spanish")

    assert "Total sales: 12" in prompt
    assert "Products in inventory: 4" in prompt
    assert "Answer in Spanish" in prompt
    assert "maximum 100 words" in prompt
    assert "3-5 specific recommendations" in prompt
    assert "2-3 trends" in prompt
    for key in ('"summary"', '"recommendations"', '"trends"', '"alerts"'):
        assert key in prompt


def test_inventory_prompt_embeds_counts_not_names(products):
    prompt = build_inventory_prompt(products)

    assert "(fewer than 10 units): 2" in prompt
    assert "Total products: 4" in prompt
    for key in ('"lowStock"', '"topProducts"', '"insights"'):
        assert key in prompt
    assert "Alpha" not in prompt


def test_prediction_prompt_limits_length():
    prompt = build_prediction_prompt(7)

    assert "Total transactions: 7" in prompt
    assert "no more than 50 words" in prompt


def test_recommendation_prompt_includes_context():
    prompt = build_recommendation_prompt("  Stock-outs every Friday  ")

    assert "Stock-outs every Friday" in prompt
    assert "3 practical, actionable recommendations" in prompt


def test_low_stock_is_strictly_below_ten():
    items = [Product("a", 9), Product("b", 10), Product("c", 0)]

    assert [p.name for p in select_low_stock(items)] == ["a", "c"]


def test_top_products_rank_by_stock_not_sales(products):
    # "Top" means most units on hand; sales history plays no part.
    assert [p.name for p in select_top_products(products)] == [
        "Delta",
        "Bravo",
        "Alpha",
        "Charlie",
    ]


def test_top_products_keep_five_and_stable_ties():
    items = [Product(f"p{i}", stock) for i, stock in enumerate([5, 8, 8, 1, 9, 8, 2])]

    assert [p.name for p in select_top_products(items)] == ["p4", "p1", "p2", "p5", "p0"]
