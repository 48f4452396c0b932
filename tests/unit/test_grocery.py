"""Unit tests for grocery_planner.grocery module."""

import pytest

from grocery_planner.grocery import (
    CATEGORY_MAP,
    OTHER_CATEGORY,
    GroceryItem,
    build_grocery_list,
    categorize_item,
    group_by_category,
    normalize_ingredient,
    parse_manual_ingredients,
)


class TestCategorizeItem:
    """Tests for categorize_item."""

    @pytest.mark.parametrize(
        ("item", "category"),
        [
            ("2 carrots, diced", "Produce"),
            ("1 cup Milk", "Dairy"),
            ("500 g chicken thighs", "Meat"),
            ("2 cups flour", "Grains"),
            ("1 can black beans", "Canned"),
            ("1 tsp cumin", "Spices"),
            ("2 tbsp soy sauce", "Condiments"),
            ("1 cup coffee", "Beverages"),
            ("1 sheet nori", OTHER_CATEGORY),
        ],
    )
    def test_categories(self, item: str, category: str) -> None:
        assert categorize_item(item) == category

    def test_first_category_wins(self) -> None:
        """Pepper is listed under Produce before Spices."""
        assert categorize_item("black pepper") == "Produce"
        assert categorize_item("Canned tomatoes") == "Produce"

    def test_category_order(self) -> None:
        assert list(CATEGORY_MAP)[0] == "Produce"


class TestBuildGroceryList:
    """Tests for build_grocery_list."""

    def test_subtracts_pantry_case_insensitively(self) -> None:
        items = build_grocery_list(["2 cups flour", " Salt ", "1 egg"], pantry=["salt"])
        assert items == [
            GroceryItem(name="2 cups flour", category="Grains"),
            GroceryItem(name="1 egg", category=OTHER_CATEGORY),
        ]

    def test_preserves_order_and_duplicates(self) -> None:
        items = build_grocery_list(["1 egg", "milk", "1 egg"])
        assert [item.name for item in items] == ["1 egg", "milk", "1 egg"]

    def test_pantry_requires_exact_match(self) -> None:
        """Pantry matching is whole-line, not substring."""
        items = build_grocery_list(["2 cups flour"], pantry=["flour"])
        assert [item.name for item in items] == ["2 cups flour"]

    def test_empty(self) -> None:
        assert build_grocery_list([], pantry=["salt"]) == []


class TestHelpers:
    def test_normalize_ingredient(self) -> None:
        assert normalize_ingredient("  Olive Oil\n") == "olive oil"

    def test_group_by_category(self) -> None:
        items = build_grocery_list(["milk", "1 egg", "butter"])
        grouped = group_by_category(items)
        assert list(grouped) == ["Dairy", OTHER_CATEGORY]
        assert [item.name for item in grouped["Dairy"]] == ["milk", "butter"]

    def test_parse_manual_ingredients(self) -> None:
        text = "2 cups flour\n\n  1 egg  \r\n\t\nsalt"
        assert parse_manual_ingredients(text) == ["2 cups flour", "1 egg", "salt"]

    def test_parse_manual_ingredients_splits_commas(self) -> None:
        assert parse_manual_ingredients("flour, sugar\neggs") == ["flour", "sugar", "eggs"]
        assert parse_manual_ingredients(" , ,\n") == []
