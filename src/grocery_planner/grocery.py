"""Grocery list building from extracted ingredients.

Turns a list of ingredient lines into a categorized shopping list by
subtracting what is already in the pantry. Matching is by trimmed,
lowercased text; there is no quantity parsing and no merging of
duplicates across recipes.

Example:
    >>> build_grocery_list(["2 cups flour", "Salt"], pantry=["salt"])
    [GroceryItem(name='2 cups flour', category='Grains')]
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

NO_INGREDIENTS_MESSAGE = (
    "No ingredients found on that page. You can paste them manually instead."
)

OTHER_CATEGORY = "Other"

_MANUAL_SEPARATOR = re.compile(r"\n|,")

# Checked in order; the first category with a matching keyword wins
CATEGORY_MAP: dict[str, tuple[str, ...]] = {
    "Produce": (
        "apple",
        "banana",
        "carrot",
        "broccoli",
        "lettuce",
        "tomato",
        "potato",
        "onion",
        "garlic",
        "pepper",
        "spinach",
        "cilantro",
        "parsley",
        "celery",
        "cucumber",
        "mushroom",
        "ginger",
        "lime",
        "lemon",
    ),
    "Dairy": ("milk", "cheese", "yogurt", "butter", "cream", "cream cheese"),
    "Meat": ("chicken", "beef", "pork", "sausage", "bacon", "ham", "turkey"),
    "Grains": ("bread", "rice", "pasta", "flour", "tortilla", "cereal", "oats"),
    "Canned": ("beans", "tomatoes", "corn", "tuna", "soup"),
    "Spices": ("salt", "pepper", "cumin", "oregano", "basil", "thyme", "coriander"),
    "Condiments": (
        "oil",
        "olive oil",
        "vinegar",
        "soy sauce",
        "ketchup",
        "mustard",
        "mayonnaise",
    ),
    "Beverages": ("juice", "coffee", "tea"),
}


class GroceryItem(BaseModel):
    """One line of the shopping list."""

    name: str
    category: str

    model_config = ConfigDict(frozen=True)


def normalize_ingredient(item: str) -> str:
    """Canonical form used for pantry matching and categorization."""
    return item.strip().lower()


def categorize_item(item: str) -> str:
    """Return the grocery section for an ingredient line.

    Keywords are matched as substrings of the normalized line, so
    "2 tomatoes" lands in Produce (via "tomato") before Canned is checked.
    """
    normalized = normalize_ingredient(item)
    for category, keywords in CATEGORY_MAP.items():
        if any(keyword in normalized for keyword in keywords):
            return category
    return OTHER_CATEGORY


def build_grocery_list(ingredients: Iterable[str], pantry: Iterable[str] = ()) -> list[GroceryItem]:
    """Ingredients not already in the pantry, categorized, in input order.

    Args:
        ingredients: Ingredient lines collected from recipes or manual entry
        pantry: Items already on hand

    Returns:
        One GroceryItem per remaining ingredient (duplicates preserved)
    """
    on_hand = {normalize_ingredient(item) for item in pantry}
    return [
        GroceryItem(name=ingredient.strip(), category=categorize_item(ingredient))
        for ingredient in ingredients
        if normalize_ingredient(ingredient) not in on_hand
    ]


def group_by_category(items: Iterable[GroceryItem]) -> dict[str, list[GroceryItem]]:
    """Group items by category, categories in first-seen order."""
    grouped: dict[str, list[GroceryItem]] = {}
    for item in items:
        grouped.setdefault(item.category, []).append(item)
    return grouped


def parse_manual_ingredients(text: str) -> list[str]:
    """Split pasted ingredient text on newlines and commas.

    Entries are trimmed and empty ones dropped.
    """
    return [entry.strip() for entry in _MANUAL_SEPARATOR.split(text) if entry.strip()]
