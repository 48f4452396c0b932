"""
Grocery Planner - pull ingredient lists from recipe pages.

This package extracts ingredient lines from a recipe page's markup, using
embedded JSON-LD recipe data first and a list-item heuristic as a fallback,
optionally refined by an external ingredient normalizer. Helpers turn the
result into a categorized grocery list.
"""

__version__ = "0.1.0"

from .exceptions import (
    FetchFailedError,
    GroceryPlannerError,
    MissingInputError,
    NetworkError,
)
from .grocery import GroceryItem, build_grocery_list, categorize_item
from .pipeline import extract, extract_with_fallback

__all__ = [
    "FetchFailedError",
    "GroceryItem",
    "GroceryPlannerError",
    "MissingInputError",
    "NetworkError",
    "build_grocery_list",
    "categorize_item",
    "extract",
    "extract_with_fallback",
]
