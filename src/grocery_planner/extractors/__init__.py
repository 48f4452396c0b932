"""Extractors for ingredient lines in recipe page markup."""

from .list_items import CandidateLine, ListItemExtractor, looks_like_ingredient
from .structured_data import StructuredDataScanner, StructuredNode

__all__ = [
    "CandidateLine",
    "ListItemExtractor",
    "StructuredDataScanner",
    "StructuredNode",
    "looks_like_ingredient",
]
