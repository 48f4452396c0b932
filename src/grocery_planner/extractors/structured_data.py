"""Structured-data ingredient scanning.

Most recipe sites embed their recipe as JSON-LD inside
``<script type="application/ld+json">`` blocks. This module finds those
blocks, decodes them, and collects the ``recipeIngredient`` arrays of every
node typed ``Recipe``.

The scan never fails: a block that does not decode is logged and skipped,
and a node without a usable ingredient array contributes nothing.

Example:
    >>> html = '<script type="application/ld+json">{"@type": "Recipe", '
    ...        '"recipeIngredient": ["2 cups flour", "1 egg"]}</script>'
    >>> StructuredDataScanner().scan(html)
    ['2 cups flour', '1 egg']
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from ..exceptions import MalformedStructuredDataError
from ..fallback import try_or_default

logger = logging.getLogger(__name__)

RECIPE_TYPE = "Recipe"

_JSON_LD_BLOCK = re.compile(
    r"<script[^>]*type=[\"']application/ld\+json[\"'][^>]*>([\s\S]*?)</script>",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class StructuredNode:
    """A decoded structured-data object, reduced to the fields we use.

    Attributes:
        types: Declared ``@type`` values (empty when absent)
        ingredients: The ``recipeIngredient`` array, or None when it is
            missing or not a list of strings
    """

    types: frozenset[str] = frozenset()
    ingredients: tuple[str, ...] | None = None

    @classmethod
    def from_value(cls, value: Any) -> StructuredNode:
        """Normalize an arbitrary decoded JSON value into a node.

        ``@type`` may be a string or a list of strings; a scalar becomes a
        one-element set. ``recipeIngredient`` is kept only when it is a list
        whose members are all strings. Values that are not JSON objects
        yield an empty node.
        """
        if not isinstance(value, dict):
            return cls()

        raw_type = value.get("@type")
        if isinstance(raw_type, list):
            types = frozenset(t for t in raw_type if isinstance(t, str))
        elif isinstance(raw_type, str):
            types = frozenset([raw_type])
        else:
            types = frozenset()

        raw_ingredients = value.get("recipeIngredient")
        ingredients = None
        if isinstance(raw_ingredients, list) and all(
            isinstance(item, str) for item in raw_ingredients
        ):
            ingredients = tuple(raw_ingredients)

        return cls(types=types, ingredients=ingredients)

    @property
    def is_recipe(self) -> bool:
        """Whether the node declares the Recipe type."""
        return RECIPE_TYPE in self.types

    def contributed_ingredients(self) -> list[str]:
        """Ingredients this node adds to the result, in array order."""
        if self.is_recipe and self.ingredients is not None:
            return list(self.ingredients)
        return []


def iter_structured_blocks(document: str) -> Iterator[str]:
    """Yield the trimmed text of every JSON-LD script block in document order."""
    for match in _JSON_LD_BLOCK.finditer(document):
        yield match.group(1).strip()


def _decode(text: str) -> Any:
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as e:
        raise MalformedStructuredDataError(
            "Could not decode structured-data block",
            error=str(e),
            preview=text[:80],
        ) from e


def decode_block(text: str) -> Any | None:
    """Decode one block, returning None if it is not valid JSON."""
    return try_or_default(
        lambda: _decode(text),
        None,
        errors=(MalformedStructuredDataError,),
        label="decode_block",
    )


def iter_nodes(value: Any) -> Iterator[StructuredNode]:
    """Yield nodes from a decoded value; a single object is one node."""
    items = value if isinstance(value, list) else [value]
    for item in items:
        yield StructuredNode.from_value(item)


class StructuredDataScanner:
    """Collect ``recipeIngredient`` arrays from JSON-LD Recipe nodes.

    Ingredients from several nodes and blocks are concatenated in document
    order, node order within a block, duplicates preserved.
    """

    name = "structured-data"

    def extract(self, document: str) -> list[str]:
        """Alias for :meth:`scan` so the scanner satisfies IngredientExtractor."""
        return self.scan(document)

    def scan(self, document: str) -> list[str]:
        """Scan a raw document for Recipe ingredients.

        Args:
            document: Raw page markup

        Returns:
            Ingredient strings in discovery order (possibly empty)
        """
        ingredients: list[str] = []
        blocks = 0
        for text in iter_structured_blocks(document):
            blocks += 1
            value = decode_block(text)
            if value is None:
                continue
            for node in iter_nodes(value):
                ingredients.extend(node.contributed_ingredients())

        logger.debug(
            f"Scanned {blocks} structured-data blocks, found {len(ingredients)} ingredients"
        )
        return ingredients


def extract(document: str) -> list[str]:
    """Structured-data-only extraction."""
    return StructuredDataScanner().scan(document)
