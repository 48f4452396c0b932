"""
Heuristic ingredient extraction from list items.

Fallback for pages without JSON-LD recipe data. Every ``<li>`` is reduced
to plain text and kept if it looks like a measured ingredient: it contains
a digit or one of a small set of unit words.

The unit check is a plain case-insensitive substring match, so it admits
steps such as "Bake for 20 minutes" and any line containing the letter
"g", and it rejects unmeasured ingredients such as "Salt". That trade-off
is accepted; refinement, when available, is left to the normalizer.
"""
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import List

logger = logging.getLogger(__name__)

UNIT_TOKENS = (
    "cup",
    "tablespoon",
    "teaspoon",
    "tsp",
    "tbsp",
    "ounce",
    "oz",
    "gram",
    "g",
    "ml",
    "kg",
)

_LIST_ITEM = re.compile(r"<li\b[^>]*>([\s\S]*?)</li>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]+>")
_MEASURED = re.compile(r"\d|" + "|".join(UNIT_TOKENS), re.IGNORECASE | re.ASCII)

# Only these two entities are decoded
_ENTITIES = (("&nbsp;", " "), ("&amp;", "&"))


def iter_list_items(document: str) -> Iterator[str]:
    """Yield the raw inner markup of every list item in document order."""
    for match in _LIST_ITEM.finditer(document):
        yield match.group(1)


def clean_line(fragment: str) -> str:
    """Strip tags, decode ``&nbsp;`` and ``&amp;``, and trim."""
    text = _TAG.sub("", fragment)
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    return text.strip()


def looks_like_ingredient(text: str) -> bool:
    """Whether a cleaned line contains a digit or a unit token."""
    return bool(text) and _MEASURED.search(text) is not None


@dataclass(frozen=True)
class CandidateLine:
    """A plain-text line taken from one list item"""
    text: str

    @property
    def is_candidate(self) -> bool:
        return looks_like_ingredient(self.text)


class ListItemExtractor:
    """
    Pick measured-looking lines out of a page's list items.

    Order and duplicates follow the document.
    """

    name = "list-items"

    def lines(self, document: str) -> List[CandidateLine]:
        """All cleaned list-item lines, classified or not"""
        return [CandidateLine(clean_line(fragment)) for fragment in iter_list_items(document)]

    def extract(self, document: str) -> List[str]:
        """
        Return candidate ingredient lines.

        Args:
            document: Raw page markup

        Returns:
            Text of every list item classified as a candidate
        """
        lines = self.lines(document)
        candidates = [line.text for line in lines if line.is_candidate]
        logger.debug(f"{len(candidates)} of {len(lines)} list items look like ingredients")
        return candidates
