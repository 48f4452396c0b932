"""Protocol definitions for grocery_planner.

This module defines the interfaces between the extraction pipeline and the
collaborators it depends on. Using Protocols lets tests and callers swap in
their own fetcher or normalizer without subclassing.

Example:
    >>> class StaticFetcher:
    ...     async def fetch(self, url: str) -> str:
    ...         return "<li>1 cup sugar</li>"
    ...
    >>> isinstance(StaticFetcher(), DocumentFetcher)
    True
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DocumentFetcher(Protocol):
    """Protocol for retrieving the raw markup of a recipe page.

    Implementations own timeout and redirect policy.
    """

    async def fetch(self, url: str) -> str:
        """Fetch a page body.

        Args:
            url: Address of the recipe page

        Returns:
            Raw document text

        Raises:
            MissingInputError: If url is empty
            FetchFailedError: If the server returned a non-success status
            NetworkError: If no response was received
        """
        ...


@runtime_checkable
class IngredientNormalizer(Protocol):
    """Protocol for refining heuristic candidate lines.

    Implementations must never raise: on any failure they return the
    candidates they were given.
    """

    async def normalize(self, candidates: list[str]) -> list[str]:
        """Refine candidate lines into ingredient strings.

        Args:
            candidates: Non-empty list of candidate lines

        Returns:
            Refined ingredient strings, or the candidates unchanged
        """
        ...


@runtime_checkable
class IngredientExtractor(Protocol):
    """Protocol for a synchronous markup-to-ingredients strategy."""

    def extract(self, document: str) -> list[str]:
        """Extract ingredient lines from raw markup. Never raises."""
        ...
