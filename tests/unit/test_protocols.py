"""Unit tests for grocery_planner.protocols module.

Tests Protocol definitions and runtime checkability.
"""

import httpx

from grocery_planner.extractors import ListItemExtractor, StructuredDataScanner
from grocery_planner.protocols import DocumentFetcher, IngredientExtractor, IngredientNormalizer
from grocery_planner.services import HttpDocumentFetcher, ZestfulNormalizer


class TestDocumentFetcherProtocol:
    """Tests for DocumentFetcher protocol."""

    def test_is_runtime_checkable(self) -> None:
        """DocumentFetcher can be used with isinstance."""

        class StaticFetcher:
            async def fetch(self, url: str) -> str:
                return "<li>1 cup sugar</li>"

        assert isinstance(StaticFetcher(), DocumentFetcher)

    def test_missing_method_fails_check(self) -> None:
        """Class without fetch method fails isinstance check."""

        class BadFetcher:
            def get(self, url: str) -> str:
                return ""

        assert not isinstance(BadFetcher(), DocumentFetcher)

    async def test_http_fetcher_conforms(self) -> None:
        async with httpx.AsyncClient() as client:
            assert isinstance(HttpDocumentFetcher(client), DocumentFetcher)


class TestIngredientNormalizerProtocol:
    """Tests for IngredientNormalizer protocol."""

    def test_is_runtime_checkable(self) -> None:
        class PassThrough:
            async def normalize(self, candidates: list[str]) -> list[str]:
                return list(candidates)

        assert isinstance(PassThrough(), IngredientNormalizer)

    def test_missing_method_fails_check(self) -> None:
        class BadNormalizer:
            pass

        assert not isinstance(BadNormalizer(), IngredientNormalizer)

    def test_zestful_conforms(self) -> None:
        assert isinstance(ZestfulNormalizer(None), IngredientNormalizer)


class TestIngredientExtractorProtocol:
    """Tests for IngredientExtractor protocol."""

    def test_builtin_extractors_conform(self) -> None:
        assert isinstance(StructuredDataScanner(), IngredientExtractor)
        assert isinstance(ListItemExtractor(), IngredientExtractor)

    def test_missing_method_fails_check(self) -> None:
        class BadExtractor:
            def wrong_method(self) -> None:
                pass

        assert not isinstance(BadExtractor(), IngredientExtractor)
