"""Unit tests for grocery_planner.services.fetcher module."""

import httpx
import pytest
from pytest_httpx import HTTPXMock

from grocery_planner.exceptions import FetchFailedError, MissingInputError, NetworkError
from grocery_planner.services.fetcher import HttpDocumentFetcher

URL = "https://recipes.test/pancakes"


class TestHttpDocumentFetcher:
    """Tests for HttpDocumentFetcher.fetch."""

    async def test_returns_body(
        self, httpx_mock: HTTPXMock, http_client: httpx.AsyncClient, recipe_page: str
    ) -> None:
        httpx_mock.add_response(url=URL, method="GET", text=recipe_page)
        assert await HttpDocumentFetcher(http_client).fetch(URL) == recipe_page

    @pytest.mark.parametrize("url", ["", "   "])
    async def test_missing_url(self, url: str, http_client: httpx.AsyncClient) -> None:
        with pytest.raises(MissingInputError, match="Missing url parameter"):
            await HttpDocumentFetcher(http_client).fetch(url)

    @pytest.mark.parametrize("status_code", [301, 403, 404, 500])
    async def test_non_success_raises_with_status(
        self, status_code: int, httpx_mock: HTTPXMock, http_client: httpx.AsyncClient
    ) -> None:
        """Non-2xx surfaces as FetchFailedError carrying the status code."""
        httpx_mock.add_response(url=URL, status_code=status_code)
        with pytest.raises(FetchFailedError) as exc_info:
            await HttpDocumentFetcher(http_client).fetch(URL)
        assert exc_info.value.status == status_code
        assert exc_info.value.context["url"] == URL

    async def test_transport_failure_raises_network_error(
        self, httpx_mock: HTTPXMock, http_client: httpx.AsyncClient
    ) -> None:
        httpx_mock.add_exception(httpx.ConnectError("name resolution failed"), url=URL)
        with pytest.raises(NetworkError, match="name resolution failed"):
            await HttpDocumentFetcher(http_client).fetch(URL)

    async def test_single_request_no_retry(
        self, httpx_mock: HTTPXMock, http_client: httpx.AsyncClient
    ) -> None:
        httpx_mock.add_response(url=URL, status_code=503)
        with pytest.raises(FetchFailedError):
            await HttpDocumentFetcher(http_client).fetch(URL)
        assert len(httpx_mock.get_requests()) == 1
