"""Recipe page fetching over HTTP.

Example:
    >>> async with httpx.AsyncClient(follow_redirects=True) as client:
    ...     html = await HttpDocumentFetcher(client).fetch("https://example.com/pie")
"""

from __future__ import annotations

import logging

import httpx

from ..exceptions import FetchFailedError, MissingInputError, NetworkError

logger = logging.getLogger(__name__)


class HttpDocumentFetcher:
    """Fetch raw page markup with a shared ``httpx.AsyncClient``.

    The client's own settings decide timeouts and redirects. Each call
    issues exactly one GET; there is no retry.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    async def fetch(self, url: str) -> str:
        """Fetch a page body.

        Args:
            url: Address of the recipe page

        Returns:
            Response body decoded as text

        Raises:
            MissingInputError: If url is empty
            FetchFailedError: If the server returned a non-2xx status
            NetworkError: If the request failed before a response arrived
        """
        if not url or not url.strip():
            raise MissingInputError("Missing url parameter")

        logger.info(f"Fetching {url}")
        try:
            response = await self.client.get(url)
        except httpx.HTTPError as e:
            raise NetworkError(str(e) or type(e).__name__, url=url) from e

        if not response.is_success:
            logger.warning(f"Fetch of {url} returned {response.status_code}")
            raise FetchFailedError("Failed to fetch URL", status=response.status_code, url=url)

        return response.text
