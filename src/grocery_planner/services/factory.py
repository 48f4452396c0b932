"""Service factory for centralized dependency injection.

This module provides the ServiceFactory class which creates the pipeline's
collaborators around one shared HTTP client.

Benefits:
- Single httpx client instance (connection pooling)
- Centralized configuration management
- Easy testing via mock injection

Example:
    >>> from grocery_planner.config import PlannerConfig
    >>> factory = ServiceFactory(PlannerConfig.load())
    >>> fetcher = factory.create_fetcher()
    >>> normalizer = factory.create_normalizer()
    >>> await factory.aclose()
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from ..config import PlannerConfig
    from .fetcher import HttpDocumentFetcher
    from .normalizer import ZestfulNormalizer


@dataclass
class ServiceFactory:
    """Factory for creating service instances with shared dependencies.

    Attributes:
        config: Planner configuration for all services

    Note:
        The HTTP client is lazily created and cached. Call :meth:`aclose`
        (or use the factory as an async context manager) when done.
    """

    config: PlannerConfig

    @cached_property
    def client(self) -> httpx.AsyncClient:
        """Get the shared async HTTP client.

        Returns:
            Cached httpx.AsyncClient configured from the planner config
        """
        return httpx.AsyncClient(
            timeout=self.config.fetch_timeout,
            follow_redirects=self.config.follow_redirects,
            headers={"User-Agent": self.config.user_agent},
        )

    def create_fetcher(self) -> HttpDocumentFetcher:
        """Create a page fetcher using the shared client."""
        from .fetcher import HttpDocumentFetcher

        return HttpDocumentFetcher(self.client)

    def create_normalizer(self) -> ZestfulNormalizer:
        """Create an ingredient normalizer.

        The shared client is only created when a credential is configured;
        without one the normalizer is a pass-through.
        """
        from .normalizer import ZestfulNormalizer

        client = self.client if self.config.normalizer_enabled else None
        return ZestfulNormalizer(
            client,
            api_key=self.config.normalizer_api_key,
            endpoint=self.config.normalizer_endpoint,
        )

    async def aclose(self) -> None:
        """Close the shared client if it was created."""
        if "client" in self.__dict__:
            await self.client.aclose()
            del self.__dict__["client"]

    async def __aenter__(self) -> ServiceFactory:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
