"""Ingredient normalization through the Zestful parsing API.

The heuristic list-item fallback produces raw lines such as
``"2 cups all-purpose flour, sifted"``. When an API key is configured,
:class:`ZestfulNormalizer` sends all of them in one request and maps the
response back to display strings.

The normalizer can only ever substitute a value. Missing credentials,
transport failures, non-success responses, malformed bodies and responses
with no usable entries all yield the original candidates unchanged.

Example:
    >>> async with httpx.AsyncClient() as client:
    ...     normalizer = ZestfulNormalizer(client, api_key="...")
    ...     await normalizer.normalize(["1 cup sugar"])
    ['sugar']
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..exceptions import NormalizerUnavailableError
from ..fallback import try_or_default_async

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.zestfuldata.com/parseIngredients"
API_KEY_HEADER = "x-api-key"


class NormalizedEntry(BaseModel):
    """One entry of the normalizer's ``results`` array."""

    ingredient: str | None = None
    name: str | None = None
    original: str | None = None

    model_config = ConfigDict(extra="ignore")

    def display_text(self) -> str:
        """Preferred display string: ingredient, then name, then original."""
        return self.ingredient or self.name or self.original or ""


class NormalizerResponse(BaseModel):
    """Body of a successful normalizer response.

    ``results`` must be an array, but its entries are validated one by one:
    an entry that is not an object, or whose fields are not strings, is
    dropped without discarding its neighbours.
    """

    results: list[NormalizedEntry]

    model_config = ConfigDict(extra="ignore")

    @field_validator("results", mode="before")
    @classmethod
    def _drop_unusable_entries(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        entries: list[NormalizedEntry] = []
        for i, item in enumerate(value):
            try:
                entries.append(NormalizedEntry.model_validate(item))
            except ValidationError as e:
                logger.debug(f"Skipping normalizer result {i}: {e.error_count()} error(s)")
        return entries

    def display_texts(self) -> list[str]:
        """Mapped entries with empty strings dropped."""
        return [text for text in (entry.display_text() for entry in self.results) if text]


class ZestfulNormalizer:
    """Refine candidate ingredient lines with one batched API request.

    Attributes:
        client: Shared async HTTP client (its timeout is not applied here)
        api_key: Credential sent in the ``x-api-key`` header, or None
        endpoint: URL of the parse endpoint
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None,
        api_key: str | None = None,
        endpoint: str = DEFAULT_ENDPOINT,
    ) -> None:
        self.client = client
        self.api_key = api_key
        self.endpoint = endpoint

    @property
    def enabled(self) -> bool:
        """Whether a credential and a client are available."""
        return bool(self.api_key) and self.client is not None

    async def normalize(self, candidates: list[str]) -> list[str]:
        """Return refined ingredient strings, or ``candidates`` on any failure.

        Args:
            candidates: Non-empty list of heuristic candidate lines

        Returns:
            Refined strings when the service produced at least one, otherwise
            a copy of ``candidates``
        """
        fallback = list(candidates)
        if not self.enabled:
            logger.debug("No normalizer credential configured, keeping raw candidates")
            return fallback

        return await try_or_default_async(
            lambda: self._request(candidates),
            fallback,
            errors=(NormalizerUnavailableError,),
            label="normalize",
        )

    async def _request(self, candidates: list[str]) -> list[str]:
        """Issue the request; raise NormalizerUnavailableError on any problem."""
        if self.client is None:
            raise NormalizerUnavailableError("No HTTP client configured for normalizer")
        try:
            response = await self.client.post(
                self.endpoint,
                json={"ingredients": list(candidates)},
                headers={API_KEY_HEADER: str(self.api_key)},
                timeout=None,
            )
        except httpx.HTTPError as e:
            raise NormalizerUnavailableError(
                "Normalizer request failed", endpoint=self.endpoint, error=str(e)
            ) from e

        if not response.is_success:
            raise NormalizerUnavailableError(
                "Normalizer returned non-success status",
                endpoint=self.endpoint,
                status=response.status_code,
            )

        try:
            parsed = NormalizerResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise NormalizerUnavailableError(
                "Normalizer response has no usable results array",
                endpoint=self.endpoint,
                error=str(e),
            ) from e

        refined = parsed.display_texts()
        if not refined:
            raise NormalizerUnavailableError(
                "Normalizer returned no ingredients",
                endpoint=self.endpoint,
                results=len(parsed.results),
            )

        logger.info(f"Normalizer refined {len(candidates)} candidates into {len(refined)}")
        return refined
