"""Request handling for the ingredient extraction endpoint.

Framework-independent: a serverless function or web route passes in the
query parameters and turns the returned :class:`ExtractorResponse` into
its own response object.

Example:
    >>> async with ServiceFactory(PlannerConfig.load()) as factory:
    ...     response = await handle_request({"url": url}, factory=factory)
    >>> response.status_code, response.json()
    (200, {'ingredients': ['2 cups flour', '1 egg']})
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .exceptions import FetchFailedError, GroceryPlannerError, MissingInputError
from .pipeline import run_pipeline

if TYPE_CHECKING:
    from .services.factory import ServiceFactory

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


@dataclass
class ExtractorResponse:
    """HTTP-shaped result of one extraction request.

    Attributes:
        status_code: HTTP status
        body: JSON-encoded body
        headers: Response headers
    """

    status_code: int
    body: str
    headers: dict[str, str] = field(default_factory=lambda: dict(JSON_HEADERS))

    @classmethod
    def success(cls, ingredients: list[str]) -> ExtractorResponse:
        return cls(
            status_code=200,
            body=json.dumps({"ingredients": ingredients}),
            headers={**JSON_HEADERS, **CORS_HEADERS},
        )

    @classmethod
    def error(cls, status_code: int, message: str) -> ExtractorResponse:
        return cls(status_code=status_code, body=json.dumps({"error": message}))

    def json(self) -> Any:
        """Decode the body."""
        return json.loads(self.body)


async def handle_request(
    query_params: Mapping[str, str] | None,
    *,
    factory: ServiceFactory,
) -> ExtractorResponse:
    """Fetch the page named by ``url`` and extract its ingredients.

    Args:
        query_params: Request query parameters (may be None)
        factory: Supplies the fetcher and normalizer

    Returns:
        200 with ``{"ingredients": [...]}``; 400 when ``url`` is missing;
        the upstream status when the fetch failed; 500 otherwise
    """
    url = (query_params or {}).get("url")
    if not url:
        return ExtractorResponse.error(400, "Missing url parameter")

    try:
        document = await factory.create_fetcher().fetch(url)
        ctx = await run_pipeline(document, factory.create_normalizer())
    except MissingInputError as e:
        return ExtractorResponse.error(400, e.message)
    except FetchFailedError as e:
        return ExtractorResponse.error(e.status, "Failed to fetch URL")
    except Exception as e:  # Anything else is a 500
        logger.exception(f"Extraction failed for {url}")
        message = e.message if isinstance(e, GroceryPlannerError) else str(e)
        return ExtractorResponse.error(500, message)

    logger.info(f"Extracted {len(ctx.ingredients)} ingredients from {url} via {ctx.source.value}")
    return ExtractorResponse.success(ctx.ingredients)
