"""Services package for grocery_planner.

This package contains the collaborators the extraction pipeline talks to
over the network, plus the factory that wires them together.

Modules:
    factory: ServiceFactory for centralized dependency management
    fetcher: HttpDocumentFetcher for retrieving recipe pages
    normalizer: ZestfulNormalizer for refining heuristic ingredient lines
"""

from .factory import ServiceFactory
from .fetcher import HttpDocumentFetcher
from .normalizer import NormalizedEntry, NormalizerResponse, ZestfulNormalizer

__all__ = [
    "HttpDocumentFetcher",
    "NormalizedEntry",
    "NormalizerResponse",
    "ServiceFactory",
    "ZestfulNormalizer",
]
