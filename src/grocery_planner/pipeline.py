"""Pipeline architecture for ingredient extraction.

This module sequences the extraction strategies as a small state machine:

1. **Structured data**: JSON-LD Recipe nodes. When this finds anything, the
   pipeline is done.
2. **List items**: heuristic fallback over ``<li>`` content. When nothing
   looks like an ingredient, the pipeline is done with an empty result.
3. **Normalization**: optional refinement of the heuristic candidates.

Every failure inside the pipeline degrades to an emptier or rawer result;
nothing is retried and nothing is raised to the caller. Fetch failures
happen before the pipeline runs and are the fetcher's to report.

Example:
    >>> from grocery_planner.pipeline import extract, extract_with_fallback
    >>> extract(html)
    ['2 cups flour', '1 egg']
    >>> await extract_with_fallback(html, normalizer_credential=None)
    ['2 cups flour', '1 egg']
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

import httpx

from .exceptions import MissingInputError
from .extractors.list_items import ListItemExtractor
from .extractors.structured_data import StructuredDataScanner
from .fallback import try_or_default, try_or_default_async
from .protocols import IngredientExtractor, IngredientNormalizer
from .services.normalizer import DEFAULT_ENDPOINT, ZestfulNormalizer

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    """States of one extraction run."""

    SCANNING_STRUCTURED_DATA = "scanning_structured_data"
    EXTRACTING_HEURISTIC = "extracting_heuristic"
    NORMALIZING = "normalizing"
    DONE = "done"


class ExtractionSource(str, Enum):
    """Which strategy produced the final ingredient list."""

    STRUCTURED_DATA = "structured_data"
    LIST_ITEMS = "list_items"
    NORMALIZER = "normalizer"
    NONE = "none"


@dataclass
class PipelineContext:
    """State carried through one extraction run.

    Attributes:
        document: Raw page markup (never modified)
        normalizer: Optional refiner for heuristic candidates

        state: Current pipeline state
        ingredients: Result so far (final once state is DONE)
        candidates: Heuristic candidate lines, if the fallback ran
        source: Strategy that produced ``ingredients``
        transitions: Every state entered, in order
    """

    # Required inputs
    document: str
    normalizer: IngredientNormalizer | None = None

    # Populated by stages
    state: PipelineState = PipelineState.SCANNING_STRUCTURED_DATA
    ingredients: list[str] = field(default_factory=list)
    candidates: list[str] = field(default_factory=list)
    source: ExtractionSource = ExtractionSource.NONE
    transitions: list[PipelineState] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.transitions:
            self.transitions.append(self.state)

    def advance(self, state: PipelineState) -> None:
        """Move to ``state`` and record the transition."""
        self.state = state
        self.transitions.append(state)

    @property
    def done(self) -> bool:
        return self.state is PipelineState.DONE


class PipelineStage(ABC):
    """Abstract base class for pipeline stages.

    Each stage runs in exactly one state and decides the next one. Stages
    are stateless; everything lives in the context.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this stage."""
        ...

    @property
    @abstractmethod
    def handles(self) -> PipelineState:
        """State in which this stage runs."""
        ...

    @abstractmethod
    async def execute(self, ctx: PipelineContext) -> None:
        """Execute this stage and advance the context.

        Args:
            ctx: Pipeline context with shared state
        """
        ...


class StructuredDataStage(PipelineStage):
    """Stage 1: collect ingredients from JSON-LD Recipe nodes.

    Populates:
        - ctx.ingredients when any are found (and finishes the run)
    """

    def __init__(self, scanner: IngredientExtractor | None = None) -> None:
        self.scanner = scanner or StructuredDataScanner()

    @property
    def name(self) -> str:
        return "Structured data"

    @property
    def handles(self) -> PipelineState:
        return PipelineState.SCANNING_STRUCTURED_DATA

    async def execute(self, ctx: PipelineContext) -> None:
        found = self.scanner.extract(ctx.document)
        if found:
            logger.info(f"Structured data yielded {len(found)} ingredients")
            ctx.ingredients = found
            ctx.source = ExtractionSource.STRUCTURED_DATA
            ctx.advance(PipelineState.DONE)
        else:
            ctx.advance(PipelineState.EXTRACTING_HEURISTIC)


class HeuristicStage(PipelineStage):
    """Stage 2: fall back to measured-looking list items.

    Populates:
        - ctx.candidates and ctx.ingredients with the raw candidate lines
    """

    def __init__(self, extractor: IngredientExtractor | None = None) -> None:
        self.extractor = extractor or ListItemExtractor()

    @property
    def name(self) -> str:
        return "List items"

    @property
    def handles(self) -> PipelineState:
        return PipelineState.EXTRACTING_HEURISTIC

    async def execute(self, ctx: PipelineContext) -> None:
        candidates = try_or_default(
            lambda: self.extractor.extract(ctx.document),
            [],
            label="list-item fallback",
            log_level=logging.WARNING,
        )
        if not candidates:
            logger.info("No structured data and no ingredient-like list items")
            ctx.advance(PipelineState.DONE)
            return

        logger.info(f"List-item fallback found {len(candidates)} candidates")
        ctx.candidates = list(candidates)
        ctx.ingredients = list(candidates)
        ctx.source = ExtractionSource.LIST_ITEMS
        ctx.advance(PipelineState.NORMALIZING)


class NormalizationStage(PipelineStage):
    """Stage 3: optionally refine the heuristic candidates.

    Updates:
        - ctx.ingredients with the refined lines, when refinement produced any
    """

    @property
    def name(self) -> str:
        return "Normalization"

    @property
    def handles(self) -> PipelineState:
        return PipelineState.NORMALIZING

    async def execute(self, ctx: PipelineContext) -> None:
        normalizer = ctx.normalizer
        if normalizer is not None:
            refined = await try_or_default_async(
                lambda: normalizer.normalize(list(ctx.candidates)),
                ctx.candidates,
                label="normalizer",
            )
            # Never trade candidates for an empty list
            if refined and refined != ctx.candidates:
                ctx.ingredients = list(refined)
                ctx.source = ExtractionSource.NORMALIZER
        ctx.advance(PipelineState.DONE)


class ExtractionPipeline:
    """Runs stages in order until the context reaches DONE.

    A stage runs only when the context is in the state it handles, so a
    structured-data hit skips the remaining stages.

    Attributes:
        stages: Ordered list of pipeline stages
    """

    def __init__(self, stages: list[PipelineStage]) -> None:
        self.stages = stages

    async def run(self, ctx: PipelineContext) -> list[str]:
        """Execute stages and return the final ingredient list.

        Args:
            ctx: Pipeline context with the document to process

        Returns:
            The ingredient list (possibly empty)
        """
        for stage in self.stages:
            if ctx.done:
                break
            if stage.handles is not ctx.state:
                continue
            logger.debug(f"Starting stage: {stage.name}")
            await stage.execute(ctx)

        if not ctx.done:
            logger.warning(f"No stage handles state {ctx.state.value}, stopping")
            ctx.advance(PipelineState.DONE)

        return ctx.ingredients


def create_default_pipeline() -> ExtractionPipeline:
    """Create the default extraction pipeline.

    Returns:
        Pipeline with all standard stages:
        1. StructuredDataStage - JSON-LD Recipe ingredients
        2. HeuristicStage - measured-looking list items
        3. NormalizationStage - optional external refinement
    """
    return ExtractionPipeline(
        [
            StructuredDataStage(),
            HeuristicStage(),
            NormalizationStage(),
        ]
    )


def extract(document: str) -> list[str]:
    """Structured-data-only extraction.

    Args:
        document: Raw page markup

    Returns:
        Concatenated ``recipeIngredient`` arrays of all Recipe nodes
    """
    if document is None:
        raise MissingInputError("No document supplied")
    return StructuredDataScanner().scan(document)


async def run_pipeline(
    document: str,
    normalizer: IngredientNormalizer | None = None,
) -> PipelineContext:
    """Run the default pipeline and return the finished context."""
    if document is None:
        raise MissingInputError("No document supplied")
    ctx = PipelineContext(document=document, normalizer=normalizer)
    await create_default_pipeline().run(ctx)
    return ctx


async def extract_with_fallback(
    document: str,
    normalizer_credential: str | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    endpoint: str = DEFAULT_ENDPOINT,
) -> list[str]:
    """Full extraction with list-item fallback and optional normalization.

    Args:
        document: Raw page markup
        normalizer_credential: Normalizer API key; None skips normalization
        client: HTTP client for the normalizer call. When omitted and a
            credential is given, a short-lived client without a timeout is
            used.
        endpoint: Normalizer endpoint

    Returns:
        Ingredient list (possibly empty)
    """
    if normalizer_credential and client is None:
        async with httpx.AsyncClient(timeout=None) as owned:
            normalizer = ZestfulNormalizer(owned, normalizer_credential, endpoint)
            ctx = await run_pipeline(document, normalizer)
            return ctx.ingredients

    normalizer = (
        ZestfulNormalizer(client, normalizer_credential, endpoint)
        if normalizer_credential
        else None
    )
    ctx = await run_pipeline(document, normalizer)
    return ctx.ingredients
