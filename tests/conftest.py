"""Pytest configuration and fixtures for grocery_planner tests.

This module provides shared fixtures for testing the grocery_planner package.
Fixtures follow pytest best practices:
- Use yield for cleanup
- Use monkeypatch for environment manipulation
- Use tmp_path for file operations
- Use pytest-httpx (``httpx_mock``) for HTTP traffic
"""

import json
import sys
from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Remove GROCERY_PLANNER_* and ZESTFUL_API_KEY environment variables.

    Also points HOME and the working directory at an empty temp dir so no
    user or project config file is picked up.
    """
    import os

    for key in list(os.environ.keys()):
        if key.startswith("GROCERY_PLANNER_") or key == "ZESTFUL_API_KEY":
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def mock_env(monkeypatch: pytest.MonkeyPatch, clean_env: None) -> dict[str, str]:
    """Provide a helper to set GROCERY_PLANNER_* environment variables.

    Example:
        def test_env_loading(mock_env):
            mock_env["FETCH_TIMEOUT"] = "10"
            # GROCERY_PLANNER_FETCH_TIMEOUT is now set
    """

    class EnvSetter(dict[str, str]):
        def __setitem__(self, key: str, value: str) -> None:
            super().__setitem__(key, value)
            monkeypatch.setenv(f"GROCERY_PLANNER_{key}", value)

    return EnvSetter()


@pytest.fixture
def default_config():
    """Create a PlannerConfig without file logging."""
    from grocery_planner.config import PlannerConfig

    return PlannerConfig(log_file=None)


# ============================================================================
# Document Fixtures
# ============================================================================


@pytest.fixture
def json_ld() -> Callable[[Any], str]:
    """Wrap a value in a JSON-LD script block."""

    def build(value: Any) -> str:
        return f'<script type="application/ld+json">{json.dumps(value)}</script>'

    return build


@pytest.fixture
def page() -> Callable[..., str]:
    """Wrap body fragments in a minimal HTML page."""

    def build(*fragments: str) -> str:
        body = "\n".join(fragments)
        return f"<!DOCTYPE html><html><head><title>Recipe</title></head><body>{body}</body></html>"

    return build


@pytest.fixture
def recipe_page(page, json_ld) -> str:
    """A page with one JSON-LD Recipe block."""
    return page(
        json_ld({"@type": "Recipe", "recipeIngredient": ["2 cups flour", "1 egg"]}),
        "<ul><li>Unrelated 3 links</li></ul>",
    )


@pytest.fixture
def list_page(page) -> str:
    """A page without structured data whose list items hold ingredients."""
    return page(
        "<ul>",
        "<li>1 cup sugar</li>",
        "<li>Preheat oven</li>",
        "<li><strong>2</strong> tbsp butter &amp; oil</li>",
        "</ul>",
    )


# ============================================================================
# HTTP Fixtures
# ============================================================================

NORMALIZER_URL = "https://normalizer.test/parseIngredients"


@pytest.fixture
def normalizer_url() -> str:
    return NORMALIZER_URL


@pytest.fixture
async def http_client() -> AsyncIterator[httpx.AsyncClient]:
    """A real httpx client; requests are intercepted by ``httpx_mock``."""
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def zestful_results() -> dict[str, Any]:
    """A well-formed normalizer response body."""
    return {
        "results": [
            {"ingredient": "sugar", "original": "1 cup sugar"},
            {"name": "butter", "original": "2 tbsp butter & oil"},
        ]
    }
