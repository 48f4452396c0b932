"""Unit tests for grocery_planner.exceptions module.

Tests the custom exception hierarchy and context formatting.
"""

import pytest

from grocery_planner.exceptions import (
    ConfigurationError,
    FetchFailedError,
    GroceryPlannerError,
    MalformedStructuredDataError,
    MissingInputError,
    NetworkError,
    NormalizerUnavailableError,
)


class TestGroceryPlannerError:
    """Tests for the base GroceryPlannerError class."""

    def test_basic_message(self) -> None:
        error = GroceryPlannerError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.context == {}

    def test_message_with_context(self) -> None:
        error = GroceryPlannerError("Failed", url="https://x.test", attempt=1)
        result = str(error)
        assert "Failed" in result
        assert "url='https://x.test'" in result
        assert "attempt=1" in result

    def test_inherits_from_exception(self) -> None:
        assert isinstance(GroceryPlannerError("Test"), Exception)


class TestExceptionHierarchy:
    """Tests that all exceptions inherit from GroceryPlannerError."""

    @pytest.mark.parametrize(
        "exception_class",
        [
            MissingInputError,
            NetworkError,
            MalformedStructuredDataError,
            NormalizerUnavailableError,
            ConfigurationError,
        ],
    )
    def test_inherits_from_base(self, exception_class: type) -> None:
        error = exception_class("Test error", key="value")
        assert isinstance(error, GroceryPlannerError)
        assert error.context == {"key": "value"}


class TestFetchFailedError:
    """Tests for FetchFailedError status handling."""

    def test_status_attribute(self) -> None:
        error = FetchFailedError("Failed to fetch URL", status=404)
        assert error.status == 404
        assert isinstance(error, GroceryPlannerError)

    def test_status_in_context(self) -> None:
        error = FetchFailedError("Failed to fetch URL", status=503, url="https://x.test")
        assert error.context == {"status": 503, "url": "https://x.test"}
        assert str(error) == "Failed to fetch URL (status=503, url='https://x.test')"
