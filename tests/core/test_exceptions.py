"""
Test suite for core exception system.

Tests error hierarchy, error context and recovery suggestions.
"""

import pytest

from searchfilter.core.exceptions import (
    SearchFilterError, ConfigurationError, ValidationError,
    ErrorCode, ErrorContext, RecoverySuggestion
)


class TestErrorHierarchy:
    """Test the error class hierarchy and inheritance."""

    def test_base_error_creation(self):
        error = SearchFilterError("Test error")
        assert str(error) == "Test error"
        assert error.error_code == ErrorCode.UNKNOWN_ERROR
        assert error.suggestions == []
        assert error.context.correlation_id

    def test_subclasses(self):
        assert issubclass(ConfigurationError, SearchFilterError)
        assert issubclass(ValidationError, SearchFilterError)

    def test_base_error_with_context(self):
        context = ErrorContext(operation="load_results", file_path="results.json")
        error = SearchFilterError("Test error", context=context)
        assert error.context is context
        assert error.context.operation == "load_results"

    def test_cause_in_debug_info(self):
        cause = ValueError("bad value")
        error = SearchFilterError("Wrapped", cause=cause)
        info = error.get_debug_info()
        assert info["error_type"] == "SearchFilterError"
        assert info["cause"] == {"type": "ValueError", "message": "bad value"}


class TestRecoverySuggestions:
    """Test recovery suggestion handling."""

    def test_suggestions_sorted_by_priority(self):
        error = SearchFilterError("Test")
        error.add_suggestion(RecoverySuggestion(action="second", description="b", priority=2))
        error.add_suggestion(RecoverySuggestion(action="first", description="a", priority=1))
        assert [s.action for s in error.suggestions] == ["first", "second"]

    def test_config_file_not_found_suggestion(self):
        error = ConfigurationError("missing", error_code=ErrorCode.CONFIG_FILE_NOT_FOUND)
        assert error.suggestions[0].command == "searchfilter config init"

    def test_config_key_in_context(self):
        error = ConfigurationError(
            "bad", error_code=ErrorCode.CONFIG_INVALID_VALUE,
            config_key="SEARCHFILTER_DEBUG", config_value="maybe"
        )
        assert error.context.user_context == {
            "config_key": "SEARCHFILTER_DEBUG",
            "config_value": "maybe",
        }
        assert error.suggestions

    def test_user_message(self):
        error = ValidationError("Result is missing a name", error_code=ErrorCode.VALIDATION_MISSING_FIELD,
                                field_name="display_name")
        message = error.get_user_message()
        assert message.startswith("Error: Result is missing a name")
        assert f"Error Code: {ErrorCode.VALIDATION_MISSING_FIELD.value}" in message
        assert "Suggested solutions:" in message
