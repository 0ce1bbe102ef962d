"""
Core SearchFilter Package

Contains core infrastructure components: configuration and error handling.
"""

from searchfilter.core.exceptions import (
    SearchFilterError,
    ConfigurationError,
    ValidationError,
    ErrorCode,
    ErrorContext,
    RecoverySuggestion
)

__version__ = "0.1.0"

__all__ = [
    "SearchFilterError",
    "ConfigurationError",
    "ValidationError",
    "ErrorCode",
    "ErrorContext",
    "RecoverySuggestion",
]
