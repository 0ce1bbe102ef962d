"""
Configuration Models

Pydantic models describing SearchFilter configuration: keyword filters that
apply to every search plus general application settings.
"""

import re
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from searchfilter.filters.keyword import Feature, KeywordFilter


_INVALID_KEYWORD_CHARS = re.compile(r"[\s-]")


class FilterConfig(BaseModel):
    """Keyword filters applied in addition to the ones typed in a query."""

    include_keywords: List[str] = Field(
        default=[],
        description="Keywords a result must contain"
    )
    exclude_keywords: List[str] = Field(
        default=[],
        description="Keywords a result must not contain"
    )
    feature: Optional[Feature] = Field(
        default=None,
        description=(
            "Feature group for configured keywords. Unset keeps them in the same "
            "OR-group as untagged query filters; a feature makes them a separate "
            "requirement"
        )
    )

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    @field_validator('include_keywords', 'exclude_keywords')
    @classmethod
    def validate_keywords(cls, v):
        """Normalize keywords and reject ones the query grammar cannot express."""
        normalized = []
        for keyword in v:
            clean_keyword = keyword.strip().lower()
            if not clean_keyword:
                raise ValueError("Keywords cannot be empty")
            if _INVALID_KEYWORD_CHARS.search(clean_keyword):
                raise ValueError(f"Keyword '{keyword}' cannot contain whitespace or '-'")
            normalized.append(clean_keyword)
        return normalized

    @model_validator(mode='after')
    def validate_keyword_overlap(self):
        """Reject keywords that are both included and excluded."""
        overlap = set(self.include_keywords) & set(self.exclude_keywords)
        if overlap:
            raise ValueError(
                f"Keywords cannot be both included and excluded: {', '.join(sorted(overlap))}"
            )
        return self

    def keyword_filters(self) -> List[KeywordFilter]:
        """Build keyword filters, includes first, in configured order."""
        return (
            [KeywordFilter(True, keyword, self.feature) for keyword in self.include_keywords]
            + [KeywordFilter(False, keyword, self.feature) for keyword in self.exclude_keywords]
        )


class AppConfig(BaseModel):
    """Root application configuration model."""

    version: str = Field(default="0.1.0", description="Configuration version")
    created: datetime = Field(default_factory=datetime.now, description="Configuration creation time")

    filters: FilterConfig = Field(default_factory=FilterConfig, description="Filter configuration")

    verbose: bool = Field(
        default=False,
        description="Enable verbose logging output"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with detailed logging"
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level used when neither verbose nor debug is set"
    )

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is a standard logging level name."""
        valid_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(sorted(valid_levels))}")
        return v.upper()

    def effective_log_level(self) -> str:
        """Log level after applying the debug and verbose switches."""
        if self.debug:
            return "DEBUG"
        if self.verbose:
            return "INFO"
        return self.log_level
