"""
Keyword Filtering for Search Results

Parses ``[+|-]:keyword:<word>`` tokens out of search queries and evaluates
them against search results.

Key Components:
- KeywordFilter: Immutable include/exclude constraint on one keyword
- parse_keyword_filters / clean_query: Extract tokens from and strip them out of a query
- KeywordFilterPipeline: Grouped evaluation (OR within a feature, AND across features)
"""

from .base import FilterResult, FilterComposition
from .keyword import (
    Feature,
    KeywordFilter,
    KEYWORD_FILTER_PATTERN,
    parse_keyword_filters,
    clean_query,
)
from .pipeline import (
    KeywordFilterPipeline,
    build_haystack,
    group_by_feature,
    passes_filter_pipeline,
)

__all__ = [
    "FilterResult",
    "FilterComposition",
    "Feature",
    "KeywordFilter",
    "KEYWORD_FILTER_PATTERN",
    "parse_keyword_filters",
    "clean_query",
    "KeywordFilterPipeline",
    "build_haystack",
    "group_by_feature",
    "passes_filter_pipeline",
]
