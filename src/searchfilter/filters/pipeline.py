"""
Keyword Filter Pipeline

Evaluates an ordered collection of keyword filters against search results.
Filters are grouped by feature: a result passes a group when ANY filter in
it accepts, and passes the pipeline when EVERY group passes. Filters
without a feature form one more group keyed by None.
"""

import logging
import time
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Optional, Sequence

from searchfilter.filters.base import FilterComposition, FilterResult
from searchfilter.filters.keyword import KeywordFilter, clean_query, parse_keyword_filters
from searchfilter.results import FileSearchResult, Licenses, SearchResult


logger = logging.getLogger(__name__)


def build_haystack(result: SearchResult) -> str:
    """
    Build the lower-cased text a result is matched against.

    Fields are joined by single spaces in this order: source, display name,
    filename (file results only), details URL, thumbnail URL and license
    name (unless the license is unknown). A missing source is logged and
    skipped.
    """
    parts = []
    if result.source is None:
        logger.warning(f"{result.__class__.__name__} has no source!")
    else:
        parts.append(result.source)

    parts.append(result.display_name)

    if isinstance(result, FileSearchResult):
        parts.append(result.filename)

    parts.append(result.details_url)

    if result.thumbnail_url is not None:
        parts.append(result.thumbnail_url)

    if result.license != Licenses.UNKNOWN:
        parts.append(result.license.name)

    return " ".join(parts).lower()


def group_by_feature(
    keyword_filters: Iterable[KeywordFilter]
) -> Dict[Optional[Hashable], List[KeywordFilter]]:
    """Group filters by feature, keeping first-seen order of groups and filters."""
    groups: Dict[Optional[Hashable], List[KeywordFilter]] = {}
    for keyword_filter in keyword_filters:
        groups.setdefault(keyword_filter.feature, []).append(keyword_filter)
    return groups


def _group_passes(group: Sequence[KeywordFilter], haystack: str) -> bool:
    return any(keyword_filter.accept(haystack) for keyword_filter in group)


def passes_filter_pipeline(
    result: SearchResult,
    filter_pipeline: Optional[Sequence[KeywordFilter]]
) -> bool:
    """
    Decide whether a result passes a filter pipeline.

    An empty or missing pipeline accepts everything.
    """
    if not filter_pipeline:
        return True
    haystack = build_haystack(result)
    return all(
        _group_passes(group, haystack)
        for group in group_by_feature(filter_pipeline).values()
    )


def _describe_feature(feature: Optional[Hashable]) -> Optional[str]:
    if feature is None:
        return None
    return getattr(feature, 'value', str(feature))


class KeywordFilterPipeline:
    """
    Ordered keyword filters evaluated together.

    Wraps the module functions with a reusable object that also reports why
    a result passed or failed. Order is kept for display and query cleaning;
    it has no effect on evaluation.
    """

    def __init__(self, filters: Optional[Iterable[KeywordFilter]] = None):
        """
        Initialize the pipeline.

        Args:
            filters: Keyword filters to evaluate; duplicates are allowed
        """
        self.filters: List[KeywordFilter] = list(filters or [])
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @classmethod
    def from_query(
        cls,
        query: str,
        extra_filters: Iterable[KeywordFilter] = ()
    ) -> 'KeywordFilterPipeline':
        """Build a pipeline from the filter tokens in a query plus any extra filters."""
        return cls(parse_keyword_filters(query) + list(extra_filters))

    def passes(self, result: SearchResult) -> bool:
        """Return True if the result passes every feature group."""
        return passes_filter_pipeline(result, self.filters)

    def apply(self, result: SearchResult) -> FilterResult:
        """
        Evaluate the pipeline and explain the outcome.

        Every filter is evaluated so the metadata lists the full circuit;
        the decision equals passes().

        Args:
            result: Search result to evaluate

        Returns:
            FilterResult with one metadata entry per feature group
        """
        start_time = time.time()

        if not self.filters:
            return FilterResult(
                passed=True,
                reason="No keyword filters in pipeline",
                metadata={"total_filters": 0, "groups": []},
                execution_time=time.time() - start_time
            )

        haystack = build_haystack(result)
        group_reports = []
        failed_groups = []

        for feature, group in group_by_feature(self.filters).items():
            outcomes = [keyword_filter.accept(haystack) for keyword_filter in group]
            group_passed = any(outcomes)
            group_reports.append({
                "feature": _describe_feature(feature),
                "composition": FilterComposition.OR.value,
                "passed": group_passed,
                "filters": [
                    {"filter": str(keyword_filter), "passed": outcome}
                    for keyword_filter, outcome in zip(group, outcomes)
                ]
            })
            if not group_passed:
                failed_groups.append(_describe_feature(feature) or "ungrouped")

        passed = not failed_groups
        if passed:
            reason = f"All {len(group_reports)} feature group(s) satisfied"
        else:
            reason = f"No filter satisfied in group(s): {', '.join(failed_groups)}"

        self.logger.debug(f"{result.display_name!r}: {reason}")

        return FilterResult(
            passed=passed,
            reason=reason,
            metadata={
                "composition": FilterComposition.AND.value,
                "total_filters": len(self.filters),
                "haystack_length": len(haystack),
                "groups": group_reports
            },
            execution_time=time.time() - start_time
        )

    def filter_results(self, results: Iterable[SearchResult]) -> List[SearchResult]:
        """Return the results that pass, in their original order."""
        results = list(results)
        accepted = [result for result in results if self.passes(result)]
        self.logger.info(
            f"Keyword filters accepted {len(accepted)} of {len(results)} results "
            f"({len(self.filters)} filters)"
        )
        return accepted

    def clean(self, query: str) -> str:
        """Strip this pipeline's filter tokens from a query."""
        return clean_query(query, self.filters)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable summary of the filters."""
        return {
            "filters": [
                {
                    "inclusive": keyword_filter.inclusive,
                    "keyword": keyword_filter.keyword,
                    "feature": _describe_feature(keyword_filter.feature),
                    "canonical_form": str(keyword_filter)
                }
                for keyword_filter in self.filters
            ]
        }

    def __len__(self) -> int:
        return len(self.filters)

    def __iter__(self) -> Iterator[KeywordFilter]:
        return iter(self.filters)

    def __str__(self) -> str:
        return f"KeywordFilterPipeline({' '.join(str(f) for f in self.filters)})"
