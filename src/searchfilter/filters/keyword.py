"""
Keyword filters embedded in search queries.

A query may carry filter tokens of the form ``[+|-]:keyword:<word>`` next to
ordinary search terms. This module parses those tokens into immutable
KeywordFilter values, tests them against a lower-cased haystack, and strips
them back out of the query text.
"""

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Hashable, List, Optional, Sequence


KEYWORD_TAG = ":keyword:"
INCLUSIVE_SYMBOL = "+"
EXCLUSIVE_SYMBOL = "-"

# Keywords stop at whitespace or '-', so "-:keyword:a-:keyword:b" yields two filters.
KEYWORD_FILTER_PATTERN = re.compile(
    r"(?P<inclusive>[+-])?(?P<tag>:keyword:)(?P<keyword>[^\s-]*)",
    re.IGNORECASE | re.DOTALL
)


class Feature(Enum):
    """
    Common grouping keys for keyword filters.

    Filters sharing a feature are alternatives (OR), different features are
    independent requirements (AND). Any hashable value can serve as a
    feature; these are the ones the search UI assigns.
    """
    SEARCH_SOURCE = "search_source"
    FILE_EXTENSION = "file_extension"
    FILE_NAME = "file_name"
    MANUAL_ENTRY = "manual_entry"


@dataclass(frozen=True)
class KeywordFilter:
    """
    Immutable include/exclude constraint on a single keyword.

    Two filters are equal when polarity and keyword match; ``feature`` and
    ``canonical_form`` do not take part in equality or hashing.

    Attributes:
        inclusive: True if the keyword must be present, False if it must be absent
        keyword: Keyword to look for, lower-cased on construction
        feature: Optional grouping key used by the pipeline
        canonical_form: Text this filter was parsed from, or a synthesized
            ``+:keyword:<keyword>`` / ``-:keyword:<keyword>`` token

    Note:
        When passing ``canonical_form`` explicitly it must correspond to
        ``inclusive`` and ``keyword``. It is not validated; ``str()`` and
        clean_query() use it verbatim.
    """
    inclusive: bool
    keyword: str
    feature: Optional[Hashable] = field(default=None, compare=False)
    canonical_form: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'keyword', self.keyword.lower())
        if self.canonical_form is None:
            symbol = INCLUSIVE_SYMBOL if self.inclusive else EXCLUSIVE_SYMBOL
            object.__setattr__(self, 'canonical_form', f"{symbol}{KEYWORD_TAG}{self.keyword}")

    def accept(self, lowercase_haystack: str) -> bool:
        """
        Test the filter against a haystack.

        The haystack must already be lower-cased; matching is plain
        substring containment. An empty keyword is contained in every
        haystack, which parse_keyword_filters() never produces.
        """
        found = self.keyword in lowercase_haystack
        return found if self.inclusive else not found

    def with_inclusive_flipped(self) -> 'KeywordFilter':
        """Return a copy with the opposite polarity and a synthesized canonical form."""
        return replace(self, inclusive=not self.inclusive, canonical_form=None)

    def __str__(self) -> str:
        return self.canonical_form


def parse_keyword_filters(search_terms: str) -> List[KeywordFilter]:
    """
    Extract keyword filters from free query text.

    Tokens are matched left to right without overlap and case-insensitively.
    A missing polarity means inclusive. Text that is not a well-formed token,
    such as ``+:keyward:x``, is ignored.

    Args:
        search_terms: Raw query string

    Returns:
        Filters in the order their tokens appear, each carrying its exact
        source token as canonical form
    """
    pipeline = []
    for match in KEYWORD_FILTER_PATTERN.finditer(search_terms):
        keyword = match.group('keyword')
        if not keyword:
            continue
        inclusive = match.group('inclusive') != EXCLUSIVE_SYMBOL
        pipeline.append(KeywordFilter(inclusive, keyword, canonical_form=match.group(0)))
    return pipeline


def clean_query(query: str, keyword_filters: Sequence[KeywordFilter]) -> str:
    """
    Remove filter tokens from a query, leaving the plain search terms.

    Each filter removes the first literal occurrence of its canonical form.
    The result is stripped of surrounding whitespace.
    """
    for keyword_filter in keyword_filters:
        query = query.replace(str(keyword_filter), "", 1)
    return query.strip()
