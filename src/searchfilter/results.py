"""
Search Result Model

Normalized containers for the search results that keyword filters are
evaluated against. Only the textual fields used to build a matchable
haystack are modelled here.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from searchfilter.core.exceptions import ValidationError, ErrorCode


@dataclass(frozen=True)
class License:
    """A content license identified by its display name."""
    name: str
    url: str = ""


class Licenses:
    """Well-known licenses, including the UNKNOWN sentinel."""

    UNKNOWN = License("Unknown")
    PUBLIC_DOMAIN_MARK = License(
        "Public Domain Mark",
        "https://creativecommons.org/publicdomain/mark/1.0/"
    )
    CC0 = License("CC0", "https://creativecommons.org/publicdomain/zero/1.0/")
    CC_BY_4 = License("CC BY 4.0", "https://creativecommons.org/licenses/by/4.0/")
    CC_BY_SA_4 = License("CC BY-SA 4.0", "https://creativecommons.org/licenses/by-sa/4.0/")
    APACHE_2 = License("Apache 2.0", "https://www.apache.org/licenses/LICENSE-2.0")
    GPL_3 = License("GPL 3.0", "https://www.gnu.org/licenses/gpl-3.0.html")
    MIT = License("MIT", "https://opensource.org/licenses/MIT")

    @classmethod
    def known(cls) -> Dict[str, License]:
        """Map of lower-cased display name to known license."""
        return {
            value.name.lower(): value
            for value in vars(cls).values()
            if isinstance(value, License)
        }

    @classmethod
    def by_name(cls, name: Optional[str]) -> License:
        """
        Resolve a license display name.

        Empty names map to UNKNOWN; names that are not well known produce a
        new License carrying that name.
        """
        if not name or not name.strip():
            return cls.UNKNOWN
        return cls.known().get(name.strip().lower(), License(name.strip()))


@dataclass
class SearchResult:
    """
    A single result returned by a search source.

    Attributes:
        display_name: Title shown to the user
        details_url: Page describing the result
        thumbnail_url: Preview image or text, if any
        source: Label of the search source that produced the result
        license: License the content is published under
    """
    display_name: str
    details_url: str = ""
    thumbnail_url: Optional[str] = None
    source: Optional[str] = None
    license: License = Licenses.UNKNOWN

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> 'SearchResult':
        """
        Create a result from a raw mapping such as a decoded JSON object.

        A mapping with a ``filename`` key produces a FileSearchResult.

        Args:
            raw: Raw result data

        Returns:
            SearchResult or FileSearchResult instance

        Raises:
            ValidationError: If the mapping is not usable as a result
        """
        if not isinstance(raw, dict):
            raise ValidationError(
                f"Search result must be an object, got {type(raw).__name__}",
                error_code=ErrorCode.VALIDATION_TYPE_MISMATCH
            )

        display_name = raw.get('display_name') or raw.get('displayName')
        if not display_name:
            raise ValidationError(
                "Search result is missing 'display_name'",
                error_code=ErrorCode.VALIDATION_MISSING_FIELD,
                field_name='display_name'
            )

        license_value = raw.get('license')
        if isinstance(license_value, dict):
            license_value = license_value.get('name')

        common = dict(
            display_name=str(display_name),
            details_url=str(raw.get('details_url') or raw.get('detailsUrl') or ''),
            thumbnail_url=_optional_str(
                'thumbnail_url', raw.get('thumbnail_url', raw.get('thumbnailUrl'))
            ),
            source=_optional_str('source', raw.get('source')),
            license=Licenses.by_name(_optional_str('license', license_value)),
        )

        if 'filename' in raw:
            size = raw.get('size') or 0
            try:
                size = int(size)
            except (TypeError, ValueError) as e:
                raise ValidationError(
                    f"Search result 'size' must be an integer, got {size!r}",
                    error_code=ErrorCode.VALIDATION_TYPE_MISMATCH,
                    field_name='size',
                    cause=e
                )
            return FileSearchResult(
                filename=str(raw.get('filename') or ''),
                size=size,
                **common
            )
        return cls(**common)


def _optional_str(field_name: str, value: Any) -> Optional[str]:
    """Return value unchanged if it is a string or None."""
    if value is None or isinstance(value, str):
        return value
    raise ValidationError(
        f"Search result '{field_name}' must be a string, got {type(value).__name__}",
        error_code=ErrorCode.VALIDATION_TYPE_MISMATCH,
        field_name=field_name
    )


@dataclass
class FileSearchResult(SearchResult):
    """A search result that refers to a downloadable file."""
    filename: str = ""
    size: int = 0
