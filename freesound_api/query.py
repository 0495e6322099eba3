"""
Freesound Search Queries

Query builder for the text search endpoint and a typed helper for the
Freesound filter syntax.

API Documentation: https://freesound.org/docs/api/resources_apiv2.html#search-resources
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

QueryParams = List[Tuple[str, str]]


def _flag(value: bool) -> str:
    return "1" if value else "0"


class SortOption(str, Enum):
    """Sort options for search results."""

    SCORE = "score"  # relevance, the API default
    DURATION_DESC = "duration_desc"
    DURATION_ASC = "duration_asc"
    CREATED_DESC = "created_desc"
    CREATED_ASC = "created_asc"
    DOWNLOADS_DESC = "downloads_desc"
    DOWNLOADS_ASC = "downloads_asc"
    RATING_DESC = "rating_desc"
    RATING_ASC = "rating_asc"

    def __str__(self) -> str:
        return self.value


class SearchQueryBuilder:
    """
    Fluent builder for text search parameters.

    Usage:
        params = (
            SearchQueryBuilder()
            .query("music")
            .filter("tag:guitar")
            .sort(SortOption.RATING_DESC)
            .page(1)
            .page_size(15)
            .fields(["id", "name", "tags"])
            .build()
        )
        results = await client.search(params)

    Every setter replaces the previous value for that option.
    """

    def __init__(self):
        self._query: Optional[str] = None
        self._filter: Optional[str] = None
        self._sort: Optional[SortOption] = None
        self._group_by_pack: Optional[bool] = None
        self._page: Optional[int] = None
        self._page_size: Optional[int] = None
        self._fields: Optional[List[str]] = None
        self._descriptors: Optional[List[str]] = None
        self._normalized: Optional[bool] = None

    def query(self, query: str) -> 'SearchQueryBuilder':
        """Set the search query text."""
        self._query = query
        return self

    def filter(self, filter: Union[str, 'SearchFilter']) -> 'SearchQueryBuilder':
        """Set the filter expression, either raw or from a SearchFilter."""
        if isinstance(filter, SearchFilter):
            filter = filter.build()
        self._filter = filter
        return self

    def sort(self, sort: Union[SortOption, str]) -> 'SearchQueryBuilder':
        """Set the sort option. Raises ValueError for unknown sort names."""
        self._sort = SortOption(sort)
        return self

    def group_by_pack(self, group: bool) -> 'SearchQueryBuilder':
        self._group_by_pack = group
        return self

    def page(self, page: int) -> 'SearchQueryBuilder':
        self._page = page
        return self

    def page_size(self, size: int) -> 'SearchQueryBuilder':
        self._page_size = size
        return self

    def fields(self, fields: Iterable[str]) -> 'SearchQueryBuilder':
        """Set the sound fields to return for each result."""
        self._fields = [str(f) for f in fields]
        return self

    def descriptors(self, descriptors: Iterable[str]) -> 'SearchQueryBuilder':
        """Set the audio descriptors to return for each result."""
        self._descriptors = [str(d) for d in descriptors]
        return self

    def normalized(self, normalized: bool) -> 'SearchQueryBuilder':
        """Set whether descriptor values are normalized."""
        self._normalized = normalized
        return self

    def build(self) -> QueryParams:
        """
        Build the query parameters.

        Returns:
            Ordered (name, value) pairs; unset options are left out.
        """
        params: QueryParams = []

        if self._query is not None:
            params.append(("query", self._query))
        if self._filter is not None:
            params.append(("filter", self._filter))
        if self._sort is not None:
            params.append(("sort", self._sort.value))
        if self._group_by_pack is not None:
            params.append(("group_by_pack", _flag(self._group_by_pack)))
        if self._page is not None:
            params.append(("page", str(self._page)))
        if self._page_size is not None:
            params.append(("page_size", str(self._page_size)))
        if self._fields is not None:
            params.append(("fields", ",".join(self._fields)))
        if self._descriptors is not None:
            params.append(("descriptors", ",".join(self._descriptors)))
        if self._normalized is not None:
            params.append(("normalized", _flag(self._normalized)))

        return params

    def __repr__(self) -> str:
        return f"SearchQueryBuilder({self.build()!r})"


@dataclass
class SearchFilter:
    """
    Typed constraints rendered into Freesound filter syntax.

    Example:
        SearchFilter(duration_max=5, tags=['kick']).build()
        # 'duration:[0 TO 5] AND tag:kick'
    """

    duration_min: Optional[float] = None
    duration_max: Optional[float] = None
    license_types: Optional[List[str]] = None
    file_types: Optional[List[str]] = None
    min_rating: Optional[float] = None
    tags: Optional[List[str]] = None
    channels: Optional[int] = None
    samplerate: Optional[int] = None

    def build(self) -> str:
        """Build Freesound API filter string."""
        filters = []

        if self.duration_min is not None or self.duration_max is not None:
            min_dur = self.duration_min if self.duration_min is not None else 0
            max_dur = self.duration_max if self.duration_max is not None else '*'
            filters.append(f"duration:[{min_dur} TO {max_dur}]")

        if self.license_types:
            license_filter = ' OR '.join(f'"{lt}"' for lt in self.license_types)
            filters.append(f"license:({license_filter})")

        if self.file_types:
            type_filter = ' OR '.join(self.file_types)
            filters.append(f"type:({type_filter})")

        if self.min_rating is not None:
            filters.append(f"avg_rating:[{self.min_rating} TO 5]")

        if self.tags:
            for tag in self.tags:
                filters.append(f"tag:{tag}")

        if self.channels is not None:
            filters.append(f"channels:{self.channels}")

        if self.samplerate is not None:
            filters.append(f"samplerate:{self.samplerate}")

        return ' AND '.join(filters)
