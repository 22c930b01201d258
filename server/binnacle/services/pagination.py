"""Offset pagination helpers for result sets already held in memory.

Pages are 1-indexed. Every helper probes one item past the page to decide
whether another page exists, so callers never need a separate count query.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Union

ELLIPSIS = "..."


@dataclass
class PaginationResult:
    """One page of results plus the token for the next one."""
    items: list = field(default_factory=list)
    has_more: bool = False
    cursor: Optional[str] = None  # next page number, None on the last page

    def to_dict(self) -> dict:
        return {"items": self.items, "hasMore": self.has_more, "cursor": self.cursor}


@dataclass
class PaginationStats:
    """How much a bounded fetch saves versus reading the whole collection."""
    total_fetched: int
    page_size: int
    reduction_factor: float
    estimated_reads_saved: int

    def to_dict(self) -> dict:
        return {
            "totalFetched": self.total_fetched,
            "pageSize": self.page_size,
            "reductionFactor": self.reduction_factor,
            "estimatedReadsSaved": self.estimated_reads_saved,
        }


def paginate_array(
    all_results: Sequence[Any],
    page_size: int = 20,
    page_number: int = 1,
) -> PaginationResult:
    """Slice one page out of all_results."""
    if page_size <= 0:
        return PaginationResult()

    start_idx = max(0, (page_number - 1) * page_size)
    end_idx = start_idx + page_size

    # Take one extra item to find out whether another page exists
    probe = list(all_results[start_idx:end_idx + 1])
    has_more = len(probe) > page_size

    return PaginationResult(
        items=probe[:page_size],
        has_more=has_more,
        cursor=str(page_number + 1) if has_more else None,
    )


def calculate_query_limit(page_size: int = 20, pages_to_fetch: int = 2) -> int:
    """Fetch ceiling covering pages_to_fetch pages plus one has-more sentinel."""
    return page_size * pages_to_fetch + 1


def calculate_pagination_stats(
    page_size: int,
    collection_size: int,
    pages_to_fetch: int = 2,
) -> PaginationStats:
    fetched = calculate_query_limit(page_size, pages_to_fetch)
    reduction_factor = collection_size / fetched if fetched else 0.0

    return PaginationStats(
        total_fetched=fetched,
        page_size=page_size,
        # Halves round up
        reduction_factor=math.floor(reduction_factor * 100 + 0.5) / 100,
        estimated_reads_saved=collection_size - fetched,
    )


def generate_page_numbers(
    current_page: int,
    has_more: bool,
    pages_shown: int = 5,
) -> list[Union[int, str]]:
    """Page links for UI controls, with "..." where pages are skipped."""
    pages: list[Union[int, str]] = []
    half = pages_shown // 2

    start = max(1, current_page - half)
    end = start + pages_shown - 1

    if start > 1:
        pages.append(1)
        if start > 2:
            pages.append(ELLIPSIS)

    pages.extend(range(start, end + 1))

    if has_more and end < current_page + 5:
        pages.append(ELLIPSIS)

    return pages
