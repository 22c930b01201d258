"""Services for Binnacle."""

from .cache import QueryCache, cache_key, query_cache
from .igdb import IgdbClient
from .pagination import (
    calculate_pagination_stats,
    calculate_query_limit,
    generate_page_numbers,
    paginate_array,
)

__all__ = [
    "QueryCache",
    "cache_key",
    "query_cache",
    "IgdbClient",
    "calculate_pagination_stats",
    "calculate_query_limit",
    "generate_page_numbers",
    "paginate_array",
]
