"""Bandwidth measurement around query results (development only)."""

import json
import time
from typing import Any, Awaitable, Callable, TypeVar

from ..config import get_settings
from ..logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def _payload_size(data: Any) -> int:
    return len(json.dumps(data, default=str))


def _item_count(data: Any) -> int:
    return len(data) if isinstance(data, (list, tuple)) else 1


def measure_query_size(data: T, query_name: str) -> T:
    """Log the serialised size of a query result and return it unchanged."""
    if get_settings().is_development:
        size = _payload_size(data)
        logger.info(
            "[BANDWIDTH] %s: %d bytes (%.2f KB, %.2f MB), %d items",
            query_name,
            size,
            size / 1024,
            size / (1024 * 1024),
            _item_count(data),
        )
    return data


async def measure_function_bandwidth(fn: Callable[[], Awaitable[T]], function_name: str) -> T:
    """Await fn and log how long it took and how much it returned."""
    started = time.perf_counter()
    result = await fn()
    elapsed_ms = (time.perf_counter() - started) * 1000

    if get_settings().is_development:
        logger.info(
            "[PERFORMANCE] %s: %.0f ms, %.2f KB, %d items",
            function_name,
            elapsed_ms,
            _payload_size(result) / 1024,
            _item_count(result),
        )
    return result
