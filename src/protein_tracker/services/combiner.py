"""Source-priority combination of curated and remote search results."""

import logging
from collections.abc import Awaitable, Callable, Iterable

from protein_tracker.domain.foods import FoodRecord
from protein_tracker.services.curated import CURATED_FOODS, search_curated

_logger = logging.getLogger(__name__)

RemoteSearch = Callable[[str], Awaitable[list[FoodRecord]]]


def combine_results(
    curated: list[FoodRecord], remote: Iterable[FoodRecord]
) -> list[FoodRecord]:
    """Put curated matches first and drop remote records that duplicate them.

    A remote record is a duplicate when its name equals a curated match's
    name, ignoring case.
    """
    curated_names = {food.name.lower() for food in curated}
    combined = list(curated)
    combined.extend(food for food in remote if food.name.lower() not in curated_names)
    return combined


async def search_with_fallback(
    query: str,
    remote_search: RemoteSearch,
    curated_foods: Iterable[FoodRecord] = CURATED_FOODS,
) -> list[FoodRecord]:
    """Search curated foods and the remote source, degrading to curated-only."""
    curated = search_curated(query, curated_foods)
    try:
        remote = await remote_search(query)
    except Exception as exc:
        _logger.warning(
            "Remote search unavailable, using curated results only: query=%s error=%s",
            query,
            exc,
        )
        remote = []
    return combine_results(curated, remote)
