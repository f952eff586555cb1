"""Deduplication of remote result batches issued for one search."""

from collections.abc import Iterable, Mapping

from protein_tracker.domain.foods import FoodRecord
from protein_tracker.services.normalizer import IDENTITY_KEY, normalize_product


def merge_results(*batches: Iterable[Mapping[str, object]]) -> list[FoodRecord]:
    """Merge raw product batches into unique, protein-bearing records.

    Batches are consumed in call order and the first product seen for an
    identity key wins, so callers pass the most trusted batch first.
    Products without an identity key are dropped.
    """
    seen: set[str] = set()
    merged: list[FoodRecord] = []
    for batch in batches:
        for raw in batch:
            code = raw.get(IDENTITY_KEY)
            if code is None or str(code) == "":
                continue
            key = str(code)
            if key in seen:
                continue
            seen.add(key)
            record = normalize_product(raw)
            if record.protein_per_100 > 0:
                merged.append(record)
    return merged
