"""Curated reference set of common high-protein foods."""

from collections.abc import Iterable

from protein_tracker.domain.foods import FoodRecord, FoodSource, round1

# (name, protein per 100 units, reference serving size, serving unit)
_CURATED_ROWS: tuple[tuple[str, float, float, str], ...] = (
    ("Chicken Breast (cooked)", 31, 100, "g"),
    ("Turkey Breast (cooked)", 30, 100, "g"),
    ("Lean Beef (cooked)", 26, 100, "g"),
    ("Salmon (cooked)", 25, 100, "g"),
    ("Tuna (canned)", 26, 100, "g"),
    ("Egg (whole)", 12.6, 50, "g"),
    ("Egg White", 10.9, 33, "g"),
    ("Greek Yogurt", 10, 100, "g"),
    ("Cottage Cheese", 11, 100, "g"),
    ("Milk (whole)", 3.2, 100, "ml"),
    ("Whey Protein Powder", 83.3, 30, "g"),
    ("Tofu (firm)", 8, 100, "g"),
    ("Lentils (cooked)", 9, 100, "g"),
    ("Black Beans (cooked)", 8.9, 100, "g"),
    ("Chickpeas (cooked)", 8.9, 100, "g"),
    ("Quinoa (cooked)", 4.4, 100, "g"),
    ("Almonds", 21, 100, "g"),
    ("Peanut Butter", 25, 100, "g"),
    ("Shrimp (cooked)", 24, 100, "g"),
    ("Tilapia (cooked)", 26, 100, "g"),
    ("Ground Turkey (cooked)", 27, 100, "g"),
    ("Ground Beef 90% (cooked)", 26, 100, "g"),
    ("Protein Bar", 33.3, 60, "g"),
    ("Edamame (cooked)", 11, 100, "g"),
    ("Tempeh", 19, 100, "g"),
    ("Seitan", 25, 100, "g"),
    ("Pumpkin Seeds", 19, 100, "g"),
    ("Chia Seeds", 17, 100, "g"),
    ("Hemp Seeds", 31, 100, "g"),
)


def _build_curated_foods() -> tuple[FoodRecord, ...]:
    return tuple(
        FoodRecord(
            id=f"curated-{index}",
            name=name,
            protein_per_100=float(per_100),
            protein_per_serving=round1(per_100 * serving_size / 100),
            serving_size=float(serving_size),
            serving_unit=unit,
            source=FoodSource.CURATED,
        )
        for index, (name, per_100, serving_size, unit) in enumerate(_CURATED_ROWS)
    )


CURATED_FOODS: tuple[FoodRecord, ...] = _build_curated_foods()


def search_curated(
    query: str, foods: Iterable[FoodRecord] = CURATED_FOODS
) -> list[FoodRecord]:
    """Return curated foods whose name contains the query, case-insensitively.

    Results keep the reference-set order. An empty query matches every food.
    """
    needle = query.lower()
    return [food for food in foods if needle in food.name.lower()]
