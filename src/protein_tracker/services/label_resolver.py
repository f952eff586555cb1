"""Resolution of classifier labels into food records."""

import re
from collections.abc import Iterable, Mapping
from dataclasses import replace

from protein_tracker.domain.foods import (
    DEFAULT_SERVING_SIZE,
    DEFAULT_SERVING_UNIT,
    FoodRecord,
    FoodSource,
    to_percent,
)
from protein_tracker.domain.recognition import Prediction
from protein_tracker.services.curated import CURATED_FOODS, search_curated

# Label keyword -> (display name, grams of protein per 100 g).
# Order matters: the first key contained in a label wins.
FOOD_LABEL_MAPPINGS: Mapping[str, tuple[str, float]] = {
    "banana": ("Banana", 1.1),
    "pizza": ("Pizza", 12),
    "hamburger": ("Hamburger", 17),
    "hotdog": ("Hot Dog", 10),
    "burrito": ("Burrito", 15),
    "cheeseburger": ("Cheeseburger", 18),
    "meat loaf": ("Meatloaf", 22),
    "french loaf": ("Bread", 9),
    "bagel": ("Bagel", 10),
    "pretzel": ("Pretzel", 8),
    "carbonara": ("Carbonara", 14),
    "chicken": ("Chicken", 27),
    "eggnog": ("Eggnog", 5),
    "ice cream": ("Ice Cream", 3),
    "cheese": ("Cheese", 25),
    "eggs": ("Eggs", 13),
    "breakfast": ("Breakfast Plate", 20),
    "guacamole": ("Guacamole", 2),
    "mixed vegetables": ("Mixed Vegetables", 3),
    "salad": ("Salad", 2),
    "steak": ("Steak", 26),
    "fish": ("Fish", 22),
    "salmon": ("Salmon", 25),
    "shrimp": ("Shrimp", 24),
    "lobster": ("Lobster", 24),
    "crab": ("Crab", 19),
    "sushi": ("Sushi", 7),
    "taco": ("Taco", 12),
    "sandwich": ("Sandwich", 15),
    "pancake": ("Pancakes", 6),
    "waffle": ("Waffle", 7),
    "omelette": ("Omelette", 14),
    "scrambled eggs": ("Scrambled Eggs", 13),
    "bacon": ("Bacon", 37),
    "sausage": ("Sausage", 18),
    "yogurt": ("Yogurt", 10),
    "cottage cheese": ("Cottage Cheese", 11),
    "peanut butter": ("Peanut Butter", 25),
    "almond": ("Almonds", 21),
    "peanut": ("Peanuts", 26),
    "walnut": ("Walnuts", 15),
    "cashew": ("Cashews", 18),
    "pumpkin seed": ("Pumpkin Seeds", 19),
    "sunflower seed": ("Sunflower Seeds", 21),
    "tofu": ("Tofu", 8),
    "tempeh": ("Tempeh", 19),
    "lentil": ("Lentils", 9),
    "bean": ("Beans", 9),
    "chickpea": ("Chickpeas", 9),
    "quinoa": ("Quinoa", 4.4),
    "rice": ("Rice", 2.7),
    "pasta": ("Pasta", 5),
    "noodle": ("Noodles", 5),
    "soup": ("Soup", 6),
    "stew": ("Stew", 15),
    "curry": ("Curry", 12),
    "dumpling": ("Dumplings", 8),
    "spring roll": ("Spring Roll", 5),
    "kebab": ("Kebab", 20),
    "meatball": ("Meatballs", 18),
    "pot roast": ("Pot Roast", 25),
    "ribs": ("Ribs", 23),
    "pork chop": ("Pork Chop", 25),
    "lamb": ("Lamb", 25),
    "venison": ("Venison", 26),
    "turkey": ("Turkey", 29),
    "duck": ("Duck", 19),
    "goose": ("Goose", 25),
}

_KEYWORD_SEPARATORS = re.compile(r"[,/]")

LabelPair = Prediction | tuple[str, float]


def resolve_labels(
    predictions: Iterable[LabelPair],
    *,
    min_confidence: float,
    max_results: int,
    mappings: Mapping[str, tuple[str, float]] = FOOD_LABEL_MAPPINGS,
    curated_foods: Iterable[FoodRecord] = CURATED_FOODS,
) -> list[FoodRecord]:
    """Turn classifier output into recognized food records.

    Predictions are expected in descending probability order. Labels below
    ``min_confidence`` are ignored. Direct label mappings are tried first;
    only when none of the remaining labels maps directly are their keywords
    matched against the curated foods.
    """
    candidates = [
        pair
        for pair in (_as_prediction(item) for item in predictions)
        if pair.probability >= min_confidence
    ]

    resolved = _direct_matches(candidates, mappings)
    if not resolved:
        resolved = _fuzzy_matches(candidates, tuple(curated_foods))
    return resolved[:max_results]


def match_label(
    label: str, mappings: Mapping[str, tuple[str, float]] = FOOD_LABEL_MAPPINGS
) -> str | None:
    """Return the first mapping key contained in the label, if any."""
    lowered = label.lower()
    for key in mappings:
        if key.lower() in lowered:
            return key
    return None


def label_keywords(label: str) -> list[str]:
    """Split a classifier label into non-empty keyword candidates."""
    parts = (part.strip().lower() for part in _KEYWORD_SEPARATORS.split(label))
    return [part for part in parts if part]


def _direct_matches(
    candidates: list[Prediction], mappings: Mapping[str, tuple[str, float]]
) -> list[FoodRecord]:
    emitted: set[str] = set()
    records: list[FoodRecord] = []
    for prediction in candidates:
        key = match_label(prediction.label, mappings)
        if key is None or key in emitted:
            continue
        emitted.add(key)
        name, protein_per_100 = mappings[key]
        records.append(
            FoodRecord(
                id=f"recognized-{key.lower().replace(' ', '-')}",
                name=name,
                protein_per_100=float(protein_per_100),
                protein_per_serving=float(protein_per_100),
                serving_size=DEFAULT_SERVING_SIZE,
                serving_unit=DEFAULT_SERVING_UNIT,
                source=FoodSource.RECOGNIZED,
                confidence=to_percent(prediction.probability),
                label=prediction.label,
            )
        )
    return records


def _fuzzy_matches(
    candidates: list[Prediction], curated_foods: tuple[FoodRecord, ...]
) -> list[FoodRecord]:
    emitted: set[str] = set()
    records: list[FoodRecord] = []
    for prediction in candidates:
        for keyword in label_keywords(prediction.label):
            matches = search_curated(keyword, curated_foods)
            if not matches:
                continue
            best = matches[0]
            if best.id not in emitted:
                emitted.add(best.id)
                records.append(
                    replace(
                        best,
                        id=f"recognized-{best.id}",
                        source=FoodSource.RECOGNIZED,
                        confidence=to_percent(prediction.probability),
                        label=prediction.label,
                    )
                )
            break
    return records


def _as_prediction(item: LabelPair) -> Prediction:
    if isinstance(item, Prediction):
        return item
    label, probability = item
    return Prediction(label=label, probability=probability)
