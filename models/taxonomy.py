"""Canonical taxonomy definitions for wardrobe items.

This module centralises the semantic buckets a garment can fall into, the
keyword tables that map free-text categories onto those buckets and the
selection menus offered to users. Helper functions keep matching logic
consistent across the filter, the composer and the history view.
"""

import re
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Sequence, Set, Tuple


class Bucket(str, Enum):
    """Semantic garment role used when composing outfits."""

    TOP = "top"
    BOTTOM = "bottom"
    SHOES = "shoes"
    ACCESSORIES = "accessories"
    UNKNOWN = "unknown"


# (bucket, exact labels, substring keywords) evaluated in priority order.
BUCKET_RULES: Tuple[Tuple[Bucket, FrozenSet[str], Tuple[str, ...]], ...] = (
    (
        Bucket.ACCESSORIES,
        frozenset({"accessory", "accessories"}),
        ("bag", "belt", "scarf", "hat", "cap", "sunglass", "sunglasses", "jewel", "jewelry", "umbrella"),
    ),
    (
        Bucket.SHOES,
        frozenset({"shoe", "shoes", "footwear"}),
        ("sneaker", "heel", "boot", "sandal", "flat", "loafer"),
    ),
    (
        Bucket.BOTTOM,
        frozenset({"bottom", "bottoms"}),
        ("jeans", "trousers", "shorts", "skirt", "legging", "jogger", "pants", "slacks"),
    ),
    (
        Bucket.TOP,
        frozenset({"top", "tops"}),
        (
            "tshirt",
            "shirt",
            "camisole",
            "blouse",
            "tee",
            "tank",
            "jacket",
            "sweater",
            "hoodie",
            "coat",
            "outerwear",
            "sweatshirt",
            "cardigan",
            "formal",
        ),
    ),
)

WEATHER_OPTIONS = ["Sunny", "Rainy", "Cold", "Warm", "Cloudy"]
OCCASION_OPTIONS = ["Casual", "Work", "Party", "Sports", "Formal", "Birthdays", "Weddings"]

BASE_TOP_CATEGORIES = ["T-shirt", "Formals", "Jackets/sweatshirt", "Shirt/camisole"]
BASE_BOTTOM_CATEGORIES = ["Jeans", "Trousers", "Shorts", "Skirts", "Leggings", "Joggers"]

_NON_LETTERS = re.compile(r"[^a-z]")


def normalize_category(label: str | None) -> Bucket:
    """Map a free-text category label onto a semantic bucket.

    Buckets are tried in the fixed order accessories, shoes, bottom, top and
    the first match wins, so labels carrying keywords of several buckets
    always resolve the same way. Blank labels map to :attr:`Bucket.UNKNOWN`.
    """

    key = (label or "").strip().lower()
    if not key:
        return Bucket.UNKNOWN
    for bucket, exact, keywords in BUCKET_RULES:
        if key in exact or any(keyword in key for keyword in keywords):
            return bucket
    return Bucket.UNKNOWN


def to_token(value: str | None) -> str:
    """Lower-case a label and strip everything that is not a letter."""

    return _NON_LETTERS.sub("", (value or "").lower())


def tokenize(values: Iterable[str | None]) -> FrozenSet[str]:
    """Tokenise several labels, dropping the ones that end up empty."""

    return frozenset(token for token in (to_token(value) for value in values) if token)


def buckets_for_labels(labels: Iterable[str | None]) -> Set[Bucket]:
    """Union of the buckets of every label, ``UNKNOWN`` excluded."""

    buckets = {normalize_category(label) for label in labels}
    buckets.discard(Bucket.UNKNOWN)
    return buckets


def canonical_weather(value: str | None) -> str | None:
    """Return the canonical casing of a weather label, or ``None`` when blank."""

    key = (value or "").strip()
    if not key:
        return None
    for option in WEATHER_OPTIONS:
        if option.lower() == key.lower():
            return option
    raise ValueError(f"Unsupported weather '{value}'. Allowed: {WEATHER_OPTIONS}")


def _merge_options(base: Sequence[str], custom: Iterable[str]) -> List[str]:
    merged: List[str] = []
    seen: Set[str] = set()
    for option in list(base) + [str(value).strip() for value in custom]:
        token = to_token(option)
        if option and token and token not in seen:
            merged.append(option)
            seen.add(token)
    return merged


def category_options(
    custom_tops: Iterable[str] = (), custom_bottoms: Iterable[str] = ()
) -> Dict[str, List[str]]:
    """Merge the base selection menus with a user's custom subcategories."""

    return {
        "tops": _merge_options(BASE_TOP_CATEGORIES, custom_tops),
        "bottoms": _merge_options(BASE_BOTTOM_CATEGORIES, custom_bottoms),
    }


__all__ = [
    "Bucket",
    "BUCKET_RULES",
    "WEATHER_OPTIONS",
    "OCCASION_OPTIONS",
    "BASE_TOP_CATEGORIES",
    "BASE_BOTTOM_CATEGORIES",
    "normalize_category",
    "to_token",
    "tokenize",
    "buckets_for_labels",
    "canonical_weather",
    "category_options",
]
