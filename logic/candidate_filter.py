"""Deterministic per-bucket filtering of a wardrobe snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from models.outfit import SelectionCriteria
from models.taxonomy import Bucket
from models.wardrobe_item import WardrobeItem

TOKEN_RESTRICTED_BUCKETS = frozenset({Bucket.TOP, Bucket.BOTTOM})


@dataclass(frozen=True)
class FilteringResult:
    """Captures the outcome of a single filtering step."""

    items: List[WardrobeItem]
    removed: Dict[str, str]
    debug: Dict[str, object]


def weather_compatible(item: WardrobeItem, weather: str | None) -> bool:
    """Items without a weather tag suit any weather."""

    if not weather:
        return True
    item_weather = (item.weather or "").lower()
    return not item_weather or item_weather == weather.lower()


def category_compatible(item: WardrobeItem, bucket: Bucket, criteria: SelectionCriteria) -> bool:
    if bucket not in TOKEN_RESTRICTED_BUCKETS or not criteria.category_tokens:
        return True
    return bool(item.tokens & criteria.category_tokens)


def filter_bucket_with_diagnostics(
    items: Sequence[WardrobeItem], bucket: Bucket, criteria: SelectionCriteria
) -> FilteringResult:
    """Filter items eligible for ``bucket`` and record why the others were dropped."""

    removed: Dict[str, str] = {}
    kept: List[WardrobeItem] = []
    for item in items:
        reason = None
        if bucket not in item.buckets:
            reason = "bucket mismatch"
        elif not weather_compatible(item, criteria.weather):
            reason = "weather mismatch"
        elif not category_compatible(item, bucket, criteria):
            reason = "category mismatch"
        if reason:
            removed[item.item_id] = reason
        else:
            kept.append(item)

    debug = {
        "bucket": bucket.value,
        "input_count": len(items),
        "kept_count": len(kept),
        "removed_count": len(removed),
        "weather": criteria.weather,
        "token_restricted": bucket in TOKEN_RESTRICTED_BUCKETS and bool(criteria.category_tokens),
    }
    return FilteringResult(items=kept, removed=removed, debug=debug)


def filter_eligible(
    wardrobe: Sequence[WardrobeItem], bucket: Bucket, criteria: SelectionCriteria
) -> List[WardrobeItem]:
    """Return the items eligible for ``bucket``, in wardrobe order."""

    return filter_bucket_with_diagnostics(wardrobe, bucket, criteria).items


__all__ = [
    "FilteringResult",
    "filter_eligible",
    "filter_bucket_with_diagnostics",
    "weather_compatible",
    "category_compatible",
]
