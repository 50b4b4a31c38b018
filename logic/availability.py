"""Wardrobe availability pre-check run before generating outfits."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from logic.candidate_filter import filter_eligible
from models.outfit import SelectionCriteria
from models.taxonomy import Bucket, normalize_category
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

_BUCKET_LABELS = {
    Bucket.TOP: "tops",
    Bucket.BOTTOM: "bottoms",
    Bucket.SHOES: "shoes",
    Bucket.ACCESSORIES: "accessories",
}


@dataclass(frozen=True)
class AvailabilityReport:
    missing: List[str] = field(default_factory=list)
    missing_buckets: List[Bucket] = field(default_factory=list)

    @property
    def can_proceed(self) -> bool:
        return not self.missing


def check_wardrobe_availability(
    wardrobe: Sequence[WardrobeItem],
    criteria: SelectionCriteria,
    selected_categories: Iterable[str] = (),
) -> AvailabilityReport:
    """Report which buckets have nothing to offer under the current selection.

    Tops and bottoms are only checked when the user picked a category of that
    side, or nothing at all. Shoes and accessories are always checked.
    """

    selected = [normalize_category(category) for category in selected_categories]
    to_check: List[Bucket] = []
    if not selected or Bucket.TOP in selected:
        to_check.append(Bucket.TOP)
    if not selected or Bucket.BOTTOM in selected:
        to_check.append(Bucket.BOTTOM)
    to_check.extend([Bucket.SHOES, Bucket.ACCESSORIES])

    missing_buckets = [bucket for bucket in to_check if not filter_eligible(wardrobe, bucket, criteria)]
    missing = [f"No available {_BUCKET_LABELS[bucket]} found in your wardrobe" for bucket in missing_buckets]
    if missing:
        logger.info("Availability check found gaps: %s", [bucket.value for bucket in missing_buckets])
    return AvailabilityReport(missing=missing, missing_buckets=missing_buckets)


__all__ = ["AvailabilityReport", "check_wardrobe_availability"]
