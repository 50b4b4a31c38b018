"""Deterministic outfit assembly helpers with transparent diagnostics."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence

from logic.candidate_filter import filter_bucket_with_diagnostics
from models.color_theory import color_harmony_score
from models.outfit import DEFAULT_WEATHER_LABEL, GeneratedOutfit, SelectionCriteria
from models.taxonomy import Bucket
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

MAX_OUTFITS = 6
HARMONY_THRESHOLD = 40
FORMAL_CATEGORY = "Formals"


class MissingCategoryError(Exception):
    """Raised when the top or bottom candidate pool is empty."""

    def __init__(self, missing_sides: Iterable[str]) -> None:
        self.missing_sides: FrozenSet[str] = frozenset(missing_sides)
        super().__init__(f"No eligible items for: {', '.join(sorted(self.missing_sides))}")

    @property
    def messages(self) -> List[str]:
        labels = {"top": "tops", "bottom": "bottoms"}
        return [f"No available {labels[side]} found in your wardrobe" for side in sorted(self.missing_sides, reverse=True)]


@dataclass(frozen=True)
class GenerationResult:
    outfits: List[GeneratedOutfit]
    error: Optional[MissingCategoryError] = None
    diagnostics: Dict[str, object] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None


def _round_robin(pool: Sequence[WardrobeItem], index: int) -> Optional[WardrobeItem]:
    if not pool:
        return None
    pick = pool[index % max(1, len(pool))]
    return pick if pick is not None else pool[0]


def determine_occasion(top: WardrobeItem, bottom: WardrobeItem) -> str:
    if FORMAL_CATEGORY in (top.primary_category, bottom.primary_category):
        return "Work/Formal"
    return "Casual"


def compose(
    tops: Sequence[WardrobeItem],
    bottoms: Sequence[WardrobeItem],
    shoes_pool: Sequence[WardrobeItem],
    accessories_pool: Sequence[WardrobeItem],
    criteria: SelectionCriteria,
) -> List[GeneratedOutfit]:
    """Cross tops with bottoms, row-major, capped at :data:`MAX_OUTFITS`.

    Shoes and accessories are assigned round-robin by ``(i + j)`` over their
    pools, falling back to the first pool element.
    """

    missing = [side for side, pool in (("top", tops), ("bottom", bottoms)) if not pool]
    if missing:
        logger.info("Cannot compose outfits, empty pools: %s", missing)
        raise MissingCategoryError(missing)

    max_outfits = min(MAX_OUTFITS, len(tops) * len(bottoms))
    outfits: List[GeneratedOutfit] = []
    for i, top in enumerate(tops):
        if len(outfits) >= max_outfits:
            break
        for j, bottom in enumerate(bottoms):
            if len(outfits) >= max_outfits:
                break
            number = len(outfits) + 1
            accessory = _round_robin(accessories_pool, i + j)
            outfit = GeneratedOutfit(
                outfit_id=f"manual-outfit-{number}",
                name=f"Manual Outfit {number}",
                top=top,
                bottom=bottom,
                weather=criteria.weather or DEFAULT_WEATHER_LABEL,
                occasion=criteria.occasion or determine_occasion(top, bottom),
                shoes=_round_robin(shoes_pool, i + j),
                accessories=[accessory] if accessory is not None else [],
                weather_meta=criteria.weather_meta,
                style=criteria.style,
            )
            if criteria.color_harmony_enabled:
                outfit.color_harmony_score = color_harmony_score(outfit.colors())
            outfits.append(outfit)
    logger.info("Composed %s outfits from %s tops x %s bottoms", len(outfits), len(tops), len(bottoms))
    return outfits


def rank_by_color_harmony(outfits: Sequence[GeneratedOutfit]) -> List[GeneratedOutfit]:
    """Keep harmonious outfits best-first; degrade to all outfits when none qualify."""

    def score(outfit: GeneratedOutfit) -> int:
        return outfit.color_harmony_score or 0

    harmonious = [outfit for outfit in outfits if score(outfit) >= HARMONY_THRESHOLD]
    if harmonious:
        ranked = sorted(harmonious, key=score, reverse=True)
    else:
        logger.info("No outfit reached harmony threshold %s, keeping best scored", HARMONY_THRESHOLD)
        ranked = sorted(outfits, key=score, reverse=True)
    return ranked[:MAX_OUTFITS]


def generate_outfits(wardrobe: Sequence[WardrobeItem], criteria: SelectionCriteria) -> GenerationResult:
    """Filter the wardrobe per bucket, compose outfits and rank them.

    A missing top or bottom pool is reported through
    :attr:`GenerationResult.error` rather than raised.
    """

    pools = {}
    diagnostics: Dict[str, object] = {"wardrobe_count": len(wardrobe), "removed": {}}
    for bucket in (Bucket.TOP, Bucket.BOTTOM, Bucket.SHOES, Bucket.ACCESSORIES):
        result = filter_bucket_with_diagnostics(wardrobe, bucket, criteria)
        pools[bucket] = result.items
        diagnostics[f"{bucket.value}_count"] = len(result.items)
        diagnostics["removed"][bucket.value] = result.removed

    try:
        outfits = compose(
            pools[Bucket.TOP],
            pools[Bucket.BOTTOM],
            pools[Bucket.SHOES],
            pools[Bucket.ACCESSORIES],
            criteria,
        )
    except MissingCategoryError as exc:
        diagnostics["reason"] = "missing_required_categories"
        return GenerationResult(outfits=[], error=exc, diagnostics=diagnostics)

    diagnostics["composed_count"] = len(outfits)
    diagnostics["harmony_applied"] = criteria.color_harmony_enabled
    if criteria.color_harmony_enabled:
        outfits = rank_by_color_harmony(outfits)
    diagnostics["returned_ids"] = [outfit.outfit_id for outfit in outfits]
    return GenerationResult(outfits=outfits, diagnostics=diagnostics)


__all__ = [
    "MAX_OUTFITS",
    "HARMONY_THRESHOLD",
    "MissingCategoryError",
    "GenerationResult",
    "compose",
    "determine_occasion",
    "rank_by_color_harmony",
    "generate_outfits",
]
