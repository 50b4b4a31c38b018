"""Place the items of a saved outfit into display slots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set

from models.taxonomy import Bucket, normalize_category

OutfitItem = Dict[str, Any]


@dataclass
class CategorizedOutfit:
    top: Optional[OutfitItem] = None
    bottom: Optional[OutfitItem] = None
    shoes: Optional[OutfitItem] = None
    accessories: List[OutfitItem] = field(default_factory=list)

    def place(self, item: OutfitItem, bucket: Bucket) -> bool:
        """Put ``item`` in the slot for ``bucket``; single slots keep the first item."""

        if bucket is Bucket.ACCESSORIES:
            self.accessories.append(item)
            return True
        slot = {Bucket.TOP: "top", Bucket.BOTTOM: "bottom", Bucket.SHOES: "shoes"}.get(bucket)
        if slot is None or getattr(self, slot) is not None:
            return False
        setattr(self, slot, item)
        return True


def _display_bucket(value: str) -> Bucket:
    key = value.strip().lower()
    try:
        return Bucket(key)
    except ValueError:
        return Bucket.UNKNOWN


def categorize_outfit_items(outfit_items: Iterable[Optional[OutfitItem]]) -> CategorizedOutfit:
    """Categorise saved outfit items.

    Items saved with a ``displayCategory`` (the container the user dropped
    them in) are placed first; older items without it fall back to
    normalising their ``itemCategory``. No item id is placed twice.
    """

    items = [item for item in outfit_items if item]
    categorized = CategorizedOutfit()
    used: Set[Any] = set()

    for item in items:
        item_id = item.get("wardrobeItemId")
        if item_id in used or not item.get("displayCategory"):
            continue
        if categorized.place(item, _display_bucket(str(item["displayCategory"]))):
            used.add(item_id)

    for item in items:
        item_id = item.get("wardrobeItemId")
        if item_id in used or item.get("displayCategory"):
            continue
        if categorized.place(item, normalize_category(item.get("itemCategory"))):
            used.add(item_id)

    return categorized


__all__ = ["CategorizedOutfit", "categorize_outfit_items"]
