"""Wardrobe item data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Set

from models.taxonomy import Bucket, buckets_for_labels, tokenize


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def _clean_optional(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass
class WardrobeItem:
    """Represents a single garment in the user's wardrobe."""

    item_id: str
    name: str = ""
    description: str = ""
    image_url: str = ""
    primary_category: str = ""
    additional_categories: List[str] = field(default_factory=list)
    weather: Optional[str] = None
    color: Optional[str] = None
    occasion: Optional[str] = None
    style: Optional[str] = None

    def __post_init__(self) -> None:
        self.item_id = str(self.item_id)
        self.name = str(self.name or "").strip()
        self.description = str(self.description or "").strip()
        self.image_url = str(self.image_url or "").strip()
        self.primary_category = str(self.primary_category or "").strip()
        self.additional_categories = [
            str(label).strip() for label in _ensure_list(self.additional_categories) if str(label).strip()
        ]
        self.weather = _clean_optional(self.weather)
        self.color = _clean_optional(self.color)
        self.occasion = _clean_optional(self.occasion)
        self.style = _clean_optional(self.style)

    @property
    def labels(self) -> List[str]:
        """Primary category followed by the additional ones, blanks skipped."""

        return [label for label in [self.primary_category, *self.additional_categories] if label]

    @property
    def buckets(self) -> Set[Bucket]:
        return buckets_for_labels(self.labels)

    @property
    def tokens(self) -> FrozenSet[str]:
        return tokenize(self.labels)


def item_buckets(item: WardrobeItem) -> Set[Bucket]:
    """Return the union of buckets over every label of ``item``."""

    return item.buckets


def item_tokens(item: WardrobeItem) -> FrozenSet[str]:
    """Return the letter-only tokens of every label of ``item``."""

    return item.tokens


def _first_present(metadata: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = metadata.get(key)
        if value not in (None, ""):
            return value
    return None


def from_raw_metadata(metadata: Dict[str, Any]) -> WardrobeItem:
    """Factory to build a :class:`WardrobeItem` from a loose backend payload.

    Both the wardrobe service's camelCase keys (``_id``, ``clothName``,
    ``imageUrl``, ``category``, ``categories``) and snake_case keys are
    accepted.
    """

    item_id = _first_present(metadata, "item_id", "_id", "id")
    if item_id is None:
        raise ValueError("Missing required field for WardrobeItem: item_id")

    return WardrobeItem(
        item_id=str(item_id),
        name=_first_present(metadata, "name", "clothName") or "",
        description=metadata.get("description") or "",
        image_url=_first_present(metadata, "image_url", "imageUrl") or "",
        primary_category=_first_present(metadata, "primary_category", "category") or "",
        additional_categories=_ensure_list(_first_present(metadata, "additional_categories", "categories")),
        weather=metadata.get("weather"),
        color=metadata.get("color"),
        occasion=metadata.get("occasion"),
        style=metadata.get("style"),
    )


__all__ = ["WardrobeItem", "from_raw_metadata", "item_buckets", "item_tokens"]
