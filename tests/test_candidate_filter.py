"""Per-bucket candidate filtering tests."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.candidate_filter import filter_bucket_with_diagnostics, filter_eligible
from models.outfit import SelectionCriteria
from models.taxonomy import Bucket
from models.wardrobe_item import WardrobeItem


def _item(item_id: str, category: str, **kwargs) -> WardrobeItem:
    return WardrobeItem(item_id=item_id, primary_category=category, **kwargs)


def test_untagged_items_pass_any_weather() -> None:
    wardrobe = [
        _item("t1", "T-shirt", weather=""),
        _item("t2", "T-shirt", weather="sunny"),
        _item("t3", "T-shirt", weather="Cold"),
    ]
    criteria = SelectionCriteria(weather="Rainy")

    assert [item.item_id for item in filter_eligible(wardrobe, Bucket.TOP, criteria)] == ["t1"]

    sunny = SelectionCriteria(weather="Sunny")
    assert [item.item_id for item in filter_eligible(wardrobe, Bucket.TOP, sunny)] == ["t1", "t2"]


def test_no_weather_selected_keeps_everything() -> None:
    wardrobe = [_item("t1", "T-shirt", weather="Cold"), _item("t2", "Shirt", weather="Warm")]

    assert len(filter_eligible(wardrobe, Bucket.TOP, SelectionCriteria())) == 2


def test_category_tokens_match_any_label() -> None:
    wardrobe = [
        _item("b1", "Jeans"),
        _item("b2", "Trousers"),
        _item("b3", "Pants", additional_categories=["Shorts"]),
    ]
    criteria = SelectionCriteria(category_tokens=frozenset({"jeans", "shorts"}))

    result = filter_bucket_with_diagnostics(wardrobe, Bucket.BOTTOM, criteria)

    assert [item.item_id for item in result.items] == ["b1", "b3"]
    assert result.removed == {"b2": "category mismatch"}
    assert result.debug["token_restricted"] is True


def test_from_selection_tokenises_raw_category_names() -> None:
    criteria = SelectionCriteria.from_selection(categories=["Jeans", "T-shirt"], weather="rainy")

    assert criteria.category_tokens == frozenset({"jeans", "tshirt"})
    assert criteria.weather == "Rainy"
    assert [item.item_id for item in filter_eligible([_item("t1", "T-shirt")], Bucket.TOP, criteria)] == ["t1"]


def test_shoes_and_accessories_ignore_category_tokens() -> None:
    wardrobe = [
        _item("s1", "Sneakers"),
        _item("a1", "Bags", weather="Cold"),
        _item("a2", "Belts"),
    ]
    criteria = SelectionCriteria(category_tokens=frozenset({"jeans"}), weather="Sunny")

    assert [item.item_id for item in filter_eligible(wardrobe, Bucket.SHOES, criteria)] == ["s1"]
    assert [item.item_id for item in filter_eligible(wardrobe, Bucket.ACCESSORIES, criteria)] == ["a2"]


def test_filter_preserves_wardrobe_order_and_reasons() -> None:
    wardrobe = [
        _item("t3", "Hoodie"),
        _item("s1", "Boots"),
        _item("t1", "Blouse", weather="Cold"),
        _item("t2", "Cardigan"),
        _item("x1", ""),
    ]
    criteria = SelectionCriteria(weather="Warm")

    result = filter_bucket_with_diagnostics(wardrobe, Bucket.TOP, criteria)

    assert [item.item_id for item in result.items] == ["t3", "t2"]
    assert result.removed == {"s1": "bucket mismatch", "t1": "weather mismatch", "x1": "bucket mismatch"}
    assert result.debug["input_count"] == 5
    assert result.debug["kept_count"] == 2


def test_multi_purpose_items_are_eligible_in_each_bucket() -> None:
    item = _item("m1", "Jackets", additional_categories=["Bags"])
    criteria = SelectionCriteria()

    assert filter_eligible([item], Bucket.TOP, criteria) == [item]
    assert filter_eligible([item], Bucket.ACCESSORIES, criteria) == [item]
    assert filter_eligible([item], Bucket.BOTTOM, criteria) == []
