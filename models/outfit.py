"""Selection criteria and generated outfit schemas."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from models.taxonomy import canonical_weather, tokenize
from models.wardrobe_item import WardrobeItem

MANUAL_CONFIDENCE = 75
DEFAULT_WEATHER_LABEL = "Moderate"


@dataclass(frozen=True)
class WeatherMeta:
    """Display metadata of a resolved weather reading."""

    location: str
    temperature: Optional[float] = None
    description: str = ""
    icon: Optional[str] = None


@dataclass
class SelectionCriteria:
    """User constraints driving a single outfit generation call."""

    category_tokens: FrozenSet[str] = frozenset()
    weather: Optional[str] = None
    occasion: Optional[str] = None
    style: Optional[str] = None
    color_harmony_enabled: bool = False
    weather_meta: Optional[WeatherMeta] = None

    def __post_init__(self) -> None:
        # Re-tokenising is idempotent, so raw names and tokens are both fine.
        self.category_tokens = tokenize(self.category_tokens)
        self.weather = (self.weather or "").strip() or None
        self.occasion = (self.occasion or "").strip() or None
        self.style = (self.style or "").strip() or None

    @classmethod
    def from_selection(
        cls,
        categories: Iterable[str] = (),
        weather: str | None = None,
        occasion: str | None = None,
        style: str | None = None,
        color_harmony: bool = False,
        weather_meta: WeatherMeta | None = None,
    ) -> "SelectionCriteria":
        """Build criteria from the raw category names picked in the UI."""

        return cls(
            category_tokens=tokenize(categories),
            weather=canonical_weather(weather),
            occasion=occasion,
            style=style,
            color_harmony_enabled=color_harmony,
            weather_meta=weather_meta,
        )


@dataclass
class GeneratedOutfit:
    """One candidate combination produced by the composer."""

    outfit_id: str
    name: str
    top: WardrobeItem
    bottom: WardrobeItem
    weather: str
    occasion: str
    shoes: Optional[WardrobeItem] = None
    accessories: List[WardrobeItem] = field(default_factory=list)
    color_harmony_score: Optional[int] = None
    confidence: int = MANUAL_CONFIDENCE
    ai_generated: bool = False
    weather_meta: Optional[WeatherMeta] = None
    style: Optional[str] = None

    def items(self) -> List[WardrobeItem]:
        pieces = [self.top, self.bottom]
        if self.shoes is not None:
            pieces.append(self.shoes)
        return pieces + list(self.accessories)

    def colors(self) -> List[str]:
        """Colors of top, bottom, shoes and accessories, unset ones skipped."""

        return [item.color for item in self.items() if item.color]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = [
    "WeatherMeta",
    "SelectionCriteria",
    "GeneratedOutfit",
    "MANUAL_CONFIDENCE",
    "DEFAULT_WEATHER_LABEL",
]
