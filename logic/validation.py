"""Pydantic schemas and helpers for validating planner IO and API payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from models.outfit import SelectionCriteria, WeatherMeta
from models.taxonomy import canonical_weather


class SelectionRequest(BaseModel):
    """Raw user selections from the combine screen."""

    categories: List[str] = Field(default_factory=list)
    weather: Optional[str] = None
    occasion: Optional[str] = None
    style: Optional[str] = None
    color_harmony: bool = False

    @field_validator("weather")
    @classmethod
    def _validate_weather(cls, weather: Optional[str]) -> Optional[str]:
        return canonical_weather(weather)

    def to_criteria(self, weather_meta: WeatherMeta | None = None, weather: str | None = None) -> SelectionCriteria:
        """Build core criteria, letting a resolved live weather override the manual pick."""

        return SelectionCriteria.from_selection(
            categories=self.categories,
            weather=weather or self.weather,
            occasion=self.occasion,
            style=self.style,
            color_harmony=self.color_harmony,
            weather_meta=weather_meta,
        )


class OutfitPlanRequest(BaseModel):
    """Shared envelope for outfit planning requests."""

    user_id: str = Field(min_length=1)
    selection: SelectionRequest = Field(default_factory=SelectionRequest)
    location: Optional[str] = None
    proceed_anyway: bool = False


class OutfitPlanResponse(BaseModel):
    """Minimal structure expected from planner responses."""

    status: Literal["ok", "needs_confirmation", "missing_category", "needs_review"]
    outfits: List[Dict[str, Any]] = []
    missing: List[str] = []
    missing_sides: List[str] = []
    weather: Optional[str] = None
    debug_summary: Optional[Dict[str, Any]] = None


class NormalizeRequest(BaseModel):
    labels: List[str] = Field(default_factory=list)


class ValidationResult(BaseModel):
    """Wrapper returned when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    return ValidationResult(message=message, details=exc.errors(include_context=False)).model_dump()


__all__ = [
    "SelectionRequest",
    "OutfitPlanRequest",
    "OutfitPlanResponse",
    "NormalizeRequest",
    "ValidationResult",
    "validation_failure",
]
