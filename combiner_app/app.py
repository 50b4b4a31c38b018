"""Outfit Combiner app bootstrap."""

import logging
from typing import Any, Dict, Iterable, List

from pydantic import ValidationError

from combiner_app.config import CombinerConfig
from combiner_app.logging_config import configure_logging, get_logger, log_event, operation_context
from logic.availability import check_wardrobe_availability
from logic.outfit_builder import generate_outfits
from logic.validation import OutfitPlanResponse, SelectionRequest, validation_failure
from models.taxonomy import category_options
from tools.wardrobe_source import HttpWardrobeSource, WardrobeSource
from tools.weather_provider import OpenWeatherProvider, WeatherProvider, WeatherReading


LOGGER = get_logger(__name__)


class OutfitCombinerApp:
    """Wires the wardrobe source and weather lookup around the combination engine."""

    def __init__(
        self,
        config: CombinerConfig | None = None,
        wardrobe_source: WardrobeSource | None = None,
        weather_provider: WeatherProvider | None = None,
    ) -> None:
        self.config = config or CombinerConfig.from_env()
        configure_logging()
        self.wardrobe_source = wardrobe_source or HttpWardrobeSource(
            self.config.api_base_url,
            token=self.config.api_token,
            timeout_seconds=self.config.request_timeout_seconds,
        )
        self.weather_provider = weather_provider or OpenWeatherProvider(
            api_key=self.config.weather_api_key,
            timeout_seconds=self.config.request_timeout_seconds,
        )

    def category_options(
        self, custom_tops: Iterable[str] = (), custom_bottoms: Iterable[str] = ()
    ) -> Dict[str, List[str]]:
        """Selection menus for the combine screen, custom subcategories included."""

        return category_options(custom_tops, custom_bottoms)

    def _resolve_weather(self, location: str | None) -> WeatherReading:
        """Look up live weather for ``location``, or the configured default location."""

        location = location or self.config.default_location
        if not location or not location.strip():
            return WeatherReading(label=None)
        return self.weather_provider.get_current_weather(location)

    def plan_outfits(
        self,
        *,
        user_id: str,
        selection: SelectionRequest | Dict[str, Any],
        location: str | None = None,
        proceed_anyway: bool = False,
    ) -> Dict[str, Any]:
        """Generate outfits for a user's current selection.

        The availability pre-check surfaces gaps as ``needs_confirmation``
        unless ``proceed_anyway`` is set; the engine still reports a missing
        top or bottom pool as ``missing_category``.
        """

        with operation_context("app:plan_outfits") as correlation_id:
            log_event(
                LOGGER,
                level=logging.INFO,
                event="app_call_started",
                method="plan_outfits",
                user_id=user_id,
                location=location,
                proceed_anyway=proceed_anyway,
            )
            try:
                request = (
                    selection
                    if isinstance(selection, SelectionRequest)
                    else SelectionRequest.model_validate(selection)
                )
            except ValidationError as exc:
                log_event(
                    LOGGER,
                    level=logging.WARNING,
                    event="app_request_invalid",
                    method="plan_outfits",
                    details=str(exc),
                    correlation_id=correlation_id,
                )
                return validation_failure("Invalid outfit selection payload", exc)

            wardrobe = self.wardrobe_source.list_items(user_id)
            reading = self._resolve_weather(location)
            criteria = request.to_criteria(weather_meta=reading.meta, weather=reading.label)

            if not proceed_anyway:
                report = check_wardrobe_availability(wardrobe, criteria, request.categories)
                if not report.can_proceed:
                    log_event(
                        LOGGER,
                        level=logging.INFO,
                        event="app_needs_confirmation",
                        method="plan_outfits",
                        missing=[bucket.value for bucket in report.missing_buckets],
                        correlation_id=correlation_id,
                    )
                    return OutfitPlanResponse(
                        status="needs_confirmation",
                        missing=report.missing,
                        weather=criteria.weather,
                    ).model_dump()

            result = generate_outfits(wardrobe, criteria)
            if not result.ok:
                log_event(
                    LOGGER,
                    level=logging.INFO,
                    event="app_missing_category",
                    method="plan_outfits",
                    missing_sides=sorted(result.error.missing_sides),
                    correlation_id=correlation_id,
                )
                return OutfitPlanResponse(
                    status="missing_category",
                    missing=result.error.messages,
                    missing_sides=sorted(result.error.missing_sides),
                    weather=criteria.weather,
                    debug_summary=result.diagnostics,
                ).model_dump()

            response = OutfitPlanResponse(
                status="ok",
                outfits=[outfit.to_dict() for outfit in result.outfits],
                weather=criteria.weather,
                debug_summary=result.diagnostics,
            ).model_dump()
            log_event(
                LOGGER,
                level=logging.INFO,
                event="app_call_completed",
                method="plan_outfits",
                correlation_id=correlation_id,
                outfit_count=len(response["outfits"]),
            )
            return response


__all__ = ["OutfitCombinerApp"]
