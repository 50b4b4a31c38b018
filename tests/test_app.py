"""Application facade, configuration and logging tests."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from combiner_app.app import OutfitCombinerApp
from combiner_app.config import CombinerConfig
from combiner_app.logging_config import JsonFormatter, correlation_context, redact_for_log
from tools.wardrobe_source import InMemoryWardrobeSource
from tools.weather_provider import MockWeatherProvider

FULL_WARDROBE = [
    {"_id": "t1", "clothName": "Tee", "category": "T-shirt", "color": "white"},
    {"_id": "b1", "clothName": "Jeans", "category": "Jeans", "color": "blue"},
    {"_id": "s1", "clothName": "Sneakers", "category": "Sneakers", "color": "white"},
    {"_id": "a1", "clothName": "Tote", "category": "Bags", "color": "brown"},
]


def _app(wardrobe) -> OutfitCombinerApp:
    return OutfitCombinerApp(
        config=CombinerConfig(),
        wardrobe_source=InMemoryWardrobeSource({"demo": list(wardrobe)}),
        weather_provider=MockWeatherProvider(),
    )


def test_plan_outfits_uses_live_weather_when_location_given() -> None:
    response = _app(FULL_WARDROBE).plan_outfits(
        user_id="demo", selection={"weather": "Cold"}, location="Manila"
    )

    assert response["status"] == "ok"
    assert response["weather"] == "Sunny"
    outfit = response["outfits"][0]
    assert outfit["outfit_id"] == "manual-outfit-1"
    assert outfit["weather"] == "Sunny"
    assert outfit["weather_meta"]["location"] == "Manila"
    assert response["debug_summary"]["returned_ids"] == ["manual-outfit-1"]


def test_plan_outfits_keeps_manual_weather_without_location() -> None:
    response = _app(FULL_WARDROBE).plan_outfits(user_id="demo", selection={"weather": "rainy"})

    assert response["status"] == "ok"
    assert response["weather"] == "Rainy"
    assert response["outfits"][0]["weather_meta"] is None


def test_missing_accessories_need_confirmation() -> None:
    wardrobe = FULL_WARDROBE[:3]
    app = _app(wardrobe)

    pending = app.plan_outfits(user_id="demo", selection={})
    assert pending["status"] == "needs_confirmation"
    assert pending["missing"] == ["No available accessories found in your wardrobe"]
    assert pending["outfits"] == []

    confirmed = app.plan_outfits(user_id="demo", selection={}, proceed_anyway=True)
    assert confirmed["status"] == "ok"
    assert confirmed["outfits"][0]["accessories"] == []


def test_missing_tops_surface_as_missing_category() -> None:
    wardrobe = FULL_WARDROBE[1:]

    response = _app(wardrobe).plan_outfits(user_id="demo", selection={}, proceed_anyway=True)

    assert response["status"] == "missing_category"
    assert response["missing_sides"] == ["top"]
    assert response["missing"] == ["No available tops found in your wardrobe"]
    assert response["debug_summary"]["reason"] == "missing_required_categories"


def test_invalid_selection_needs_review() -> None:
    response = _app(FULL_WARDROBE).plan_outfits(user_id="demo", selection={"weather": "Snowy"})

    assert response["status"] == "needs_review"
    assert response["details"][0]["loc"] == ("weather",)


def test_category_options_merge_custom_entries() -> None:
    options = _app([]).category_options(custom_tops=["Crop top", "t-shirt"], custom_bottoms=["Capris"])

    assert options["tops"][-1] == "Crop top"
    assert options["tops"].count("T-shirt") == 1
    assert options["bottoms"][-1] == "Capris"


def test_config_reads_file_and_env_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path / "staging.yaml"
    config_file.write_text(
        "# staging\napi_base_url: \"http://wardrobe.internal/\"\nrequest_timeout_seconds: 2.5\napi_token: from-file\n"
    )
    for key in ("API_BASE_URL", "REQUEST_TIMEOUT_SECONDS", "OPENWEATHER_API_KEY", "DEFAULT_LOCATION"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("APP_ENV", "staging")
    monkeypatch.setenv("COMBINER_CONFIG_DIR", str(tmp_path))
    monkeypatch.delenv("APP_CONFIG_PATH", raising=False)
    monkeypatch.setenv("API_TOKEN", "from-env")

    config = CombinerConfig.from_env()

    assert config.api_base_url == "http://wardrobe.internal"
    assert config.request_timeout_seconds == 2.5
    assert config.api_token == "from-env"
    assert config.weather_api_key is None
    assert config.environment == "staging"


def test_config_defaults_without_file(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("APP_ENV", "APP_CONFIG_PATH", "API_BASE_URL", "REQUEST_TIMEOUT_SECONDS"):
        monkeypatch.delenv(key, raising=False)

    config = CombinerConfig.from_env()

    assert config.api_base_url == "http://localhost:5000"
    assert config.request_timeout_seconds == 5.0


def test_redact_for_log_masks_sensitive_values() -> None:
    payload = {
        "user_id": "u-1",
        "note": "contact a.user@example.com",
        "items": [{"imageUrl": "https://cdn/x.png", "color": "red"}],
        "source": "https://backend/api",
        "count": 3,
    }

    assert redact_for_log(payload) == {
        "user_id": "[redacted]",
        "note": "contact [redacted-email]",
        "items": [{"imageUrl": "[redacted]", "color": "red"}],
        "source": "[redacted-url]",
        "count": 3,
    }


def test_json_formatter_includes_correlation_id() -> None:
    record = logging.LogRecord("combiner", logging.INFO, __file__, 1, "outfits generated", None, None)
    record.outfit_count = 2

    with correlation_context("abc123"):
        payload = json.loads(JsonFormatter().format(record))

    assert payload["correlation_id"] == "abc123"
    assert payload["level"] == "INFO"
    assert payload["event"] == "outfits generated"
    assert payload["outfit_count"] == 2


def test_plan_outfits_falls_back_to_configured_location() -> None:
    app = OutfitCombinerApp(
        config=CombinerConfig(default_location="Manila"),
        wardrobe_source=InMemoryWardrobeSource({"demo": list(FULL_WARDROBE)}),
        weather_provider=MockWeatherProvider(),
    )

    response = app.plan_outfits(user_id="demo", selection={})

    assert response["status"] == "ok"
    assert response["weather"] == "Sunny"
    assert response["outfits"][0]["weather_meta"]["location"] == "Manila"
