"""Simple entrypoint to run the Outfit Combiner against a demo wardrobe."""

import json

from combiner_app.app import OutfitCombinerApp
from combiner_app.config import CombinerConfig
from tools.wardrobe_source import InMemoryWardrobeSource
from tools.weather_provider import MockWeatherProvider

DEMO_WARDROBE = [
    {"_id": "t1", "clothName": "White tee", "category": "T-shirt", "color": "white"},
    {"_id": "t2", "clothName": "Blazer", "category": "Formals", "color": "navy"},
    {"_id": "b1", "clothName": "Blue jeans", "category": "Jeans", "color": "blue"},
    {"_id": "b2", "clothName": "Chino shorts", "category": "Shorts", "color": "beige", "weather": "Sunny"},
    {"_id": "s1", "clothName": "Sneakers", "category": "Sneakers", "color": "white"},
    {"_id": "a1", "clothName": "Tote", "category": "Bags", "color": "brown"},
]


def main() -> None:
    app = OutfitCombinerApp(
        config=CombinerConfig(),
        wardrobe_source=InMemoryWardrobeSource({"demo": DEMO_WARDROBE}),
        weather_provider=MockWeatherProvider(),
    )
    response = app.plan_outfits(user_id="demo", selection={"color_harmony": True})
    print(json.dumps(response, indent=2))


if __name__ == "__main__":
    main()
