"""FastAPI server exposing the outfit combiner endpoints."""

from typing import List

from fastapi import FastAPI, HTTPException, Query

from combiner_app.app import OutfitCombinerApp
from combiner_app.logging_config import configure_logging
from logic.validation import NormalizeRequest, OutfitPlanRequest
from models.taxonomy import normalize_category
from tools.wardrobe_source import WardrobeSourceError

configure_logging()

combiner_app = OutfitCombinerApp()
app = FastAPI(title="Outfit Combiner", version="0.1.0")


@app.get("/healthz")
async def healthcheck() -> dict:
    """Lightweight readiness probe."""

    return {
        "status": "ok",
        "service": "outfit-combiner",
        "environment": combiner_app.config.environment or "local",
    }


@app.post("/outfits/generate")
def generate(request: OutfitPlanRequest) -> dict:
    """Generate outfits for the caller's current selection."""

    try:
        response = combiner_app.plan_outfits(
            user_id=request.user_id,
            selection=request.selection,
            location=request.location,
            proceed_anyway=request.proceed_anyway,
        )
    except WardrobeSourceError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    if response.get("status") == "needs_review":
        raise HTTPException(status_code=422, detail=response)
    if response.get("status") != "ok":
        raise HTTPException(status_code=409, detail=response)
    return response


@app.post("/categories/normalize")
async def normalize(request: NormalizeRequest) -> dict:
    """Map free-text category labels onto semantic buckets."""

    return {"buckets": {label: normalize_category(label).value for label in request.labels}}


@app.get("/categories/options")
async def options(
    custom_tops: List[str] = Query([]),
    custom_bottoms: List[str] = Query([]),
) -> dict:
    """Return the selection menus with the caller's custom subcategories merged in."""

    return combiner_app.category_options(custom_tops, custom_bottoms)


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=int("8080"), reload=False)
