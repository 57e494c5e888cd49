from __future__ import annotations

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.responses import JSONResponse

from .catalog.config import DEFAULT_CATALOG_CONFIG
from .catalog.models import DietaryTag, Difficulty, Recipe
from .catalog.store import (
    get_recipe,
    list_all_ingredients,
    list_recipes,
    normalize_ingredient,
    suggest_ingredients,
)
from .detection.clarifai_client import detect_ingredients
from .detection.config import DEFAULT_DETECTION_CONFIG
from .detection.models import DetectionErrorKind
from .recommendations.engine import get_recommendations
from .recommendations.models import RecommendationRequest, RecommendationResponse

app = FastAPI(title="Smart Recipe Generator API", version="1.0.0")

COOK_TIME_OPTIONS = [15, 30, 45, 60]

_DETECTION_STATUS: dict[DetectionErrorKind, int] = {
    DetectionErrorKind.not_configured: 500,
    DetectionErrorKind.missing_image: 400,
    DetectionErrorKind.unsupported_type: 415,
    DetectionErrorKind.file_too_large: 413,
    DetectionErrorKind.auth_failed: 502,
    DetectionErrorKind.provider_error: 502,
    DetectionErrorKind.network_error: 503,
    DetectionErrorKind.invalid_response: 502,
    DetectionErrorKind.no_ingredients: 200,
}


# ── Catalog endpoints ────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {
        "total_recipes": len(list_recipes()),
        "dietary_tags": [tag.value for tag in DietaryTag],
        "difficulties": [d.value for d in Difficulty],
        "cook_time_options": COOK_TIME_OPTIONS,
    }


@app.get("/ingredients")
def ingredients() -> dict:
    return {"ingredients": list(list_all_ingredients())}


@app.get("/ingredients/suggest")
def ingredient_suggestions(
    q: str = "",
    selected: list[str] = Query(default=[]),
) -> dict:
    return {
        "suggestions": suggest_ingredients(
            q, selected, limit=DEFAULT_CATALOG_CONFIG.suggestion_limit,
        )
    }


@app.get("/recipes", response_model=list[Recipe])
def recipes() -> list[Recipe]:
    return list(list_recipes())


@app.get("/recipes/{recipe_id}", response_model=Recipe)
def recipe_detail(recipe_id: str) -> Recipe:
    recipe = get_recipe(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


# ── Recommendation endpoints ─────────────────────────────────────────────


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(body: RecommendationRequest) -> RecommendationResponse:
    selected = [i for i in body.ingredients if normalize_ingredient(i)]
    if not selected:
        raise HTTPException(
            status_code=400,
            detail="Add at least one ingredient to generate recommendations.",
        )

    items = get_recommendations(selected, body.filters)
    return RecommendationResponse(
        recommendations=items,
        total_candidates=len(items),
        total_recipes=len(list_recipes()),
    )


@app.post("/detect-ingredients")
def detect(file: UploadFile | None = File(default=None)) -> JSONResponse:
    config = DEFAULT_DETECTION_CONFIG
    if file is None:
        result = detect_ingredients(None, None, config=config)
    else:
        # One byte past the limit is enough to reject an oversized upload.
        image = file.file.read(config.max_file_size_bytes + 1)
        result = detect_ingredients(image, file.content_type, config=config)

    status = 200 if result.ok else _DETECTION_STATUS[result.error_kind]
    return JSONResponse(status_code=status, content=result.model_dump(mode="json"))
