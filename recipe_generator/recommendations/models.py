from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from ..catalog.models import DietaryTag, Difficulty, Recipe, ordered_tags


class RecommendationFilters(BaseModel):
    model_config = ConfigDict(frozen=True)

    dietary: frozenset[DietaryTag] = Field(
        default_factory=frozenset,
        description="Recipes must carry every requested tag",
    )
    difficulties: frozenset[Difficulty] = Field(
        default_factory=frozenset,
        description="Acceptable difficulty levels; empty allows all",
    )
    # Bounds total time (prep + cook), not cook time alone.
    max_cook_time: int | None = Field(
        default=None,
        ge=0,
        description="Inclusive upper bound on total minutes",
    )

    @field_serializer("dietary")
    def serialize_dietary(self, dietary: frozenset[DietaryTag]) -> list[str]:
        return [tag.value for tag in ordered_tags(dietary)]

    @field_serializer("difficulties")
    def serialize_difficulties(self, difficulties: frozenset[Difficulty]) -> list[str]:
        return [d.value for d in Difficulty if d in difficulties]


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    recipe: Recipe
    score: int = Field(..., ge=0, le=100)
    matched_ingredients: tuple[str, ...]
    missing_ingredients: tuple[str, ...]
    reasons: tuple[str, ...] = Field(..., min_length=1, max_length=3)


class RecommendationRequest(BaseModel):
    ingredients: list[str] = Field(default_factory=list)
    filters: RecommendationFilters = Field(default_factory=RecommendationFilters)


class RecommendationResponse(BaseModel):
    recommendations: list[Recommendation]
    total_candidates: int
    total_recipes: int
