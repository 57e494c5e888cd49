from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence

import pandas as pd

from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import Recipe

logger = logging.getLogger(__name__)

_recipes: tuple[Recipe, ...] | None = None
_all_ingredients: tuple[str, ...] | None = None
_df: pd.DataFrame | None = None


def normalize_ingredient(name: str) -> str:
    return name.strip().lower()


def load_catalog(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> tuple[Recipe, ...]:
    """Read and validate a catalog file. Does not touch the process-wide catalog."""
    raw = json.loads(config.data_path.read_text(encoding="utf-8"))
    recipes = tuple(Recipe.model_validate(item) for item in raw)

    seen: set[str] = set()
    for recipe in recipes:
        if recipe.id in seen:
            raise ValueError(f"Duplicate recipe id in catalog: {recipe.id!r}")
        seen.add(recipe.id)

    logger.info("Loaded %d recipes from %s", len(recipes), config.data_path)
    return recipes


def build_catalog_frame(recipes: Sequence[Recipe]) -> pd.DataFrame:
    """
    Build the matching index for a recipe sequence.

    The index is the catalog position, which doubles as the final
    tie-breaker when ranking.
    """
    rows = [
        {
            "id": recipe.id,
            "recipe": recipe,
            "difficulty": recipe.difficulty.value,
            "dietary_set": frozenset(tag.value for tag in recipe.dietary),
            "ingredients_normalized": tuple(
                normalize_ingredient(i) for i in recipe.ingredients
            ),
            "total_time_minutes": recipe.total_time_minutes,
        }
        for recipe in recipes
    ]
    df = pd.DataFrame(
        rows,
        columns=[
            "id",
            "recipe",
            "difficulty",
            "dietary_set",
            "ingredients_normalized",
            "total_time_minutes",
        ],
    )
    df["position"] = range(len(df))
    return df


def list_recipes() -> tuple[Recipe, ...]:
    """Return the process-wide recipe catalog, loading it on first call."""
    global _recipes
    if _recipes is None:
        _recipes = load_catalog(DEFAULT_CATALOG_CONFIG)
    return _recipes


def list_all_ingredients() -> tuple[str, ...]:
    """Return every catalog ingredient, normalized, deduplicated and sorted."""
    global _all_ingredients
    if _all_ingredients is None:
        _all_ingredients = tuple(
            sorted(
                {
                    normalize_ingredient(ingredient)
                    for recipe in list_recipes()
                    for ingredient in recipe.ingredients
                }
            )
        )
    return _all_ingredients


def get_dataframe() -> pd.DataFrame:
    """Return the matching index for the process-wide catalog."""
    global _df
    if _df is None:
        _df = build_catalog_frame(list_recipes())
    return _df


def get_recipe(recipe_id: str) -> Recipe | None:
    for recipe in list_recipes():
        if recipe.id == recipe_id:
            return recipe
    return None


def suggest_ingredients(
    query: str,
    selected: Iterable[str] = (),
    limit: int = DEFAULT_CATALOG_CONFIG.suggestion_limit,
) -> list[str]:
    """Autocomplete catalog ingredients containing ``query``, skipping selected ones."""
    needle = normalize_ingredient(query)
    if not needle:
        return []
    already = {normalize_ingredient(s) for s in selected}
    matches = [
        ingredient
        for ingredient in list_all_ingredients()
        if needle in ingredient and ingredient not in already
    ]
    return matches[:limit]


def reset_catalog() -> None:
    global _recipes, _all_ingredients, _df
    _recipes = None
    _all_ingredients = None
    _df = None
