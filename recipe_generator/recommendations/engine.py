from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import numpy as np
import pandas as pd

from ..catalog.models import Difficulty, Recipe, ordered_tags
from ..catalog.store import build_catalog_frame, get_dataframe, normalize_ingredient
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .models import Recommendation, RecommendationFilters

logger = logging.getLogger(__name__)

DIFFICULTY_EASE = {
    Difficulty.easy.value: 1.0,
    Difficulty.medium.value: 0.5,
    Difficulty.hard.value: 0.0,
}


def _selection_set(selected: Iterable[str]) -> set[str]:
    normalized = (normalize_ingredient(s) for s in selected)
    return {s for s in normalized if s}


def _hard_filter_mask(df: pd.DataFrame, filters: RecommendationFilters) -> pd.Series:
    mask = pd.Series(True, index=df.index)

    if filters.dietary:
        required = frozenset(tag.value for tag in filters.dietary)
        mask = mask & df["dietary_set"].apply(lambda tags: required <= tags)

    if filters.difficulties:
        mask = mask & df["difficulty"].isin([d.value for d in filters.difficulties])

    if filters.max_cook_time is not None:
        mask = mask & (df["total_time_minutes"] <= filters.max_cook_time)

    return mask


def _score_row(
    row: pd.Series,
    config: ScoringConfig,
    dietary_requested: bool,
) -> int:
    """Compute the 0-100 score for a single catalog row."""
    total = len(row["ingredients_normalized"])
    coverage = row["_matched_count"] / total if total else 0.0

    time_factor = max(0.0, 1.0 - row["total_time_minutes"] / config.time_horizon_minutes)
    ease = DIFFICULTY_EASE.get(row["difficulty"], 0.0)

    # Only tags the user asked for count; every survivor carries all of them.
    alignment = 1.0 if dietary_requested else 0.0

    raw = (
        config.coverage_weight * coverage
        + config.time_weight * time_factor
        + config.difficulty_weight * ease
        + config.alignment_weight * alignment
    )
    score = int(np.clip(round(raw), 0, 100))

    if coverage > 0 and score == 0:
        score = 1
    return score


def _join_labels(labels: list[str]) -> str:
    if len(labels) <= 1:
        return "".join(labels)
    return f"{', '.join(labels[:-1])} and {labels[-1]}"


def _build_reasons(
    recipe: Recipe,
    matched_count: int,
    filters: RecommendationFilters,
) -> list[str]:
    total = len(recipe.ingredients)
    reasons: list[str] = []

    if total == 0:
        reasons.append("No ingredients required")
    elif matched_count == total:
        if total == 1:
            reasons.append("You have the one ingredient needed")
        else:
            reasons.append(f"You have all {total} ingredients")
    elif matched_count:
        reasons.append(f"Uses {matched_count} of {total} ingredients you have")
    else:
        reasons.append("None of your ingredients are used yet")

    minutes = recipe.total_time_minutes
    reasons.append(f"Ready in {minutes} minute{'' if minutes == 1 else 's'}")

    if filters.dietary:
        labels = [tag.value for tag in ordered_tags(filters.dietary)]
        noun = "filter" if len(labels) == 1 else "filters"
        reasons.append(f"Matches your {_join_labels(labels)} {noun}")
    elif recipe.difficulty is Difficulty.easy:
        reasons.append("Easy to make")

    return reasons


def _build_recommendation(
    recipe: Recipe,
    score: int,
    selected: set[str],
    filters: RecommendationFilters,
) -> Recommendation:
    matched: list[str] = []
    missing: list[str] = []
    for ingredient in recipe.ingredients:
        if normalize_ingredient(ingredient) in selected:
            matched.append(ingredient)
        else:
            missing.append(ingredient)

    return Recommendation(
        recipe=recipe,
        score=score,
        matched_ingredients=tuple(matched),
        missing_ingredients=tuple(missing),
        reasons=tuple(_build_reasons(recipe, len(matched), filters)),
    )


def get_recommendations(
    selected_ingredients: Iterable[str],
    filters: RecommendationFilters | None = None,
    *,
    catalog: Sequence[Recipe] | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[Recommendation]:
    """
    Rank catalog recipes against the user's ingredients.

    Recipes failing a hard filter are dropped. Survivors are ordered by
    score (descending), then total time (ascending), then catalog order.
    Never raises for well-formed input; an empty selection simply scores
    every survivor on its secondary signals.
    """
    if filters is None:
        filters = RecommendationFilters()
    selected = _selection_set(selected_ingredients)

    df = build_catalog_frame(catalog) if catalog is not None else get_dataframe()
    if df.empty:
        return []

    # --- Hard filters ---
    candidates = df.loc[_hard_filter_mask(df, filters)].copy()
    logger.debug("%d of %d recipes passed hard filters", len(candidates), len(df))
    if candidates.empty:
        return []

    # --- Scoring ---
    candidates["_matched_count"] = candidates["ingredients_normalized"].apply(
        lambda ingredients: sum(1 for i in ingredients if i in selected)
    )
    candidates["_score"] = candidates.apply(
        _score_row,
        axis=1,
        config=config,
        dietary_requested=bool(filters.dietary),
    )

    # --- Ranking ---
    ranked = candidates.sort_values(
        by=["_score", "total_time_minutes", "position"],
        ascending=[False, True, True],
    )

    return [
        _build_recommendation(row["recipe"], int(row["_score"]), selected, filters)
        for _, row in ranked.iterrows()
    ]
