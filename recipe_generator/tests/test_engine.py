from __future__ import annotations

import pytest
from pydantic import ValidationError

from recipe_generator.catalog.models import DietaryTag, Difficulty, Macros, Recipe
from recipe_generator.catalog.store import list_recipes
from recipe_generator.recommendations.config import ScoringConfig
from recipe_generator.recommendations.engine import get_recommendations
from recipe_generator.recommendations.models import RecommendationFilters


def _recipe(
    recipe_id: str,
    ingredients: list[str],
    prep: int = 10,
    cook: int = 10,
    difficulty: Difficulty = Difficulty.easy,
    dietary: set[DietaryTag] | None = None,
) -> Recipe:
    return Recipe(
        id=recipe_id,
        title=recipe_id.title(),
        description="",
        ingredients=tuple(ingredients),
        instructions=("Cook it.",),
        difficulty=difficulty,
        dietary=frozenset(dietary or ()),
        prep_time_minutes=prep,
        cook_time_minutes=cook,
        total_time_minutes=prep + cook,
        servings=2,
        calories=300,
        macros=Macros(protein=10, carbs=20, fat=5),
    )


PASTA = _recipe("pasta", ["tomato", "basil", "pasta"], prep=5, cook=15)
CREAMY_PASTA = _recipe(
    "creamy-pasta",
    ["tomato", "basil", "pasta", "cream", "garlic"],
    prep=10,
    cook=30,
    difficulty=Difficulty.medium,
)
SALAD = _recipe(
    "salad",
    ["Lettuce", "Tomato", "Cucumber"],
    prep=10,
    cook=0,
    dietary={DietaryTag.vegetarian, DietaryTag.vegan, DietaryTag.gluten_free},
)
OMELETTE = _recipe(
    "omelette",
    ["Eggs", "Cheese", "Chives"],
    prep=5,
    cook=5,
    dietary={DietaryTag.vegetarian},
)
SMALL_CATALOG = [PASTA, CREAMY_PASTA, SALAD, OMELETTE]


def _ids(recommendations) -> list[str]:
    return [r.recipe.id for r in recommendations]


# ── Ranking ──────────────────────────────────────────────────────────────


def test_full_coverage_outranks_partial_coverage():
    results = get_recommendations(
        ["tomato", "basil", "pasta"], catalog=[PASTA, CREAMY_PASTA],
    )
    by_id = {r.recipe.id: r for r in results}

    assert _ids(results) == ["pasta", "creamy-pasta"]
    assert by_id["pasta"].score > by_id["creamy-pasta"].score


def test_scores_are_sorted_descending():
    results = get_recommendations(["tomato", "eggs"], catalog=SMALL_CATALOG)
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)


def test_coverage_dominates_secondary_bonuses():
    slow_full = _recipe("slow", ["a", "b"], prep=100, cook=100, difficulty=Difficulty.hard)
    fast_half = _recipe("fast", ["a", "c"], prep=2, cook=3, difficulty=Difficulty.easy)
    results = get_recommendations(["a", "b"], catalog=[fast_half, slow_full])
    assert _ids(results) == ["slow", "fast"]


def test_equal_scores_break_ties_on_total_time():
    slower = _recipe("slower", ["x"], prep=10, cook=11)
    faster = _recipe("faster", ["x"], prep=10, cook=10)
    results = get_recommendations([], catalog=[slower, faster])

    assert results[0].score == results[1].score
    assert _ids(results) == ["faster", "slower"]


def test_identical_score_and_time_keep_catalog_order():
    first = _recipe("first", ["rice", "beans"])
    second = _recipe("second", ["rice", "beans"])
    third = _recipe("third", ["rice", "beans"])
    results = get_recommendations(["rice"], catalog=[first, second, third])
    assert _ids(results) == ["first", "second", "third"]


def test_idempotent():
    selection = ["tomato", "basil", "eggs"]
    filters = RecommendationFilters(dietary=frozenset({DietaryTag.vegetarian}))
    first = get_recommendations(selection, filters)
    second = get_recommendations(selection, filters)
    assert first == second


# ── Scoring ──────────────────────────────────────────────────────────────


def test_scores_within_bounds_and_reasons_present():
    for rec in get_recommendations(["garlic", "onion", "tomato"]):
        assert 0 <= rec.score <= 100
        assert 1 <= len(rec.reasons) <= 3


def test_score_monotonic_in_overlap():
    for recipe in list_recipes():
        previous = -1
        selection: list[str] = []
        for ingredient in recipe.ingredients:
            selection.append(ingredient)
            (rec,) = get_recommendations(selection, catalog=[recipe])
            assert rec.score >= previous
            previous = rec.score


def test_any_overlap_yields_nonzero_score():
    big = _recipe(
        "feast",
        [f"item {n}" for n in range(200)],
        prep=300,
        cook=300,
        difficulty=Difficulty.hard,
    )
    config = ScoringConfig(time_weight=0, difficulty_weight=0, alignment_weight=0)
    (rec,) = get_recommendations(["item 7"], catalog=[big], config=config)
    assert rec.score >= 1


def test_recipe_without_ingredients_does_not_fail():
    empty = _recipe("water", [])
    (rec,) = get_recommendations(["tomato"], catalog=[empty])
    assert rec.matched_ingredients == ()
    assert rec.missing_ingredients == ()
    assert rec.reasons[0] == "No ingredients required"


# ── Matching ─────────────────────────────────────────────────────────────


def test_matching_is_case_insensitive_and_trimmed():
    (rec,) = get_recommendations(["  LETTUCE ", "tomato"], catalog=[SALAD])
    assert rec.matched_ingredients == ("Lettuce", "Tomato")
    assert rec.missing_ingredients == ("Cucumber",)


def test_duplicate_selection_counts_once():
    single = get_recommendations(["tomato"], catalog=SMALL_CATALOG)
    doubled = get_recommendations(["tomato", "Tomato", " tomato "], catalog=SMALL_CATALOG)
    assert single == doubled


def test_matched_and_missing_follow_recipe_order():
    (rec,) = get_recommendations(["garlic", "tomato", "cream"], catalog=[CREAMY_PASTA])
    assert rec.matched_ingredients == ("tomato", "cream", "garlic")
    assert rec.missing_ingredients == ("basil", "pasta")


def test_empty_selection_returns_whole_catalog():
    results = get_recommendations([], RecommendationFilters())
    assert len(results) == len(list_recipes())
    assert all(r.matched_ingredients == () for r in results)


def test_blank_strings_are_ignored():
    results = get_recommendations(["", "   "], catalog=SMALL_CATALOG)
    assert all(r.matched_ingredients == () for r in results)


def test_perfect_pantry_surfaces_recipe_first():
    curry = next(r for r in list_recipes() if r.id == "chickpea-spinach-curry")
    results = get_recommendations([i.lower() for i in curry.ingredients])
    assert results[0].recipe.id == "chickpea-spinach-curry"
    assert results[0].missing_ingredients == ()


# ── Hard filters ─────────────────────────────────────────────────────────


def test_difficulty_filter_with_no_matches_returns_empty():
    filters = RecommendationFilters(difficulties=frozenset({Difficulty.hard}))
    assert get_recommendations(["tomato"], filters, catalog=SMALL_CATALOG) == []


def test_difficulty_filter_keeps_members_only():
    filters = RecommendationFilters(difficulties=frozenset({Difficulty.medium}))
    results = get_recommendations(["tomato"], filters, catalog=SMALL_CATALOG)
    assert _ids(results) == ["creamy-pasta"]


def test_max_cook_time_bounds_total_time():
    long_prep = _recipe("long-prep", ["tomato"], prep=20, cook=10)
    filters = RecommendationFilters(max_cook_time=25)
    assert get_recommendations(["tomato"], filters, catalog=[long_prep]) == []

    inclusive = RecommendationFilters(max_cook_time=30)
    assert _ids(get_recommendations(["tomato"], inclusive, catalog=[long_prep])) == ["long-prep"]


def test_max_cook_time_on_full_catalog():
    for limit in (15, 30, 45, 60):
        filters = RecommendationFilters(max_cook_time=limit)
        for rec in get_recommendations(["garlic"], filters):
            assert rec.recipe.total_time_minutes <= limit


def test_dietary_filter_requires_all_tags():
    filters = RecommendationFilters(
        dietary=frozenset({DietaryTag.vegetarian, DietaryTag.vegan}),
    )
    results = get_recommendations(["tomato"], filters, catalog=SMALL_CATALOG)
    assert _ids(results) == ["salad"]


def test_dietary_filter_on_full_catalog():
    required = frozenset({DietaryTag.vegan})
    results = get_recommendations(["garlic"], RecommendationFilters(dietary=required))
    expected = {r.id for r in list_recipes() if required <= r.dietary}

    assert {r.recipe.id for r in results} == expected
    for rec in results:
        assert required <= rec.recipe.dietary


def test_filters_accept_json_lists():
    filters = RecommendationFilters.model_validate(
        {"dietary": ["vegetarian"], "difficulties": ["Easy"], "max_cook_time": 15}
    )
    results = get_recommendations(["eggs"], filters, catalog=SMALL_CATALOG)
    assert _ids(results) == ["omelette", "salad"]


# ── Reasons ──────────────────────────────────────────────────────────────


def test_reasons_reflect_recipe_attributes():
    (rec,) = get_recommendations(["tomato", "basil", "pasta"], catalog=[CREAMY_PASTA])
    assert rec.reasons == ("Uses 3 of 5 ingredients you have", "Ready in 40 minutes")


def test_reasons_for_full_coverage_easy_recipe():
    (rec,) = get_recommendations(["tomato", "basil", "pasta"], catalog=[PASTA])
    assert rec.reasons == ("You have all 3 ingredients", "Ready in 20 minutes", "Easy to make")


def test_reasons_mention_dietary_filters():
    filters = RecommendationFilters(
        dietary=frozenset({DietaryTag.vegan, DietaryTag.vegetarian}),
    )
    (rec,) = get_recommendations([], filters, catalog=[SALAD])
    assert rec.reasons == (
        "None of your ingredients are used yet",
        "Ready in 10 minutes",
        "Matches your vegetarian and vegan filters",
    )


# ── Immutability ─────────────────────────────────────────────────────────


def test_recommendation_sequences_are_immutable():
    (rec,) = get_recommendations(["tomato"], catalog=[CREAMY_PASTA])

    assert isinstance(rec.matched_ingredients, tuple)
    assert isinstance(rec.missing_ingredients, tuple)
    assert isinstance(rec.reasons, tuple)
    with pytest.raises(AttributeError):
        rec.reasons.append("extra")
    with pytest.raises(ValidationError):
        rec.score = 100


def test_recommendation_serializes_sequences_as_lists():
    (rec,) = get_recommendations(["tomato"], catalog=[CREAMY_PASTA])
    body = rec.model_dump(mode="json")

    assert body["matched_ingredients"] == ["tomato"]
    assert body["missing_ingredients"] == ["basil", "pasta", "cream", "garlic"]


# ── Dietary alignment ────────────────────────────────────────────────────


def test_unrequested_dietary_tags_earn_no_bonus():
    tagged_slow = _recipe(
        "tagged-slow",
        ["rice", "beans"],
        prep=30,
        cook=30,
        dietary=set(DietaryTag),
    )
    plain_fast = _recipe("plain-fast", ["rice", "beans"], prep=5, cook=5)

    results = get_recommendations(["rice"], catalog=[tagged_slow, plain_fast])

    assert _ids(results) == ["plain-fast", "tagged-slow"]
    assert results[0].score > results[1].score


def test_requested_dietary_tags_lift_scores_without_reordering():
    selection = ["tomato", "lettuce"]
    plain = get_recommendations(selection, catalog=[SALAD, OMELETTE])
    filtered = get_recommendations(
        selection,
        RecommendationFilters(dietary=frozenset({DietaryTag.vegetarian})),
        catalog=[SALAD, OMELETTE],
    )

    assert _ids(filtered) == _ids(plain)
    for before, after in zip(plain, filtered):
        assert after.score == before.score + 10


def test_non_dietary_filters_add_no_alignment_bonus():
    plain = get_recommendations(["eggs"], catalog=[OMELETTE])
    timed = get_recommendations(
        ["eggs"], RecommendationFilters(max_cook_time=60), catalog=[OMELETTE],
    )

    assert timed[0].score == plain[0].score
