from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringConfig:
    """
    Point weights for recommendation scores. The weights sum to 100.

    Coverage must stay the dominant share: the secondary bonuses only
    separate recipes whose coverage is close.

    The alignment bonus is paid only when the user requested dietary tags.
    It lifts every survivor of that query equally, so it reports a matched
    filter without reordering results. Dietary tags nobody asked for earn
    nothing, which leaves near-ties to the time and difficulty bonuses.
    """

    coverage_weight: float = 70.0
    time_weight: float = 12.0
    difficulty_weight: float = 8.0
    alignment_weight: float = 10.0
    # Recipes at or beyond this total time earn no time bonus.
    time_horizon_minutes: int = 120


DEFAULT_SCORING_CONFIG = ScoringConfig()
