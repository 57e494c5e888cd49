"""
Recipe recommendation engine.

Responsibilities:
- Accept the user's ingredients and filters (dietary, difficulty, time).
- Drop catalog recipes that fail any hard filter.
- Score and rank survivors by ingredient coverage with small tie-break bonuses.
- Return structured recommendations with matched/missing ingredients and reasons.
"""
