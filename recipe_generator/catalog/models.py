from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator


class DietaryTag(str, Enum):
    vegetarian = "vegetarian"
    vegan = "vegan"
    gluten_free = "gluten-free"


class Difficulty(str, Enum):
    easy = "Easy"
    medium = "Medium"
    hard = "Hard"


def ordered_tags(tags: Iterable[DietaryTag]) -> list[DietaryTag]:
    """Return dietary tags in declaration order, regardless of set ordering."""
    present = set(tags)
    return [tag for tag in DietaryTag if tag in present]


class Macros(BaseModel):
    model_config = ConfigDict(frozen=True)

    protein: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)
    fat: float = Field(..., ge=0)


class Recipe(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str
    description: str
    ingredients: tuple[str, ...]
    instructions: tuple[str, ...]
    difficulty: Difficulty
    dietary: frozenset[DietaryTag] = frozenset()
    prep_time_minutes: int = Field(..., ge=0)
    cook_time_minutes: int = Field(..., ge=0)
    total_time_minutes: int = Field(..., ge=0)
    servings: int = Field(..., gt=0)
    calories: int = Field(..., gt=0)
    macros: Macros
    image: str | None = None
    tags: tuple[str, ...] = ()

    @model_validator(mode="after")
    def check_total_time(self) -> "Recipe":
        expected = self.prep_time_minutes + self.cook_time_minutes
        if self.total_time_minutes != expected:
            raise ValueError(
                f"total_time_minutes ({self.total_time_minutes}) must equal "
                f"prep + cook time ({expected}) for recipe {self.id!r}"
            )
        return self

    @field_serializer("dietary")
    def serialize_dietary(self, dietary: frozenset[DietaryTag]) -> list[str]:
        return [tag.value for tag in ordered_tags(dietary)]
