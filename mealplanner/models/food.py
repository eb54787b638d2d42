"""Food catalog models."""

import math
from enum import Enum
from functools import lru_cache
from typing import Tuple
from pydantic import BaseModel, Field, model_validator

from ..config import CATEGORY_INTAKE_RANGES
from .nutrients import NutrientVector


class IntakeRange(BaseModel):
    """Allowed gram amounts for one serving of a food."""

    min_grams: float
    max_grams: float
    default_grams: float

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_bounds(self) -> "IntakeRange":
        if self.min_grams > self.max_grams:
            raise ValueError(
                f"min_grams {self.min_grams} exceeds max_grams {self.max_grams}"
            )
        if not self.min_grams <= self.default_grams <= self.max_grams:
            raise ValueError(
                f"default_grams {self.default_grams} outside "
                f"[{self.min_grams}, {self.max_grams}]"
            )
        return self

    @property
    def lower(self) -> int:
        """Smallest integral gram amount inside the range."""
        return int(math.ceil(self.min_grams))

    @property
    def upper(self) -> int:
        """Largest integral gram amount inside the range."""
        return int(math.floor(self.max_grams))

    @property
    def span(self) -> float:
        return self.max_grams - self.min_grams

    def contains(self, grams: float) -> bool:
        return self.min_grams <= grams <= self.max_grams

    def clamp(self, grams: float) -> int:
        """Round to whole grams and clamp into the range."""
        return max(self.lower, min(self.upper, int(round(grams))))

    def normalized(self, grams: float) -> float:
        """Position of grams within the range, 0.0 at min and 1.0 at max."""
        if self.span <= 0:
            return 0.5
        return (grams - self.min_grams) / self.span

    def denormalized(self, position: float) -> float:
        """Inverse of normalized()."""
        return self.min_grams + position * self.span


class FoodCategory(str, Enum):
    """Food categories; each owns an intake range."""

    STAPLE = "staple"
    VEGETABLE = "vegetable"
    FRUIT = "fruit"
    MEAT = "meat"
    FISH = "fish"
    EGG = "egg"
    MILK = "milk"
    OIL = "oil"
    PASTRY = "pastry"
    MUSHROOM = "mushroom"
    BEAN = "bean"
    OTHER = "other"

    @classmethod
    def from_string(cls, value: str) -> "FoodCategory":
        """Parse a category name, falling back to OTHER for unknown names."""
        if value is None:
            return cls.OTHER
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER

    @property
    def intake_range(self) -> IntakeRange:
        return _category_intake_range(self.value)

    @property
    def is_staple(self) -> bool:
        return self is FoodCategory.STAPLE


@lru_cache(maxsize=None)
def _category_intake_range(category: str) -> IntakeRange:
    min_grams, max_grams, default_grams = CATEGORY_INTAKE_RANGES[category]
    return IntakeRange(
        min_grams=min_grams, max_grams=max_grams, default_grams=default_grams
    )


class FoodCatalogEntry(BaseModel):
    """One food of the catalog, with nutrients per 100 g and preference tags."""

    name: str
    category: FoodCategory
    nutrients: NutrientVector = Field(default_factory=NutrientVector)
    allergens: Tuple[str, ...] = ()
    religious_restrictions: Tuple[str, ...] = ()
    flavors: Tuple[str, ...] = ()
    cooking_methods: Tuple[str, ...] = ()
    spice_level: int = Field(default=0, ge=0, le=5)

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "name": "Steamed rice",
                "category": "staple",
                "nutrients": {"calories": 116.0, "carbs": 25.9, "protein": 2.6, "fat": 0.3},
                "flavors": ["plain"],
                "cooking_methods": ["steam"],
                "spice_level": 0,
            }
        },
    }

    @property
    def intake_range(self) -> IntakeRange:
        return self.category.intake_range

    @property
    def is_staple(self) -> bool:
        return self.category.is_staple

    def nutrients_for(self, grams: float) -> NutrientVector:
        """Nutrients contained in the given gram amount."""
        return self.nutrients.scale(grams / 100.0)
