"""Nutrient vector model."""

from typing import Dict
from pydantic import BaseModel

from ..config import NUTRIENT_NAMES, CALORIES_PER_GRAM


class NutrientVector(BaseModel):
    """Named nutrient quantities with value-semantic arithmetic.

    Used both for per-100g food composition and for meal totals/targets.
    Calories are stored independently so a target can set them directly;
    use from_macros() to derive them from carbs, protein and fat.
    """

    calories: float = 0.0
    carbs: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    calcium: float = 0.0
    potassium: float = 0.0
    sodium: float = 0.0
    magnesium: float = 0.0
    iron: float = 0.0
    phosphorus: float = 0.0

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "calories": 2000.0,
                "carbs": 250.0,
                "protein": 75.0,
                "fat": 67.0,
            }
        },
    }

    @classmethod
    def zero(cls) -> "NutrientVector":
        """Vector with every nutrient at 0."""
        return cls()

    @classmethod
    def from_macros(
        cls, carbs: float, protein: float, fat: float, **micros: float
    ) -> "NutrientVector":
        """Build a vector whose calories are derived from the macro nutrients."""
        calories = (
            carbs * CALORIES_PER_GRAM["carbs"]
            + protein * CALORIES_PER_GRAM["protein"]
            + fat * CALORIES_PER_GRAM["fat"]
        )
        return cls(calories=calories, carbs=carbs, protein=protein, fat=fat, **micros)

    @classmethod
    def from_dict(cls, values: Dict[str, float]) -> "NutrientVector":
        """Build a vector from a partial mapping; unknown names raise KeyError."""
        for name in values:
            if name not in NUTRIENT_NAMES:
                raise KeyError(f"Unknown nutrient: {name}")
        return cls(**values)

    def get(self, name: str) -> float:
        """Return one nutrient by name."""
        if name not in NUTRIENT_NAMES:
            raise KeyError(f"Unknown nutrient: {name}")
        return getattr(self, name)

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in NUTRIENT_NAMES}

    def scale(self, factor: float) -> "NutrientVector":
        return NutrientVector.model_construct(
            **{name: getattr(self, name) * factor for name in NUTRIENT_NAMES}
        )

    def add(self, other: "NutrientVector") -> "NutrientVector":
        return NutrientVector.model_construct(
            **{name: getattr(self, name) + getattr(other, name) for name in NUTRIENT_NAMES}
        )

    def subtract(self, other: "NutrientVector") -> "NutrientVector":
        return NutrientVector.model_construct(
            **{name: getattr(self, name) - getattr(other, name) for name in NUTRIENT_NAMES}
        )

    def __add__(self, other: "NutrientVector") -> "NutrientVector":
        return self.add(other)

    def __sub__(self, other: "NutrientVector") -> "NutrientVector":
        return self.subtract(other)

    def __mul__(self, factor: float) -> "NutrientVector":
        return self.scale(factor)

    def __rmul__(self, factor: float) -> "NutrientVector":
        return self.scale(factor)

    @classmethod
    def total(cls, vectors) -> "NutrientVector":
        """Sum an iterable of vectors."""
        sums = {name: 0.0 for name in NUTRIENT_NAMES}
        for vector in vectors:
            for name in NUTRIENT_NAMES:
                sums[name] += getattr(vector, name)
        return cls.model_construct(**sums)
