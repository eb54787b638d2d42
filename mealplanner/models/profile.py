"""User profile and macro split models."""

from typing import List
from pydantic import BaseModel, Field, model_validator

from ..config import (
    DEFAULT_MACRO_SPLIT,
    DEFAULT_SPICE_TOLERANCE,
    MACRO_NUTRIENTS,
    RELIGIOUS_RESTRICTIONS,
)
from .food import FoodCatalogEntry


class UserProfile(BaseModel):
    """Dietary preferences and restrictions of the person the meal is for."""

    allergens: List[str] = Field(default_factory=list)
    religious_beliefs: List[str] = Field(default_factory=list)
    disliked_foods: List[str] = Field(default_factory=list)
    liked_flavors: List[str] = Field(default_factory=list)
    spice_tolerance: int = Field(default=DEFAULT_SPICE_TOLERANCE, ge=0, le=5)
    health_conditions: List[str] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "allergens": ["peanut"],
                "religious_beliefs": ["islam"],
                "disliked_foods": ["Bitter melon"],
                "liked_flavors": ["savory", "sweet"],
                "spice_tolerance": 2,
                "health_conditions": ["hypertension"],
            }
        }

    def restricted_tags(self) -> List[str]:
        """Restriction tags implied by the profile's religious beliefs."""
        tags: List[str] = []
        for belief in self.religious_beliefs:
            for tag in RELIGIOUS_RESTRICTIONS.get(belief.lower(), []):
                if tag not in tags:
                    tags.append(tag)
        return tags

    def allergen_matches(self, food: FoodCatalogEntry) -> int:
        allergens = {a.lower() for a in self.allergens}
        return sum(1 for tag in food.allergens if tag.lower() in allergens)

    def religious_matches(self, food: FoodCatalogEntry) -> int:
        restricted = set(self.restricted_tags())
        return sum(1 for tag in food.religious_restrictions if tag.lower() in restricted)

    def dislikes(self, food: FoodCatalogEntry) -> bool:
        return food.name.lower() in {name.lower() for name in self.disliked_foods}

    def liked_flavor_matches(self, food: FoodCatalogEntry) -> int:
        liked = {flavor.lower() for flavor in self.liked_flavors}
        return sum(1 for flavor in food.flavors if flavor.lower() in liked)


class MacroSplit(BaseModel):
    """Ideal calorie shares of carbs, protein and fat.

    The shares are normalized on construction so they always sum to 1.
    """

    carbs: float = Field(default=DEFAULT_MACRO_SPLIT["carbs"], ge=0)
    protein: float = Field(default=DEFAULT_MACRO_SPLIT["protein"], ge=0)
    fat: float = Field(default=DEFAULT_MACRO_SPLIT["fat"], ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def normalize(cls, data):
        if not isinstance(data, dict):
            return data
        shares = {
            name: float(data.get(name, DEFAULT_MACRO_SPLIT[name]))
            for name in MACRO_NUTRIENTS
        }
        total = sum(shares.values())
        if total <= 0:
            raise ValueError("Macro split shares must sum to a positive value")
        return {name: value / total for name, value in shares.items()}

    def share(self, macro: str) -> float:
        return getattr(self, macro)
