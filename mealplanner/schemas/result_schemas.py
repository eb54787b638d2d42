"""Schemas describing Pareto results for display or export."""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class GeneSummary(BaseModel):
    """One food of a meal."""

    name: str
    category: str
    grams: int


class ObjectiveSummary(BaseModel):
    """One entry of a Solution's score vector."""

    name: str
    value: float
    weight: float
    is_hard_constraint: bool = False
    hard_threshold: float = 0.0
    satisfied: bool = True


class SolutionSummary(BaseModel):
    """Plain-data view of a Pareto Solution."""

    foods: List[GeneSummary]
    totals: Dict[str, float]
    achievement_ratios: Dict[str, float] = Field(default_factory=dict)
    objectives: List[ObjectiveSummary] = Field(default_factory=list)
    rank: int
    crowding_distance: Optional[float] = None
    all_in_band: bool
    deviation: float

    class Config:
        json_schema_extra = {
            "example": {
                "foods": [
                    {"name": "Steamed rice", "category": "staple", "grams": 150},
                    {"name": "Broccoli", "category": "vegetable", "grams": 120},
                ],
                "totals": {"calories": 650.0, "carbs": 95.0, "protein": 24.0, "fat": 18.0},
                "achievement_ratios": {"calories": 0.98},
                "objectives": [
                    {"name": "calories", "value": 0.96, "weight": 3.0,
                     "is_hard_constraint": True, "hard_threshold": 0.8, "satisfied": True}
                ],
                "rank": 1,
                "crowding_distance": None,
                "all_in_band": True,
                "deviation": 0.0,
            }
        }
