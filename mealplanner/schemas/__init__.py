"""Result schemas."""

from .result_schemas import (
    GeneSummary,
    ObjectiveSummary,
    SolutionSummary,
)

__all__ = [
    "GeneSummary",
    "ObjectiveSummary",
    "SolutionSummary",
]
