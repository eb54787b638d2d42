"""Tests for multi-objective evaluator."""

import pytest
from mealplanner.config import DEFAULT_ACHIEVEMENT_BANDS
from mealplanner.models.nutrients import NutrientVector
from mealplanner.nsga2.evaluator import MultiObjectiveEvaluator
from mealplanner.nsga2.objectives import DiversityObjective, NutrientObjective
from mealplanner.nsga2.types import ObjectiveScore, Solution


def test_default_objective_order():
    evaluator = MultiObjectiveEvaluator.create()

    assert evaluator.objective_names == list(DEFAULT_ACHIEVEMENT_BANDS) + [
        "preference",
        "diversity",
        "balance",
    ]


def test_custom_bands_define_tracked_nutrients():
    evaluator = MultiObjectiveEvaluator.create(bands={"calories": (0.9, 1.1), "iron": (0.8, 1.5)})

    assert evaluator.objective_names == ["calories", "iron", "preference", "diversity", "balance"]
    assert evaluator.objectives[1].weight == pytest.approx(0.7)


def test_weights_override_defaults():
    evaluator = MultiObjectiveEvaluator.create(nutrient_weights={"protein": 2.5})

    protein = next(o for o in evaluator.objectives if o.name == "protein")
    assert protein.weight == 2.5


def test_duplicate_objectives_rejected():
    with pytest.raises(ValueError):
        MultiObjectiveEvaluator([DiversityObjective(), DiversityObjective()])
    with pytest.raises(ValueError):
        MultiObjectiveEvaluator([])


def test_evaluate_sets_score_vector(make_solution, target):
    evaluator = MultiObjectiveEvaluator.create()
    solution = make_solution(("Fried rice", 150), ("Chicken thigh", 75), ("Broccoli", 150))

    evaluator.evaluate(solution, target)

    assert [s.name for s in solution.objectives] == evaluator.objective_names
    assert all(0.0 <= s.value <= 1.0 for s in solution.objectives)
    # zero-target micro nutrients with zero content
    assert solution.score("sodium").value == 1.0


def test_overall_score_is_weighted_average():
    solution = Solution()
    solution.objectives = [
        ObjectiveScore("a", 1.0, 3.0),
        ObjectiveScore("b", 0.5, 1.0),
    ]

    assert MultiObjectiveEvaluator.overall_score(solution) == pytest.approx(3.5 / 4.0)


def test_good_enough_needs_hard_constraints_and_threshold():
    evaluator = MultiObjectiveEvaluator([NutrientObjective("calories", (0.9, 1.1))])
    passing = Solution()
    passing.objectives = [ObjectiveScore("calories", 0.95, 1.0, True, 0.8)]
    failing_hard = Solution()
    failing_hard.objectives = [
        ObjectiveScore("calories", 1.0, 1.0, True, 0.8),
        ObjectiveScore("protein", 0.7, 0.01, True, 0.8),
    ]
    low_aggregate = Solution()
    low_aggregate.objectives = [
        ObjectiveScore("calories", 0.85, 1.0, True, 0.8),
        ObjectiveScore("diversity", 0.1, 1.0),
    ]

    assert evaluator.is_good_enough(passing)
    assert not evaluator.is_good_enough(failing_hard)
    assert not evaluator.is_good_enough(low_aggregate)
    assert not evaluator.is_good_enough(Solution())


def test_parallel_evaluation_matches_sequential(make_solution, target):
    evaluator = MultiObjectiveEvaluator.create()
    items = [
        (("Fried rice", 150), ("Pork belly", 60)),
        (("Egg noodles", 120), ("Banana", 200), ("Whole milk", 250)),
        (("Fried rice", 200), ("Mixed nuts", 75), ("Olive oil", 15), ("Broccoli", 100)),
    ]
    sequential = [make_solution(*genes) for genes in items]
    parallel = [make_solution(*genes) for genes in items]

    evaluator.evaluate_all(sequential, target)
    evaluator.evaluate_all(parallel, target, parallel=True, max_workers=2)

    for a, b in zip(sequential, parallel):
        assert a.objectives == b.objectives


def test_zero_target_nutrient_scores_one(make_solution):
    evaluator = MultiObjectiveEvaluator.create(bands={"calcium": (0.8, 1.5)})
    solution = make_solution(("Fried rice", 150))

    evaluator.evaluate(solution, NutrientVector(calories=600))

    assert solution.score("calcium").value == 1.0
