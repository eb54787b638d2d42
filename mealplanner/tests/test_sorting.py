"""Tests for non-dominated sorting and crowding distance."""

import math
import random

import pytest
from mealplanner.nsga2.crowding import (
    assign_crowding_distance,
    diversity_metric,
)
from mealplanner.nsga2.sorting import dominates, non_dominated_sort


def test_known_fronts(scored):
    a = scored(1.0, 1.0)
    b = scored(0.5, 0.5)
    c = scored(1.0, 0.0)
    d = scored(0.0, 1.0)
    e = scored(0.2, 0.2)

    fronts = non_dominated_sort([e, d, c, b, a])

    assert fronts[0] == [a]
    assert set(map(id, fronts[1])) == {id(b), id(c), id(d)}
    assert fronts[2] == [e]
    assert (a.rank, b.rank, c.rank, d.rank, e.rank) == (1, 2, 2, 2, 3)


def test_sort_resets_ranks(scored):
    a = scored(1.0, 0.0)
    b = scored(0.0, 1.0)
    a.rank, b.rank = 7, 9

    non_dominated_sort([a, b])

    assert a.rank == 1
    assert b.rank == 1


def test_sort_partitions_random_population(scored):
    rng = random.Random(3)
    population = [scored(*(rng.random() for _ in range(3))) for _ in range(40)]

    fronts = non_dominated_sort(population)

    assert sum(len(front) for front in fronts) == len(population)
    assert all(s.rank >= 1 for s in population)
    for k, front in enumerate(fronts, start=1):
        assert all(s.rank == k for s in front)
        for s in front:
            for t in front:
                assert not dominates(s, t)
        if k > 1:
            # every member is dominated by someone in the previous front
            for s in front:
                assert any(dominates(p, s) for p in fronts[k - 2])


def test_dominance_asymmetric_on_random_vectors(scored):
    rng = random.Random(11)
    population = [scored(*(rng.choice([0.0, 0.5, 1.0]) for _ in range(2))) for _ in range(25)]

    for a in population:
        assert not dominates(a, a)
        for b in population:
            if dominates(a, b):
                assert not dominates(b, a)


@pytest.mark.parametrize("size", [1, 2])
def test_small_fronts_are_all_infinite(scored, size):
    front = [scored(0.1 * i, 1 - 0.1 * i) for i in range(size)]

    assign_crowding_distance(front)

    assert all(math.isinf(s.crowding_distance) for s in front)


def test_crowding_distance_values(scored):
    s1 = scored(0.0, 1.0)
    s2 = scored(0.25, 0.75)
    s3 = scored(0.5, 0.5)
    s4 = scored(1.0, 0.0)

    assign_crowding_distance([s1, s2, s3, s4])

    assert math.isinf(s1.crowding_distance)
    assert math.isinf(s4.crowding_distance)
    assert s2.crowding_distance == pytest.approx(1.0)
    assert s3.crowding_distance == pytest.approx(1.5)


def test_constant_objective_is_skipped(scored):
    front = [scored(0.0, 0.3), scored(0.5, 0.3), scored(1.0, 0.3)]

    assign_crowding_distance(front)

    assert front[1].crowding_distance == pytest.approx(1.0)


def test_boundary_members_keep_infinity(scored):
    rng = random.Random(5)
    front = [scored(rng.random(), rng.random()) for _ in range(10)]

    assign_crowding_distance(front)

    for m in range(2):
        values = [s.objectives[m].value for s in front]
        lowest = front[values.index(min(values))]
        highest = front[values.index(max(values))]
        assert math.isinf(lowest.crowding_distance)
        assert math.isinf(highest.crowding_distance)


def test_diversity_metric(scored):
    front = [scored(0.0), scored(0.5), scored(1.0)]
    front[0].crowding_distance = float("inf")
    front[1].crowding_distance = 1.0
    front[2].crowding_distance = 3.0

    assert diversity_metric(front) == pytest.approx(1.0)
    assert diversity_metric(front[:2]) == 0.0
