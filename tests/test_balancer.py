# tests/test_balancer.py
import random
from collections import Counter

import pytest

from app.grouping.balancer import balance, rating_spread
from app.grouping.models import Category, Group
from conftest import make_entry

D, M, F = Category.DEFENDER, Category.MIDFIELDER, Category.FORWARD


def _ids(groups):
    return [[p.player_id for p in g.players] for g in groups]


def _random_groups(seed, count=4, size=5):
    rng = random.Random(seed)
    groups = []
    for g in range(count):
        players = [
            make_entry(f"g{g}p{i}", rng.choice([D, M, F]), round(rng.uniform(0, 6), 2))
            for i in range(size)
        ]
        groups.append(Group(players=players))
    return groups


def test_scenario_d_swaps_towards_the_mean():
    strong = Group(players=[make_entry("a1", D, 4.8), make_entry("a2", F, 3.2)])
    weak = Group(players=[make_entry("b1", D, 3.2), make_entry("b2", M, 0.8)])
    assert strong.average_rating == pytest.approx(4.0)
    assert weak.average_rating == pytest.approx(2.0)

    result = balance([strong, weak])

    assert result.swaps == 1
    assert result.groups[0].average_rating == pytest.approx(3.2)
    assert result.groups[1].average_rating == pytest.approx(2.8)
    assert result.objective_before == pytest.approx(1.0)
    assert result.objective_after == pytest.approx(0.2)
    assert _ids(result.groups) == [["b1", "a2"], ["a1", "b2"]]


def test_inputs_are_not_mutated():
    strong = Group(players=[make_entry("a1", D, 4.8), make_entry("a2", F, 3.2)])
    weak = Group(players=[make_entry("b1", D, 3.2), make_entry("b2", M, 0.8)])
    balance([strong, weak])
    assert _ids([strong, weak]) == [["a1", "a2"], ["b1", "b2"]]


def test_single_group_is_left_alone():
    only = Group(players=[make_entry("a", D, 1.0), make_entry("b", D, 4.0)])
    result = balance([only])
    assert result.iterations == 0
    assert _ids(result.groups) == [["a", "b"]]
    assert balance([]).groups == []


def test_cross_category_swaps_never_happen():
    left = Group(players=[make_entry("a", D, 5.0), make_entry("b", D, 5.0)])
    right = Group(players=[make_entry("c", F, 0.0), make_entry("d", F, 0.0)])
    result = balance([left, right])
    assert result.swaps == 0
    assert _ids(result.groups) == [["a", "b"], ["c", "d"]]


@pytest.mark.parametrize("seed", range(8))
def test_spread_never_increases(seed):
    groups = _random_groups(seed)
    before = rating_spread(groups)
    result = balance(groups)
    assert result.objective_after <= before + 1e-12
    assert rating_spread(result.groups) == pytest.approx(result.objective_after)
    for old, new in zip(groups, result.groups):
        assert Counter(p.category for p in old.players) == Counter(p.category for p in new.players)
    assert sorted(sum(_ids(groups), [])) == sorted(sum(_ids(result.groups), []))


@pytest.mark.parametrize("seed", range(5))
def test_rebalancing_converged_output_is_a_fixed_point(seed):
    first = balance(_random_groups(seed, count=5, size=6), iteration_budget=1000)
    assert first.budget_exhausted is False
    second = balance(first.groups, iteration_budget=1000)
    assert second.swaps == 0
    assert _ids(second.groups) == _ids(first.groups)


def _lopsided_pair():
    # Evening these out takes two defender swaps
    strong = Group(players=[make_entry(f"s{i}", D, 5.0) for i in range(4)])
    weak = Group(players=[make_entry(f"w{i}", D, 1.0) for i in range(4)])
    return [strong, weak]


def test_budget_exhaustion_is_reported():
    result = balance(_lopsided_pair(), iteration_budget=1)
    assert result.iterations == 1
    assert result.swaps == 1
    assert result.budget_exhausted is True
    assert result.objective_after < result.objective_before


def test_enough_budget_converges():
    result = balance(_lopsided_pair(), iteration_budget=10)
    assert result.swaps == 2
    assert result.budget_exhausted is False
    assert result.objective_after == pytest.approx(0.0)
    assert [g.average_rating for g in result.groups] == [3.0, 3.0]
