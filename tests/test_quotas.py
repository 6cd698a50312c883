# tests/test_quotas.py
import pytest

from app.grouping.models import Category
from app.grouping.quotas import DEFAULT_EXCLUDED_NAMES, plan_quotas

D, M, F = Category.DEFENDER, Category.MIDFIELDER, Category.FORWARD


@pytest.mark.parametrize(
    "size, counts",
    [
        (5, (2, 1, 2)),
        (6, (2, 2, 2)),
        (7, (3, 1, 3)),
        (8, (3, 2, 3)),
        (9, (4, 2, 3)),
        (10, (4, 3, 3)),
        (11, (4, 3, 3)),
    ],
)
def test_quota_table(size, counts):
    plan = plan_quotas(size)
    assert (plan.per_group_counts[D], plan.per_group_counts[M], plan.per_group_counts[F]) == counts


def test_small_groups_exclude_keepers_and_staff():
    plan = plan_quotas(7)
    assert plan.exclude_goalkeepers is True
    assert plan.excluded_names == DEFAULT_EXCLUDED_NAMES
    assert Category.GOALKEEPER not in plan.per_group_counts


def test_full_side_keeps_one_keeper_per_group():
    plan = plan_quotas(11)
    assert plan.exclude_goalkeepers is False
    assert plan.excluded_names == ()
    assert plan.per_group_counts[Category.GOALKEEPER] == 1


def test_distribution_pattern():
    assert plan_quotas(5).distribution_pattern() == [D, M, F, D, F]
    assert plan_quotas(7).distribution_pattern() == [D, M, F, D, F, D, F]
    assert plan_quotas(9).distribution_pattern() == [D, M, F, D, M, F, D, F, D]
    assert len(plan_quotas(11).distribution_pattern()) == 10


def test_pattern_matches_quota_counts():
    for size in range(5, 12):
        plan = plan_quotas(size)
        pattern = plan.distribution_pattern()
        for category in (D, M, F):
            assert pattern.count(category) == plan.per_group_counts[category]


@pytest.mark.parametrize("size", [0, 4, 12])
def test_unsupported_size_rejected(size):
    with pytest.raises(ValueError):
        plan_quotas(size)


def test_custom_denylist():
    assert plan_quotas(5, excluded_names=["Coach"]).excluded_names == ("Coach",)
