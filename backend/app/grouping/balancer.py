"""
Hill-climbing refinement of an allocation.

The objective is the population standard deviation of group average ratings.
Only same-category swaps are tried, so positional make-up never changes, and a
swap is kept only if it strictly lowers the objective.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import combinations
from typing import List, Optional, Sequence

import numpy as np

from app.grouping.models import Group

logger = logging.getLogger(__name__)

BALANCE_ITERATION_BUDGET = 10
MIN_PAIR_GAP = 0.1
IMPROVEMENT_EPSILON = 1e-9


@dataclass
class Balance:
    groups: List[Group] = field(default_factory=list)
    iterations: int = 0
    swaps: int = 0
    objective_before: Optional[float] = None
    objective_after: Optional[float] = None
    budget_exhausted: bool = False


def rating_spread(groups: Sequence[Group]) -> float:
    """Standard deviation of group averages around their grand mean."""
    if not groups:
        return 0.0
    return float(np.std([g.average_rating for g in groups]))


def _try_swaps(groups: List[Group], first: int, second: int, current: float) -> Optional[float]:
    """Apply the first same-category swap between two groups that lowers the spread."""
    left, right = groups[first].players, groups[second].players
    for i in range(len(left)):
        for j in range(len(right)):
            a, b = left[i], right[j]
            if a.category != b.category or a.rating == b.rating:
                continue
            left[i], right[j] = b, a
            trial = rating_spread(groups)
            if trial < current - IMPROVEMENT_EPSILON:
                return trial
            left[i], right[j] = a, b
    return None


def _paired_phase(groups: List[Group], current: float, min_gap: float) -> Optional[float]:
    order = sorted(range(len(groups)), key=lambda i: groups[i].average_rating)
    for k in range(len(order) // 2):
        weak, strong = order[k], order[-1 - k]
        if groups[strong].average_rating - groups[weak].average_rating < min_gap:
            continue
        improved = _try_swaps(groups, strong, weak, current)
        if improved is not None:
            return improved
    return None


def _exhaustive_phase(groups: List[Group], current: float) -> Optional[float]:
    for first, second in combinations(range(len(groups)), 2):
        improved = _try_swaps(groups, first, second, current)
        if improved is not None:
            return improved
    return None


def balance(
    groups: Sequence[Group],
    iteration_budget: int = BALANCE_ITERATION_BUDGET,
    min_gap: float = MIN_PAIR_GAP,
) -> Balance:
    """
    Reduce the spread of group averages with pairwise swaps.

    The input groups are left untouched; the returned `Balance` holds copies.
    Weakest/strongest pairs are tried first, then every pair of groups. The loop
    stops once a full pass accepts nothing or the iteration budget runs out.
    """
    working = [g.copy() for g in groups]
    if len(working) < 2:
        spread = rating_spread(working)
        return Balance(groups=working, objective_before=spread, objective_after=spread)

    current = rating_spread(working)
    before = current
    iterations = 0
    swaps = 0
    converged = False
    while iterations < iteration_budget:
        iterations += 1
        improved = _paired_phase(working, current, min_gap)
        if improved is None:
            improved = _exhaustive_phase(working, current)
        if improved is None:
            converged = True
            break
        current = improved
        swaps += 1

    budget_exhausted = not converged
    if budget_exhausted:
        logger.warning("Balancing hit its budget of %d iterations; result may not be a local optimum", iteration_budget)
    logger.info("Rating spread %.4f -> %.4f after %d swaps", before, current, swaps)
    return Balance(
        groups=working,
        iterations=iterations,
        swaps=swaps,
        objective_before=before,
        objective_after=current,
        budget_exhausted=budget_exhausted,
    )
