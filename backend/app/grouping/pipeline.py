from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Tuple

from app.grouping.allocator import ALLOCATION_ROUND_BUDGET, allocate
from app.grouping.balancer import BALANCE_ITERATION_BUDGET, balance
from app.grouping.models import Category, CategorizedPlayer, GroupingResult
from app.grouping.positions import classify_position
from app.grouping.quotas import DEFAULT_EXCLUDED_NAMES, QuotaPlan, plan_quotas
from app.grouping.rating import rate_player
from app.schemas.player import Player

logger = logging.getLogger(__name__)


def categorize(player: Player) -> CategorizedPlayer:
    return CategorizedPlayer(player=player, category=classify_position(player.position), rating=rate_player(player))


def split_roster(roster: Iterable[Player], plan: QuotaPlan) -> Tuple[List[CategorizedPlayer], List[Player]]:
    """Categorise the roster and set aside anyone the plan leaves out."""
    excluded_names = {name.strip() for name in plan.excluded_names}
    eligible: List[CategorizedPlayer] = []
    excluded: List[Player] = []
    for player in roster:
        if player.name.strip() in excluded_names:
            excluded.append(player)
            continue
        entry = categorize(player)
        if plan.exclude_goalkeepers and entry.category == Category.GOALKEEPER:
            excluded.append(player)
            continue
        eligible.append(entry)
    return eligible, excluded


def allocate_and_balance(
    roster: Sequence[Player],
    group_size: int,
    excluded_names: Sequence[str] = DEFAULT_EXCLUDED_NAMES,
    round_budget: int = ALLOCATION_ROUND_BUDGET,
    iteration_budget: int = BALANCE_ITERATION_BUDGET,
) -> GroupingResult:
    """
    Build balanced groups from a roster in one pass.

    Pure with respect to its inputs: the same roster and group size always give
    the same groups, and the roster itself is never modified.
    """
    plan = plan_quotas(group_size, excluded_names=excluded_names)
    eligible, excluded = split_roster(roster, plan)
    if excluded:
        logger.info("Excluded %d players for group size %d", len(excluded), group_size)

    allocation = allocate(eligible, plan, round_budget=round_budget)
    balanced = balance(allocation.groups, iteration_budget=iteration_budget)
    return GroupingResult(
        groups=balanced.groups,
        group_size=group_size,
        excluded=excluded,
        allocation_rounds=allocation.rounds,
        balance_iterations=balanced.iterations,
        swaps=balanced.swaps,
        objective_before=balanced.objective_before,
        objective_after=balanced.objective_after,
        stopped_early=allocation.budget_exhausted or balanced.budget_exhausted,
    )
