"""
Initial partition of categorised players into quota-shaped groups.

Players are drawn from per-category queues (rating descending) in round-robin
rounds that follow the quota pattern, so strong players spread across groups
instead of stacking in the first one. Leftovers fill open seats and then new
groups; capacity is checked on every insert.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from app.grouping.models import OUTFIELD_CATEGORIES, Category, CategorizedPlayer, Group
from app.grouping.quotas import QuotaPlan

logger = logging.getLogger(__name__)

ALLOCATION_ROUND_BUDGET = 100

# Lower sorts first among equal ratings
STATUS_PRIORITY: Dict[str, int] = {"Unknown": 0, "Player To Watch": 1}
DEFAULT_STATUS_PRIORITY = 2


def status_priority(entry: CategorizedPlayer) -> int:
    return min((STATUS_PRIORITY.get(s, DEFAULT_STATUS_PRIORITY) for s in entry.player.status), default=DEFAULT_STATUS_PRIORITY)


def sort_for_draft(entries: Sequence[CategorizedPlayer]) -> Tuple[CategorizedPlayer, ...]:
    # sorted() is stable, so input order settles whatever is still tied
    return tuple(sorted(entries, key=lambda e: (-e.rating, status_priority(e))))


class PlayerQueue:
    """Read cursor over an immutable, draft-ordered tuple."""

    def __init__(self, entries: Sequence[CategorizedPlayer]):
        self._entries = sort_for_draft(entries)
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._entries) - self._cursor

    def pop(self) -> Optional[CategorizedPlayer]:
        if self._cursor >= len(self._entries):
            return None
        entry = self._entries[self._cursor]
        self._cursor += 1
        return entry

    def remaining(self) -> List[CategorizedPlayer]:
        return list(self._entries[self._cursor:])


@dataclass
class Allocation:
    groups: List[Group] = field(default_factory=list)
    rounds: int = 0
    budget_exhausted: bool = False


def _lowest_loaded_index(groups: List[Group], capacity: int) -> Optional[int]:
    """Least-populated open group; lowest average rating breaks ties, then index."""
    open_groups = [i for i, g in enumerate(groups) if len(g) < capacity]
    if not open_groups:
        return None
    return min(open_groups, key=lambda i: (len(groups[i]), groups[i].average_rating, i))


def _most_needed(queues: Dict[Category, PlayerQueue], group: Group, plan: QuotaPlan) -> Optional[Category]:
    counts = group.category_counts()
    outfield = sum(counts[c] for c in OUTFIELD_CATEGORIES)
    best: Optional[Category] = None
    best_deficit = 0.0
    for category in OUTFIELD_CATEGORIES:
        if not len(queues[category]):
            continue
        current = counts[category] / outfield if outfield else 0.0
        deficit = plan.target_share(category) - current
        if deficit > best_deficit:
            best, best_deficit = category, deficit
    if best is not None:
        return best
    for category in OUTFIELD_CATEGORIES:
        if len(queues[category]):
            return category
    return None


def _next_player(
    queues: Dict[Category, PlayerQueue],
    preferred: Category,
    group: Group,
    plan: QuotaPlan,
) -> Optional[CategorizedPlayer]:
    if len(queues[preferred]):
        return queues[preferred].pop()
    substitute = _most_needed(queues, group, plan)
    if substitute is None:
        return None
    return queues[substitute].pop()


def _seat_goalkeepers(goalkeepers: PlayerQueue, groups: List[Group], capacity: int) -> List[CategorizedPlayer]:
    unseated: List[CategorizedPlayer] = []
    index = 0
    while len(goalkeepers):
        keeper = goalkeepers.pop()
        if index < len(groups):
            target: Optional[int] = index
            index += 1
        else:
            target = _lowest_loaded_index(groups, capacity)
        if target is None:
            unseated.append(keeper)
        else:
            groups[target].players.append(keeper)
    return unseated


def allocate(
    players: Sequence[CategorizedPlayer],
    plan: QuotaPlan,
    round_budget: int = ALLOCATION_ROUND_BUDGET,
) -> Allocation:
    """
    Partition categorised players into groups of at most ``plan.group_size``.

    Returns an empty allocation when the outfield pool cannot fill one group.
    Goalkeepers are seated one per group only when the plan carries a
    goalkeeper quota; otherwise they are treated as leftovers.
    """
    capacity = plan.group_size
    queues = {c: PlayerQueue([p for p in players if p.category == c]) for c in OUTFIELD_CATEGORIES}
    goalkeepers = PlayerQueue([p for p in players if p.category == Category.GOALKEEPER])

    outfield_count = sum(len(q) for q in queues.values())
    group_count = outfield_count // capacity
    if group_count == 0:
        logger.info("Not enough outfield players (%d) for a group of %d", outfield_count, capacity)
        return Allocation()

    groups = [Group() for _ in range(group_count)]
    leftovers: List[CategorizedPlayer] = []
    if plan.per_group_counts.get(Category.GOALKEEPER):
        leftovers.extend(_seat_goalkeepers(goalkeepers, groups, capacity))
    else:
        leftovers.extend(goalkeepers.remaining())

    pattern = plan.distribution_pattern()
    rounds = 0
    finished = False
    while rounds < round_budget:
        preferred = pattern[rounds % len(pattern)]
        added = False
        for group in groups:
            if len(group) >= capacity:
                continue
            entry = _next_player(queues, preferred, group, plan)
            if entry is None:
                continue
            group.players.append(entry)
            added = True
        rounds += 1
        if not added:
            finished = True
            break

    budget_exhausted = not finished
    if budget_exhausted:
        logger.warning("Allocation stopped after %d rounds with players still queued", rounds)

    for category in OUTFIELD_CATEGORIES:
        leftovers.extend(queues[category].remaining())

    for entry in leftovers:
        target = next((i for i, g in enumerate(groups) if len(g) < capacity), None)
        if target is None:
            groups.append(Group())
            target = len(groups) - 1
        groups[target].players.append(entry)

    logger.info(
        "Allocated %d players into %d groups of up to %d (%d rounds, %d overflow groups)",
        sum(len(g) for g in groups),
        len(groups),
        capacity,
        rounds,
        len(groups) - group_count,
    )
    return Allocation(groups=groups, rounds=rounds, budget_exhausted=budget_exhausted)
