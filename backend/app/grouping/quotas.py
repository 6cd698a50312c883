"""
Per-group positional quotas for each supported group size.

Sizes below a full XI drop goalkeepers and non-playing staff from the pool; an
XI keeps goalkeepers and seats one in every group before outfield players.
"""
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from app.grouping.models import OUTFIELD_CATEGORIES, Category

MIN_GROUP_SIZE = 5
MAX_GROUP_SIZE = 11
FULL_SIDE = 11

DEFAULT_EXCLUDED_NAMES: Tuple[str, ...] = ("Hendra", "Fadzri", "Adhitia Putra Herawan")

# group size -> (defenders, midfielders, forwards)
QUOTA_TABLE: Dict[int, Tuple[int, int, int]] = {
    5: (2, 1, 2),
    6: (2, 2, 2),
    7: (3, 1, 3),
    8: (3, 2, 3),
    9: (4, 2, 3),
    10: (4, 3, 3),
    11: (4, 3, 3),
}


@dataclass(frozen=True)
class QuotaPlan:
    group_size: int
    per_group_counts: Dict[Category, int]
    exclude_goalkeepers: bool
    excluded_names: Tuple[str, ...]

    @property
    def outfield_total(self) -> int:
        return sum(self.per_group_counts[c] for c in OUTFIELD_CATEGORIES)

    def target_share(self, category: Category) -> float:
        total = self.outfield_total
        return self.per_group_counts.get(category, 0) / total if total else 0.0

    def distribution_pattern(self) -> List[Category]:
        """
        Category order for one cycle of round-robin slots.

        Cycles defender, midfielder, forward and skips a category once its quota
        is spent, so size 5 (2/1/2) yields D, M, F, D, F.
        """
        remaining = {c: self.per_group_counts[c] for c in OUTFIELD_CATEGORIES}
        pattern: List[Category] = []
        while any(remaining.values()):
            for category in OUTFIELD_CATEGORIES:
                if remaining[category] > 0:
                    pattern.append(category)
                    remaining[category] -= 1
        return pattern

    def as_dict(self) -> Dict[str, object]:
        return {
            "group_size": self.group_size,
            "per_group_counts": {c.value: n for c, n in self.per_group_counts.items()},
            "exclude_goalkeepers": self.exclude_goalkeepers,
            "excluded_names": list(self.excluded_names),
            "distribution_pattern": [c.value for c in self.distribution_pattern()],
        }


def plan_quotas(group_size: int, excluded_names: Sequence[str] = DEFAULT_EXCLUDED_NAMES) -> QuotaPlan:
    if group_size not in QUOTA_TABLE:
        raise ValueError(f"Unsupported group size: {group_size} (expected {MIN_GROUP_SIZE}-{MAX_GROUP_SIZE})")
    defenders, midfielders, forwards = QUOTA_TABLE[group_size]
    counts = {
        Category.DEFENDER: defenders,
        Category.MIDFIELDER: midfielders,
        Category.FORWARD: forwards,
    }
    if group_size >= FULL_SIDE:
        counts[Category.GOALKEEPER] = 1
        return QuotaPlan(group_size, counts, exclude_goalkeepers=False, excluded_names=())
    return QuotaPlan(group_size, counts, exclude_goalkeepers=True, excluded_names=tuple(excluded_names))
