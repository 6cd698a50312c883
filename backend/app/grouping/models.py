"""
Value types shared by the grouping pipeline.

A run turns a list of `Player` entries into `CategorizedPlayer` values (category
and rating fixed for the whole run) and packs them into `Group` containers.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from app.schemas.player import Player


class Category(str, Enum):
    GOALKEEPER = "goalkeeper"
    DEFENDER = "defender"
    MIDFIELDER = "midfielder"
    FORWARD = "forward"


OUTFIELD_CATEGORIES = (Category.DEFENDER, Category.MIDFIELDER, Category.FORWARD)


@dataclass(frozen=True)
class CategorizedPlayer:
    player: Player
    category: Category
    rating: float

    @property
    def player_id(self) -> str:
        return self.player.id


@dataclass
class Group:
    players: List[CategorizedPlayer] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.players)

    @property
    def total_rating(self) -> float:
        return sum(p.rating for p in self.players)

    @property
    def average_rating(self) -> float:
        if not self.players:
            return 0.0
        return self.total_rating / len(self.players)

    def category_counts(self) -> Dict[Category, int]:
        counts = {c: 0 for c in Category}
        for p in self.players:
            counts[p.category] += 1
        return counts

    def copy(self) -> "Group":
        return Group(players=list(self.players))


@dataclass
class GroupingResult:
    groups: List[Group]
    group_size: int
    excluded: List[Player] = field(default_factory=list)
    allocation_rounds: int = 0
    balance_iterations: int = 0
    swaps: int = 0
    objective_before: Optional[float] = None
    objective_after: Optional[float] = None
    stopped_early: bool = False

    @property
    def average_ratings(self) -> List[float]:
        return [g.average_rating for g in self.groups]
