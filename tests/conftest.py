# tests/conftest.py
import random
from typing import List, Optional, Sequence

import pytest

from app.grouping.models import Category, CategorizedPlayer
from app.schemas.player import Player


def make_player(
    name: str,
    position: str,
    rec: Optional[float] = None,
    status: Sequence[str] = (),
    experience: float = 0,
    **extra,
) -> Player:
    return Player(
        id=name,
        name=name,
        position=position,
        scout_recommendation=rec,
        status=list(status),
        experience=experience,
        **extra,
    )


def make_entry(name: str, category: Category, rating: float) -> CategorizedPlayer:
    position = {
        Category.GOALKEEPER: "GK",
        Category.DEFENDER: "CB",
        Category.MIDFIELDER: "CM",
        Category.FORWARD: "ST",
    }[category]
    return CategorizedPlayer(player=make_player(name, position), category=category, rating=rating)


def random_roster(seed: int, size: int = 70, keeper_share: float = 0.1) -> List[Player]:
    rng = random.Random(seed)
    outfield = ["CB", "LB", "RB", "CDM", "CM", "CAM", "ST", "LW", "RW", "DEF", "MID", "FWD"]
    statuses = ["HG", "Player To Watch", "Unknown", "Give a chance", "Existing Player"]
    roster = []
    for i in range(size):
        position = "GK" if rng.random() < keeper_share else rng.choice(outfield)
        roster.append(
            make_player(
                f"P{seed}-{i:03d}",
                position,
                rec=round(rng.uniform(0, 5) * 2) / 2,
                status=[rng.choice(statuses)],
                experience=rng.randint(0, 8),
            )
        )
    return roster


@pytest.fixture
def scenario_a_roster() -> List[Player]:
    """10 defenders, 5 midfielders, 10 forwards with spread ratings."""
    roster = []
    for i in range(10):
        roster.append(make_player(f"D{i}", "CB", rec=0.5 * (i % 10)))
        roster.append(make_player(f"F{i}", "ST", rec=5.0 - 0.5 * (i % 10)))
    for i in range(5):
        roster.append(make_player(f"M{i}", "CM", rec=1.0 + i * 0.75))
    return roster
