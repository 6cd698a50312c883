from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from app.core.config import get_settings
from app.grouping.models import CategorizedPlayer, Group, GroupingResult
from app.grouping.pipeline import allocate_and_balance
from app.grouping.quotas import plan_quotas
from app.schemas.player import Player
from app.services.roster_service import RosterFilter, filter_players, load_demo_roster, parse_roster, players_from_payload

logger = logging.getLogger(__name__)


def _player_entry(entry: CategorizedPlayer) -> Dict[str, Any]:
    row = entry.player.model_dump()
    row["category"] = entry.category.value
    row["rating"] = round(entry.rating, 3)
    return row


def _group_entry(index: int, group: Group) -> Dict[str, Any]:
    return {
        "index": index,
        "name": f"Group {index + 1}",
        "size": len(group),
        "average_rating": round(group.average_rating, 3),
        "total_rating": round(group.total_rating, 3),
        "category_counts": {c.value: n for c, n in group.category_counts().items()},
        "players": [_player_entry(p) for p in group.players],
    }


def build_response(result: GroupingResult, roster_size: int) -> Dict[str, Any]:
    return {
        "group_size": result.group_size,
        "roster_size": roster_size,
        "group_count": len(result.groups),
        "groups": [_group_entry(i, g) for i, g in enumerate(result.groups)],
        "excluded": [p.model_dump() for p in result.excluded],
        "diagnostics": {
            "allocation_rounds": result.allocation_rounds,
            "balance_iterations": result.balance_iterations,
            "swaps": result.swaps,
            "rating_spread_before": result.objective_before,
            "rating_spread_after": result.objective_after,
            "stopped_early": result.stopped_early,
        },
    }


def run_grouping(players: List[Player], group_size: Optional[int] = None, filters: Optional[RosterFilter] = None) -> GroupingResult:
    settings = get_settings()
    size = group_size or settings.default_group_size
    selected = filter_players(players, filters)
    logger.info("Grouping %d of %d players into groups of %d", len(selected), len(players), size)
    return allocate_and_balance(selected, size, excluded_names=settings.excluded_names)


def group_players(players: List[Player], group_size: Optional[int] = None, filters: Optional[RosterFilter] = None) -> Dict[str, Any]:
    result = run_grouping(players, group_size=group_size, filters=filters)
    return build_response(result, roster_size=len(players))


def group_from_payload(rows: List[Dict[str, Any]], group_size: Optional[int] = None, filters: Optional[RosterFilter] = None) -> Dict[str, Any]:
    return group_players(players_from_payload(rows), group_size=group_size, filters=filters)


def group_from_upload(content: bytes, filename: str, group_size: Optional[int] = None) -> Dict[str, Any]:
    return group_players(parse_roster(content, filename), group_size=group_size)


def group_demo(group_size: Optional[int] = None) -> Dict[str, Any]:
    return group_players(load_demo_roster(), group_size=group_size)


def quota_summary(group_size: int) -> Dict[str, Any]:
    return plan_quotas(group_size, excluded_names=get_settings().excluded_names).as_dict()
