import re
from typing import Dict, FrozenSet

from app.grouping.models import Category

POSITION_TABLE: Dict[Category, FrozenSet[str]] = {
    Category.GOALKEEPER: frozenset({"GK", "GOALKEEPER"}),
    Category.DEFENDER: frozenset({"LB", "RB", "CB", "LCB", "RCB", "LWB", "RWB"}),
    Category.MIDFIELDER: frozenset({"CDM", "CM", "CAM", "DM", "AM", "LCM", "RCM"}),
    Category.FORWARD: frozenset({"ST", "CF", "SS", "LW", "RW", "LM", "RM", "STRIKER", "WINGER", "WING"}),
}

PREFIX_FALLBACK: Dict[str, Category] = {
    "D": Category.DEFENDER,
    "M": Category.MIDFIELDER,
    "F": Category.FORWARD,
    "A": Category.FORWARD,
}

_TOKEN_SPLIT = re.compile(r"[\s/,;|]+")


def _lookup(label: str):
    for category, labels in POSITION_TABLE.items():
        if label in labels:
            return category
    return None


def classify_position(raw_position: str) -> Category:
    """
    Map a free-form position label onto one of the four categories.

    Exact table match first, then the first matching token of a compound label
    ("CB/RB", "ST, LW"), then the first letter. Anything else is a midfielder.
    """
    label = str(raw_position or "").strip().upper()
    category = _lookup(label)
    if category is not None:
        return category

    for token in _TOKEN_SPLIT.split(label):
        category = _lookup(token)
        if category is not None:
            return category

    if label:
        fallback = PREFIX_FALLBACK.get(label[0])
        if fallback is not None:
            return fallback
    return Category.MIDFIELDER
