from __future__ import annotations

import io
import logging
import random
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
from pydantic import BaseModel, Field

from app.schemas.player import STATUS_OPTIONS, Player, split_list_field

logger = logging.getLogger(__name__)

# Spreadsheet header (lower-cased) -> Player field
COLUMN_ALIASES: Dict[str, str] = {
    "id": "id",
    "name": "name",
    "full_name": "name",
    "position": "position",
    "pos": "position",
    "age": "age",
    "height": "height",
    "weight": "weight",
    "experience": "experience",
    "foot": "foot",
    "status": "status",
    "tags": "tags",
    "domisili": "domisili",
    "jurusan": "jurusan",
    "scout rating": "scout_recommendation",
    "scout_rating": "scout_recommendation",
    "scout_recommendation": "scout_recommendation",
    "scoutrecommendation": "scout_recommendation",
    "rec": "scout_recommendation",
}

NUMERIC_COLUMNS = ["age", "height", "weight", "experience", "scout_recommendation"]


class RosterUnavailable(RuntimeError):
    pass


class RosterFilter(BaseModel):
    positions: List[str] = Field(default_factory=list)
    statuses: List[str] = Field(default_factory=list)
    search: Optional[str] = None
    min_rating: float = 0.0
    feet: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)


def _parse_upload(content: bytes, filename: str) -> pd.DataFrame:
    lower = (filename or "").lower()
    if lower.endswith(".csv"):
        return pd.read_csv(io.BytesIO(content))
    if lower.endswith(".xlsx") or lower.endswith(".xls"):
        return pd.read_excel(io.BytesIO(content))
    raise ValueError("Unsupported file type; upload CSV or Excel")


def normalize_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Rename known headers, coerce numerics and fill the defaults a roster row needs."""
    renamed = {}
    for col in df.columns:
        key = COLUMN_ALIASES.get(str(col).strip().lower())
        if key and key not in renamed.values():
            renamed[col] = key
    df = df.rename(columns=renamed)[list(renamed.values())].copy()
    if "name" not in df.columns:
        raise ValueError("Roster is missing a 'Name' column")

    df["name"] = df["name"].astype("string").str.strip()
    df = df[df["name"].notna() & (df["name"] != "")].reset_index(drop=True)

    for col in NUMERIC_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    if "scout_recommendation" in df.columns:
        df["scout_recommendation"] = df["scout_recommendation"].clip(lower=0.0, upper=5.0)
    for col in ("age", "experience"):
        df[col] = df[col].fillna(0) if col in df.columns else 0

    if "position" not in df.columns:
        df["position"] = "Unknown"
    df["position"] = df["position"].fillna("Unknown").astype(str).str.strip()

    if "status" not in df.columns:
        df["status"] = "Unknown"
    df["status"] = df["status"].apply(lambda v: split_list_field(v if isinstance(v, (str, list)) else None) or ["Unknown"])
    if "tags" not in df.columns:
        df["tags"] = None
    df["tags"] = df["tags"].apply(lambda v: split_list_field(v if isinstance(v, (str, list)) else None))

    if "id" not in df.columns:
        df["id"] = None
    df["id"] = [f"player-{idx + 1}" if pd.isna(pid) else _format_id(pid) for idx, pid in enumerate(df["id"].tolist())]
    return df


def _format_id(value: Any) -> str:
    # A blank cell turns a numeric id column into floats; 1.0 should read back as "1"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def players_from_frame(df: pd.DataFrame) -> List[Player]:
    df = df.copy()
    numeric = df.select_dtypes(include="number").columns
    df[numeric] = df[numeric].replace([np.inf, -np.inf], np.nan)
    records = df.astype(object).where(pd.notnull(df), None).to_dict(orient="records")
    return [Player(**row) for row in records]


def parse_roster(content: bytes, filename: str) -> List[Player]:
    df = _parse_upload(content, filename)
    if df.empty:
        raise ValueError("Uploaded roster has no rows")
    players = players_from_frame(normalize_frame(df))
    logger.info("Parsed %d players from %s", len(players), filename)
    return players


def players_from_payload(rows: List[Dict[str, Any]]) -> List[Player]:
    if not rows:
        raise ValueError("No player rows provided")
    return players_from_frame(normalize_frame(pd.DataFrame(rows)))


def roster_frame(players: List[Player]) -> pd.DataFrame:
    return pd.DataFrame([p.model_dump() for p in players])


def filter_players(players: List[Player], filters: Optional[RosterFilter]) -> List[Player]:
    """Apply the roster filters; every active filter must match."""
    if not players or filters is None:
        return list(players)
    df = roster_frame(players)
    mask = pd.Series(True, index=df.index)

    if filters.positions:
        mask &= df["position"].isin(filters.positions)
    if filters.statuses:
        wanted = set(filters.statuses)
        mask &= df["status"].apply(lambda s: bool(wanted.intersection(s)))
    if filters.search:
        needle = filters.search.lower()
        hit = pd.Series(False, index=df.index)
        for col in ("name", "domisili", "jurusan"):
            hit |= df[col].fillna("").astype(str).str.lower().str.contains(needle, regex=False)
        mask &= hit
    if filters.min_rating > 0:
        mask &= df["scout_recommendation"].fillna(0.0) >= filters.min_rating
    if filters.feet:
        mask &= df["foot"].isin(filters.feet)
    if filters.tags:
        needles = [t.lower() for t in filters.tags]
        mask &= df["tags"].apply(lambda tags: any(n in t.lower() for n in needles for t in tags))

    return [p for p, keep in zip(players, mask.tolist()) if keep]


def load_demo_roster(size: int = 60, seed: int = 42) -> List[Player]:
    if size <= 0:
        raise RosterUnavailable("Demo roster size must be positive")
    rng = random.Random(seed)
    positions = ["GK", "CB", "LB", "RB", "CDM", "CM", "CAM", "ST", "LW", "RW"]
    feet = ["Right", "Left"]
    towns = ["Jakarta", "Bandung", "Surabaya", "Medan", "Bogor"]
    fields = ["Engineering", "Business", "Computer Science", "Law", "Medicine"]
    trait_pool = ["Fast", "Strong", "Technical", "Leader", "Creative", "Aerial"]
    rows = []
    for i in range(size):
        rows.append(
            {
                "id": f"D{i + 1:03d}",
                "name": f"Demo Player {i + 1}",
                "position": rng.choice(positions),
                "age": rng.randint(17, 24),
                "height": rng.randint(160, 195),
                "weight": rng.randint(55, 90),
                "experience": rng.randint(0, 8),
                "foot": rng.choice(feet),
                "status": [rng.choice(STATUS_OPTIONS)],
                "tags": rng.sample(trait_pool, k=rng.randint(0, 2)),
                "domisili": rng.choice(towns),
                "jurusan": rng.choice(fields),
                "scout_recommendation": round(rng.uniform(1.0, 5.0) * 2) / 2,
            }
        )
    return [Player(**row) for row in rows]
