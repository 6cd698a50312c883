import math
from typing import Any, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

STATUS_OPTIONS = ["HG", "Player To Watch", "Unknown", "Give a chance", "Existing Player", "Not Interested"]


def split_list_field(value: Any) -> List[str]:
    """Accept a list or a comma-separated string; drop blanks."""
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return [str(v).strip() for v in value if str(v).strip()]
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return []


class Player(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str
    position: str = ""
    age: int = 0
    experience: float = 0.0  # years
    status: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    scout_recommendation: Optional[float] = Field(None, ge=0.0, le=5.0)

    height: Optional[float] = None  # cm
    weight: Optional[float] = None  # kg
    foot: Optional[str] = None
    domisili: Optional[str] = None
    jurusan: Optional[str] = None

    @field_validator("status", "tags", mode="before")
    @classmethod
    def _split(cls, value: Any) -> List[str]:
        return split_list_field(value)

    @field_validator("age", mode="before")
    @classmethod
    def _age(cls, value: Any) -> int:
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return 0

    @field_validator("experience", mode="before")
    @classmethod
    def _experience(cls, value: Any) -> float:
        try:
            years = float(value)
        except (TypeError, ValueError):
            return 0.0
        return years if math.isfinite(years) else 0.0
