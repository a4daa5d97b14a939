"""Wrestler model for Ringside Wrestling Manager."""

from __future__ import annotations

import enum
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from pydantic import Field, model_validator

from .base import Entity, GameDate, Record, add_years, as_date, is_number, today
from .results import Err, ErrorKind, Ok, Result


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Role(str, enum.Enum):
    FACE = "Face"
    HEEL = "Heel"
    NEUTRAL = "Neutral"


class ContractStatus(str, enum.Enum):
    ACTIVE = "Active"
    INJURED = "Injured"
    SUSPENDED = "Suspended"
    RELEASED = "Released"


class Exclusivity(str, enum.Enum):
    EXCLUSIVE = "Exclusive"
    NON_EXCLUSIVE = "Non-Exclusive"
    PER_APPEARANCE = "Per-Appearance"


# Fixed weighting for the overall rating.
OVERALL_WEIGHTS = {
    "strength": Decimal("0.15"),
    "speed": Decimal("0.15"),
    "technique": Decimal("0.20"),
    "charisma": Decimal("0.20"),
    "stamina": Decimal("0.15"),
    "microphone": Decimal("0.15"),
}

MATCH_OUTCOMES = ("win", "loss", "draw")


# ---------------------------------------------------------------------------
# Nested records
# ---------------------------------------------------------------------------

class Attributes(Record):
    """Ten 0-100 ratings. The range is assumed by consumers, not enforced."""

    strength: int = 50
    speed: int = 50
    technique: int = 50
    charisma: int = 50
    stamina: int = 50
    microphone: int = 50
    loyalty: int = 50
    popularity: int = 50
    morale: int = 70
    health: int = 100


class Style(Record):
    primary: str = "All-Rounder"
    secondary: str = ""
    signature: str = "Signature Move"
    finisher: str = "Finisher Move"
    preferred_role: Role = Role.NEUTRAL
    current_role: Role = Role.NEUTRAL


class Contract(Record):
    signed: GameDate = Field(default_factory=today)
    expires: Optional[GameDate] = None
    salary: float = Field(default=1000.0, ge=0)  # weekly
    status: ContractStatus = ContractStatus.ACTIVE
    exclusivity: Exclusivity = Exclusivity.EXCLUSIVE
    minimum_appearances: int = 4  # per month

    @model_validator(mode="after")
    def _default_expiry(self) -> "Contract":
        if self.expires is None:
            self.expires = add_years(self.signed, 1)
        return self


class Stats(Record):
    matches: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    championships: list[str] = Field(default_factory=list)
    rivalries: list[str] = Field(default_factory=list)
    allies: list[str] = Field(default_factory=list)
    last_match_date: Optional[GameDate] = None
    average_rating: float = 0.0


class Development(Record):
    potential: int = 75
    experience: int = 0
    training_points: int = 0
    skill_ceiling: dict[str, int] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Wrestler
# ---------------------------------------------------------------------------

class Wrestler(Entity):
    """A performer on (or available to) a promotion's roster."""

    name: str = "New Wrestler"
    nickname: str = ""
    gender: str = "male"
    age: int = 25
    height: int = 180  # cm
    weight: int = 90  # kg
    image: str = "default_wrestler.png"
    bio: str = ""
    home_town: str = ""

    attributes: Attributes = Field(default_factory=Attributes)
    style: Style = Field(default_factory=Style)
    traits: list[str] = Field(default_factory=list)
    contract: Contract = Field(default_factory=Contract)
    stats: Stats = Field(default_factory=Stats)
    development: Development = Field(default_factory=Development)

    def calculate_overall(self) -> int:
        """Weighted overall rating, rounded half up."""
        total = sum(
            Decimal(getattr(self.attributes, attr)) * weight
            for attr, weight in OVERALL_WEIGHTS.items()
        )
        return int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @property
    def record(self) -> str:
        return f"{self.stats.wins}-{self.stats.losses}-{self.stats.draws}"

    def record_match(self, outcome: str, on=None, rating: float = 0.0) -> Result:
        """Book-keep a match whose result was decided by the caller."""
        if outcome not in MATCH_OUTCOMES:
            return Err(ErrorKind.INVALID_ARGUMENT, f"Invalid match outcome: {outcome}")
        if not is_number(rating):
            return Err(ErrorKind.INVALID_ARGUMENT, f"Match rating must be a number: {rating!r}")
        played_on = as_date(on) or today()

        stats = self.stats
        average = round((stats.average_rating * stats.matches + rating) / (stats.matches + 1), 2)
        stats.matches += 1
        if outcome == "win":
            stats.wins += 1
        elif outcome == "loss":
            stats.losses += 1
        else:
            stats.draws += 1
        stats.last_match_date = played_on
        stats.average_rating = average

        return Ok(
            f"{self.name} recorded a {outcome}",
            {"record": self.record, "average_rating": stats.average_rating},
        )
