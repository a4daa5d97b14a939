"""Championship model and title-lineage bookkeeping."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field, model_serializer

from .base import Entity, GameDate, Record, as_date, days_between, today
from .results import Err, ErrorKind, Ok, Result

VACANT = "Vacant"


class TitleType(Record):
    gender: str = "male"  # male, female, any
    weight: str = "heavyweight"
    level: str = "midcard"  # main event, midcard, undercard
    team: bool = False


class Reign(Record):
    """The current holder. ``wrestler_id`` of None is the vacant sentinel."""

    wrestler_id: Optional[str] = None
    name: str = VACANT
    won_on: Optional[GameDate] = None
    defense_count: int = 0


class LineageEntry(Record):
    """A concluded reign."""

    wrestler_id: Optional[str] = None
    name: str = ""
    won_on: Optional[GameDate] = None
    lost_on: Optional[GameDate] = None
    defense_count: int = 0
    reign_days: int = 0
    vacated: bool = False
    vacated_reason: Optional[str] = None

    @model_serializer(mode="wrap")
    def _omit_vacate_keys(self, handler) -> dict[str, Any]:
        data = handler(self)
        if not self.vacated:
            for key in ("vacated", "vacatedReason", "vacated_reason"):
                data.pop(key, None)
        return data


class TitleRules(Record):
    minimum_defense_period: int = 14  # days
    vacate_after_inactivity: int = 90  # days
    contender_rankings: list[Any] = Field(default_factory=list)


class Championship(Entity):
    """A title with its current holder and an append-only lineage."""

    name: str = "New Championship"
    image: str = "default_title.png"
    active: bool = True
    inaugurated: GameDate = Field(default_factory=today)
    prestige: int = 50
    description: str = ""

    type: TitleType = Field(default_factory=TitleType)
    current_champion: Reign = Field(default_factory=Reign)
    lineage: list[LineageEntry] = Field(default_factory=list)
    scheduled_defenses: list[Any] = Field(default_factory=list)
    rules: TitleRules = Field(default_factory=TitleRules)

    @property
    def is_vacant(self) -> bool:
        return self.current_champion.wrestler_id is None

    @staticmethod
    def reign_days(start, end) -> int:
        return days_between(as_date(start), as_date(end))

    def _conclude_reign(self, lost_on, **extra) -> LineageEntry:
        # Lineage is written before the holder is overwritten.
        holder = self.current_champion
        entry = LineageEntry(
            wrestler_id=holder.wrestler_id,
            name=holder.name,
            won_on=holder.won_on,
            lost_on=lost_on,
            defense_count=holder.defense_count,
            reign_days=self.reign_days(holder.won_on or lost_on, lost_on),
            **extra,
        )
        self.lineage.append(entry)
        return entry

    def change_champion(self, wrestler_id: str, wrestler_name: str, on=None, event_name: str = "") -> Result:
        on = as_date(on) or today()
        previous = None
        if not self.is_vacant:
            previous = self._conclude_reign(on).to_json()

        self.current_champion = Reign(
            wrestler_id=wrestler_id,
            name=wrestler_name,
            won_on=on,
            defense_count=0,
        )

        return Ok(
            f"{wrestler_name} won the {self.name}",
            {
                "championship_id": self.id,
                "championship_name": self.name,
                "date": on.isoformat(),
                "event_name": event_name,
                "previous_champion": previous,
                "new_champion_id": wrestler_id,
                "new_champion_name": wrestler_name,
            },
        )

    def record_defense(self, on=None, opponent: str = "", event_name: str = "") -> Result:
        on = as_date(on) or today()
        if self.is_vacant:
            return Err(ErrorKind.VACANT_TITLE, f"The {self.name} is vacant and cannot be defended")

        self.current_champion.defense_count += 1
        return Ok(
            f"{self.current_champion.name} retained the {self.name}",
            {
                "date": on.isoformat(),
                "champion_id": self.current_champion.wrestler_id,
                "champion_name": self.current_champion.name,
                "opponent": opponent,
                "event_name": event_name,
                "defense_count": self.current_champion.defense_count,
            },
        )

    def vacate(self, on=None, reason: str = "") -> Result:
        if self.is_vacant:
            return Err(ErrorKind.VACANT_TITLE, f"The {self.name} is already vacant")

        on = as_date(on) or today()
        former = self._conclude_reign(on, vacated=True, vacated_reason=reason)
        self.current_champion = Reign()

        return Ok(
            f"The {self.name} has been vacated",
            {
                "championship_id": self.id,
                "championship_name": self.name,
                "date": on.isoformat(),
                "event": "Title Vacated",
                "reason": reason,
                "former_champion": former.to_json(),
            },
        )
