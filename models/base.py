"""Shared pydantic base classes and date helpers for Ringside entities."""

from __future__ import annotations

import math
import uuid
from datetime import date, datetime, timedelta
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def _coerce_date(value: Any) -> Any:
    # Accept full ISO timestamps from older saves and keep the calendar day.
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10:
        return value[:10]
    return value


GameDate = Annotated[date, BeforeValidator(_coerce_date)]


def today() -> date:
    return date.today()


def as_date(value: date | datetime | str | None) -> Optional[date]:
    """Normalise a caller-supplied date argument."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def add_years(start: date, years: int) -> date:
    try:
        return start.replace(year=start.year + years)
    except ValueError:
        # 29 February in a non-leap target year
        return start.replace(year=start.year + years, day=28)


def days_between(start: date, end: date) -> int:
    return math.ceil(abs((end - start) / timedelta(days=1)))


def new_id() -> str:
    return str(uuid.uuid4())


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


# ---------------------------------------------------------------------------
# Base models
# ---------------------------------------------------------------------------

class Record(BaseModel):
    """Nested value record serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_json(cls, data: dict[str, Any]):
        return cls.model_validate(data)

    @classmethod
    def json_key(cls, key: str) -> str:
        """Map an attribute or JSON key onto the JSON key."""
        if key in cls.model_fields:
            return cls.model_fields[key].alias or key
        aliases = {f.alias for f in cls.model_fields.values()}
        if key in aliases:
            return key
        raise ValueError(f"Unknown field for {cls.__name__}: {key}")


class Entity(Record):
    """Top-level game entity with an immutable identity."""

    id: str = Field(default_factory=new_id)

    def merged(self, patch: dict[str, Any]):
        """Return a new entity with ``patch`` shallow-merged over this one.

        Top-level keys replace whole values, so a nested record present in
        the patch replaces the stored record rather than being field-merged.
        The identity is never taken from the patch.
        """
        if not isinstance(patch, dict):
            raise ValueError(f"Patch for {type(self).__name__} must be an object")
        data = self.to_json()
        for key, value in patch.items():
            data[self.json_key(key)] = value
        data["id"] = self.id
        return type(self).from_json(data)

    def __repr__(self) -> str:
        name = getattr(self, "name", "")
        return f"<{type(self).__name__} {name} id={self.id}>"
