"""Scalar game clock owned by the store."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import GameDate, Record, today


class GameState(Record):
    """Current date, week counter and the player promotion reference.

    ``player_promotion_id`` is a lookup key, never an owning reference.
    """

    current_date: GameDate = Field(default_factory=today)
    player_promotion_id: Optional[str] = None
    game_week: int = 1
    difficulty: str = "normal"
    last_saved: Optional[datetime] = None
