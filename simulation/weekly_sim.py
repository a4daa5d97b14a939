"""
Weekly simulation tick for Ringside Wrestling Manager.

Advances the game clock by one week, runs any registered weekly effects
and autosaves according to the player's settings.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import TYPE_CHECKING, Callable, Iterable

from models.results import Ok, Result

if TYPE_CHECKING:
    from models.store import GameStore

logger = logging.getLogger(__name__)

WeeklyEffect = Callable[["GameStore"], None]


# ---------------------------------------------------------------------------
# Autosave
# ---------------------------------------------------------------------------

def autosave_due(frequency: str, previous: date, current: date) -> bool:
    """Whether a tick from ``previous`` to ``current`` triggers an autosave."""
    if frequency == "weekly":
        return True
    if frequency == "monthly":
        return (previous.year, previous.month) != (current.year, current.month)
    if frequency == "yearly":
        return previous.year != current.year
    return False


# ---------------------------------------------------------------------------
# Tick
# ---------------------------------------------------------------------------

def advance_game_week(store: "GameStore", effects: Iterable[WeeklyEffect] = ()) -> Result:
    """
    Advance the game by one week.

    Args:
        store: The session's game store.
        effects: Callables applied to the store after the clock moves and
            before the autosave check.

    Returns:
        Ok with the new week and date, plus autosave details.
    """
    state = store.game_state
    previous = state.current_date

    # 1. Move the clock
    state.game_week += 1
    state.current_date = previous + timedelta(days=7)

    # 2. Weekly effects
    applied = 0
    for effect in effects:
        effect(store)
        applied += 1

    # 3. Autosave
    frequency = store.settings.autosave_frequency
    summary = {
        "game_week": state.game_week,
        "current_date": state.current_date.isoformat(),
        "effects_applied": applied,
        "autosaved": False,
    }
    if autosave_due(frequency, previous, state.current_date):
        saved = store.save_game()
        summary["autosaved"] = saved.success
        if not saved.success:
            summary["autosave_error"] = saved.message

    logger.info("Advanced to week %d (%s)", state.game_week, state.current_date)
    return Ok("Advanced to next week", summary)
