"""Command interface for Ringside Wrestling Manager.

Every outer surface (the Flask app, scripts, tests) drives the game through
``GameService.execute``. Getters hand back plain JSON values; mutations hand
back ``{success, message, ...}`` dicts.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Callable, Optional

from models.base import as_date
from models.championship import Championship
from models.event import EventStatus
from models.promotion import Promotion
from models.results import Err, ErrorKind, Ok, Result
from models.store import EntityCollection, GameStore
from models.wrestler import Wrestler
from simulation.weekly_sim import WeeklyEffect, advance_game_week

logger = logging.getLogger(__name__)

ENTITIES = {
    "wrestler": "wrestlers",
    "championship": "championships",
    "event": "events",
    "promotion": "promotions",
}


def _not_found(kind: str) -> Err:
    return Err(ErrorKind.NOT_FOUND, f"{kind.capitalize()} not found")


class GameService:
    """Dispatches named commands onto a ``GameStore``."""

    def __init__(
        self,
        store: GameStore,
        persist_on_write: bool = True,
        weekly_effects: tuple[WeeklyEffect, ...] = (),
    ):
        self.store = store
        self.persist_on_write = persist_on_write
        self.weekly_effects = tuple(weekly_effects)
        self._commands: dict[str, Callable[..., Any]] = {}
        self._register()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _register(self) -> None:
        for kind, plural in ENTITIES.items():
            self._commands[f"get-all-{plural}"] = partial(self._get_all, kind)
            self._commands[f"get-{kind}"] = partial(self._get_one, kind)
            self._commands[f"add-{kind}"] = partial(self._add, kind)
            self._commands[f"update-{kind}"] = partial(self._update, kind)
            self._commands[f"delete-{kind}"] = partial(self._delete, kind)

        self._commands.update({
            "new-game": self.new_game,
            "save-game": self.save_game,
            "load-game": self.load_game,
            "advance-week": self.advance_week,
            "get-settings": self.get_settings,
            "update-settings": self.update_settings,
            "reset-settings": self.reset_settings,
            "get-gamestate": self.get_gamestate,
            "get-player-promotion": self.get_player_promotion,
            "change-champion": self.change_champion,
            "vacate-championship": self.vacate_championship,
            "record-defense": self.record_defense,
            "get-title-history": self.get_title_history,
            "add-match": self.add_match,
            "start-event": self.start_event,
            "cancel-event": self.cancel_event,
            "finalize-event": self.finalize_event,
            "record-match-result": self.record_match_result,
            "sign-wrestler": self.sign_wrestler,
            "release-wrestler": self.release_wrestler,
            "process-weekly-finances": self.process_weekly_finances,
            "reconcile-rosters": self.reconcile_rosters,
        })

    @property
    def commands(self) -> list[str]:
        return sorted(self._commands)

    def handler(self, command: str) -> Optional[Callable[..., Any]]:
        return self._commands.get(command)

    def execute(self, command: str, *args: Any) -> Any:
        handler = self._commands.get(command)
        if handler is None:
            logger.warning("Unknown command: %s", command)
            return Err(ErrorKind.INVALID_ARGUMENT, f"Unknown command: {command}").to_dict()

        try:
            result = handler(*args)
        except ValueError as exc:
            # pydantic.ValidationError is a ValueError
            logger.warning("%s rejected invalid data: %s", command, exc)
            result = Err(ErrorKind.INVALID_DATA, f"Invalid data: {exc}")

        if isinstance(result, (Ok, Err)):
            if not result.success:
                logger.warning("%s failed: %s", command, result.message)
            return result.to_dict()
        return result

    def _commit(self, result: Result) -> Result:
        """Persist the game after a successful write."""
        if result.success and self.persist_on_write:
            saved = self.store.save_game()
            if not saved.success:
                return saved
        return result

    def _collection(self, kind: str) -> EntityCollection:
        return getattr(self.store, ENTITIES[kind])

    def _on(self, on) -> Any:
        return as_date(on) or self.store.game_state.current_date

    # ------------------------------------------------------------------
    # Entity CRUD
    # ------------------------------------------------------------------

    def _get_all(self, kind: str) -> list[dict]:
        return self._collection(kind).to_json()

    def _get_one(self, kind: str, entity_id: str) -> Optional[dict]:
        entity = self._collection(kind).get(entity_id)
        return entity.to_json() if entity else None

    def _add(self, kind: str, data: Optional[dict] = None) -> Result:
        entity = self._collection(kind).add(data)
        return self._commit(Ok(f"{kind.capitalize()} added", {kind: entity.to_json()}))

    def _update(self, kind: str, entity_id: str, patch: dict) -> Result:
        entity = self._collection(kind).update(entity_id, patch)
        if entity is None:
            return _not_found(kind)
        return self._commit(Ok(f"{kind.capitalize()} updated", {kind: entity.to_json()}))

    def _delete(self, kind: str, entity_id: str) -> Result:
        if kind == "promotion" and entity_id == self.store.game_state.player_promotion_id:
            return Err(ErrorKind.PROTECTED, "Cannot delete the player's promotion")
        if not self._collection(kind).delete(entity_id):
            return _not_found(kind)
        return self._commit(Ok(f"{kind.capitalize()} deleted", {"id": entity_id}))

    # ------------------------------------------------------------------
    # Game lifecycle
    # ------------------------------------------------------------------

    def new_game(self) -> Result:
        return self.store.create_new_game()

    def save_game(self) -> Result:
        return self.store.save_game()

    def load_game(self) -> Result:
        return self.store.load_game()

    def advance_week(self) -> Result:
        return advance_game_week(self.store, self.weekly_effects)

    def get_gamestate(self) -> dict:
        return self.store.game_state.to_json()

    def get_player_promotion(self) -> Optional[dict]:
        promotion = self.store.get_player_promotion()
        return promotion.to_json() if promotion else None

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def get_settings(self) -> dict:
        return self.store.settings.to_json()

    def update_settings(self, patch: dict) -> Result:
        return self.store.update_settings(patch)

    def reset_settings(self) -> Result:
        return self.store.reset_settings()

    # ------------------------------------------------------------------
    # Championships
    # ------------------------------------------------------------------

    def change_champion(self, championship_id: str, wrestler_id: str, event_name: str = "", on=None) -> Result:
        title = self.store.championships.get(championship_id)
        if title is None:
            return _not_found("championship")
        wrestler = self.store.wrestlers.get(wrestler_id)
        if wrestler is None:
            return _not_found("wrestler")
        return self._commit(self._crown(title, wrestler, self._on(on), event_name))

    def _crown(self, title: Championship, wrestler: Wrestler, on, event_name: str) -> Result:
        result = title.change_champion(wrestler.id, wrestler.name, on, event_name)
        if title.id not in wrestler.stats.championships:
            wrestler.stats.championships.append(title.id)
        return result

    def vacate_championship(self, championship_id: str, reason: str = "", on=None) -> Result:
        title = self.store.championships.get(championship_id)
        if title is None:
            return _not_found("championship")
        return self._commit(title.vacate(self._on(on), reason))

    def record_defense(self, championship_id: str, opponent: str, event_name: str = "", on=None) -> Result:
        title = self.store.championships.get(championship_id)
        if title is None:
            return _not_found("championship")
        return self._commit(title.record_defense(self._on(on), opponent, event_name))

    def get_title_history(self, championship_id: str) -> Optional[dict]:
        title = self.store.championships.get(championship_id)
        if title is None:
            return None

        reigns = []
        for entry in title.lineage:
            reign = entry.to_json()
            reign["holder"] = self.store.resolve_wrestler(entry.wrestler_id, entry.name)
            reigns.append(reign)

        champion = title.current_champion
        return {
            "championship_id": title.id,
            "name": title.name,
            "current_champion": {
                **champion.to_json(),
                "holder": self.store.resolve_wrestler(champion.wrestler_id, champion.name),
            },
            "lineage": reigns,
        }

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def add_match(self, event_id: str, match: Optional[dict] = None) -> Result:
        event = self.store.events.get(event_id)
        if event is None:
            return _not_found("event")
        return self._commit(event.add_match(match))

    def start_event(self, event_id: str) -> Result:
        event = self.store.events.get(event_id)
        if event is None:
            return _not_found("event")
        return self._commit(event.start_event())

    def cancel_event(self, event_id: str) -> Result:
        event = self.store.events.get(event_id)
        if event is None:
            return _not_found("event")
        return self._commit(event.cancel_event())

    def finalize_event(
        self,
        event_id: str,
        attendance: int = 0,
        ratings: Optional[dict] = None,
        finances: Optional[dict] = None,
    ) -> Result:
        event = self.store.events.get(event_id)
        if event is None:
            return _not_found("event")
        if event.status in (EventStatus.COMPLETED, EventStatus.CANCELLED):
            return Err(
                ErrorKind.INVALID_TRANSITION,
                f"Cannot finalize an event that is {event.status.value}",
            )
        return self._commit(event.finalize_event(attendance, ratings, finances))

    def record_match_result(
        self,
        event_id: str,
        match_id: str,
        winner_id: Optional[str] = None,
        rating: float = 0.0,
    ) -> Result:
        """Record a booked result and carry it onto wrestlers and titles.

        ``winner_id`` of None is a draw. A title match won by someone other
        than the champion changes the title; won by the champion, it counts
        as a defense.
        """
        event = self.store.events.get(event_id)
        if event is None:
            return _not_found("event")
        if event.status == EventStatus.CANCELLED:
            return Err(ErrorKind.INVALID_TRANSITION, "Cannot record results for a cancelled event")
        match = event.get_match(match_id)
        if match is not None and match.actual_outcome is not None:
            return Err(ErrorKind.DUPLICATE, f"A result is already recorded for {match.title}")

        result = event.record_match_result(match_id, winner_id, rating)
        if not result.success:
            return result

        for participant in match.participants:
            wrestler = self.store.wrestlers.get(participant.id)
            if wrestler is None:
                continue
            if winner_id is None:
                outcome = "draw"
            else:
                outcome = "win" if participant.id == winner_id else "loss"
            wrestler.record_match(outcome, event.date, rating)

        data = dict(result.data)
        title = self.store.championships.get(match.championship) if match.championship else None
        winner = self.store.wrestlers.get(winner_id) if winner_id else None
        if title is not None and winner is not None:
            if title.current_champion.wrestler_id == winner.id:
                opponents = ", ".join(p.name for p in match.participants if p.id != winner.id)
                title_result = title.record_defense(event.date, opponents, event.name)
            else:
                title_result = self._crown(title, winner, event.date, event.name)
            data["title"] = title_result.to_dict()

        return self._commit(Ok(result.message, data))

    # ------------------------------------------------------------------
    # Roster and finances
    # ------------------------------------------------------------------

    def _promotion(self, promotion_id: Optional[str]) -> Optional[Promotion]:
        if promotion_id is None:
            return self.store.get_player_promotion()
        return self.store.promotions.get(promotion_id)

    def sign_wrestler(self, wrestler_id: str, promotion_id: Optional[str] = None) -> Result:
        promotion = self._promotion(promotion_id)
        if promotion is None:
            return _not_found("promotion")
        wrestler = self.store.wrestlers.get(wrestler_id)
        if wrestler is None:
            return _not_found("wrestler")
        return self._commit(promotion.add_wrestler(wrestler))

    def release_wrestler(self, wrestler_id: str, promotion_id: Optional[str] = None) -> Result:
        promotion = self._promotion(promotion_id)
        if promotion is None:
            return _not_found("promotion")
        wrestler = self.store.wrestlers.get(wrestler_id)
        if wrestler is None:
            return _not_found("wrestler")
        if wrestler.id not in promotion.roster_management.wrestler_ids:
            return Err(ErrorKind.NOT_FOUND, f"{wrestler.name} is not on the {promotion.name} roster")
        return self._commit(promotion.remove_wrestler(wrestler))

    def process_weekly_finances(self, promotion_id: Optional[str] = None) -> Result:
        promotion = self._promotion(promotion_id)
        if promotion is None:
            return _not_found("promotion")
        return self._commit(promotion.process_weekly_finances(self.store.game_state.current_date))

    def reconcile_rosters(self) -> Result:
        return self._commit(self.store.reconcile_rosters())
