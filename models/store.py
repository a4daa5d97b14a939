"""In-memory game store with whole-file JSON persistence.

The store owns the entity collections, the scalar game clock and the
player's settings. It is the only component that reads or writes the save
and settings documents. Construct one per session and pass it to whoever
needs it.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar, Union

from pydantic import ValidationError

from simulation.seed import build_default_wrestlers

from .base import Entity, today
from .championship import Championship
from .event import Event
from .game_state import GameState
from .promotion import Promotion
from .results import Err, ErrorKind, Ok, Result
from .settings import Settings
from .storage import SAVE_FILE, SETTINGS_FILE, read_document, write_document
from .wrestler import Wrestler

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Entity)


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------

class EntityCollection(Generic[T]):
    """Ordered collection of one entity type, addressed by id."""

    def __init__(self, model: type[T], can_delete: Optional[Callable[[str], bool]] = None):
        self.model = model
        self._items: list[T] = []
        self._can_delete = can_delete

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def get_all(self) -> list[T]:
        return list(self._items)

    def get(self, entity_id: str) -> Optional[T]:
        return next((e for e in self._items if e.id == entity_id), None)

    def _index(self, entity_id: str) -> int:
        return next((i for i, e in enumerate(self._items) if e.id == entity_id), -1)

    def put(self, entity: T) -> T:
        if self._index(entity.id) != -1:
            raise ValueError(f"Duplicate {self.model.__name__} id: {entity.id}")
        self._items.append(entity)
        return entity

    def add(self, data: Optional[dict[str, Any]] = None) -> T:
        """Construct an entity from partial data and append it."""
        return self.put(self.model.from_json(data or {}))

    def update(self, entity_id: str, patch: dict[str, Any]) -> Optional[T]:
        """Replace the entity with a shallow merge of ``patch`` over it.

        Returns None when the id is unknown. Raises ValueError for unknown
        keys or invalid values, leaving the stored entity in place.
        """
        index = self._index(entity_id)
        if index == -1:
            return None
        updated = self._items[index].merged(patch)
        self._items[index] = updated
        return updated

    def delete(self, entity_id: str) -> bool:
        if self._can_delete is not None and not self._can_delete(entity_id):
            return False
        index = self._index(entity_id)
        if index == -1:
            return False
        del self._items[index]
        return True

    def replace_all(self, items: list[T]) -> None:
        self._items = list(items)

    def to_json(self) -> list[dict[str, Any]]:
        return [e.to_json() for e in self._items]


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class GameStore:
    """Authoritative game state for one session."""

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)
        self.save_path = self.data_dir / SAVE_FILE
        self.settings_path = self.data_dir / SETTINGS_FILE

        self.wrestlers: EntityCollection[Wrestler] = EntityCollection(Wrestler)
        self.championships: EntityCollection[Championship] = EntityCollection(Championship)
        self.events: EntityCollection[Event] = EntityCollection(Event)
        self.promotions: EntityCollection[Promotion] = EntityCollection(
            Promotion, can_delete=self._promotion_deletable
        )
        self.game_state = GameState()
        self.settings = Settings()

    def _promotion_deletable(self, promotion_id: str) -> bool:
        return promotion_id != self.game_state.player_promotion_id

    # ------------------------------------------------------------------
    # Game lifecycle
    # ------------------------------------------------------------------

    def init(self, load_existing: bool = True) -> Result:
        """Load the existing save if there is one, otherwise start fresh."""
        if load_existing and self.save_path.exists():
            return self.load_game()
        return self.create_new_game()

    def create_new_game(self) -> Result:
        self.wrestlers.replace_all([])
        self.championships.replace_all([])
        self.events.replace_all([])
        self.promotions.replace_all([])
        self.game_state = GameState(current_date=today(), difficulty=self.settings.difficulty)

        promotion = self.promotions.add({
            "name": "Your Wrestling Promotion",
            "shortName": "YWP",
            "isPlayerOwned": True,
            "details": {"owner": "Player"},
            "founded": self.game_state.current_date,
        })
        self.game_state.player_promotion_id = promotion.id

        for wrestler in build_default_wrestlers(signed_on=self.game_state.current_date):
            self.wrestlers.put(wrestler)
            promotion.add_wrestler(wrestler)

        logger.info("New game created with %d wrestlers", len(self.wrestlers))

        saved = self.save_game()
        if not saved.success:
            return saved
        return Ok("New game created", {"player_promotion_id": promotion.id})

    def _document(self, saved_at: datetime) -> dict[str, Any]:
        state = self.game_state.model_copy(update={"last_saved": saved_at})
        return {
            "gameState": state.to_json(),
            "wrestlers": self.wrestlers.to_json(),
            "championships": self.championships.to_json(),
            "events": self.events.to_json(),
            "promotions": self.promotions.to_json(),
        }

    def save_game(self) -> Result:
        saved_at = datetime.now(timezone.utc)
        document = self._document(saved_at)
        try:
            write_document(self.save_path, document)
        except OSError as exc:
            logger.error("Error saving game to %s: %s", self.save_path, exc)
            return Err(ErrorKind.IO_ERROR, f"Error saving game: {exc}")

        self.game_state.last_saved = saved_at
        logger.info("Game saved to %s", self.save_path)
        return Ok("Game saved successfully", {"timestamp": document["gameState"]["lastSaved"]})

    def load_game(self) -> Result:
        """Replace in-memory state with the save file, all or nothing."""
        try:
            document = read_document(self.save_path)
            game_state = GameState.from_json(document["gameState"])
            wrestlers = [Wrestler.from_json(d) for d in document["wrestlers"]]
            championships = [Championship.from_json(d) for d in document["championships"]]
            events = [Event.from_json(d) for d in document["events"]]
            promotions = [Promotion.from_json(d) for d in document["promotions"]]
        except FileNotFoundError:
            return Err(ErrorKind.IO_ERROR, "No saved game found")
        except OSError as exc:
            logger.error("Error reading save file %s: %s", self.save_path, exc)
            return Err(ErrorKind.IO_ERROR, f"Error loading game: {exc}")
        except ValidationError as exc:
            logger.error("Save file %s failed validation: %s", self.save_path, exc)
            return Err(ErrorKind.INVALID_DATA, f"Error loading game: {exc.error_count()} invalid field(s)")
        except (ValueError, KeyError, TypeError) as exc:
            logger.error("Save file %s could not be parsed: %s", self.save_path, exc)
            return Err(ErrorKind.PARSE_ERROR, f"Error loading game: {exc}")

        self.game_state = game_state
        self.wrestlers.replace_all(wrestlers)
        self.championships.replace_all(championships)
        self.events.replace_all(events)
        self.promotions.replace_all(promotions)

        logger.info("Game loaded from %s (week %d)", self.save_path, game_state.game_week)
        timestamp = game_state.last_saved.isoformat() if game_state.last_saved else None
        return Ok("Game loaded successfully", {"timestamp": timestamp})

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def load_settings(self) -> Result:
        if not self.settings_path.exists():
            self.settings = Settings()
            saved = self.save_settings()
            if not saved.success:
                return saved
            return Ok("Default settings created", {"settings": self.settings.to_json()})

        try:
            settings = Settings.from_json(read_document(self.settings_path))
        except OSError as exc:
            logger.error("Error reading settings %s: %s", self.settings_path, exc)
            return Err(ErrorKind.IO_ERROR, f"Error loading settings: {exc}")
        except ValidationError as exc:
            logger.error("Settings %s failed validation: %s", self.settings_path, exc)
            return Err(ErrorKind.INVALID_DATA, f"Error loading settings: {exc.error_count()} invalid field(s)")
        except ValueError as exc:
            logger.error("Settings %s could not be parsed: %s", self.settings_path, exc)
            return Err(ErrorKind.PARSE_ERROR, f"Error loading settings: {exc}")

        self.settings = settings
        return Ok("Settings loaded", {"settings": settings.to_json()})

    def _write_settings(self, settings: Settings) -> Result:
        try:
            write_document(self.settings_path, settings.to_json())
        except OSError as exc:
            logger.error("Error saving settings to %s: %s", self.settings_path, exc)
            return Err(ErrorKind.IO_ERROR, f"Error saving settings: {exc}")
        self.settings = settings
        return Ok("Settings saved", {"settings": settings.to_json()})

    def save_settings(self) -> Result:
        return self._write_settings(self.settings)

    def update_settings(self, patch: dict[str, Any]) -> Result:
        try:
            settings = self.settings.updated(patch)
        except ValueError as exc:
            return Err(ErrorKind.INVALID_DATA, f"Invalid settings: {exc}")
        return self._write_settings(settings)

    def reset_settings(self) -> Result:
        return self._write_settings(self.settings.reset_to_defaults())

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_player_promotion(self) -> Optional[Promotion]:
        return self.promotions.get(self.game_state.player_promotion_id)

    def resolve_wrestler(self, wrestler_id: Optional[str], snapshot_name: str = "") -> dict[str, Any]:
        """Look up a weak wrestler reference, tolerating dangling ids."""
        if wrestler_id is None:
            return {"id": None, "name": snapshot_name or "Vacant", "status": "vacant"}
        wrestler = self.wrestlers.get(wrestler_id)
        if wrestler is None:
            return {"id": wrestler_id, "name": snapshot_name or "Unknown", "status": "retired"}
        return {"id": wrestler.id, "name": wrestler.name, "status": "active"}

    def reconcile_rosters(self) -> Result:
        reports = {}
        wrestlers = self.wrestlers.get_all()
        for promotion in self.promotions:
            reports[promotion.id] = promotion.reconcile_roster(wrestlers).data
        return Ok("Rosters reconciled", {"promotions": reports})
