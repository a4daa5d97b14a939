"""Shared pytest fixtures for the Ringside test suite."""

import sys
from datetime import date
from pathlib import Path

import pytest

ROOT = Path(__file__).parent
sys.path.insert(0, str(ROOT))

from api.services import GameService
from models.store import GameStore


@pytest.fixture
def store(tmp_path):
    """A new game on a fixed date, saved under a temporary data dir."""
    store = GameStore(tmp_path / "game-data")
    store.create_new_game()
    store.game_state.current_date = date(2024, 1, 1)
    return store


@pytest.fixture
def service(store):
    return GameService(store)
