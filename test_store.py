"""GameStore: new game, collections, persistence and failure paths."""

import json
from datetime import date

import pytest

from models.store import GameStore
from simulation.seed import seed_sample_data


# ---------------------------------------------------------------------------
# New game
# ---------------------------------------------------------------------------

def test_new_game_creates_player_promotion_with_default_roster(store):
    promo = store.get_player_promotion()
    assert promo is not None
    assert promo.is_player_owned
    assert promo.short_name == "YWP"
    assert promo.details.owner == "Player"

    assert len(store.wrestlers) == 3
    assert promo.roster_management.current_size == 3
    assert promo.roster_management.current_salaries == 5000 + 3500 + 4000
    assert sorted(promo.roster_management.wrestler_ids) == sorted(w.id for w in store.wrestlers)


def test_new_game_is_saved(store):
    document = json.loads(store.save_path.read_text(encoding="utf-8"))
    assert set(document) == {"gameState", "wrestlers", "championships", "events", "promotions"}
    assert document["gameState"]["gameWeek"] == 1
    assert document["gameState"]["lastSaved"]


def test_init_loads_an_existing_save(store):
    store.game_state.game_week = 7
    store.save_game()

    other = GameStore(store.data_dir)
    assert other.init().success
    assert other.game_state.game_week == 7
    assert [w.id for w in other.wrestlers] == [w.id for w in store.wrestlers]


def test_init_without_save_starts_new_game(tmp_path):
    fresh = GameStore(tmp_path)
    assert fresh.init().success
    assert fresh.get_player_promotion() is not None
    assert fresh.save_path.exists()


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------

def test_add_get_update_delete(store):
    added = store.events.add({"name": "Spring Brawl", "date": "2024-04-01"})
    assert store.events.get(added.id) is added

    updated = store.events.update(added.id, {"name": "Spring Brawl II", "id": "hijack"})
    assert updated.id == added.id
    assert updated.name == "Spring Brawl II"
    assert updated.date == date(2024, 4, 1)
    assert store.events.get(added.id).name == "Spring Brawl II"

    assert store.events.delete(added.id)
    assert store.events.get(added.id) is None
    assert not store.events.delete(added.id)


def test_update_replaces_nested_records_whole(store):
    w = store.wrestlers.add({"attributes": {"strength": 90, "speed": 80}})
    updated = store.wrestlers.update(w.id, {"attributes": {"strength": 10}})
    assert updated.attributes.strength == 10
    assert updated.attributes.speed == 50


def test_update_accepts_attribute_names(store):
    w = store.wrestlers.add({})
    assert store.wrestlers.update(w.id, {"home_town": "Austin, TX"}).home_town == "Austin, TX"


def test_update_with_unknown_key_raises_and_keeps_entity(store):
    w = store.wrestlers.add({"name": "Keeper"})
    with pytest.raises(ValueError):
        store.wrestlers.update(w.id, {"finisherName": "Nope"})
    assert store.wrestlers.get(w.id).name == "Keeper"


def test_update_with_non_object_patch_raises(store):
    w = store.wrestlers.add({"name": "Keeper"})
    with pytest.raises(ValueError):
        store.wrestlers.update(w.id, ["x"])
    assert store.wrestlers.get(w.id).name == "Keeper"


def test_update_unknown_id(store):
    assert store.wrestlers.update("missing", {"name": "x"}) is None


def test_player_promotion_cannot_be_deleted(store):
    player_id = store.game_state.player_promotion_id
    assert not store.promotions.delete(player_id)
    assert store.get_player_promotion() is not None

    rival = store.promotions.add({"name": "Rival", "isPlayerOwned": False})
    assert store.promotions.delete(rival.id)


def test_deleting_a_champion_leaves_a_dangling_reference(store):
    champ = store.wrestlers.get_all()[0]
    title = store.championships.add({"name": "World"})
    title.change_champion(champ.id, champ.name, "2024-01-01")

    store.wrestlers.delete(champ.id)

    assert title.current_champion.wrestler_id == champ.id
    resolved = store.resolve_wrestler(champ.id, champ.name)
    assert resolved["status"] == "retired"
    assert resolved["name"] == champ.name
    assert store.resolve_wrestler(None)["status"] == "vacant"


def test_reconcile_rosters_after_deletion(store):
    victim = store.wrestlers.get_all()[0]
    store.wrestlers.delete(victim.id)

    result = store.reconcile_rosters()
    report = result.data["promotions"][store.game_state.player_promotion_id]
    assert report["dropped_ids"] == [victim.id]
    assert store.get_player_promotion().roster_management.current_size == 2


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

def test_save_then_load_round_trips(store):
    seed_sample_data(store)
    assert store.save_game().success
    before = json.loads(store.save_path.read_text(encoding="utf-8"))

    other = GameStore(store.data_dir)
    assert other.load_game().success
    assert other.save_game().success
    after = json.loads(other.save_path.read_text(encoding="utf-8"))

    for key in ("wrestlers", "championships", "events", "promotions"):
        assert after[key] == before[key]
    assert after["gameState"]["currentDate"] == before["gameState"]["currentDate"]


def test_load_missing_file(tmp_path):
    fresh = GameStore(tmp_path)
    result = fresh.load_game()
    assert result.to_dict()["error"] == "io_error"


def test_load_malformed_json_keeps_state(store):
    week = store.game_state.game_week
    wrestlers = [w.id for w in store.wrestlers]
    store.save_path.write_text("{not json", encoding="utf-8")

    result = store.load_game()

    assert result.to_dict()["error"] == "parse_error"
    assert store.game_state.game_week == week
    assert [w.id for w in store.wrestlers] == wrestlers


def test_load_missing_section_is_a_parse_error(store):
    store.save_path.write_text(json.dumps({"gameState": {}}), encoding="utf-8")
    assert store.load_game().to_dict()["error"] == "parse_error"


def test_load_invalid_entity_keeps_state(store):
    document = json.loads(store.save_path.read_text(encoding="utf-8"))
    document["wrestlers"][0]["age"] = "very old"
    store.save_path.write_text(json.dumps(document), encoding="utf-8")
    names = [w.name for w in store.wrestlers]

    result = store.load_game()

    assert result.to_dict()["error"] == "invalid_data"
    assert [w.name for w in store.wrestlers] == names


def test_save_failure_is_reported(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    broken = GameStore(blocker)

    result = broken.save_game()

    assert result.to_dict()["error"] == "io_error"
    assert broken.game_state.last_saved is None


def test_save_is_pretty_printed_utf8(store):
    store.wrestlers.add({"name": "Lucha Niño"})
    store.save_game()
    text = store.save_path.read_text(encoding="utf-8")
    assert "Lucha Niño" in text
    assert text.startswith("{\n  ")


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

def test_missing_settings_file_is_created_with_defaults(tmp_path):
    fresh = GameStore(tmp_path)
    result = fresh.load_settings()
    assert result.success
    assert json.loads(fresh.settings_path.read_text(encoding="utf-8"))["difficulty"] == "normal"


def test_update_settings_persists(store):
    assert store.update_settings({"difficulty": "hard"}).success

    other = GameStore(store.data_dir)
    other.load_settings()
    assert other.settings.difficulty == "hard"


def test_invalid_settings_update_is_rejected(store):
    result = store.update_settings({"audio": {"volume": 5}})
    assert result.to_dict()["error"] == "invalid_data"
    assert store.settings.audio.volume == 0.5


def test_reset_settings(store):
    store.update_settings({"difficulty": "hard"})
    store.reset_settings()
    assert store.settings.difficulty == "normal"


def test_new_game_takes_difficulty_from_settings(store):
    store.update_settings({"difficulty": "simulation"})
    store.create_new_game()
    assert store.game_state.difficulty == "simulation"
