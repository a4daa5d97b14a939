"""Settings defaults and section-wise merging."""

import pytest

from models.settings import Settings


def test_defaults():
    settings = Settings()
    data = settings.to_json()
    assert data["difficulty"] == "normal"
    assert data["autosave"] == {"frequency": "weekly", "enabled": True}
    assert data["audio"]["volume"] == 0.5
    assert data["display"]["showTutorials"] is True


def test_update_merges_within_sections():
    settings = Settings().updated({
        "difficulty": "hard",
        "autosave": {"frequency": "monthly"},
        "display": {"theme": "dark", "compact_mode": True},
    })
    assert settings.difficulty == "hard"
    assert settings.autosave.frequency == "monthly"
    assert settings.autosave.enabled is True
    assert settings.display.theme == "dark"
    assert settings.display.compact_mode is True
    assert settings.display.show_tutorials is True


def test_update_leaves_original_untouched():
    original = Settings()
    original.updated({"audio": {"volume": 0.9}})
    assert original.audio.volume == 0.5


@pytest.mark.parametrize("patch", [
    {"difficulty": "impossible"},
    {"audio": {"volume": 2}},
    {"autosave": {"interval": 5}},
    {"autosave": True},
    {"audio": False},
    ["difficulty", "hard"],
])
def test_invalid_patches_raise(patch):
    with pytest.raises(ValueError):
        Settings().updated(patch)


def test_disabled_autosave_means_never():
    settings = Settings().updated({"autosave": {"enabled": False, "frequency": "weekly"}})
    assert settings.autosave_frequency == "never"


def test_round_trip_is_lossless():
    data = Settings().updated({"notifications": {"injuryUpdates": False}}).to_json()
    assert Settings.from_json(data).to_json() == data


def test_reset_to_defaults():
    changed = Settings().updated({"difficulty": "hard", "display": {"theme": "dark"}})
    reset = changed.reset_to_defaults()

    assert reset.to_json() == Settings().to_json()
    assert changed.difficulty == "hard"
    assert changed.display.theme == "dark"
