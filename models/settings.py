"""Player-facing game settings, persisted separately from the save file."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from .base import Record

Difficulty = Literal["easy", "normal", "hard", "simulation"]
AutosaveFrequency = Literal["never", "weekly", "monthly", "yearly"]


class AutosaveSettings(Record):
    frequency: AutosaveFrequency = "weekly"
    enabled: bool = True


class SimulationSettings(Record):
    injuries: bool = True
    retirements: bool = True
    random_events: bool = True
    financial_crises: bool = True


class DisplaySettings(Record):
    theme: Literal["light", "dark"] = "light"
    show_tutorials: bool = True
    compact_mode: bool = False


class NotificationSettings(Record):
    contract_expiry: bool = True
    injury_updates: bool = True
    roster_morale: bool = True
    financial_alerts: bool = True


class AudioSettings(Record):
    enabled: bool = True
    volume: float = Field(default=0.5, ge=0.0, le=1.0)
    event_sounds: bool = True
    background_music: bool = True


_SECTIONS = {
    "autosave": AutosaveSettings,
    "simulation": SimulationSettings,
    "display": DisplaySettings,
    "notifications": NotificationSettings,
    "audio": AudioSettings,
}


class Settings(Record):
    difficulty: Difficulty = "normal"
    autosave: AutosaveSettings = Field(default_factory=AutosaveSettings)
    simulation: SimulationSettings = Field(default_factory=SimulationSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)

    def updated(self, patch: dict[str, Any]) -> "Settings":
        """Return new settings with ``patch`` merged field-wise per section.

        Raises ``ValueError`` (pydantic validation errors included) for
        unknown keys or invalid values; ``self`` is left untouched.
        """
        if not isinstance(patch, dict):
            raise ValueError("Settings patch must be an object")
        data = self.to_json()
        if patch.get("difficulty"):
            data["difficulty"] = patch["difficulty"]
        for section, model in _SECTIONS.items():
            if section in patch:
                if not isinstance(patch[section], dict):
                    raise ValueError(f"Settings section {section} must be an object")
                changes = {model.json_key(k): v for k, v in patch[section].items()}
                data[section] = {**data[section], **changes}
        return Settings.from_json(data)

    def reset_to_defaults(self) -> "Settings":
        """Return factory-default settings; ``self`` is left untouched."""
        return Settings()

    @property
    def autosave_frequency(self) -> str:
        return self.autosave.frequency if self.autosave.enabled else "never"
