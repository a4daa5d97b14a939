"""Environment-level configuration for Ringside Wrestling Manager.

Deployment concerns (where the save lives, what the server binds to, how
loud the logs are) are kept here, apart from the player's game settings.
"""

import os
from dataclasses import dataclass

_TRUE = {"1", "true", "yes", "on"}


def _flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE


@dataclass
class EnvironmentSettings:
    """Environment / deployment settings."""

    data_dir: str = "./game-data"
    host: str = "127.0.0.1"
    port: int = 5000
    log_level: str = "INFO"
    persist_on_write: bool = True
    sample_data: bool = False

    @classmethod
    def from_env(cls) -> "EnvironmentSettings":
        """Build settings from RINGSIDE_* environment variables."""
        return cls(
            data_dir=os.getenv("RINGSIDE_DATA_DIR", cls.data_dir),
            host=os.getenv("RINGSIDE_HOST", cls.host),
            port=int(os.getenv("RINGSIDE_PORT", cls.port)),
            log_level=os.getenv("RINGSIDE_LOG_LEVEL", cls.log_level).upper(),
            persist_on_write=_flag("RINGSIDE_PERSIST_ON_WRITE", cls.persist_on_write),
            sample_data=_flag("RINGSIDE_SAMPLE_DATA", cls.sample_data),
        )


def get_env_settings() -> EnvironmentSettings:
    """Convenience accessor for environment settings."""
    return EnvironmentSettings.from_env()
