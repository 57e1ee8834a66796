"""
farmspawn Configuration

Loads configuration from environment variables with sensible defaults.

Only the convenience constructors read this class
(``SpawnContext.from_config()`` and ``SettingsLoader()``). Engine functions
never consult it directly; everything they need arrives via SpawnContext.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _optional_int(value: str | None) -> int | None:
    if value is None or value.strip() == "":
        return None
    return int(value)


class Config:
    """Application configuration loaded from environment variables."""

    # Logging
    LOG_LEVEL: str = os.getenv("FARMSPAWN_LOG_LEVEL", "INFO")
    NO_COLOR: bool = bool(os.getenv("FARMSPAWN_NO_COLOR"))

    # Seed for the default random source; unset means a fresh, unseeded source per context
    SEED: int | None = _optional_int(os.getenv("FARMSPAWN_SEED"))

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    SETTINGS_DIR: Path = Path(
        os.getenv("FARMSPAWN_SETTINGS_DIR", str(PROJECT_ROOT / "examples" / "settings"))
    )

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are unusable."""
        from .logging_utils import LogLevel

        LogLevel.parse(cls.LOG_LEVEL)

        if not cls.SETTINGS_DIR.exists():
            raise ValueError(
                f"FARMSPAWN_SETTINGS_DIR points to a missing directory: {cls.SETTINGS_DIR}"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "farmspawn Configuration:",
            f"  Log Level: {cls.LOG_LEVEL}",
            f"  Colors: {'off' if cls.NO_COLOR else 'on'}",
            f"  Seed: {cls.SEED if cls.SEED is not None else '(random)'}",
            f"  Settings Dir: {cls.SETTINGS_DIR}",
        ]
        return "\n".join(lines)
