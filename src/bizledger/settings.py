"""Runtime settings sourced from the environment."""

from dataclasses import dataclass
import os
from pathlib import Path

DEFAULT_CURRENCY = "USD"
DEFAULT_LOG_LEVEL = "WARNING"


def default_database_path() -> Path:
    """Default SQLite location: ~/.bizledger/bizledger.db."""
    return Path.home() / ".bizledger" / "bizledger.db"


@dataclass(frozen=True)
class Settings:
    """Application settings.

    Attributes:
        database_path: SQLite database file.
        currency: Reporting currency; aggregation rejects other currencies.
        log_level: Logging level name.
    """

    database_path: Path
    currency: str = DEFAULT_CURRENCY
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from BIZLEDGER_* environment variables."""
        raw_path = os.getenv("BIZLEDGER_DB_PATH")
        database_path = (
            Path(raw_path).expanduser() if raw_path else default_database_path()
        )
        currency = os.getenv("BIZLEDGER_CURRENCY", DEFAULT_CURRENCY).strip().upper()
        log_level = os.getenv("BIZLEDGER_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        return cls(
            database_path=database_path,
            currency=currency or DEFAULT_CURRENCY,
            log_level=log_level or DEFAULT_LOG_LEVEL,
        )
