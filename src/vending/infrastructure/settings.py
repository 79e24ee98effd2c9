from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VENDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    DATA_DIR: Path = _PROJECT_ROOT / "data"
    CATALOG_FILE: str = "catalog.json"

    # Coins in cents; must form a canonical coin system
    DENOMINATIONS: list[int] = [5, 10, 20, 50, 100, 200]

    # Capacity given to new products when the admin does not set one
    DEFAULT_MAX_STOCK: int = 15

    LOG_LEVEL: str = "WARNING"

    @property
    def catalog_path(self) -> Path:
        return self.DATA_DIR / self.CATALOG_FILE


def load_settings() -> Settings:
    """Read settings from the environment (and ``.env``) on every call."""
    return Settings()
