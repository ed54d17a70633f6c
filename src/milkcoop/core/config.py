from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# .env file sits in the project root (parent of src/)
# Only use if it exists (CI uses environment variables directly)
# Path: core/config.py -> milkcoop -> src -> project root -> .env
_ENV_FILE = Path(__file__).parent.parent.parent.parent / ".env"
_ENV_FILE = _ENV_FILE if _ENV_FILE.exists() else None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Cooperative data service
    milk_api_url: str = "http://localhost:8081"
    milk_api_key: str | None = None
    request_timeout: float = 30.0

    # Fixed price used to value spoilt milk at entry time (per liter)
    spoilage_unit_price: float = 100.0
    currency: str = "KES"

    # Milk withholding periods after treatment
    vaccination_waiting_hours: int = 48
    antibiotic_waiting_hours: int = 72

    # Cooperative timezone (IANA format, e.g., "Africa/Nairobi")
    # Used by the CLI to decide what "today" is; local time if unset
    tz: str | None = None


settings = Settings()
