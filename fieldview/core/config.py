# File: /fieldview/core/config.py | Version: 1.0 | Title: Central Engine Settings (Pydantic v2)
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # set True in .env for one JSON object per line

    # --- Filtering ---
    # Date "equals" matches when the two timestamps are closer than this
    DATE_EQUALS_TOLERANCE_MS: int = 24 * 60 * 60 * 1000

    # v2-style config
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
