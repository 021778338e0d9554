# Path: anki_paste/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

class Settings(BaseSettings):
    PROJECT_NAME: str = "Anki Paste"
    ANKI_CONNECT_URL: str = "http://127.0.0.1:8765"
    ANKI_CONNECT_VERSION: int = 6
    REQUEST_TIMEOUT: float = 30.0

    # Paths
    LOG_DIR: Path = Path.home() / ".anki-paste" / "logs"
    PREFERENCES_FILENAME: str = "anki-paste.toml"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

settings = Settings()
