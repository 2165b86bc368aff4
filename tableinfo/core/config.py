from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./tableinfo.db"
    DATABASE_ECHO: bool = False

    # Defaults used when a request does not pass its own values
    SAMPLE_ROWS_IN_TABLE_INFO: int = 3
    INCLUDE_TABLES: List[str] = []
    IGNORE_TABLES: List[str] = []

    # This tells Pydantic to read from the .env file
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Create a single instance of the settings to use everywhere
settings = Settings()
