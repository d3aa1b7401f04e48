"""Application configuration via environment variables."""

import os

from pydantic_settings import BaseSettings
from sqlalchemy import URL


class Settings(BaseSettings):
    # Database
    database_url: str = ""
    pg_user: str = "postgres"
    pg_password: str = ""
    pg_host: str = "localhost"
    pg_port: int = 5432
    pg_database: str = "halloween_events"

    # Google Geocoding
    google_api_key: str = ""
    geocoding_timeout_seconds: float = 10.0

    # Google Sheets mirror
    spreadsheet_id: str = ""
    sheet_range: str = "Melbourne!A2:D2"
    google_credentials_file: str = "credentials.json"
    sheets_timeout_seconds: float = 15.0

    # Server
    port: int = 5002
    web_concurrency: int = os.cpu_count() or 1
    cors_origins: list[str] = ["*"]

    # App
    log_level: str = "INFO"
    environment: str = "development"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def sqlalchemy_url(self) -> str:
        """Async SQLAlchemy URL, built from the PG_* parts unless DATABASE_URL is set."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+asyncpg",
            username=self.pg_user,
            password=self.pg_password or None,
            host=self.pg_host,
            port=self.pg_port,
            database=self.pg_database,
        ).render_as_string(hide_password=False)


settings = Settings()
