from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Sports Centers Booking API"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = ["*"]

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "sportcenters"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: str = ""

    # Booking rules
    OPENING_HOUR: int = 9
    CLOSING_HOUR: int = 21
    DEFAULT_CENTER_CAPACITY: int = 1
    ALLOW_PAST_CANCELLATION: bool = False
    # Serialise admission per slot with a transaction-scoped lock (PostgreSQL only)
    ATOMIC_SLOT_ADMISSION: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    def assemble_db_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

settings = Settings()
settings.DATABASE_URL = settings.assemble_db_url()
