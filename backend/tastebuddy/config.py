"""Application configuration via Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # App
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # Console renderer when False

    # HTTP transport
    HTTP_TIMEOUT_SECONDS: float = 10.0
    HTTP_USER_AGENT: str = "TasteBuddy/1.0 (+https://tastebuddy.app)"

    # EDEKA API
    EDEKA_MARKETS_URL: str = "https://www.edeka.de/api/marketsearch/markets"
    EDEKA_OFFERS_URL: str = "https://www.edeka.de/eh/service/eh/offers"


settings = Settings()
