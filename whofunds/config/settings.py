"""
Application settings using Pydantic Settings.

Environment variables are loaded from .env file.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Create a .env file in the project root with these values.
    Every key has a default, so the service starts without a .env file;
    a missing FEC_API_KEY switches the donor lookup to mock data.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # ========================================================================
    # External APIs
    # ========================================================================

    # OpenFEC API (get key at: https://api.data.gov/signup/)
    FEC_API_KEY: Optional[str] = None
    FEC_BASE_URL: str = "https://api.open.fec.gov/v1"

    # Per-request timeout in seconds
    HTTP_TIMEOUT: float = 30.0

    # ========================================================================
    # Pagination
    # ========================================================================
    PAGE_SIZE: int = 100  # OpenFEC maximum
    MAX_PAGES: int = 20   # Hard stop for runaway pagination

    # ========================================================================
    # Donor pipeline
    # ========================================================================
    SMALL_DONATION_THRESHOLD: float = 200.0  # FEC itemization threshold
    TOP_DONORS_LIMIT: int = 20

    # True: a candidate without committees is a 404.
    # False: fall back to querying contributions by candidate_id.
    REQUIRE_COMMITTEES: bool = False

    # Serve bundled example donors when FEC_API_KEY is not set
    MOCK_FALLBACK_ENABLED: bool = True

    # "exact" or "casefold"
    DONOR_NAME_MATCHING: str = "exact"

    # ========================================================================
    # Roster cache
    # ========================================================================
    ROSTER_CACHE_TTL_HOURS: float = 24.0

    # ========================================================================
    # API Configuration
    # ========================================================================
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_RELOAD: bool = True  # Set to False in production

    # CORS Origins (comma-separated for multiple)
    CORS_ORIGINS: str = "http://localhost:3000"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def has_fec_credentials(self) -> bool:
        return bool(self.FEC_API_KEY and self.FEC_API_KEY.strip())

    # ========================================================================
    # Logging
    # ========================================================================
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # ========================================================================
    # Application
    # ========================================================================
    APP_NAME: str = "Who Funds Them"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Environment (development, staging, production)
    ENVIRONMENT: str = "development"


def get_settings() -> Settings:
    """Settings used when the app factory is not given any."""
    return settings


# Singleton instance
settings = Settings()
