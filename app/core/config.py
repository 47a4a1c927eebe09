from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

APP_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # Environment mode: dev or prod
    ENV: Literal["dev", "prod"] = "dev"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 4000
    CORS_ORIGINS: list[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    SLACK_WEBHOOK_URL: str | None = None

    # Google Places (live place reviews)
    GOOGLE_PLACES_API_KEY: str | None = None
    GOOGLE_PLACES_URL: str = "https://maps.googleapis.com/maps/api/place/details/json"
    GOOGLE_PLACE_IDS: list[str] = [
        "ChIJN1t_tDeuEmsRUsoyG83frY4",  # Sydney
        "ChIJE9on3F3HwoAR9AhGJW_fL-I",  # Los Angeles City Hall
        "ChIJIQBpAG2ahYAR_6128GcTUEo",  # San Francisco
        "ChIJOwg_06VPwokRYv534QaPC8g",  # New York City
        "ChIJzxcfI6qAa4cR1jaKJ_j0jhE",  # Denver
    ]

    # Hostaway (property reviews)
    HOSTAWAY_ACCOUNT_ID: str | None = None
    HOSTAWAY_API_KEY: str | None = None
    HOSTAWAY_API_URL: str = "https://api.hostaway.com/v1/reviews"
    HOSTAWAY_FIXTURE_PATH: Path = APP_ROOT / "data" / "hostaway_reviews.json"

    # Approvals
    APPROVAL_STORE: Literal["file", "memory"] = "file"
    APPROVALS_PATH: Path = Path("data") / "approvals.json"

    # Upstream calls are single-attempt; this bounds each one
    UPSTREAM_TIMEOUT_SECONDS: float = 8.0

    # Docs Configuration
    DOCS_ENABLED: bool | None = None  # Override docs setting (None = auto based on ENV)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",  # ignore unrelated keys in local .env
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENV == "prod"

    @property
    def is_development(self) -> bool:
        return self.ENV == "dev"

    @property
    def debug_enabled(self) -> bool:
        """Debug mode is only enabled in development."""
        return self.is_development

    @property
    def effective_log_level(self) -> str:
        """Return appropriate log level based on environment."""
        if self.is_production:
            # In production, minimum INFO level (ignore DEBUG)
            return self.LOG_LEVEL if self.LOG_LEVEL.upper() != "DEBUG" else "INFO"
        return self.LOG_LEVEL

    @property
    def docs_enabled(self) -> bool:
        """Swagger/ReDoc docs enabled based on environment or override."""
        if self.DOCS_ENABLED is not None:
            return self.DOCS_ENABLED
        return self.is_development

    @property
    def hostaway_configured(self) -> bool:
        """Live Hostaway mode needs both the account id and the api key."""
        return bool(self.HOSTAWAY_ACCOUNT_ID and self.HOSTAWAY_API_KEY)


settings = Settings()
