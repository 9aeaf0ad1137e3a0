"""
Configuration management using Pydantic Settings.
Loads configuration from environment variables and .env file.
"""
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Spell-check Configuration
    SPELLCHECK_ENGINE: str = "naver"  # Options: naver, daum
    SPELLCHECK_TEXT_LIMIT: int = 1800  # Input is truncated to this many characters
    SPELLCHECK_TIMEOUT_SECONDS: float = 10.0
    SPELLCHECK_USER_AGENT: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
        "(KHTML, like Gecko) Version/17.0 Safari/605.1.15"
    )
    SPELLCHECK_PROGRESS_INTERVAL: float = 0.1  # Seconds between progress ticks
    SPELLCHECK_PROGRESS_CEILING: float = 0.9  # Progress never passes this while loading

    # Naver speller proxy
    NAVER_PASSPORT_URL: str = "https://search.naver.com/search.naver"
    NAVER_SPELLER_URL: str = "https://m.search.naver.com/p/csearch/ocontent/util/SpellerProxy"
    NAVER_MAX_CHUNK_LENGTH: int = 500  # Provider rejects longer queries

    # Daum grammar checker
    DAUM_SPELLER_URL: str = "https://dic.daum.net/grammar_checker.do"
    DAUM_MAX_CHUNK_LENGTH: int = 1000

    # Analytics Configuration
    ANALYTICS_APPLICATION: str = "matchumbeop"  # Comma-separated application kinds to forward
    ANALYTICS_PROVIDER: str = "logging"  # Options: logging, firebase
    FIREBASE_APP_ID: Optional[str] = None  # Required when using Firebase provider
    FIREBASE_API_SECRET: Optional[str] = None  # Measurement Protocol API secret
    FIREBASE_APP_INSTANCE_ID: Optional[str] = None  # Generated per install when unset
    FIREBASE_COLLECT_URL: str = "https://www.google-analytics.com/mp/collect"
    ANALYTICS_TIMEOUT_SECONDS: float = 5.0
    ANALYTICS_SAMPLE_RATE: float = 1.0  # Fraction of events delivered (0.0-1.0)
    ANALYTICS_RATE_LIMIT_REQUESTS: int = 10  # Events per period
    ANALYTICS_RATE_LIMIT_PERIOD: int = 60  # Period in seconds

    # CORS Configuration
    CORS_ORIGINS: str = "*"

    # Development/Debug
    DEBUG: bool = False
    RELOAD: bool = False

    # Logging Configuration (Optional - per-module log levels)
    APP_LOG_LEVEL: Optional[str] = None
    UVICORN_LOG_LEVEL: Optional[str] = None
    HTTPX_LOG_LEVEL: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def analytics_applications_list(self) -> List[str]:
        """Parse analytics application kinds from comma-separated string."""
        return [
            application.strip().lower()
            for application in self.ANALYTICS_APPLICATION.split(",")
            if application.strip()
        ]


# Engine descriptions
# Used by /api/v1/options endpoint to inform the client of available engines
SPELLCHECK_ENGINE_OPTIONS = {
    "naver": {"name": "네이버 맞춤법 검사기"},
    "daum": {"name": "다음 맞춤법 검사기"},
}


# Global settings instance
settings = Settings()
