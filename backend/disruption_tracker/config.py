from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "AI Disruption Tracker API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./data/tracker.db"

    # Shared secrets (unset = open, for local development)
    ADMIN_SECRET: Optional[str] = None
    CRON_SECRET: Optional[str] = None

    # Upstream fetching
    REQUEST_TIMEOUT: float = 8.0  # seconds, per upstream call
    USER_AGENT: str = "AI-Disruption-Tracker/1.0"
    SOCIAL_REQUEST_DELAY: float = 0.25  # seconds between subreddit calls
    NEWS_REQUEST_DELAY: float = 0.15  # seconds between feed calls
    HN_MAX_STORIES: int = 200
    HN_BATCH_SIZE: int = 20
    HN_BATCH_DELAY: float = 0.1

    # X / Twitter recent search (optional)
    X_BEARER_TOKEN: Optional[str] = None
    X_SEARCH_QUERY: str = "(OpenAI OR Anthropic OR LLM OR \"AI startup\") -is:retweet lang:en"

    # Pipeline
    FEED_TTL_HOURS: int = 24
    INGESTION_WINDOW_HOURS: int = 24
    SOCIAL_MAX_ITEMS: int = 100
    NEWS_MAX_ITEMS: int = 80
    FUNDING_MIN_AMOUNT_M: int = 5
    VOCABULARY_FILE: Optional[str] = None

    # Scheduler
    SCHEDULER_ENABLED: bool = True
    REFRESH_INTERVAL_MINUTES: int = 60
    FUNDING_REFRESH_HOURS: int = 12

    # CORS (for local development)
    CORS_ORIGINS: list = ["http://localhost:3000", "http://localhost:5173"]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
