"""Configuration settings for the newsdesk feed service."""

from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables (NEWSDESK_*)."""

    # Feed cache
    feed_cache_ttl_seconds: int = 300  # 5 minutes

    # Fetching
    feed_fetch_timeout: float = 10.0
    max_items_per_source: int = 10
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )

    # Normalisation
    full_description_max: int = 800
    description_max: int = 150

    # Ranking
    hero_candidate_limit: int = 30
    default_source_priority: float = 5.0

    # API
    max_feed_limit: int = 300
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Paths
    config_dir: Path = Path(__file__).parent
    feeds_file: Path = config_dir / "feeds.json"
    hero_signals_file: Path = config_dir / "hero_signals.yaml"

    class Config:
        env_file = ".env"
        env_prefix = "NEWSDESK_"
        extra = "ignore"


# Global settings instance
settings = Settings()
