from pathlib import Path
from typing import List, Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "Link Preview API"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = True
    CORS_ORIGINS: List[str] = ["*"]

    # ── Logging ─────────────────────────────────
    LOG_LEVEL: Optional[str] = None  # defaults to DEBUG when DEBUG is on
    LOG_DIR: str = "logs"
    LOG_FILE: str = "link_preview.log"
    LOG_MAX_BYTES: int = 10_000_000
    LOG_BACKUP_COUNT: int = 5

    # ── Image Search (Bing v7) ──────────────────
    AZURE_BING_SEARCH_KEY: Optional[str] = None
    BING_IMAGE_SEARCH_URL: str = "https://api.bing.microsoft.com/v7.0/images/search"
    IMAGE_SEARCH_ASPECT: str = "Square"
    IMAGE_SEARCH_COUNT: Optional[int] = None
    IMAGE_SEARCH_TIMEOUT: float = 10.0

    # ── Scraping ────────────────────────────────
    HTTP_FETCH_TIMEOUT: float = 10.0
    SCRAPER_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
    )
    RENDER_PAGE_LOAD_TIMEOUT: int = 30
    CHROMEDRIVER_PATH: Optional[str] = None

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
