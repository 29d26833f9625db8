"""Application configuration loaded from environment variables."""

from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings."""

    content_root: str = "content/guides"
    image_base_url: str = Field(
        default="https://painoptixstaging.netlify.app",
        description="Public origin serving the medical illustrations.",
    )

    brand_line: str = "© PainOptix™ Educational Content"
    cover_credit: str = ""

    viewport_width: int = 1920
    viewport_height: int = 2700
    content_load_timeout_ms: int = 30000
    image_wait_timeout_ms: int = 1000

    pdf_scale_monograph: float = 0.9
    pdf_scale_enhanced: float = 1.0

    browser_max_pages: int = 4
    browser_idle_seconds: float = 300.0
    browser_args: List[str] = Field(
        default_factory=lambda: [
            "--no-sandbox",
            "--disable-setuid-sandbox",
            "--disable-dev-shm-usage",
            "--disable-gpu",
        ]
    )

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def content_root_path(self) -> Path:
        return Path(self.content_root)

    @property
    def exercise_image_base(self) -> str:
        return f"{self.image_base_url.rstrip('/')}/medical-illustrations/exercises"

    @property
    def anatomical_image_base(self) -> str:
        return f"{self.image_base_url.rstrip('/')}/medical-illustrations/anatomical"


settings = Settings()
