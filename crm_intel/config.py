from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False
    LOG_LEVEL: str = "INFO"

    # =================================================================
    # ENGAGEMENT ANALYTICS - Defaults used by the dashboard routes
    # =================================================================
    HEATMAP_LOOKBACK_DAYS: int = 90
    TOP_CONTACTS_LIMIT: int = 20
    BENCHMARK_PERFORMER_COUNT: int = 5
    CONTACTS_PAGE_SIZE: int = 25
    MAX_CONTACTS_PAGE_SIZE: int = 500

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def effective_log_level(self) -> str:
        """Debug mode always wins over the configured level."""
        if self.debug:
            return "DEBUG"
        return self.LOG_LEVEL.upper()

    def get_page_size(self, requested: int | None) -> int:
        """
        Resolve a requested page size against the configured bounds.

        Falls back to CONTACTS_PAGE_SIZE when nothing (or 0) is requested.
        """
        if not requested:
            return self.CONTACTS_PAGE_SIZE
        return min(requested, self.MAX_CONTACTS_PAGE_SIZE)


settings = Settings()
