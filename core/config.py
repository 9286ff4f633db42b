"""Dashboard configuration."""

from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    # Backend
    api_base: str = Field(default="http://127.0.0.1:8000", alias="API_BASE")

    # Cadences
    refresh_interval_ms: int = Field(default=10000, alias="REFRESH_INTERVAL_MS")
    market_check_interval_s: float = 30.0   # Safety monitor poll
    clock_tick_s: float = 1.0               # Header clock

    # Notifications
    notification_ttl_s: float = 4.0

    # Performance chart
    chart_capacity: int = 30

    # Trading window shown when the backend omits it
    default_market_open: str = "09:15"
    default_market_close: str = "15:25"

    # Display
    currency_symbol: str = "₹"

    # Logging
    logs_dir: Path = Field(default=Path("logs"), alias="LOGS_DIR")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @property
    def refresh_interval_s(self) -> float:
        return self.refresh_interval_ms / 1000.0

    @property
    def api_base_url(self) -> str:
        return self.api_base.rstrip("/")


settings = Settings()
