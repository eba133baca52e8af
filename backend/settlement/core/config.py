from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "bxb-settlement"
    version: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Remote billing API
    BILLING_API_BASE_URL: str = "https://recruiting.data.bemmbo.com"
    BILLING_API_TIMEOUT_SECONDS: float = 30.0

    # Fan-out bounds for a settlement run
    ORGANIZATION_CONCURRENCY: int = Field(default=4, ge=1)
    INVOICE_CONCURRENCY: int = Field(default=8, ge=1)

    # Background worker
    REDIS_URL: str = "redis://localhost:6379"
    SETTLEMENT_CRON_HOUR: int = Field(default=2, ge=0, le=23)

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
