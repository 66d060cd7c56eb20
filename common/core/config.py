from typing import Optional, List
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.core.constants import Environment


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Environment Profile
    environment: Environment = Environment.LOCAL

    # API Settings
    app_name: str = "creem-billing"
    api_version: str = "0.1.0"
    debug: bool = False

    # Database Components
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "billing"
    db_use_nullpool: bool = False
    db_pool_size: int = 10
    db_pool_overflow: int = 5

    @property
    def database_url(self) -> str:
        """Construct database URL from components."""
        return f"postgresql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def async_database_url(self) -> str:
        """Database URL using the asyncpg driver."""
        return self.database_url.replace("postgresql://", "postgresql+asyncpg://")

    # OpenTelemetry
    otel_service_name: str = "creem-billing"
    otel_service_version: str = "0.1.0"

    # Axiom (traces/logs are only exported when a token is configured)
    axiom_token: Optional[str] = None
    axiom_dataset: Optional[str] = None

    # Rate limiting
    rate_limit_storage_uri: str = "memory://"

    # CORS
    cors_allowed_origins: List[str] = ["http://localhost:3000"]

    # Creem
    # Leave unset to accept unsigned webhook deliveries
    creem_webhook_secret: Optional[str] = None


settings = Settings()
