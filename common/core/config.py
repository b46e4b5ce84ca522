from typing import Optional, List
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.core.constants import Environment


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Environment Profile
    environment: Environment = Environment.LOCAL

    # API Settings
    app_name: str = "Altair API"
    api_version: str = "1.0.0"
    debug: bool = False

    # Database Components
    db_user: str = "altair"
    db_password: str = "altair"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "altair"
    db_use_nullpool: bool = False
    db_pool_size: int = 10
    db_pool_overflow: int = 5

    @property
    def database_url(self) -> str:
        """Construct database URL from components."""
        return f"postgresql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    # Auth (bearer tokens issued by the auth service)
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"

    # OpenTelemetry
    otel_service_name: str = "altair-api"
    otel_service_version: str = "1.0.0"

    # Axiom (exporters are only attached when a token is configured)
    axiom_token: Optional[str] = None
    axiom_dataset: Optional[str] = None

    # Rate limiting
    rate_limit_storage_uri: str = "memory://"

    # Billing - Stripe
    stripe_secret_key: str = ""
    billing_default_return_url: str = "http://localhost:3000/"

    @property
    def cors_allowed_origins(self) -> List[str]:
        """Auto-select CORS origins based on environment."""
        if self.environment == Environment.LOCAL:
            return [
                "http://localhost:3000",
                "http://localhost:1234",
            ]
        return [
            "https://altairgraphql.dev",
            "https://api.altairgraphql.dev",
        ]


settings = Settings()
