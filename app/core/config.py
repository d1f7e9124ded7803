
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Rental Back Office API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"

    # Database (Postgres via asyncpg in production or SQLite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./rental_dev.db",
        alias="DATABASE_URL",
    )

    # Auth (HS256 bearer tokens, `sub` = owning user id)
    jwt_secret: str = Field(
        default="dev-only-secret-change-me-before-deploying",
        alias="JWT_SECRET",
    )
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_access_token_ttl_minutes: int = Field(
        default=720, alias="JWT_ACCESS_TOKEN_TTL_MINUTES",
    )

    # Contracts
    contract_number_max_attempts: int = Field(
        default=5, alias="CONTRACT_NUMBER_MAX_ATTEMPTS",
    )  # regenerate on collision with an existing contract number

    # Insert default contract / vehicle statuses at startup when missing
    seed_lookups_on_startup: bool = Field(
        default=False, alias="SEED_LOOKUPS_ON_STARTUP",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

settings = Settings()
