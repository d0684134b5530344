"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup (fail fast on missing store credentials)
  - Provide defaults that match the original Express backend behavior

Collaborators:
  - api/main.py: reads settings for CORS, pool sizing and startup validation
  - container.py: decides which user store adapter to build
  - identity/passwords.py, identity/tokens.py: hashing cost and token secrets

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic, pure configuration

Notes:
  - Singleton via lru_cache
  - USER_STORE=memory exists for local dev and tests; production rejects it
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_USER_STORES = {"postgres", "memory"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string (Supabase pooler or direct)
        user_store: postgres | memory (default: postgres)
        app_env: Application environment (development/production/test)
        allowed_origins: Comma-separated CORS origins
        cors_allow_credentials: Allow cookies cross-origin (default: False)
        log_level: Logger level (default: INFO)
        log_json: Emit JSON lines (default: True)
        max_body_bytes: Max request body size (default: 1MB)
        db_pool_min_size / db_pool_max_size: Connection pool bounds
        db_statement_timeout_ms: Per-connection statement_timeout
        jwt_secret: Secret for signing session tokens
        jwt_access_ttl_minutes: Session token TTL in minutes
        password_time_cost: Argon2 time cost (iterations)
        password_memory_cost_kib: Argon2 memory cost in KiB
        default_page_size: Page size when `limit` is missing (default: 10)
        max_page_size: Upper clamp for `limit` (default: 100)
    """

    # Store
    database_url: str = ""
    user_store: str = "postgres"

    # Environment
    app_env: str = "development"

    # CORS configuration
    allowed_origins: str = "http://localhost:5173,http://localhost:3000"
    cors_allow_credentials: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Security - Hardening
    max_body_bytes: int = 1024 * 1024  # 1MB

    # Database - Connection Pool
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 15000

    # Session tokens
    jwt_secret: str = "dev-secret"
    jwt_access_ttl_minutes: int = 60 * 24

    # Password hashing (argon2)
    password_time_cost: int = 3
    password_memory_cost_kib: int = 65536

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    @field_validator("user_store")
    @classmethod
    def user_store_valid(cls, v: str) -> str:
        store = (v or "postgres").strip().lower()
        if store not in _USER_STORES:
            raise ValueError("user_store must be postgres or memory")
        return store

    @field_validator("password_time_cost")
    @classmethod
    def password_time_cost_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("password_time_cost must be >= 1")
        return v

    @field_validator("max_page_size", "default_page_size")
    @classmethod
    def page_size_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("page sizes must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_store_requirements(self):
        if self.user_store == "postgres" and not self.database_url.strip():
            raise ValueError(
                "DATABASE_URL is required unless USER_STORE=memory "
                "(e.g. postgresql://postgres:<password>@db.<project>.supabase.co:5432/postgres)"
            )
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size must be <= max_page_size")
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "secret"}
        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        if self.user_store == "memory":
            raise ValueError("USER_STORE=memory is not allowed in production")
        return self

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing", "ci"}

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
