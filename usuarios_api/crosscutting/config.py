"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Decide the storage backend once per process

Collaborators:
  - api/main.py: reads settings for CORS, lifespan and startup validation
  - container.py: picks the UsuarioRepository implementation
  - identity/token_service.py: JWT secret, issuer, audience and TTL

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic, pure configuration

Notes:
  - JWT_SECRET_KEY has no default: a missing key fails at startup, never
    per request
  - Singleton via lru_cache
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

STORAGE_BACKENDS = {"json", "sql", "orm", "memory"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/test/production)
        log_level: Root log level for the service logger
        log_json: Emit JSON logs (False = plain text)
        storage_backend: json | sql | orm | memory
        json_data_dir: Folder holding usuarios.json / modulos.json
        database_url: PostgreSQL connection string (sql/orm backends)
        db_pool_min_size: Minimum pool connections (sql backend)
        db_pool_max_size: Maximum pool connections (sql backend)
        db_statement_timeout_ms: statement_timeout applied per connection
        jwt_secret_key: Symmetric key for signing access tokens (required)
        jwt_issuer: "iss" claim issued and validated
        jwt_audience: "aud" claim issued and validated
        jwt_ttl_hours: Access token lifetime (default: 2)
        usuarios_require_token: Guard /api/usuario/* with a bearer token
        allowed_origins: Comma-separated CORS origins
    """

    # Required (no defaults)
    jwt_secret_key: str

    # Environment
    app_env: str = "development"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Storage
    storage_backend: str = "json"
    json_data_dir: str = "data"

    # Database - Connection Pool
    database_url: str = ""
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds

    # Security - JWT
    jwt_issuer: str = "usuarios-api"
    jwt_audience: str = "usuarios-api-clients"
    jwt_ttl_hours: int = 2
    usuarios_require_token: bool = False

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"

    @field_validator("storage_backend")
    @classmethod
    def storage_backend_valid(cls, v: str) -> str:
        backend = (v or "json").strip().lower()
        if backend not in STORAGE_BACKENDS:
            raise ValueError(
                "storage_backend must be one of: " + ", ".join(sorted(STORAGE_BACKENDS))
            )
        return backend

    @field_validator("jwt_secret_key")
    @classmethod
    def jwt_secret_key_not_blank(cls, v: str) -> str:
        if not (v or "").strip():
            raise ValueError("JWT_SECRET_KEY no puede ser vacío")
        return v

    @field_validator("jwt_ttl_hours")
    @classmethod
    def jwt_ttl_hours_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("jwt_ttl_hours must be greater than 0")
        return v

    @model_validator(mode="after")
    def validate_database_requirements(self):
        if self.storage_backend in {"sql", "orm"} and not self.database_url.strip():
            raise ValueError(
                f"DATABASE_URL is required when STORAGE_BACKEND={self.storage_backend}"
            )
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "password"}
        secret = self.jwt_secret_key.strip()
        if secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET_KEY must be set to a strong, non-default value in production"
            )
        if len(secret) < 32:
            raise ValueError(
                "JWT_SECRET_KEY must be at least 32 characters in production"
            )
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
