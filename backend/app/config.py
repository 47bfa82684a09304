"""
CascadeBlog Backend - Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and exposes a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated in the app lifespan.

Variables:
    MONGODB_URI / MONGODB_DATABASE   document store connection
    BACKEND_HOST / PORT              listening address
    CORS_ORIGINS                     comma-separated allowed origins
    LOG_LEVEL                        root logging level
    IDENTITY_PROVIDER / AUTH_AUDIENCE  bearer token verification
"""

from typing import List, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Production deployments must set
    MONGODB_URI and AUTH_AUDIENCE.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Standard MongoDB connection string; credentials belong in the URI
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string",
    )
    mongodb_database: str = Field(
        default="cascadeBlog",
        description="Database holding the blogs, comments and wishlists collections",
    )

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    # PORT is what most hosting platforms inject; BACKEND_PORT also accepted
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "BACKEND_PORT"),
    )

    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into the list CORSMiddleware expects."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Identity Provider ─────────────────────────────────────────────────
    # google:   Google OAuth2 ID tokens, audience = OAuth client id
    # firebase: Firebase Auth ID tokens, audience = Firebase project id
    identity_provider: Literal["google", "firebase"] = Field(default="firebase")
    auth_audience: str = Field(
        default="",
        description="Expected `aud` claim of incoming ID tokens",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "populate_by_name": True,
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that critical settings are configured.
        When:  Called during app startup (lifespan).
        How:   Collects every problem and raises one ValueError listing them.
        """
        errors = []
        if not self.auth_audience:
            errors.append(
                "AUTH_AUDIENCE is not set. Authenticated routes will reject every token. "
                "Use the OAuth client id (google) or the Firebase project id (firebase)."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


settings = Settings()
