"""
Application settings loaded from environment variables.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Document store ───────────────────────────────────────────────────
    mongodb_uri: str = "mongodb://localhost:27017/TodoApp"
    mongodb_database: str = "TodoApp"   # used when the URI names no database

    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = "change-me-jwt-secret-key"       # HMAC secret for auth tokens
    jwt_expiry_seconds: int = 604800                    # 7 days
    token_access: str = "auth"                          # access scope stamped on issued tokens
    password_min_length: int = 6
    bcrypt_rounds: int = 10

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 3000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: list = ["*"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }


config = Settings()


def get_settings() -> Settings:
    """Dependency hook so routes and tests can swap the settings object."""
    return config
