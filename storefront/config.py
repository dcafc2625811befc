from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables or a .env file.

    The JWT secret is process-wide; rotating it invalidates every issued token.
    """
    APP_NAME: str = "Storefront API"

    # Database
    DATABASE_URL: str = "sqlite:///./storefront.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_ECHO: bool = False

    # Authentication
    JWT_SECRET_KEY: str = "dev-only-secret-change-me-before-deploying-anywhere"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 10

    # Orders
    ENFORCE_ORDER_TOTAL: bool = False

    # Startup
    SEED_DEMO_PRODUCTS: bool = True

    # HTTP
    CORS_ORIGINS: list[str] = ["*"]
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
