from typing import List, Optional
from urllib.parse import quote_plus
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Basic configuration ---
    APP_NAME: str = "ERP API"
    APP_DESCRIPTION: str = "ERP backend: CRM, marketing, catalog, invoicing, documents and organization resources scoped per user"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = "development"  # development, production, testing
    DEBUG: bool = True
    SECRET_KEY: str = "your-super-secret-key-change-it-in-production"
    JWT_ALGORITHM: str = "HS256"

    # --- Database (MySQL/SQLModel) ---
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASSWORD: str = "root"
    DB_NAME: str = "erp_db"
    # Full SQLAlchemy URL; overrides the DB_* parts when set (e.g. sqlite+aiosqlite:///./erp.db)
    DB_URL: Optional[str] = None

    @property
    def DATABASE_URL(self) -> str:
        if self.DB_URL:
            return self.DB_URL
        # Build async MySQL connection URL
        safe_password = quote_plus(self.DB_PASSWORD)
        return f"mysql+aiomysql://{self.DB_USER}:{safe_password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    # --- Rate limiting (Redis) ---
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0

    @property
    def REDIS_URL(self) -> str:
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    RATE_LIMIT_MAX_REQUESTS: int = 100
    RATE_LIMIT_AUTH_MAX_REQUESTS: int = 20
    # Peers whose X-Forwarded-For is trusted (JSON list in env, e.g. ["10.0.0.5"])
    TRUSTED_PROXIES: List[str] = []

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # --- Cookie ---
    ACCESS_TOKEN_COOKIE_NAME: str = "access_token"
    COOKIE_SECURE: bool = False  # Set True in production (HTTPS only)
    COOKIE_SAMESITE: str = "lax"  # lax, strict, none

    # --- Logging ---
    LOG_DIR: str = "logs"

    # --- API route prefixes (optional, overridable in private projects) ---
    API_PREFIX: str = "/api"
    API_AUTH_PREFIX: str = "/api/auth"
    API_CRM_PREFIX: str = "/api/crm"
    API_MARKETING_PREFIX: str = "/api/marketing"
    API_DOCUMENTS_PREFIX: str = "/api/documents"
    API_BRANCHES_PREFIX: str = "/api/branches"
    API_ACCESS_PREFIX: str = "/api/erp"
    API_ITEMS_PREFIX: str = "/api/items"
    API_CATEGORIES_PREFIX: str = "/api/categories"
    API_INVOICES_PREFIX: str = "/api/invoices"

    # --- Gunicorn process name (optional) ---
    GUNICORN_PROC_NAME: Optional[str] = None  # Fallback to APP_NAME when empty

    # --- Pydantic ---
    # Load env from project root .env; priority: env vars > .env > defaults
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )


# Singleton settings instance
settings = Settings()
