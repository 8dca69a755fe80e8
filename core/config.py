from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Church Admin API"
    ENV: str = "development"

    # -------------------------------------------------
    # Frontend Domains
    # -------------------------------------------------
    FRONTEND_DOMAINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # -------------------------------------------------
    # CORS (auto-built below)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (Primary DB & Auth)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = Field(None, env="SUPABASE_URL")
    SUPABASE_ANON_KEY: Optional[str] = Field(None, env="SUPABASE_ANON_KEY")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(None, env="SUPABASE_SERVICE_ROLE_KEY")

    # -------------------------------------------------
    # Logging
    # -------------------------------------------------
    LOG_LEVEL: str = Field("INFO", env="LOG_LEVEL")

    # -------------------------------------------------
    # Session / Roles
    # -------------------------------------------------
    # Upper bound on the user_roles join before falling back to no roles
    ROLE_LOOKUP_TIMEOUT_SECONDS: float = Field(5.0, env="ROLE_LOOKUP_TIMEOUT_SECONDS")

    # -------------------------------------------------
    # Donations
    # -------------------------------------------------
    # Delay before a new donation is flagged as "receipt sent" (simulated)
    RECEIPT_DELAY_SECONDS: float = Field(1.0, env="RECEIPT_DELAY_SECONDS")

    # -------------------------------------------------
    # Startup
    # -------------------------------------------------
    LOAD_DATA_ON_STARTUP: bool = Field(True, env="LOAD_DATA_ON_STARTUP")

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
settings.BACKEND_CORS_ORIGINS = sorted(
    set(d.rstrip("/") for d in settings.FRONTEND_DOMAINS)
)
