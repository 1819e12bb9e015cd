"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Application
    APP_NAME: str = "SplitLedger"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # Database (settlement status store only)
    DATABASE_URL: str = "sqlite:///./splitledger.db"
    DB_ECHO: bool = False
    
    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000"]
    
    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v
    
    # Ledger
    DEFAULT_CURRENCY: str = "USD"  # Used when an expense payload names no currency
    SETTLEMENT_EPSILON_CENTS: int = 1  # Residual tolerated before moving to the next debtor/creditor
    
    @field_validator("DEFAULT_CURRENCY")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.strip().upper()
    
    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
