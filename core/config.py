"""
Application configuration using Pydantic Settings
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support"""
    
    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./viarail.db"
    CREATE_SCHEMA_ON_STARTUP: bool = True
    
    # API
    API_HOST: str = "localhost"
    API_PORT: int = 8085
    
    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    
    # Feed ingestion
    FEED_URL: str = "https://tsimobile.viarail.ca/data/allData.json"
    FETCH_TIMEOUT: float = 30.0
    INGEST_INTERVAL_SECONDS: int = 2 * 60 * 60
    SCHEDULER_ENABLED: bool = True
    
    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
