from typing import Optional
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./store_locator.db"
    REDIS_URL: str = "redis://localhost:6379/0"

    # Geocoding
    GOOGLE_MAPS_API_KEY: Optional[str] = None
    GEOCODING_URL: str = "https://maps.googleapis.com/maps/api/geocode/json"
    GEOCODING_COUNTRY: str = "Kenya"
    GEOCODING_TIMEOUT: float = 20.0
    GEOCODE_RATE_LIMIT: str = "30/minute"

    PUBLIC_CACHE_SECONDS: int = 60

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # Bootstrap admin
    ADMIN_USERNAME: str = "admin"
    ADMIN_EMAIL: str = "admin@example.com"
    ADMIN_PASSWORD: str = "admin"

    class Config:
        env_file = ".env"
        extra = "allow"  # This allows extra fields


settings = Settings()
